from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from tssls.context.types import ContextKind, SelectorKind

if TYPE_CHECKING:
    from tssls.lsp.capabilities.style.rules.base import SubRule


@dataclass(frozen=True)
class CompletionContext:
    """
    Holds the classified completion context at a cursor position.

    Exactly one of the optional fields is meaningful, depending on `kind`.
    """

    kind: ContextKind

    # Text of the cursor line up to the cursor
    line_prefix: str

    # Partial identifier under the cursor, None if the cursor abuts no word
    word_prefix: str | None = None

    # Property whose value is being completed (PROPERTY_VALUE)
    property: str | None = None

    # Class or id selector (CLASS_OR_ID)
    selector_kind: SelectorKind | None = None

    # Rule that claimed the prefix (SUB_RULE)
    rule: SubRule | None = None
