from __future__ import annotations

import re
from typing import TYPE_CHECKING

from tssls.context.completion_context import CompletionContext
from tssls.context.types import ContextKind, SelectorKind

if TYPE_CHECKING:
    from tssls.lsp.capabilities.style.rules.registry import SubRuleRegistry


# Ordered, first match wins. PROPERTY_NAME is a catch-all for the start of
# a property, so it must come after the stricter value pattern.

# color: _  /  color: "re_  /  font: { fontSize: 1_
PROPERTY_VALUE_PATTERN = re.compile(r"\s*(\w+)\s*:\s*[\w\"'.]*$")

# _  /  backgr_
PROPERTY_NAME_PATTERN = re.compile(r"^\s*\w*$")

# ".tit_  /  "#lbl_
CLASS_OR_ID_PATTERN = re.compile(r"^['\"]([.#])\w*$")

# "Win_  /  "_
TAG_PATTERN = re.compile(r"^['\"]\w*$")


class StyleContextClassifier:
    """
    Classifies the text before the cursor into a completion context.

    Registered sub-rules get first right of refusal, then the four
    generic patterns are tried in order.
    """

    def __init__(self, rules: SubRuleRegistry | None = None) -> None:
        self.rules = rules

    def classify(
        self, line_prefix: str, word_prefix: str | None = None
    ) -> CompletionContext | None:
        """
        Return the completion context for `line_prefix`, or None.

        None is the common case: most cursor positions are not
        completion-eligible.

        Raises:
            AmbiguousSubRuleError: more than one sub-rule claims the prefix.
        """
        if self.rules is not None:
            rule = self.rules.match(line_prefix)
            if rule is not None:
                return CompletionContext(
                    kind=ContextKind.SUB_RULE,
                    line_prefix=line_prefix,
                    word_prefix=word_prefix,
                    rule=rule,
                )

        return classify_prefix(line_prefix, word_prefix)


def classify_prefix(
    line_prefix: str, word_prefix: str | None = None
) -> CompletionContext | None:
    """Apply the four generic patterns to `line_prefix`."""
    match = PROPERTY_VALUE_PATTERN.search(line_prefix)
    if match:
        return CompletionContext(
            kind=ContextKind.PROPERTY_VALUE,
            line_prefix=line_prefix,
            word_prefix=word_prefix,
            property=match.group(1),
        )

    if PROPERTY_NAME_PATTERN.match(line_prefix):
        return CompletionContext(
            kind=ContextKind.PROPERTY_NAME,
            line_prefix=line_prefix,
            word_prefix=word_prefix,
        )

    match = CLASS_OR_ID_PATTERN.match(line_prefix)
    if match:
        return CompletionContext(
            kind=ContextKind.CLASS_OR_ID,
            line_prefix=line_prefix,
            word_prefix=word_prefix,
            selector_kind=SelectorKind.from_sigil(match.group(1)),
        )

    if TAG_PATTERN.match(line_prefix):
        return CompletionContext(
            kind=ContextKind.TAG,
            line_prefix=line_prefix,
            word_prefix=word_prefix,
        )

    return None
