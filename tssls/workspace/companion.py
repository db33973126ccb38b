"""
Companion view lookup.

Every Alloy style sheet decorates a view: `app/styles/index.tss` pairs with
`app/views/index.xml` (widgets follow the same layout under
`app/widgets/<name>/`). The view's `class="..."` and `id="..."` attributes
are the selectors worth completing in the style sheet.
"""
from __future__ import annotations

import asyncio
import re
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Callable

from lsprotocol.types import LogMessageParams, MessageType

from tssls.context.types import SelectorKind

if TYPE_CHECKING:
    from tssls.lsp.tss_language_server import TssLanguageServer


CLASS_ATTRIBUTE_PATTERN = re.compile(r'class="(.*?)"')
ID_ATTRIBUTE_PATTERN = re.compile(r'id="(.*?)"')

VIEW_SUFFIX = ".xml"

# Style document path -> companion view path (or None)
CompanionResolver = Callable[[Path], "Path | None"]

# Companion view path -> text of an open editor buffer (or None)
OpenDocumentLookup = Callable[[Path], "str | None"]


def resolve_companion_path(style_path: Path) -> Path | None:
    """
    Map a style sheet to its view: the last `styles` folder becomes `views`.

    Returns None when the style sheet does not live under a `styles`
    folder.
    """
    parts = list(style_path.parts)
    for index in range(len(parts) - 2, -1, -1):
        if parts[index] == "styles":
            parts[index] = "views"
            return Path(*parts).with_suffix(VIEW_SUFFIX)
    return None


def extract_selectors(text: str, selector_kind: SelectorKind) -> list[str]:
    """
    Collect selector names from view markup in order of first appearance.

    `class="title header"` yields two selectors; duplicates across the
    document are dropped.
    """
    pattern = ID_ATTRIBUTE_PATTERN if selector_kind is SelectorKind.ID else CLASS_ATTRIBUTE_PATTERN

    seen: dict[str, None] = {}
    for match in pattern.finditer(text):
        for token in match.group(1).split():
            seen.setdefault(token, None)
    return list(seen)


@dataclass(frozen=True)
class CompanionDocument:
    path: Path
    text: str

    @property
    def name(self) -> str:
        return self.path.name


class CompanionReader:
    """
    Reads the companion view of a style sheet, once per request.

    An open editor buffer wins over the file on disk so unsaved classes
    are offered too. Any failure yields None: a style sheet may not have a
    view yet.
    """

    def __init__(
        self,
        resolver: CompanionResolver = resolve_companion_path,
        open_document: OpenDocumentLookup | None = None,
        server: TssLanguageServer | None = None,
    ) -> None:
        self.resolver = resolver
        self.open_document = open_document
        self.server = server

    async def read(self, style_path: Path | None) -> CompanionDocument | None:
        if style_path is None:
            return None

        companion_path = self.resolver(style_path)
        if companion_path is None:
            return None

        if self.open_document is not None:
            text = self.open_document(companion_path)
            if text is not None:
                return CompanionDocument(path=companion_path, text=text)

        try:
            text = await asyncio.to_thread(companion_path.read_text, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            if self.server and companion_path.exists():
                self.server.window_log_message(
                    LogMessageParams(
                        type=MessageType.Warning,
                        message=f"Cannot read view {companion_path}: {e}",
                    )
                )
            return None

        return CompanionDocument(path=companion_path, text=text)
