"""
Internationalization key completion.

Completes `titleid: "|"` style properties with the string names declared
in the project's `i18n/<language>/strings.xml`.
"""
from __future__ import annotations

import asyncio
import re
from pathlib import Path
from typing import TYPE_CHECKING

from lsprotocol.types import LogMessageParams, MessageType

from tssls.lsp.capabilities.style.candidates import Candidate, CandidateKind
from tssls.lsp.capabilities.style.matcher import matches
from tssls.lsp.capabilities.style.rules.base import CompletionRequest, SubRule

if TYPE_CHECKING:
    from tssls.lsp.tss_language_server import TssLanguageServer


I18N_KEYS = (
    "titleid",
    "textid",
    "messageid",
    "hintid",
    "hinttextid",
    "promptid",
    "subtitleid",
    "accessibilitylabelid",
)

I18N_PATTERN = re.compile(r"\b(?:" + "|".join(I18N_KEYS) + r")\s*:\s*['\"][\w.-]*$")

STRING_PATTERN = re.compile(r'<string\s+name="([^"]+)"[^>]*>(.*?)</string>', re.DOTALL)


class I18nRule(SubRule):
    """Offers localized string names for `*id` properties."""

    def __init__(self, server: TssLanguageServer | None = None, language: str = "en") -> None:
        super().__init__(server)
        self.language = language

    @property
    def name(self) -> str:
        return "i18n"

    @property
    def pattern(self) -> re.Pattern[str]:
        return I18N_PATTERN

    def strings_files(self, app_dir: Path) -> list[Path]:
        """Alloy keeps strings in app/i18n, classic projects in i18n."""
        return [
            app_dir / "i18n" / self.language / "strings.xml",
            app_dir.parent / "i18n" / self.language / "strings.xml",
        ]

    async def complete(self, request: CompletionRequest) -> list[Candidate]:
        app_dir = request.app_dir
        if app_dir is None:
            return []

        items: list[Candidate] = []
        seen: set[str] = set()

        for strings_file in self.strings_files(app_dir):
            if not strings_file.is_file():
                continue

            try:
                content = await asyncio.to_thread(strings_file.read_text, encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                if self.server:
                    self.server.window_log_message(
                        LogMessageParams(
                            type=MessageType.Warning,
                            message=f"Cannot read {strings_file}: {e}",
                        )
                    )
                continue

            for key, text in STRING_PATTERN.findall(content):
                if key in seen or not matches(key, request.word_prefix):
                    continue
                seen.add(key)
                items.append(
                    Candidate(label=key, kind=CandidateKind.VALUE, detail=text.strip())
                )

        return items
