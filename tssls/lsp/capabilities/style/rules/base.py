"""
Sub-rule base class.

A sub-rule claims a property value prefix more specific than the generic
`property: value` shape (e.g. `titleid: "` or `image: "`) and produces
its own candidates instead of the schema's enumerated values.
"""
from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from tssls.lsp.capabilities.style.candidates import Candidate
from tssls.utils.find_files import find_app_dir

if TYPE_CHECKING:
    from tssls.lsp.tss_language_server import TssLanguageServer


@dataclass(frozen=True)
class CompletionRequest:
    """Everything a sub-rule may need about the current request."""

    line_prefix: str
    word_prefix: str | None
    document_path: Path | None = None
    project_root: Path | None = None

    @property
    def app_dir(self) -> Path | None:
        return find_app_dir(self.document_path, self.project_root)


class SubRule(ABC):
    """Base class for property value sub-rules."""

    def __init__(self, server: TssLanguageServer | None = None) -> None:
        self.server = server

    @property
    @abstractmethod
    def name(self) -> str:
        """Rule name for logs and ambiguity reports."""
        pass

    @property
    @abstractmethod
    def pattern(self) -> re.Pattern[str]:
        """Pattern searched in the line prefix."""
        pass

    def matches(self, line_prefix: str) -> bool:
        return self.pattern.search(line_prefix) is not None

    @abstractmethod
    async def complete(self, request: CompletionRequest) -> list[Candidate]:
        """Provide candidates. Only called when matches() is True."""
        pass
