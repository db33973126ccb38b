"""
Style sheet LSP capabilities.

Provides completion of tags, selectors, property names and property values
in Alloy style sheets.
"""

from pathlib import Path

from lsprotocol.types import (
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionParams,
    InsertTextFormat,
    LogMessageParams,
    MessageType,
    ShowMessageParams,
)
from pygls.uris import from_fs_path, to_fs_path

from tssls.context.document import Cursor, LinesDocumentView
from tssls.lsp.capabilities.capabilities import CompletionCapability
from tssls.lsp.capabilities.style.candidates import CURSOR_MARKER, Candidate, CandidateKind
from tssls.lsp.capabilities.style.engine import StyleCompletionEngine
from tssls.lsp.capabilities.style.rules.registry import AmbiguousSubRuleError, SubRuleRegistry
from tssls.workspace.companion import CompanionReader
from tssls.workspace.schema_cache import SchemaUnavailableError


CANDIDATE_KINDS: dict[CandidateKind, CompletionItemKind] = {
    CandidateKind.TAG: CompletionItemKind.Class,
    CandidateKind.PROPERTY: CompletionItemKind.Property,
    CandidateKind.VALUE: CompletionItemKind.Value,
    CandidateKind.SELECTOR: CompletionItemKind.Reference,
    CandidateKind.FILE: CompletionItemKind.File,
}


def to_snippet(template: str) -> str:
    """Escape a template for snippet syntax and turn the marker into $0."""
    escaped = template.replace("\\", "\\\\").replace("$", "\\$")
    return escaped.replace(CURSOR_MARKER, "$0")


def to_completion_item(candidate: Candidate) -> CompletionItem:
    item = CompletionItem(
        label=candidate.label,
        kind=CANDIDATE_KINDS[candidate.kind],
        detail=candidate.detail,
    )

    if candidate.is_structured:
        item.insert_text = to_snippet(candidate.insert_template)  # type: ignore
        item.insert_text_format = InsertTextFormat.Snippet
    elif candidate.insert_template is not None:
        item.insert_text = candidate.insert_template
        item.insert_text_format = InsertTextFormat.PlainText

    return item


class StyleCompletionCapability(CompletionCapability):
    """Provides completion inside Alloy style sheets."""

    def __init__(self, server) -> None:
        super().__init__(server)
        self._engine: StyleCompletionEngine | None = None
        self._schema_error_reported = False

    @property
    def name(self) -> str:
        return "style_completion"

    @property
    def description(self) -> str:
        return "Autocomplete tags, classes, ids, properties and values in style sheets"

    @property
    def engine(self) -> StyleCompletionEngine | None:
        if self._engine is None and self.server.schema_cache is not None:
            self._engine = StyleCompletionEngine(
                schema_cache=self.server.schema_cache,
                companion=CompanionReader(
                    open_document=self._open_document_text, server=self.server
                ),
                rules=SubRuleRegistry.default(self.server, language=self.server.settings.language),
                project_root=self.server.project_root,
            )
        return self._engine

    async def can_handle(self, params: CompletionParams) -> bool:
        """Check if the document is a style sheet."""
        return params.text_document.uri.endswith(self.server.settings.style_suffix)

    async def complete(self, params: CompletionParams) -> CompletionList:
        """Provide style sheet completions."""
        engine = self.engine
        if engine is None:
            return CompletionList(is_incomplete=False, items=[])

        doc = self.server.workspace.get_text_document(params.text_document.uri)
        fs_path = to_fs_path(params.text_document.uri)

        try:
            candidates = await engine.complete(
                LinesDocumentView(doc.lines),
                Cursor(line=params.position.line, column=params.position.character),
                Path(fs_path) if fs_path else None,
            )
        except SchemaUnavailableError as e:
            self._report_schema_error(e)
            return CompletionList(is_incomplete=False, items=[])
        except AmbiguousSubRuleError as e:
            self.server.window_log_message(
                LogMessageParams(type=MessageType.Warning, message=str(e))
            )
            return CompletionList(is_incomplete=False, items=[])

        return CompletionList(
            is_incomplete=False,
            items=[to_completion_item(candidate) for candidate in candidates],
        )

    def _report_schema_error(self, error: SchemaUnavailableError) -> None:
        if self._schema_error_reported:
            return
        self._schema_error_reported = True
        self.server.window_show_message(
            ShowMessageParams(type=MessageType.Error, message=f"Style completion disabled: {error}")
        )

    def _open_document_text(self, path: Path) -> str | None:
        uri = from_fs_path(str(path))
        if uri is None:
            return None
        document = self.server.workspace.text_documents.get(uri)
        if document is None:
            return None
        return document.source
