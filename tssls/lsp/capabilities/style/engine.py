"""
Style sheet completion engine.

Classifies the cursor context, then dispatches to exactly one generator:

    "Win|                 -> tags
    ".tit| / "#lbl|       -> classes / ids from the companion view
    backgr|               -> property names (restricted inside `font: {`)
    textAlign: Ti.UI.|    -> enumerated property values
    titleid: "|           -> a registered sub-rule

The engine holds no per-request state; only the schema is shared.
"""
from __future__ import annotations

from pathlib import Path

from tssls.context.document import Cursor, DocumentView, line_prefix, word_at
from tssls.context.parent_resolver import resolve_parent
from tssls.context.style_classifier import StyleContextClassifier
from tssls.context.types import ContextKind, SelectorKind
from tssls.lsp.capabilities.style.candidates import Candidate
from tssls.lsp.capabilities.style.generators import (
    property_name_candidates,
    property_value_candidates,
    selector_candidates,
    tag_candidates,
)
from tssls.lsp.capabilities.style.rules.base import CompletionRequest
from tssls.lsp.capabilities.style.rules.registry import SubRuleRegistry
from tssls.workspace.companion import CompanionReader
from tssls.workspace.schema_cache import SchemaCache


class StyleCompletionEngine:
    """
    Produces completion candidates for a cursor in a style sheet.

    Usage:
        engine = StyleCompletionEngine(SchemaCache(), CompanionReader())
        items = await engine.complete(view, Cursor(3, 8), Path("app/styles/index.tss"))
    """

    def __init__(
        self,
        schema_cache: SchemaCache,
        companion: CompanionReader | None = None,
        rules: SubRuleRegistry | None = None,
        project_root: Path | None = None,
    ) -> None:
        self.schema_cache = schema_cache
        self.companion = companion or CompanionReader()
        self.classifier = StyleContextClassifier(rules)
        self.project_root = project_root

    async def complete(
        self,
        document: DocumentView,
        cursor: Cursor,
        document_path: Path | None = None,
    ) -> list[Candidate]:
        """
        Return the candidates for `cursor`, or an empty list.

        Raises:
            SchemaUnavailableError: the schema could not be loaded.
            AmbiguousSubRuleError: overlapping sub-rules claimed the prefix.
        """
        schema = await self.schema_cache.get()

        prefix = line_prefix(document, cursor)
        word = word_at(document.line_text(cursor.line), cursor.column)

        context = self.classifier.classify(prefix, word)
        if context is None:
            return []

        if context.kind is ContextKind.SUB_RULE and context.rule is not None:
            request = CompletionRequest(
                line_prefix=prefix,
                word_prefix=word,
                document_path=document_path,
                project_root=self.project_root,
            )
            return await context.rule.complete(request)

        if context.kind is ContextKind.PROPERTY_VALUE:
            return property_value_candidates(schema, context.property, word)

        if context.kind is ContextKind.PROPERTY_NAME:
            parent = resolve_parent(document, cursor.line)
            return property_name_candidates(schema, parent, word)

        if context.kind is ContextKind.CLASS_OR_ID:
            return await self._selector_candidates(
                document_path, context.selector_kind or SelectorKind.CLASS, word
            )

        if context.kind is ContextKind.TAG:
            return tag_candidates(schema, word)

        return []

    async def _selector_candidates(
        self,
        document_path: Path | None,
        selector_kind: SelectorKind,
        word: str | None,
    ) -> list[Candidate]:
        companion = await self.companion.read(document_path)
        if companion is None:
            return []
        return selector_candidates(companion.text, selector_kind, word, companion.name)
