"""
Candidate generators, one per completion context.

Each generator is a plain function over the schema (or companion text) and
the typed word; all of them filter through the matcher.
"""
from __future__ import annotations

from tssls.context.types import SelectorKind
from tssls.lsp.capabilities.style.candidates import (
    CURSOR_MARKER,
    Candidate,
    CandidateKind,
)
from tssls.lsp.capabilities.style.matcher import matches
from tssls.workspace.companion import extract_selectors
from tssls.workspace.schema_cache import SchemaStore


# Property types whose value is written as a `{ ... }` object.
OBJECT_VALUED_TYPES = frozenset({"Font"})


def block_template(name: str) -> str:
    return f"{name}: {{\n\t{CURSOR_MARKER}\n}}"


def tag_candidates(schema: SchemaStore, word_prefix: str | None) -> list[Candidate]:
    """Complete a tag selector after an opening quote: `"Win|`."""
    return [
        Candidate(
            label=name,
            kind=CandidateKind.TAG,
            detail=info.display_name,
            # The opening quote is already typed.
            insert_template=f'{name}": {{\n\t{CURSOR_MARKER}\n}}',
        )
        for name, info in schema.tags.items()
        if matches(name, word_prefix)
    ]


def property_name_candidates(
    schema: SchemaStore, parent: str | None, word_prefix: str | None
) -> list[Candidate]:
    """
    Complete a property name.

    Inside a typed block (`font: { | }`) only the type's own properties are
    offered, as flat leaves. Anywhere else, or when the parent cannot be
    resolved in the schema, every top-level property is offered.
    """
    nested = schema.nested_properties(parent)

    if nested:
        return [
            Candidate(label=name, kind=CandidateKind.PROPERTY, insert_template=f"{name}: ")
            for name in nested
            if matches(name, word_prefix)
        ]

    items = []
    for name, info in schema.properties.items():
        if not matches(name, word_prefix):
            continue

        if info.type in OBJECT_VALUED_TYPES:
            template = block_template(name)
        else:
            template = f"{name}: "

        items.append(
            Candidate(
                label=name,
                kind=CandidateKind.PROPERTY,
                detail=info.type,
                insert_template=template,
            )
        )
    return items


def property_value_candidates(
    schema: SchemaStore, property: str | None, word_prefix: str | None
) -> list[Candidate]:
    """Complete an enumerated property value: `textAlign: Ti.UI.TEXT_|`."""
    if property is None:
        return []

    info = schema.get_property(property)
    if info is None:
        return []
    if info.values is None:
        return []

    return [
        Candidate(label=value, kind=CandidateKind.VALUE)
        for value in info.values
        if matches(value, word_prefix)
    ]


def selector_candidates(
    text: str,
    selector_kind: SelectorKind,
    word_prefix: str | None,
    source_name: str,
) -> list[Candidate]:
    """Complete a class or id selector from the companion view text."""
    return [
        Candidate(label=token, kind=CandidateKind.SELECTOR, detail=source_name)
        for token in extract_selectors(text, selector_kind)
        if matches(token, word_prefix)
    ]
