"""
Parent property resolution.

Finds the property whose `{ ... }` block encloses the cursor, e.g. `font`
while completing inside `font: { | }`, so property completion can be
restricted to that property's type.

Known limitation: this is a single-line heuristic, not a balanced-brace
parser. It is only reliable for one level of nesting, which is all the
nested property completion needs.
"""
from __future__ import annotations

import re

from tssls.context.document import DocumentView


# font: {   /   "#title": {
PARENT_BLOCK_PATTERN = re.compile(r"^\s*(\S+)\s*:\s*\{")


def resolve_parent(document: DocumentView, line: int) -> str | None:
    """
    Return the nearest enclosing block property name, or None at top level.

    Scans backward from `line`. A line whose last `}` sits to the right of
    its block opening (or any `}` on a line without an opening) closes the
    search: the cursor is below a closed block, not inside one.
    """
    line = min(line, document.line_count - 1)

    while line >= 0:
        text = document.line_text(line)
        match = PARENT_BLOCK_PATTERN.match(text)
        opening = match.start(1) if match else -1

        if opening < text.rfind("}"):
            return None
        if match:
            return match.group(1)

        line -= 1

    return None
