from dataclasses import dataclass
from enum import Enum


# Where the cursor lands after a structured insertion.
CURSOR_MARKER = "\x00cursor\x00"


class CandidateKind(Enum):
    TAG = "tag"
    PROPERTY = "property"
    VALUE = "value"
    SELECTOR = "selector"
    FILE = "file"


@dataclass(frozen=True)
class Candidate:
    """A single completion proposal, independent of the editor protocol."""

    label: str
    kind: CandidateKind
    detail: str | None = None

    # Text to insert; may contain CURSOR_MARKER. None inserts the label.
    insert_template: str | None = None

    @property
    def is_structured(self) -> bool:
        return self.insert_template is not None and CURSOR_MARKER in self.insert_template
