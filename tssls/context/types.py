from enum import Enum


class ContextKind(Enum):
    """Classification of the token under the cursor in a style sheet."""

    PROPERTY_VALUE = "property_value"   # color: re|
    PROPERTY_NAME = "property_name"     # backgr|
    CLASS_OR_ID = "class_or_id"         # ".tit| or "#lbl|
    TAG = "tag"                         # "Win|
    SUB_RULE = "sub_rule"               # titleid: "wel| (handled by a registered rule)


class SelectorKind(Enum):
    """Selector flavour looked up in the companion view."""

    CLASS = "class"
    ID = "id"

    @classmethod
    def from_sigil(cls, sigil: str) -> "SelectorKind":
        return cls.ID if sigil == "#" else cls.CLASS
