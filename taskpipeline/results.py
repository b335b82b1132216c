"""Recognition and action kinds, and the result a recognition produces."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any


class RecognitionType(enum.Enum):
    """The recognition algorithms a node can use."""

    DIRECT_HIT = enum.auto()
    ALWAYS = enum.auto()
    FIND_COLOR = enum.auto()
    FIND_MULTI_COLOR = enum.auto()
    FIND_COLOR_LIST = enum.auto()
    FIND_MULTI_COLOR_LIST = enum.auto()
    TEMPLATE_MATCH = enum.auto()
    OCR = enum.auto()


class ActionType(enum.Enum):
    """The actions a node can perform."""

    DO_NOTHING = enum.auto()
    CLICK = enum.auto()
    SWIPE = enum.auto()
    KEY = enum.auto()
    TEXT = enum.auto()
    START_APP = enum.auto()
    STOP_APP = enum.auto()
    STOP_TASK = enum.auto()
    COMMAND = enum.auto()


_RECOGNITION_NAMES: dict[RecognitionType, str] = {
    RecognitionType.DIRECT_HIT: "DirectHit",
    RecognitionType.FIND_COLOR: "FindColor",
    RecognitionType.FIND_MULTI_COLOR: "FindMultiColor",
    RecognitionType.FIND_COLOR_LIST: "FindColorList",
    RecognitionType.FIND_MULTI_COLOR_LIST: "FindMultiColorList",
    RecognitionType.TEMPLATE_MATCH: "TemplateMatch",
    RecognitionType.OCR: "OCR",
}
_RECOGNITION_BY_NAME = {name: kind for kind, name in _RECOGNITION_NAMES.items()}


def recognition_type_from_string(text: str) -> RecognitionType:
    """Map a configuration name to its recognition type; unknown names mean DirectHit."""
    return _RECOGNITION_BY_NAME.get(text, RecognitionType.DIRECT_HIT)


def recognition_type_to_string(kind: RecognitionType) -> str:
    """The configuration name of a recognition type, or ``"Unknown"``."""
    return _RECOGNITION_NAMES.get(kind, "Unknown")


@dataclass
class Box:
    """A found area: top-left corner and size."""

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0


@dataclass
class RecognitionResult:
    """Outcome of one recognition; true when it succeeded."""

    success: bool = False
    box: Box = field(default_factory=Box)
    score: float = 0.0
    text: str = ""
    extra: Any = None

    def __bool__(self) -> bool:
        return self.success