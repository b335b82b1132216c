"""The recognition base class and the vision backend it delegates to."""

from __future__ import annotations

import abc
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol

from taskpipeline.results import Box, RecognitionResult, RecognitionType

_FULL_SCREEN = (0, 0, 1920, 1080)


@dataclass(frozen=True)
class Region:
    """A screen area given by two corners."""

    x1: int = 0
    y1: int = 0
    x2: int = 0
    y2: int = 0

    @property
    def width(self) -> int:
        return self.x2 - self.x1

    @property
    def height(self) -> int:
        return self.y2 - self.y1


@dataclass
class VisionMatch:
    """What the vision backend reports for one search."""

    success: bool = False
    box: Region = field(default_factory=Region)
    score: float = 0.0
    text: str = ""


@dataclass
class FindColorParams:
    roi: Region = field(default_factory=Region)
    color: str = ""
    similarity: float = 1.0
    direction: int = 0


@dataclass
class FindMultiColorParams:
    roi: Region = field(default_factory=Region)
    first_color: str = ""
    offset_color: str = ""
    similarity: float = 1.0
    direction: int = 0


@dataclass
class TemplateMatchParams:
    roi: Region = field(default_factory=Region)
    template_paths: list[str] = field(default_factory=list)
    thresholds: list[float] = field(default_factory=list)
    method: int = 5


@dataclass
class OcrParams:
    roi: Region = field(default_factory=Region)
    expected: list[str] = field(default_factory=list)
    replace: list[tuple[str, str]] = field(default_factory=list)
    order_by: str = "Horizontal"
    index: int = 0
    only_rec: bool = False
    model: str = ""


class VisionBackend(Protocol):
    """The image-searching engine that recognitions call."""

    def find_color(self, params: FindColorParams) -> VisionMatch:
        """Search the region for a single colour."""

    def find_multi_color(self, params: FindMultiColorParams) -> VisionMatch:
        """Search the region for a colour with offset colours around it."""

    def template_match(self, params: TemplateMatchParams) -> VisionMatch:
        """Search the region for one of the template images."""

    def ocr(self, params: OcrParams) -> VisionMatch:
        """Read text in the region and return one match."""

    def ocr_batch(self, params: OcrParams) -> list[VisionMatch]:
        """Read text in the region and return every match."""


def resolve_roi(roi: Sequence[int], roi_offset: Sequence[int]) -> Region:
    """Build the search region; fewer than four values mean the whole screen."""
    if len(roi) < 4:
        return Region(*_FULL_SCREEN)
    x1, y1, x2, y2 = roi[:4]
    if len(roi_offset) >= 4:
        dx1, dy1, dx2, dy2 = roi_offset[:4]
        x1, y1, x2, y2 = x1 + dx1, y1 + dy1, x2 + dx2, y2 + dy2
    return Region(x1, y1, x2, y2)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _as_int(value: Any, key: str) -> int:
    if not _is_number(value):
        raise TypeError(f"{key} must be a number, not {value!r}")
    return int(value)


def _as_float(value: Any, key: str) -> float:
    if not _is_number(value):
        raise TypeError(f"{key} must be a number, not {value!r}")
    return float(value)


def _as_str(value: Any, key: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{key} must be a string, not {value!r}")
    return value


def _as_bool(value: Any, key: str) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"{key} must be a boolean, not {value!r}")
    return value


def _as_list(value: Any, key: str) -> list:
    if not isinstance(value, list):
        raise TypeError(f"{key} must be an array, not {value!r}")
    return value


def _as_int_list(value: Any, key: str) -> list[int]:
    return [_as_int(item, key) for item in _as_list(value, key)]


def _as_float_list(value: Any, key: str) -> list[float]:
    return [_as_float(item, key) for item in _as_list(value, key)]


def _as_str_list(value: Any, key: str) -> list[str]:
    return [_as_str(item, key) for item in _as_list(value, key)]


def _result_from_match(match: VisionMatch, *, with_text: bool = False) -> RecognitionResult:
    return RecognitionResult(
        success=match.success,
        box=Box(match.box.x1, match.box.y1, match.box.width, match.box.height),
        score=match.score,
        text=match.text if with_text else "",
    )


class Recognition(abc.ABC):
    """A recognition algorithm; ``inverse`` flips the success of every result."""

    def __init__(self, kind: RecognitionType, backend: Optional[VisionBackend] = None) -> None:
        self.kind = kind
        self.backend = backend
        self.inverse = False

    @abc.abstractmethod
    def recognize(self) -> RecognitionResult:
        """Run the recognition once."""

    @abc.abstractmethod
    def parse_config(self, config: dict) -> None:
        """Read the algorithm's parameters from a node's configuration."""

    def _vision(self) -> VisionBackend:
        if self.backend is None:
            raise RuntimeError(f"{type(self).__name__} needs a vision backend")
        return self.backend

    def _finish(self, result: RecognitionResult) -> RecognitionResult:
        if self.inverse:
            result.success = not result.success
        return result