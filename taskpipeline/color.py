"""Colour searches: single colours, multi-point colours and lists of either."""

from __future__ import annotations

from typing import Optional

from taskpipeline.base import (
    FindColorParams,
    FindMultiColorParams,
    Recognition,
    VisionBackend,
    _as_float,
    _as_int,
    _as_int_list,
    _as_str,
    _as_str_list,
    _result_from_match,
    resolve_roi,
)
from taskpipeline.results import RecognitionResult, RecognitionType


class _ColorSearch(Recognition):
    """Parameters shared by every colour search."""

    def __init__(self, kind: RecognitionType, backend: Optional[VisionBackend]) -> None:
        super().__init__(kind, backend)
        self.roi: list[int] = [0, 0, 0, 0]
        self.roi_offset: list[int] = [0, 0, 0, 0]
        self.similarity = 1.0
        self.direction = 0

    def _parse_region(self, config: dict) -> None:
        if "roi" in config:
            self.roi = _as_int_list(config["roi"], "roi")
        if "roi_offset" in config:
            self.roi_offset = _as_int_list(config["roi_offset"], "roi_offset")

    def _parse_search(self, config: dict) -> None:
        if "similarity" in config:
            self.similarity = _as_float(config["similarity"], "similarity")
        if "direction" in config:
            self.direction = _as_int(config["direction"], "direction")

    def _find_color(self, color: str) -> RecognitionResult:
        params = FindColorParams(
            roi=resolve_roi(self.roi, self.roi_offset),
            color=color,
            similarity=self.similarity,
            direction=self.direction,
        )
        return _result_from_match(self._vision().find_color(params))

    def _find_multi_color(self, first_color: str, offset_color: str) -> RecognitionResult:
        params = FindMultiColorParams(
            roi=resolve_roi(self.roi, self.roi_offset),
            first_color=first_color,
            offset_color=offset_color,
            similarity=self.similarity,
            direction=self.direction,
        )
        return _result_from_match(self._vision().find_multi_color(params))


class FindColorRecognition(_ColorSearch):
    """Finds a single colour inside a region."""

    def __init__(self, backend: Optional[VisionBackend] = None) -> None:
        super().__init__(RecognitionType.FIND_COLOR, backend)
        self.color = ""

    def parse_config(self, config: dict) -> None:
        """Read ``roi``, ``roi_offset``, ``color``, ``similarity`` and ``direction``."""
        self._parse_region(config)
        if "color" in config:
            self.color = _as_str(config["color"], "color")
        self._parse_search(config)

    def recognize(self) -> RecognitionResult:
        """Search for the colour."""
        return self._finish(self._find_color(self.color))


class FindMultiColorRecognition(_ColorSearch):
    """Finds a colour together with colours at given offsets from it."""

    def __init__(self, backend: Optional[VisionBackend] = None) -> None:
        super().__init__(RecognitionType.FIND_MULTI_COLOR, backend)
        self.first_color = ""
        self.offset_color = ""

    def parse_config(self, config: dict) -> None:
        """Read ``roi``, ``roi_offset``, ``first_color``, ``offset_color``, ``similarity`` and ``direction``."""
        self._parse_region(config)
        if "first_color" in config:
            self.first_color = _as_str(config["first_color"], "first_color")
        if "offset_color" in config:
            self.offset_color = _as_str(config["offset_color"], "offset_color")
        self._parse_search(config)

    def recognize(self) -> RecognitionResult:
        """Search for the colour pattern."""
        return self._finish(self._find_multi_color(self.first_color, self.offset_color))


class FindColorListRecognition(_ColorSearch):
    """Tries each colour of a list in turn and reports the first one found."""

    def __init__(self, backend: Optional[VisionBackend] = None) -> None:
        super().__init__(RecognitionType.FIND_COLOR_LIST, backend)
        self.color_list: list[str] = []

    def parse_config(self, config: dict) -> None:
        """Read ``roi``, ``roi_offset``, ``color_list``, ``similarity`` and ``direction``."""
        self._parse_region(config)
        if "color_list" in config:
            colors = config["color_list"]
            if isinstance(colors, str):
                self.color_list.append(colors)
            elif isinstance(colors, list):
                self.color_list = _as_str_list(colors, "color_list")
        self._parse_search(config)

    def recognize(self) -> RecognitionResult:
        """Search the colours in order; an empty list means failure."""
        for color in self.color_list:
            result = self._find_color(color)
            if result.success:
                return self._finish(result)
        return self._finish(RecognitionResult(success=False))


class FindMultiColorListRecognition(_ColorSearch):
    """Tries each colour pattern of a list in turn and reports the first one found."""

    def __init__(self, backend: Optional[VisionBackend] = None) -> None:
        super().__init__(RecognitionType.FIND_MULTI_COLOR_LIST, backend)
        self.multi_color_list: list[tuple[str, str]] = []

    def parse_config(self, config: dict) -> None:
        """Read ``roi``, ``roi_offset``, ``multi_color_list``, ``similarity`` and ``direction``.

        Items of ``multi_color_list`` that are not arrays of at least two entries are skipped.
        """
        self._parse_region(config)
        patterns = config.get("multi_color_list")
        if isinstance(patterns, list):
            for item in patterns:
                if isinstance(item, list) and len(item) >= 2:
                    self.multi_color_list.append(
                        (
                            _as_str(item[0], "multi_color_list"),
                            _as_str(item[1], "multi_color_list"),
                        )
                    )
        self._parse_search(config)

    def recognize(self) -> RecognitionResult:
        """Search the patterns in order; an empty list means failure."""
        for first_color, offset_color in self.multi_color_list:
            result = self._find_multi_color(first_color, offset_color)
            if result.success:
                return self._finish(result)
        return self._finish(RecognitionResult(success=False))