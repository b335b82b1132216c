"""Text recognition."""

from __future__ import annotations

from typing import Optional

from taskpipeline.base import (
    OcrParams,
    Recognition,
    VisionBackend,
    _as_bool,
    _as_int,
    _as_int_list,
    _as_str,
    _as_str_list,
    _result_from_match,
    resolve_roi,
)
from taskpipeline.results import RecognitionResult, RecognitionType


class OCRRecognition(Recognition):
    """Reads text inside a region and picks one of the texts found."""

    def __init__(self, backend: Optional[VisionBackend] = None) -> None:
        super().__init__(RecognitionType.OCR, backend)
        self.roi: list[int] = [0, 0, 0, 0]
        self.roi_offset: list[int] = [0, 0, 0, 0]
        self.expected: list[str] = []
        self.replace: list[tuple[str, str]] = []
        self.order_by = "Horizontal"
        self.index = 0
        self.only_rec = False
        self.model = ""

    def parse_config(self, config: dict) -> None:
        """Read ``roi``, ``roi_offset``, ``expected``, ``replace``, ``orderBy``, ``index``, ``onlyRec`` and ``model``."""
        if "roi" in config:
            self.roi = _as_int_list(config["roi"], "roi")
        if "roi_offset" in config:
            self.roi_offset = _as_int_list(config["roi_offset"], "roi_offset")
        if "expected" in config:
            expected = config["expected"]
            if isinstance(expected, str):
                self.expected.append(expected)
            elif isinstance(expected, list):
                self.expected = _as_str_list(expected, "expected")
        rules = config.get("replace")
        if isinstance(rules, list):
            for item in rules:
                if isinstance(item, list) and len(item) >= 2:
                    self.replace.append(
                        (_as_str(item[0], "replace"), _as_str(item[1], "replace"))
                    )
        if "orderBy" in config:
            self.order_by = _as_str(config["orderBy"], "orderBy")
        if "index" in config:
            self.index = _as_int(config["index"], "index")
        if "onlyRec" in config:
            self.only_rec = _as_bool(config["onlyRec"], "onlyRec")
        if "model" in config:
            self.model = _as_str(config["model"], "model")

    def create_params(self) -> OcrParams:
        """The parameters handed to the vision backend."""
        return OcrParams(
            roi=resolve_roi(self.roi, self.roi_offset),
            expected=list(self.expected),
            replace=list(self.replace),
            order_by=self.order_by,
            index=self.index,
            only_rec=self.only_rec,
            model=self.model,
        )

    def recognize(self) -> RecognitionResult:
        """Pick the text at ``index`` (negative counts from the end) among all texts found.

        When the batch search fails, a single search is used instead.
        """
        params = self.create_params()
        vision = self._vision()
        try:
            matches = vision.ocr_batch(params)
        except Exception:
            result = _result_from_match(vision.ocr(params), with_text=True)
        else:
            result = RecognitionResult()
            index = len(matches) + self.index if self.index < 0 else self.index
            if 0 <= index < len(matches):
                result = _result_from_match(matches[index], with_text=True)
        return self._finish(result)

    def recognize_batch(self) -> list[RecognitionResult]:
        """Every text found; falls back to a single search, kept only when it succeeded."""
        params = self.create_params()
        vision = self._vision()
        try:
            matches = vision.ocr_batch(params)
        except Exception:
            match = vision.ocr(params)
            matches = [match] if match.success else []
        return [self._finish(_result_from_match(match, with_text=True)) for match in matches]