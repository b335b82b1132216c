"""Template image matching."""

from __future__ import annotations

from typing import Optional

from taskpipeline.base import (
    Recognition,
    TemplateMatchParams,
    VisionBackend,
    _as_float,
    _as_float_list,
    _as_int,
    _as_int_list,
    _as_str_list,
    _is_number,
    _result_from_match,
    resolve_roi,
)
from taskpipeline.results import RecognitionResult, RecognitionType

_DEFAULT_THRESHOLD = 0.8


class TemplateMatchRecognition(Recognition):
    """Finds one of a set of template images inside a region."""

    def __init__(self, backend: Optional[VisionBackend] = None) -> None:
        super().__init__(RecognitionType.TEMPLATE_MATCH, backend)
        self.roi: list[int] = [0, 0, 0, 0]
        self.roi_offset: list[int] = [0, 0, 0, 0]
        self.templates: list[str] = []
        self.thresholds: list[float] = []
        self.method = 5

    def parse_config(self, config: dict) -> None:
        """Read ``roi``, ``roi_offset``, ``template``, ``threshold`` and ``method``."""
        if "roi" in config:
            self.roi = _as_int_list(config["roi"], "roi")
        if "roi_offset" in config:
            self.roi_offset = _as_int_list(config["roi_offset"], "roi_offset")
        if "template" in config:
            template = config["template"]
            if isinstance(template, str):
                self.templates.append(template)
            elif isinstance(template, list):
                self.templates = _as_str_list(template, "template")
        if "threshold" in config:
            threshold = config["threshold"]
            if _is_number(threshold):
                self.thresholds.append(_as_float(threshold, "threshold"))
            elif isinstance(threshold, list):
                self.thresholds = _as_float_list(threshold, "threshold")
        if "method" in config:
            self.method = _as_int(config["method"], "method")

    def recognize(self) -> RecognitionResult:
        """Match the templates; no templates means failure."""
        if not self.templates:
            return self._finish(RecognitionResult(success=False))
        params = TemplateMatchParams(
            roi=resolve_roi(self.roi, self.roi_offset),
            template_paths=list(self.templates),
            thresholds=list(self.thresholds) or [_DEFAULT_THRESHOLD],
            method=self.method,
        )
        match = self._vision().template_match(params)
        return self._finish(_result_from_match(match))