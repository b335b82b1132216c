"""Recognitions that succeed without looking at the screen."""

from __future__ import annotations

from typing import Optional

from taskpipeline.base import Recognition, VisionBackend
from taskpipeline.results import RecognitionResult, RecognitionType


class DirectHitRecognition(Recognition):
    """Always hits, unless inverted."""

    def __init__(self, backend: Optional[VisionBackend] = None) -> None:
        super().__init__(RecognitionType.DIRECT_HIT, backend)

    def recognize(self) -> RecognitionResult:
        """Succeed (fail when inverted)."""
        return self._finish(RecognitionResult(success=True))

    def parse_config(self, config: dict) -> None:
        """Takes no parameters."""


class AlwaysRecognition(Recognition):
    """Always succeeds, unless inverted."""

    def __init__(self, backend: Optional[VisionBackend] = None) -> None:
        super().__init__(RecognitionType.ALWAYS, backend)

    def recognize(self) -> RecognitionResult:
        """Succeed (fail when inverted)."""
        return self._finish(RecognitionResult(success=True))

    def parse_config(self, config: dict) -> None:
        """Takes no parameters."""