"""Building recognitions from their type and configuration."""

from __future__ import annotations

from typing import Optional

from taskpipeline.base import Recognition, VisionBackend
from taskpipeline.basic import DirectHitRecognition
from taskpipeline.color import (
    FindColorListRecognition,
    FindColorRecognition,
    FindMultiColorListRecognition,
    FindMultiColorRecognition,
)
from taskpipeline.ocr import OCRRecognition
from taskpipeline.results import RecognitionType
from taskpipeline.template import TemplateMatchRecognition

_CLASSES: dict[RecognitionType, type[Recognition]] = {
    RecognitionType.DIRECT_HIT: DirectHitRecognition,
    RecognitionType.FIND_COLOR: FindColorRecognition,
    RecognitionType.FIND_MULTI_COLOR: FindMultiColorRecognition,
    RecognitionType.FIND_COLOR_LIST: FindColorListRecognition,
    RecognitionType.FIND_MULTI_COLOR_LIST: FindMultiColorListRecognition,
    RecognitionType.TEMPLATE_MATCH: TemplateMatchRecognition,
    RecognitionType.OCR: OCRRecognition,
}


def create_recognition(
    kind: RecognitionType,
    config: Optional[dict] = None,
    backend: Optional[VisionBackend] = None,
) -> Recognition:
    """Create the recognition for ``kind``; unlisted kinds give a DirectHit.

    A non-empty ``config`` is parsed into it.
    """
    recognition = _CLASSES.get(kind, DirectHitRecognition)(backend)
    if config:
        recognition.parse_config(config)
    return recognition