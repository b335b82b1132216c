import pytest

from taskpipeline.base import Region, TemplateMatchParams, VisionMatch
from taskpipeline.results import Box, RecognitionType
from taskpipeline.template import TemplateMatchRecognition


class RecordingBackend:
    def __init__(self, match):
        self.match = match
        self.calls: list[TemplateMatchParams] = []

    def template_match(self, params):
        self.calls.append(params)
        return self.match


def make(config, match=None):
    backend = RecordingBackend(match or VisionMatch(success=True, box=Region(10, 20, 40, 60), score=0.9))
    recognition = TemplateMatchRecognition(backend)
    recognition.parse_config(config)
    return recognition, backend


def test_no_templates_fails_without_calling_backend():
    recognition, backend = make({})
    assert recognition.recognize().success is False
    assert backend.calls == []


def test_no_templates_inverted_succeeds():
    recognition, _ = make({})
    recognition.inverse = True
    assert recognition.recognize().success is True


def test_match_is_converted():
    recognition, _ = make({"template": "a.png"})
    result = recognition.recognize()
    assert result.success is True
    assert result.box.x == 10 and result.box.y == 20
    assert result.box == Box(10, 20, Region(10, 20, 40, 60).width, Region(10, 20, 40, 60).height)
    assert result.score == 0.9


def test_inverse_flips_match():
    recognition, _ = make({"template": "a.png"})
    recognition.inverse = True
    assert recognition.recognize().success is False


def test_default_threshold_and_method():
    recognition, backend = make({"template": ["a.png", "b.png"]})
    recognition.recognize()
    params = backend.calls[0]
    assert params.thresholds == [0.8]
    assert params.method == 5
    assert params.template_paths == ["a.png", "b.png"]


def test_default_roi_is_zero_area():
    recognition, backend = make({"template": "a.png"})
    recognition.recognize()
    assert backend.calls[0].roi == Region(0, 0, 0, 0)


def test_short_roi_means_full_screen():
    recognition, backend = make({"template": "a.png", "roi": [1, 2]})
    recognition.recognize()
    assert backend.calls[0].roi == Region(0, 0, 1920, 1080)


def test_roi_and_offset_and_thresholds():
    recognition, backend = make(
        {
            "template": "a.png",
            "roi": [100, 200, 300, 400],
            "roi_offset": [1, 1, -1, -1],
            "threshold": [0.5, 0.6],
            "method": 3,
        }
    )
    recognition.recognize()
    params = backend.calls[0]
    assert params.roi == Region(101, 201, 299, 399)
    assert params.thresholds == [0.5, 0.6]
    assert params.method == 3


def test_single_values_are_appended():
    recognition, _ = make({"template": "a.png", "threshold": 0.7})
    recognition.parse_config({"template": "b.png", "threshold": 0.75})
    assert recognition.templates == ["a.png", "b.png"]
    assert recognition.thresholds == [0.7, 0.75]


def test_list_replaces_templates():
    recognition, _ = make({"template": "a.png"})
    recognition.parse_config({"template": ["c.png"]})
    assert recognition.templates == ["c.png"]


def test_bad_roi_type_raises():
    recognition = TemplateMatchRecognition()
    with pytest.raises(TypeError):
        recognition.parse_config({"roi": "elsewhere"})


def test_missing_backend_raises():
    recognition = TemplateMatchRecognition()
    recognition.parse_config({"template": "a.png"})
    with pytest.raises(RuntimeError):
        recognition.recognize()


def test_kind():
    assert TemplateMatchRecognition().kind is RecognitionType.TEMPLATE_MATCH