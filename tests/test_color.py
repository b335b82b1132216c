import pytest

from taskpipeline.base import Region, VisionMatch, resolve_roi
from taskpipeline.color import (
    FindColorListRecognition,
    FindColorRecognition,
    FindMultiColorListRecognition,
    FindMultiColorRecognition,
)
from taskpipeline.results import RecognitionType


class FakeVision:
    def __init__(self, hits=None):
        self.hits = hits or {}
        self.color_calls = []
        self.multi_calls = []

    def find_color(self, params):
        self.color_calls.append(params)
        return self.hits.get(params.color, VisionMatch())

    def find_multi_color(self, params):
        self.multi_calls.append(params)
        return self.hits.get((params.first_color, params.offset_color), VisionMatch())


def test_find_color_parse_config_reads_fields():
    recognition = FindColorRecognition()
    recognition.parse_config(
        {"roi": [1, 2, 3, 4], "roi_offset": [5, 6, 7, 8], "color": "ff0000",
         "similarity": 0.9, "direction": 2}
    )
    assert recognition.roi == [1, 2, 3, 4]
    assert recognition.roi_offset == [5, 6, 7, 8]
    assert recognition.color == "ff0000"
    assert recognition.similarity == 0.9
    assert recognition.direction == 2
    assert recognition.kind is RecognitionType.FIND_COLOR


def test_find_color_passes_params_and_converts_result():
    match = VisionMatch(success=True, box=Region(5, 6, 15, 26), score=0.75)
    vision = FakeVision({"00ff00": match})
    recognition = FindColorRecognition(vision)
    recognition.parse_config(
        {"roi": [10, 20, 110, 220], "roi_offset": [1, 2, 3, 4], "color": "00ff00",
         "similarity": 0.8, "direction": 1}
    )
    result = recognition.recognize()
    params = vision.color_calls[0]
    assert params.roi == resolve_roi([10, 20, 110, 220], [1, 2, 3, 4])
    assert params.similarity == 0.8
    assert params.direction == 1
    assert result.success
    assert (result.box.x, result.box.y) == (5, 6)
    assert (result.box.width, result.box.height) == (match.box.width, match.box.height)
    assert result.score == 0.75
    assert result.text == ""


def test_find_color_short_roi_uses_full_screen():
    vision = FakeVision()
    recognition = FindColorRecognition(vision)
    recognition.parse_config({"roi": [1, 2]})
    recognition.recognize()
    assert vision.color_calls[0].roi == Region(0, 0, 1920, 1080)


def test_find_color_default_roi_is_empty_region():
    vision = FakeVision()
    FindColorRecognition(vision).recognize()
    assert vision.color_calls[0].roi == Region(0, 0, 0, 0)


def test_find_color_inverse_flips_result():
    recognition = FindColorRecognition(FakeVision())
    recognition.inverse = True
    assert recognition.recognize().success is True


def test_find_color_without_backend_raises():
    with pytest.raises(RuntimeError):
        FindColorRecognition().recognize()


def test_find_color_rejects_bad_similarity():
    with pytest.raises(TypeError):
        FindColorRecognition().parse_config({"similarity": "high"})


def test_find_multi_color_passes_both_colors():
    match = VisionMatch(success=True, box=Region(1, 1, 2, 2), score=0.5)
    vision = FakeVision({("aa", "bb"): match})
    recognition = FindMultiColorRecognition(vision)
    recognition.parse_config({"first_color": "aa", "offset_color": "bb"})
    result = recognition.recognize()
    assert vision.multi_calls[0].first_color == "aa"
    assert vision.multi_calls[0].offset_color == "bb"
    assert result.success
    assert result.score == 0.5


def test_color_list_empty_fails_without_searching():
    vision = FakeVision()
    recognition = FindColorListRecognition(vision)
    assert recognition.recognize().success is False
    assert vision.color_calls == []
    recognition.inverse = True
    assert recognition.recognize().success is True


def test_color_list_stops_at_first_hit():
    match = VisionMatch(success=True, box=Region(3, 4, 5, 6), score=0.9)
    vision = FakeVision({"b": match})
    recognition = FindColorListRecognition(vision)
    recognition.parse_config({"color_list": ["a", "b", "c"]})
    result = recognition.recognize()
    assert [params.color for params in vision.color_calls] == ["a", "b"]
    assert result.success
    assert result.box.x == 3


def test_color_list_all_misses_fail():
    vision = FakeVision()
    recognition = FindColorListRecognition(vision)
    recognition.parse_config({"color_list": ["a", "b"]})
    assert recognition.recognize().success is False
    assert len(vision.color_calls) == 2


def test_color_list_string_is_appended():
    recognition = FindColorListRecognition()
    recognition.parse_config({"color_list": "a"})
    recognition.parse_config({"color_list": "b"})
    assert recognition.color_list == ["a", "b"]


def test_multi_color_list_skips_malformed_items():
    recognition = FindMultiColorListRecognition()
    recognition.parse_config({"multi_color_list": [["a", "b"], ["c"], "d", ["e", "f", "g"]]})
    assert recognition.multi_color_list == [("a", "b"), ("e", "f")]


def test_multi_color_list_stops_at_first_hit():
    match = VisionMatch(success=True, box=Region(0, 0, 1, 1), score=1.0)
    vision = FakeVision({("c", "d"): match})
    recognition = FindMultiColorListRecognition(vision)
    recognition.parse_config({"multi_color_list": [["a", "b"], ["c", "d"], ["e", "f"]]})
    result = recognition.recognize()
    assert [(p.first_color, p.offset_color) for p in vision.multi_calls] == [("a", "b"), ("c", "d")]
    assert result.success
    recognition.inverse = True
    assert recognition.recognize().success is False


def test_multi_color_list_empty_fails():
    recognition = FindMultiColorListRecognition(FakeVision())
    assert recognition.recognize().success is False