import pytest

from taskpipeline.results import (
    Box,
    RecognitionResult,
    RecognitionType,
    recognition_type_from_string,
    recognition_type_to_string,
)

NAMES = [
    "DirectHit",
    "FindColor",
    "FindMultiColor",
    "FindColorList",
    "FindMultiColorList",
    "TemplateMatch",
    "OCR",
]


@pytest.mark.parametrize("name", NAMES)
def test_name_round_trip(name):
    assert recognition_type_to_string(recognition_type_from_string(name)) == name


def test_known_names_map_to_expected_types():
    assert recognition_type_from_string("OCR") is RecognitionType.OCR
    assert recognition_type_from_string("TemplateMatch") is RecognitionType.TEMPLATE_MATCH


def test_unknown_name_defaults_to_direct_hit():
    assert recognition_type_from_string("NoSuchThing") is RecognitionType.DIRECT_HIT
    assert recognition_type_from_string("") is RecognitionType.DIRECT_HIT


def test_always_has_no_configuration_name():
    assert recognition_type_to_string(RecognitionType.ALWAYS) == "Unknown"


def test_distinct_types_have_distinct_names():
    names = {recognition_type_to_string(kind) for kind in RecognitionType if kind is not RecognitionType.ALWAYS}
    assert names == set(NAMES)


def test_result_truth_follows_success():
    assert not RecognitionResult()
    assert RecognitionResult(success=True)


def test_result_defaults():
    result = RecognitionResult()
    assert result.box == Box(0, 0, 0, 0)
    assert result.score == 0.0
    assert result.text == ""
    assert result.extra is None


def test_results_do_not_share_boxes():
    first, second = RecognitionResult(), RecognitionResult()
    first.box.x = 7
    assert second.box.x == 0