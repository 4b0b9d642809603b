# tests/test_cage_output.py
import json

import pytest

from cage_output import OutputLimitExceeded, format_combination, serialize, serialize_json


def test_serialize_one_line_per_combination():
    assert serialize([(1, 9), (2, 8)]) == "1 9\n2 8\n"


def test_serialize_empty_result_is_empty_text():
    assert serialize([]) == ""


def test_serialize_empty_combination_is_a_bare_line():
    assert serialize([()]) == "\n"


def test_format_combination():
    assert format_combination((1, 2, 3, 4, 5, 6, 7, 8, 9)) == "1 2 3 4 5 6 7 8 9"


def test_serialize_accepts_generators():
    assert serialize(combo for combo in [(5, 5)]) == "5 5\n"


def test_serialize_within_limit():
    assert serialize([(1, 9), (2, 8)], max_bytes=8) == "1 9\n2 8\n"


def test_serialize_over_limit_raises_instead_of_truncating():
    with pytest.raises(OutputLimitExceeded) as excinfo:
        serialize([(1, 9), (2, 8), (3, 7)], max_bytes=8)
    assert excinfo.value.limit == 8
    assert excinfo.value.size == 12


def test_serialize_json():
    text = serialize_json([(1, 9), (5, 5)])
    assert json.loads(text) == [[1, 9], [5, 5]]
    assert serialize_json([]) == "[]\n"


def test_serialize_json_limit():
    with pytest.raises(OutputLimitExceeded):
        serialize_json([(1, 2, 3, 4, 5, 6, 7, 8, 9)], max_bytes=10)
