import pytest

from askprompt.options import OptionAnswer
from askprompt.validate import (
    ValidationError,
    compose_validators,
    is_zero,
    max_items,
    max_length,
    min_items,
    min_length,
    required,
)

SIX_ANSWERS = [OptionAnswer(value, index) for index, value in enumerate("abcdef")]


def test_required_succeeds_on_string():
    assert required("hello") is None


def test_required_fails_on_empty_string():
    with pytest.raises(ValidationError, match="Value is required"):
        required("")


def test_required_succeeds_on_map():
    assert required({"hello": 1}) is None


def test_required_passes_on_false():
    assert required(False) is None


def test_required_fails_on_empty_map():
    with pytest.raises(ValidationError):
        required({})


def test_required_succeeds_on_list():
    assert required(["hello"]) is None


def test_required_fails_on_empty_list():
    with pytest.raises(ValidationError):
        required([])


def test_required_fails_on_zero_and_none():
    with pytest.raises(ValidationError):
        required(0)
    with pytest.raises(ValidationError):
        required(None)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("", True),
        ("x", False),
        (0, True),
        (3, False),
        (False, True),
        (True, False),
        ([], True),
        ([1], False),
        ({}, True),
        (None, True),
        (OptionAnswer("", 0), True),
        (OptionAnswer("red", 0), False),
    ],
)
def test_is_zero(value, expected):
    assert is_zero(value) is expected


def test_max_items_rejects_long_list():
    with pytest.raises(ValidationError, match="Max items is 4"):
        max_items(4)(SIX_ANSWERS)


def test_max_items_accepts_short_list():
    assert max_items(6)(SIX_ANSWERS) is None


def test_min_items_rejects_short_list():
    with pytest.raises(ValidationError, match="Min items is 10"):
        min_items(10)(SIX_ANSWERS)


def test_items_reject_non_list():
    with pytest.raises(ValidationError, match="list of answers"):
        max_items(3)("abc")
    with pytest.raises(ValidationError, match="list of answers"):
        min_items(3)(["a", "b"])


def test_max_length():
    with pytest.raises(ValidationError) as info:
        max_length(140)("a" * 150)
    assert str(info.value) == "value is too long. Max length is 140"
    assert max_length(10)("I😍Coding") is None


def test_min_length():
    with pytest.raises(ValidationError) as info:
        min_length(12)("abcdefghij")
    assert str(info.value) == "value is too short. Min length is 12"
    with pytest.raises(ValidationError):
        min_length(10)("I😍Coding")


def test_min_length_on_int():
    with pytest.raises(ValidationError) as info:
        min_length(12)(1)
    assert str(info.value) == "cannot enforce length on response of type int"


def test_max_length_on_int():
    with pytest.raises(ValidationError, match="cannot enforce length"):
        max_length(12)(1)


def test_compose_validators_passes_valid_value():
    valid = compose_validators(required, max_length(10))
    assert valid("short") is None


def test_compose_validators_fails_on_first_error():
    valid = compose_validators(required, max_length(10))
    with pytest.raises(ValidationError, match="Value is required"):
        valid("")


def test_compose_validators_fails_on_subsequent_validators():
    valid = compose_validators(required, max_length(10))
    with pytest.raises(ValidationError, match="too long"):
        valid("abcdefghijkl")