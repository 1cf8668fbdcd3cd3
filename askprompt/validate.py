"""Validators that check an answer and raise when it is not acceptable."""

from __future__ import annotations

import dataclasses
from typing import Any, Callable, Sequence

from .options import OptionAnswer

Validator = Callable[[Any], None]


class ValidationError(ValueError):
    """Raised by a validator when an answer is not acceptable."""


def is_zero(value: Any) -> bool:
    """Return whether ``value`` is the empty or zero value of its type."""
    if value is None:
        return True
    if isinstance(value, (str, bytes, bytearray, list, tuple, dict, set, frozenset)):
        return len(value) == 0
    if isinstance(value, (int, float, complex)):
        return value == 0
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return all(is_zero(getattr(value, f.name)) for f in dataclasses.fields(value))
    try:
        return value == type(value)()
    except TypeError:
        return False


def required(value: Any) -> None:
    """Reject empty answers; ``False`` counts as an answer."""
    if is_zero(value) and not isinstance(value, bool):
        raise ValidationError("Value is required")


def _type_name(value: Any) -> str:
    return type(value).__name__


def max_length(length: int) -> Validator:
    """Return a validator that rejects strings longer than ``length`` characters."""

    def validate(value: Any) -> None:
        if not isinstance(value, str):
            raise ValidationError(
                f"cannot enforce length on response of type {_type_name(value)}"
            )
        if len(value) > length:
            raise ValidationError(f"value is too long. Max length is {length}")

    return validate


def min_length(length: int) -> Validator:
    """Return a validator that rejects strings shorter than ``length`` characters."""

    def validate(value: Any) -> None:
        if not isinstance(value, str):
            raise ValidationError(
                f"cannot enforce length on response of type {_type_name(value)}"
            )
        if len(value) < length:
            raise ValidationError(f"value is too short. Min length is {length}")

    return validate


def _is_answer_list(value: Any) -> bool:
    return isinstance(value, (list, tuple)) and all(
        isinstance(item, OptionAnswer) for item in value
    )


def max_items(number_items: int) -> Validator:
    """Return a validator that rejects lists of more than ``number_items`` answers."""

    def validate(value: Any) -> None:
        if not _is_answer_list(value):
            raise ValidationError(
                "cannot impose the length on something other than a list of answers"
            )
        if len(value) > number_items:
            raise ValidationError(f"value is too long. Max items is {number_items}")

    return validate


def min_items(number_items: int) -> Validator:
    """Return a validator that rejects lists of fewer than ``number_items`` answers."""

    def validate(value: Any) -> None:
        if not _is_answer_list(value):
            raise ValidationError(
                "cannot impose the length on something other than a list of answers"
            )
        if len(value) < number_items:
            raise ValidationError(f"value is too short. Min items is {number_items}")

    return validate


def compose_validators(*validators: Validator) -> Validator:
    """Return a validator that runs ``validators`` in order, stopping at the first failure."""
    chain: Sequence[Validator] = tuple(validators)

    def validate(value: Any) -> None:
        for validator in chain:
            validator(value)

    return validate