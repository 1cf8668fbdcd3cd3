"""Transformers that turn an answer into another representation."""

from __future__ import annotations

import re
from typing import Any, Callable

from .validate import is_zero

Transformer = Callable[[Any], Any]

_WORD = re.compile(r"[^\W_]+(?:['\u2019][^\W_]+)*")


def transform_string(func: Callable[[str], str]) -> Transformer:
    """Return a transformer that applies ``func`` to string answers.

    Empty answers and answers that are not strings come back as ``""``.
    """

    def transform(answer: Any) -> Any:
        if is_zero(answer) or not isinstance(answer, str):
            return ""
        return func(answer)

    return transform


def _title_case(text: str) -> str:
    return _WORD.sub(lambda m: m.group(0)[:1].title() + m.group(0)[1:].lower(), text)


_to_lower = transform_string(str.lower)
_title = transform_string(_title_case)


def to_lower(answer: Any) -> Any:
    """Lower-case a string answer."""
    return _to_lower(answer)


def title(answer: Any) -> Any:
    """Capitalise the first letter of every word of a string answer."""
    return _title(answer)


def compose_transformers(*transformers: Transformer) -> Transformer:
    """Return a transformer that applies ``transformers`` one after another."""
    chain = tuple(transformers)

    def transform(answer: Any) -> Any:
        for transformer in chain:
            answer = transformer(answer)
        return answer

    return transform