"""Option answers and pagination of option lists."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple


@dataclass(frozen=True)
class OptionAnswer:
    """An option the user picked: its text and its position in the option list."""

    value: str
    index: int


def option_answer_list(values: Iterable[str]) -> List[OptionAnswer]:
    """Wrap plain option strings as answers that remember their position."""
    return [OptionAnswer(value=value, index=index) for index, value in enumerate(values)]


def paginate(
    page_size: int, choices: Sequence[OptionAnswer], sel: int
) -> Tuple[List[OptionAnswer], int]:
    """Return the page of ``choices`` holding ``sel`` and the cursor within it."""
    total = len(choices)
    half = page_size // 2

    if total < page_size:
        # not enough options to fill a page
        start, end, cursor = 0, total, sel
    elif sel < half:
        # in the first half page
        start, end, cursor = 0, page_size, sel
    elif total - sel - 1 < half:
        # in the last half page
        start, end = total - page_size, total
        cursor = sel - start
    else:
        # somewhere in the middle
        above = half
        below = page_size - above
        cursor = half
        start, end = sel - above, sel + below

    return list(choices[start:end]), cursor