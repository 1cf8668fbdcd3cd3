"""Rendering prompt text to the terminal and erasing it again."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Sequence, Tuple

from .config import Icon, PromptConfig
from .cursor import Cursor, EraseLineMode, Stdio, erase_line
from .options import OptionAnswer
from .runereader import RuneReader
from .width import string_width

RenderFunc = Callable[[Any, bool], str]

_COLORS = {
    "black": 0,
    "red": 1,
    "green": 2,
    "yellow": 3,
    "blue": 4,
    "magenta": 5,
    "cyan": 6,
    "white": 7,
    "default": 9,
}
_RESET = "\x1b[0m"
_STYLE_CODES = (("b", "1;"), ("B", "5;"), ("u", "4;"), ("i", "7;"), ("s", "9;"))
_FALLBACK_WIDTH = 10000


def ansi_code(spec: str) -> str:
    """Return the ANSI sequence for a colour spec such as ``"green+hb"`` or ``"red:white"``."""
    if not spec or spec == "off":
        return ""
    if spec == "reset":
        return _RESET

    fg_part, _, bg_part = spec.partition(":")
    fg_key, _, fg_style = fg_part.partition("+")
    bg_key, _, bg_style = bg_part.partition("+")

    code = "\x1b["
    base = 30
    for letter, style in _STYLE_CODES:
        if letter in fg_style:
            code += style
    if "h" in fg_style:
        base = 90
    if fg_key.isdigit():
        code += f"38;5;{int(fg_key)};"
    else:
        code += f"{base + _COLORS.get(fg_key, 0)};"

    if bg_key:
        base = 100 if "h" in bg_style else 40
        if bg_key.isdigit():
            code += f"48;5;{int(bg_key)};"
        else:
            code += f"{base + _COLORS.get(bg_key, 0)};"

    return code[:-1] + "m"


def _color(spec: str, colored: bool) -> str:
    return ansi_code(spec) if colored else ""


def _env_allows_color() -> bool:
    disabled = os.environ.get("NO_COLOR", "") != ""
    forced = os.environ.get("CLICOLOR_FORCE", "") not in ("", "0")
    return not disabled or forced


@dataclass(frozen=True)
class Template:
    """A prompt template: a renderer for the whole prompt and one for a single option.

    Both take the template data and whether colour codes should be written.
    """

    question: RenderFunc
    option: Optional[RenderFunc] = None

    def render(self, data: Any, colored: bool) -> str:
        return self.question(data, colored)

    def render_option(self, data: Any, colored: bool) -> str:
        if self.option is None:
            raise ValueError("template has no option renderer")
        return self.option(data, colored)


def run_template(template: Template, data: Any) -> Tuple[str, str]:
    """Render ``template`` for the user and, without colour, for layout tracking."""
    layout = template.render(data, False)
    user = template.render(data, True) if _env_allows_color() else layout
    return user, layout


def render_error(error: Any, icon: Icon, colored: bool) -> str:
    """Return the message shown when an answer fails validation."""
    return (
        f"{_color(icon.format, colored)}{icon.text} Sorry, your reply was invalid: "
        f"{error}{_color('reset', colored)}\n"
    )


def count_lines(text: str, width: int) -> int:
    """Count the terminal lines ``text`` ends past, wrapping at ``width`` columns."""
    segments = text.split("\n")
    count = len(segments) - 1
    for segment in segments:
        line_width = string_width(segment)
        if line_width > width:
            count += line_width // width
            if line_width % width == 0:
                # exactly filling the last line does not wrap onto another
                count -= 1
    return count


def compute_cursor_offset(
    template: Template,
    data: Any,
    opts: Sequence[OptionAnswer],
    idx: int,
    width: int,
) -> int:
    """Return how many lines the cursor sits below the selected option."""
    offset = len(opts) - idx
    for ix, opt in enumerate(opts):
        if ix < idx:
            continue
        try:
            rendered = template.render_option(data.iterate_option(ix, opt), False)
        except ValueError:
            rendered = ""
        value_width = len(rendered)
        if value_width > width:
            split_count = value_width // width
            if value_width % width == 0:
                split_count -= 1
            offset += split_count
    return offset


def _write(out: Any, text: str) -> None:
    out.write(text)
    flush = getattr(out, "flush", None)
    if flush is not None:
        flush()


def _default_stdio() -> Stdio:
    return Stdio(in_=sys.stdin, out=sys.stdout, err=sys.stderr)


@dataclass
class Renderer:
    """Draws prompts and remembers what was drawn so it can be erased."""

    stdio: Stdio = field(default_factory=_default_stdio)
    colored: bool = True
    _rendered_errors: str = field(default="", init=False, repr=False, compare=False)
    _rendered_text: str = field(default="", init=False, repr=False, compare=False)

    def with_stdio(self, stdio: Stdio) -> None:
        self.stdio = stdio

    def new_rune_reader(self) -> RuneReader:
        return RuneReader(self.stdio)

    def new_cursor(self) -> Cursor:
        return Cursor(in_=getattr(self.stdio.in_, "buffer", self.stdio.in_), out=self.stdio.out)

    def _run(self, template: Template, data: Any) -> Tuple[str, str]:
        if self.colored:
            return run_template(template, data)
        layout = template.render(data, False)
        return layout, layout

    def error(self, config: PromptConfig, invalid: Any) -> None:
        """Replace the prompt with a message saying ``invalid`` was rejected."""
        self._reset_prompt(self._count_lines(self._rendered_errors))
        self._rendered_errors = ""
        self._reset_prompt(self._count_lines(self._rendered_text))
        self._rendered_text = ""

        icon = config.icons.error
        user_out = render_error(invalid, icon, self.colored and _env_allows_color())
        layout_out = render_error(invalid, icon, False)
        _write(self.stdio.out, user_out)
        self._rendered_errors += layout_out

    def offset_cursor(self, offset: int) -> None:
        cursor = self.new_cursor()
        for _ in range(offset):
            cursor.previous_line(1)

    def render(self, template: Template, data: Any) -> None:
        """Erase the previously rendered text and draw ``template`` in its place."""
        self._reset_prompt(self._count_lines(self._rendered_text))
        self._rendered_text = ""
        user_out, layout_out = self._run(template, data)
        _write(self.stdio.out, user_out)
        self.append_rendered_text(layout_out)

    def render_with_cursor_offset(
        self, template: Template, data: Any, opts: Sequence[OptionAnswer], idx: int
    ) -> None:
        """Render, then move the cursor up to the selected option."""
        cursor = self.new_cursor()
        cursor.restore()
        self.render(template, data)
        cursor.save()
        offset = compute_cursor_offset(template, data, opts, idx, self.term_width_safe())
        self.offset_cursor(offset)

    def append_rendered_text(self, text: str) -> None:
        """Record printed text so the next render knows how many lines to erase."""
        self._rendered_text += text

    def _reset_prompt(self, lines: int) -> None:
        cursor = self.new_cursor()
        out = self.stdio.out
        cursor.horizontal_absolute(0)
        erase_line(out, EraseLineMode.ALL)
        for _ in range(lines):
            cursor.previous_line(1)
            erase_line(out, EraseLineMode.ALL)

    def term_width_safe(self) -> int:
        """Return the terminal width, or a very wide one when it is unknown."""
        try:
            width = os.get_terminal_size(self.stdio.out.fileno()).columns
        except (AttributeError, OSError, ValueError):
            width = 0
        return width or _FALLBACK_WIDTH

    def _count_lines(self, text: str) -> int:
        return count_lines(text, self.term_width_safe())