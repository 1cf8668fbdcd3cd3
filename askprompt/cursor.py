"""ANSI cursor control, line erasing and terminal I/O handles."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import Any, Optional

COORDINATE_SYSTEM_BEGIN = 1

_DSR_PATTERN = re.compile(rb"\x1b\[(\d+);(\d+)R$")


@dataclass
class Coord:
    """A position in the terminal, 1-based."""

    x: int
    y: int

    def is_at_line_end(self, size: "Coord") -> bool:
        return self.x == size.x

    def is_at_line_begin(self) -> bool:
        return self.x == COORDINATE_SYSTEM_BEGIN


class EraseLineMode(enum.IntEnum):
    END = 0
    START = 1
    ALL = 2


def _write(out, text: str) -> None:
    out.write(text)
    flush = getattr(out, "flush", None)
    if flush is not None:
        flush()


def erase_line(out, mode: EraseLineMode) -> None:
    """Erase part or all of the current line."""
    _write(out, f"\x1b[{int(mode)}K")


@dataclass
class Stdio:
    """The input, output and error streams a prompt talks to."""

    in_: Any = None
    out: Any = None
    err: Any = None


@dataclass
class Cursor:
    """Moves the terminal cursor by writing ANSI escape sequences to ``out``.

    ``in_`` is a binary stream used to read cursor position reports.
    """

    in_: Any = None
    out: Any = None

    def up(self, n: int) -> None:
        _write(self.out, f"\x1b[{n}A")

    def down(self, n: int) -> None:
        _write(self.out, f"\x1b[{n}B")

    def forward(self, n: int) -> None:
        _write(self.out, f"\x1b[{n}C")

    def back(self, n: int) -> None:
        _write(self.out, f"\x1b[{n}D")

    def next_line(self, n: int) -> None:
        """Move to the beginning of the next line."""
        self.down(1)
        self.horizontal_absolute(0)

    def previous_line(self, n: int) -> None:
        """Move to the beginning of the previous line."""
        self.up(1)
        self.horizontal_absolute(0)

    def horizontal_absolute(self, x: int) -> None:
        _write(self.out, f"\x1b[{x}G")

    def show(self) -> None:
        _write(self.out, "\x1b[?25h")

    def hide(self) -> None:
        _write(self.out, "\x1b[?25l")

    def move(self, x: int, y: int) -> None:
        _write(self.out, f"\x1b[{x};{y}f")

    def save(self) -> None:
        _write(self.out, "\x1b7")

    def restore(self) -> None:
        _write(self.out, "\x1b8")

    def move_next_line(self, cur: Coord, terminal_size: Coord) -> None:
        """Move to the next line, scrolling when already on the last one."""
        if cur.y == terminal_size.y:
            _write(self.out, "\n")
        self.next_line(1)

    def _read_through_r(self) -> bytes:
        chunk = bytearray()
        while True:
            data = self.in_.read(1)
            if not data:
                raise EOFError("end of input while reading cursor position")
            if isinstance(data, str):
                data = data.encode("utf-8")
            chunk.extend(data)
            if data.endswith(b"R"):
                return bytes(chunk)

    def location(self, buf: Optional[bytearray]) -> Coord:
        """Ask the terminal for the cursor position.

        Input read while waiting for the report that is not part of it is
        appended to ``buf`` so that it is not lost.
        """
        _write(self.out, "\x1b[6n")
        while True:
            text = self._read_through_r()
            match = _DSR_PATTERN.search(text)
            if match is None:
                if buf is not None:
                    buf.extend(text)
                continue
            if buf is not None:
                buf.extend(text[: match.start()])
            row, col = int(match.group(1)), int(match.group(2))
            return Coord(col, row)

    def size(self, buf: Optional[bytearray]) -> Coord:
        """Return the terminal size by moving to the bottom-right corner."""
        self.hide()
        try:
            self.save()
            try:
                self.move(999, 999)
                return self.location(buf)
            finally:
                self.restore()
        finally:
            self.show()