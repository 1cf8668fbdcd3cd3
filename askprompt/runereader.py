"""Reading keys and editable lines from a terminal."""

from __future__ import annotations

import contextlib
import unicodedata
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Optional, Tuple

from .cursor import (
    COORDINATE_SYSTEM_BEGIN,
    Coord,
    Cursor,
    EraseLineMode,
    Stdio,
    erase_line,
)
from .keys import (
    IGNORE_KEY,
    KEY_ARROW_DOWN,
    KEY_ARROW_LEFT,
    KEY_ARROW_RIGHT,
    KEY_ARROW_UP,
    KEY_BACKSPACE,
    KEY_DELETE,
    KEY_END_TRANSMISSION,
    KEY_ESCAPE,
    KEY_INTERRUPT,
    SPECIAL_KEY_DELETE,
    SPECIAL_KEY_END,
    SPECIAL_KEY_HOME,
    InterruptError,
    sound_bell,
)
from .width import rune_width

try:
    import termios
except ImportError:  # pragma: no cover - non-posix platforms
    termios = None  # type: ignore[assignment]

_NORMAL_KEYPAD = "["
_APPLICATION_KEYPAD = "O"
_CHUNK_SIZE = 4096

_ESCAPE_KEYS = {
    "A": KEY_ARROW_UP,
    "B": KEY_ARROW_DOWN,
    "C": KEY_ARROW_RIGHT,
    "D": KEY_ARROW_LEFT,
    "F": SPECIAL_KEY_END,
    "H": SPECIAL_KEY_HOME,
}

OnRune = Callable[[str, str], Tuple[str, bool]]


def _binary(stream: Any) -> Any:
    """Return the byte stream underneath a text stream, or the stream itself."""
    return getattr(stream, "buffer", stream)


def _read_some(stream: Any, size: int) -> bytes:
    reader = getattr(stream, "read1", None)
    data = reader(size) if reader is not None else stream.read(size)
    if data is None:
        return b""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return bytes(data)


def _write(out: Any, text: str) -> None:
    out.write(text)
    flush = getattr(out, "flush", None)
    if flush is not None:
        flush()


@dataclass
class BufferedReader:
    """A reader that drains ``buffer`` before reading from ``in_``."""

    in_: Any
    buffer: bytearray = field(default_factory=bytearray)

    def read(self, size: int = -1) -> bytes:
        if self.buffer:
            if size < 0 or size >= len(self.buffer):
                data = bytes(self.buffer)
                self.buffer.clear()
            else:
                data = bytes(self.buffer[:size])
                del self.buffer[:size]
            return data
        return _read_some(self.in_, _CHUNK_SIZE if size < 0 else size)


class RuneReader:
    """Reads single keys and edited lines from the input of ``stdio``."""

    def __init__(self, stdio: Stdio) -> None:
        self.stdio = stdio
        self._input = _binary(stdio.in_)
        self._reader = BufferedReader(self._input)
        self._pending = bytearray()
        self._saved_term: Optional[list] = None

    @property
    def buffer(self) -> bytearray:
        """Bytes typed ahead while the cursor position was being queried."""
        return self._reader.buffer

    def _fileno(self) -> int:
        if termios is None:
            raise OSError("terminal modes are not supported on this platform")
        return self._input.fileno()

    def set_term_mode(self) -> None:
        """Turn off echo, canonical mode and signal keys on the input."""
        fd = self._fileno()
        self._saved_term = termios.tcgetattr(fd)
        new_state = termios.tcgetattr(fd)
        new_state[3] &= ~(termios.ECHO | termios.ECHONL | termios.ICANON | termios.ISIG)
        new_state[6][termios.VMIN] = 1
        new_state[6][termios.VTIME] = 0
        termios.tcsetattr(fd, termios.TCSANOW, new_state)

    def restore_term_mode(self) -> None:
        """Put the input back into the mode saved by :meth:`set_term_mode`."""
        if self._saved_term is None:
            return
        termios.tcsetattr(self._fileno(), termios.TCSANOW, self._saved_term)

    @contextlib.contextmanager
    def raw_mode(self) -> Iterator["RuneReader"]:
        """Keep the input in key-at-a-time mode for the ``with`` block.

        Inputs that are not terminals have no mode to change and are used as
        they are.
        """
        try:
            self.set_term_mode()
        except (OSError, ValueError, AttributeError) + (
            (termios.error,) if termios is not None else ()
        ):
            self._saved_term = None
        try:
            yield self
        finally:
            try:
                self.restore_term_mode()
            except (OSError, ValueError) + (
                (termios.error,) if termios is not None else ()
            ):
                pass

    def _fill(self) -> bool:
        data = self._reader.read(_CHUNK_SIZE)
        if not data:
            return False
        self._pending.extend(data)
        return True

    def _next_rune(self) -> str:
        if not self._pending and not self._fill():
            raise EOFError("end of input")
        first = self._pending[0]
        if first < 0x80:
            need = 1
        elif 0xC0 <= first < 0xE0:
            need = 2
        elif 0xE0 <= first < 0xF0:
            need = 3
        elif 0xF0 <= first < 0xF8:
            need = 4
        else:
            need = 1
        while len(self._pending) < need and self._fill():
            pass
        try:
            char = bytes(self._pending[:need]).decode("utf-8")
        except UnicodeDecodeError:
            del self._pending[:1]
            return "\ufffd"
        del self._pending[:need]
        return char

    def _discard(self, count: int) -> None:
        for _ in range(count):
            if not self._pending and not self._fill():
                return
            del self._pending[:1]

    def read_rune(self) -> str:
        """Read one key, translating escape sequences into key codes."""
        char = self._next_rune()
        if char != KEY_ESCAPE:
            return char
        if not self._pending:
            # nothing follows, so the Esc key itself was pressed
            return KEY_ESCAPE
        char = self._next_rune()
        if char not in (_NORMAL_KEYPAD, _APPLICATION_KEYPAD):
            raise ValueError(
                f"unexpected escape sequence from terminal: {KEY_ESCAPE + char!r}"
            )
        keypad = char
        char = self._next_rune()
        if char in _ESCAPE_KEYS:
            return _ESCAPE_KEYS[char]
        if char == "3" and keypad == _NORMAL_KEYPAD:
            self._discard(1)
            return SPECIAL_KEY_DELETE
        self._discard(1)
        return IGNORE_KEY

    def _print_char(self, char: str, mask: Optional[str]) -> None:
        _write(self.stdio.out, mask if mask else char)

    def read_line(self, mask: Optional[str] = None, on_rune: Optional[OnRune] = None) -> str:
        """Read an edited line; ``mask`` is echoed in place of each character."""
        return self.read_line_with_default(mask, "", on_rune)

    def read_line_with_default(
        self,
        mask: Optional[str] = None,
        default: str = "",
        on_rune: Optional[OnRune] = None,
    ) -> str:
        """Read an edited line that starts out holding ``default``.

        ``on_rune`` is called with every key and the current line; when it
        returns ``(line, True)`` that line is returned at once.
        """
        out = self.stdio.out
        cursor = Cursor(in_=self._input, out=out)
        line: list = []
        index = 0

        try:
            terminal_size = cursor.size(self.buffer)
        except (OSError, EOFError, ValueError):
            terminal_size = Coord(10000, 10000)
        try:
            current = cursor.location(self.buffer)
        except (OSError, EOFError, ValueError):
            current = Coord(COORDINATE_SYSTEM_BEGIN, COORDINATE_SYSTEM_BEGIN)

        def increment() -> None:
            if current.is_at_line_end(terminal_size):
                current.x = COORDINATE_SYSTEM_BEGIN
                current.y += 1
            else:
                current.x += 1

        def decrement() -> None:
            if current.is_at_line_begin():
                current.x = terminal_size.x
                current.y -= 1
            else:
                current.x -= 1

        def to_previous_line_end() -> None:
            cursor.previous_line(1)
            cursor.forward(terminal_size.x)

        if default:
            index = len(default)
            _write(out, default)
            line = list(default)
            for _ in default:
                increment()

        while True:
            key = self.read_rune()

            if on_rune is not None:
                new_line, stop = on_rune(key, "".join(line))
                if stop:
                    return new_line

            if key in ("\r", "\n", KEY_END_TRANSMISSION):
                while index > 0:
                    if current.is_at_line_begin():
                        erase_line(out, EraseLineMode.END)
                        to_previous_line_end()
                    else:
                        cursor.back(1)
                    decrement()
                    index -= 1
                cursor.move_next_line(current, terminal_size)
                return "".join(line)

            if key == KEY_INTERRUPT:
                _write(out, "\r\n")
                raise InterruptError()

            if key in (KEY_BACKSPACE, KEY_DELETE):
                if index > 0 and line:
                    if index == len(line):
                        cells = rune_width(line[-1])
                        line.pop()
                        if current.x == 1:
                            to_previous_line_end()
                        else:
                            cursor.back(cells)
                        erase_line(out, EraseLineMode.END)
                    else:
                        cells = rune_width(line[index - 1])
                        del line[index - 1]
                        cursor.save()
                        cursor.back(cells)
                        for char in line[index - 1:]:
                            erase_line(out, EraseLineMode.END)
                            self._print_char(char, mask)
                        if current.y < terminal_size.y:
                            cursor.next_line(1)
                            erase_line(out, EraseLineMode.END)
                        cursor.restore()
                        if current.is_at_line_begin():
                            to_previous_line_end()
                        else:
                            cursor.back(cells)
                    index -= 1
                    decrement()
                else:
                    sound_bell(out)
                continue

            if key == KEY_ARROW_LEFT:
                if index > 0:
                    if current.is_at_line_begin():
                        to_previous_line_end()
                    else:
                        cursor.back(rune_width(line[index - 1]))
                    index -= 1
                    decrement()
                else:
                    sound_bell(out)
                continue

            if key == KEY_ARROW_RIGHT:
                if index < len(line):
                    if current.is_at_line_end(terminal_size):
                        cursor.next_line(1)
                    else:
                        cursor.forward(rune_width(line[index]))
                    index += 1
                    increment()
                else:
                    sound_bell(out)
                continue

            if key == SPECIAL_KEY_HOME:
                while index > 0:
                    if current.is_at_line_begin():
                        to_previous_line_end()
                        current.y -= 1
                        current.x = terminal_size.x
                    else:
                        cells = rune_width(line[index - 1])
                        cursor.back(cells)
                        current.x -= cells
                    index -= 1
                continue

            if key == SPECIAL_KEY_END:
                while index != len(line):
                    if current.is_at_line_end(terminal_size):
                        cursor.next_line(1)
                        current.y += 1
                        current.x = COORDINATE_SYSTEM_BEGIN
                    else:
                        cells = rune_width(line[index])
                        cursor.forward(cells)
                        current.x += cells
                    index += 1
                continue

            if key == SPECIAL_KEY_DELETE:
                if index != len(line):
                    cursor.save()
                    del line[index]
                    for char in line[index:]:
                        erase_line(out, EraseLineMode.END)
                        self._print_char(char, mask)
                    if current.y < terminal_size.y:
                        cursor.next_line(1)
                        erase_line(out, EraseLineMode.END)
                    cursor.restore()
                    if not line or index == len(line):
                        erase_line(out, EraseLineMode.END)
                continue

            if unicodedata.category(key) == "Cc" or key == IGNORE_KEY:
                continue

            if index == len(line):
                line.append(key)
                index += 1
                increment()
                self._print_char(key, mask)
                continue

            line.insert(index, key)
            cursor.save()
            erase_line(out, EraseLineMode.END)
            for char in line[index:]:
                erase_line(out, EraseLineMode.END)
                self._print_char(char, mask)
                increment()
            if current.is_at_line_end(terminal_size) and current.y == terminal_size.y:
                _write(out, "\n")
                cursor.restore()
                cursor.previous_line(1)
            else:
                cursor.restore()
            try:
                location = cursor.location(self.buffer)
            except (OSError, EOFError, ValueError):
                location = None
            if location is not None:
                current.x, current.y = location.x, location.y
            if current.is_at_line_end(terminal_size):
                cursor.next_line(1)
            else:
                cursor.forward(rune_width(key))
            index += 1
            increment()