import io
import os
import termios

import pytest

from askprompt.cursor import Stdio
from askprompt.keys import (
    IGNORE_KEY,
    KEY_ARROW_DOWN,
    KEY_ARROW_LEFT,
    KEY_ARROW_RIGHT,
    KEY_ARROW_UP,
    KEY_ESCAPE,
    SPECIAL_KEY_DELETE,
    SPECIAL_KEY_END,
    SPECIAL_KEY_HOME,
    InterruptError,
)
from askprompt.runereader import BufferedReader, RuneReader

# replies to the size query and the location query made at the start of a line
DSR = b"\x1b[24;80R\x1b[1;1R"


def make_reader(data: bytes):
    out = io.StringIO()
    reader = RuneReader(Stdio(in_=io.BytesIO(data), out=out, err=io.StringIO()))
    return reader, out


def read_line(data: bytes, mask=None, on_rune=None):
    reader, out = make_reader(DSR + data)
    return reader.read_line(mask, on_rune), out.getvalue()


def test_buffered_reader_drains_buffer_first():
    reader = BufferedReader(io.BytesIO(b"rest"), bytearray(b"ahead"))
    assert reader.read(3) == b"ahe"
    assert reader.read(10) == b"ad"
    assert reader.read(10) == b"rest"
    assert reader.read(10) == b""


def test_read_rune_plain_and_multibyte():
    reader, _ = make_reader("a错".encode("utf-8"))
    assert reader.read_rune() == "a"
    assert reader.read_rune() == "错"
    with pytest.raises(EOFError):
        reader.read_rune()


@pytest.mark.parametrize(
    "data, key",
    [
        (b"\x1b[A", KEY_ARROW_UP),
        (b"\x1b[B", KEY_ARROW_DOWN),
        (b"\x1b[C", KEY_ARROW_RIGHT),
        (b"\x1b[D", KEY_ARROW_LEFT),
        (b"\x1bOA", KEY_ARROW_UP),
        (b"\x1bOB", KEY_ARROW_DOWN),
        (b"\x1b[F", SPECIAL_KEY_END),
        (b"\x1b[H", SPECIAL_KEY_HOME),
    ],
)
def test_read_rune_escape_sequences(data, key):
    reader, _ = make_reader(data)
    assert reader.read_rune() == key


def test_forward_delete_discards_tilde():
    reader, _ = make_reader(b"\x1b[3~x")
    assert reader.read_rune() == SPECIAL_KEY_DELETE
    assert reader.read_rune() == "x"


def test_unknown_sequence_is_ignored():
    reader, _ = make_reader(b"\x1b[5~x")
    assert reader.read_rune() == IGNORE_KEY
    assert reader.read_rune() == "x"


def test_application_keypad_three_is_ignored():
    reader, _ = make_reader(b"\x1bO3~y")
    assert reader.read_rune() == IGNORE_KEY
    assert reader.read_rune() == "y"


def test_lone_escape():
    reader, _ = make_reader(b"\x1b")
    assert reader.read_rune() == KEY_ESCAPE


def test_unexpected_escape_sequence():
    reader, _ = make_reader(b"\x1bx")
    with pytest.raises(ValueError, match="unexpected escape sequence"):
        reader.read_rune()


def test_read_line_simple():
    line, out = read_line(b"hello\r")
    assert line == "hello"
    assert "hello" in out
    assert "\x1b[6n" in out


def test_read_line_newline_and_end_of_transmission():
    assert read_line(b"abc\n")[0] == "abc"
    assert read_line(b"abc\x04")[0] == "abc"


def test_read_line_mask_hides_input():
    line, out = read_line(b"secret\r", mask="*")
    assert line == "secret"
    assert "secret" not in out
    assert "*" * len("secret") in out


def test_backspace_and_delete_at_end():
    assert read_line(b"helloo\b\r")[0] == "hello"
    assert read_line(b"helloo\x7f\r")[0] == "hello"


def test_backspace_at_start_rings_bell():
    line, out = read_line(b"\b\r")
    assert line == ""
    assert "\a" in out


def test_backspace_in_middle():
    assert read_line(b"abc\x1b[D\b\r")[0] == "ac"


def test_forward_delete_in_middle():
    assert read_line(b"abc\x1b[D\x1b[D\x1b[3~\r")[0] == "ac"


def test_home_then_forward_delete():
    assert read_line(b"abc\x1b[H\x1b[3~\r")[0] == "bc"


def test_home_then_end_then_type():
    assert read_line(b"abc\x1b[H\x1b[Fd\r")[0] == "abcd"


def test_insert_in_middle():
    assert read_line(b"ac\x1b[Db\r")[0] == "abc"


def test_arrows_ring_bell_at_edges():
    line, out = read_line(b"\x1b[D\x1b[C\r")
    assert line == ""
    assert out.count("\a") == 2


def test_control_characters_are_ignored():
    assert read_line(b"a\x05b\r")[0] == "ab"


def test_interrupt_raises():
    reader, out = make_reader(DSR + b"ab\x03")
    with pytest.raises(InterruptError):
        reader.read_line()
    assert out.getvalue().endswith("\r\n")


def test_eof_raises():
    reader, _ = make_reader(DSR + b"ab")
    with pytest.raises(EOFError):
        reader.read_line()


def test_read_line_with_default():
    reader, out = make_reader(DSR + b"\b\r")
    assert reader.read_line_with_default(None, "abc", None) == "ab"
    assert "abc" in out.getvalue()


def test_on_rune_can_stop_reading():
    seen = []

    def on_rune(key, line):
        seen.append(line)
        if key == "q":
            return "stopped", True
        return line, False

    line, _ = read_line(b"abq\r", on_rune=on_rune)
    assert line == "stopped"
    assert seen == ["", "a", "ab"]


def test_typed_ahead_input_is_kept():
    reader, _ = make_reader(b"ab" + DSR + b"\r")
    assert reader.read_line() == "ab"


def test_set_term_mode_needs_a_terminal():
    reader, _ = make_reader(b"")
    with pytest.raises(OSError):
        reader.set_term_mode()


def test_raw_mode_tolerates_non_terminal_input():
    reader, _ = make_reader(b"z")
    with reader.raw_mode() as active:
        assert active.read_rune() == "z"


def test_raw_mode_toggles_echo_on_a_pty():
    master, slave = os.openpty()
    try:
        with os.fdopen(slave, "rb", buffering=0, closefd=False) as tty_in:
            reader = RuneReader(Stdio(in_=tty_in, out=io.StringIO()))
            before = termios.tcgetattr(slave)
            with reader.raw_mode():
                during = termios.tcgetattr(slave)
                assert during[3] & termios.ECHO == 0
                assert during[3] & termios.ICANON == 0
            after = termios.tcgetattr(slave)
            assert after[3] == before[3]
    finally:
        os.close(master)
        os.close(slave)