import io
import os

import pytest
from rich.console import Console

from common.errors import TerminalSizeError
from common.models import TerminalSize
from config.constants import UNIT_CELL, UNIT_PIXEL
from utils.ui.terminal import TerminalWriter, query_terminal_size


@pytest.fixture
def console():
    return Console(file=io.StringIO(), force_terminal=True, color_system="standard", width=80)


def test_move_to_is_one_based(console):
    writer = TerminalWriter(console)
    writer.move_to(34, 6)

    assert console.file.getvalue() == "\x1b[6;34H"


def test_write_spans_positions_and_styles(console):
    writer = TerminalWriter(console)
    writer.write_spans(34, 6, [("zero", "bold red"), ("@", "bold cyan"), ("franxx", "bold red")])

    output = console.file.getvalue()
    assert output.startswith("\x1b[6;34H")
    assert "\x1b[1;31mzero" in output
    assert "franxx" in output
    assert not output.endswith("\n")


def test_long_lines_are_not_wrapped(console):
    writer = TerminalWriter(console)
    writer.write("x" * 200)

    assert "\n" not in console.file.getvalue()


def test_clear_homes_the_cursor(console):
    TerminalWriter(console).clear()

    assert console.file.getvalue() == "\x1b[2J\x1b[H"


def test_query_rejects_non_terminal(tmp_path):
    with open(tmp_path / "plain", "w") as f:
        with pytest.raises(TerminalSizeError):
            query_terminal_size(f.fileno())


def test_query_reads_winsize(monkeypatch):
    import struct
    from utils.ui import terminal

    monkeypatch.setattr(terminal.fcntl, "ioctl", lambda fd, op, buf: struct.pack("HHHH", 24, 80, 800, 480))

    size = query_terminal_size(1)

    assert size == TerminalSize(columns=80, rows=24, width_px=800, height_px=480)
    assert size.cell_size_px == (10.0, 20.0)


def test_query_rejects_zero_size(monkeypatch):
    import struct
    from utils.ui import terminal

    monkeypatch.setattr(terminal.fcntl, "ioctl", lambda fd, op, buf: struct.pack("HHHH", 0, 0, 0, 0))

    with pytest.raises(TerminalSizeError):
        query_terminal_size(1)


def test_measure_units():
    size = TerminalSize(columns=80, rows=24)

    assert size.measure(UNIT_CELL) == (80, 24)
    with pytest.raises(TerminalSizeError):
        size.measure(UNIT_PIXEL)
    with pytest.raises(ValueError):
        size.measure("inch")


def test_query_without_stdout_descriptor(monkeypatch):
    monkeypatch.setattr("sys.stdout", io.StringIO())

    with pytest.raises(TerminalSizeError):
        query_terminal_size()


def test_query_with_closed_stdout(monkeypatch):
    stream = io.StringIO()
    stream.close()
    monkeypatch.setattr("sys.stdout", stream)

    with pytest.raises(TerminalSizeError):
        query_terminal_size()
