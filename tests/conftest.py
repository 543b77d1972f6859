"""Shared test fixtures."""

from __future__ import annotations

import io

import pytest
from rich.console import Console

from common.models import Fact, TerminalSize
from utils.ui.terminal import TerminalWriter


class RecordingWriter(TerminalWriter):
    """TerminalWriter that records calls instead of touching a terminal."""

    def __init__(self):
        super().__init__(Console(file=io.StringIO(), force_terminal=True, color_system="truecolor", width=200))
        self.calls = []
        self.cursor = (1, 1)

    def clear(self):
        self.calls.append(("clear",))

    def move_to(self, column, row):
        self.cursor = (column, row)
        self.calls.append(("move_to", column, row))

    def write(self, text, style=None):
        self.calls.append(("write", self.cursor, str(text)))

    def writes(self):
        return [call for call in self.calls if call[0] == "write"]


@pytest.fixture(autouse=True)
def isolated_logs(tmp_path, monkeypatch):
    monkeypatch.setattr("common.logging_setup.LOG_DIR", tmp_path / "logs")


@pytest.fixture
def recorder() -> RecordingWriter:
    return RecordingWriter()


@pytest.fixture
def terminal() -> TerminalSize:
    # 80x24 cells of 10x20 px
    return TerminalSize(columns=80, rows=24, width_px=800, height_px=480)


@pytest.fixture
def identity() -> tuple[Fact, Fact]:
    return Fact("User", "\uf17c", "zero"), Fact("Hostname", "\uf17c", "franxx")


@pytest.fixture
def facts() -> list[Fact]:
    return [
        Fact("OS", "\uf17c", "Linux"),
        Fact("Kernel", "\ue266", "6.1.0"),
        Fact("Uptime", "\uf017", "2h 5m"),
        Fact("Shell", "\ue795", "zsh"),
        Fact("WM", "\uf878", ""),
        Fact("Term", "\uf44f", "kitty"),
    ]
