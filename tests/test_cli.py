import io

import pytest
from PIL import Image
from rich.console import Console

import zerofetch
from common.errors import TerminalSizeError
from common.models import TerminalSize


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("icons: true\n")
    return path


@pytest.fixture
def console():
    return Console(file=io.StringIO(), force_terminal=True, color_system="standard", width=80)


@pytest.fixture
def fake_system(monkeypatch, terminal):
    monkeypatch.setattr(zerofetch, "query_terminal_size", lambda: terminal)
    monkeypatch.setenv("USER", "zero")
    monkeypatch.setenv("SHELL", "/bin/zsh")
    monkeypatch.setenv("TERM", "xterm-kitty")


def test_parser_defaults():
    args = zerofetch.build_parser().parse_args([])

    assert zerofetch.cli_overrides(args) == {
        "image": None, "icons": None, "art": None, "figlet": None, "image_fallback": None, "debug": None,
    }


def test_parser_flags(tmp_path):
    args = zerofetch.build_parser().parse_args(["-t", "-i", "zero.png", "--fallback", "-d"])
    overrides = zerofetch.cli_overrides(args)

    assert overrides["icons"] is False
    assert str(overrides["image"]) == "zero.png"
    assert overrides["image_fallback"] is True
    assert overrides["debug"] is True


def test_glyph_run_places_text_beside_art(fake_system, config_file, console):
    status = zerofetch.main(["-c", str(config_file), "--text"], console=console)

    output = console.file.getvalue()
    assert status == 0
    # header at column 34, row 6 and the cursor parked on row 16
    assert "\x1b[6;34H" in output
    assert "zero" in output
    assert "Shell" in output and "zsh" in output
    assert output.endswith("\x1b[16;1H")


def test_image_run(fake_system, config_file, console, tmp_path):
    path = tmp_path / "zero.png"
    Image.new("RGB", (200, 100), (200, 30, 90)).save(path)

    status = zerofetch.main(["-c", str(config_file), "-i", str(path)], console=console)

    output = console.file.getvalue()
    assert status == 0
    # 400x200 px image covers 40 columns, text starts at column 44
    assert "\x1b[4;44H" in output
    assert output.endswith("\x1b[12;1H")


def test_broken_image_exits_with_error(fake_system, config_file, console, tmp_path, capsys):
    path = tmp_path / "broken.png"
    path.write_bytes(b"nope")

    status = zerofetch.main(["-c", str(config_file), "-i", str(path)], console=console)

    assert status == 1
    assert console.file.getvalue() == ""
    assert "Unable to decode image" in capsys.readouterr().err


def test_broken_image_with_fallback(fake_system, config_file, console, tmp_path):
    path = tmp_path / "broken.png"
    path.write_bytes(b"nope")

    status = zerofetch.main(["-c", str(config_file), "-i", str(path), "--fallback"], console=console)

    assert status == 0
    assert console.file.getvalue().endswith("\x1b[16;1H")


def test_unreadable_terminal_exits_before_drawing(monkeypatch, config_file, console):
    def no_terminal():
        raise TerminalSizeError("not a tty")

    monkeypatch.setattr(zerofetch, "query_terminal_size", no_terminal)

    assert zerofetch.main(["-c", str(config_file)], console=console) == 1
    assert console.file.getvalue() == ""


def test_image_without_pixel_size_exits(monkeypatch, config_file, console, tmp_path):
    monkeypatch.setattr(zerofetch, "query_terminal_size", lambda: TerminalSize(columns=80, rows=24))
    path = tmp_path / "zero.png"
    Image.new("RGB", (20, 10)).save(path)

    assert zerofetch.main(["-c", str(config_file), "-i", str(path)], console=console) == 1


@pytest.mark.parametrize("content", ["", "\n  \n"])
def test_empty_art_file_exits_before_drawing(fake_system, config_file, console, tmp_path, capsys, content):
    path = tmp_path / "empty.txt"
    path.write_text(content)

    status = zerofetch.main(["-c", str(config_file), "--art", str(path)], console=console)

    assert status == 1
    assert console.file.getvalue() == ""
    assert "empty block" in capsys.readouterr().err


def test_missing_stdout_descriptor_exits_with_error(monkeypatch, config_file, console, capsys):
    monkeypatch.setattr("sys.stdout", io.StringIO())

    assert zerofetch.main(["-c", str(config_file)], console=console) == 1
    assert console.file.getvalue() == ""
    assert "Unable to query terminal size" in capsys.readouterr().err
