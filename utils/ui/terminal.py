# utils/ui/terminal.py
import sys
import fcntl
import struct
import logging
import termios
from typing import Iterable, Optional, Tuple

from rich.console import Console
from rich.control import Control
from rich.text import Text

# local
from common.errors import TerminalSizeError
from common.models import TerminalSize

logger = logging.getLogger(__name__)


def query_terminal_size(fd: Optional[int] = None) -> TerminalSize:
    """
    Reads the character and pixel size of the terminal on `fd` (stdout by
    default) with the TIOCGWINSZ ioctl.

    Raises TerminalSizeError when the descriptor isn't a terminal or it
    reports zero rows/columns. Pixel size may legitimately be 0; that only
    matters for image art and is checked there.
    """
    try:
        if fd is None:
            fd = sys.stdout.fileno()
        packed = fcntl.ioctl(fd, termios.TIOCGWINSZ, struct.pack("HHHH", 0, 0, 0, 0))
    except (OSError, ValueError) as e:
        raise TerminalSizeError(f"Unable to query terminal size: {e}") from e
    rows, columns, width_px, height_px = struct.unpack("HHHH", packed)
    logger.debug(f"Terminal size: {columns}x{rows} cells, {width_px}x{height_px} px")
    if rows == 0 or columns == 0:
        raise TerminalSizeError(f"Terminal reported a zero size: {columns}x{rows}")
    return TerminalSize(columns=columns, rows=rows, width_px=width_px, height_px=height_px)


class TerminalWriter:
    """Cursor-addressed writes to the terminal. Coordinates are 1-based."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(highlight=False)

    def clear(self) -> None:
        self.console.control(Control.clear(), Control.home())

    def move_to(self, column: int, row: int) -> None:
        self.console.control(Control.move_to(max(column, 1) - 1, max(row, 1) - 1))

    def write(self, text, style: Optional[str] = None) -> None:
        if not isinstance(text, Text):
            text = Text(text, style=style or "")
        self.console.print(text, end="", soft_wrap=True)

    def write_spans(self, column: int, row: int, spans: Iterable[Tuple[str, str]]) -> None:
        """Moves to (column, row) and writes each (text, style) span in turn."""
        self.move_to(column, row)
        line = Text()
        for text, style in spans:
            line.append(text, style=style)
        self.write(line)
