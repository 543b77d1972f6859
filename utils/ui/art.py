# utils/ui/art.py
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import pyfiglet
from PIL import Image

# local
from common.errors import ArtSourceError, ImageDecodeError, PreconditionError
from common.models import ArtBlock, TerminalSize
from config.config_utils import Settings
from config.constants import (UNIT_CELL, UNIT_PIXEL, IMAGE_WIDTH_DIVISOR, IMAGE_HEIGHT_COMPRESSION,
                              DEFAULT_FIGLET_FONT)
from utils.ui.terminal import TerminalWriter

logger = logging.getLogger(__name__)

UPPER_HALF_BLOCK = "▀"
LOWER_HALF_BLOCK = "▄"
ALPHA_THRESHOLD = 128

BUILTIN_ART = (
    "⣿⣿⣿⣿⣯⣿⣿⠄⢠⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⡟⠈⣿⣿⣿⣿⣿⣿⣆⠄",
    "⢻⣿⣿⣿⣾⣿⢿⣢⣞⣿⣿⣿⣿⣷⣶⣿⣯⣟⣿⢿⡇⢃⢻⣿⣿⣿⣿⣿⢿⡄",
    "⠄⢿⣿⣯⣏⣿⣿⣿⡟⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣷⣧⣾⢿⣮⣿⣿⣿⣿⣾⣷",
    "⠄⣈⣽⢾⣿⣿⣿⣟⣄⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣷⣝⣯⢿⣿⣿⣿⣿",
    "⣿⠟⣫⢸⣿⢿⣿⣾⣿⢿⣿⣿⢻⣿⣿⣿⢿⣿⣿⣿⢸⣿⣼⣿⣿⣿⣿⣿⣿⣿",
    "⡟⢸⣟⢸⣿⠸⣷⣝⢻⠘⣿⣿⢸⢿⣿⣿⠄⣿⣿⣿⡆⢿⣿⣼⣿⣿⣿⣿⢹⣿",
    "⡇⣿⡿⣿⣿⢟⠛⠛⠿⡢⢻⣿⣾⣞⣿⡏⠖⢸⣿⢣⣷⡸⣇⣿⣿⣿⢼⡿⣿⣿",
    "⣡⢿⡷⣿⣿⣾⣿⣷⣶⣮⣄⣿⣏⣸⣻⣃⠭⠄⠛⠙⠛⠳⠋⣿⣿⣇⠙⣿⢸⣿",
    "⠫⣿⣧⣿⣿⣿⣿⣿⣿⣿⣿⣿⠻⣿⣾⣿⣿⣿⣿⣿⣿⣿⣷⣿⣿⣹⢷⣿⡼⠋",
    "⠄⠸⣿⣿⣿⣿⣿⣿⣿⣿⣿⣷⣦⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⣿⡟⣿⣿⣿⠄⠄",
    "⠄⠄⢻⢹⣿⠸⣿⣿⣿⣿⣿⣷⣿⣿⣿⣿⣿⣿⣿⣿⣿⡿⣼⣿⣿⣿⣿⡟⠄⠄",
    "⠄⠄⠈⢸⣿⠄⠙⢿⣿⣿⣹⣿⣿⣿⣿⣟⡃⣽⣿⣿⡟⠁⣿⣿⢻⣿⣿⢿⠄⠄",
    "⠄⠄⠄⠘⣿⡄⠄⠄⠙⢿⣿⣿⣾⣿⣷⣿⣿⣿⠟⠁⠄⠄⣿⣿⣾⣿⡟⣿⠄⠄",
    "⠄⠄⠄⠄⢻⡇⠸⣆⠄⠄⠈⠻⣿⡿⠿⠛⠉⠄⠄⠄⠄⢸⣿⣇⣿⣿⢿⣿⠄⠄",
)


def round_half_up(value: float) -> int:
    return int(value + 0.5)


def normalize_lines(lines: Sequence[str]) -> Tuple[str, ...]:
    """Strips trailing whitespace from every line and drops trailing blank lines."""
    cleaned = [line.rstrip() for line in lines]
    while cleaned and not cleaned[-1]:
        cleaned.pop()
    return tuple(cleaned)


def fit_within(size: Tuple[int, int], bounds: Tuple[int, int]) -> Tuple[int, int]:
    """
    Largest size with the aspect ratio of `size` that fits inside `bounds`.
    Scales up as well as down; each side is at least 1.
    """
    width, height = size
    max_width, max_height = bounds
    if width <= 0 or height <= 0:
        raise ImageDecodeError(f"Image has an empty size: {width}x{height}")
    scale = min(max_width / width, max_height / height)
    return max(round_half_up(width * scale), 1), max(round_half_up(height * scale), 1)


class ArtSource(ABC):
    """Produces an ArtBlock and draws it in the top left corner of the terminal."""

    @abstractmethod
    def produce(self, terminal: TerminalSize) -> ArtBlock:
        """Builds the block and measures it in the unit it will be compared in."""

    @abstractmethod
    def draw(self, block: ArtBlock, writer: TerminalWriter, terminal: TerminalSize) -> None:
        pass

    def render(self, writer: TerminalWriter, terminal: TerminalSize) -> ArtBlock:
        block = self.produce(terminal)
        if block.width <= 0 or block.height <= 0:
            raise PreconditionError(f"{self.__class__.__name__} produced an empty block: {block.width}x{block.height}")
        writer.clear()
        self.draw(block, writer, terminal)
        logger.info(f"{self.__class__.__name__} drawn: {block.width}x{block.height} {block.unit}")
        return block


class GlyphArt(ArtSource):
    def __init__(self, lines: Sequence[str], name: str = "builtin"):
        self.lines = normalize_lines(lines)
        self.name = name

    @classmethod
    def builtin(cls) -> "GlyphArt":
        return cls(BUILTIN_ART)

    @classmethod
    def from_file(cls, path: Path) -> "GlyphArt":
        try:
            text = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ArtSourceError(f"Unable to read art file {path}: {e}") from e
        return cls(text.splitlines(), name=str(path))

    @classmethod
    def from_figlet(cls, text: str, font: str = DEFAULT_FIGLET_FONT, width: int = 80) -> "GlyphArt":
        try:
            banner = pyfiglet.figlet_format(text, font=font, width=width)
        except pyfiglet.FontNotFound as e:
            raise ArtSourceError(f"Unknown figlet font {font!r}") from e
        return cls(banner.splitlines(), name=f"figlet:{font}")

    def produce(self, terminal: TerminalSize) -> ArtBlock:
        width = max((len(line) for line in self.lines), default=0)
        return ArtBlock(width=width, height=len(self.lines), unit=UNIT_CELL, lines=self.lines)

    def draw(self, block: ArtBlock, writer: TerminalWriter, terminal: TerminalSize) -> None:
        for row, line in enumerate(block.lines, start=1):
            writer.move_to(1, row)
            writer.write(line)


class ImageArt(ArtSource):
    def __init__(self, path: Path):
        self.path = Path(path)

    def _open(self) -> Image.Image:
        try:
            with Image.open(self.path) as img:
                img.load()
                return img.convert("RGBA")
        except (OSError, ValueError, Image.DecompressionBombError) as e:
            raise ImageDecodeError(f"Unable to decode image {self.path}: {e}") from e

    @staticmethod
    def target_size(image_size: Tuple[int, int], terminal: TerminalSize) -> Tuple[int, int]:
        width_px, height_px = terminal.measure(UNIT_PIXEL)
        bounds = (width_px // IMAGE_WIDTH_DIVISOR, int(height_px / IMAGE_HEIGHT_COMPRESSION))
        return fit_within(image_size, bounds)

    def produce(self, terminal: TerminalSize) -> ArtBlock:
        # pixel size first, nothing is decoded when the terminal can't report it
        terminal.measure(UNIT_PIXEL)
        source = self._open()
        size = self.target_size(source.size, terminal)
        resized = source.resize(size, Image.Resampling.LANCZOS)
        logger.debug(f"Resized {self.path} from {source.size} to {resized.size}")
        return ArtBlock(width=resized.width, height=resized.height, unit=UNIT_PIXEL, image=resized)

    @staticmethod
    def footprint(block: ArtBlock, terminal: TerminalSize) -> Tuple[int, int]:
        """Cells (columns, rows) covered by a pixel-sized block."""
        cell_width, cell_height = terminal.cell_size_px
        columns = min(max(round_half_up(block.width / cell_width), 1), terminal.columns)
        rows = min(max(round_half_up(block.height / cell_height), 1), terminal.rows)
        return columns, rows

    def draw(self, block: ArtBlock, writer: TerminalWriter, terminal: TerminalSize) -> None:
        columns, rows = self.footprint(block, terminal)
        # two image rows per terminal row
        cells = block.image.resize((columns, rows * 2), Image.Resampling.LANCZOS)
        for row in range(rows):
            writer.write_spans(1, row + 1, half_block_row(cells, row))


def _rgb(pixel) -> str:
    return f"rgb({pixel[0]},{pixel[1]},{pixel[2]})"


def half_block(top, bottom) -> Tuple[str, str]:
    """(character, style) showing two RGBA pixels stacked in one cell."""
    top_visible = top[3] >= ALPHA_THRESHOLD
    bottom_visible = bottom[3] >= ALPHA_THRESHOLD
    if top_visible and bottom_visible:
        return UPPER_HALF_BLOCK, f"{_rgb(top)} on {_rgb(bottom)}"
    if top_visible:
        return UPPER_HALF_BLOCK, _rgb(top)
    if bottom_visible:
        return LOWER_HALF_BLOCK, _rgb(bottom)
    return " ", ""


def half_block_row(cells: Image.Image, row: int) -> List[Tuple[str, str]]:
    pixels = cells.load()
    return [half_block(pixels[x, row * 2], pixels[x, row * 2 + 1]) for x in range(cells.width)]


def glyph_source(settings: Settings) -> GlyphArt:
    if settings.art is not None:
        return GlyphArt.from_file(settings.art)
    if settings.figlet:
        return GlyphArt.from_figlet(settings.figlet, font=settings.figlet_font)
    return GlyphArt.builtin()


def select_art_source(settings: Settings) -> ArtSource:
    """Image art when an image is configured, glyph art otherwise."""
    if settings.image is not None:
        return ImageArt(settings.image)
    return glyph_source(settings)


def render_art(settings: Settings, writer: TerminalWriter, terminal: TerminalSize,
               source: Optional[ArtSource] = None) -> ArtBlock:
    """
    Draws the configured art and returns its block.

    An ImageDecodeError aborts the run unless image_fallback is set, in
    which case the glyph art is drawn instead.
    """
    source = source or select_art_source(settings)
    try:
        return source.render(writer, terminal)
    except ImageDecodeError as e:
        if not settings.image_fallback:
            raise
        logger.warning(f"{e}; falling back to glyph art")
        return glyph_source(settings).render(writer, terminal)
