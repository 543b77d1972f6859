from dataclasses import dataclass, field
from typing import Any, Optional, Tuple

# local
from common.errors import TerminalSizeError
from config.constants import UNIT_CELL, UNIT_PIXEL


@dataclass(frozen=True)
class Fact:
    label: str  # e.g. "OS", "Kernel"
    glyph: str  # single code point shown in icon mode
    value: str = ""  # empty when collection failed

    def __post_init__(self):
        if not self.label:
            raise ValueError("Fact label must not be empty")
        if len(self.glyph) != 1:
            raise ValueError(f"Fact glyph must be a single code point, got {self.glyph!r}")


@dataclass(frozen=True)
class TerminalSize:
    columns: int
    rows: int
    width_px: int = 0  # 0 when the terminal doesn't report pixels
    height_px: int = 0

    def measure(self, unit: str) -> Tuple[int, int]:
        """Returns (width, height) of the viewport in the given unit."""
        if unit == UNIT_CELL:
            size = (self.columns, self.rows)
        elif unit == UNIT_PIXEL:
            size = (self.width_px, self.height_px)
        else:
            raise ValueError(f"Unknown unit: {unit}")
        if size[0] <= 0 or size[1] <= 0:
            raise TerminalSizeError(f"Terminal size in {unit} unavailable: {size[0]}x{size[1]}")
        return size

    @property
    def cell_size_px(self) -> Tuple[float, float]:
        columns, rows = self.measure(UNIT_CELL)
        width_px, height_px = self.measure(UNIT_PIXEL)
        return width_px / columns, height_px / rows


@dataclass(frozen=True)
class ArtBlock:
    width: int
    height: int
    unit: str  # UNIT_PIXEL for images, UNIT_CELL for glyph art
    lines: Tuple[str, ...] = ()
    image: Optional[Any] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class Ratio:
    x: float
    y: float


@dataclass(frozen=True)
class Origin:
    x: int
    y: int


@dataclass(frozen=True)
class Layout:
    ratio: Ratio
    origin: Origin
    first_row: int

    @property
    def final_cursor(self) -> Tuple[int, int]:
        return 1, self.origin.y + 1
