# utils/ui/layout.py
import math
import logging

# local
from common.errors import PreconditionError
from common.models import ArtBlock, Layout, Origin, Ratio, TerminalSize
from config.constants import UNIT_CELL, TEXT_GUTTER_X, TEXT_GUTTER_Y, VERTICAL_CENTER_DIVISOR

logger = logging.getLogger(__name__)

# absorbs float noise so columns / (columns / width) floors to width
FLOOR_EPSILON = 1e-9


def _floor(value: float) -> int:
    return math.floor(value + FLOOR_EPSILON)


class LayoutEngine:
    """
    Places the text panel beside the art.

    The ratio compares the art with the terminal in the art's own unit
    (pixels for images, cells for glyph art). It is unitless, so the origin
    is derived from it on the terminal's character grid. Every method is a
    pure function of its arguments.
    """

    def ratio(self, art: ArtBlock, terminal: TerminalSize) -> Ratio:
        if art.width <= 0 or art.height <= 0:
            raise PreconditionError(f"Art block has a zero dimension: {art.width}x{art.height} {art.unit}")
        term_width, term_height = terminal.measure(art.unit)
        ratio = Ratio(x=term_width / art.width, y=term_height / art.height)
        if not all(math.isfinite(v) and v > 0 for v in (ratio.x, ratio.y)):
            raise PreconditionError(f"Unusable layout ratio: {ratio}")
        return ratio

    def origin(self, ratio: Ratio, terminal: TerminalSize) -> Origin:
        columns, rows = terminal.measure(UNIT_CELL)
        return Origin(x=_floor(columns / ratio.x) + TEXT_GUTTER_X,
                      y=_floor(rows / ratio.y) + TEXT_GUTTER_Y)

    def first_row(self, ratio: Ratio, terminal: TerminalSize) -> int:
        _, rows = terminal.measure(UNIT_CELL)
        return max(_floor(rows / ratio.y / VERTICAL_CENTER_DIVISOR), 1)

    def compute(self, art: ArtBlock, terminal: TerminalSize) -> Layout:
        ratio = self.ratio(art, terminal)
        layout = Layout(ratio=ratio, origin=self.origin(ratio, terminal), first_row=self.first_row(ratio, terminal))
        logger.debug(f"Layout for {art.width}x{art.height} {art.unit} on "
                     f"{terminal.columns}x{terminal.rows}: {layout}")
        return layout
