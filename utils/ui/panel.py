# utils/ui/panel.py
import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

# local
from common.models import Fact, Layout
from config.constants import (FACT_SEPARATOR, UNDERLINE_CHAR, SWATCH_SEGMENT, SWATCH_COLORS, STYLES,
                              HEADER_ROWS)
from utils.ui.terminal import TerminalWriter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PanelLine:
    column: int
    row: int
    spans: Tuple[Tuple[str, str], ...]  # (text, rich style)

    @property
    def text(self) -> str:
        return "".join(text for text, _ in self.spans)


class TextPanel:
    """
    The user@host header, one line per fact and the colour swatch, laid out
    from a Layout. build() only computes positions; render() draws them.
    """

    def __init__(self, facts: Sequence[Fact], identity: Tuple[Fact, Fact], icons: bool = True):
        self.facts = list(facts)
        self.user, self.host = identity
        self.icons = icons

    def header(self, column: int, row: int) -> List[PanelLine]:
        user, host = self.user.value, self.host.value
        underline = UNDERLINE_CHAR * (len(user) + len(host) + 1)
        return [
            PanelLine(column, row, ((user, STYLES["user"]), ("@", STYLES["at"]), (host, STYLES["host"]))),
            PanelLine(column, row + 1, ((underline, STYLES["underline"]),)),
        ]

    def prefixes(self) -> List[str]:
        """Left-hand side of every fact line, before the separator."""
        if self.icons:
            return [fact.glyph for fact in self.facts]
        # measure every label before rendering any line
        width = max((len(fact.label) for fact in self.facts), default=0)
        return [fact.label + " " * (width - len(fact.label)) for fact in self.facts]

    def fact_lines(self, column: int, row: int) -> List[PanelLine]:
        lines = []
        for offset, (prefix, fact) in enumerate(zip(self.prefixes(), self.facts)):
            lines.append(PanelLine(column, row + offset, (
                (prefix + FACT_SEPARATOR, STYLES["label"]),
                (" " + fact.value, STYLES["value"]),
            )))
        return lines

    @staticmethod
    def swatch(column: int, row: int) -> PanelLine:
        return PanelLine(column, row, tuple((SWATCH_SEGMENT, f"bold {color}") for color in SWATCH_COLORS))

    def build(self, layout: Layout) -> List[PanelLine]:
        column = layout.origin.x
        row = layout.first_row
        lines = self.header(column, row)
        row += HEADER_ROWS
        facts = self.fact_lines(column, row)
        lines.extend(facts)
        row += len(facts)
        # one blank row between the last fact and the swatch
        lines.append(self.swatch(column, row + 1))
        return lines

    def render(self, writer: TerminalWriter, layout: Layout) -> None:
        lines = self.build(layout)
        for line in lines:
            writer.write_spans(line.column, line.row, line.spans)
        writer.move_to(*layout.final_cursor)
        logger.info(f"Rendered {len(self.facts)} facts at column {layout.origin.x}, "
                    f"mode={'icons' if self.icons else 'labels'}")
