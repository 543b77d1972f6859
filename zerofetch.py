#!/usr/bin/env python3
import sys
import logging
import argparse
from pathlib import Path
from typing import Optional, Sequence

from rich.console import Console

# local
from common.errors import FetchError
from common.logging_setup import configure_logging, set_debug, log_environment
from config.config_utils import load_settings
from facts.registry import fact_registry
from utils.ui.art import render_art
from utils.ui.layout import LayoutEngine
from utils.ui.panel import TextPanel
from utils.ui.terminal import TerminalWriter, query_terminal_size

# register the collectors
import facts.sources  # noqa: F401

__version__ = "0.3.0"

logger = logging.getLogger("zerofetch")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="zerofetch",
                                     description="Print system information beside a picture.")
    parser.add_argument("-i", "--image", type=Path, metavar="FILE",
                        help="draw this image instead of glyph art")
    parser.add_argument("-t", "--text", action="store_true",
                        help="show padded labels instead of icons")
    parser.add_argument("--art", type=Path, metavar="FILE",
                        help="glyph art read from a text file")
    parser.add_argument("--figlet", metavar="TEXT",
                        help="glyph art rendered from TEXT with figlet")
    parser.add_argument("--fallback", action="store_true",
                        help="draw glyph art if the image can't be decoded")
    parser.add_argument("-c", "--config", type=Path, metavar="FILE",
                        help="config file (default ~/.config/zerofetch/config.yaml)")
    parser.add_argument("-d", "--debug", action="store_true",
                        help="debug logging, including the environment")
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def cli_overrides(args: argparse.Namespace) -> dict:
    """CLI values keyed like the config file; None leaves the file value alone."""
    return {
        "image": args.image,
        "icons": False if args.text else None,
        "art": args.art,
        "figlet": args.figlet,
        "image_fallback": True if args.fallback else None,
        "debug": True if args.debug else None,
    }


def run(settings, writer: TerminalWriter, terminal=None) -> None:
    identity, facts = fact_registry.collect()
    if terminal is None:
        terminal = query_terminal_size()
    art = render_art(settings, writer, terminal)
    layout = LayoutEngine().compute(art, terminal)
    TextPanel(facts, identity, icons=settings.icons).render(writer, layout)


def main(argv: Optional[Sequence[str]] = None, console: Optional[Console] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(debug=args.debug)
    settings = load_settings(args.config, cli_overrides(args))
    set_debug(settings.debug)
    if settings.debug:
        log_environment(logger)

    writer = TerminalWriter(console)
    try:
        run(settings, writer)
    except FetchError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        Console(stderr=True).print(f"zerofetch: {e}", style="bold red", markup=False, highlight=False, soft_wrap=True)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
