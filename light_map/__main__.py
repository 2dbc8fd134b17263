"""Interface for ``python -m light_map``."""

from __future__ import annotations

import json
import logging
import sys
from argparse import ArgumentParser
from pathlib import Path
from typing import TYPE_CHECKING

from ._version import version
from .normalize import is_pair_sequence
from .ordered_map import LightMap


if TYPE_CHECKING:
    from collections.abc import Sequence


__all__ = ["main"]

logger = logging.getLogger(__name__)


def _build_parser() -> ArgumentParser:
    parser = ArgumentParser(prog="light_map", description="Load a JSON array of [key, value] pairs and transform it.")
    _ = parser.add_argument("-v", "--version", action="version", version=version)
    _ = parser.add_argument("path", nargs="?", default="-", help="JSON pairs document (default: stdin)")
    _ = parser.add_argument("--sort-keys", action="store_true", help="order entries by key")
    _ = parser.add_argument("--sort-values", action="store_true", help="order entries by value")
    _ = parser.add_argument("--index-of", metavar="KEY", help="print the position of KEY instead of the map")
    _ = parser.add_argument("--replace", metavar="TEXT", help="print TEXT with every key substituted by its value")
    _ = parser.add_argument("--debug", action="store_true", help="enable debug logging")
    return parser


def main(args: Sequence[str] | None = None) -> None:
    """Run the light_map command line interface."""
    parser = _build_parser()
    options = parser.parse_args(args)
    if options.debug:
        logging.basicConfig(level=logging.DEBUG)

    try:
        text = sys.stdin.read() if options.path == "-" else Path(options.path).read_text(encoding="utf-8")
    except OSError as exc:
        parser.error(f"cannot read input: {exc}")
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        parser.error(f"invalid JSON input: {exc}")
    if not is_pair_sequence(document):
        parser.error("input must be a JSON array of [key, value] pairs")

    light_map = LightMap(document)
    logger.debug("loaded %d entries", len(light_map))
    if options.sort_keys:
        light_map = light_map.sort_keys()
    if options.sort_values:
        light_map = light_map.sort_values()

    if options.index_of is not None:
        print(light_map.index_of(options.index_of))
    elif options.replace is not None:
        print(light_map.replace(options.replace))
    else:
        print(light_map)


if __name__ == "__main__":
    main()
