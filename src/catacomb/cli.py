from __future__ import annotations

import argparse
import dataclasses
import json
import logging
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config import GenerationSettings
from .dungeon.generator import generate_level
from .errors import CatacombError
from .logging_config import configure_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NO_LAYOUT = 2


def _parse_seed(raw: str):
    return int(raw) if raw.lstrip("-").isdigit() else raw


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="catacomb", description="Generate a dungeon level")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("--level", type=int, required=True, help="Level index (1-based)")
    p.add_argument("--seed", type=_parse_seed, default=None, help="Master seed (int or string)")
    p.add_argument("--settings", type=Path, default=None, help="User settings YAML file")
    p.add_argument("--format", choices=("json", "ascii"), default="json", help="Output format")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(debug=args.debug)

    try:
        settings = GenerationSettings.load(args.settings)
        if args.seed is not None:
            settings = dataclasses.replace(settings, seed=args.seed)
        level = generate_level(settings, args.level)
    except (CatacombError, ValueError) as e:
        logger.error("%s", e)
        return EXIT_ERROR

    if level is None:
        logger.error("No layout found for level %d", args.level)
        return EXIT_NO_LAYOUT

    if args.format == "ascii":
        print("\n".join(level.to_str_lines()).strip("\n"))
    else:
        print(json.dumps(level.to_dict(), indent=2))
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
