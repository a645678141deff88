"""
SVG Cleaner — normalizes UML diagram SVG exports for word processors.

Usage:
  svgcleaner                          # clean every .svg in the working directory
  svgcleaner path/to/svgs             # clean a folder
  svgcleaner path/to/svgs -f Georgia  # retarget Arial to Georgia instead of Cambria
  svgcleaner --no-font-change         # keep fonts as exported
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from svgcleaner.config import Settings, settings
from svgcleaner.engine.config import CleanerConfig
from svgcleaner.runner import process_directory


def build_parser(current: Settings | None = None) -> argparse.ArgumentParser:
    current = current or settings
    parser = argparse.ArgumentParser(
        prog="svgcleaner",
        description="Fold shared transforms, drop invisible overlays and retarget fonts "
        "in UML diagram SVG exports so they embed cleanly in documents.",
        add_help=False,
    )
    parser.add_argument(
        "directory",
        nargs="?",
        help="Folder containing .svg files (default: current directory)",
    )
    parser.add_argument(
        "-f", "--font",
        metavar="NAME",
        help=f"Replacement font for {current.source_font} (default: {current.target_font})",
    )
    parser.add_argument(
        "--no-font-change",
        action="store_true",
        help="Leave font-family attributes untouched",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("-h", "--help", "-?", action="help", help="Show this help and exit")
    return parser


def configure_logging(verbose: bool = False, log_level: str = "info") -> None:
    level = logging.DEBUG if verbose else getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    # Settings are rebuilt here so a .env in the working directory applies
    load_dotenv(find_dotenv(usecwd=True))
    current = Settings()

    args = build_parser(current).parse_args(argv)
    configure_logging(args.verbose, current.log_level)

    directory = Path(args.directory) if args.directory else Path.cwd()
    if not directory.is_dir():
        print(f"Directory not found: {directory}")
        return 0

    config = CleanerConfig.from_settings(
        current,
        target_font=args.font,
        change_fonts=not args.no_font_change,
    )
    process_directory(directory, config, extension=current.file_extension)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
