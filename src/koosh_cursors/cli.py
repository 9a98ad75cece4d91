#!/usr/bin/env python3

import argparse
import logging
import sys
from typing import List, Optional

from .add_links import add_missing_links
from .config import load_config
from .create_animated import create_animated_theme
from .create_hyprcursor import create_hyprcursor_theme
from .errors import CursorError
from .rename_cursors import rename_cursors

logger = logging.getLogger(__name__)

__version__ = "0.1.0"

LOG_LEVELS = ["error", "warn", "info", "debug"]

_console_handler = None


def positive_size(value: str) -> int:
    size = int(value)
    if size <= 0:
        raise argparse.ArgumentTypeError(f"invalid cursor size: {value}")
    return size


def config_logging(loglevel: int = logging.INFO):
    global _console_handler

    root = logging.getLogger()
    if _console_handler is not None:
        root.removeHandler(_console_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(loglevel)
    console_handler.setFormatter(
        logging.Formatter(fmt="{asctime}.{msecs:03.0f} {levelname[0]}: {message}",
                          style="{",
                          datefmt="%H%M%S"))

    root.setLevel(loglevel)
    root.addHandler(console_handler)
    _console_handler = console_handler


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="koosh-cursors",
        description="Manage Koosh cursor themes: symlinks, multi-size animated cursors and hyprcursor bundles",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-c", "--config", default=None,
                        help="TOML config file (default: $XDG_CONFIG_HOME/koosh-cursors/config.toml)")
    parser.add_argument("--icons-dir", default=None,
                        help="Directory themes are installed to (default: ~/.icons)")
    parser.add_argument("--log-level", choices=LOG_LEVELS, default="info", help="Change log level")

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    add_links = subparsers.add_parser(
        "add-links", help="Add missing symlinks to a cursor theme and install it")
    add_links.add_argument("-t", "--theme-name", default="Koosh-Complete",
                           help="Name of the theme to create (default: Koosh-Complete)")
    add_links.add_argument("-s", "--source-dir", default=None,
                           help="Source directory containing cursor files")
    add_links.add_argument("-o", "--output-dir", default=None,
                           help="Directory to create the theme in (default: parent of the current directory)")

    animated = subparsers.add_parser(
        "create-animated", help="Create animated cursor theme with multi-size support")
    animated.add_argument("-i", "--input-theme", default="Koosh-X11",
                          help="Input theme directory (default: Koosh-X11)")
    animated.add_argument("-o", "--output-theme", default="Koosh-Animated",
                          help="Output theme name (default: Koosh-Animated)")
    animated.add_argument("-x", "--sizes", nargs="+", type=positive_size, default=None,
                          help="Cursor sizes to generate (default: 24 32 48 64 72 96)")

    hypr = subparsers.add_parser(
        "create-hyprcursor", help="Create hyprcursor theme from an existing animated theme")
    hypr.add_argument("-s", "--source-theme", default="Koosh-Animated",
                      help="Source theme name (default: Koosh-Animated)")
    hypr.add_argument("-d", "--dest-theme", default="Koosh-Hyprcursor2",
                      help="Destination theme name (default: Koosh-Hyprcursor2)")

    rename = subparsers.add_parser(
        "rename-cursors", help="Rename cursor files from Windows names to X11 names")
    rename.add_argument("-i", "--input-dir", default="output",
                        help="Input directory containing Windows-named cursor files (default: output)")
    rename.add_argument("-o", "--output-theme", default="Koosh-X11",
                        help="Output theme name (default: Koosh-X11)")
    rename.add_argument("--shadow", action="store_true",
                        help="Add a drop shadow when converting .cur/.ani files")

    return parser


def run(args: argparse.Namespace):
    config = load_config(args.config)
    if args.icons_dir:
        config.icons_dir = args.icons_dir

    if args.command == "add-links":
        add_missing_links(args.theme_name, args.source_dir, config, output_dir=args.output_dir)
    elif args.command == "create-animated":
        if args.sizes:
            config.sizes = args.sizes
        create_animated_theme(args.input_theme, args.output_theme, config)
    elif args.command == "create-hyprcursor":
        create_hyprcursor_theme(args.source_theme, args.dest_theme, config)
    elif args.command == "rename-cursors":
        rename_cursors(args.input_dir, args.output_theme, config, add_shadow=args.shadow)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    level = "WARNING" if args.log_level == "warn" else args.log_level.upper()
    config_logging(logging.getLevelName(level))

    try:
        run(args)
    except CursorError as e:
        logger.error(str(e))
        return 1
    except KeyboardInterrupt:
        print("\nProcess interrupted by user.")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
