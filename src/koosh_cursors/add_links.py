import logging
import os
from pathlib import Path
from typing import Optional

from .config import ToolConfig
from .cursor_mapping import CURSOR_SYMLINKS
from .errors import CursorError, ThemeNotFound
from .external import update_icon_cache
from .fileutils import copy_file, link_aliases, set_permissions_recursive
from .theme import CursorTheme, get_icons_dir, install_theme
from .theme_files import create_theme_files

logger = logging.getLogger(__name__)

THEME_COMMENT = "Koosh cursor theme with all necessary symlinks"
SOURCE_THEME = "Koosh"

HYPRLAND_HINT = """\
To use with Hyprland, add to your config:
env = XCURSOR_THEME,{theme_name}
env = XCURSOR_SIZE,24

cursor {{
    size = 24
}}

Note: Since your cursor files don't support multiple sizes yet,
it's best to use size 24 which is their native size."""


def find_cursor_source(source_dir: Optional[str], config: ToolConfig) -> Path:
    """Locate the directory holding the cursors to copy.

    Tries, in order: ``source_dir``, ./cursors, ./Koosh/cursors and the
    Koosh theme installed in the user's icons directory.
    """
    candidates = []
    if source_dir:
        candidates.append(Path(source_dir))
    cwd = Path(os.getcwd())
    candidates.extend([
        cwd / "cursors",
        cwd / SOURCE_THEME / "cursors",
        get_icons_dir(config) / SOURCE_THEME / "cursors",
    ])

    for candidate in candidates:
        if candidate.is_dir():
            logger.debug(f"Using cursor source {candidate}")
            return candidate
        logger.debug(f"No cursors at {candidate}")

    logger.error("Could not find Koosh cursor theme. Run this command from the Koosh "
                 "directory or pass --source-dir.")
    raise ThemeNotFound(candidates[0])


def copy_cursor_files(source: Path, dest: Path) -> int:
    """Copy the regular files of ``source`` (symlinks followed) into ``dest``."""
    logger.info(f"Copying cursor files from {source} to {dest}")
    count = 0
    for path in sorted(source.iterdir()):
        if path.is_file():
            copy_file(path, dest / path.name)
            count += 1
    logger.info(f"Copied {count} cursor files")
    return count


def add_missing_links(theme_name: str, source_dir: Optional[str], config: ToolConfig,
                      output_dir: Optional[str] = None) -> CursorTheme:
    logger.info("Adding missing links to cursor theme...")

    root_dir = Path(output_dir) if output_dir else Path(os.getcwd()).parent
    theme = CursorTheme(theme_name, root_dir / theme_name)

    source = find_cursor_source(source_dir, config)
    if source.resolve() == theme.cursors_dir.resolve():
        raise CursorError(f"Source {source} is the theme being recreated")
    theme.recreate()
    copy_cursor_files(source, theme.cursors_dir)

    logger.info("Creating cursor symlinks...")
    created = link_aliases(theme.cursors_dir, CURSOR_SYMLINKS)
    logger.info(f"Created {len(created)} symlinks")

    create_theme_files(theme.path, theme_name, THEME_COMMENT)

    user_theme_dir = get_icons_dir(config) / theme_name
    install_theme(theme, user_theme_dir, config.mode)
    set_permissions_recursive(theme.path, config.mode)
    update_icon_cache(user_theme_dir)

    print(f"Done! Created new cursor theme: {theme.path}")
    print(f"Also installed to: {user_theme_dir}")
    print()
    print(HYPRLAND_HINT.format(theme_name=theme_name))
    return theme
