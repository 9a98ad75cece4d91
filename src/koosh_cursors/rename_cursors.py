import logging
import os
import struct
from pathlib import Path
from typing import Dict, Optional

from .config import ToolConfig
from .cursor_mapping import CURSOR_SYMLINKS, WINDOWS_TO_X11
from .errors import ThemeNotFound
from .external import update_icon_cache
from .fileutils import copy_file, link_aliases, set_permissions_recursive
from .theme import CursorTheme, get_icons_dir, install_theme
from .theme_files import create_theme_files

logger = logging.getLogger(__name__)

THEME_COMMENT = "Koosh cursor theme"
WINDOWS_SUFFIXES = (".cur", ".ani")


def x11_name_for(file_name: str) -> Optional[str]:
    """Map an exported cursor file name to its X11 name.

    Bare role names ("Normal") are looked up as-is; Windows cursor files
    ("Normal.ani") are looked up by their stem.
    """
    if file_name in WINDOWS_TO_X11:
        return WINDOWS_TO_X11[file_name]
    stem, ext = os.path.splitext(file_name)
    if ext.lower() in WINDOWS_SUFFIXES:
        return WINDOWS_TO_X11.get(stem)
    return None


def convert_windows_cursor(src: Path, dst: Path, add_shadow: bool = False) -> bool:
    """Write ``src`` (.cur/.ani) to ``dst`` as an Xcursor.

    Returns False, leaving ``dst`` untouched, when win2xcur cannot parse ``src``.
    """
    from win2xcur import shadow
    from win2xcur.parser import open_blob
    from win2xcur.writer import to_x11

    with open(src, "rb") as f:
        blob = f.read()

    try:
        cursor = open_blob(blob)
    except (ValueError, struct.error) as e:
        logger.warning(f"    Could not parse {src.name}: {e}")
        return False

    if add_shadow and cursor.frames:
        shadow.apply_to_frames(
            cursor.frames,
            color="#000000",
            radius=0.1,
            sigma=0.1,
            xoffset=0.05,
            yoffset=0.05,
        )

    dst.write_bytes(to_x11(cursor.frames))
    logger.info(f"    Converted {src.name} ({len(cursor.frames)} frames)")
    return True


def process_cursor_files(input_dir: Path, theme: CursorTheme, add_shadow: bool = False) -> Dict[str, str]:
    """Copy every mapped cursor of ``input_dir`` into the theme under its X11 name."""
    logger.info("Processing cursor files...")
    copied = {}

    for path in sorted(input_dir.iterdir()):
        if not path.is_file():
            continue

        x11_name = x11_name_for(path.name)
        if x11_name is None:
            logger.info(f"  Skipping {path.name} (no mapping defined)")
            continue

        logger.info(f"  Copying {path.name} to {x11_name}")
        dest_path = theme.cursors_dir / x11_name

        converted = False
        if path.suffix.lower() in WINDOWS_SUFFIXES:
            converted = convert_windows_cursor(path, dest_path, add_shadow)
        if not converted:
            copy_file(path, dest_path)

        if dest_path.is_file():
            logger.debug("    Verified: File exists at destination")
        else:
            logger.error(f"    File does not exist at destination: {dest_path}")
            continue
        copied[path.name] = x11_name

    return copied


def list_cursor_files(cursors_dir: Path):
    for path in sorted(cursors_dir.iterdir()):
        if path.is_symlink():
            description = f"-> {os.readlink(path)}"
        elif path.is_file():
            description = f"{path.stat().st_size} bytes"
        else:
            description = "directory"
        print(f"  {path.name} ({description})")


def rename_cursors(input_dir: str, output_theme: str, config: ToolConfig, add_shadow: bool = False) -> CursorTheme:
    input_path = Path(input_dir)
    logger.info("Renaming cursor files from Windows to X11 format...")
    logger.info(f"Input directory: {input_path}")
    logger.info(f"Output theme: {output_theme}")

    if not input_path.is_dir():
        raise ThemeNotFound(input_path)

    theme = CursorTheme(output_theme, Path(os.getcwd()) / output_theme)
    theme.recreate()

    copied = process_cursor_files(input_path, theme, add_shadow)
    logger.info(f"Copied {len(copied)} of {len(WINDOWS_TO_X11)} known cursors")

    logger.info("Creating symlinks...")
    created = link_aliases(theme.cursors_dir, CURSOR_SYMLINKS)
    logger.info(f"Created {len(created)} symlinks")

    create_theme_files(theme.path, output_theme, THEME_COMMENT)

    user_theme_dir = get_icons_dir(config) / output_theme
    install_theme(theme, user_theme_dir, config.mode)
    set_permissions_recursive(theme.path, config.mode)
    update_icon_cache(user_theme_dir)

    print(f"Done! Created X11 cursor theme: {output_theme}")
    print(f"Listing files in {theme.cursors_dir}:")
    list_cursor_files(theme.cursors_dir)
    return theme
