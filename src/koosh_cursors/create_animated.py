"""Rebuild every cursor of a theme as a multi-size (optionally animated) Xcursor.

For each cursor the frames are pulled out with xcur2png, scaled to every
configured size with ImageMagick, described in an xcursorgen config with a
per-size hotspot, and reassembled with xcursorgen. Any cursor that cannot be
rebuilt is copied over unchanged.
"""

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Dict, List

from .config import ToolConfig
from .cursor_mapping import CURSOR_SYMLINKS, cursor_hotspot
from .errors import CommandFailed, CursorError, CursorNotFound, ThemeNotFound
from .external import run_command, update_icon_cache
from .fileutils import copy_file, copy_symlink, link_aliases, set_permissions_recursive
from .images import distinct_sizes, image_size, scale_image
from .theme import CursorTheme, get_icons_dir, install_theme
from .theme_files import create_theme_files

logger = logging.getLogger(__name__)

THEME_COMMENT = "Koosh cursor theme with proper animation support"

# Outcome of processing one cursor
GENERATED = "generated"
COPIED = "copied"
LINKED = "linked"


def frame_name(cursor_name: str, frame: int) -> str:
    """File name xcur2png gives to frame ``frame`` of ``cursor_name``."""
    return f"{cursor_name}_{frame:03d}.png"


def count_extracted_frames(frames_dir, cursor_name: str) -> int:
    prefix = f"{cursor_name}_"
    return sum(
        1
        for name in os.listdir(frames_dir)
        if name.startswith(prefix) and name.endswith(".png")
    )


def hotspot_for_size(cursor_name: str, size: int):
    """Pixel hotspot of ``cursor_name`` at ``size``, never closer than 1px to the edge."""
    x_ratio, y_ratio = cursor_hotspot(cursor_name)
    return max(1, int(size * x_ratio)), max(1, int(size * y_ratio))


def extract_frames(cursor_file, frames_dir) -> None:
    # -c keeps xcur2png's .conf file out of the current directory
    run_command(["xcur2png", cursor_file, "-d", frames_dir, "-c", frames_dir])


def build_cursor_config(
    frames_dir: Path,
    working_dir: Path,
    cursor_name: str,
    frame_count: int,
    config: ToolConfig,
) -> List[str]:
    """Scale every frame to every size and return the xcursorgen config lines.

    Raises CommandFailed if a frame cannot be scaled.
    """
    first_frame = frames_dir / frame_name(cursor_name, 0)
    if first_frame.exists():
        orig_size = image_size(first_frame, config.default_size)[0]
    else:
        orig_size = config.default_size
    logger.info(f"    Original size: {orig_size}x{orig_size}")

    lines = []
    for size in config.sizes:
        hotspot_x, hotspot_y = hotspot_for_size(cursor_name, size)

        for frame in range(frame_count):
            src_png = frames_dir / frame_name(cursor_name, frame)
            if not src_png.exists():
                logger.warning(f"    Missing frame {frame:03d}")
                continue

            dst_name = f"{size}_{frame:03d}.png"
            dst_png = working_dir / dst_name

            if size == orig_size:
                copy_file(src_png, dst_png)
            else:
                logger.debug(f"    Creating {size}x{size} version of frame {frame:03d}")
                scale_image(src_png, dst_png, size)

            # <size> <xhot> <yhot> <filename> <ms-delay>
            lines.append(f"{size} {hotspot_x} {hotspot_y} {dst_name} {config.frame_delay}")

    return lines


def generate_cursor(working_dir: Path, config_lines: List[str]) -> Path:
    """Write cursor.config and run xcursorgen on it. Returns the new cursor file."""
    config_file = working_dir / "cursor.config"
    config_file.write_text("\n".join(config_lines) + "\n", encoding="utf-8")
    logger.debug(f"    Config file has {len(config_lines)} lines")

    cursor_output = working_dir / "cursor"
    run_command(["xcursorgen", config_file.name, cursor_output.name], cwd=working_dir)
    if not cursor_output.is_file():
        raise CursorNotFound(cursor_output)
    return cursor_output


def verify_cursor(cursor_path: Path) -> bool:
    """Extract a freshly generated cursor again and report its frames and sizes."""
    logger.info("    Verifying cursor...")
    verify_dir = cursor_path.parent / "verify"
    verify_dir.mkdir(exist_ok=True)

    try:
        extract_frames(cursor_path, verify_dir)
        pngs = sorted(verify_dir.glob("*.png"))
        sizes = distinct_sizes(pngs)
    except CommandFailed as e:
        logger.warning(f"    Could not verify cursor: {e.error}")
        return False
    finally:
        shutil.rmtree(verify_dir, ignore_errors=True)

    logger.info(f"    New cursor has {len(pngs)} frames/sizes")
    logger.info("    Sizes: " + ", ".join(f"{w}x{h}" for w, h in sizes))
    return True


def process_single_cursor(cursor_file: Path, output_theme: CursorTheme, temp_dir: Path, config: ToolConfig) -> str:
    cursor_name = cursor_file.name
    destination = output_theme.cursors_dir / cursor_name

    frames_dir = temp_dir / cursor_name
    frames_dir.mkdir(parents=True, exist_ok=True)

    try:
        extract_frames(cursor_file, frames_dir)
    except CommandFailed as e:
        logger.warning(f"    xcur2png failed ({e.error}), copying original cursor")
        copy_file(cursor_file, destination)
        return COPIED

    frame_count = count_extracted_frames(frames_dir, cursor_name)
    if frame_count == 0:
        logger.warning("    Failed to extract cursor, copying original")
        copy_file(cursor_file, destination)
        return COPIED

    logger.info(f"    Found {frame_count} animation frames")

    working_dir = frames_dir / "working"
    working_dir.mkdir(exist_ok=True)

    try:
        config_lines = build_cursor_config(frames_dir, working_dir, cursor_name, frame_count, config)
        if not config_lines:
            raise CommandFailed("xcursorgen", "no frames to assemble")
        cursor_output = generate_cursor(working_dir, config_lines)
    except (CommandFailed, CursorNotFound) as e:
        logger.warning(f"    Failed to create cursor ({e}), copying original")
        copy_file(cursor_file, destination)
        return COPIED

    copy_file(cursor_output, destination)
    logger.info("    Successfully created multi-size animated cursor")
    verify_cursor(cursor_output)
    return GENERATED


def process_cursor_files(input_cursors: Path, output_theme: CursorTheme, temp_dir: Path, config: ToolConfig) -> Dict[str, str]:
    logger.info("Processing cursor files...")
    results = {}

    for cursor_file in sorted(input_cursors.iterdir()):
        if cursor_file.is_symlink():
            copy_symlink(cursor_file, output_theme.cursors_dir)
            results[cursor_file.name] = LINKED
        elif cursor_file.is_file():
            logger.info(f"  Processing: {cursor_file.name}")
            results[cursor_file.name] = process_single_cursor(cursor_file, output_theme, temp_dir, config)

    return results


def create_animated_theme(input_theme: str, output_theme: str, config: ToolConfig) -> CursorTheme:
    """Build ``output_theme`` from ``input_theme`` and install it for the user."""
    logger.info("=" * 40)
    logger.info(f"Input theme: {input_theme}")
    logger.info(f"Output theme: {output_theme}")
    logger.info(f"Sizes: {' '.join(str(size) for size in config.sizes)}")
    logger.info("=" * 40)

    cwd = Path(os.getcwd())
    source = CursorTheme(input_theme, cwd / input_theme)
    if not source.path.is_dir():
        raise ThemeNotFound(source.path)
    if not source.cursors_dir.is_dir():
        raise ThemeNotFound(source.cursors_dir)

    theme = CursorTheme(output_theme, cwd / output_theme)
    if theme.path.resolve() == source.path.resolve():
        raise CursorError(f"Input and output theme are both {source.path}")
    theme.recreate()

    with tempfile.TemporaryDirectory(prefix="koosh_animated_") as temp_dir:
        results = process_cursor_files(source.cursors_dir, theme, Path(temp_dir), config)

    generated = sum(1 for status in results.values() if status == GENERATED)
    copied = sum(1 for status in results.values() if status == COPIED)
    logger.info(f"Rebuilt {generated} cursors, copied {copied} unchanged")

    logger.info("Creating additional symlinks...")
    created = link_aliases(theme.cursors_dir, CURSOR_SYMLINKS)
    logger.info(f"Created {len(created)} symlinks")

    create_theme_files(theme.path, output_theme, THEME_COMMENT, sizes=config.sizes)

    user_theme_dir = get_icons_dir(config) / output_theme
    install_theme(theme, user_theme_dir, config.mode)
    set_permissions_recursive(theme.path, config.mode)
    update_icon_cache(user_theme_dir)

    print(f"Done! Created animated cursor theme: {theme.path}")
    print(f"Also installed to: {user_theme_dir}")
    return theme
