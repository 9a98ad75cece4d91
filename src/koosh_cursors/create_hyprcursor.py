import logging
import tempfile
from pathlib import Path

from .config import ToolConfig
from .errors import CursorError, ThemeNotFound
from .external import run_command, update_icon_cache
from .fileutils import copy_dir_recursive, set_permissions_recursive
from .theme import CursorTheme, get_icons_dir, remove_tree
from .theme_files import HyprManifest, create_theme_files, update_manifest

logger = logging.getLogger(__name__)

THEME_DIRECTORIES = ("cursors", "hyprcursors")


def extract_source_theme(source_path: Path, extract_dir: Path) -> Path:
    """Unpack an installed theme into hyprcursor-util's editable layout."""
    logger.info("Step 1: Extracting source theme...")
    if not source_path.is_dir():
        raise ThemeNotFound(source_path)

    extract_dir.mkdir(parents=True, exist_ok=True)
    run_command(["hyprcursor-util", "--extract", source_path, "--output", extract_dir])
    # hyprcursor-util names the result after the source directory
    return extract_dir / f"extracted_{source_path.name}"


def rename_manifest(extracted_dir: Path, dest_theme: str, config: ToolConfig):
    logger.info("Step 2: Updating manifest file...")
    manifest = HyprManifest(
        name=dest_theme,
        description=config.hyprcursor_description,
        version=config.hyprcursor_version,
    )
    update_manifest(extracted_dir / "manifest.hl", manifest)


def build_hyprcursor(extracted_dir: Path, output_dir: Path, dest_theme: str) -> Path:
    logger.info("Step 3: Creating hyprcursor theme...")
    output_dir.mkdir(parents=True, exist_ok=True)
    run_command(["hyprcursor-util", "--create", extracted_dir, "--output", output_dir])
    # ... and the compiled theme after the name in its manifest
    return output_dir / f"theme_{dest_theme}"


def install_hyprcursor_theme(theme_output_dir: Path, user_theme_dir: Path):
    logger.info(f"Step 4: Installing theme to {user_theme_dir}...")
    if not theme_output_dir.is_dir():
        logger.error(f"Generated theme directory not found: {theme_output_dir}")
        raise ThemeNotFound(theme_output_dir)

    remove_tree(user_theme_dir)
    copy_dir_recursive(theme_output_dir, user_theme_dir)


def copy_x11_cursors(source_path: Path, user_theme_dir: Path) -> bool:
    """Ship the legacy Xcursors alongside for X11 and XWayland clients."""
    logger.info("Step 5: Copying X11 cursors for compatibility...")
    source_cursors = source_path / "cursors"
    if not source_cursors.is_dir():
        logger.warning(f"No X11 cursors in {source_path}, skipping")
        return False

    copy_dir_recursive(source_cursors, user_theme_dir / "cursors")
    return True


def create_hyprcursor_theme(source_theme: str, dest_theme: str, config: ToolConfig) -> CursorTheme:
    logger.info(f"Creating hyprcursor theme from {source_theme}...")

    icons_dir = get_icons_dir(config)
    source_path = icons_dir / source_theme
    user_theme_dir = icons_dir / dest_theme
    if source_path == user_theme_dir:
        raise CursorError(f"Source and destination theme are both {source_theme}")

    with tempfile.TemporaryDirectory(prefix="koosh_hyprcursor_") as work_dir:
        work_dir = Path(work_dir)

        extracted_dir = extract_source_theme(source_path, work_dir / "extract")
        rename_manifest(extracted_dir, dest_theme, config)
        theme_output_dir = build_hyprcursor(extracted_dir, work_dir / "output", dest_theme)
        install_hyprcursor_theme(theme_output_dir, user_theme_dir)

        logger.debug(f"Removing working directory {work_dir}")

    copy_x11_cursors(source_path, user_theme_dir)

    logger.info("Step 6: Creating theme configuration files...")
    create_theme_files(user_theme_dir, dest_theme, config.hyprcursor_description,
                       directories=THEME_DIRECTORIES)

    set_permissions_recursive(user_theme_dir, config.mode)

    logger.info("Step 7: Updating icon cache...")
    update_icon_cache(user_theme_dir)

    print(f"Done! Created hyprcursor theme: {dest_theme}")
    print(f"Installed to: {user_theme_dir}")
    return CursorTheme(dest_theme, user_theme_dir)
