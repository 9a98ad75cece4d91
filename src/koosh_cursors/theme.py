import logging
import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from .config import ToolConfig
from .errors import CursorError
from .fileutils import copy_dir_recursive, copy_file, set_permissions_recursive

logger = logging.getLogger(__name__)

THEME_FILES = ("index.theme", "cursor.theme", "manifest.hl")


@dataclass
class CursorTheme:
    """A cursor theme directory: ``<path>/cursors`` plus its metadata files."""

    name: str
    path: Path
    cursors_dir: Path = field(init=False)

    def __post_init__(self):
        self.path = Path(self.path)
        self.cursors_dir = self.path / "cursors"

    def exists(self) -> bool:
        return self.path.is_dir() and self.cursors_dir.is_dir()

    def create_directories(self):
        try:
            self.cursors_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CursorError(f"Failed to create cursors directory {self.cursors_dir}: {e}") from e

    def recreate(self):
        """Remove the theme directory if present and start from an empty one."""
        remove_tree(self.path)
        self.create_directories()


def remove_tree(path):
    path = Path(path)
    if path.is_symlink() or path.is_file():
        path.unlink()
    elif path.exists():
        shutil.rmtree(path)


def get_home_dir() -> Path:
    home = os.path.expanduser("~")
    if home == "~":
        raise CursorError("Could not determine home directory")
    return Path(home)


def get_icons_dir(config: ToolConfig) -> Path:
    """The per-user directory themes are installed to (``~/.icons`` by default)."""
    icons_dir = config.icons_dir
    if icons_dir == "~" or icons_dir.startswith("~/"):
        return get_home_dir() / icons_dir[2:]
    return Path(icons_dir)


def install_theme(theme: CursorTheme, dest_dir, mode: int = 0o755) -> bool:
    """Install ``theme`` as ``dest_dir``: its cursors tree and metadata files.

    Returns False when the theme already lives at ``dest_dir``.
    """
    dest_dir = Path(dest_dir)
    if dest_dir.resolve() == theme.path.resolve():
        logger.debug(f"{theme.name} already installed at {dest_dir}")
        return False

    logger.info(f"Installing to {dest_dir}")
    remove_tree(dest_dir)
    dest_dir.mkdir(parents=True)

    if theme.cursors_dir.is_dir():
        copy_dir_recursive(theme.cursors_dir, dest_dir / "cursors")

    for name in THEME_FILES:
        src = theme.path / name
        if src.is_file():
            copy_file(src, dest_dir / name)

    set_permissions_recursive(dest_dir, mode)
    return True
