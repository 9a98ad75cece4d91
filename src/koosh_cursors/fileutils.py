import logging
import os
import shutil
from pathlib import Path
from typing import Iterable, List, Tuple

from .errors import ThemeNotFound

logger = logging.getLogger(__name__)


def create_symlink(target, link):
    """Create ``link`` pointing at ``target``, replacing whatever is there."""
    link = Path(link)
    # exists() is False for a dangling link, so check both
    if link.exists() or link.is_symlink():
        link.unlink()
    link.symlink_to(target)


def copy_file(src, dst):
    shutil.copy2(src, dst)


def copy_symlink(src, dest_dir):
    """Recreate symlink ``src`` inside ``dest_dir`` with the same target."""
    src = Path(src)
    target = os.readlink(src)
    logger.info(f"  Copying symlink: {src.name} -> {target}")
    create_symlink(target, Path(dest_dir) / src.name)


def copy_dir_recursive(src, dst):
    """Copy a directory tree, keeping symlinks as symlinks."""
    src, dst = Path(src), Path(dst)
    if not src.is_dir():
        raise ThemeNotFound(src)

    dst.mkdir(parents=True, exist_ok=True)

    for root, dirs, files in os.walk(src):
        rel_path = os.path.relpath(root, src)
        out_dir = dst if rel_path == "." else dst / rel_path
        out_dir.mkdir(parents=True, exist_ok=True)

        for name in dirs + files:
            path = Path(root) / name
            dest_path = out_dir / name
            if path.is_symlink():
                create_symlink(os.readlink(path), dest_path)
            elif path.is_file():
                shutil.copy2(path, dest_path)


def set_permissions_recursive(path, mode: int = 0o755):
    """chmod every directory and file under ``path``, skipping symlinks."""
    path = Path(path)
    if not path.is_symlink():
        os.chmod(path, mode)

    for root, dirs, files in os.walk(path):
        for name in dirs + files:
            entry = Path(root) / name
            if not entry.is_symlink():
                os.chmod(entry, mode)


def link_aliases(cursors_dir, pairs: Iterable[Tuple[str, str]]) -> List[Tuple[str, str]]:
    """Create compatibility symlinks inside ``cursors_dir``.

    A link is only made when its target resolves and the link name is free.
    Returns the (target, link_name) pairs that were created.
    """
    cursors_dir = Path(cursors_dir)
    created = []

    for target, link_name in pairs:
        target_path = cursors_dir / target
        link_path = cursors_dir / link_name

        if target_path.exists() and not link_path.exists():
            create_symlink(target, link_path)
            logger.debug(f"  Created symlink: {link_name} -> {target}")
            created.append((target, link_name))

    return created
