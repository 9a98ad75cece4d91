"""Thin wrapper around the external binaries the workflows drive."""

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Optional, Sequence, Union

from .errors import CommandFailed

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def command_exists(command: str) -> bool:
    return shutil.which(command) is not None


def run_command(args: Sequence[PathLike], cwd: Optional[PathLike] = None) -> subprocess.CompletedProcess:
    """Run a command, capturing its output.

    A missing binary or a non-zero exit status raises CommandFailed with the
    command line and whatever the tool wrote to stderr.
    """
    args = [str(arg) for arg in args]
    command_line = " ".join(args)
    logger.debug(f"run: {command_line}")

    try:
        return subprocess.run(
            args,
            cwd=str(cwd) if cwd is not None else None,
            capture_output=True,
            text=True,
            check=True,
        )
    except FileNotFoundError as e:
        raise CommandFailed(command_line, f"{args[0]}: command not found") from e
    except subprocess.CalledProcessError as e:
        error = (e.stderr or "").strip() or f"exit status {e.returncode}"
        raise CommandFailed(command_line, error) from e


def update_icon_cache(theme_dir: PathLike) -> bool:
    """Refresh the GTK icon cache of an installed theme.

    Optional: a missing or failing gtk-update-icon-cache only logs a warning.
    """
    if not command_exists("gtk-update-icon-cache"):
        logger.debug("gtk-update-icon-cache not installed, skipping icon cache update")
        return False

    try:
        run_command(["gtk-update-icon-cache", "-f", "-t", theme_dir])
    except CommandFailed as e:
        logger.warning(f"Icon cache update failed: {e.error}")
        return False

    logger.info(f"Updated icon cache for {theme_dir}")
    return True
