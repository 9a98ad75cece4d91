"""Writers for the metadata files that make a directory a cursor theme."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Sequence

from .errors import ManifestNotFound

logger = logging.getLogger(__name__)

# Standard cursor sizes used by modern themes
STANDARD_SIZES = (24, 32, 48, 64, 72, 96)


def create_index_theme(
    theme_path,
    theme_name: str,
    comment: str,
    sizes: Optional[Iterable[int]] = None,
    directories: Sequence[str] = ("cursors",),
) -> Path:
    """Write index.theme, with a section per directory and per cursor size."""
    lines = [
        "[Icon Theme]",
        f"Name={theme_name}",
        f"Comment={comment}",
        "Inherits=hicolor",
        "",
        "# Directory list",
        f"Directories={' '.join(directories)}",
    ]

    for directory in directories:
        lines.extend(["", f"[{directory}]", "Context=Cursors", "Type=Fixed"])

    for size in sizes or ():
        lines.extend(["", f"[cursors/{size}]", f"Size={size}", "Context=Cursors", "Type=Fixed"])

    index_path = Path(theme_path) / "index.theme"
    index_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return index_path


def create_cursor_theme(theme_path, theme_name: str, comment: str) -> Path:
    cursor_theme_path = Path(theme_path) / "cursor.theme"
    cursor_theme_path.write_text(
        f"[Icon Theme]\nName={theme_name}\nComment={comment}\nInherits={theme_name}\n",
        encoding="utf-8",
    )
    return cursor_theme_path


def create_theme_files(theme_path, theme_name, comment, sizes=None, directories=("cursors",)):
    """Create both index.theme and cursor.theme."""
    create_index_theme(theme_path, theme_name, comment, sizes, directories)
    create_cursor_theme(theme_path, theme_name, comment)
    logger.info(f"Created theme files in {theme_path}")


@dataclass
class HyprManifest:
    name: str
    description: str
    version: str = "1.0"
    cursors_directory: str = "hyprcursors"

    def fields(self):
        return {
            "name": self.name,
            "description": self.description,
            "version": self.version,
            "cursors_directory": self.cursors_directory,
        }


def update_manifest(manifest_path, manifest: HyprManifest, keys: Optional[Sequence[str]] = None) -> Path:
    """Rewrite the keys of an existing manifest.hl from ``manifest``.

    ``keys`` limits the rewrite to those keys; by default every field is written.

    Every other line is kept as it is. Keys the file does not define yet are
    appended at the end.
    """
    manifest_path = Path(manifest_path)
    if not manifest_path.is_file():
        raise ManifestNotFound(manifest_path)

    values = manifest.fields()
    if keys is None:
        keys = list(values)
    replacements = {key: values[key] for key in keys}
    seen = set()
    lines = []

    for line in manifest_path.read_text(encoding="utf-8").splitlines():
        key = line.split("=", 1)[0].strip() if "=" in line else None
        if key in replacements:
            lines.append(f"{key} = {replacements[key]}")
            seen.add(key)
        else:
            lines.append(line)

    for key, value in replacements.items():
        if key not in seen:
            lines.append(f"{key} = {value}")

    manifest_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    logger.debug(f"Updated manifest {manifest_path}")
    return manifest_path
