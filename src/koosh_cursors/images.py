import logging
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from .external import command_exists, run_command

logger = logging.getLogger(__name__)


def _read_size(path) -> Optional[Tuple[int, int]]:
    """(width, height) of ``path``, or None when ImageMagick cannot read it.

    Raises ImportError when wand or libMagickWand is not installed.
    """
    # wand needs libMagickWand at import time
    from wand.exceptions import WandException
    from wand.image import Image

    try:
        with Image(filename=str(path)) as img:
            return img.width, img.height
    except (WandException, OSError) as e:
        logger.debug(f"could not read {path}: {e}")
        return None


def image_size(path, default: int = 48) -> Tuple[int, int]:
    """Return (width, height) of an image, or (default, default) if unreadable."""
    try:
        size = _read_size(path)
    except ImportError as e:
        logger.warning(f"Cannot read image sizes ({e}), assuming {default}x{default}")
        return default, default
    return size or (default, default)


def scale_image(src, dst, size: int):
    """Resize ``src`` to fit ``size``x``size`` with ImageMagick.

    ImageMagick 7 ships ``magick``; older installs only have ``convert``.
    """
    tool = "magick" if command_exists("magick") else "convert"
    run_command([tool, src, "-resize", f"{size}x{size}", dst])


def distinct_sizes(paths: Iterable[Path]) -> List[Tuple[int, int]]:
    """Sorted, de-duplicated image sizes of ``paths``. Unreadable files are skipped."""
    sizes = set()
    try:
        for path in paths:
            size = _read_size(path)
            if size is not None:
                sizes.add(size)
    except ImportError as e:
        logger.warning(f"Cannot read image sizes: {e}")
    return sorted(sizes)
