"""Grayscale image output."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import numpy as np
import PIL.Image

from .plane import Bounds

DEFAULT_FORMAT = "png"


def _pil_format_name(ext: str) -> str:
    upper = ext.upper()
    if upper == "JPG":
        return "JPEG"
    if upper == "TIF":
        return "TIFF"
    return upper


def image_format_for(path: Path, image_format: Optional[str] = None) -> str:
    """Pick the Pillow format name from ``image_format`` or the file suffix."""

    ext = (image_format or path.suffix or DEFAULT_FORMAT).lower().lstrip(".")
    pil_format = _pil_format_name(ext or DEFAULT_FORMAT)
    PIL.Image.init()
    if pil_format not in PIL.Image.SAVE:
        raise ValueError(f"Pillow cannot write '{ext}' images.")
    return pil_format


def to_image(pixels, bounds: Bounds) -> PIL.Image.Image:
    """Wrap a row-major byte buffer as a single-channel 8-bit image."""

    array = np.asarray(pixels, dtype=np.uint8)
    if array.size != bounds.size:
        raise ValueError(
            f"Buffer holds {array.size} bytes but bounds {bounds.width}x{bounds.height} "
            f"need {bounds.size}."
        )
    return PIL.Image.fromarray(array.reshape(bounds.height, bounds.width))


def write_image(path, pixels, bounds: Bounds, image_format: Optional[str] = None) -> Path:
    """Write ``pixels`` to ``path`` as a grayscale image.

    Raises ``ValueError`` for formats Pillow cannot write and ``OSError`` when
    the file cannot be written.
    """

    output_path = Path(path)
    pil_format = image_format_for(output_path, image_format)
    image = to_image(pixels, bounds)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    image.save(str(output_path), format=pil_format)
    return output_path
