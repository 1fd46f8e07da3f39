"""Image encoding for packed colour buffers."""

from __future__ import annotations

from pathlib import Path
from typing import Union

import numpy as np
import PIL.Image

from .colour import unpack_rgb

SUPPORTED_FORMATS = ("PNG", "JPEG", "BMP", "TIFF")


def _pil_format_name(ext: str) -> str:
    upper = ext.upper().lstrip(".")
    if upper == "JPG":
        return "JPEG"
    if upper == "TIF":
        return "TIFF"
    return upper


def buffer_to_array(buffer: np.ndarray, width: int, height: int) -> np.ndarray:
    """Unpack ``buffer`` into a ``(height, width, 3)`` uint8 RGB array."""

    values = np.asarray(buffer, dtype=np.uint32)
    if values.size != width * height:
        raise ValueError(f"buffer holds {values.size} pixels, expected {width}x{height}")
    return unpack_rgb(values).reshape(height, width, 3)


def buffer_to_image(buffer: np.ndarray, width: int, height: int) -> PIL.Image.Image:
    return PIL.Image.fromarray(buffer_to_array(buffer, width, height))


def write_image(buffer: np.ndarray, width: int, height: int, output_path: Union[str, Path]) -> Path:
    """Write ``buffer`` to ``output_path`` using the format named by its extension."""

    output_path = Path(output_path).expanduser()
    pil_format = _pil_format_name(output_path.suffix)
    if pil_format not in SUPPORTED_FORMATS:
        raise ValueError(
            f"Unsupported image format {output_path.suffix or '(none)'}; use one of {', '.join(SUPPORTED_FORMATS)}"
        )
    image = buffer_to_image(buffer, width, height)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    image.save(str(output_path), format=pil_format)
    return output_path
