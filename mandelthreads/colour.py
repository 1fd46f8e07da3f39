"""Packed 32-bit colour layout: red in bits 0-7, green 8-15, blue 16-23."""

from __future__ import annotations

import numpy as np


def pack_rgb(rgb: np.ndarray) -> np.ndarray:
    """Pack an ``(N, 3)`` uint8 array into ``N`` uint32 values."""

    channels = np.asarray(rgb, dtype=np.uint32)
    return channels[..., 0] | (channels[..., 1] << 8) | (channels[..., 2] << 16)


def unpack_rgb(packed: np.ndarray) -> np.ndarray:
    """Inverse of :func:`pack_rgb`; the top byte is ignored."""

    values = np.asarray(packed, dtype=np.uint32)
    r = values & 0x000000FF
    g = (values & 0x0000FF00) >> 8
    b = (values & 0x00FF0000) >> 16
    return np.stack((r, g, b), axis=-1).astype(np.uint8)


def pack_colour(r: int, g: int, b: int) -> int:
    return (r & 0xFF) | ((g & 0xFF) << 8) | ((b & 0xFF) << 16)
