"""Palette lookup tables and escape-count colouring."""

from __future__ import annotations

from enum import IntEnum
from functools import lru_cache

import numpy as np
from matplotlib import colormaps
from matplotlib.colors import hsv_to_rgb

INSIDE_COLOUR = (0, 0, 0)

# Multiplier for the per-worker hue rotation; the golden ratio conjugate keeps
# consecutive worker hues far apart.
TINT_HUE_STEP = 0.618033988749895


class Palette(IntEnum):
    """Enumerated colour mappings selected by ``palette_code``."""

    GREY = 0
    RED = 1
    GREEN = 2
    BLUE = 3
    FIRE = 4
    VIRIDIS = 5
    INFERNO = 6
    TWILIGHT = 7

    @classmethod
    def codes(cls) -> tuple[int, ...]:
        return tuple(int(member) for member in cls)


# (matplotlib colormap, banded) per palette. Banded palettes cycle through the
# table by raw escape count; the others stretch it across the iteration budget.
_PALETTE_MAPS: dict[Palette, tuple[str, bool]] = {
    Palette.GREY: ("gray", False),
    Palette.RED: ("Reds", False),
    Palette.GREEN: ("Greens", False),
    Palette.BLUE: ("Blues", False),
    Palette.FIRE: ("hot", True),
    Palette.VIRIDIS: ("viridis", True),
    Palette.INFERNO: ("inferno", False),
    Palette.TWILIGHT: ("twilight_shifted", True),
}


def is_banded(palette: Palette) -> bool:
    return _PALETTE_MAPS[Palette(palette)][1]


@lru_cache(maxsize=None)
def lookup_table(palette: Palette, max_colours: int) -> np.ndarray:
    """Sample ``palette`` into a read-only ``(max_colours, 3)`` uint8 table."""

    name, _ = _PALETTE_MAPS[Palette(palette)]
    cmap = colormaps[name]
    positions = np.linspace(0.0, 1.0, max_colours, dtype=np.float64)
    rgba = np.asarray(cmap(positions), dtype=np.float64)
    table = np.uint8(np.clip(np.rint(rgba[:, :3] * 255), 0, 255))
    table.setflags(write=False)
    return table


def palette_indices(counts: np.ndarray, max_iterations: int, palette: Palette, max_colours: int) -> np.ndarray:
    counts = np.asarray(counts, dtype=np.int64)
    if is_banded(palette):
        return counts % max_colours
    # Index 0 of the smooth tables is black or near black, so it stays
    # reserved for INSIDE_COLOUR; every escape lands on 1 or above.
    lowest = min(1, max_colours - 1)
    return np.clip(counts * (max_colours - 1) // max_iterations, lowest, max_colours - 1)


def shade(
    counts: np.ndarray,
    escaped: np.ndarray,
    max_iterations: int,
    palette: Palette,
    max_colours: int,
) -> np.ndarray:
    """Map escape counts to an ``(N, 3)`` uint8 RGB array.

    Points that never escaped receive :data:`INSIDE_COLOUR`.
    """

    table = lookup_table(Palette(palette), max_colours)
    rgb = table[palette_indices(counts, max_iterations, palette, max_colours)]
    inside = ~np.asarray(escaped, dtype=bool)
    rgb[inside] = INSIDE_COLOUR
    return rgb


def palette_colour(count: int | None, max_iterations: int, palette: Palette, max_colours: int) -> tuple[int, int, int]:
    """Colour for a single escape count; ``None`` means the point is in the set."""

    if count is None:
        return INSIDE_COLOUR
    rgb = shade(np.array([count]), np.array([True]), max_iterations, palette, max_colours)[0]
    return int(rgb[0]), int(rgb[1]), int(rgb[2])


@lru_cache(maxsize=None)
def worker_tint(worker_id: int) -> tuple[int, int, int]:
    """Deterministic tint colour for ``worker_id``."""

    hue = (worker_id * TINT_HUE_STEP) % 1.0
    rgb = hsv_to_rgb(np.array([hue, 1.0, 1.0], dtype=np.float64))
    r, g, b = (int(channel) for channel in np.rint(rgb * 255))
    return r, g, b


def apply_tint(rgb: np.ndarray, worker_id: int) -> np.ndarray:
    """Blend ``rgb`` half-and-half with the tint of ``worker_id``."""

    tint = np.array(worker_tint(worker_id), dtype=np.uint16)
    blended = (np.asarray(rgb, dtype=np.uint16) + tint) // 2
    return blended.astype(np.uint8)
