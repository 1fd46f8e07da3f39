import numpy as np
import pytest

from mandelthreads.colour import pack_colour, pack_rgb, unpack_rgb
from mandelthreads.palette import (
    INSIDE_COLOUR,
    Palette,
    apply_tint,
    is_banded,
    lookup_table,
    palette_colour,
    shade,
    worker_tint,
)


@pytest.mark.parametrize("palette", list(Palette))
def test_lookup_tables_are_read_only_rgb(palette):
    table = lookup_table(palette, 64)
    assert table.shape == (64, 3)
    assert table.dtype == np.uint8
    assert not table.flags.writeable


def test_grey_stretches_across_the_budget():
    assert palette_colour(100, 100, Palette.GREY, 256) == (255, 255, 255)
    assert palette_colour(50, 100, Palette.GREY, 256) == tuple(lookup_table(Palette.GREY, 256)[127])


@pytest.mark.parametrize("palette", [p for p in Palette if not is_banded(p)])
def test_early_escapes_never_take_the_inside_colour(palette):
    assert palette_colour(1, 256, palette, 256) != INSIDE_COLOUR
    assert palette_colour(1, 256, palette, 256) == tuple(lookup_table(palette, 256)[1])


def test_smooth_index_keeps_the_top_of_the_table():
    assert palette_colour(256, 256, Palette.GREY, 256) == (255, 255, 255)
    assert palette_colour(1, 1, Palette.GREY, 1) == tuple(lookup_table(Palette.GREY, 1)[0])


def test_banded_palettes_cycle_by_count():
    assert is_banded(Palette.TWILIGHT)
    assert palette_colour(3, 1000, Palette.TWILIGHT, 16) == palette_colour(19, 1000, Palette.TWILIGHT, 16)


def test_in_set_is_black():
    assert palette_colour(None, 50, Palette.FIRE, 256) == INSIDE_COLOUR == (0, 0, 0)


def test_shade_masks_points_that_never_escaped():
    counts = np.array([1, 1, 1])
    escaped = np.array([True, False, True])
    rgb = shade(counts, escaped, 1, Palette.GREY, 256)
    assert rgb.tolist() == [[255, 255, 255], [0, 0, 0], [255, 255, 255]]


def test_worker_tints_are_distinct():
    tints = {worker_tint(i) for i in range(8)}
    assert len(tints) == 8
    assert worker_tint(0) == (255, 0, 0)


def test_apply_tint_blends_half_and_half():
    rgb = np.array([[0, 0, 0], [255, 255, 255]], dtype=np.uint8)
    assert apply_tint(rgb, 0).tolist() == [[127, 0, 0], [255, 127, 127]]


def test_packed_layout_puts_red_in_the_low_byte():
    assert pack_colour(0x01, 0x02, 0x03) == 0x030201
    packed = pack_rgb(np.array([[0x10, 0x20, 0x30]], dtype=np.uint8))
    assert packed.dtype == np.uint32
    assert int(packed[0]) == 0x302010


def test_unpack_ignores_the_top_byte():
    rgb = unpack_rgb(np.array([0xFF302010], dtype=np.uint32))
    assert rgb.tolist() == [[0x10, 0x20, 0x30]]
