import pytest

from mandelthreads import RenderOptions
from mandelthreads.palette import Palette


def test_defaults_describe_the_classic_view():
    options = RenderOptions()
    assert (options.width, options.height) == (1024, 1024)
    assert (options.centre_x, options.centre_y) == (-0.75, 0.0)
    assert options.scale_y == 2.5
    assert options.max_iterations == 256
    assert options.samples == 1
    assert options.palette == Palette.TWILIGHT
    assert options.thread_count == 1
    assert options.max_colours == 256
    assert options.worker_id is None
    assert not options.colourise
    assert not options.progress_enabled


def test_scale_x_follows_aspect_ratio():
    options = RenderOptions(width=300, height=100, scale_y=1.5)
    assert options.scale_x == pytest.approx(4.5)


def test_for_worker_copies_with_identity():
    options = RenderOptions(width=8, height=8, thread_count=3)
    copy = options.for_worker(2)
    assert copy.worker_id == 2
    assert options.worker_id is None
    assert copy.width == options.width and copy.thread_count == 3


def test_options_are_immutable():
    options = RenderOptions(width=8, height=8)
    with pytest.raises(AttributeError):
        options.width = 16


@pytest.mark.parametrize(
    "field, value",
    [
        ("width", 0),
        ("height", -4),
        ("max_iterations", 0),
        ("samples", 0),
        ("thread_count", 0),
        ("max_colours", 0),
        ("width", 2.5),
    ],
)
def test_rejects_non_positive_values(field, value):
    with pytest.raises(ValueError, match=field):
        RenderOptions(**{field: value})


def test_rejects_unknown_palette():
    with pytest.raises(ValueError, match="palette_code"):
        RenderOptions(palette_code=42)


@pytest.mark.parametrize("worker_id", [-1, 2, 5])
def test_rejects_worker_id_outside_thread_range(worker_id):
    with pytest.raises(ValueError, match="worker_id"):
        RenderOptions(thread_count=2, worker_id=worker_id)


def test_str_summarises_the_run():
    text = str(RenderOptions(width=64, height=32, thread_count=4, colourise=True))
    assert "64x32" in text
    assert "threads: 4 (colourised)" in text
    assert "twilight" in text
