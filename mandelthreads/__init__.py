"""Public API for parallel scanline Mandelbrot rendering."""

from .aggregator import Aggregator
from .channel import ChannelClosed, ResultChannel, Sender
from .colour import pack_colour, pack_rgb, unpack_rgb
from .dispatch import LineDispatcher
from .image import buffer_to_array, write_image
from .kernel import compute_pixel, compute_row, escape_counts
from .options import RenderOptions
from .palette import INSIDE_COLOUR, Palette, palette_colour, worker_tint
from .progress import NullProgress, ProgressReporter, TqdmProgress
from .renderer import RenderResult, render_image
from .worker import Worker

__all__ = [
    "Aggregator",
    "ChannelClosed",
    "INSIDE_COLOUR",
    "LineDispatcher",
    "NullProgress",
    "Palette",
    "ProgressReporter",
    "RenderOptions",
    "RenderResult",
    "ResultChannel",
    "Sender",
    "TqdmProgress",
    "Worker",
    "buffer_to_array",
    "compute_pixel",
    "compute_row",
    "escape_counts",
    "pack_colour",
    "pack_rgb",
    "palette_colour",
    "render_image",
    "unpack_rgb",
    "worker_tint",
    "write_image",
]
