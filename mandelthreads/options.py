"""Run configuration for the scanline renderer."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from .palette import Palette

DEFAULT_WIDTH = 1024
DEFAULT_HEIGHT = 1024
DEFAULT_MAX_ITERATIONS = 256
DEFAULT_CENTRE_X = -0.75
DEFAULT_CENTRE_Y = 0.0
DEFAULT_SCALE_Y = 2.5
DEFAULT_SAMPLES = 1
DEFAULT_THREADS = 1
DEFAULT_PALETTE = int(Palette.TWILIGHT)
DEFAULT_MAX_COLOURS = 256
DEFAULT_COLOURISE = False
DEFAULT_PROGRESS = False


@dataclass(frozen=True)
class RenderOptions:
    """Parameters that describe a single scanline render of the Mandelbrot set.

    The template instance has ``worker_id`` unset; every worker receives its
    own copy from :meth:`for_worker`.
    """

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    centre_x: float = DEFAULT_CENTRE_X
    centre_y: float = DEFAULT_CENTRE_Y
    scale_y: float = DEFAULT_SCALE_Y
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    samples: int = DEFAULT_SAMPLES
    palette_code: int = DEFAULT_PALETTE
    colourise: bool = DEFAULT_COLOURISE
    thread_count: int = DEFAULT_THREADS
    progress_enabled: bool = DEFAULT_PROGRESS
    worker_id: Optional[int] = None
    max_colours: int = DEFAULT_MAX_COLOURS

    def __post_init__(self) -> None:
        for name in ("width", "height", "max_iterations", "samples", "thread_count", "max_colours"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")

        if self.palette_code not in Palette.codes():
            raise ValueError(
                f"palette_code must be one of {', '.join(str(c) for c in Palette.codes())}, got {self.palette_code!r}"
            )

        if self.worker_id is not None and not 0 <= self.worker_id < self.thread_count:
            raise ValueError(f"worker_id must be in [0, {self.thread_count}), got {self.worker_id}")

    @property
    def scale_x(self) -> float:
        return self.scale_y * self.width / self.height

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    @property
    def palette(self) -> Palette:
        return Palette(self.palette_code)

    def for_worker(self, worker_id: int) -> RenderOptions:
        """Return the private copy handed to worker ``worker_id``."""

        return replace(self, worker_id=worker_id)

    def __str__(self) -> str:
        lines = [
            f"size: {self.width}x{self.height}",
            f"centre: ({self.centre_x:.6g}, {self.centre_y:.6g})",
            f"scale: {self.scale_x:.6g} x {self.scale_y:.6g}",
            f"iterations: {self.max_iterations}",
            f"samples: {self.samples}x{self.samples}",
            f"palette: {self.palette.name.lower()} ({self.palette_code}), {self.max_colours} colours",
            f"threads: {self.thread_count}{' (colourised)' if self.colourise else ''}",
        ]
        if self.worker_id is not None:
            lines.append(f"worker: {self.worker_id}")
        return "\n".join(lines)
