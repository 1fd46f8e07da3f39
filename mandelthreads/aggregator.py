"""Single consumer that assembles streamed pixels into the output buffer."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

import numpy as np

from .progress import PROGRESS_STEPS, NullProgress, ProgressReporter

logger = logging.getLogger(__name__)

PLACEHOLDER = 0


class Aggregator:
    """Own the output buffer and fill it from ``(index, colour)`` pairs.

    Pairs may arrive in any order; every write lands on its absolute pixel
    offset ``y * width + x``.
    """

    def __init__(self, width: int, height: int, progress: Optional[ProgressReporter] = None) -> None:
        self.total = width * height
        self.buffer = np.full(self.total, PLACEHOLDER, dtype=np.uint32)
        self.write_counts = np.zeros(self.total, dtype=np.uint32)
        self.completed = 0
        self.ticks = 0
        self.progress = progress if progress is not None else NullProgress()

    def accept(self, index: int, colour: int) -> None:
        if self.write_counts[index]:
            logger.warning("Pixel %d written more than once", index)
        self.buffer[index] = colour
        self.write_counts[index] += 1
        self.completed += 1

        due = min(self.completed * PROGRESS_STEPS // self.total, PROGRESS_STEPS)
        while self.ticks < due:
            self.ticks += 1
            self.progress.tick()

    def drain(self, results: Iterable[tuple[int, int]]) -> np.ndarray:
        """Consume ``results`` until the stream ends and return the buffer."""

        for index, colour in results:
            self.accept(index, colour)
        self.progress.finish()
        return self.buffer

    @property
    def unwritten(self) -> int:
        return int(np.count_nonzero(self.write_counts == 0))
