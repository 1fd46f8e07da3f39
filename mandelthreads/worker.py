"""Per-thread scanline worker."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

import numpy as np

from .channel import Sender
from .dispatch import LineDispatcher
from .kernel import compute_row
from .options import RenderOptions

logger = logging.getLogger(__name__)

RowKernel = Callable[[int, RenderOptions], np.ndarray]


@dataclass
class Worker:
    """Claim rows from the dispatcher and stream their pixels to the aggregator."""

    options: RenderOptions
    dispatcher: LineDispatcher
    sender: Sender
    kernel: RowKernel = compute_row
    rows: list[int] = field(default_factory=list)
    error: Optional[Exception] = None

    def __post_init__(self) -> None:
        if self.options.worker_id is None:
            raise ValueError("Worker requires options with worker_id set")

    @property
    def worker_id(self) -> int:
        return self.options.worker_id

    def run(self) -> None:
        """Process rows until the dispatcher is exhausted, then disconnect."""

        width = self.options.width
        with self.sender:
            try:
                while True:
                    y = self.dispatcher.claim()
                    if y is None:
                        break
                    self.rows.append(y)
                    colours = self.kernel(y, self.options)
                    base = y * width
                    for x in range(width):
                        self.sender.send(base + x, int(colours[x]))
            except Exception as exc:
                self.error = exc
                logger.exception("Worker %d failed on row %s", self.worker_id, self.rows[-1] if self.rows else None)
                return
        logger.debug("Worker %d finished %d rows", self.worker_id, len(self.rows))
