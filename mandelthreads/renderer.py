"""Parallel scanline rendering of a Mandelbrot frame."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .aggregator import Aggregator
from .channel import ResultChannel
from .dispatch import LineDispatcher
from .kernel import compute_row
from .options import RenderOptions
from .progress import ProgressReporter
from .worker import RowKernel, Worker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderResult:
    """Container for the assembled output of a render."""

    buffer: np.ndarray
    width: int
    height: int
    elapsed_ms: float
    rows_by_worker: dict[int, list[int]]
    write_counts: np.ndarray
    errors: dict[int, Exception]

    @property
    def unwritten(self) -> int:
        return int(np.count_nonzero(self.write_counts == 0))


def render_image(
    options: RenderOptions,
    *,
    progress: Optional[ProgressReporter] = None,
    kernel: RowKernel = compute_row,
) -> RenderResult:
    """Render ``options`` with ``options.thread_count`` worker threads.

    The calling thread aggregates results and blocks until every worker has
    disconnected from the result channel.
    """

    logger.info("Rendering with options:\n%s", options)
    start = time.perf_counter()

    dispatcher = LineDispatcher(options.height)
    channel = ResultChannel()
    workers = []
    for i in range(options.thread_count):
        workers.append(Worker(options.for_worker(i), dispatcher, channel.sender(), kernel=kernel))

    threads = [
        threading.Thread(target=worker.run, name=f"mandelbrot-worker-{worker.worker_id}", daemon=True)
        for worker in workers
    ]
    for thread in threads:
        thread.start()

    aggregator = Aggregator(options.width, options.height, progress)
    aggregator.drain(channel)

    for thread in threads:
        thread.join()

    elapsed_ms = (time.perf_counter() - start) * 1000.0
    logger.info("time taken: %dms", elapsed_ms)

    errors = {worker.worker_id: worker.error for worker in workers if worker.error is not None}
    if errors:
        logger.error(
            "%d worker(s) failed; %d of %d row(s) claimed, %d pixel(s) left unwritten",
            len(errors),
            dispatcher.claimed,
            dispatcher.height,
            aggregator.unwritten,
        )
    if not dispatcher.exhausted:
        logger.warning("%d row(s) were never claimed", dispatcher.height - dispatcher.claimed)

    buffer = aggregator.buffer
    buffer.setflags(write=False)
    return RenderResult(
        buffer=buffer,
        width=options.width,
        height=options.height,
        elapsed_ms=elapsed_ms,
        rows_by_worker={worker.worker_id: list(worker.rows) for worker in workers},
        write_counts=aggregator.write_counts,
        errors=errors,
    )
