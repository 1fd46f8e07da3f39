"""
Shared pytest fixtures for renderer tests.
"""

import logging
import os

os.environ.setdefault("TF_CPP_MIN_LOG_LEVEL", "3")

import matplotlib
matplotlib.use("Agg")

import pytest

from mandelthreads import RenderOptions
from mandelthreads.logging_utils import LOGGER_NAME
from mandelthreads.palette import Palette


@pytest.fixture
def small_options():
    """A quick render around the main cardioid edge."""
    return RenderOptions(
        width=24,
        height=16,
        centre_x=-0.75,
        centre_y=0.0,
        scale_y=1.25,
        max_iterations=40,
        samples=1,
        palette_code=int(Palette.TWILIGHT),
    )


@pytest.fixture
def boundary_options():
    """The coarse 2x2 viewport spanning [-2, 0) on both axes."""
    return RenderOptions(
        width=2,
        height=2,
        centre_x=0.0,
        centre_y=0.0,
        scale_y=2.0,
        max_iterations=1,
        samples=1,
        palette_code=int(Palette.GREY),
    )


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Undo any handler setup done by the command-line entry point."""
    logger = logging.getLogger(LOGGER_NAME)
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


class RecordingProgress:
    def __init__(self):
        self.ticks = 0
        self.finished = 0

    def tick(self):
        self.ticks += 1

    def finish(self):
        self.finished += 1


@pytest.fixture
def recording_progress():
    return RecordingProgress()
