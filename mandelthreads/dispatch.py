"""Shared scanline dispatcher used for dynamic load balancing between workers."""

from __future__ import annotations

import threading
from typing import Optional


class LineDispatcher:
    """Hand out row indices ``0..height-1`` to whichever worker asks next.

    Each row is returned by exactly one call to :meth:`claim`.
    """

    def __init__(self, height: int) -> None:
        if height <= 0:
            raise ValueError(f"height must be positive, got {height}")
        self.height = height
        self._next_row = 0
        self._lock = threading.Lock()

    def claim(self) -> Optional[int]:
        """Return the next unclaimed row, or ``None`` once every row is taken."""

        with self._lock:
            if self._next_row >= self.height:
                return None
            row = self._next_row
            self._next_row += 1
            return row

    @property
    def claimed(self) -> int:
        with self._lock:
            return min(self._next_row, self.height)

    @property
    def exhausted(self) -> bool:
        return self.claimed >= self.height
