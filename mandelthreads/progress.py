"""Progress reporting collaborators."""

from __future__ import annotations

from typing import Protocol

from tqdm import tqdm

PROGRESS_STEPS = 100


class ProgressReporter(Protocol):
    def tick(self) -> None: ...

    def finish(self) -> None: ...


class NullProgress:
    """Reporter that ignores every signal."""

    def tick(self) -> None:
        pass

    def finish(self) -> None:
        pass


class TqdmProgress:
    """Render ticks as a ``tqdm`` bar of :data:`PROGRESS_STEPS` steps."""

    def __init__(self, enabled: bool = True, *, desc: str = "Rendering") -> None:
        self.enabled = enabled
        self._bar = tqdm(
            total=PROGRESS_STEPS,
            desc=desc,
            unit="%",
            disable=not enabled,
            bar_format="{l_bar}{bar}| {n_fmt}/{total_fmt}",
        )

    def tick(self) -> None:
        self._bar.update(1)

    def finish(self) -> None:
        self._bar.close()
        if self.enabled:
            tqdm.write("done")
