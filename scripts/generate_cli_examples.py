from __future__ import annotations

import shutil
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path

EXAMPLES_ROOT = Path("examples/cli-options")
BASE_ARGS = ["-w", "160", "-h", "120", "--iterations", "200"]


@dataclass
class Example:
    name: str
    args: list[str]
    output: Path

    def full_args(self) -> list[str]:
        return [sys.executable, "render.py", *self.args, "--name", str(self.output)]


def _example(name: str, filename: str, *args: str) -> Example:
    return Example(name=name, args=[*BASE_ARGS, *args], output=EXAMPLES_ROOT / name / filename)


EXAMPLES: list[Example] = [
    _example("defaults", "default.bmp"),
    _example("iterations", "deep.png", "--iterations", "1000"),
    _example("centre", "seahorse-valley.png", "--centrex", "-0.745", "--centrey", "0.11", "--scale", "0.02"),
    _example("scale", "wide.png", "--scale", "1.6"),
    _example("samples", "antialiased.png", "--samples", "3"),
    _example("colour-grey", "grey.png", "--colour", "0"),
    _example("colour-fire", "fire.png", "--colour", "4"),
    _example("colours", "few-colours.png", "--colours", "16"),
    _example("threads", "four-threads.png", "-j", "4"),
    _example("colourise", "partition.png", "-j", "4", "--colourise"),
    _example("progress", "progress.png", "--progress"),
    _example("jpeg", "frame.jpg"),
    _example("tiff", "frame.tiff"),
    _example("verbose", "diagnostic.png", "--verbose"),
]


def _prepare(example: Example) -> None:
    target = example.output.parent
    if target.exists():
        shutil.rmtree(target)
    target.mkdir(parents=True, exist_ok=True)


def _verify(example: Example) -> None:
    if not example.output.is_file():
        raise RuntimeError(f"Expected file {example.output} was not created")


def main() -> None:
    EXAMPLES_ROOT.mkdir(parents=True, exist_ok=True)
    for example in EXAMPLES:
        print(f"\n[cli-example] {example.name}")
        _prepare(example)
        subprocess.run(example.full_args(), check=True)
        _verify(example)
    print("\nAll CLI examples generated successfully.")


if __name__ == "__main__":
    main()
