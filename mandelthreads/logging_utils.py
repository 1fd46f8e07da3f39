"""Console logging setup for the renderer."""

from __future__ import annotations

import logging
from typing import Optional

from colorama import Fore, Style, just_fix_windows_console

__all__ = ["ColorFormatter", "configure_logging"]

LOGGER_NAME = "mandelthreads"


class ColorFormatter(logging.Formatter):
    """Colorized console formatter that also shows the emitting thread."""

    COLORS = {
        "DEBUG": Fore.CYAN,
        "INFO": Fore.GREEN,
        "WARNING": Fore.YELLOW,
        "ERROR": Fore.RED,
        "CRITICAL": Fore.RED + Style.BRIGHT,
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, "")
        reset = Style.RESET_ALL
        message = (
            f"[{self.formatTime(record, self.datefmt)}] "
            f"[{record.threadName}] "
            f"[{color}{record.levelname:<5s}{reset}] "
            f"{record.getMessage()}"
        )
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return message


def configure_logging(level: int = logging.INFO, name: Optional[str] = LOGGER_NAME) -> logging.Logger:
    """Attach a single colorized console handler to the ``name`` logger."""

    just_fix_windows_console()
    logger = logging.getLogger(name)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(ColorFormatter(datefmt="%H:%M:%S"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
