"""Console logging utilities for the CHIP-8 virtual machine.

Provides a small levelled console logger with optional colours and an
elapsed-time prefix, plus a tqdm progress bar for long tick runs.
"""

import sys
import time
from typing import Optional

from tqdm import tqdm

LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_LEVEL_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
_RESET = "\033[0m"


class ConsoleLogger:
    """Levelled console logger that prints around active progress bars.

    Args:
        name: Tag printed with every line
        log_level: Minimum level printed, one of ``LEVELS``
        use_colors: Colour the level tag when the output is a terminal
        show_timestamps: Prefix lines with seconds since creation
        stream: File object to write to, stdout by default
    """

    def __init__(
        self,
        name: str = "chip8vm",
        log_level: str = "INFO",
        use_colors: bool = True,
        show_timestamps: bool = True,
        stream=None,
    ):
        self.name = name
        self.stream = stream
        self.set_level(log_level)
        self.use_colors = (
            use_colors and hasattr(sys.stdout, "isatty") and sys.stdout.isatty()
        )
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

    def set_level(self, log_level: str):
        """Change the minimum level that gets printed."""
        if log_level.upper() not in LEVELS:
            raise ValueError(f"Unknown log level '{log_level}'. Available: {list(LEVELS)}")
        self.log_level = log_level.upper()

    def is_enabled_for(self, level: str) -> bool:
        return LEVELS.index(level.upper()) >= LEVELS.index(self.log_level)

    def _format_message(self, level: str, message: str) -> str:
        prefix = f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        tag = f"[{level:>8s}]"
        if self.use_colors:
            tag = f"{_LEVEL_COLORS[level]}{tag}{_RESET}"
        return f"{prefix}{tag}[{self.name}] {message}"

    def log(self, level: str, message: str):
        """Log a message at the specified level."""
        level = level.upper()
        if self.is_enabled_for(level):
            # tqdm.write keeps an active progress bar intact
            tqdm.write(self._format_message(level, message), file=self.stream or sys.stdout)

    def debug(self, message: str):
        self.log("DEBUG", message)

    def info(self, message: str):
        self.log("INFO", message)

    def error(self, message: str):
        self.log("ERROR", message)


_logger: Optional[ConsoleLogger] = None


def get_logger() -> ConsoleLogger:
    """Shared package logger, created on first use."""
    global _logger
    if _logger is None:
        _logger = ConsoleLogger()
    return _logger


def build_progress_bar(n: int, desc: str = None, **kwargs) -> tqdm:
    """Progress bar for running ``n`` ticks."""
    if desc is None:
        desc = f"Running ({n:,} ticks)"
    for kwarg in ("total", "unit"):
        kwargs.pop(kwarg, None)
    return tqdm(total=n, desc=desc, unit="tick", **kwargs)
