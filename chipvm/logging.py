"""Console logging utilities for chipvm hosts.

A small level-filtered console logger with optional colours and elapsed-time
stamps, plus a session logger used by the window and headless runners.
"""

import sys
import time
from typing import Any, Dict, Optional

from tqdm import tqdm


class ConsoleLogger:
    """Flexible console logger with level filtering and formatting."""

    level_order = {
        "DEBUG": 0,
        "INFO": 1,
        "WARNING": 2,
        "ERROR": 3,
        "CRITICAL": 4,
    }

    def __init__(
        self,
        name: str = "chipvm",
        log_level: str = "INFO",
        use_colors: bool = True,
        show_timestamps: bool = True,
        stream=None,
    ):
        self.name = name
        self.log_level = log_level.upper()
        if self.log_level not in self.level_order:
            raise ValueError(
                f"Unknown log level '{log_level}'. Available: {list(self.level_order)}"
            )
        self.stream = stream or sys.stdout
        self.use_colors = (
            use_colors and hasattr(self.stream, "isatty") and self.stream.isatty()
        )
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

        self.colors = (
            {
                "DEBUG": "\033[36m",
                "INFO": "\033[32m",
                "WARNING": "\033[33m",
                "ERROR": "\033[31m",
                "CRITICAL": "\033[35m",
                "RESET": "\033[0m"
            }
            if self.use_colors
            else {k: "" for k in [*self.level_order, "RESET"]}
        )

    def _should_log(self, level: str) -> bool:
        """Check if message should be logged based on current log level."""
        return self.level_order.get(level.upper(), 1) >= self.level_order[self.log_level]

    def _format_message(self, level: str, message: str) -> str:
        """Format log message with timestamp, level, and colors."""
        timestamp = (
            f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        )
        level_str = f"[{level:>8s}]"
        if self.use_colors:
            level_str = f"{self.colors[level.upper()]}{level_str}{self.colors['RESET']}"

        return f"{timestamp}{level_str}[{self.name}] {message}"

    def log(self, level: str, message: str):
        """Log a message at the specified level."""
        if self._should_log(level):
            print(self._format_message(level, message), file=self.stream, flush=True)

    def debug(self, message: str):
        self.log("DEBUG", message)

    def info(self, message: str):
        self.log("INFO", message)

    def warning(self, message: str):
        self.log("WARNING", message)

    def error(self, message: str):
        self.log("ERROR", message)

    def critical(self, message: str):
        self.log("CRITICAL", message)


class EmulatorLogger(ConsoleLogger):
    """Logger for a host session: configuration, faults and run statistics."""

    def __init__(self, name: str = "chipvm", **kwargs):
        super().__init__(name, **kwargs)
        self.instructions = 0
        self.frames = 0

    def log_session_start(self, rom_path: str, config: Dict[str, Any]):
        """Log the ROM and host configuration."""
        self.info("=" * 60)
        self.info(f"Running {rom_path}")
        for key, value in config.items():
            self.info(f"  {key}: {value}")
        self.info("=" * 60)

    def log_frame(self, instructions: int):
        """Account for one frame of `instructions` executed instructions."""
        self.frames += 1
        self.instructions += instructions

    def log_fault(self, fault: Exception):
        self.error(f"Machine halted: {fault}")

    def log_session_end(self):
        """Log run statistics."""
        elapsed = time.time() - self.start_time
        rate = self.instructions / elapsed if elapsed > 0 else 0.0
        self.info(
            f"Stopped after {self.frames} frames, {self.instructions} instructions "
            f"in {elapsed:.1f}s ({rate:.0f} instructions/s)"
        )


def frame_progress(num_frames: int, desc: Optional[str] = None, **kwargs) -> tqdm:
    """Progress bar over emulated frames for headless runs."""
    if desc is None:
        desc = f"Emulating ({num_frames:,} frames)"
    for kwarg in ("total", "unit"):
        kwargs.pop(kwarg, None)
    return tqdm(range(num_frames), desc=desc, unit="frame", **kwargs)
