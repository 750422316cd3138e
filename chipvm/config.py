"""Host configuration for running ROMs."""

import argparse
import dataclasses
from typing import Any, Dict, Optional

from chipvm.rendering import COLOR_SCHEMES


@dataclasses.dataclass(frozen=True)
class HostConfig:
    """Settings of the loop driving an engine.

    Attributes:
        scale: Window pixels per CHIP-8 pixel
        instructions_per_frame: Instructions executed per frame (10 at 60 fps is ~600 Hz)
        fps: Frame rate; timers decrement and the screen redraws once per frame
        color_scheme: Rendering palette name, see `chipvm.rendering.create_color_scheme`
        seed: Seed of the random source, or None for OS entropy
        log_level: Console log level
        tone_hz: Frequency of the beep played while the sound timer runs
        volume: Beep volume between 0 and 1
    """
    scale: int = 8
    instructions_per_frame: int = 10
    fps: int = 60
    color_scheme: str = "original"
    seed: Optional[int] = None
    log_level: str = "INFO"
    tone_hz: float = 440.0
    volume: float = 0.2

    def __post_init__(self):
        if self.scale < 1:
            raise ValueError(f"scale must be >= 1, got {self.scale}")
        if self.instructions_per_frame < 1:
            raise ValueError(f"instructions_per_frame must be >= 1, got {self.instructions_per_frame}")
        if self.fps < 1:
            raise ValueError(f"fps must be >= 1, got {self.fps}")
        if self.color_scheme not in COLOR_SCHEMES:
            raise ValueError(
                f"Unknown color scheme '{self.color_scheme}'. Available: {list(COLOR_SCHEMES)}"
            )
        if not 0.0 <= self.volume <= 1.0:
            raise ValueError(f"volume must be between 0 and 1, got {self.volume}")

    @property
    def instruction_frequency(self) -> int:
        """Emulated CPU speed in instructions per second."""
        return self.instructions_per_frame * self.fps

    def asdict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "HostConfig":
        """Build a config from parsed arguments, ignoring unrelated attributes."""
        names = {f.name for f in dataclasses.fields(cls)}
        values = {k: v for k, v in vars(args).items() if k in names and v is not None}
        return cls(**values)


def add_config_arguments(parser: argparse.ArgumentParser) -> None:
    """Register one command-line option per `HostConfig` field."""
    defaults = HostConfig()
    parser.add_argument("--scale", type=int, help=f"pixel scale (default: {defaults.scale})")
    parser.add_argument(
        "--ipf", dest="instructions_per_frame", type=int,
        help=f"instructions per frame (default: {defaults.instructions_per_frame})",
    )
    parser.add_argument("--fps", type=int, help=f"frames per second (default: {defaults.fps})")
    parser.add_argument(
        "--color-scheme", dest="color_scheme", choices=sorted(COLOR_SCHEMES),
        help=f"palette (default: {defaults.color_scheme})",
    )
    parser.add_argument("--seed", type=int, help="random seed (default: OS entropy)")
    parser.add_argument(
        "--log-level", dest="log_level", choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"console log level (default: {defaults.log_level})",
    )
    parser.add_argument("--tone", dest="tone_hz", type=float, help=f"beep frequency (default: {defaults.tone_hz})")
    parser.add_argument("--volume", type=float, help=f"beep volume (default: {defaults.volume})")
