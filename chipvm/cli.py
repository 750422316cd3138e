"""Command-line entry point: `chipvm run ROM` and `chipvm headless ROM`."""

import argparse
import sys
from typing import List, Optional

from chipvm.config import HostConfig, add_config_arguments
from chipvm.engine import Engine
from chipvm.errors import ChipVMError, MachineFault
from chipvm.logging import EmulatorLogger, frame_progress
from chipvm.rendering import save_screenshot
from chipvm.rng import make_key


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chipvm", description="CHIP-8 virtual machine")
    commands = parser.add_subparsers(dest="command", required=True)

    run_parser = commands.add_parser("run", help="run a ROM in a window")
    run_parser.add_argument("rom", help="path to the ROM file")
    add_config_arguments(run_parser)

    headless_parser = commands.add_parser("headless", help="run a ROM without a window")
    headless_parser.add_argument("rom", help="path to the ROM file")
    headless_parser.add_argument("--frames", type=int, default=600, help="frames to emulate (default: 600)")
    headless_parser.add_argument("--screenshot", help="save the final screen to this image file")
    headless_parser.add_argument("--no-progress", dest="progress", action="store_false", help="hide the progress bar")
    add_config_arguments(headless_parser)

    return parser


def run_headless(
    rom_path: str,
    num_frames: int,
    config: HostConfig = HostConfig(),
    screenshot: Optional[str] = None,
    progress: bool = True,
) -> Engine:
    """Emulate `num_frames` frames without a window and return the engine.

    Each frame ticks the timers once and runs `instructions_per_frame`
    instructions, as the window host does.
    """
    logger = EmulatorLogger(log_level=config.log_level)
    engine = Engine.from_file(rom_path, rng=make_key(config.seed), logger=logger)
    logger.log_session_start(rom_path, {**config.asdict(), "frames": num_frames})

    try:
        for _ in frame_progress(num_frames, disable=not progress):
            engine.tick_timers()
            engine.run(config.instructions_per_frame)
            logger.log_frame(config.instructions_per_frame)
    except MachineFault as e:
        logger.log_fault(e)
        raise
    finally:
        logger.log_session_end()
        if screenshot:
            save_screenshot(engine.display, screenshot, config.scale, config.color_scheme)
            logger.info(f"Screenshot saved: {screenshot}")

    return engine


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        config = HostConfig.from_args(args)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    try:
        if args.command == "run":
            from chipvm.window import run_window
            run_window(args.rom, config)
        else:
            run_headless(args.rom, args.frames, config, args.screenshot, args.progress)
    except MachineFault:
        return 1
    except (ChipVMError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
