"""Headless command line runner."""

import argparse
import sys
from pathlib import Path

from chip8vm.chip import Chip
from chip8vm.constants import SCREEN_HEIGHT, SCREEN_WIDTH
from chip8vm.errors import ExecutionError, RomLoadError
from chip8vm.logging import get_logger
from chip8vm.rendering import save_screenshot, screen_to_ascii


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chip8vm",
        description="Run a CHIP-8 ROM headless for a fixed number of ticks",
    )
    parser.add_argument("rom", type=Path, help="Path to the ROM image")
    parser.add_argument(
        "--ticks",
        type=int,
        default=600,
        help="Number of instructions to execute (default: 600)",
    )
    parser.add_argument("--width", type=int, default=SCREEN_WIDTH, help="Screen width in pixels")
    parser.add_argument("--height", type=int, default=SCREEN_HEIGHT, help="Screen height in pixels")
    parser.add_argument("--seed", type=int, default=0, help="Seed for the random instruction")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Console log level (DEBUG traces every instruction)",
    )
    parser.add_argument("--screenshot", type=Path, help="Write the final screen to this PNG file")
    parser.add_argument("--ascii", action="store_true", help="Print the final screen as text")
    parser.add_argument("--progress", action="store_true", help="Show a progress bar")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    if args.ticks < 0:
        parser.error("--ticks must not be negative")

    logger = get_logger()
    logger.set_level(args.log_level)

    try:
        chip = Chip(args.width, args.height, seed=args.seed, logger=logger)
    except ValueError as exc:
        parser.error(str(exc))

    try:
        chip.load_rom(args.rom)
    except RomLoadError as exc:
        logger.error(f"Error loading ROM: {exc}")
        return 1

    status = 0
    try:
        executed = chip.run(args.ticks, progress=args.progress)
        logger.info(f"Executed {executed} instructions, pc=0x{chip.program_counter:03X}")
    except ExecutionError:
        status = 1

    if args.ascii:
        print(screen_to_ascii(chip.screen_buffer, chip.width, chip.height))
    if args.screenshot:
        save_screenshot(args.screenshot, chip.screen_buffer, chip.width, chip.height)
        logger.info(f"Screenshot saved: {args.screenshot}")
    return status


if __name__ == "__main__":
    sys.exit(main())
