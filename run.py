"""Command-line entry point for the CHIP-8 interpreter."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pychip8.cpu import disassemble
from pychip8.system import DEFAULT_CYCLES_PER_SECOND
from pychip8.ui import AppConfig, Chip8App, TerminalApp
from pychip8.video import MONOCHROME, PHOSPHOR

PALETTES = {"mono": MONOCHROME, "phosphor": PHOSPHOR}


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="run.py",
        description="Simple CHIP-8 interpreter",
    )
    parser.add_argument(
        "rom",
        type=Path,
        help="Path to the raw CHIP-8 ROM image",
    )
    parser.add_argument(
        "--mode",
        choices=("window", "terminal"),
        default="window",
        help="Front-end to use (default: window)",
    )
    parser.add_argument(
        "--scale",
        type=int,
        default=10,
        help="Integer window scale factor for the 64x32 display (default: 10)",
    )
    parser.add_argument(
        "--palette",
        choices=tuple(PALETTES),
        default="mono",
        help="Window colours (default: mono)",
    )
    parser.add_argument(
        "--cycles-per-second",
        type=int,
        default=DEFAULT_CYCLES_PER_SECOND,
        help=f"Instructions executed per second (default: {DEFAULT_CYCLES_PER_SECOND})",
    )
    parser.add_argument(
        "--load-store-quirk",
        action="store_true",
        help="Advance I past the block after FX55/FX65",
    )
    parser.add_argument(
        "--disassemble",
        action="store_true",
        help="Print a pseudo-assembly listing instead of running the ROM",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if not args.rom.exists():
        parser.error(f"ROM file not found: {args.rom}")
    if args.scale <= 0:
        parser.error("--scale must be positive")
    if args.cycles_per_second <= 0:
        parser.error("--cycles-per-second must be positive")

    if args.disassemble:
        try:
            sys.stdout.write(disassemble(args.rom.read_bytes()))
        except ValueError as exc:
            parser.exit(1, f"run.py: {exc}\n")
        return 0

    config = AppConfig(
        rom_path=args.rom,
        mode=args.mode,
        scale=args.scale,
        load_store_quirk=args.load_store_quirk,
        cycles_per_second=args.cycles_per_second,
        palette=PALETTES[args.palette],
    )
    app = TerminalApp(config) if args.mode == "terminal" else Chip8App(config)
    try:
        app.run()
    except RuntimeError as exc:
        parser.exit(1, f"run.py: {exc}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
