#!/usr/bin/env python3
"""Headless command-line host for the CHIP-8 interpreter."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from .config import CoordinatePolicy, MachineConfig
from .debug import DisplayRenderer, MemoryInspector
from .emulator import Chip8Emulator
from .errors import ConfigError
from .keypad import KEY_LAYOUT, line_for_key
from .scheduler import TickResult

logger = logging.getLogger("chip8")


def _layout_help() -> str:
    rows = ["Keys (host -> line):"]
    for row in KEY_LAYOUT:
        rows.append("  " + "  ".join(f"{key}={line:X}" for key, line in row))
    return "\n".join(rows)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chip8",
        description="Run a CHIP-8 program headlessly",
        epilog=_layout_help(),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--rom", type=str, help="Path to the program binary")
    parser.add_argument(
        "--config", type=str, help="JSON machine configuration (flags below override it)"
    )
    parser.add_argument(
        "--ips", type=int, default=None, help="Instructions per second (default 200)"
    )
    parser.add_argument(
        "--displaymode",
        type=str,
        default=None,
        help="Sprite coordinate policy: wrap or clamp (default clamp)",
    )
    parser.add_argument(
        "--increment-index",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Advance I after FX55/FX65 block transfers",
    )
    parser.add_argument(
        "--shift-vy",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="8XY6/8XYE shift VY into VX",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for CXNN")
    parser.add_argument(
        "--steps", type=int, default=None, help="Stop after this many ticks"
    )
    parser.add_argument(
        "--hold-keys",
        type=str,
        default="",
        help="Host keys held down for the whole run, e.g. '1q'",
    )
    parser.add_argument(
        "--show-frames", action="store_true", help="Print the display on every frame"
    )
    parser.add_argument(
        "--save-display", type=str, help="Save the final display as PNG"
    )
    parser.add_argument(
        "--no-dump", action="store_true", help="Skip memory/register dumps on exit"
    )
    parser.add_argument(
        "--disassemble",
        action="store_true",
        help="Print the program listing and exit",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (DEBUG traces every instruction)",
    )
    return parser


def resolve_config(args: argparse.Namespace) -> MachineConfig:
    """Merge the optional JSON config with command-line overrides."""

    config = MachineConfig.load(args.config) if args.config else MachineConfig()
    if args.ips is not None:
        config.ips = args.ips
    if args.displaymode is not None:
        config.coordinate_policy = CoordinatePolicy.parse(args.displaymode)
    if args.increment_index is not None:
        config.increment_index_on_transfer = args.increment_index
    if args.shift_vy is not None:
        config.shift_uses_vy = args.shift_vy
    if args.seed is not None:
        config.seed = args.seed
    return config.validate()


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.rom:
        parser.error("Did not supply valid rom path (--rom)")
    if args.steps is not None and args.steps < 0:
        parser.error("--steps must not be negative")
    try:
        config = resolve_config(args)
        held = [line_for_key(key) for key in args.hold_keys]
        emu = Chip8Emulator(config)
        emu.load_rom(args.rom)
    except (ConfigError, KeyError, ValueError) as exc:
        parser.error(str(exc))

    inspector = MemoryInspector(emu.state)
    renderer = DisplayRenderer()

    if args.disassemble:
        print(inspector.program_listing())
        return 0

    emu.keypad.set_pressed(held)

    def _on_tick(result: TickResult) -> None:
        if args.show_frames and result.frame_ready:
            print(renderer.render_text(emu.get_display_buffer()))
            print()

    try:
        ticks = emu.run(max_ticks=args.steps, on_tick=_on_tick)
    except KeyboardInterrupt:
        emu.stop()
        ticks = emu.scheduler.tick_count

    logger.info("Ran %d ticks, %d instructions", ticks, emu.instruction_count)
    print(renderer.render_text(emu.get_display_buffer()))

    if args.save_display:
        renderer.save_display(emu.get_display_buffer(), args.save_display)

    if not args.no_dump:
        print()
        print(inspector.dump_memory())
        print()
        print(inspector.dump_opcodes(skip_zero=True))
        print()
        print(inspector.dump_registers(emu.fault))

    if emu.fault is not None:
        print(f"Error: {emu.fault}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
