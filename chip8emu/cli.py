# ---- Entry point ----
import argparse
import logging
import sys

from .constants import CPU_HZ, scale
from .cpu import Chip8
from .errors import Chip8Error
from .ports import RandomByteSource

logger = logging.getLogger(__name__)


def read_rom(path):
    logger.info("Loading ROM: %s", path)
    with open(path, "rb") as f:
        return f.read()


def build_parser():
    parser = argparse.ArgumentParser(
        prog="chip8emu",
        description="CHIP-8 Emulator",
    )
    parser.add_argument("rom", help="Path to a CHIP-8 program binary")
    parser.add_argument("--scale", type=int, default=scale,
                        help="Window pixels per CHIP-8 pixel (default: %(default)s)")
    parser.add_argument("--cpu-hz", type=int, default=CPU_HZ,
                        help="Instructions executed per second (default: %(default)s)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed the random byte source for repeatable runs")
    parser.add_argument("--debug", action="store_true",
                        help="Log every executed opcode (toggle in-window with F1)")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="[%(levelname)s]:  %(message)s",
        stream=sys.stdout,
    )

    chip8 = Chip8(random_byte=RandomByteSource(args.seed))
    try:
        chip8.load_program(read_rom(args.rom))
    except (OSError, Chip8Error) as e:
        logger.error("Could not load %s: %s", args.rom, e)
        return 1

    # the frontend needs a display, keep it out of the load path
    from .frontend import run
    run(chip8, scale=args.scale, cpu_hz=args.cpu_hz)
    return 0
