from __future__ import annotations

import argparse
import logging
import os
import sys
import time
from typing import List, Optional

from .api import RunOptions, make_engine
from .engine import EofPolicy
from .errors import BFError
from .program import build
from .tape import TAPE_SIZE, PointerPolicy, Tape

USAGE = """Usage

    bftape <path-to-source>
"""


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bftape",
        description="Run a Brainfuck program read from a file.",
    )
    parser.add_argument("path", nargs="?", help="Program source file")
    parser.add_argument("--jump-table", action="store_true", help="Precompute bracket partners and run compiled batches")
    parser.add_argument("--eof", choices=[p.value for p in EofPolicy], default=EofPolicy.UNCHANGED.value,
                        help="Cell value on end of input (default: unchanged)")
    parser.add_argument("--pointer", choices=[p.value for p in PointerPolicy], default=PointerPolicy.WRAP.value,
                        help="What moving past either tape end does (default: wrap)")
    parser.add_argument("--tape-size", type=int, default=TAPE_SIZE, help=f"Number of cells (default {TAPE_SIZE})")
    parser.add_argument("--strict", action="store_true", help="Reject unbalanced brackets before running")
    parser.add_argument("--stats", action="store_true", help="Print timing and instruction count to stderr")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = _parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)5s %(name)s: %(message)s")

    if args.path is None:
        sys.stderr.write(USAGE)
        return 1
    if not os.path.isfile(args.path):
        print("Invalid input file.", file=sys.stderr)
        return 1
    if args.tape_size <= 0:
        print(f"Invalid tape size: {args.tape_size}", file=sys.stderr)
        return 1

    options = RunOptions(
        tape_size=args.tape_size,
        pointer_policy=PointerPolicy(args.pointer),
        eof_policy=EofPolicy(args.eof),
        jump_table=args.jump_table,
        strict=args.strict,
    )

    try:
        start = time.time()
        program = build(args.path)
        tape = Tape(options.tape_size, options.pointer_policy)
        engine = make_engine(program, tape, sys.stdin.buffer, sys.stdout.buffer, options=options)
        loaded = time.time()
        steps = engine.run()
        end = time.time()
    except BFError as e:
        sys.stdout.flush()
        print(e, file=sys.stderr)
        return 2

    if args.stats:
        print(f"Loading took {(loaded - start) * 1000:.2f} ms", file=sys.stderr)
        print(f"Execution took {(end - loaded) * 1000:.2f} ms ({steps} instructions)", file=sys.stderr)
    return 0
