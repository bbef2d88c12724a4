from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Optional, Union

from .engine import Engine, EofPolicy
from .jumptable import JumpTableEngine
from .program import Program, build
from .tape import TAPE_SIZE, PointerPolicy, Tape


@dataclass(frozen=True)
class RunOptions:
    tape_size: int = TAPE_SIZE
    pointer_policy: PointerPolicy = PointerPolicy.WRAP
    eof_policy: EofPolicy = EofPolicy.UNCHANGED
    jump_table: bool = False
    strict: bool = False


@dataclass(frozen=True)
class RunResult:
    output: bytes
    tape: Tape
    steps: int


def make_engine(
    program: Program,
    tape: Tape,
    input_stream: BinaryIO,
    output_stream: BinaryIO,
    *,
    options: Optional[RunOptions] = None,
):
    opts = options or RunOptions()
    if opts.strict:
        program.check_balanced()
    engine_cls = JumpTableEngine if opts.jump_table else Engine
    return engine_cls(program, tape, input_stream, output_stream, eof_policy=opts.eof_policy)


def run_program(
    program: Program,
    *,
    input_stream: Optional[BinaryIO] = None,
    output_stream: Optional[BinaryIO] = None,
    options: Optional[RunOptions] = None,
) -> RunResult:
    """Run ``program`` on a fresh tape.

    With no ``output_stream`` the output is collected and returned in
    ``RunResult.output``; otherwise it goes to the given stream and
    ``output`` is empty.
    """
    opts = options or RunOptions()
    tape = Tape(opts.tape_size, opts.pointer_policy)
    inp = input_stream if input_stream is not None else io.BytesIO()
    out = output_stream if output_stream is not None else io.BytesIO()
    steps = make_engine(program, tape, inp, out, options=opts).run()
    collected = out.getvalue() if output_stream is None else b''
    return RunResult(output=collected, tape=tape, steps=steps)


def run_bytes(source: bytes, input_data: bytes = b'', *, options: Optional[RunOptions] = None) -> RunResult:
    return run_program(Program.from_bytes(source), input_stream=io.BytesIO(input_data), options=options)


def run_string(source: str, input_data: bytes = b'', *, options: Optional[RunOptions] = None) -> RunResult:
    return run_program(Program.from_string(source), input_stream=io.BytesIO(input_data), options=options)


def run_file(
    path: Union[str, Path],
    *,
    input_stream: Optional[BinaryIO] = None,
    output_stream: Optional[BinaryIO] = None,
    options: Optional[RunOptions] = None,
) -> RunResult:
    return run_program(build(path), input_stream=input_stream, output_stream=output_stream, options=options)
