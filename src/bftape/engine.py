from __future__ import annotations

import logging
from enum import Enum
from typing import BinaryIO

from .cursor import Cursor
from .errors import UnmatchedBracketError, make_bracket_error
from .instructions import InstructionKind
from .program import Program
from .tape import Tape

logger = logging.getLogger(__name__)


class EofPolicy(str, Enum):
    UNCHANGED = 'unchanged'
    ZERO = 'zero'


class EngineMode(str, Enum):
    NORMAL = 'normal'
    SCANNING = 'scanning'


def read_input_byte(stream: BinaryIO, tape: Tape, eof_policy: EofPolicy) -> None:
    data = stream.read(1)
    if not data:
        if eof_policy is EofPolicy.ZERO:
            tape.write(0)
        return
    if isinstance(data, str):
        tape.write(ord(data[0]))
    else:
        tape.write(data[0])


def write_output_byte(stream: BinaryIO, value: int) -> None:
    stream.write(bytes((value,)))
    flush = getattr(stream, 'flush', None)
    if flush is not None:
        flush()


class Engine:
    """Sequential interpreter that finds loop partners by scanning the program.

    No jump table is kept: every skip or restart walks the instruction stream
    counting bracket depth, so re-entering a loop re-scans it.
    """

    def __init__(
        self,
        program: Program,
        tape: Tape,
        input_stream: BinaryIO,
        output_stream: BinaryIO,
        *,
        eof_policy: EofPolicy = EofPolicy.UNCHANGED,
    ):
        self.program = program
        self.tape = tape
        self.input_stream = input_stream
        self.output_stream = output_stream
        self.eof_policy = EofPolicy(eof_policy)
        self.cursor = Cursor(program)
        self.mode = EngineMode.NORMAL
        self.steps = 0

    def run(self) -> int:
        """Execute until END_OF_PROGRAM; return the number of instructions executed."""
        logger.debug("scan engine: running %d-byte program", len(self.program) - 1)
        cursor = self.cursor
        tape = self.tape
        K = InstructionKind

        while True:
            kind = cursor.advance()
            if kind == K.NO_OP:
                continue
            if kind == K.END_OF_PROGRAM:
                break
            self.steps += 1

            if kind == K.MOVE_RIGHT:
                tape.move(1, position=cursor.position)
            elif kind == K.MOVE_LEFT:
                tape.move(-1, position=cursor.position)
            elif kind == K.INCR_CELL:
                tape.increment()
            elif kind == K.DECR_CELL:
                tape.decrement()
            elif kind == K.OUTPUT:
                write_output_byte(self.output_stream, tape.read())
            elif kind == K.INPUT:
                read_input_byte(self.input_stream, tape, self.eof_policy)
            elif kind == K.LOOP_BEGIN:
                if tape.read() == 0:
                    self.skip_loop()
            elif kind == K.LOOP_END:
                if tape.read() != 0:
                    self.restart_loop()

        logger.debug("scan engine: finished after %d instructions", self.steps)
        return self.steps

    def skip_loop(self) -> None:
        """Move the cursor forward onto the ']' matching the current '['."""
        start = self.cursor.position
        self.mode = EngineMode.SCANNING
        loops = 1
        while loops > 0:
            kind = self.cursor.advance()
            if kind == InstructionKind.LOOP_BEGIN:
                loops += 1
            elif kind == InstructionKind.LOOP_END:
                loops -= 1
            elif kind == InstructionKind.END_OF_PROGRAM:
                raise make_bracket_error(
                    message="'[' has no matching ']'", source=self.program.source, position=start
                )
        self.mode = EngineMode.NORMAL

    def restart_loop(self) -> None:
        """Move the cursor back onto the '[' matching the current ']'."""
        start = self.cursor.position
        self.mode = EngineMode.SCANNING
        loops = 1
        while loops > 0:
            try:
                kind = self.cursor.retreat()
            except UnmatchedBracketError:
                raise make_bracket_error(
                    message="']' has no matching '['", source=self.program.source, position=start
                ) from None
            if kind == InstructionKind.LOOP_BEGIN:
                loops -= 1
            elif kind == InstructionKind.LOOP_END:
                loops += 1
        self.mode = EngineMode.NORMAL
