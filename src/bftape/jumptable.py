from __future__ import annotations

import logging
from typing import BinaryIO

import numpy as np
from numba import njit

from .engine import EofPolicy, read_input_byte, write_output_byte
from .errors import make_bracket_error
from .instructions import InstructionKind
from .program import Program
from .tape import PointerPolicy, Tape

logger = logging.getLogger(__name__)

BATCH_STEPS = 1_000_000

STOP_OUTPUT = 1
STOP_INPUT = 2
STOP_END = 3
STOP_BUDGET = 4
STOP_OVERRUN = 5

_POLICY_CODES = {PointerPolicy.WRAP: 0, PointerPolicy.CLAMP: 1, PointerPolicy.FAIL: 2}

_RIGHT = int(InstructionKind.MOVE_RIGHT)
_LEFT = int(InstructionKind.MOVE_LEFT)
_INCR = int(InstructionKind.INCR_CELL)
_DECR = int(InstructionKind.DECR_CELL)
_OUT = int(InstructionKind.OUTPUT)
_IN = int(InstructionKind.INPUT)
_BEGIN = int(InstructionKind.LOOP_BEGIN)
_LEND = int(InstructionKind.LOOP_END)
_NOOP = int(InstructionKind.NO_OP)
_EOP = int(InstructionKind.END_OF_PROGRAM)


def build_jump_table(program: Program) -> np.ndarray:
    """Map every bracket index to its partner; other indices map to themselves."""
    jumps = np.arange(len(program), dtype=np.int32)
    stack = []
    for i, kind in enumerate(program.kinds):
        if kind == InstructionKind.LOOP_BEGIN:
            stack.append(i)
        elif kind == InstructionKind.LOOP_END:
            if not stack:
                raise make_bracket_error(
                    message="']' has no matching '['", source=program.source, position=i
                )
            start = stack.pop()
            jumps[start] = i
            jumps[i] = start
    if stack:
        raise make_bracket_error(
            message="'[' has no matching ']'", source=program.source, position=stack[0]
        )
    return jumps


@njit(cache=False)
def _execute_batch(kinds, jumps, memory, pc, pointer, policy, max_steps):
    """
    Run from ``pc`` until an I/O instruction, the end of the program, a
    pointer overrun under the fail policy, or ``max_steps`` loop iterations.

    I/O and overrun stops leave ``pc`` on the offending instruction so the
    caller can service it. Returns (pc, pointer, stop_reason, executed).
    """
    mem_len = len(memory)
    stop_reason = STOP_BUDGET
    executed = 0
    iterations = 0

    while iterations < max_steps:
        iterations += 1
        command = kinds[pc]

        if command == _NOOP:
            pc += 1
            continue
        if command == _EOP:
            stop_reason = STOP_END
            break
        if command == _OUT:
            stop_reason = STOP_OUTPUT
            break
        if command == _IN:
            stop_reason = STOP_INPUT
            break

        if command == _RIGHT:
            if pointer + 1 >= mem_len:
                if policy == 0:
                    pointer = 0
                elif policy == 2:
                    stop_reason = STOP_OVERRUN
                    break
            else:
                pointer += 1
        elif command == _LEFT:
            if pointer == 0:
                if policy == 0:
                    pointer = mem_len - 1
                elif policy == 2:
                    stop_reason = STOP_OVERRUN
                    break
            else:
                pointer -= 1
        elif command == _INCR:
            memory[pointer] = (memory[pointer] + 1) & 255
        elif command == _DECR:
            memory[pointer] = (memory[pointer] - 1) & 255
        elif command == _BEGIN:
            if memory[pointer] == 0:
                pc = jumps[pc]
        elif command == _LEND:
            if memory[pointer] != 0:
                pc = jumps[pc]

        executed += 1
        pc += 1

    return pc, pointer, stop_reason, executed


class JumpTableEngine:
    """Engine variant that precomputes bracket partners and runs compiled batches."""

    def __init__(
        self,
        program: Program,
        tape: Tape,
        input_stream: BinaryIO,
        output_stream: BinaryIO,
        *,
        eof_policy: EofPolicy = EofPolicy.UNCHANGED,
        batch_steps: int = BATCH_STEPS,
    ):
        self.program = program
        self.tape = tape
        self.input_stream = input_stream
        self.output_stream = output_stream
        self.eof_policy = EofPolicy(eof_policy)
        self.batch_steps = batch_steps
        self.jumps = build_jump_table(program)
        self.kinds = program.as_array()
        self.pc = 0
        self.steps = 0

    def run(self) -> int:
        logger.debug("jump-table engine: running %d-byte program", len(self.program) - 1)
        tape = self.tape
        policy = _POLICY_CODES[tape.policy]

        while True:
            pc, pointer, stop_reason, executed = _execute_batch(
                self.kinds, self.jumps, tape.cells, self.pc, tape.pointer, policy, self.batch_steps
            )
            self.pc = int(pc)
            tape.pointer = int(pointer)
            self.steps += int(executed)

            if stop_reason == STOP_END:
                break
            if stop_reason == STOP_OUTPUT:
                write_output_byte(self.output_stream, tape.read())
            elif stop_reason == STOP_INPUT:
                read_input_byte(self.input_stream, tape, self.eof_policy)
            elif stop_reason == STOP_OVERRUN:
                delta = 1 if self.kinds[self.pc] == _RIGHT else -1
                tape.move(delta, position=self.pc)
            else:
                continue
            self.steps += 1
            self.pc += 1

        logger.debug("jump-table engine: finished after %d instructions", self.steps)
        return self.steps
