from __future__ import annotations

from enum import IntEnum
from typing import Iterable, List, Union


class InstructionKind(IntEnum):
    MOVE_RIGHT = 0      # >
    MOVE_LEFT = 1       # <
    INCR_CELL = 2       # +
    DECR_CELL = 3       # -
    OUTPUT = 4          # .
    INPUT = 5           # ,
    LOOP_BEGIN = 6      # [
    LOOP_END = 7        # ]
    NO_OP = 8           # anything else
    END_OF_PROGRAM = 9


_BYTE_TO_KIND = {
    ord('>'): InstructionKind.MOVE_RIGHT,
    ord('<'): InstructionKind.MOVE_LEFT,
    ord('+'): InstructionKind.INCR_CELL,
    ord('-'): InstructionKind.DECR_CELL,
    ord('.'): InstructionKind.OUTPUT,
    ord(','): InstructionKind.INPUT,
    ord('['): InstructionKind.LOOP_BEGIN,
    ord(']'): InstructionKind.LOOP_END,
}

# Indexed by byte value; built once so decoding a file is a table lookup per byte.
_DECODE_TABLE = tuple(_BYTE_TO_KIND.get(b, InstructionKind.NO_OP) for b in range(256))


def decode(byte: Union[int, str, bytes]) -> InstructionKind:
    """Decode one source byte. Unrecognised input is a comment (NO_OP)."""
    if isinstance(byte, (str, bytes)):
        if len(byte) != 1:
            return InstructionKind.NO_OP
        byte = ord(byte)
    if 0 <= byte < 256:
        return _DECODE_TABLE[byte]
    return InstructionKind.NO_OP


def decode_bytes(data: Iterable[int]) -> List[InstructionKind]:
    table = _DECODE_TABLE
    return [table[b] for b in data]
