from __future__ import annotations

from .errors import make_bracket_error
from .instructions import InstructionKind
from .program import Program


class Cursor:
    """Read position into a Program, starting just before index 0."""

    def __init__(self, program: Program):
        self.program = program
        self._pos = -1
        self._end = program.end

    @property
    def position(self) -> int:
        return self._pos

    def peek(self) -> InstructionKind:
        if self._pos < 0:
            return InstructionKind.NO_OP
        return self.program.kinds[self._pos]

    def advance(self) -> InstructionKind:
        if self._pos < self._end:
            self._pos += 1
        return self.program.kinds[self._pos]

    def retreat(self) -> InstructionKind:
        # Only a backward bracket scan retreats; hitting the start means it never found its '['.
        if self._pos <= 0:
            raise make_bracket_error(
                message="']' has no matching '['",
                source=self.program.source,
                position=max(self._pos, 0),
            )
        self._pos -= 1
        return self.program.kinds[self._pos]
