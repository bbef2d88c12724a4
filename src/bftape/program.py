from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Tuple, Union

import numpy as np

from .errors import locate, make_bracket_error, make_source_error
from .instructions import InstructionKind, decode_bytes

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Program:
    """Decoded instruction stream.

    ``kinds[i]`` is the decoded form of source byte ``i``; comments are kept
    as NO_OP so positions line up with source offsets. The last entry is
    always END_OF_PROGRAM.
    """

    kinds: Tuple[InstructionKind, ...]
    source: bytes = b''

    @classmethod
    def from_bytes(cls, source: bytes) -> Program:
        source = bytes(source)
        kinds = decode_bytes(source)
        kinds.append(InstructionKind.END_OF_PROGRAM)
        return cls(kinds=tuple(kinds), source=source)

    @classmethod
    def from_string(cls, source: str, *, encoding: str = 'utf-8') -> Program:
        return cls.from_bytes(source.encode(encoding))

    def __len__(self) -> int:
        return len(self.kinds)

    def __getitem__(self, index: int) -> InstructionKind:
        return self.kinds[index]

    def __iter__(self) -> Iterator[InstructionKind]:
        return iter(self.kinds)

    @property
    def end(self) -> int:
        return len(self.kinds) - 1

    @property
    def instruction_count(self) -> int:
        skip = (InstructionKind.NO_OP, InstructionKind.END_OF_PROGRAM)
        return sum(1 for k in self.kinds if k not in skip)

    def locate(self, index: int) -> Tuple[int, int]:
        return locate(self.source, index)

    def as_array(self) -> np.ndarray:
        return np.array(self.kinds, dtype=np.int8)

    def check_balanced(self) -> None:
        """Raise UnmatchedBracketError for the first bracket without a partner."""
        open_positions = []
        for i, kind in enumerate(self.kinds):
            if kind == InstructionKind.LOOP_BEGIN:
                open_positions.append(i)
            elif kind == InstructionKind.LOOP_END:
                if not open_positions:
                    raise make_bracket_error(
                        message="']' has no matching '['", source=self.source, position=i
                    )
                open_positions.pop()
        if open_positions:
            raise make_bracket_error(
                message="'[' has no matching ']'", source=self.source, position=open_positions[0]
            )


def build(path: Union[str, Path]) -> Program:
    """Read the whole source file and decode it."""
    p = Path(path)
    try:
        data = p.read_bytes()
    except OSError as e:
        raise make_source_error(path=str(p)) from e
    program = Program.from_bytes(data)
    logger.debug("loaded %s: %d bytes, %d instructions", p, len(data), program.instruction_count)
    return program
