from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple


def _build_context(lines: List[str], line_no_1: int, column_1: int, *, context: int = 2) -> str:
    idx = max(1, min(line_no_1, len(lines)))
    start = max(1, idx - context)
    end = min(len(lines), idx + context)

    out: List[str] = []
    for i in range(start, end + 1):
        prefix = '>' if i == idx else ' '
        out.append(f"{prefix} {i:4d} | {lines[i - 1]}")
        if i == idx:
            out.append(f"       | {' ' * (column_1 - 1)}^")
    return "\n".join(out)


def _hint_for(message: str, *, kind: str) -> Optional[str]:
    msg = message.lower()
    if kind == 'bracket':
        if msg.startswith("'['"):
            return 'Every "[" needs a matching "]" later in the program.'
        if msg.startswith("']'"):
            return 'Every "]" needs a matching "[" earlier in the program.'
        return None
    if kind == 'tape':
        return 'Use a larger --tape-size or the wrap/clamp pointer policy.'
    return None


def locate(source: bytes, offset: int) -> Tuple[int, int]:
    """Map a byte offset to a 1-based (line, column) pair."""
    offset = max(0, min(offset, len(source)))
    line = source.count(b'\n', 0, offset) + 1
    column = offset - (source.rfind(b'\n', 0, offset) + 1) + 1
    return line, column


@dataclass
class BFError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class SourceUnavailableError(BFError):
    path: str


@dataclass
class UnmatchedBracketError(BFError):
    position: int
    line: int
    column: int
    context: str


@dataclass
class TapeOverrunError(BFError):
    position: int
    pointer: int
    capacity: int


def make_source_error(*, path: str, reason: str = 'Invalid input file.') -> SourceUnavailableError:
    return SourceUnavailableError(message=f"{reason} ({path})", path=path)


def make_bracket_error(*, message: str, source: bytes, position: int) -> UnmatchedBracketError:
    line, column = locate(source, position)
    lines = source.decode('latin-1').split('\n')
    ctx = _build_context(lines, line, column)
    hint = _hint_for(message, kind='bracket')
    hint_block = f"\nHint: {hint}" if hint else ""
    return UnmatchedBracketError(
        message=f"UnmatchedBracket: {message} (line {line}, column {column})\n{ctx}{hint_block}",
        position=position,
        line=line,
        column=column,
        context=ctx,
    )


def make_overrun_error(*, position: int, pointer: int, capacity: int) -> TapeOverrunError:
    hint = _hint_for('', kind='tape')
    return TapeOverrunError(
        message=(
            f"TapeOverrun: pointer moved to {pointer}, outside [0, {capacity}) "
            f"at instruction {position}\nHint: {hint}"
        ),
        position=position,
        pointer=pointer,
        capacity=capacity,
    )
