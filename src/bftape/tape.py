from __future__ import annotations

from enum import Enum
from typing import Optional

import numpy as np

from .errors import make_overrun_error

TAPE_SIZE = 30_000


class PointerPolicy(str, Enum):
    WRAP = 'wrap'
    CLAMP = 'clamp'
    FAIL = 'fail'


class Tape:
    """Fixed-capacity byte cells plus the data pointer."""

    def __init__(self, capacity: int = TAPE_SIZE, policy: PointerPolicy = PointerPolicy.WRAP):
        if capacity <= 0:
            raise ValueError(f"tape capacity must be positive, got {capacity}")
        self.cells = np.zeros(capacity, dtype=np.uint8)
        self.pointer = 0
        self.policy = PointerPolicy(policy)

    @property
    def capacity(self) -> int:
        return len(self.cells)

    def move(self, delta: int, *, position: int = -1) -> None:
        target = self.pointer + delta
        size = len(self.cells)
        if 0 <= target < size:
            self.pointer = target
        elif self.policy is PointerPolicy.WRAP:
            self.pointer = target % size
        elif self.policy is PointerPolicy.CLAMP:
            self.pointer = 0 if target < 0 else size - 1
        else:
            raise make_overrun_error(position=position, pointer=target, capacity=size)

    def read(self) -> int:
        return int(self.cells[self.pointer])

    def write(self, value: int) -> None:
        self.cells[self.pointer] = value & 0xFF

    def increment(self) -> None:
        self.cells[self.pointer] = (int(self.cells[self.pointer]) + 1) & 0xFF

    def decrement(self) -> None:
        self.cells[self.pointer] = (int(self.cells[self.pointer]) - 1) & 0xFF

    def snapshot(self, start: int = 0, stop: Optional[int] = None) -> bytes:
        return self.cells[start:stop].tobytes()
