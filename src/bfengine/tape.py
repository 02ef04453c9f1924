from __future__ import annotations

import numpy as np

from .errors import make_tape_bounds_error

DEFAULT_TAPE_LENGTH = 30000


class Tape:
    """Fixed-length byte tape with a single cell pointer.

    The pointer never leaves ``[0, length)``: a move past either edge raises
    ``BFTapeBoundsError`` and leaves the pointer where it was.
    """

    def __init__(self, length: int = DEFAULT_TAPE_LENGTH):
        length = int(length)
        if length < 1:
            raise ValueError(f"tape length must be at least 1, got {length}")
        self.memory = np.zeros(length, dtype=np.uint8)
        self.length = length
        self.pointer = 0

    def __len__(self) -> int:
        return self.length

    @property
    def value(self) -> int:
        return int(self.memory[self.pointer])

    def store(self, byte: int) -> None:
        self.memory[self.pointer] = byte & 0xFF

    def increment(self) -> None:
        self.memory[self.pointer] = (int(self.memory[self.pointer]) + 1) & 0xFF

    def decrement(self) -> None:
        self.memory[self.pointer] = (int(self.memory[self.pointer]) - 1) & 0xFF

    def move_right(self, ip: int = -1) -> None:
        if self.pointer + 1 >= self.length:
            raise make_tape_bounds_error(ip=ip, pointer=self.pointer, direction='right', tape_length=self.length)
        self.pointer += 1

    def move_left(self, ip: int = -1) -> None:
        if self.pointer == 0:
            raise make_tape_bounds_error(ip=ip, pointer=self.pointer, direction='left', tape_length=self.length)
        self.pointer -= 1

    def snapshot(self, start: int = 0, count: int = -1) -> bytes:
        if count < 0:
            return self.memory[start:].tobytes()
        return self.memory[start:start + count].tobytes()

    def __repr__(self) -> str:
        return f"Tape(length={self.length}, pointer={self.pointer}, value={self.value})"
