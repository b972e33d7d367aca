"""Fixed-capacity return address stack."""

from __future__ import annotations

from .errors import StackError

STACK_CAPACITY = 16


class CallStack:
    """Holds subroutine return addresses; depth doubles as the stack pointer."""

    def __init__(self, capacity: int = STACK_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._capacity = capacity
        self._slots = [0] * capacity
        self._depth = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def depth(self) -> int:
        return self._depth

    def push(self, address: int) -> None:
        if self._depth >= self._capacity:
            raise StackError(f"stack overflow pushing {address:#05x} (capacity {self._capacity})")
        self._slots[self._depth] = address & 0xFFFF
        self._depth += 1

    def pop(self) -> int:
        if self._depth == 0:
            raise StackError("stack underflow: return without matching call")
        self._depth -= 1
        return self._slots[self._depth]

    def peek(self) -> int | None:
        if self._depth == 0:
            return None
        return self._slots[self._depth - 1]

    def clear(self) -> None:
        self._slots = [0] * self._capacity
        self._depth = 0

    def snapshot(self) -> tuple[int, ...]:
        return tuple(self._slots[: self._depth])
