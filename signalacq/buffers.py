"""Frame buffers holding or generating plot data."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class Range:
    """Closed interval ``[start, end]``."""

    start: float
    end: float


class FrameBuffer(Protocol):
    def size(self) -> int: ...

    def sample(self, i: int) -> float: ...

    def limits(self) -> Range: ...


def _limits_of(values: Iterable[float]) -> Range:
    values = list(values)
    return Range(min(values), max(values))


class IndexBuffer:
    """X buffer whose sample value is its index.

    ``find_index`` returns ``None`` for values out of range.
    """

    def __init__(self, n: int) -> None:
        self._size = n

    def size(self) -> int:
        return self._size

    def resize(self, n: int) -> None:
        self._size = n

    def sample(self, i: int) -> float:
        if not 0 <= i < self._size:
            raise IndexError(f"index {i} out of range")
        return float(i)

    def limits(self) -> Range:
        return Range(0.0, self._size - 1.0)

    def find_index(self, value: float) -> int | None:
        if value < 0 or value > self._size - 1:
            return None
        return int(value)


class LinIndexBuffer:
    """X buffer with linearly spaced values between ``start`` and ``end``."""

    def __init__(self, n: int, start: float, end: float) -> None:
        if n < 2:
            raise ValueError("a linear index buffer needs at least 2 samples")
        self._size = n
        self.set_limits(Range(start, end))

    def size(self) -> int:
        return self._size

    def sample(self, i: int) -> float:
        return self._limits.start + i * self._step

    def limits(self) -> Range:
        return self._limits

    def resize(self, n: int) -> None:
        if n < 2:
            raise ValueError("a linear index buffer needs at least 2 samples")
        self._size = n
        self.set_limits(self._limits)

    def find_index(self, value: float) -> int | None:
        if value < self._limits.start or value > self._limits.end:
            return None
        if self._step == 0:
            return 0
        r = int((value - self._limits.start) / self._step)
        # clamp against floating point inaccuracies
        return min(max(r, 0), self._size - 1)

    def set_limits(self, lim: Range) -> None:
        """Set the first and last sample values."""
        self._limits = lim
        self._step = (lim.end - lim.start) / (self._size - 1)


class ReadOnlyBuffer:
    """Immutable snapshot of sample data."""

    def __init__(self, values: Iterable[float]) -> None:
        self._data = tuple(float(v) for v in values)
        if not self._data:
            raise ValueError("a read only buffer cannot be empty")
        self._limits = _limits_of(self._data)

    @classmethod
    def from_buffer(
        cls, source: FrameBuffer, start: int = 0, n: int | None = None
    ) -> ReadOnlyBuffer:
        """Copy ``n`` samples of ``source`` starting at ``start`` (all by default)."""
        size = source.size()
        if size <= 0:
            raise ValueError("source buffer is empty")
        if n is None:
            n = size - start
        if start < 0 or n <= 0 or start + n > size:
            raise ValueError("slice exceeds source buffer")
        buffer = cls(source.sample(start + i) for i in range(n))
        if start == 0 and n == size:
            buffer._limits = source.limits()
        return buffer

    def size(self) -> int:
        return len(self._data)

    def sample(self, i: int) -> float:
        return self._data[i]

    def limits(self) -> Range:
        return self._limits


class RingBuffer:
    """Fixed size buffer keeping the most recent samples, oldest first."""

    def __init__(self, n: int) -> None:
        if n < 1:
            raise ValueError("ring buffer size must be positive")
        self._data = [0.0] * n
        self._head = 0
        self._lim_cache: Range | None = Range(0.0, 0.0)

    def _ordered(self) -> list[float]:
        return self._data[self._head:] + self._data[: self._head]

    def size(self) -> int:
        return len(self._data)

    def sample(self, i: int) -> float:
        size = len(self._data)
        if not 0 <= i < size:
            raise IndexError(f"index {i} out of range")
        return self._data[(self._head + i) % size]

    def limits(self) -> Range:
        if self._lim_cache is None:
            self._lim_cache = _limits_of(self._data)
        return self._lim_cache

    def resize(self, n: int) -> None:
        """Change size, padding with zeros at the start or dropping oldest samples."""
        if n < 1:
            raise ValueError("ring buffer size must be positive")
        size = len(self._data)
        if n == size:
            return
        ordered = self._ordered()
        if n > size:
            self._data = [0.0] * (n - size) + ordered
        else:
            self._data = ordered[size - n:]
        self._head = 0
        self._lim_cache = None

    def add_samples(self, samples: Iterable[float]) -> None:
        """Append samples, discarding the oldest ones."""
        new = [float(s) for s in samples]
        count = len(new)
        size = len(self._data)
        if count < size:
            room = size - self._head
            if count <= room:
                self._data[self._head:self._head + count] = new
                self._head = 0 if count == room else self._head + count
            else:
                self._data[self._head:] = new[:room]
                self._data[: count - room] = new[room:]
                self._head = count - room
        else:
            self._data = new[count - size:]
            self._head = 0
        self._lim_cache = None

    def clear(self) -> None:
        self._data = [0.0] * len(self._data)
        self._lim_cache = Range(0.0, 0.0)