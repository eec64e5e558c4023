"""Adapter presenting an X buffer and a Y buffer as a series of points."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from signalacq.buffers import FrameBuffer


class XFrameBuffer(FrameBuffer, Protocol):
    def find_index(self, value: float) -> int | None: ...


@dataclass(frozen=True)
class Rect:
    """Axis aligned rectangle given by its edges."""

    left: float
    top: float
    right: float
    bottom: float

    def normalized(self) -> Rect:
        """Return the same rectangle with ``left <= right`` and ``top <= bottom``."""
        return Rect(
            min(self.left, self.right),
            min(self.top, self.bottom),
            max(self.left, self.right),
            max(self.top, self.bottom),
        )


class FrameBufferSeries:
    """Point series over an X frame buffer and a Y frame buffer.

    Only the indices inside the current rectangle of interest (widened by one
    sample on each side) are exposed.
    """

    def __init__(self, x: XFrameBuffer, y: FrameBuffer) -> None:
        self._x = x
        self._y = y
        self._index_start = 0
        self._index_end = y.size()

    def set_x(self, x: XFrameBuffer) -> None:
        self._x = x

    def size(self) -> int:
        return self._index_end - self._index_start + 1

    def sample(self, i: int) -> tuple[float, float]:
        i += self._index_start
        return (self._x.sample(i), self._y.sample(i))

    def bounding_rect(self) -> Rect:
        y_lim = self._y.limits()
        x_lim = self._x.limits()
        return Rect(
            left=x_lim.start, top=y_lim.end, right=x_lim.end, bottom=y_lim.start
        ).normalized()

    def set_rect_of_interest(self, rect: Rect) -> None:
        start = self._x.find_index(rect.left)
        end = self._x.find_index(rect.right)
        last = self._x.size() - 1

        if start is None:
            start = 0
        elif start > 0:
            start -= 1

        if end is None:
            end = last
        elif end < last:
            end += 1

        self._index_start = start
        self._index_end = end