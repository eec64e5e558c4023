"""A block of samples for one or more channels, optionally with an X channel."""

from __future__ import annotations


class SamplePack:
    """Holds ``num_samples`` samples for each of ``num_channels`` channels.

    Channel data is stored as mutable lists of floats, initialised to zero.
    """

    __slots__ = ("_num_samples", "_num_channels", "_x_data", "_y_data")

    def __init__(self, num_samples: int, num_channels: int, has_x: bool = False) -> None:
        if num_samples <= 0 or num_channels <= 0:
            raise ValueError("a sample pack needs at least one sample and one channel")
        self._num_samples = num_samples
        self._num_channels = num_channels
        self._y_data = [[0.0] * num_samples for _ in range(num_channels)]
        self._x_data: list[float] | None = [0.0] * num_samples if has_x else None

    def num_samples(self) -> int:
        return self._num_samples

    def num_channels(self) -> int:
        return self._num_channels

    def has_x(self) -> bool:
        return self._x_data is not None

    def data(self, channel: int) -> list[float]:
        """Return the mutable sample list of ``channel``."""
        if not 0 <= channel < self._num_channels:
            raise IndexError(f"channel {channel} out of range")
        return self._y_data[channel]

    def x_data(self) -> list[float]:
        """Return the mutable X sample list."""
        if self._x_data is None:
            raise ValueError("sample pack has no X channel")
        return self._x_data

    def copy(self) -> SamplePack:
        """Return an independent copy of this pack."""
        other = SamplePack(self._num_samples, self._num_channels, self.has_x())
        other._y_data = [list(channel) for channel in self._y_data]
        if self._x_data is not None:
            other._x_data = list(self._x_data)
        return other