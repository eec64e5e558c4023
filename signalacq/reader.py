"""Base class of readers that turn device bytes into sample packs."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from signalacq.device import AbstractDevice
from signalacq.samplepack import SamplePack


class AbstractReader(ABC):
    """Reads from a device when enabled and feeds sample packs to sinks.

    Sinks must provide ``feed_in(samples)``; if they also provide
    ``set_num_channels(num_channels, has_x)`` they are told about channel
    count changes.
    """

    def __init__(self, device: AbstractDevice) -> None:
        self._device = device
        self._sinks: list[Any] = []
        self._bytes_read = 0
        self.paused = False

    @abstractmethod
    def num_channels(self) -> int:
        """Number of channels this reader produces."""

    def has_x(self) -> bool:
        return False

    def connect_sink(self, sink: Any) -> None:
        if sink in self._sinks:
            raise ValueError("sink is already connected")
        self._sinks.append(sink)
        self._notify_num_channels(sink)

    def disconnect_sinks(self) -> None:
        self._sinks.clear()

    def feed_out(self, samples: SamplePack) -> None:
        for sink in list(self._sinks):
            sink.feed_in(samples)

    def _notify_num_channels(self, sink: Any) -> None:
        setter = getattr(sink, "set_num_channels", None)
        if setter is not None:
            setter(self.num_channels(), self.has_x())

    def _update_num_channels(self) -> None:
        for sink in list(self._sinks):
            self._notify_num_channels(sink)

    def enable(self, enabled: bool = True) -> None:
        """Start or stop reading; disabling also disconnects all sinks."""
        if enabled:
            self._device.add_ready_read_listener(self._on_data_ready)
        else:
            self._device.remove_ready_read_listener(self._on_data_ready)
            self.disconnect_sinks()

    def pause(self, enabled: bool) -> None:
        """Keep reading but stop committing data while paused."""
        self.paused = enabled

    def get_bytes_read(self) -> int:
        """Return and reset the count of bytes read."""
        count = self._bytes_read
        self._bytes_read = 0
        return count

    def _on_data_ready(self) -> None:
        self._bytes_read += self.read_data()

    @abstractmethod
    def read_data(self) -> int:
        """Read available data from the device; return bytes consumed."""