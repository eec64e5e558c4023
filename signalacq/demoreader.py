"""Reader that generates demonstration data instead of reading a device."""

from __future__ import annotations

import math

from signalacq.device import AbstractDevice
from signalacq.reader import AbstractReader
from signalacq.samplepack import SamplePack

#: Interval between generated samples, in milliseconds.
INTERVAL_MS = 100

_PERIOD = 100


class DemoReader(AbstractReader):
    """Produces the Fourier components of a square wave, one per channel.

    ``tick`` is meant to be called every ``INTERVAL_MS`` while running.
    It should not be enabled while a real port is open.
    """

    def __init__(self, device: AbstractDevice, num_channels: int = 1) -> None:
        super().__init__(device)
        if num_channels < 1:
            raise ValueError("number of channels must be positive")
        self._num_channels = num_channels
        self._count = 0
        self._running = False

    def num_channels(self) -> int:
        return self._num_channels

    def set_num_channels(self, value: int) -> None:
        if value < 1:
            raise ValueError("number of channels must be positive")
        self._num_channels = value
        self._update_num_channels()

    def enable(self, enabled: bool = True) -> None:
        self._running = enabled
        super().enable(enabled)

    def is_running(self) -> bool:
        return self._running

    def tick(self) -> None:
        """Advance the generator one step and feed out a sample if not paused."""
        self._count += 1
        if self._count >= _PERIOD:
            self._count = 0

        if self.paused:
            return

        samples = SamplePack(1, self._num_channels)
        for ci in range(self._num_channels):
            harmonic = ci + 1
            samples.data(ci)[0] = (
                4 * math.sin(2 * math.pi * (harmonic * self._count) / _PERIOD)
                / (2 * harmonic * math.pi)
            )
        self.feed_out(samples)

    def read_data(self) -> int:
        return 0