"""Reader for a plain stream of binary samples."""

from __future__ import annotations

from signalacq.device import AbstractDevice
from signalacq.numberformat import Endianness, NumberFormat
from signalacq.reader import AbstractReader
from signalacq.samplepack import SamplePack


class BinaryStreamReader(AbstractReader):
    """Reads interleaved channel samples with no framing.

    Synchronisation is only possible by requesting a byte or sample skip.
    """

    def __init__(
        self,
        device: AbstractDevice,
        num_channels: int = 1,
        number_format: NumberFormat = NumberFormat.UINT8,
        endianness: Endianness = Endianness.LITTLE,
    ) -> None:
        super().__init__(device)
        if num_channels < 1:
            raise ValueError("number of channels must be positive")
        self._num_channels = num_channels
        self._endianness = endianness
        self._skip_byte_requested = False
        self._skip_sample_requested = False
        self._number_format = NumberFormat.UINT8
        self._sample_size = 1
        self.set_number_format(number_format)

    def num_channels(self) -> int:
        return self._num_channels

    def set_num_channels(self, value: int) -> None:
        if value < 1:
            raise ValueError("number of channels must be positive")
        self._num_channels = value
        self._update_num_channels()

    def set_number_format(self, number_format: NumberFormat) -> None:
        if number_format is NumberFormat.INVALID:
            raise ValueError("invalid number format")
        self._number_format = number_format
        self._sample_size = number_format.size()

    def set_endianness(self, endianness: Endianness) -> None:
        self._endianness = endianness

    def request_skip_byte(self) -> None:
        """Drop one byte at the next read."""
        self._skip_byte_requested = True

    def request_skip_sample(self) -> None:
        """Drop one sample at the next read."""
        self._skip_sample_requested = True

    def read_data(self) -> int:
        package_size = self._sample_size * self._num_channels
        available = self._device.bytes_available()
        total_read = 0

        if self._skip_byte_requested and available > 0:
            self._device.read(1)
            total_read += 1
            self._skip_byte_requested = False
            available -= 1

        if self._skip_sample_requested and available >= self._sample_size:
            self._device.read(self._sample_size)
            total_read += self._sample_size
            self._skip_sample_requested = False
            available -= self._sample_size

        if available < package_size:
            return total_read

        num_packages = available // package_size
        num_bytes = num_packages * package_size
        total_read += num_bytes

        if self.paused:
            self._device.read(num_bytes)
            return total_read

        samples = SamplePack(num_packages, self._num_channels)
        channels = [samples.data(ci) for ci in range(self._num_channels)]
        for i in range(num_packages):
            for channel in channels:
                raw = self._device.read(self._sample_size)
                channel[i] = self._number_format.decode(raw, self._endianness)
        self.feed_out(samples)
        return total_read