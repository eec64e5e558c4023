"""Reader for delimiter separated ASCII lines of numbers."""

from __future__ import annotations

import logging
from enum import Enum

from signalacq.device import AbstractDevice
from signalacq.reader import AbstractReader
from signalacq.samplepack import SamplePack

_log = logging.getLogger(__name__)

_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1


class FilterMode(Enum):
    """How lines are filtered by a prefix."""

    DISABLED = "disabled"
    INCLUDE = "include"
    EXCLUDE = "exclude"


def _to_int(text: str, base: int) -> int | None:
    if "_" in text:
        return None
    try:
        value = int(text.strip(), base)
    except ValueError:
        return None
    if not _INT_MIN <= value <= _INT_MAX:
        return None
    return value


def _to_float(text: str) -> float | None:
    if "_" in text:
        return None
    try:
        return float(text)
    except ValueError:
        return None


class AsciiReader(AbstractReader):
    """Parses one sample per channel from each text line.

    A channel count of 0 means the count is taken from the incoming data.
    Arduino style labels (``name:value``) are stripped from values.
    """

    def __init__(
        self,
        device: AbstractDevice,
        num_channels: int = 0,
        delimiter: str = ",",
        hex_data: bool = False,
        filter_mode: FilterMode = FilterMode.DISABLED,
        filter_prefix: str = "",
    ) -> None:
        super().__init__(device)
        if num_channels < 0:
            raise ValueError("number of channels cannot be negative")
        self._num_channels = num_channels
        self._auto_num_channels = num_channels == 0
        self._delimiter = ""
        self.set_delimiter(delimiter)
        self._hex_data = hex_data
        self._filter_mode = filter_mode
        self._filter_prefix = filter_prefix
        self._first_read_after_enable = False

    def num_channels(self) -> int:
        return self._num_channels or 1

    def set_num_channels(self, value: int) -> None:
        """Set a fixed channel count, or 0 for automatic detection."""
        if value < 0:
            raise ValueError("number of channels cannot be negative")
        self._num_channels = value
        self._update_num_channels()
        self._auto_num_channels = value == 0

    def set_delimiter(self, delimiter: str) -> None:
        if len(delimiter) != 1:
            raise ValueError("delimiter must be a single character")
        self._delimiter = delimiter

    def set_filter(self, mode: FilterMode, prefix: str) -> None:
        self._filter_mode = mode
        self._filter_prefix = prefix

    def set_hex(self, hex_data: bool) -> None:
        self._hex_data = hex_data

    def enable(self, enabled: bool = True) -> None:
        """Start or stop reading; the first line after enabling is discarded."""
        if enabled:
            self._first_read_after_enable = True
        super().enable(enabled)

    def read_data(self) -> int:
        num_bytes_read = 0
        while self._device.can_read_line():
            raw = self._device.read_line()
            num_bytes_read += len(raw)

            # the first line may be partial, drop it
            if self._first_read_after_enable:
                self._first_read_after_enable = False
                continue
            if self.paused:
                continue

            line = raw.decode("utf-8", errors="replace").strip()
            if not line:
                continue

            if self._filter_mode is FilterMode.EXCLUDE:
                if line.startswith(self._filter_prefix):
                    continue
            elif self._filter_mode is FilterMode.INCLUDE:
                if not line.startswith(self._filter_prefix):
                    continue
                line = line[len(self._filter_prefix):].strip()

            samples = self.parse_line(line)
            if samples is None:
                continue

            if self._auto_num_channels:
                nc = samples.num_channels()
                if nc != self._num_channels:
                    self._num_channels = nc
                    self._update_num_channels()

            self.feed_out(samples)
        return num_bytes_read

    def parse_line(self, line: str) -> SamplePack | None:
        """Parse a line into a one-sample pack; ``None`` if it is malformed."""
        values = [part for part in line.split(self._delimiter) if part]
        count = len(values)
        if not count or (not self._auto_num_channels and count != self._num_channels):
            _log.warning("Line parsing error: invalid number of channels! Read line: %r", line)
            return None

        samples = SamplePack(1, count)
        for ci, value in enumerate(values):
            stripped = value.rsplit(":", 1)[-1]
            if self._hex_data:
                number: float | int | None = _to_int(stripped, 16)
            else:
                number = _to_float(stripped)
                if number is None:
                    number = _to_int(stripped, 0)
            if number is None:
                _log.warning("Data parsing error for channel: %d. Read line: %r", ci, line)
                return None
            samples.data(ci)[0] = float(number)
        return samples