"""Sink that records sample packs to a CSV file."""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from enum import Enum
from pathlib import Path
from typing import TextIO

from signalacq.samplepack import SamplePack

_log = logging.getLogger(__name__)


class TimestampOption(Enum):
    """Whether and how each row is timestamped."""

    DISABLED = "disabled"
    SECONDS = "seconds"
    SECONDS_PRECISION = "seconds_precision"
    MILLISECONDS = "milliseconds"


class DataRecorder:
    """Writes incoming samples as CSV rows, one row per sample index.

    Recording must be started before the recorder is fed and the recorder
    should be disconnected from its source before it is stopped.
    """

    def __init__(self) -> None:
        #: Flush the file after every written pack.
        self.disable_buffering = False
        #: Use CR+LF line endings; changing it mid-recording corrupts the file.
        self.windows_le = False
        self._decimals = 6
        self._file: TextIO | None = None
        self._sep = ","
        self._timestamp = TimestampOption.DISABLED
        self._last_num_channels = 0

    def set_decimals(self, decimals: int) -> None:
        """Set the number of decimals written for each value."""
        if decimals < 0:
            raise ValueError("number of decimals cannot be negative")
        self._decimals = decimals

    def is_recording(self) -> bool:
        return self._file is not None

    def _le(self) -> str:
        return "\r\n" if self.windows_le else "\n"

    def start_recording(
        self,
        file_name: str | Path,
        separator: str,
        channel_names: Sequence[str],
        ts: TimestampOption = TimestampOption.DISABLED,
    ) -> None:
        """Open ``file_name`` and write the header line.

        No header is written when ``channel_names`` is empty. Missing
        directories are created. Raises ``OSError`` if the file cannot be
        opened.
        """
        if self._file is not None:
            raise RuntimeError("recording is already in progress")
        self._sep = separator
        self._timestamp = ts

        path = Path(file_name)
        path.parent.mkdir(parents=True, exist_ok=True)
        self._file = open(path, "w", encoding="utf-8", newline="")

        if channel_names:
            header = ""
            if ts is not TimestampOption.DISABLED:
                header += "timestamp" + separator
            header += separator.join(channel_names)
            self._file.write(header + self._le())
            self._last_num_channels = len(channel_names)

    def feed_in(self, data: SamplePack) -> None:
        """Write all samples of ``data`` as rows."""
        if self._file is None:
            raise RuntimeError("recording has not been started")
        if data.has_x():
            raise ValueError("recording X channel data is not supported")

        num_channels = data.num_channels()
        if self._last_num_channels and num_channels != self._last_num_channels:
            _log.warning(
                "Number of channels changed from %d to %d during recording, "
                "CSV file is corrupted but no data will be lost.",
                self._last_num_channels,
                num_channels,
            )
        self._last_num_channels = num_channels

        channels = [data.data(ci) for ci in range(num_channels)]
        le = self._le()
        for row in zip(*channels):
            line = ""
            if self._timestamp is not TimestampOption.DISABLED:
                line += self._format_timestamp() + self._sep
            line += self._sep.join(f"{value:.{self._decimals}f}" for value in row)
            self._file.write(line + le)

        if self.disable_buffering:
            self._file.flush()

    def stop_recording(self) -> None:
        """Close the recording file."""
        if self._file is None:
            raise RuntimeError("recording has not been started")
        self._file.close()
        self._file = None
        self._last_num_channels = 0

    def _format_timestamp(self) -> str:
        ms = time.time_ns() // 1_000_000
        if self._timestamp is TimestampOption.SECONDS:
            return str(ms // 1000)
        if self._timestamp is TimestampOption.SECONDS_PRECISION:
            return f"{ms // 1000}.{ms % 1000}"
        if self._timestamp is TimestampOption.MILLISECONDS:
            return str(ms)
        raise ValueError("timestamps are disabled")