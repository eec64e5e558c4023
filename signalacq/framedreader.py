"""Reader for binary data in a configurable framed format."""

from __future__ import annotations

import logging
from enum import Enum, IntFlag

from signalacq.device import AbstractDevice
from signalacq.numberformat import Endianness, NumberFormat
from signalacq.reader import AbstractReader
from signalacq.samplepack import SamplePack

_log = logging.getLogger(__name__)


class SizeFieldType(Enum):
    """How the payload size of a frame is determined."""

    FIXED = "fixed"
    FIELD_1BYTE = "1byte"
    FIELD_2BYTE = "2byte"


class _Invalid(IntFlag):
    SYNCWORD = 1
    FRAMESIZE = 2


class FramedReader(AbstractReader):
    """Reads frames of ``sync word, [size field], payload, [checksum]``.

    The payload holds interleaved channel samples. The checksum, when
    enabled, is the low byte of the sum of all payload bytes. No data is
    read while the settings are invalid.
    """

    def __init__(
        self,
        device: AbstractDevice,
        num_channels: int = 1,
        number_format: NumberFormat = NumberFormat.UINT8,
        endianness: Endianness = Endianness.LITTLE,
        sync_word: bytes = b"\xaa\xbb",
        size_field: SizeFieldType = SizeFieldType.FIXED,
        fixed_frame_size: int = 1,
        checksum: bool = False,
        debug_mode: bool = False,
    ) -> None:
        super().__init__(device)
        if num_channels < 1:
            raise ValueError("number of channels must be positive")
        if number_format is NumberFormat.INVALID:
            raise ValueError("invalid number format")
        if fixed_frame_size < 1:
            raise ValueError("fixed frame size must be positive")

        self._num_channels = num_channels
        self._number_format = number_format
        self._sample_size = number_format.size()
        self._endianness = endianness
        self._sync_word = bytes(sync_word)
        self._has_size_byte = size_field is not SizeFieldType.FIXED
        self._is_size_field_2b = size_field is SizeFieldType.FIELD_2BYTE
        self._frame_size = fixed_frame_size
        self._checksum_enabled = checksum
        self._debug_mode = debug_mode

        self._invalid = _Invalid(0)
        self._message = ""

        self._sync_i = 0
        self._got_sync = False
        self._got_size = False
        self._calc_checksum = 0

        self._check_settings()
        self._reset()

    def num_channels(self) -> int:
        return self._num_channels

    def message(self) -> str:
        """Status message describing the validity of the settings."""
        return self._message

    def settings_valid(self) -> bool:
        return not self._invalid

    def _package_size(self) -> int:
        return self._num_channels * self._sample_size

    def _check_settings(self) -> None:
        if not self._sync_word:
            self._invalid |= _Invalid.SYNCWORD
        else:
            self._invalid &= ~_Invalid.SYNCWORD

        if not self._has_size_byte and self._frame_size % self._package_size() != 0:
            self._invalid |= _Invalid.FRAMESIZE
        else:
            self._invalid &= ~_Invalid.FRAMESIZE

        if self._invalid & _Invalid.SYNCWORD:
            self._message = "Sync word is invalid!"
        elif self._invalid & _Invalid.FRAMESIZE:
            self._message = (
                f"Frame size must be multiple of {self._package_size()} "
                "(#channels * sample size)!"
            )
        else:
            self._message = "All is well!"

    def _reset(self) -> None:
        self._sync_i = 0
        self._got_sync = False
        self._got_size = False
        if self._has_size_byte:
            self._frame_size = 0
        self._calc_checksum = 0

    def set_number_format(self, number_format: NumberFormat) -> None:
        if number_format is NumberFormat.INVALID:
            raise ValueError("invalid number format")
        self._number_format = number_format
        self._sample_size = number_format.size()
        self._check_settings()
        self._reset()

    def set_num_channels(self, value: int) -> None:
        if value < 1:
            raise ValueError("number of channels must be positive")
        self._num_channels = value
        self._check_settings()
        self._reset()
        self._update_num_channels()

    def set_sync_word(self, word: bytes) -> None:
        """Set the sync word; an empty word makes the settings invalid."""
        self._sync_word = bytes(word)
        self._check_settings()
        self._reset()

    def set_size_field(self, field_type: SizeFieldType, size: int = 1) -> None:
        """Select the size field type; ``size`` is used for fixed frames only."""
        if field_type is SizeFieldType.FIXED:
            if size < 1:
                raise ValueError("fixed frame size must be positive")
            self._has_size_byte = False
            self._frame_size = size
        else:
            self._has_size_byte = True
            self._is_size_field_2b = field_type is SizeFieldType.FIELD_2BYTE
        self._check_settings()
        self._reset()

    def set_checksum(self, enabled: bool) -> None:
        self._checksum_enabled = enabled
        self._reset()

    def set_debug_mode(self, enabled: bool) -> None:
        self._debug_mode = enabled

    def set_endianness(self, endianness: Endianness) -> None:
        self._endianness = endianness

    def _frame_bytes(self) -> int:
        return self._frame_size + 1 if self._checksum_enabled else self._frame_size

    def read_data(self) -> int:
        num_bytes_read = 0
        if self._invalid:
            return num_bytes_read

        while available := self._device.bytes_available():
            if not self._got_sync:
                c = self._device.get_char()
                num_bytes_read += 1
                if c == self._sync_word[self._sync_i]:
                    self._sync_i += 1
                    if self._sync_i == len(self._sync_word):
                        self._got_sync = True
                elif self._debug_mode:
                    _log.warning("Missed %dth sync byte.", self._sync_i + 1)
            elif self._has_size_byte and not self._got_size:
                if self._is_size_field_2b:
                    if available < 2:
                        break
                    raw = self._device.read(2)
                    num_bytes_read += 2
                    self._frame_size = int(
                        NumberFormat.UINT16.decode(raw, self._endianness)
                    )
                else:
                    self._frame_size = self._device.get_char() or 0
                    num_bytes_read += 1

                if self._frame_size == 0:
                    _log.error("Frame size is read as 0!")
                    self._reset()
                elif self._frame_size % self._package_size() != 0:
                    _log.error(
                        "Frame size is not multiple of %d (#channels * sample size)!",
                        self._package_size(),
                    )
                    self._reset()
                else:
                    if self._debug_mode:
                        _log.info("Frame size: %d", self._frame_size)
                    self._got_size = True
            else:
                needed = self._frame_bytes()
                if available < needed:
                    break
                self._read_frame_data_and_check()
                num_bytes_read += needed
                self._reset()

        return num_bytes_read

    def _read_frame_data_and_check(self) -> None:
        """Read one payload and checksum; the device must hold enough bytes."""
        if self.paused:
            self._device.read(self._frame_bytes())
            return

        num_packages = self._frame_size // self._package_size()
        samples = SamplePack(num_packages, self._num_channels)
        channels = [samples.data(ci) for ci in range(self._num_channels)]
        for i in range(num_packages):
            for channel in channels:
                raw = self._device.read(self._sample_size)
                if self._checksum_enabled:
                    self._calc_checksum += sum(raw)
                channel[i] = self._number_format.decode(raw, self._endianness)

        if self._checksum_enabled:
            received = self._device.get_char() or 0
            self._calc_checksum &= 0xFF
            if self._calc_checksum != received:
                _log.error(
                    "Checksum failed! Received: %d Calculated: %d",
                    received,
                    self._calc_checksum,
                )
                return

        self.feed_out(samples)