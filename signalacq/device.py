"""Byte stream device fed by serial port or BLE data."""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from typing import Any

_log = logging.getLogger(__name__)


class InputDevice(Enum):
    """Kind of device that supplies the data."""

    SERIAL_PORT = 0xA
    BLE = 0xB


class AbstractDevice:
    """Buffers incoming bytes and offers a file-like reading interface.

    Registered ready-read listeners are called each time new data arrives.
    """

    def __init__(self, device: InputDevice = InputDevice.SERIAL_PORT) -> None:
        self._device = device
        self._buffer = bytearray()
        self._read_line_index = -1
        self._listeners: list[Callable[[], Any]] = []
        self.update_input_device(device)

    def current_device(self) -> InputDevice:
        return self._device

    def update_input_device(self, device: InputDevice) -> None:
        _log.info("Input device update %s", device)
        self._device = device

    def add_ready_read_listener(self, callback: Callable[[], Any]) -> None:
        if callback not in self._listeners:
            self._listeners.append(callback)

    def remove_ready_read_listener(self, callback: Callable[[], Any]) -> None:
        self._listeners = [cb for cb in self._listeners if cb != callback]

    def _append(self, data: bytes) -> None:
        self._buffer.extend(data)
        for callback in list(self._listeners):
            callback()

    def characteristic_changed(self, characteristic: Any, new_value: bytes) -> None:
        """Accept a BLE characteristic notification."""
        self._append(new_value)

    def serial_data_read(self, new_value: bytes) -> None:
        """Accept bytes read from a serial port."""
        self._append(new_value)

    def can_read_line(self) -> bool:
        """Whether a full line is buffered; must precede ``read_line``."""
        self._read_line_index = self._buffer.find(b"\n")
        return self._read_line_index != -1

    def read_line(self) -> bytes:
        """Read up to and including the newline found by ``can_read_line``."""
        to_read = max(0, min(len(self._buffer), self._read_line_index + 1))
        return self._take(to_read)

    def bytes_available(self) -> int:
        return len(self._buffer)

    def read(self, max_size: int) -> bytes:
        """Read at most ``max_size`` bytes."""
        if max_size <= 0 or not self._buffer:
            return b""
        return self._take(min(max_size, len(self._buffer)))

    def get_char(self) -> int | None:
        """Read one byte, or return ``None`` if nothing is buffered."""
        if not self._buffer:
            return None
        return self._take(1)[0]

    def _take(self, n: int) -> bytes:
        data = bytes(self._buffer[:n])
        del self._buffer[:n]
        return data