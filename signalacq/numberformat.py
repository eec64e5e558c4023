"""Binary number formats for sample decoding."""

from __future__ import annotations

import struct
from enum import Enum


class Endianness(Enum):
    """Byte order of binary samples."""

    LITTLE = "<"
    BIG = ">"


class NumberFormat(Enum):
    """Numeric type of one binary sample."""

    UINT8 = 0
    UINT16 = 1
    UINT32 = 2
    INT8 = 3
    INT16 = 4
    INT32 = 5
    FLOAT = 6
    DOUBLE = 7
    INVALID = 8

    def _code(self) -> str:
        try:
            return _STRUCT_CODES[self]
        except KeyError:
            raise ValueError("invalid number format has no binary layout") from None

    def size(self) -> int:
        """Size of one sample in bytes."""
        return struct.calcsize("<" + self._code())

    def decode(self, data: bytes, endianness: Endianness = Endianness.LITTLE) -> float:
        """Decode exactly one sample from ``data``."""
        code = self._code()
        try:
            (value,) = struct.unpack(endianness.value + code, bytes(data))
        except struct.error as exc:
            raise ValueError(f"expected {self.size()} bytes, got {len(data)}") from exc
        return float(value)


_STRUCT_CODES = {
    NumberFormat.UINT8: "B",
    NumberFormat.UINT16: "H",
    NumberFormat.UINT32: "I",
    NumberFormat.INT8: "b",
    NumberFormat.INT16: "h",
    NumberFormat.INT32: "i",
    NumberFormat.FLOAT: "f",
    NumberFormat.DOUBLE: "d",
}

_NAMES = {
    NumberFormat.UINT8: "uint8",
    NumberFormat.UINT16: "uint16",
    NumberFormat.UINT32: "uint32",
    NumberFormat.INT8: "int8",
    NumberFormat.INT16: "int16",
    NumberFormat.INT32: "int32",
    NumberFormat.FLOAT: "float",
    NumberFormat.DOUBLE: "double",
}

_BY_NAME = {name: nf for nf, name in _NAMES.items()}


def number_format_to_str(nf: NumberFormat) -> str:
    """Name of a number format; empty for ``INVALID``."""
    return _NAMES.get(nf, "")


def str_to_number_format(text: str) -> NumberFormat:
    """Number format for a name; ``INVALID`` if the name is unknown."""
    return _BY_NAME.get(text, NumberFormat.INVALID)