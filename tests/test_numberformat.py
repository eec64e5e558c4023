import struct

import pytest

from signalacq.numberformat import (
    Endianness,
    NumberFormat,
    number_format_to_str,
    str_to_number_format,
)


@pytest.mark.parametrize(
    "nf,name",
    [
        (NumberFormat.UINT8, "uint8"),
        (NumberFormat.UINT16, "uint16"),
        (NumberFormat.UINT32, "uint32"),
        (NumberFormat.INT8, "int8"),
        (NumberFormat.INT16, "int16"),
        (NumberFormat.INT32, "int32"),
        (NumberFormat.FLOAT, "float"),
        (NumberFormat.DOUBLE, "double"),
    ],
)
def test_name_round_trip(nf, name):
    assert number_format_to_str(nf) == name
    assert str_to_number_format(name) is nf


def test_unknown_name_is_invalid():
    assert str_to_number_format("int64") is NumberFormat.INVALID


def test_invalid_to_str_is_empty():
    assert number_format_to_str(NumberFormat.INVALID) == ""


@pytest.mark.parametrize(
    "nf,code",
    [
        (NumberFormat.UINT8, "B"),
        (NumberFormat.INT16, "h"),
        (NumberFormat.UINT32, "I"),
        (NumberFormat.DOUBLE, "d"),
    ],
)
def test_size_matches_struct(nf, code):
    assert nf.size() == struct.calcsize("<" + code)


@pytest.mark.parametrize(
    "nf,code,value",
    [
        (NumberFormat.UINT8, "B", 200),
        (NumberFormat.INT8, "b", -100),
        (NumberFormat.UINT16, "H", 60000),
        (NumberFormat.INT16, "h", -2),
        (NumberFormat.UINT32, "I", 4000000000),
        (NumberFormat.INT32, "i", -123456),
        (NumberFormat.FLOAT, "f", 1.5),
        (NumberFormat.DOUBLE, "d", -3.25),
    ],
)
@pytest.mark.parametrize("endianness", [Endianness.LITTLE, Endianness.BIG])
def test_decode_round_trip(nf, code, value, endianness):
    raw = struct.pack(endianness.value + code, value)
    assert nf.decode(raw, endianness) == value


def test_decode_respects_byte_order():
    raw = bytes([0x01, 0x02])
    little = NumberFormat.UINT16.decode(raw, Endianness.LITTLE)
    big = NumberFormat.UINT16.decode(raw, Endianness.BIG)
    assert little == struct.unpack("<H", raw)[0]
    assert big == struct.unpack(">H", raw)[0]
    assert little != big


def test_decode_wrong_length():
    with pytest.raises(ValueError):
        NumberFormat.INT32.decode(b"\x00\x01")


def test_invalid_format_has_no_size():
    with pytest.raises(ValueError):
        NumberFormat.INVALID.size()
    with pytest.raises(ValueError):
        NumberFormat.INVALID.decode(b"\x00")