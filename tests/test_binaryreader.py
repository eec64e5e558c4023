import struct

import pytest

from signalacq.binaryreader import BinaryStreamReader
from signalacq.device import AbstractDevice
from signalacq.numberformat import Endianness, NumberFormat


class _Sink:
    def __init__(self):
        self.packs = []
        self.channel_updates = []

    def feed_in(self, samples):
        self.packs.append(samples.copy())

    def set_num_channels(self, num_channels, has_x):
        self.channel_updates.append((num_channels, has_x))


def _values(pack):
    return [list(pack.data(c)) for c in range(pack.num_channels())]


def _running(**kwargs):
    device = AbstractDevice()
    reader = BinaryStreamReader(device, **kwargs)
    sink = _Sink()
    reader.connect_sink(sink)
    reader.enable(True)
    return device, reader, sink


def test_uint8_interleaved_channels():
    device, reader, sink = _running(num_channels=2)
    device.serial_data_read(bytes([1, 2, 3, 4]))
    assert _values(sink.packs[0]) == [[1.0, 3.0], [2.0, 4.0]]
    assert reader.get_bytes_read() == 4


def test_int16_big_endian():
    device, reader, sink = _running(
        number_format=NumberFormat.INT16, endianness=Endianness.BIG
    )
    device.serial_data_read(struct.pack(">hh", -5, 300))
    assert _values(sink.packs[0]) == [[-5.0, 300.0]]


def test_float_little_endian():
    device, reader, sink = _running(num_channels=2, number_format=NumberFormat.FLOAT)
    device.serial_data_read(struct.pack("<ff", 1.5, -0.25))
    assert _values(sink.packs[0]) == [[1.5], [-0.25]]


def test_endianness_can_change():
    device, reader, sink = _running(number_format=NumberFormat.UINT32)
    reader.set_endianness(Endianness.BIG)
    device.serial_data_read(struct.pack(">I", 70000))
    assert _values(sink.packs[0]) == [[70000.0]]


def test_partial_package_stays_buffered():
    device, reader, sink = _running(num_channels=2)
    device.serial_data_read(bytes([1, 2, 3]))
    assert _values(sink.packs[0]) == [[1.0], [2.0]]
    assert device.bytes_available() == 1
    device.serial_data_read(bytes([4]))
    assert _values(sink.packs[1]) == [[3.0], [4.0]]


def test_not_enough_for_a_package_reads_nothing():
    device, reader, sink = _running(number_format=NumberFormat.DOUBLE)
    device.serial_data_read(b"\x00" * 7)
    assert sink.packs == []
    assert device.bytes_available() == 7
    assert reader.get_bytes_read() == 0


def test_skip_byte():
    device, reader, sink = _running(number_format=NumberFormat.UINT16)
    reader.request_skip_byte()
    device.serial_data_read(b"\xff" + struct.pack("<H", 513))
    assert _values(sink.packs[0]) == [[513.0]]
    assert reader.get_bytes_read() == 3


def test_skip_sample():
    device, reader, sink = _running(num_channels=2)
    reader.request_skip_sample()
    device.serial_data_read(bytes([9, 5, 6]))
    assert _values(sink.packs[0]) == [[5.0], [6.0]]
    device.serial_data_read(bytes([7, 8]))
    assert _values(sink.packs[1]) == [[7.0], [8.0]]


def test_paused_discards_data():
    device, reader, sink = _running(num_channels=2)
    reader.pause(True)
    device.serial_data_read(bytes([1, 2, 3, 4, 5]))
    assert sink.packs == []
    assert device.bytes_available() == 1
    assert reader.get_bytes_read() == 4


def test_set_num_channels_notifies_and_validates():
    reader = BinaryStreamReader(AbstractDevice())
    sink = _Sink()
    reader.connect_sink(sink)
    reader.set_num_channels(3)
    assert reader.num_channels() == 3
    assert sink.channel_updates[-1] == (3, False)
    with pytest.raises(ValueError):
        reader.set_num_channels(0)


def test_invalid_number_format_rejected():
    reader = BinaryStreamReader(AbstractDevice())
    with pytest.raises(ValueError):
        reader.set_number_format(NumberFormat.INVALID)