import pytest

from signalacq.asciireader import AsciiReader, FilterMode
from signalacq.device import AbstractDevice


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
    reader = AsciiReader(device, **kwargs)
    sink = _Sink()
    reader.connect_sink(sink)
    reader.enable(True)
    device.serial_data_read(b"partial\n")  # consumed by the first-line discard
    reader.get_bytes_read()
    return device, reader, sink


def test_first_line_after_enable_is_discarded():
    device = AbstractDevice()
    reader = AsciiReader(device)
    sink = _Sink()
    reader.connect_sink(sink)
    reader.enable(True)
    data = b"1,2\n3,4\n"
    device.serial_data_read(data)
    assert len(sink.packs) == 1
    assert _values(sink.packs[0]) == [[3.0], [4.0]]
    assert reader.get_bytes_read() == len(data)
    assert reader.get_bytes_read() == 0


def test_auto_channel_count_follows_data():
    device, reader, sink = _running()
    assert reader.num_channels() == 1
    device.serial_data_read(b"1,2,3\n")
    assert reader.num_channels() == 3
    assert sink.channel_updates[-1] == (3, False)
    assert _values(sink.packs[-1]) == [[1.0], [2.0], [3.0]]


def test_fixed_channel_count_rejects_other_counts():
    reader = AsciiReader(AbstractDevice(), num_channels=2)
    assert reader.parse_line("1,2,3") is None
    pack = reader.parse_line("1,2")
    assert _values(pack) == [[1.0], [2.0]]


def test_empty_parts_are_skipped():
    reader = AsciiReader(AbstractDevice())
    pack = reader.parse_line("1,,2,")
    assert _values(pack) == [[1.0], [2.0]]
    assert reader.parse_line(",,,") is None


def test_labels_are_stripped():
    reader = AsciiReader(AbstractDevice())
    pack = reader.parse_line("a:1.5,b:c:-2")
    assert _values(pack) == [[1.5], [-2.0]]


def test_hex_values():
    reader = AsciiReader(AbstractDevice(), hex_data=True)
    assert _values(reader.parse_line("1F")) == [[31.0]]
    assert reader.parse_line("zz") is None


def test_decimal_mode_falls_back_to_prefixed_integer():
    reader = AsciiReader(AbstractDevice())
    assert _values(reader.parse_line("0x10")) == [[16.0]]


def test_invalid_value_rejects_line():
    reader = AsciiReader(AbstractDevice())
    assert reader.parse_line("1,abc") is None


def test_custom_delimiter():
    reader = AsciiReader(AbstractDevice())
    reader.set_delimiter(";")
    assert _values(reader.parse_line("4;5")) == [[4.0], [5.0]]
    with pytest.raises(ValueError):
        reader.set_delimiter("")


def test_exclude_filter():
    device, reader, sink = _running(filter_mode=FilterMode.EXCLUDE, filter_prefix="#")
    device.serial_data_read(b"# 1,2\n3,4\n")
    assert len(sink.packs) == 1
    assert _values(sink.packs[0]) == [[3.0], [4.0]]


def test_include_filter_cuts_prefix():
    device, reader, sink = _running()
    reader.set_filter(FilterMode.INCLUDE, "DATA")
    device.serial_data_read(b"noise 9\nDATA 7,8\n")
    assert len(sink.packs) == 1
    assert _values(sink.packs[0]) == [[7.0], [8.0]]


def test_empty_and_whitespace_lines_are_ignored():
    device, reader, sink = _running()
    device.serial_data_read(b"\r\n   \n5\n")
    assert len(sink.packs) == 1
    assert _values(sink.packs[0]) == [[5.0]]


def test_paused_reader_consumes_without_feeding():
    device, reader, sink = _running()
    reader.pause(True)
    data = b"1,2\n"
    device.serial_data_read(data)
    assert sink.packs == []
    assert reader.get_bytes_read() == len(data)
    assert device.bytes_available() == 0


def test_incomplete_line_waits_for_newline():
    device, reader, sink = _running()
    device.serial_data_read(b"1,2")
    assert sink.packs == []
    device.serial_data_read(b"\n")
    assert _values(sink.packs[0]) == [[1.0], [2.0]]


def test_disable_stops_reading_and_disconnects():
    device, reader, sink = _running()
    reader.enable(False)
    device.serial_data_read(b"1\n")
    assert sink.packs == []
    assert device.bytes_available() == 2


def test_set_num_channels_notifies_sinks():
    reader = AsciiReader(AbstractDevice())
    sink = _Sink()
    reader.connect_sink(sink)
    reader.set_num_channels(4)
    assert reader.num_channels() == 4
    assert sink.channel_updates[-1] == (4, False)
    assert reader.parse_line("1,2") is None
    with pytest.raises(ValueError):
        reader.set_num_channels(-1)