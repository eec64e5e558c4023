# signalacq

Building blocks for acquiring numeric signals from a byte stream (bytes read
from a serial port or BLE characteristic notifications), turning them into
per-channel samples, buffering them for plotting and recording them to CSV.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `signalacq.samplepack.SamplePack`: a block of `num_samples` samples for each
  of `num_channels` channels, initialised to zero, with an optional X channel.
- `signalacq.numberformat`: `NumberFormat` (`UINT8` … `DOUBLE`, `INVALID`) and
  `Endianness`; `NumberFormat.size()` and `NumberFormat.decode(data, endianness)`
  decode one binary sample; `number_format_to_str` / `str_to_number_format`
  convert to and from names such as `"uint16"` (unknown names give `INVALID`).
- `signalacq.buffers`: `RingBuffer` keeps the most recent samples, oldest
  first; `ReadOnlyBuffer` is an immutable snapshot (`ReadOnlyBuffer.from_buffer`
  copies a slice of another buffer); `IndexBuffer` and `LinIndexBuffer` are X
  axes whose values are the index or linearly spaced values. `find_index`
  returns `None` for values out of range. All buffers report `limits()` as a
  `Range`.
- `signalacq.series.FrameBufferSeries`: pairs an X buffer with a Y buffer as
  `(x, y)` points, gives a `bounding_rect()` and restricts the exposed indices
  to a `Rect` of interest, widened by one sample on each side.
- `signalacq.device.AbstractDevice`: an in-memory byte queue. Bytes arrive
  through `serial_data_read` or `characteristic_changed`; ready-read listeners
  are called on each arrival. Data is taken out with `read`, `get_char`,
  `bytes_available`, and `can_read_line` followed by `read_line`.
- `signalacq.reader.AbstractReader`: base of all readers. `enable(True)`
  listens to the device, `enable(False)` stops and disconnects all sinks,
  `pause(True)` keeps reading but stops committing data, `get_bytes_read()`
  returns and resets the byte count. A sink is any object with
  `feed_in(samples)`; if it also has `set_num_channels(num_channels, has_x)`,
  it is told when the channel count changes.
- Readers:
  - `signalacq.asciireader.AsciiReader`: delimiter separated text lines, one
    sample per channel per line. A channel count of 0 takes the count from
    the data. Values may be decimal, or hexadecimal with `hex_data=True`;
    `name:value` labels are stripped. `FilterMode.INCLUDE` keeps only lines
    with the prefix (and removes it), `FilterMode.EXCLUDE` drops them. The
    first line after enabling is discarded, since it is usually partial.
  - `signalacq.binaryreader.BinaryStreamReader`: a plain stream of
    interleaved binary samples; `request_skip_byte()` and
    `request_skip_sample()` are the only means of synchronisation.
  - `signalacq.framedreader.FramedReader`: frames of sync word, optional
    1- or 2-byte size field (`SizeFieldType`), payload and optional checksum
    (low byte of the sum of payload bytes). Nothing is read while
    `settings_valid()` is false; `message()` says why.
  - `signalacq.demoreader.DemoReader`: generates square-wave Fourier
    components, one harmonic per channel, each time `tick()` is called.
- `signalacq.datarecorder.DataRecorder`: a sink that writes CSV rows with an
  optional header, a chosen separator, optional timestamps
  (`TimestampOption`), a fixed number of decimals (6 by default) and optional
  CR+LF line endings.
- `signalacq.channelinfo.ChannelInfoModel`: per-channel name, colour,
  visibility, gain and offset as a table (`Column`, `Role`, `CheckState`,
  `ItemFlag`), with listeners, reset methods and `save_settings` /
  `load_settings` to a mapping under the `"Channels"` key. Information is kept
  when the channel count shrinks.
- `signalacq.commandedit`: `escape` / `unescape` of `\\`, `\n`, `\r`, `\t`,
  `validate_hex` / `validate_ascii`, and `CommandEdit`, which holds command
  text in ASCII or spaced hex mode and converts it on `set_mode`.
- `signalacq.portlist`: `PortList` of the serial ports found by pyserial (or
  any `port_provider` you pass) followed by ports added with `add_user_port`;
  each `PortListItem` has display text, a `PortIcon` and its port name.

## Example

```python
from signalacq.device import AbstractDevice, InputDevice
from signalacq.asciireader import AsciiReader, FilterMode
from signalacq.buffers import RingBuffer


class Collector:
    def __init__(self):
        self.buffers = {}

    def feed_in(self, samples):
        for ch in range(samples.num_channels()):
            buf = self.buffers.setdefault(ch, RingBuffer(100))
            buf.add_samples(samples.data(ch))

    def set_num_channels(self, num_channels, has_x):
        pass


device = AbstractDevice(InputDevice.SERIAL_PORT)
reader = AsciiReader(device, 0, ",", False, FilterMode.DISABLED, "")
collector = Collector()
reader.connect_sink(collector)
reader.enable(True)

device.serial_data_read(b"ignored first line\n1,2,3\n4,5,6\n")
print(collector.buffers[0].sample(99))  # 4.0, the newest sample
```

A framed stream of two `uint8` channels with a fixed 2-byte payload:

```python
from signalacq.device import AbstractDevice
from signalacq.framedreader import FramedReader, SizeFieldType
from signalacq.numberformat import NumberFormat

device = AbstractDevice()
reader = FramedReader(
    device,
    num_channels=2,
    number_format=NumberFormat.UINT8,
    sync_word=b"\xaa\xbb",
    size_field=SizeFieldType.FIXED,
    fixed_frame_size=2,
)
reader.connect_sink(collector)
reader.enable(True)
device.serial_data_read(b"\xaa\xbb\x01\x02")
```

## What it does not do

- It opens no serial port and talks to no BLE device: bytes must be handed to
  `AbstractDevice` by the caller.
- It draws no plots and has no windows or command line; buffers and series
  only hold the data a plot would show.
- `DemoReader` has no timer of its own; call `tick()` every
  `INTERVAL_MS` milliseconds.