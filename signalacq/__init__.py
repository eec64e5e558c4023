"""Signal acquisition: byte stream device, readers, sample buffers, channel settings and CSV recording."""

__version__ = "1.0.1"