# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>
# Copyright (c) 2026, the id3codec authors

from warnings import warn

from id3codec.errors import *

class Unsync:
    "Conversion from/to unsynchronized byte sequences."
    @staticmethod
    def gen_decode(iterable, sync=False):
        "A generator for de-unsynchronizing a byte iterable."
        for b in iterable:
            if sync and b != 0x00 and b & 0xE0 == 0xE0:
                warn("Invalid unsynchronized data: 0xFF 0x{0:02X}".format(b),
                     UnsyncWarning)
            if not (sync and b == 0x00):
                yield b
            sync = (b == 0xFF)

    @staticmethod
    def gen_encode(iterable):
        "A generator for unsynchronizing a byte iterable."
        for b in iterable:
            yield b
            if b == 0xFF:
                yield 0x00

    @staticmethod
    def decode(data):
        "Remove unsynchronization bytes from data."
        return bytes(Unsync.gen_decode(data))

    @staticmethod
    def encode(data):
        "Insert unsynchronization bytes into data."
        return bytes(Unsync.gen_encode(data))

class UnsyncReader:
    """Unsynchronized file reader.

    Wraps a binary file object and strips the 0x00 byte following each
    0xFF.  Only the last raw byte is remembered between reads, and the
    underlying file is never read past the bytes needed to satisfy a
    request.
    """
    def __init__(self, file):
        self.file = file
        self._sync = False

    def _decode(self, raw):
        data = bytes(Unsync.gen_decode(raw, self._sync))
        self._sync = (raw[-1] == 0xFF)
        return data

    def read(self, size=-1):
        if size is None or size < 0:
            raw = self.file.read()
            return self._decode(raw) if raw else bytes()
        data = bytearray()
        while len(data) < size:
            raw = self.file.read(size - len(data))
            if not raw:
                break
            data.extend(self._decode(raw))
        return bytes(data)

class Syncsafe:
    """Conversion to/from syncsafe integers.
    Syncsafe integers are big-endian 7-bit byte sequences.
    """
    @staticmethod
    def decode(data):
        "Decodes a 4 or 5 byte syncsafe integer."
        if len(data) not in (4, 5):
            raise BadSyncError("Syncsafe integers are 4 or 5 bytes long, got {0}"
                               .format(len(data)))
        value = 0
        for b in data:
            if b & 0x80:
                raise BadSyncError("Invalid syncsafe integer: {0}"
                                   .format(bytes(data).hex()))
            value <<= 7
            value += b
        return value

    @staticmethod
    def encode(i, *, width=4):
        "Encodes a nonnegative integer into a syncsafe value of given width."
        assert width in (4, 5)
        if i < 0 or i >= 1 << (7 * width):
            raise BadSyncError("Value out of range for a {0}-byte syncsafe "
                               "integer: {1}".format(width, i))
        data = bytearray()
        for n in range(width):
            data.append(i & 127)
            i >>= 7
        data.reverse()
        return bytes(data)

class Int8:
    """Conversion to/from binary integer values of any length."""

    @staticmethod
    def decode(data):
        "Decodes an 8-bit big-endian integer of any length"
        return int.from_bytes(data, "big")

    @staticmethod
    def encode(i, *, width=-1):
        """Encodes a nonnegative integer into a big-endian byte string.

        When width > 0, then len(result) == width
        When width < 0, then len(result) >= abs(width)
        """
        assert width != 0
        if i < 0: raise ValueError("Nonnegative integer expected")
        length = max(abs(width), (i.bit_length() + 7) >> 3)
        if width > 0 and length > width:
            raise ValueError("Integer too large")
        return i.to_bytes(length, "big")
