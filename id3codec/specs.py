# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>
# Copyright (c) 2026, the id3codec authors

import abc
import collections.abc

from abc import abstractmethod

from id3codec.conversion import *
from id3codec.errors import *
import id3codec.text as text

# A frame class lists its fields as a tuple of Specs; the tuple is the
# serialization schema of the frame payload.

def optionalspec(spec):
    spec._optional = True
    return spec

class Spec(metaclass=abc.ABCMeta):
    def __init__(self, name):
        self.name = name

    _optional = False

    @abstractmethod
    def read(self, buf, encoding):
        "Consume this field from an InputBuffer and return its value."

    @abstractmethod
    def write(self, buf, value, encoding, last=False):
        "Store value into an OutputBuffer."

    def validate(self, frame, value):
        return value

    def to_str(self, value):
        return "{0}={1}".format(self.name, repr(value))

class ByteSpec(Spec):
    error = InvalidFrameError

    def __init__(self, name, min=0, max=255):
        super().__init__(name)
        self.min = min
        self.max = max

    def read(self, buf, encoding):
        value = buf.consume_byte()
        if buf.error is None and not self.min <= value <= self.max:
            buf.fail(self.error("Invalid {0} value: {1}".format(self.name, value)))
            return self.min
        return value

    def write(self, buf, value, encoding, last=False):
        if not self.min <= value <= self.max:
            buf.fail(self.error("Invalid {0} value: {1}".format(self.name, value)))
            return
        buf.store_byte(value)

    def validate(self, frame, value):
        if not isinstance(value, int):
            raise TypeError("Not a byte: {0!r}".format(value))
        if not self.min <= value <= self.max:
            raise self.error("{0} out of range [{1}, {2}]: {3}"
                             .format(self.name, self.min, self.max, value))
        return value

class EncodingSpec(ByteSpec):
    "Text encoding of the remaining strings in the frame."
    error = InvalidEncodingError

    def __init__(self, name):
        super().__init__(name, 0, len(text.encodings) - 1)

    def validate(self, frame, value):
        if value is None:
            return value
        if isinstance(value, str):
            value = text.lookup(value)
        return super().validate(frame, value)

    def to_str(self, value):
        return text.name(value) if value is not None else "<undef>"

class PictureTypeSpec(ByteSpec):
    error = InvalidPictureTypeError

    def __init__(self, name):
        super().__init__(name, 0, 20)

class CounterSpec(Spec):
    "Big-endian unsigned counter of at least four bytes."
    def read(self, buf, encoding):
        if buf.error is None and buf.remaining < 4:
            buf.fail(InsufficientBufferError("Counter shorter than 4 bytes"))
        return Int8.decode(buf.consume_all())

    def write(self, buf, value, encoding, last=False):
        buf.store_bytes(Int8.encode(value, width=-4))

    def validate(self, frame, value):
        if value is None and self._optional:
            return value
        if not isinstance(value, int):
            raise TypeError("Not an integer: {0!r}".format(value))
        if value < 0:
            raise ValueError("Counter is negative")
        return value

class BinaryDataSpec(Spec):
    def read(self, buf, encoding):
        return buf.consume_all()

    def write(self, buf, value, encoding, last=False):
        buf.store_bytes(value)

    def validate(self, frame, value):
        if value is None:
            return bytes()
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeError("Not a byte sequence")
        return bytes(value)

    def to_str(self, value):
        return '{0}={1}{2}'.format(self.name, value[0:16], "..." if len(value) > 16 else "")

class LanguageSpec(Spec):
    "Three-character ISO-8859-1 language code."
    length = 3

    def read(self, buf, encoding):
        return buf.consume_fixed_string(self.length)

    def write(self, buf, value, encoding, last=False):
        buf.store_fixed_string(value, self.length)

    def validate(self, frame, value):
        if value is None:
            return "XXX"
        if not isinstance(value, str):
            raise TypeError("Not a string")
        if len(value) != self.length or not text.is_latin1(value):
            raise InvalidFixedLenStringError("Invalid language code: {0!r}".format(value))
        return value

class EncodedStringSpec(Spec):
    "Null-terminated string in the frame's current encoding."
    def _encoding(self, encoding):
        return encoding

    def read(self, buf, encoding):
        return buf.consume_string(self._encoding(encoding))

    def write(self, buf, value, encoding, last=False):
        buf.store_string(value, self._encoding(encoding), terminate=not last)

    def validate(self, frame, value):
        if value is None:
            return ""
        if not isinstance(value, str):
            raise TypeError("Not a string")
        return value

class Latin1StringSpec(EncodedStringSpec):
    "Null-terminated string that is always ISO-8859-1."
    def _encoding(self, encoding):
        return text.ISO_8859_1

    def validate(self, frame, value):
        value = super().validate(frame, value)
        if not text.is_latin1(value):
            raise ValueError("Not an ISO-8859-1 string: {0!r}".format(value))
        return value

class StringListSpec(Spec):
    "Remainder of the payload as a sequence of strings."
    def read(self, buf, encoding):
        return buf.consume_strings(encoding)

    def write(self, buf, values, encoding, last=False):
        buf.store_strings(values, encoding)

    def validate(self, frame, values):
        if values is None:
            return []
        if isinstance(values, str):
            values = [values]
        if not isinstance(values, collections.abc.Iterable):
            raise TypeError("Not a list of strings")
        values = list(values)
        for v in values:
            if not isinstance(v, str):
                raise TypeError("Not a string: {0!r}".format(v))
        return values
