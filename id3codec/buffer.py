# Copyright (c) 2026, the id3codec authors

"""Byte buffers with error latching.

Once a consume or store operation fails, the buffer remembers the error
and every later operation becomes a no-op returning an empty value.
Callers run a whole sequence of operations and call check() once at the
end to raise the first error, if any.
"""

from id3codec.errors import *
import id3codec.text as text

class _Latch:
    error = None

    def fail(self, error):
        if self.error is None:
            self.error = error

    def check(self):
        if self.error is not None:
            raise self.error

class InputBuffer(_Latch):
    "Pull buffer over a frame payload."
    def __init__(self, data):
        self.data = bytes(data)
        self.pos = 0

    @property
    def remaining(self):
        return len(self.data) - self.pos

    def consume_bytes(self, n):
        if self.error is not None:
            return bytes()
        if n > self.remaining:
            self.fail(InsufficientBufferError(
                "Need {0} bytes, only {1} left".format(n, self.remaining)))
            return bytes()
        data = self.data[self.pos:self.pos + n]
        self.pos += n
        return data

    def consume_byte(self):
        data = self.consume_bytes(1)
        return data[0] if data else 0

    def consume_fixed_string(self, n):
        "Consume an ISO-8859-1 string of exactly n characters."
        if self.error is None and n > self.remaining:
            self.fail(InvalidFixedLenStringError(
                "Need a {0}-character string, only {1} bytes left"
                .format(n, self.remaining)))
        return self.consume_bytes(n).decode("latin-1")

    def consume_string(self, encoding):
        if self.error is not None:
            return ""
        try:
            s, consumed = text.decode_string(self.data[self.pos:], encoding)
        except Error as e:
            self.fail(e)
            return ""
        self.pos += consumed
        return s

    def consume_strings(self, encoding):
        if self.error is not None:
            return []
        try:
            strings = text.decode_strings(self.data[self.pos:], encoding)
        except Error as e:
            self.fail(e)
            return []
        self.pos = len(self.data)
        return strings

    def consume_all(self):
        return self.consume_bytes(self.remaining)

class OutputBuffer(_Latch):
    "Push buffer collecting an encoded frame payload."
    def __init__(self):
        self.data = bytearray()

    def store_bytes(self, data):
        if self.error is None:
            self.data.extend(data)

    def store_byte(self, value):
        if self.error is not None:
            return
        if value not in range(256):
            self.fail(InvalidFrameError("Invalid byte value: {0!r}".format(value)))
            return
        self.data.append(value)

    def store_fixed_string(self, s, n):
        if self.error is not None:
            return
        if len(s) != n or not text.is_latin1(s):
            self.fail(InvalidFixedLenStringError(
                "Expected {0} ISO-8859-1 characters, got {1!r}".format(n, s)))
            return
        self.data.extend(s.encode("latin-1"))

    def store_string(self, s, encoding, terminate=True):
        if self.error is not None:
            return
        try:
            self.data.extend(text.encode_string(s, encoding))
            if terminate:
                self.data.extend(text.terminator(encoding))
        except Error as e:
            self.fail(e)

    def store_strings(self, strings, encoding):
        if self.error is not None:
            return
        try:
            self.data.extend(text.encode_strings(strings, encoding))
        except Error as e:
            self.fail(e)

    def getvalue(self):
        return bytes(self.data)
