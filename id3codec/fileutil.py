# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>
# Copyright (c) 2026, the id3codec authors

"""File manipulation utilities."""

from contextlib import contextmanager

from id3codec.errors import UnexpectedEOFError

def xread(file, length):
    "Read exactly length bytes from file; raise UnexpectedEOFError if file ends sooner."
    data = file.read(length)
    if len(data) != length:
        raise UnexpectedEOFError("Expected {0} bytes, got {1}".format(length, len(data)))
    return data

@contextmanager
def opened(filename, mode):
    "Open filename, or do nothing if filename is already an open file object"
    if isinstance(filename, str):
        file = open(filename, mode)
        try: 
            yield file
        finally: 
            if not file.closed:
                file.close()
    else:
        yield filename

class CountingReader:
    """Reader that counts the bytes it passes through.

    When limit is given, no more than limit bytes are read from the
    underlying file; reads past the limit come back short.
    """
    def __init__(self, file, limit=None):
        self.file = file
        self.limit = limit
        self.consumed = 0

    @property
    def remaining(self):
        if self.limit is None:
            return None
        return self.limit - self.consumed

    def read(self, size=-1):
        if self.limit is not None and (size is None or size < 0 or size > self.remaining):
            size = self.remaining
        data = self.file.read(size)
        self.consumed += len(data)
        return data
