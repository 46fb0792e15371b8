# Copyright (c) 2026, the id3codec authors

"""Text encodings used in ID3v2 frames.

Every text-carrying frame starts with an encoding byte selecting one of
the four encodings below for the rest of its strings.  Strings are
separated by a null terminator of one byte (ISO-8859-1, UTF-8) or two
bytes aligned to a code unit boundary (UTF-16 variants).
"""

from id3codec.errors import *

ISO_8859_1 = 0
UTF_16 = 1          # UTF-16 with byte order mark
UTF_16BE = 2        # UTF-16 big endian, no byte order mark
UTF_8 = 3

_BOM = b"\xFE\xFF"

# (name, null terminator)
encodings = (("ISO-8859-1", b"\x00"),
             ("UTF-16", b"\x00\x00"),
             ("UTF-16BE", b"\x00\x00"),
             ("UTF-8", b"\x00"))

def _check(encoding):
    if encoding not in range(len(encodings)):
        raise InvalidEncodingError("Invalid text encoding: {0!r}".format(encoding))

def name(encoding):
    _check(encoding)
    return encodings[encoding][0]

def lookup(name):
    "Return the encoding constant matching name (case and dashes ignored)."
    key = name.lower().replace("-", "")
    for i, (n, term) in enumerate(encodings):
        if n.lower().replace("-", "") == key:
            return i
    raise InvalidEncodingError("Unknown text encoding: {0!r}".format(name))

def terminator(encoding):
    _check(encoding)
    return encodings[encoding][1]

def _find_terminator(data, encoding):
    "Return the index of the first null terminator in data, or -1."
    if len(terminator(encoding)) == 1:
        return data.find(b"\x00")
    for i in range(0, len(data) - 1, 2):
        if data[i] == 0 and data[i + 1] == 0:
            return i
    return -1

def decode_string(data, encoding):
    """Decode the first string in data.

    Returns (string, consumed), where consumed includes the null
    terminator, if any.  An unterminated string extends to the end of
    data.
    """
    _check(encoding)
    term = terminator(encoding)
    index = _find_terminator(data, encoding)
    if index < 0:
        raw = bytes(data)
        consumed = len(data)
    else:
        raw = bytes(data[:index])
        consumed = index + len(term)

    if encoding == ISO_8859_1:
        return raw.decode("latin-1"), consumed
    if encoding == UTF_8:
        try:
            return raw.decode("utf-8"), consumed
        except UnicodeDecodeError as e:
            raise BadTextError("Malformed UTF-8 string") from e
    if len(raw) & 1:
        raise BadTextError("Odd number of bytes in UTF-16 string")
    if raw.startswith(_BOM):
        raw = raw[2:]
    try:
        return raw.decode("utf-16-be"), consumed
    except UnicodeDecodeError as e:
        raise BadTextError("Malformed UTF-16 string") from e

def decode_strings(data, encoding):
    "Decode all of data as a sequence of null-terminated strings."
    strings = []
    while data:
        s, consumed = decode_string(data, encoding)
        strings.append(s)
        data = data[consumed:]
    return strings

def encode_string(s, encoding):
    "Encode s without a null terminator."
    _check(encoding)
    if encoding == ISO_8859_1:
        return "".join(c if ord(c) <= 0xFF else "." for c in s).encode("latin-1")
    try:
        if encoding == UTF_8:
            return s.encode("utf-8")
        data = s.encode("utf-16-be")
    except UnicodeEncodeError as e:
        raise InvalidEncodedStringError("Unencodable string {0!r}".format(s)) from e
    if encoding == UTF_16:
        return _BOM + data
    return data

def encode_strings(strings, encoding):
    "Encode strings separated by single null terminators."
    return terminator(encoding).join(encode_string(s, encoding)
                                     for s in strings)

def is_latin1(s):
    return all(ord(c) <= 0xFF for c in s)
