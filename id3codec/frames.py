# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>
# Copyright (c) 2026, the id3codec authors

"""Class definitions for ID3v2 frames."""

import abc
import collections.abc
import re
from warnings import warn

from id3codec.errors import *
from id3codec.specs import *
from id3codec.buffer import InputBuffer, OutputBuffer
import id3codec.text as text

_FRAME_ID = re.compile(r"^[A-Z0-9][A-Z0-9]{2}[A-Z0-9 ]?$")

def is_frame_id(frameid):
    return isinstance(frameid, str) and _FRAME_ID.match(frameid) is not None

class FrameHeader:
    """Header of a single frame as it appears on the wire.

    size is the encoded frame size: the payload plus any extra header
    bytes (group id, encryption method, data length indicator or
    decompressed size) that follow the fixed part of the header.
    """
    def __init__(self, frameid, size, flags=None, group_id=None,
                 encrypt_method=None, data_length=None):
        self.frameid = frameid
        self.size = size
        self.flags = set(flags) if flags else set()
        self.group_id = group_id
        self.encrypt_method = encrypt_method
        self.data_length = data_length

    def __eq__(self, other):
        return (isinstance(other, FrameHeader)
                and self.frameid == other.frameid
                and self.size == other.size
                and self.flags == other.flags
                and self.group_id == other.group_id
                and self.encrypt_method == other.encrypt_method
                and self.data_length == other.data_length)

    def __repr__(self):
        args = ["{0!r}".format(self.frameid), "size={0}".format(self.size)]
        if self.flags:
            args.append("flags={0!r}".format(sorted(self.flags)))
        for name in ("group_id", "encrypt_method", "data_length"):
            if getattr(self, name) is not None:
                args.append("{0}={1}".format(name, getattr(self, name)))
        return "FrameHeader({0})".format(", ".join(args))

class Frame(metaclass=abc.ABCMeta):
    _framespec = tuple()
    _frameid = None

    # Tried in order when a frame with no encoding set is encoded.
    preferred_encodings = (text.ISO_8859_1, text.UTF_16)

    def __init__(self, frameid=None, flags=None, group_id=None,
                 encrypt_method=None, **kwargs):
        self.frameid = frameid if frameid else self._frameid
        self.flags = set(flags) if flags else set()
        self.group_id = group_id
        self.encrypt_method = encrypt_method
        assert len(self._framespec) > 0
        names = set(spec.name for spec in self._framespec)
        for key in kwargs:
            if key not in names:
                raise TypeError("{0} has no field {1!r}".format(type(self).__name__, key))
        for spec in self._framespec:
            setattr(self, spec.name, kwargs.get(spec.name, None))

    def __setattr__(self, name, value):
        # Automatic validation on assignment
        for spec in self._framespec:
            if name == spec.name:
                value = spec.validate(self, value)
                break
        super().__setattr__(name, value)

    def __eq__(self, other):
        return (isinstance(other, type(self))
                and self.frameid == other.frameid
                and self.flags == other.flags
                and self.group_id == other.group_id
                and self.encrypt_method == other.encrypt_method
                and all(getattr(self, spec.name, None) ==
                        getattr(other, spec.name, None)
                        for spec in self._framespec))

    @classmethod
    def _from_data(cls, header, data):
        """Decode a frame payload according to cls._framespec.

        The text encoding starts out as ISO-8859-1 and is replaced by the
        value of the encoding field once that has been read.
        """
        buf = InputBuffer(data)
        encoding = text.ISO_8859_1
        values = []
        for spec in cls._framespec:
            if spec._optional and buf.remaining == 0:
                break
            value = spec.read(buf, encoding)
            if isinstance(spec, EncodingSpec):
                encoding = value
            values.append((spec.name, value))
        # UTF-16 text cannot leave an odd number of bytes behind.
        if (buf.error is None and buf.remaining & 1
            and encoding in (text.UTF_16, text.UTF_16BE)):
            buf.fail(BadTextError("Frame {0}: odd number of bytes in UTF-16 text"
                                  .format(header.frameid)))
        buf.check()
        if buf.remaining:
            warn("Frame {0}: ignoring {1} bytes of trailing data"
                 .format(header.frameid, buf.remaining), FrameWarning)
        frame = cls(frameid=header.frameid, flags=header.flags,
                    group_id=header.group_id,
                    encrypt_method=header.encrypt_method)
        for name, value in values:
            setattr(frame, name, value)
        return frame

    def _strings(self):
        "Return all strings stored in the frame's current encoding."
        strings = []
        for spec in self._framespec:
            value = getattr(self, spec.name)
            if isinstance(spec, StringListSpec):
                strings.extend(value)
            elif (isinstance(spec, EncodedStringSpec)
                  and not isinstance(spec, Latin1StringSpec)):
                strings.append(value)
        return strings

    def _write_encoding(self):
        if not any(isinstance(spec, EncodingSpec) for spec in self._framespec):
            return text.ISO_8859_1
        if self.encoding is not None:
            return self.encoding
        strings = self._strings()
        for encoding in self.preferred_encodings:
            if encoding != text.ISO_8859_1 or all(text.is_latin1(s) for s in strings):
                return encoding
        raise InvalidEncodedStringError(
            "Frame {0}: no preferred encoding can represent its text"
            .format(self.frameid))

    def _to_data(self):
        encoding = self._write_encoding()
        buf = OutputBuffer()
        last = len(self._framespec) - 1
        for i, spec in enumerate(self._framespec):
            value = getattr(self, spec.name)
            if spec._optional and value is None:
                break
            if isinstance(spec, EncodingSpec):
                value = encoding
            spec.write(buf, value, encoding, last=(i == last))
        buf.check()
        return buf.getvalue()

    def summary(self):
        "One-line description of the frame contents, or None."
        return None

    def __repr__(self):
        stype = type(self).__name__
        args = ["frameid={0!r}".format(self.frameid)]
        if self.flags:
            args.append("flags={0!r}".format(sorted(self.flags)))
        for spec in self._framespec:
            value = getattr(self, spec.name)
            if isinstance(spec, BinaryDataSpec):
                args.append("{0}=<{1} bytes of binary data {2!r}{3}>".format(
                        spec.name, len(value),
                        value[:20], "..." if len(value) > 20 else ""))
            else:
                args.append("{0}={1!r}".format(spec.name, value))
        return "{0}({1})".format(stype, ", ".join(args))

    def _str_fields(self):
        return ", ".join(spec.to_str(getattr(self, spec.name, None))
                         for spec in self._framespec)

    def __str__(self):
        return "{0}({1})".format(self.frameid, self._str_fields())


known_frames = {}

def frameclass(cls):
    """Register cls as the payload class for frames with id cls._frameid.

    "T", "W" and "?" register the classes for the generic text frame, the
    generic URL frame and unknown frames, respectively.
    """
    assert issubclass(cls, Frame)
    assert cls._frameid in ("T", "W", "?") or is_frame_id(cls._frameid)
    assert cls._frameid not in known_frames
    known_frames[cls._frameid] = cls
    return cls

def lookup(frameid):
    "Return the frame class that decodes frames with the given id."
    cls = known_frames.get(frameid)
    if cls is not None:
        return cls
    if frameid.startswith("T") and frameid not in ("TXXX", "TXX"):
        return known_frames["T"]
    if frameid.startswith("W") and frameid not in ("WXXX", "WXX"):
        return known_frames["W"]
    return known_frames["?"]


@frameclass
class UnknownFrame(Frame):
    _frameid = "?"
    _framespec = (BinaryDataSpec("data"),)

    def summary(self):
        return "({0} bytes)".format(len(self.data))

@frameclass
class TextFrame(Frame):
    _frameid = "T"
    _framespec = (EncodingSpec("encoding"),
                  StringListSpec("text"))

    def __init__(self, *values, frameid=None, flags=None, group_id=None,
                 encrypt_method=None, **kwargs):
        def extract_strs(values):
            if values is None:
                return
            if isinstance(values, str):
                yield values
            elif isinstance(values, collections.abc.Iterable):
                for val in values:
                    for v in extract_strs(val):
                        yield v
            else:
                raise ValueError("Invalid text frame value")
        super().__init__(frameid=frameid, flags=flags, group_id=group_id,
                         encrypt_method=encrypt_method, **kwargs)
        self.text.extend(extract_strs(values))

    def summary(self):
        return " - ".join(self.text)

    def _str_fields(self):
        return "{0} {1}".format(EncodingSpec("encoding").to_str(self.encoding),
                                ", ".join(repr(t) for t in self.text))

@frameclass
class UserTextFrame(Frame):
    _frameid = "TXXX"
    _framespec = (EncodingSpec("encoding"),
                  EncodedStringSpec("description"),
                  EncodedStringSpec("text"))

    def summary(self):
        return "{0} -> {1}".format(self.description, self.text)

@frameclass
class URLFrame(Frame):
    _frameid = "W"
    _framespec = (Latin1StringSpec("url"),)

    def summary(self):
        return self.url

@frameclass
class UserURLFrame(Frame):
    _frameid = "WXXX"
    _framespec = (EncodingSpec("encoding"),
                  EncodedStringSpec("description"),
                  Latin1StringSpec("url"))

    def summary(self):
        return "{0} -> {1}".format(self.description, self.url)

picture_types = (
    "Other", "32x32 icon", "Other icon", "Front Cover", "Back Cover",
    "Leaflet", "Media", "Lead artist", "Artist", "Conductor",
    "Band/Orchestra", "Composer", "Lyricist/text writer",
    "Recording Location", "Recording", "Performing", "Screen capture",
    "A bright coloured fish", "Illustration", "Band/artist",
    "Publisher/Studio")

@frameclass
class PictureFrame(Frame):
    _frameid = "APIC"
    _framespec = (EncodingSpec("encoding"),
                  Latin1StringSpec("mime"),
                  PictureTypeSpec("type"),
                  EncodedStringSpec("desc"),
                  BinaryDataSpec("data"))

    def __init__(self, *args, **kwargs):
        kwargs.setdefault("type", 0)
        super().__init__(*args, **kwargs)

    def summary(self):
        return "#{0} {1}[{2}] ({3} bytes)".format(self.type, self.desc,
                                                  self.mime, len(self.data))

    def _str_fields(self):
        return "{0}({1}) {2!r}, <{3} bytes of {4} data>".format(
            picture_types[self.type], self.type, self.desc,
            len(self.data), self.mime)

@frameclass
class UniqueFileIDFrame(Frame):
    _frameid = "UFID"
    _framespec = (Latin1StringSpec("owner"),
                  BinaryDataSpec("identifier"))

    def summary(self):
        return "{0} -> {1}".format(self.owner,
                                   self.identifier.decode("latin-1"))

@frameclass
class LyricsFrame(Frame):
    _frameid = "USLT"
    _framespec = (EncodingSpec("encoding"),
                  LanguageSpec("lang"),
                  EncodedStringSpec("desc"),
                  EncodedStringSpec("text"))

    def summary(self):
        return "[{0}:{1}] {2}".format(self.lang, self.desc, self.text)

@frameclass
class CommentFrame(Frame):
    _frameid = "COMM"
    _framespec = (EncodingSpec("encoding"),
                  LanguageSpec("lang"),
                  EncodedStringSpec("desc"),
                  EncodedStringSpec("text"))

    def summary(self):
        return "{0} -> {1}".format(self.desc, self.text)

@frameclass
class PrivateFrame(Frame):
    _frameid = "PRIV"
    _framespec = (Latin1StringSpec("owner"),
                  BinaryDataSpec("data"))

    def summary(self):
        return "{0} ({1} bytes)".format(self.owner, len(self.data))

@frameclass
class PlayCountFrame(Frame):
    _frameid = "PCNT"
    _framespec = (CounterSpec("count"),)

    def __init__(self, *args, **kwargs):
        kwargs.setdefault("count", 0)
        super().__init__(*args, **kwargs)

    def summary(self):
        return str(self.count)

@frameclass
class PopularimeterFrame(Frame):
    _frameid = "POPM"
    _framespec = (Latin1StringSpec("email"),
                  ByteSpec("rating"),
                  optionalspec(CounterSpec("count")))

    def __init__(self, *args, **kwargs):
        kwargs.setdefault("rating", 0)
        super().__init__(*args, **kwargs)

    def summary(self):
        return "{0} ({1}) {2}".format(self.email, self.rating, self.count or 0)
