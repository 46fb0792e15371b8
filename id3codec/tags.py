# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>
# Copyright (c) 2026, the id3codec authors

import abc
import io
import zlib

from abc import abstractmethod
from warnings import warn

from id3codec.errors import *
from id3codec.conversion import *

import id3codec.frames as Frames
import id3codec.fileutil as fileutil

_TAG22_UNSYNCHRONISED = 0x80
_TAG22_COMPRESSED = 0x40
_TAG22_UNKNOWN_MASK = 0x3F

_TAG23_UNSYNCHRONISED = 0x80
_TAG23_EXTENDED_HEADER = 0x40
_TAG23_EXPERIMENTAL = 0x20
_TAG23_UNKNOWN_MASK = 0x1F

_TAG23_EXT_CRC = 0x8000
_TAG23_EXT_UNKNOWN_MASK = 0x7FFF

_FRAME23_FORMAT_COMPRESSED = 0x0080
_FRAME23_FORMAT_ENCRYPTED = 0x0040
_FRAME23_FORMAT_GROUP = 0x0020
_FRAME23_FORMAT_UNKNOWN_MASK = 0x001F

_FRAME23_STATUS_DISCARD_ON_TAG_ALTER = 0x8000
_FRAME23_STATUS_DISCARD_ON_FILE_ALTER = 0x4000
_FRAME23_STATUS_READ_ONLY = 0x2000
_FRAME23_STATUS_UNKNOWN_MASK = 0x1F00

_TAG24_UNSYNCHRONISED = 0x80
_TAG24_EXTENDED_HEADER = 0x40
_TAG24_EXPERIMENTAL = 0x20
_TAG24_FOOTER = 0x10
_TAG24_UNKNOWN_MASK = 0x0F

_TAG24_EXT_UPDATE = 0x40
_TAG24_EXT_CRC = 0x20
_TAG24_EXT_RESTRICTIONS = 0x10
_TAG24_EXT_UNKNOWN_MASK = 0x8F

_FRAME24_FORMAT_GROUP = 0x0040
_FRAME24_FORMAT_COMPRESSED = 0x0008
_FRAME24_FORMAT_ENCRYPTED = 0x0004
_FRAME24_FORMAT_UNSYNCHRONISED = 0x0002
_FRAME24_FORMAT_DATA_LENGTH_INDICATOR = 0x0001
_FRAME24_FORMAT_UNKNOWN_MASK = 0x00B0

_FRAME24_STATUS_DISCARD_ON_TAG_ALTER = 0x4000
_FRAME24_STATUS_DISCARD_ON_FILE_ALTER = 0x2000
_FRAME24_STATUS_READ_ONLY = 0x1000
_FRAME24_STATUS_UNKNOWN_MASK = 0x8F00

# Group ids and encryption methods must fall into this range.
_ID_BYTE_RANGE = range(0x80, 0xF1)

def _parse_header(header):
    "Return (version, flags, size) from a 10-byte tag header."
    if header[0:3] != b"ID3":
        raise InvalidTagError("ID3v2 tag not found")
    if header[3] not in _tag_versions or header[4] != 0:
        raise InvalidVersionError("Unknown ID3 version: 2.{0}.{1}"
                                  .format(*header[3:5]))
    return header[3], header[5], Syncsafe.decode(header[6:10])

def peek(data):
    """Return (version, length) of the ID3v2 tag at the start of data.

    length is the total size of the tag in bytes, including its header
    and footer.  data must contain at least the 10-byte tag header.
    """
    if len(data) < 10:
        raise InvalidHeaderError("ID3v2 header needs 10 bytes, got {0}"
                                 .format(len(data)))
    try:
        (version, flags, size) = _parse_header(data[0:10])
    except BadSyncError as e:
        raise InvalidHeaderError("Invalid ID3v2 tag size") from e
    length = size + 10
    if version == 4 and flags & _TAG24_FOOTER:
        length += 10
    return (version, length)

def decode(stream):
    """Decode the ID3v2 tag at the current position of stream.

    Returns (tag, consumed), where consumed is the number of bytes read.
    Errors raised from here carry the number of bytes read before the
    failure in their consumed attribute.
    """
    consumed = 0
    try:
        header = stream.read(10)
        consumed = len(header)
        if header[0:3] != b"ID3"[0:len(header)]:
            raise InvalidTagError("ID3v2 tag not found")
        if len(header) < 10:
            raise UnexpectedEOFError("Truncated ID3v2 header")
        (version, flags, size) = _parse_header(header)
        tag = _tag_versions[version]()
        region = fileutil.CountingReader(stream, limit=size)
        try:
            tag._read(flags, size, region)
            if region.remaining:
                raise UnexpectedEOFError("Tag ends {0} bytes early"
                                         .format(region.remaining))
        finally:
            consumed += region.consumed
        if "footer" in tag.flags:
            footer = stream.read(10)
            consumed += len(footer)
            tag._check_footer(header, footer)
        return (tag, consumed)
    except Error as e:
        e.consumed = consumed
        raise

def encode(tag, stream):
    "Write tag to stream; return the number of bytes written."
    data = tag.encode()
    stream.write(data)
    return len(data)

def read_tag(filename):
    with fileutil.opened(filename, "rb") as file:
        return decode(file)[0]

def decode_tag(data):
    return decode(io.BytesIO(data))[0]


class Tag(metaclass=abc.ABCMeta):
    version = None

    # Padding written after the frames of tags that were not decoded
    # from a stream.
    padding_default = 128

    # Largest accepted frame size; None means no limit.
    max_frame_size = 16 << 20

    _known_flags = frozenset()

    def __init__(self, frames=None):
        self.flags = set()
        self.size = None
        self.padding = None
        self.crc = None
        self.restrictions = None
        self.frames = list(frames) if frames else []

    def __eq__(self, other):
        return (type(self) == type(other)
                and self.flags == other.flags
                and self.padding == other.padding
                and self.crc == other.crc
                and self.restrictions == other.restrictions
                and self.frames == other.frames)

    def __repr__(self):
        return "<{0}: ID3v2.{1} tag{2} with {3} frames>".format(
            type(self).__name__,
            self.version,
            ("({0})".format(", ".join(sorted(self.flags)))
             if len(self.flags) > 0 else ""),
            len(self.frames))

    # Frame lookup

    @staticmethod
    def _matches(frame, key):
        if isinstance(key, str):
            return frame.frameid == key
        return isinstance(frame, key)

    def find_frame(self, key):
        """Return the first frame matching key, or None.
        key is either a frame id or a frame class."""
        for frame in self.frames:
            if self._matches(frame, key):
                return frame
        return None

    def find_frames(self, key):
        return [frame for frame in self.frames if self._matches(frame, key)]

    def remove_frames(self, key):
        "Remove all frames matching key; return the number of frames removed."
        count = len(self.frames)
        self.frames = [frame for frame in self.frames
                       if not self._matches(frame, key)]
        return count - len(self.frames)

    # Reading tags

    def _read(self, flags, size, region):
        self._read_header_flags(flags)
        self.size = size
        if "unsynchronisation" in self.flags:
            reader = fileutil.CountingReader(UnsyncReader(region))
        else:
            reader = fileutil.CountingReader(region)
        if "extended_header" in self.flags:
            self._read_extended_header(reader)
        self._read_frames(reader, region)

    def _read_frames(self, reader, region):
        self.padding = 0
        while region.remaining > 0:
            frames_end = reader.consumed
            header = self._read_frame_header(reader)
            if header is None:
                if any(reader.read()):
                    warn("Nonzero bytes in tag padding", TagWarning)
                self.padding = reader.consumed - frames_end
                break
            if self.max_frame_size is not None and header.size > self.max_frame_size:
                raise InvalidFrameHeaderError(
                    "Frame {0} is too large: {1} bytes".format(header.frameid, header.size))
            size = header.size - self._frame_extra_size(header.flags)
            if size > region.remaining:
                raise InvalidFrameHeaderError(
                    "Frame {0} extends past the end of the tag".format(header.frameid))
            data = fileutil.xread(reader, size)
            data = self._decode_frame_data(header, data)
            frame = Frames.lookup(header.frameid)._from_data(header, data)
            self.frames.append(frame)

    def _read_frame_id(self, reader, width=4):
        "Read a frame id; return None if it is the start of the padding."
        data = reader.read(width)
        if not any(data):
            return None
        if len(data) < width:
            raise UnexpectedEOFError("Truncated frame header")
        try:
            frameid = data.decode("ASCII")
        except UnicodeDecodeError:
            frameid = None
        if not Frames.is_frame_id(frameid):
            raise InvalidFrameHeaderError("Invalid frame id {0!r}".format(data))
        return frameid

    @staticmethod
    def _read_id_byte(reader, error, what):
        value = fileutil.xread(reader, 1)[0]
        if value not in _ID_BYTE_RANGE:
            raise error("Invalid {0}: 0x{1:02X}".format(what, value))
        return value

    @staticmethod
    def _decompress(header, data):
        try:
            data = zlib.decompress(data)
        except zlib.error as e:
            raise InvalidFrameError("Frame {0}: {1}".format(header.frameid, e)) from e
        if len(data) != header.data_length:
            raise InvalidFrameError(
                "Frame {0}: decompressed size is {1}, expected {2}"
                .format(header.frameid, len(data), header.data_length))
        return data

    def _check_footer(self, header, footer):
        raise InvalidFooterError("ID3v2.{0} tags have no footer".format(self.version))

    @abstractmethod
    def _read_header_flags(self, flags): pass

    @abstractmethod
    def _read_extended_header(self, reader): pass

    @abstractmethod
    def _read_frame_header(self, reader): pass

    @abstractmethod
    def _frame_extra_size(self, flags): pass

    @abstractmethod
    def _decode_frame_data(self, header, data): pass

    # Writing tags

    def write(self, filename):
        "Write the encoded tag alone to a file or stream."
        with fileutil.opened(filename, "wb") as file:
            return encode(self, file)

    def encode(self):
        unknown = self.flags - self._known_flags
        if unknown:
            raise InvalidHeaderFlagsError("Invalid ID3v2.{0} tag flags: {1}"
                                          .format(self.version, ", ".join(sorted(unknown))))
        framedata = bytearray()
        for frame in self.frames:
            framedata.extend(self._encode_frame(frame))
        padding = self.padding if self.padding is not None else self.padding_default
        body = bytes(framedata) + bytes(padding)
        if self._has_extended_header():
            body = self._encode_extended_header(body, padding) + body
        if "unsynchronisation" in self.flags:
            body = Unsync.encode(body)

        header = bytearray(b"ID3")
        header.append(self.version)
        header.append(0)
        header.append(self._encode_header_flags())
        header.extend(Syncsafe.encode(len(body), width=4))
        data = bytes(header) + body
        if "footer" in self.flags:
            data += b"3DI" + bytes(header[3:])
        return data

    def _has_extended_header(self):
        return bool(self.flags & {"extended_header", "update", "crc", "restrictions"})

    def _crc(self, body):
        crc = self.crc if self.crc is not None else zlib.crc32(body)
        if not 0 <= crc <= 0xFFFFFFFF:
            raise InvalidCRCError("CRC does not fit in 32 bits: {0}".format(crc))
        return crc

    def _check_frame(self, frame):
        if not isinstance(frame, Frames.Frame):
            raise TypeError("Not a frame: {0!r}".format(frame))
        if (not Frames.is_frame_id(frame.frameid)
            or len(frame.frameid) != self._frameid_length):
            raise InvalidFrameHeaderError("Invalid ID3v2.{0} frame id {1!r}"
                                          .format(self.version, frame.frameid))
        if Frames.lookup(frame.frameid) is not type(frame):
            raise InvalidFrameError("Frame {0} cannot be encoded as {1}"
                                    .format(frame.frameid, type(frame).__name__))

    def _frame_flags(self, frame):
        "Return the flag set of frame, with group and encryption flags implied by its ids."
        flags = set(frame.flags)
        if frame.group_id is not None:
            flags.add("group")
        if frame.encrypt_method is not None:
            flags.add("encrypted")
        return flags

    @abstractmethod
    def _encode_header_flags(self): pass

    @abstractmethod
    def _encode_extended_header(self, body, padding): pass

    @abstractmethod
    def _encode_frame(self, frame): pass


class Tag22(Tag):
    version = 2
    _frameid_length = 3
    _known_flags = frozenset(["unsynchronisation"])

    def _read_header_flags(self, flags):
        if flags & _TAG22_UNSYNCHRONISED:
            self.flags.add("unsynchronisation")
        if flags & _TAG22_COMPRESSED: # Compression bit is ill-defined in standard
            raise UnimplementedError("ID3v2.2 tag compression is not supported")
        if flags & _TAG22_UNKNOWN_MASK:
            raise InvalidHeaderFlagsError("Unknown ID3v2.2 flags: 0x{0:02X}".format(flags))

    def _read_extended_header(self, reader):
        raise UnimplementedError("ID3v2.2 has no extended header")

    def _read_frame_header(self, reader):
        if self._read_frame_id(reader, width=3) is None:
            return None
        raise UnimplementedError("ID3v2.2 frames are not supported")

    def _frame_extra_size(self, flags):
        return 0

    def _decode_frame_data(self, header, data):
        raise UnimplementedError("ID3v2.2 frames are not supported")

    def _encode_header_flags(self):
        return _TAG22_UNSYNCHRONISED if "unsynchronisation" in self.flags else 0

    def _encode_extended_header(self, body, padding):
        raise InvalidHeaderFlagsError("ID3v2.2 tags have no extended header")

    def _encode_frame(self, frame):
        raise UnimplementedError("ID3v2.2 frames are not supported")


class Tag23(Tag):
    version = 3
    _frameid_length = 4
    _known_flags = frozenset(["unsynchronisation", "extended_header",
                              "experimental", "crc"])

    def _read_header_flags(self, flags):
        if flags & _TAG23_UNSYNCHRONISED:
            self.flags.add("unsynchronisation")
        if flags & _TAG23_EXTENDED_HEADER:
            self.flags.add("extended_header")
        if flags & _TAG23_EXPERIMENTAL:
            self.flags.add("experimental")
        if flags & _TAG23_UNKNOWN_MASK:
            raise InvalidHeaderFlagsError("Unknown ID3v2.3 flags: 0x{0:02X}".format(flags))

    def _read_extended_header(self, reader):
        size = Int8.decode(fileutil.xread(reader, 4))
        if size not in (6, 10):
            raise InvalidHeaderError("Invalid size of ID3v2.3 extended header: {0}"
                                     .format(size))
        data = fileutil.xread(reader, size)
        ext_flags = Int8.decode(data[0:2])
        self._declared_padding = Int8.decode(data[2:6])
        if ext_flags & _TAG23_EXT_UNKNOWN_MASK:
            raise InvalidHeaderFlagsError("Unknown ID3v2.3 extended flags: 0x{0:04X}"
                                          .format(ext_flags))
        if bool(ext_flags & _TAG23_EXT_CRC) != (size == 10):
            raise InvalidHeaderError("ID3v2.3 extended header size does not match its flags")
        if ext_flags & _TAG23_EXT_CRC:
            self.flags.add("crc")
            self.crc = Int8.decode(data[6:10])

    def _read_frames(self, reader, region):
        super()._read_frames(reader, region)
        declared = getattr(self, "_declared_padding", None)
        if declared is not None and declared != self.padding:
            warn("ID3v2.3 extended header declares {0} bytes of padding, found {1}"
                 .format(declared, self.padding), TagWarning)

    def _read_frame_header(self, reader):
        frameid = self._read_frame_id(reader)
        if frameid is None:
            return None
        data = fileutil.xread(reader, 6)
        size = Int8.decode(data[0:4])
        bflags = Int8.decode(data[4:6])
        if size < 1:
            raise InvalidFrameHeaderError("Frame {0} is empty".format(frameid))
        if bflags & _FRAME23_FORMAT_UNKNOWN_MASK:
            raise InvalidFrameFlagsError("Unknown ID3v2.3 frame encoding flags: 0x{0:04X}"
                                         .format(bflags))
        if bflags & _FRAME23_STATUS_UNKNOWN_MASK:
            warn("Unexpected status flags on {0} frame: 0x{1:04X}".format(frameid, bflags),
                 FrameWarning)

        header = Frames.FrameHeader(frameid, size)
        if bflags & _FRAME23_STATUS_DISCARD_ON_TAG_ALTER:
            header.flags.add("discard_on_tag_alter")
        if bflags & _FRAME23_STATUS_DISCARD_ON_FILE_ALTER:
            header.flags.add("discard_on_file_alter")
        if bflags & _FRAME23_STATUS_READ_ONLY:
            header.flags.add("read_only")
        if bflags & _FRAME23_FORMAT_COMPRESSED:
            header.flags.add("compressed")
        if bflags & _FRAME23_FORMAT_ENCRYPTED:
            header.flags.add("encrypted")
        if bflags & _FRAME23_FORMAT_GROUP:
            header.flags.add("group")
        if size < self._frame_extra_size(header.flags):
            raise InvalidFrameHeaderError("Frame {0} is too short for its flags"
                                          .format(frameid))

        if "compressed" in header.flags:
            header.data_length = Int8.decode(fileutil.xread(reader, 4))
        if "encrypted" in header.flags:
            header.encrypt_method = self._read_id_byte(reader, InvalidEncryptMethodError,
                                                       "encryption method")
        if "group" in header.flags:
            header.group_id = self._read_id_byte(reader, InvalidGroupIDError, "group id")
        return header

    def _frame_extra_size(self, flags):
        return ((4 if "compressed" in flags else 0)
                + (1 if "encrypted" in flags else 0)
                + (1 if "group" in flags else 0))

    def _decode_frame_data(self, header, data):
        if "encrypted" in header.flags:
            raise UnimplementedError("Can't read encrypted frame {0}".format(header.frameid))
        if "compressed" in header.flags:
            data = self._decompress(header, data)
        return data

    def _write_frame_header(self, header):
        bflags = 0
        for flag in header.flags:
            if flag not in _FRAME23_FLAGS:
                raise InvalidFrameFlagsError("Invalid ID3v2.3 frame flag {0!r}".format(flag))
            bflags |= _FRAME23_FLAGS[flag]
        data = bytearray(header.frameid.encode("ASCII"))
        data.extend(Int8.encode(header.size, width=4))
        data.extend(Int8.encode(bflags, width=2))
        if "compressed" in header.flags:
            data.extend(Int8.encode(header.data_length, width=4))
        if "encrypted" in header.flags:
            data.append(_check_id_byte(header.encrypt_method, InvalidEncryptMethodError,
                                       "encryption method"))
        if "group" in header.flags:
            data.append(_check_id_byte(header.group_id, InvalidGroupIDError, "group id"))
        return bytes(data)

    def _encode_header_flags(self):
        flagval = 0
        if "unsynchronisation" in self.flags:
            flagval |= _TAG23_UNSYNCHRONISED
        if self._has_extended_header():
            flagval |= _TAG23_EXTENDED_HEADER
        if "experimental" in self.flags:
            flagval |= _TAG23_EXPERIMENTAL
        return flagval

    def _encode_extended_header(self, body, padding):
        data = bytearray()
        if "crc" in self.flags:
            data.extend(Int8.encode(10, width=4))
            data.extend(Int8.encode(_TAG23_EXT_CRC, width=2))
            data.extend(Int8.encode(padding, width=4))
            data.extend(Int8.encode(self._crc(body), width=4))
        else:
            data.extend(Int8.encode(6, width=4))
            data.extend(Int8.encode(0, width=2))
            data.extend(Int8.encode(padding, width=4))
        return bytes(data)

    def _encode_frame(self, frame):
        self._check_frame(frame)
        framedata = frame._to_data()
        flags = self._frame_flags(frame)
        header = Frames.FrameHeader(frame.frameid, 0, flags,
                                    group_id=frame.group_id,
                                    encrypt_method=frame.encrypt_method)
        if "encrypted" in flags:
            raise UnimplementedError("Can't write encrypted frame {0}".format(frame.frameid))
        if "compressed" in flags:
            header.data_length = len(framedata)
            framedata = zlib.compress(framedata)
        header.size = self._frame_extra_size(flags) + len(framedata)
        if header.size < 1:
            raise InvalidFrameHeaderError("Frame {0} is empty".format(frame.frameid))
        return self._write_frame_header(header) + framedata


class Tag24(Tag):
    version = 4
    _frameid_length = 4
    _known_flags = frozenset(["unsynchronisation", "extended_header",
                              "experimental", "footer",
                              "update", "crc", "restrictions"])

    def _read_header_flags(self, flags):
        if flags & _TAG24_UNSYNCHRONISED:
            self.flags.add("unsynchronisation")
        if flags & _TAG24_EXTENDED_HEADER:
            self.flags.add("extended_header")
        if flags & _TAG24_EXPERIMENTAL:
            self.flags.add("experimental")
        if flags & _TAG24_FOOTER:
            self.flags.add("footer")
        if flags & _TAG24_UNKNOWN_MASK:
            raise InvalidHeaderFlagsError("Unknown ID3v2.4 flags: 0x{0:02X}".format(flags))

    def _read_extended_header(self, reader):
        size = Syncsafe.decode(fileutil.xread(reader, 4))
        if size < 6:
            raise InvalidHeaderError("Invalid size of ID3v2.4 extended header: {0}"
                                     .format(size))
        data = fileutil.xread(reader, size - 4)
        if data[0] != 1:
            raise InvalidHeaderError("Unexpected number of ID3v2.4 extended flag bytes: {0}"
                                     .format(data[0]))
        ext_flags = data[1]
        if ext_flags & _TAG24_EXT_UNKNOWN_MASK:
            raise InvalidHeaderFlagsError("Unknown ID3v2.4 extended flags: 0x{0:02X}"
                                          .format(ext_flags))
        data = data[2:]
        if ext_flags & _TAG24_EXT_UPDATE:
            self.flags.add("update")
            if data[0:1] != b"\x00":
                raise InvalidHeaderError("Invalid tag update field in extended header")
            data = data[1:]
        if ext_flags & _TAG24_EXT_CRC:
            self.flags.add("crc")
            if len(data) < 6 or data[0] != 5:
                raise InvalidHeaderError("Invalid CRC field in extended header")
            self.crc = Syncsafe.decode(data[1:6])
            if self.crc > 0xFFFFFFFF:
                raise InvalidCRCError("CRC does not fit in 32 bits: {0}".format(self.crc))
            data = data[6:]
        if ext_flags & _TAG24_EXT_RESTRICTIONS:
            self.flags.add("restrictions")
            if len(data) < 2 or data[0] != 1:
                raise InvalidHeaderError("Invalid restrictions field in extended header")
            self.restrictions = data[1]
            data = data[2:]
        if data:
            raise InvalidHeaderError("{0} unexpected bytes in extended header"
                                     .format(len(data)))

    def _read_frame_header(self, reader):
        frameid = self._read_frame_id(reader)
        if frameid is None:
            return None
        data = fileutil.xread(reader, 6)
        size = Syncsafe.decode(data[0:4])
        bflags = Int8.decode(data[4:6])
        if size < 1:
            raise InvalidFrameHeaderError("Frame {0} is empty".format(frameid))
        if bflags & _FRAME24_FORMAT_UNKNOWN_MASK:
            raise InvalidFrameFlagsError("Unknown ID3v2.4 frame encoding flags: 0x{0:04X}"
                                         .format(bflags))
        if bflags & _FRAME24_STATUS_UNKNOWN_MASK:
            warn("Unexpected status flags on {0} frame: 0x{1:04X}".format(frameid, bflags),
                 FrameWarning)

        header = Frames.FrameHeader(frameid, size)
        for (flag, bit) in _FRAME24_FLAGS.items():
            if bflags & bit:
                header.flags.add(flag)
        if ("compressed" in header.flags
            and "data_length_indicator" not in header.flags):
            raise InvalidFrameFlagsError("Compressed frame {0} has no data length indicator"
                                         .format(frameid))
        if size < self._frame_extra_size(header.flags):
            raise InvalidFrameHeaderError("Frame {0} is too short for its flags"
                                          .format(frameid))

        if "group" in header.flags:
            header.group_id = self._read_id_byte(reader, InvalidGroupIDError, "group id")
        if "encrypted" in header.flags:
            header.encrypt_method = self._read_id_byte(reader, InvalidEncryptMethodError,
                                                       "encryption method")
        if "data_length_indicator" in header.flags:
            header.data_length = Syncsafe.decode(fileutil.xread(reader, 4))
        return header

    def _frame_extra_size(self, flags):
        return ((1 if "group" in flags else 0)
                + (1 if "encrypted" in flags else 0)
                + (4 if "data_length_indicator" in flags else 0))

    def _decode_frame_data(self, header, data):
        # Tag-level unsynchronisation has already been undone by the reader.
        if ("unsynchronised" in header.flags
            and "unsynchronisation" not in self.flags):
            data = Unsync.decode(data)
        if "encrypted" in header.flags:
            raise UnimplementedError("Can't read encrypted frame {0}".format(header.frameid))
        if "compressed" in header.flags:
            data = self._decompress(header, data)
        elif header.data_length is not None and header.data_length != len(data):
            warn("Frame {0}: data length indicator is {1}, actual length is {2}"
                 .format(header.frameid, header.data_length, len(data)), FrameWarning)
        return data

    def _check_footer(self, header, footer):
        if len(footer) < 10:
            raise UnexpectedEOFError("Truncated ID3v2.4 footer")
        if footer[0:3] != b"3DI" or footer[3:10] != header[3:10]:
            raise InvalidFooterError("ID3v2.4 footer does not match header")

    def _write_frame_header(self, header):
        bflags = 0
        for flag in header.flags:
            if flag not in _FRAME24_FLAGS:
                raise InvalidFrameFlagsError("Invalid ID3v2.4 frame flag {0!r}".format(flag))
            bflags |= _FRAME24_FLAGS[flag]
        if ("compressed" in header.flags
            and "data_length_indicator" not in header.flags):
            raise InvalidFrameFlagsError("Compressed frame {0} needs a data length indicator"
                                         .format(header.frameid))
        data = bytearray(header.frameid.encode("ASCII"))
        data.extend(Syncsafe.encode(header.size, width=4))
        data.extend(Int8.encode(bflags, width=2))
        if "group" in header.flags:
            data.append(_check_id_byte(header.group_id, InvalidGroupIDError, "group id"))
        if "encrypted" in header.flags:
            data.append(_check_id_byte(header.encrypt_method, InvalidEncryptMethodError,
                                       "encryption method"))
        if "data_length_indicator" in header.flags:
            data.extend(Syncsafe.encode(header.data_length, width=4))
        return bytes(data)

    def _encode_header_flags(self):
        flagval = 0
        if "unsynchronisation" in self.flags:
            flagval |= _TAG24_UNSYNCHRONISED
        if self._has_extended_header():
            flagval |= _TAG24_EXTENDED_HEADER
        if "experimental" in self.flags:
            flagval |= _TAG24_EXPERIMENTAL
        if "footer" in self.flags:
            flagval |= _TAG24_FOOTER
        return flagval

    def _encode_extended_header(self, body, padding):
        ext_flags = 0
        data = bytearray()
        if "update" in self.flags:
            ext_flags |= _TAG24_EXT_UPDATE
            data.append(0)
        if "crc" in self.flags:
            ext_flags |= _TAG24_EXT_CRC
            data.append(5)
            data.extend(Syncsafe.encode(self._crc(body), width=5))
        if "restrictions" in self.flags:
            ext_flags |= _TAG24_EXT_RESTRICTIONS
            data.append(1)
            data.append(self.restrictions or 0)
        return Syncsafe.encode(len(data) + 6, width=4) + bytes([1, ext_flags]) + bytes(data)

    def _encode_frame(self, frame):
        self._check_frame(frame)
        framedata = frame._to_data()
        flags = self._frame_flags(frame)
        if "encrypted" in flags:
            raise UnimplementedError("Can't write encrypted frame {0}".format(frame.frameid))
        if "compressed" in flags:
            flags.add("data_length_indicator")
        header = Frames.FrameHeader(frame.frameid, 0, flags,
                                    group_id=frame.group_id,
                                    encrypt_method=frame.encrypt_method)
        if "data_length_indicator" in flags:
            header.data_length = len(framedata)
        if "compressed" in flags:
            framedata = zlib.compress(framedata)
        if "unsynchronised" in flags and "unsynchronisation" not in self.flags:
            framedata = Unsync.encode(framedata)
        header.size = self._frame_extra_size(flags) + len(framedata)
        if header.size < 1:
            raise InvalidFrameHeaderError("Frame {0} is empty".format(frame.frameid))
        return self._write_frame_header(header) + framedata


def _check_id_byte(value, error, what):
    if value is None or value not in _ID_BYTE_RANGE:
        raise error("Invalid {0}: {1!r}".format(what, value))
    return value

_FRAME23_FLAGS = {
    "discard_on_tag_alter": _FRAME23_STATUS_DISCARD_ON_TAG_ALTER,
    "discard_on_file_alter": _FRAME23_STATUS_DISCARD_ON_FILE_ALTER,
    "read_only": _FRAME23_STATUS_READ_ONLY,
    "compressed": _FRAME23_FORMAT_COMPRESSED,
    "encrypted": _FRAME23_FORMAT_ENCRYPTED,
    "group": _FRAME23_FORMAT_GROUP,
    }

_FRAME24_FLAGS = {
    "discard_on_tag_alter": _FRAME24_STATUS_DISCARD_ON_TAG_ALTER,
    "discard_on_file_alter": _FRAME24_STATUS_DISCARD_ON_FILE_ALTER,
    "read_only": _FRAME24_STATUS_READ_ONLY,
    "group": _FRAME24_FORMAT_GROUP,
    "compressed": _FRAME24_FORMAT_COMPRESSED,
    "encrypted": _FRAME24_FORMAT_ENCRYPTED,
    "unsynchronised": _FRAME24_FORMAT_UNSYNCHRONISED,
    "data_length_indicator": _FRAME24_FORMAT_DATA_LENGTH_INDICATOR,
    }

_tag_versions = {
    2: Tag22,
    3: Tag23,
    4: Tag24,
    }
