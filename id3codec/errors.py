# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>
# Copyright (c) 2026, the id3codec authors

class Error(Exception):
    # Number of stream bytes read before the failure; set by tags.decode.
    consumed = None

class Warning(Error, UserWarning): pass

class FrameWarning(Warning): pass
class TagWarning(Warning): pass
class UnsyncWarning(Warning): pass

class TagError(Error, ValueError): pass
class InvalidHeaderError(TagError): pass
class InvalidTagError(InvalidHeaderError): pass
class InvalidVersionError(InvalidHeaderError): pass
class InvalidHeaderFlagsError(InvalidHeaderError): pass
class InvalidFooterError(TagError): pass
class InvalidCRCError(TagError): pass

class BadSyncError(Error, ValueError): pass

class FrameError(Error, ValueError): pass
class InvalidFrameHeaderError(FrameError): pass
class InvalidGroupIDError(InvalidFrameHeaderError): pass
class InvalidEncryptMethodError(InvalidFrameHeaderError): pass
class InvalidFrameFlagsError(FrameError): pass
class InvalidFrameError(FrameError): pass
class InvalidPictureTypeError(InvalidFrameError): pass
class InvalidFixedLenStringError(FrameError): pass

class TextError(FrameError): pass
class BadTextError(TextError): pass
class InvalidEncodingError(InvalidFrameError, TextError): pass
class InvalidEncodedStringError(TextError): pass

class UnimplementedError(Error, NotImplementedError): pass

class UnexpectedEOFError(Error, EOFError): pass
InsufficientBufferError = UnexpectedEOFError
