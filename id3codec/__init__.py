# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>
# Copyright (c) 2026, the id3codec authors

"""ID3v2 tag codec."""

import id3codec.frames
import id3codec.tags

from id3codec.errors import *
from id3codec.frames import Frame, FrameHeader, lookup
from id3codec.tags import peek, decode, encode, read_tag, decode_tag
from id3codec.tags import Tag, Tag22, Tag23, Tag24

version = (0, 1, 0)
versionstr = ".".join((str(v) for v in version))
