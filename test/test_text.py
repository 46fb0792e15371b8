# Copyright (c) 2026, the id3codec authors

import unittest

from id3codec.errors import *
from id3codec.text import *

SAMPLE = "©\U0001d306☃"

class TextTestCase(unittest.TestCase):
    def testEncode(self):
        for (encoding, s, data) in (
            (ISO_8859_1, "VX¡¢Æ", b"\x56\x58\xa1\xa2\xc6"),
            (ISO_8859_1, SAMPLE, b"\xa9\x2e\x2e"),
            (UTF_8, SAMPLE, b"\xc2\xa9\xf0\x9d\x8c\x86\xe2\x98\x83"),
            (UTF_16BE, SAMPLE, b"\x00\xa9\xd8\x34\xdf\x06\x26\x03"),
            (UTF_16, SAMPLE, b"\xfe\xff\x00\xa9\xd8\x34\xdf\x06\x26\x03")):
            self.assertEqual(encode_string(s, encoding), data)

    def testDecode(self):
        for (encoding, data, s, consumed) in (
            (ISO_8859_1, b"\x56\x58\xa1\xa2\xc6", "VX¡¢Æ", 5),
            (ISO_8859_1, b"\x56\x58\xa1\xa2\xc6\x00", "VX¡¢Æ", 6),
            (ISO_8859_1, b"\x56\x58\xa1\xa2\xc6\x00\xff", "VX¡¢Æ", 6),
            (UTF_8, b"\xc2\xa9\xf0\x9d\x8c\x86\xe2\x98\x83", SAMPLE, 9),
            (UTF_8, b"\xc2\xa9\xf0\x9d\x8c\x86\xe2\x98\x83\x00\x80", SAMPLE, 10),
            (UTF_16BE, b"\x00\xa9\xd8\x34\xdf\x06\x26\x03", SAMPLE, 8),
            (UTF_16BE, b"\xfe\xff\x00\xa9\xd8\x34\xdf\x06\x26\x03", SAMPLE, 10),
            (UTF_16, b"\x00\xa9\xd8\x34\xdf\x06\x26\x03", SAMPLE, 8),
            (UTF_16, b"\x00\xa9\xd8\x34\xdf\x06\x26\x03\x00\x00", SAMPLE, 10),
            # 0x00 0x00 straddling a code unit boundary is not a terminator
            (UTF_16BE, b"\x01\x00\x00\x41\x00\x00", "ĀA", 6)):
            self.assertEqual(decode_string(data, encoding), (s, consumed))

    def testBadText(self):
        self.assertRaises(BadTextError, decode_string,
                          b"\x00\xa9\xd8\x34\xdf\x06\x26", UTF_16BE)
        self.assertRaises(BadTextError, decode_string,
                          b"\xfe\xff\x00\xa9\xd8\x34\xdf\x06\x26\x03\x00", UTF_16)
        self.assertRaises(BadTextError, decode_string, b"\xc3\x28", UTF_8)
        self.assertRaises(InvalidEncodingError, decode_string, b"abc", 4)
        self.assertRaises(InvalidEncodingError, encode_string, "abc", 4)

    def testStrings(self):
        self.assertEqual(decode_strings(b"", UTF_8), [])
        self.assertEqual(decode_strings(b"a\x00bc", ISO_8859_1), ["a", "bc"])
        self.assertEqual(decode_strings(b"a\x00bc\x00", ISO_8859_1), ["a", "bc"])
        self.assertEqual(decode_strings(b"a\x00\x00b", ISO_8859_1), ["a", "", "b"])
        self.assertEqual(encode_strings(["a", "bc"], ISO_8859_1), b"a\x00bc")
        self.assertEqual(encode_strings(["a", "b"], UTF_16),
                         b"\xfe\xff\x00a\x00\x00\xfe\xff\x00b")
        self.assertEqual(encode_strings([], UTF_8), b"")

    def testRoundtrip(self):
        for encoding in (UTF_8, UTF_16, UTF_16BE):
            for s in ("", "Hello", SAMPLE, "ÿĀ"):
                data = encode_string(s, encoding) + terminator(encoding)
                self.assertEqual(decode_string(data, encoding), (s, len(data)))
        data = encode_string(SAMPLE, ISO_8859_1) + terminator(ISO_8859_1)
        self.assertEqual(decode_string(data, ISO_8859_1), ("©..", 4))

    def testNames(self):
        self.assertEqual(name(UTF_16BE), "UTF-16BE")
        self.assertEqual(lookup("utf8"), UTF_8)
        self.assertEqual(lookup("ISO-8859-1"), ISO_8859_1)
        self.assertRaises(InvalidEncodingError, lookup, "koi8-r")
        self.assertEqual(terminator(UTF_16), b"\x00\x00")

suite = unittest.TestLoader().loadTestsFromTestCase(TextTestCase)

if __name__ == "__main__":
    unittest.main(defaultTest="suite")
