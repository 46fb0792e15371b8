# Copyright (c) 2026, the id3codec authors

import unittest
import warnings

from id3codec.errors import *
from id3codec.frames import *
import id3codec.text as text

def decode_payload(frameid, data):
    header = FrameHeader(frameid, len(data))
    return lookup(frameid)._from_data(header, data)

class WalkerTestCase(unittest.TestCase):
    def assertRoundtrip(self, frameid, data):
        frame = decode_payload(frameid, data)
        self.assertEqual(frame._to_data(), data)
        return frame

    def testText(self):
        frame = self.assertRoundtrip("TIT2", b"\x03Hello World")
        self.assertTrue(isinstance(frame, TextFrame))
        self.assertEqual(frame.encoding, text.UTF_8)
        self.assertEqual(frame.text, ["Hello World"])
        self.assertEqual(frame.summary(), "Hello World")

    def testTextUTF16(self):
        frame = self.assertRoundtrip("TPE1", b"\x01\xfe\xff\x00A\x00\x00\xfe\xff\x00B")
        self.assertEqual(frame.text, ["A", "B"])
        self.assertEqual(frame.summary(), "A - B")
        # A byte order mark on the first string only is re-emitted for each string
        frame = decode_payload("TPE1", b"\x01\xfe\xff\x00A\x00\x00\x00B")
        self.assertEqual(frame.text, ["A", "B"])
        self.assertEqual(frame._to_data(), b"\x01\xfe\xff\x00A\x00\x00\xfe\xff\x00B")

    def testTextEmpty(self):
        frame = self.assertRoundtrip("TCON", b"\x00")
        self.assertEqual(frame.text, [])

    def testTextOddUTF16(self):
        self.assertRaises(BadTextError, decode_payload, "TIT2", b"\x02\x00A\x00")

    def testTerminatedOddUTF16(self):
        # A stray byte after the last terminated string
        self.assertRaises(BadTextError, decode_payload,
                          "TXXX", b"\x02\x00A\x00\x00\x00B\x00\x00\x07")
        self.assertRaises(BadTextError, decode_payload,
                          "USLT", b"\x01eng\x00\x00\xfe\xff\x00B\x00\x00\x07")
        self.assertRaises(BadTextError, decode_payload,
                          "COMM", b"\x01eng\x00\x00\xfe\xff\x00B\x00\x00\x07")
        # Even trailing data only warns
        with warnings.catch_warnings(record=True) as ws:
            warnings.simplefilter("always", Warning)
            frame = decode_payload("TXXX", b"\x02\x00A\x00\x00\x00B\x00\x00\x07\x07")
        self.assertEqual(frame.text, "B")
        self.assertTrue(issubclass(ws[0].category, FrameWarning))

    def testInvalidEncoding(self):
        self.assertRaises(InvalidEncodingError, decode_payload, "TIT2", b"\x04abc")
        self.assertRaises(InvalidFrameError, decode_payload, "TIT2", b"\x04abc")

    def testUserText(self):
        frame = self.assertRoundtrip("TXXX", b"\x00desc\x00value")
        self.assertTrue(isinstance(frame, UserTextFrame))
        self.assertEqual((frame.description, frame.text), ("desc", "value"))
        self.assertEqual(frame.summary(), "desc -> value")

    def testTrailingData(self):
        with warnings.catch_warnings(record=True) as ws:
            warnings.simplefilter("always", Warning)
            frame = decode_payload("TXXX", b"\x00desc\x00value\x00extra")
        self.assertEqual(frame.text, "value")
        self.assertEqual(len(ws), 1)
        self.assertTrue(issubclass(ws[0].category, FrameWarning))

    def testPicture(self):
        frame = self.assertRoundtrip("APIC", b"\x00image/png\x00\x03cover\x00\x89PNG")
        self.assertTrue(isinstance(frame, PictureFrame))
        self.assertEqual(frame.mime, "image/png")
        self.assertEqual(frame.type, 3)
        self.assertEqual(frame.desc, "cover")
        self.assertEqual(frame.data, b"\x89PNG")
        self.assertEqual(frame.summary(), "#3 cover[image/png] (4 bytes)")

    def testPictureUTF16(self):
        # The MIME type is always ISO-8859-1; binary data may have odd length.
        data = b"\x01image/jpeg\x00\x04\xfe\xff\x00x\x00\x00\x01\x02\x03"
        frame = self.assertRoundtrip("APIC", data)
        self.assertEqual(frame.mime, "image/jpeg")
        self.assertEqual(frame.desc, "x")
        self.assertEqual(frame.data, b"\x01\x02\x03")

    def testPictureType(self):
        self.assertRaises(InvalidPictureTypeError, decode_payload,
                          "APIC", b"\x00image/png\x00\x15\x00data")
        frame = decode_payload("APIC", b"\x00image/png\x00\x14\x00data")
        self.assertEqual(frame.type, 20)

    def testLyrics(self):
        frame = self.assertRoundtrip("USLT", b"\x03engdesc\x00lyrics")
        self.assertTrue(isinstance(frame, LyricsFrame))
        self.assertEqual((frame.lang, frame.desc, frame.text), ("eng", "desc", "lyrics"))
        self.assertEqual(frame.summary(), "[eng:desc] lyrics")

    def testLanguageIsLatin1(self):
        # The language code ignores the frame encoding.
        frame = decode_payload("USLT", b"\x01deu\xfe\xff\x00d\x00\x00\xfe\xff\x00t")
        self.assertEqual((frame.lang, frame.desc, frame.text), ("deu", "d", "t"))

    def testShortLanguage(self):
        self.assertRaises(InvalidFixedLenStringError, decode_payload, "USLT", b"\x00en")

    def testComment(self):
        frame = self.assertRoundtrip("COMM", b"\x00engshort\x00A longer comment")
        self.assertTrue(isinstance(frame, CommentFrame))
        self.assertEqual(frame.summary(), "short -> A longer comment")

    def testUniqueFileID(self):
        frame = self.assertRoundtrip("UFID", b"http://example.org\x00\x01\x02")
        self.assertTrue(isinstance(frame, UniqueFileIDFrame))
        self.assertEqual(frame.owner, "http://example.org")
        self.assertEqual(frame.identifier, b"\x01\x02")

    def testUnterminatedString(self):
        # A string that runs to the end of the buffer gets its terminator back.
        frame = decode_payload("UFID", b"owner")
        self.assertEqual((frame.owner, frame.identifier), ("owner", b""))
        self.assertEqual(frame._to_data(), b"owner\x00")

    def testURL(self):
        frame = self.assertRoundtrip("WOAR", b"http://example.org/")
        self.assertTrue(isinstance(frame, URLFrame))
        self.assertEqual(frame.summary(), "http://example.org/")
        frame = self.assertRoundtrip("WXXX", b"\x03desc\x00http://example.org/")
        self.assertTrue(isinstance(frame, UserURLFrame))
        self.assertEqual(frame.summary(), "desc -> http://example.org/")

    def testPrivate(self):
        frame = self.assertRoundtrip("PRIV", b"owner\x00\x00\x01\x02")
        self.assertEqual(frame.summary(), "owner (3 bytes)")

    def testPlayCount(self):
        frame = self.assertRoundtrip("PCNT", b"\x00\x00\x01\x00")
        self.assertEqual(frame.count, 256)
        frame = self.assertRoundtrip("PCNT", b"\x01\x00\x00\x00\x00")
        self.assertEqual(frame.count, 1 << 32)
        self.assertRaises(InsufficientBufferError, decode_payload, "PCNT", b"\x05")

    def testPopularimeter(self):
        frame = self.assertRoundtrip("POPM", b"a@b\x00\xff")
        self.assertEqual((frame.email, frame.rating, frame.count), ("a@b", 255, None))
        self.assertEqual(frame.summary(), "a@b (255) 0")
        frame = self.assertRoundtrip("POPM", b"a@b\x00\x80\x00\x00\x01\x00")
        self.assertEqual(frame.count, 256)
        self.assertEqual(frame.summary(), "a@b (128) 256")

    def testUnknown(self):
        frame = self.assertRoundtrip("XYZW", b"\x00\x01\x02")
        self.assertTrue(isinstance(frame, UnknownFrame))
        self.assertEqual(frame.summary(), "(3 bytes)")

class FrameTestCase(unittest.TestCase):
    def testPreferredEncodings(self):
        frame = TextFrame("abc", frameid="TIT2")
        self.assertEqual(frame.encoding, None)
        self.assertEqual(frame._to_data(), b"\x00abc")
        frame = TextFrame("a", "☃", frameid="TIT2")
        self.assertEqual(frame._to_data(), b"\x01\xfe\xff\x00a\x00\x00\xfe\xff\x26\x03")
        self.assertEqual(frame.encoding, None)

    def testLossyLatin1(self):
        frame = TextFrame("☃!", frameid="TIT2", encoding=text.ISO_8859_1)
        self.assertEqual(frame._to_data(), b"\x00.!")

    def testValidation(self):
        frame = TextFrame("abc", frameid="TIT2")
        frame.encoding = "utf-8"
        self.assertEqual(frame.encoding, text.UTF_8)
        self.assertRaises(InvalidEncodingError, setattr, frame, "encoding", 7)
        self.assertRaises(TypeError, setattr, frame, "text", 5)
        frame.text = "single"
        self.assertEqual(frame.text, ["single"])
        picture = PictureFrame(frameid="APIC", mime="image/png", data=b"")
        self.assertRaises(InvalidPictureTypeError, setattr, picture, "type", 21)
        self.assertRaises(ValueError, setattr, picture, "mime", "image/☃")
        lyrics = LyricsFrame(frameid="USLT")
        self.assertRaises(InvalidFixedLenStringError, setattr, lyrics, "lang", "en")
        self.assertRaises(TypeError, TextFrame, frameid="TIT2", bogus=1)

    def testEquality(self):
        self.assertEqual(TextFrame("a", frameid="TIT2"), TextFrame("a", frameid="TIT2"))
        self.assertNotEqual(TextFrame("a", frameid="TIT2"), TextFrame("a", frameid="TPE1"))
        self.assertNotEqual(TextFrame("a", frameid="TIT2"),
                            TextFrame("a", frameid="TIT2", flags={"read_only"}))

suite = unittest.TestSuite()
suite.addTest(unittest.TestLoader().loadTestsFromTestCase(WalkerTestCase))
suite.addTest(unittest.TestLoader().loadTestsFromTestCase(FrameTestCase))

if __name__ == "__main__":
    unittest.main(defaultTest="suite")
