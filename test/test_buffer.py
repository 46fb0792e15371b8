# Copyright (c) 2026, the id3codec authors

import unittest

from id3codec.errors import *
from id3codec.buffer import *
import id3codec.text as text

class InputBufferTestCase(unittest.TestCase):
    def testConsume(self):
        buf = InputBuffer(b"\x03engabc\x00\x01\x02")
        self.assertEqual(buf.consume_byte(), 3)
        self.assertEqual(buf.consume_fixed_string(3), "eng")
        self.assertEqual(buf.consume_string(text.ISO_8859_1), "abc")
        self.assertEqual(buf.remaining, 2)
        self.assertEqual(buf.consume_all(), b"\x01\x02")
        self.assertEqual(buf.remaining, 0)
        buf.check()

    def testLatching(self):
        buf = InputBuffer(b"\x01\x02")
        self.assertEqual(buf.consume_bytes(3), b"")
        self.assertTrue(isinstance(buf.error, InsufficientBufferError))
        # Later operations are no-ops
        self.assertEqual(buf.consume_byte(), 0)
        self.assertEqual(buf.consume_string(text.UTF_8), "")
        self.assertEqual(buf.consume_strings(text.UTF_8), [])
        self.assertEqual(buf.remaining, 2)
        self.assertRaises(InsufficientBufferError, buf.check)

    def testFirstErrorWins(self):
        buf = InputBuffer(b"\x00")
        buf.consume_strings(text.UTF_16)
        buf.consume_fixed_string(3)
        self.assertRaises(BadTextError, buf.check)

    def testFixedString(self):
        buf = InputBuffer(b"en")
        buf.consume_fixed_string(3)
        self.assertRaises(InvalidFixedLenStringError, buf.check)

    def testStrings(self):
        buf = InputBuffer(b"a\x00b")
        self.assertEqual(buf.consume_strings(text.ISO_8859_1), ["a", "b"])
        self.assertEqual(buf.remaining, 0)
        self.assertEqual(InputBuffer(b"").consume_strings(text.UTF_16), [])

class OutputBufferTestCase(unittest.TestCase):
    def testStore(self):
        buf = OutputBuffer()
        buf.store_byte(1)
        buf.store_fixed_string("eng", 3)
        buf.store_string("abc", text.ISO_8859_1)
        buf.store_string("de", text.UTF_16BE, terminate=False)
        buf.store_strings(["x", "y"], text.UTF_8)
        buf.store_bytes(b"\xff")
        buf.check()
        self.assertEqual(buf.getvalue(),
                         b"\x01engabc\x00\x00d\x00ex\x00y\xff")

    def testLatching(self):
        buf = OutputBuffer()
        buf.store_byte(256)
        buf.store_bytes(b"abc")
        buf.store_fixed_string("toolong", 3)
        self.assertEqual(buf.getvalue(), b"")
        self.assertRaises(InvalidFrameError, buf.check)

    def testFixedString(self):
        buf = OutputBuffer()
        buf.store_fixed_string("en", 3)
        self.assertRaises(InvalidFixedLenStringError, buf.check)

    def testUnencodable(self):
        buf = OutputBuffer()
        buf.store_string("\ud800", text.UTF_8)
        self.assertRaises(InvalidEncodedStringError, buf.check)

suite = unittest.TestSuite()
suite.addTest(unittest.TestLoader().loadTestsFromTestCase(InputBufferTestCase))
suite.addTest(unittest.TestLoader().loadTestsFromTestCase(OutputBufferTestCase))

if __name__ == "__main__":
    unittest.main(defaultTest="suite")
