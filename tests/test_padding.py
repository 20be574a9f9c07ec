import hashlib
import unittest

from md5core.core import MD5_IV, compress, pack_digest
from md5core.padding import padding_length, preprocess


class TestPreprocess(unittest.TestCase):
    def test_lengths_are_minimal_block_multiples(self) -> None:
        for n in range(0, 200):
            out = preprocess(b"\x61" * n, n * 8)
            self.assertEqual(len(out) % 64, 0, n)
            self.assertGreaterEqual(len(out), n + 9, n)
            self.assertLess(len(out) - 64, n + 9, n)
            self.assertEqual(len(out) - n, padding_length(n), n)

    def test_boundary_lengths(self) -> None:
        expected = {0: 64, 55: 64, 56: 128, 63: 128, 64: 128, 119: 128, 120: 192}
        for n, size in expected.items():
            out = preprocess(b"\x00" * n, n * 8)
            self.assertEqual(len(out), size, n)
            self.assertEqual(out[n], 0x80, n)

    def test_wraparound_adds_full_block_of_zeros(self) -> None:
        out = preprocess(b"\x01" * 56, 56 * 8)
        self.assertEqual(out[56], 0x80)
        self.assertEqual(out[57:120], b"\x00" * 63)
        self.assertEqual(out[120:], (448).to_bytes(8, "little"))

    def test_single_byte_terminator_when_exactly_fits(self) -> None:
        out = preprocess(b"\x01" * 55, 55 * 8)
        self.assertEqual(out[55:56], b"\x80")
        self.assertEqual(out[56:], (440).to_bytes(8, "little"))

    def test_length_field_is_original_length_not_tail(self) -> None:
        out = preprocess(b"abc", 8 * (640 + 3))
        self.assertEqual(out[-8:], (8 * 643).to_bytes(8, "little"))

    def test_length_field_wraps(self) -> None:
        out = preprocess(b"", (1 << 64) + 16)
        self.assertEqual(out[-8:], (16).to_bytes(8, "little"))

    def test_padded_digest_matches_hashlib(self) -> None:
        for n in (0, 55, 56, 63, 64, 119, 120):
            msg = bytes((i * 7) & 0xFF for i in range(n))
            got = pack_digest(compress(preprocess(msg, n * 8), MD5_IV))
            self.assertEqual(got.to_bytes(16, "big"), hashlib.md5(msg).digest(), n)


if __name__ == "__main__":
    unittest.main()
