import unittest
from unittest import mock

from md5core import verify
from md5core.verify import REFERENCE_VECTORS, check_against_hashlib, check_chunking


class TestVerify(unittest.TestCase):
    def test_reference_vectors_pass(self) -> None:
        ok, bad = check_against_hashlib(REFERENCE_VECTORS)
        self.assertTrue(ok, bad)
        self.assertEqual(bad, {})

    def test_boundary_lengths_covered(self) -> None:
        lengths = {len(m) for m in REFERENCE_VECTORS}
        for n in (0, 55, 56, 63, 64, 119, 120):
            self.assertIn(n, lengths)

    def test_mismatch_is_reported(self) -> None:
        with mock.patch.object(verify, "md5_hex", return_value="0" * 32):
            ok, bad = check_against_hashlib([b"abc"])
        self.assertFalse(ok)
        ((label, (ours, ref)),) = bad.items()
        self.assertIn("abc", label)
        self.assertEqual(ours, "0" * 32)
        self.assertEqual(ref, "900150983cd24fb0d6963f7d28e17f72")

    def test_chunking(self) -> None:
        ok, bad = check_chunking(b"0123456789" * 30, [1, 2, 63, 64, 65, 1000])
        self.assertTrue(ok, bad)

    def test_chunking_rejects_zero(self) -> None:
        with self.assertRaises(ValueError):
            check_chunking(b"abc", [0])


if __name__ == "__main__":
    unittest.main()
