from __future__ import annotations

import hashlib
from typing import Dict, Iterable, List, Tuple

from .md5 import calculate, consume_iter, md5_hex, new

# RFC 1321 A.5 test suite plus the padding boundary lengths
REFERENCE_VECTORS: List[bytes] = [
    b"",
    b"a",
    b"abc",
    b"message digest",
    b"abcdefghijklmnopqrstuvwxyz",
    b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789",
    b"1234567890" * 8,
] + [b"\xa5" * n for n in (55, 56, 63, 64, 119, 120)]


def _label(m: bytes) -> str:
    shown = m[:20] + (b"..." if len(m) > 20 else b"")
    return f"{shown!r} ({len(m)} bytes)"


def check_against_hashlib(
    vectors: Iterable[bytes] = REFERENCE_VECTORS,
) -> Tuple[bool, Dict[str, Tuple[str, str]]]:
    bad: Dict[str, Tuple[str, str]] = {}
    for m in vectors:
        ours = md5_hex(m)
        ref = hashlib.md5(m).hexdigest()
        if ours != ref:
            bad[_label(m)] = (ours, ref)
    return (len(bad) == 0), bad


def check_chunking(data: bytes, chunk_sizes: Iterable[int]) -> Tuple[bool, Dict[int, str]]:
    """Stream ``data`` in fixed-size chunks and compare with the one-shot digest."""
    expected = calculate(data)
    bad: Dict[int, str] = {}
    for size in chunk_sizes:
        if size < 1:
            raise ValueError("chunk size must be positive")
        chunks = (data[i : i + size] for i in range(0, len(data), size))
        got = consume_iter(new(), chunks).digest()
        if got != expected:
            bad[size] = f"{got:032x}"
    return (len(bad) == 0), bad
