from __future__ import annotations

from typing import List, Tuple

import numpy as np

MASK32 = 0xFFFFFFFF
MASK64 = 0xFFFFFFFFFFFFFFFF
BLOCK_SIZE = 64


def u32(x: int) -> int:
    return x & MASK32


def rl(x: int, s: int) -> int:
    x &= MASK32
    return ((x << s) | (x >> (32 - s))) & MASK32


# AC_t = floor(2^32 * abs(sin(t+1))), RFC 1321 T[1..64]
_AC: List[int] = [
    0xd76aa478, 0xe8c7b756, 0x242070db, 0xc1bdceee,
    0xf57c0faf, 0x4787c62a, 0xa8304613, 0xfd469501,
    0x698098d8, 0x8b44f7af, 0xffff5bb1, 0x895cd7be,
    0x6b901122, 0xfd987193, 0xa679438e, 0x49b40821,
    0xf61e2562, 0xc040b340, 0x265e5a51, 0xe9b6c7aa,
    0xd62f105d, 0x02441453, 0xd8a1e681, 0xe7d3fbc8,
    0x21e1cde6, 0xc33707d6, 0xf4d50d87, 0x455a14ed,
    0xa9e3e905, 0xfcefa3f8, 0x676f02d9, 0x8d2a4c8a,
    0xfffa3942, 0x8771f681, 0x6d9d6122, 0xfde5380c,
    0xa4beea44, 0x4bdecfa9, 0xf6bb4b60, 0xbebfbc70,
    0x289b7ec6, 0xeaa127fa, 0xd4ef3085, 0x04881d05,
    0xd9d4d039, 0xe6db99e5, 0x1fa27cf8, 0xc4ac5665,
    0xf4292244, 0x432aff97, 0xab9423a7, 0xfc93a039,
    0x655b59c3, 0x8f0ccc92, 0xffeff47d, 0x85845dd1,
    0x6fa87e4f, 0xfe2ce6e0, 0xa3014314, 0x4e0811a1,
    0xf7537e82, 0xbd3af235, 0x2ad7d2bb, 0xeb86d391,
]

# Rotation constants (RC_t) per MD5 specification
_RC: List[int] = (
    [7, 12, 17, 22] * 4
    + [5, 9, 14, 20] * 4
    + [4, 11, 16, 23] * 4
    + [6, 10, 15, 21] * 4
)

# MD5 initial value
MD5_IV = (0x67452301, 0xEFCDAB89, 0x98BADCFE, 0x10325476)


def ft(t: int, b: int, c: int, d: int) -> int:
    b, c, d = u32(b), u32(c), u32(d)
    if 0 <= t < 16:
        return u32((b & c) | ((~b) & d))
    if 16 <= t < 32:
        return u32((d & b) | ((~d) & c))
    if 32 <= t < 48:
        return u32(b ^ c ^ d)
    if 48 <= t < 64:
        return u32(c ^ (b | (~d)))
    raise ValueError("t out of range")


def wt_index(t: int) -> int:
    if 0 <= t < 16:
        return t
    if 16 <= t < 32:
        return (5 * t + 1) % 16
    if 32 <= t < 48:
        return (3 * t + 5) % 16
    if 48 <= t < 64:
        return (7 * t) % 16
    raise ValueError("t out of range")


# Message word schedule, resolved once
_WT: List[int] = [wt_index(t) for t in range(64)]


def bytes_to_word_le(b: bytes) -> int:
    """Scalar form of one message word; ``bytes_to_words_le`` is the block parser."""
    assert len(b) == 4
    return b[0] | (b[1] << 8) | (b[2] << 16) | (b[3] << 24)


def bytes_to_words_le(block: bytes) -> List[int]:
    assert len(block) == BLOCK_SIZE
    return np.frombuffer(block, dtype="<u4").tolist()


def length_to_bytes_le(value: int) -> bytes:
    value &= MASK64
    return bytes((value >> (8 * i)) & 0xFF for i in range(8))


def swap32(word: int) -> int:
    word = u32(word)
    return (
        ((word & 0x000000FF) << 24)
        | ((word & 0x0000FF00) << 8)
        | ((word & 0x00FF0000) >> 8)
        | ((word & 0xFF000000) >> 24)
    )


def compress_block(
    ihv: Tuple[int, int, int, int],
    m: List[int],
) -> Tuple[int, int, int, int]:
    """
    One MD5 compression of a single block.
    Inputs:
      - ihv: (a0, b0, c0, d0)
      - m: 16 little-endian 32-bit words
    Returns the updated (a0, b0, c0, d0).
    """
    if len(m) != 16:
        raise ValueError("m must have 16 words")

    a0, b0, c0, d0 = (u32(ihv[0]), u32(ihv[1]), u32(ihv[2]), u32(ihv[3]))
    a, b, c, d = a0, b0, c0, d0

    for t in range(64):
        f = u32(ft(t, b, c, d) + a + m[_WT[t]] + _AC[t])
        a, d, c = d, c, b
        b = u32(b + rl(f, _RC[t]))

    return (u32(a0 + a), u32(b0 + b), u32(c0 + c), u32(d0 + d))


def compress(
    buffer: bytes,
    ihv: Tuple[int, int, int, int] = MD5_IV,
) -> Tuple[int, int, int, int]:
    """Fold every 64-byte block of ``buffer`` into ``ihv``.

    ``buffer`` must already be block aligned; the padding and the streaming
    drain are the only producers, so a misaligned buffer is a bug there.
    """
    assert len(buffer) % BLOCK_SIZE == 0, "buffer is not block aligned"
    ihv = (u32(ihv[0]), u32(ihv[1]), u32(ihv[2]), u32(ihv[3]))
    for off in range(0, len(buffer), BLOCK_SIZE):
        ihv = compress_block(ihv, bytes_to_words_le(buffer[off : off + BLOCK_SIZE]))
    return ihv


def pack_digest(ihv: Tuple[int, int, int, int]) -> int:
    # digest bytes are a,b,c,d little-endian; as an integer a is the top limb
    a, b, c, d = ihv
    return (swap32(a) << 96) | (swap32(b) << 64) | (swap32(c) << 32) | swap32(d)
