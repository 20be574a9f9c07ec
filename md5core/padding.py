from __future__ import annotations

from .core import BLOCK_SIZE, length_to_bytes_le


def _zero_fill(tail_len: int) -> int:
    # bytes after the tail up to 56 mod 64, the 0x80 terminator included
    n = 56 - (tail_len % BLOCK_SIZE)
    if n <= 0:
        n += BLOCK_SIZE
    return n


def padding_length(tail_len: int) -> int:
    """Number of bytes ``preprocess`` appends to a tail of ``tail_len`` bytes."""
    return _zero_fill(tail_len) + 8


def preprocess(message_tail: bytes, original_bit_length: int) -> bytes:
    """Pad ``message_tail`` into whole 64-byte blocks.

    The length field carries the bit length of the whole message, which for
    streamed input is longer than the tail that is still buffered.
    """
    n = _zero_fill(len(message_tail))
    out = (
        bytes(message_tail)
        + b"\x80"
        + b"\x00" * (n - 1)
        + length_to_bytes_le(original_bit_length)
    )
    assert len(out) % BLOCK_SIZE == 0
    return out
