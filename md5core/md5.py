from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple, Union

from .core import BLOCK_SIZE, MASK64, MD5_IV, compress, pack_digest
from .padding import preprocess

BytesLike = Union[bytes, bytearray, memoryview]


def _as_bytes(data: BytesLike) -> bytes:
    if isinstance(data, str):
        raise TypeError("text must be encoded to bytes before hashing")
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"expected a bytes-like object, got {type(data).__name__}")
    return bytes(data)


@dataclass(frozen=True)
class Md5State:
    """Immutable MD5 computation state.

    ``consume`` returns a successor state and leaves this one untouched, so a
    state can be kept, compared or forked freely.
    """

    ihv: Tuple[int, int, int, int] = MD5_IV
    buffer: bytes = b""  # never a full block after consume
    length: int = 0  # bytes consumed so far, mod 2^64

    def consume(self, data: BytesLike) -> "Md5State":
        data = _as_bytes(data)
        buf = self.buffer + data
        full = len(buf) - len(buf) % BLOCK_SIZE
        return Md5State(
            ihv=compress(buf[:full], self.ihv),
            buffer=buf[full:],
            length=(self.length + len(data)) & MASK64,
        )

    def digest(self) -> int:
        padded = preprocess(self.buffer, self.length * 8)
        return pack_digest(compress(padded, self.ihv))

    def digest_bytes(self) -> bytes:
        return self.digest().to_bytes(16, "big")

    def hexdigest(self) -> str:
        return f"{self.digest():032x}"


def new() -> Md5State:
    return Md5State()


def consume(state: Md5State, data: BytesLike) -> Md5State:
    return state.consume(data)


def consume_iter(state: Md5State, chunks: Iterable[BytesLike]) -> Md5State:
    for chunk in chunks:
        state = state.consume(chunk)
    return state


def digest(state: Md5State) -> int:
    return state.digest()


def calculate(data: BytesLike) -> int:
    return digest(consume(new(), data))


def md5_bytes(data: BytesLike) -> bytes:
    return new().consume(data).digest_bytes()


def md5_hex(data: BytesLike) -> str:
    return md5_bytes(data).hex()
