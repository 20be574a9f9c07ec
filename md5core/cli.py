from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import BinaryIO, Iterator, List, Optional

from .md5 import consume_iter, md5_hex, new
from .verify import REFERENCE_VECTORS, check_against_hashlib, check_chunking

DEFAULT_CHUNK_SIZE = 1 << 16


def chunk_size_from_env() -> int:
    raw = os.getenv("MD5CORE_CHUNK_SIZE")
    if raw is None or raw.strip() == "":
        return DEFAULT_CHUNK_SIZE
    try:
        size = int(raw)
    except ValueError:
        raise ValueError(f"MD5CORE_CHUNK_SIZE must be an integer, got {raw!r}") from None
    if size < 1:
        raise ValueError(f"MD5CORE_CHUNK_SIZE must be positive, got {size}")
    return size


def _read_chunks(fh: BinaryIO, size: int) -> Iterator[bytes]:
    while True:
        chunk = fh.read(size)
        if not chunk:
            return
        yield chunk


def cmd_hash(ns: argparse.Namespace) -> int:
    try:
        size = chunk_size_from_env()
    except ValueError as exc:
        print(f"hash: {exc}")
        return 1

    status = 0
    for text in ns.string or []:
        try:
            data = text.encode(ns.encoding)
        except LookupError:
            print(f"hash: unknown encoding: {ns.encoding}")
            return 1
        except UnicodeEncodeError:
            print(f"hash: cannot encode --string with {ns.encoding}")
            return 1
        print(f'{md5_hex(data)}  "{text}"')

    files: List[str] = list(ns.files)
    if not files and not ns.string:
        files = ["-"]
    for name in files:
        if name == "-":
            state = consume_iter(new(), _read_chunks(sys.stdin.buffer, size))
            print(f"{state.hexdigest()}  -")
            continue
        path = Path(name)
        if not path.exists():
            print(f"hash: file not found: {path}")
            status = 1
            continue
        if not path.is_file():
            print(f"hash: not a regular file: {path}")
            status = 1
            continue
        try:
            with path.open("rb") as fh:
                state = consume_iter(new(), _read_chunks(fh, size))
        except OSError as exc:
            print(f"hash: cannot read {path}: {exc.strerror or exc}")
            status = 1
            continue
        print(f"{state.hexdigest()}  {name}")
    return status


def cmd_verify_core(_: argparse.Namespace) -> int:
    ok_vectors, bad = check_against_hashlib(REFERENCE_VECTORS)
    for label, (ours, ref) in bad.items():
        print(f"MD5({label}) -> FAIL")
        print(f"  ours={ours}\n  ref ={ref}")
    print(f"vectors: {len(REFERENCE_VECTORS)} checked, {len(bad)} failed")

    sample = bytes(range(256)) * 3
    ok_chunks, bad_sizes = check_chunking(sample, [1, 3, 55, 63, 64, 65, 200])
    for size, got in bad_sizes.items():
        print(f"chunking size={size} -> FAIL ({got})")

    ok_all = ok_vectors and ok_chunks
    print("verify-core:", "PASS" if ok_all else "FAIL")
    return 0 if ok_all else 1


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="md5core", description="Pure Python MD5 digests")
    sub = p.add_subparsers(dest="cmd", required=True)

    s1 = sub.add_parser("hash", help="print the MD5 digest of files, stdin or strings")
    s1.add_argument("files", nargs="*", help="files to hash ('-' for stdin)")
    s1.add_argument("--string", "-s", action="append", default=None, help="hash this text instead of a file")
    s1.add_argument("--encoding", default="utf-8", help="encoding applied to --string values")
    s1.set_defaults(func=cmd_hash)

    s2 = sub.add_parser("verify-core", help="compare against hashlib on reference vectors")
    s2.set_defaults(func=cmd_verify_core)

    args = p.parse_args(argv)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
