#!/usr/bin/env python3
"""Throughput micro-benchmarks for one-shot and streamed hashing."""
from __future__ import annotations

import argparse
import hashlib
import random
import time
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from md5core.md5 import calculate, consume_iter, new


def _payload(size: int, seed: int) -> bytes:
    rng = random.Random(seed)
    return rng.getrandbits(8 * size).to_bytes(size, "little") if size else b""


def bench_calculate(data: bytes, trials: int) -> None:
    start = time.time()
    for _ in range(trials):
        calculate(data)
    elapsed = time.time() - start
    rate = len(data) * trials / elapsed / 1024 if elapsed else 0.0
    print(f"calculate: size={len(data)} trials={trials} time={elapsed:.3f}s rate={rate:.1f} KiB/s")


def bench_stream(data: bytes, chunk: int, trials: int) -> None:
    start = time.time()
    for _ in range(trials):
        consume_iter(new(), (data[i : i + chunk] for i in range(0, len(data), chunk))).digest()
    elapsed = time.time() - start
    rate = len(data) * trials / elapsed / 1024 if elapsed else 0.0
    print(f"stream: size={len(data)} chunk={chunk} trials={trials} time={elapsed:.3f}s rate={rate:.1f} KiB/s")


def main() -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--size", type=int, default=1 << 16)
    ap.add_argument("--chunk", type=int, default=1000)
    ap.add_argument("--trials", type=int, default=5)
    ap.add_argument("--seed", type=int, default=2024)
    args = ap.parse_args()

    data = _payload(args.size, args.seed)
    expected = hashlib.md5(data).digest()
    if calculate(data).to_bytes(16, "big") != expected:
        print("perf: digest mismatch against hashlib")
        return 1

    bench_calculate(data, args.trials)
    bench_stream(data, args.chunk, args.trials)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
