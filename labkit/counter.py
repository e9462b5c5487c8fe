"""Incrementing a shared counter from many threads, with and without a lock."""

from __future__ import annotations

import argparse
import sys
import threading
import time
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor

NUM_INCREMENTS = 1_000_000
_WORKERS = 8


def _run(increments: int, step: Callable[[list[int]], None]) -> int:
    if increments < 0:
        raise ValueError("increments must not be negative")
    total = [0]
    base, extra = divmod(increments, _WORKERS)
    shares = [base + 1] * extra + [base] * (_WORKERS - extra)

    def work(share: int) -> None:
        for _ in range(share):
            step(total)

    with ThreadPoolExecutor(max_workers=_WORKERS) as pool:
        for future in [pool.submit(work, share) for share in shares if share]:
            future.result()
    return total[0]


def _unsafe_step(total: list[int]) -> None:
    current = total[0]
    total[0] = current + 1


def count_unsafe(increments: int) -> int:
    """Increment a shared counter without locking; updates may be lost."""
    return _run(increments, _unsafe_step)


def count_safe(increments: int) -> int:
    """Increment a shared counter under a lock; the result equals ``increments``."""
    lock = threading.Lock()

    def step(total: list[int]) -> None:
        with lock:
            total[0] += 1

    return _run(increments, step)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Race on a shared counter.")
    parser.add_argument("--increments", type=int, default=NUM_INCREMENTS)
    args = parser.parse_args(argv)

    for label, counter in (("not thread safe", count_unsafe), ("thread safe", count_safe)):
        start = time.perf_counter()
        final = counter(args.increments)
        micros = int((time.perf_counter() - start) * 1_000_000)
        print(f"Duration {label}: {micros} us")
        print("Final count:", final)
    return 0


if __name__ == "__main__":
    sys.exit(main())