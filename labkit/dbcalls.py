"""Simulated database calls run one after another or from many threads."""

from __future__ import annotations

import argparse
import random
import sys
import threading
import time
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import TextIO

SIZE = 1000
MAX_DELAY = 500.0


def generate_data(count: int) -> list[str]:
    """Return the records ``data1`` to ``data{count}``."""
    return [f"data{index}" for index in range(1, count + 1)]


def generate_delays(
    count: int,
    max_delay: float = MAX_DELAY,
    rng: random.Random | None = None,
) -> list[float]:
    """Return ``count`` random delays in milliseconds, each in ``[0, max_delay)``."""
    if max_delay < 0:
        raise ValueError("max_delay must not be negative")
    source = rng if rng is not None else random.Random()
    return [source.random() * max_delay for _ in range(count)]


@dataclass
class DbSimulator:
    """Records paired with the delay, in milliseconds, that fetching each one takes."""

    data: Sequence[str]
    delays: Sequence[float]
    out: TextIO | None = None
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def __post_init__(self) -> None:
        if len(self.data) != len(self.delays):
            raise ValueError("data and delays must have the same length")

    def call(self, index: int) -> str:
        """Wait for the delay of record ``index`` and return the record."""
        delay = self.delays[index]
        record = self.data[index]
        # Only whole milliseconds are waited for; the fraction is dropped.
        time.sleep(int(delay) / 1000)
        if self.out is not None:
            with self._lock:
                print(
                    f"DB Call Completed after {delay} milliseconds and the response is: {record}",
                    file=self.out,
                )
        return record

    def _workers(self) -> int:
        return max(1, len(self.data))

    def run_sequential(self) -> list[str]:
        """Make every call in turn and return the records in index order."""
        return [self.call(index) for index in range(len(self.data))]

    def run_threaded(self) -> list[str]:
        """Make every call on its own thread and return the records in index order."""
        with ThreadPoolExecutor(max_workers=self._workers()) as pool:
            return list(pool.map(self.call, range(len(self.data))))

    def collect_results(self) -> list[str]:
        """Make every call on its own thread, gathering records as they complete."""
        results: list[str] = []
        results_lock = threading.Lock()

        def work(index: int) -> None:
            record = self.call(index)
            with results_lock:
                results.append(record)

        with ThreadPoolExecutor(max_workers=self._workers()) as pool:
            for future in [pool.submit(work, index) for index in range(len(self.data))]:
                future.result()
        return results


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Simulate slow database calls.")
    parser.add_argument("--count", type=int, default=SIZE)
    parser.add_argument("--max-delay", type=float, default=MAX_DELAY)
    parser.add_argument(
        "--mode", choices=("sequential", "threaded", "shared"), default="shared"
    )
    args = parser.parse_args(argv)

    data = generate_data(args.count)
    delays = generate_delays(args.count, args.max_delay)
    verbose = args.mode != "shared"
    simulator = DbSimulator(data, delays, out=sys.stdout if verbose else None)

    start = time.perf_counter()
    if args.mode == "sequential":
        results = simulator.run_sequential()
    elif args.mode == "threaded":
        results = simulator.run_threaded()
    else:
        results = simulator.collect_results()
    print(f"\nAll DB calls completed in {time.perf_counter() - start} seconds")

    if args.mode == "shared":
        print("\n\nResults of DB calls:", results)
        print(f"\n\nResults of DB calls: {len(results)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())