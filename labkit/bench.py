"""Timing list growth with and without preallocation."""

from __future__ import annotations

import argparse
import sys
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass

SIZE = 1_000_000


@dataclass(frozen=True)
class BenchmarkResult:
    """The name of a benchmark and how long it took, in seconds."""

    name: str
    duration: float


def measure_time(func: Callable[[], object], name: str) -> BenchmarkResult:
    """Run ``func`` once and return how long it took."""
    start = time.perf_counter()
    func()
    return BenchmarkResult(name=name, duration=time.perf_counter() - start)


def insert_elements(items: list[int], count: int) -> list[int]:
    """Append ``0 .. count-1`` to ``items`` and return it."""
    items.extend(range(count))
    return items


def benchmark_empty_list(size: int = SIZE) -> BenchmarkResult:
    """Time appending ``size`` items to an empty list."""
    return measure_time(lambda: insert_elements([], size), "Empty List")


def benchmark_preallocated_list(size: int = SIZE) -> BenchmarkResult:
    """Time filling a list whose length was set up front."""
    items = [0] * size

    def fill() -> None:
        for position in range(size):
            items[position] = position

    return measure_time(fill, "Preallocated Capacity")


def _format_duration(seconds: float) -> str:
    if seconds < 1e-3:
        return f"{seconds * 1e6:.3f}µs"
    if seconds < 1:
        return f"{seconds * 1e3:.3f}ms"
    return f"{seconds:.3f}s"


def format_results(results: Iterable[BenchmarkResult]) -> str:
    """Render results as a two-column table."""
    rule = "-" * 40
    lines = ["Benchmark Results:", rule, f"{'Strategy':<30} | Duration", rule]
    lines.extend(f"{result.name:<30} | {_format_duration(result.duration)}" for result in results)
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Compare list growth strategies.")
    parser.add_argument("--size", type=int, default=SIZE)
    args = parser.parse_args(argv)

    results = [benchmark_empty_list(args.size), benchmark_preallocated_list(args.size)]
    print()
    print(format_results(results))
    return 0


if __name__ == "__main__":
    sys.exit(main())