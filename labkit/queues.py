"""FIFO queues of 32-bit integers, with and without locking."""

from __future__ import annotations

import argparse
import random
import sys
import threading
from collections import deque
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor

DEFAULT_COUNT = 1_000_000
DEFAULT_WORKERS = 8


class QueueEmptyError(IndexError):
    """Raised when an item is taken from an empty queue."""

    def __init__(self, message: str = "Queue is empty, cannot dequeue") -> None:
        super().__init__(message)


class UnsafeQueue:
    """A FIFO queue that does no synchronisation of its own."""

    def __init__(self, items: Iterable[int] = ()) -> None:
        self._items: deque[int] = deque(items)

    def enqueue(self, value: int) -> None:
        self._items.append(value)

    def dequeue(self) -> int:
        if not self._items:
            raise QueueEmptyError()
        return self._items.popleft()

    def __len__(self) -> int:
        return len(self._items)


class ConcurrentQueue(UnsafeQueue):
    """A FIFO queue whose enqueue and dequeue are guarded by a lock."""

    def __init__(self, items: Iterable[int] = ()) -> None:
        super().__init__(items)
        self._lock = threading.Lock()

    def enqueue(self, value: int) -> None:
        with self._lock:
            super().enqueue(value)

    def dequeue(self) -> int:
        with self._lock:
            return super().dequeue()

    def __len__(self) -> int:
        return super().__len__()


def _shares(count: int, workers: int) -> list[int]:
    if count < 0:
        raise ValueError("count must not be negative")
    if workers < 1:
        raise ValueError("workers must be at least 1")
    base, extra = divmod(count, workers)
    shares = [base + 1] * extra + [base] * (workers - extra)
    return [share for share in shares if share]


def _random_int31() -> int:
    return random.getrandbits(31)


def fill_concurrently(queue: UnsafeQueue, count: int, workers: int = DEFAULT_WORKERS) -> UnsafeQueue:
    """Enqueue ``count`` random non-negative 31-bit integers from several threads."""

    def work(share: int) -> None:
        for _ in range(share):
            queue.enqueue(_random_int31())

    shares = _shares(count, workers)
    with ThreadPoolExecutor(max_workers=workers) as pool:
        for future in [pool.submit(work, share) for share in shares]:
            future.result()
    return queue


def drain_concurrently(queue: UnsafeQueue, count: int, workers: int = DEFAULT_WORKERS) -> list[int]:
    """Dequeue ``count`` items from several threads and return them."""

    def work(share: int) -> list[int]:
        return [queue.dequeue() for _ in range(share)]

    shares = _shares(count, workers)
    taken: list[int] = []
    with ThreadPoolExecutor(max_workers=workers) as pool:
        for future in [pool.submit(work, share) for share in shares]:
            taken.extend(future.result())
    return taken


def _run_v1() -> int:
    queue = UnsafeQueue()
    for value in (1, 2, 3):
        queue.enqueue(value)
    print("Queue size after enqueuing 3 items:", len(queue))
    try:
        for _ in range(4):
            print("Dequeue item:", queue.dequeue())
    except QueueEmptyError as error:
        print(f"panic: {error}", file=sys.stderr)
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Exercise FIFO queues from many threads.")
    parser.add_argument("--version", choices=("v1", "v2", "v3"), default="v3")
    parser.add_argument("--count", type=int, default=DEFAULT_COUNT)
    parser.add_argument("--workers", type=int, default=DEFAULT_WORKERS)
    args = parser.parse_args(argv)

    if args.version == "v1":
        return _run_v1()

    if args.version == "v2":
        queue: UnsafeQueue = fill_concurrently(UnsafeQueue(), args.count, args.workers)
    else:
        queue = fill_concurrently(ConcurrentQueue(), args.count, args.workers)
        drain_concurrently(queue, args.count, args.workers)
    print(f"Queue size after enqueuing {args.count:,} items:", len(queue))
    return 0


if __name__ == "__main__":
    sys.exit(main())