"""Threads that take pairs of locks in a circular order and may deadlock."""

from __future__ import annotations

import argparse
import logging
import sys
import threading
import time

NUM_THREADS = 6
MUTEX_COUNT = 3
HOLD_SECONDS = 2.0

logger = logging.getLogger(__name__)


def lock_pair(index: int, mutex_count: int = MUTEX_COUNT) -> tuple[int, int]:
    """Return the two mutex indices that thread ``index`` takes, in order."""
    if mutex_count < 1:
        raise ValueError("mutex_count must be at least 1")
    return index % mutex_count, (index + 1) % mutex_count


def simulate(
    num_threads: int = NUM_THREADS,
    hold_seconds: float = HOLD_SECONDS,
    timeout: float | None = None,
) -> list[int]:
    """Run the threads and return the sorted indices of those that finished.

    Each thread locks mutex ``i % 3`` and then ``(i + 1) % 3``. With no
    ``timeout`` a thread waits forever, so a cycle hangs the run; with one, a
    thread that waits longer gives up, releases what it holds and is left out
    of the result.
    """
    if num_threads < 0:
        raise ValueError("num_threads must not be negative")
    mutexes = [threading.Lock() for _ in range(MUTEX_COUNT)]
    wait = -1 if timeout is None else timeout
    completed: list[int] = []
    completed_lock = threading.Lock()

    def worker(index: int) -> None:
        first, second = lock_pair(index, MUTEX_COUNT)
        logger.info("Thread %d is starting", index)
        logger.info("Thread %d is waiting to lock mutex %d and mutex %d", index, first, second)
        if not mutexes[first].acquire(timeout=wait):
            logger.info("Thread %d gave up waiting for mutex %d", index, first)
            return
        try:
            logger.info("Thread %d acquired lock on mutex %d", index, first)
            if not mutexes[second].acquire(timeout=wait):
                logger.info("Thread %d gave up waiting for mutex %d", index, second)
                return
            try:
                logger.info("Thread %d acquired lock on mutex %d", index, second)
                logger.info("Thread %d is processing with locks held", index)
                time.sleep(hold_seconds)
                logger.info("Thread %d is done processing releasing locks", index)
            finally:
                mutexes[second].release()
        finally:
            mutexes[first].release()
        with completed_lock:
            completed.append(index)

    threads = [threading.Thread(target=worker, args=(index,), daemon=True) for index in range(num_threads)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return sorted(completed)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Threads locking pairs of mutexes in a cycle.")
    parser.add_argument("--threads", type=int, default=NUM_THREADS)
    parser.add_argument("--hold", type=float, default=HOLD_SECONDS)
    parser.add_argument("--timeout", type=float, default=None)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(message)s", stream=sys.stderr)
    completed = simulate(args.threads, args.hold, args.timeout)
    stuck = sorted(set(range(args.threads)) - set(completed))
    if stuck:
        print("Threads that gave up:", " ".join(str(index) for index in stuck))
        return 1
    print("All threads have finished processing")
    return 0


if __name__ == "__main__":
    sys.exit(main())