"""Runnable experiments: queues, counters, a hash ring, deadlocks, timings, a TCP server, a coin API and MySQL users."""

__version__ = "0.1.0"