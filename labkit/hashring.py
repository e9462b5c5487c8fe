"""Consistent hashing of keys onto a ring of machines."""

from __future__ import annotations

import argparse
import bisect
import hashlib
import itertools
import math
import secrets
import sys
import threading
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass

MACHINES_TO_START_WITH = 1000
NUM_OF_KEYS = 1_000_000

_id_lock = threading.Lock()
_machine_ids = itertools.count(1)


@dataclass(frozen=True)
class Machine:
    """A machine on the ring, placed by the hash of its IP address."""

    machine_id: int
    ip: str
    hash: str


@dataclass(frozen=True)
class DistributionStats:
    """How evenly keys are spread over machines."""

    mean: float
    std_dev: float
    imbalance: float


def calculate_hash(text: str) -> str:
    """Return the hex SHA-256 digest of ``text``."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def new_machine(ip: str) -> Machine:
    """Create a machine with the next free id."""
    with _id_lock:
        machine_id = next(_machine_ids)
    return Machine(machine_id=machine_id, ip=ip, hash=calculate_hash(ip))


def _ring(machines: Iterable[Machine]) -> tuple[list[Machine], list[str]]:
    ordered = sorted(machines, key=lambda machine: machine.hash)
    return ordered, [machine.hash for machine in ordered]


def _locate(ordered: list[Machine], hashes: list[str], key: str) -> Machine | None:
    if not ordered:
        return None
    index = bisect.bisect_right(hashes, calculate_hash(key))
    return ordered[index] if index < len(ordered) else ordered[0]


def find_machine(machines: Iterable[Machine], key: str) -> Machine | None:
    """Return the first machine whose hash is above the key's, wrapping round the ring."""
    ordered, hashes = _ring(machines)
    return _locate(ordered, hashes, key)


def random_ip() -> str:
    """Return a random IPv4 address whose first octet avoids 0, 127 and 255."""
    octets = list(secrets.token_bytes(4))
    if octets[0] in (0, 127, 255):
        octets[0] = 1 + octets[0] % 223
    return ".".join(str(octet) for octet in octets)


def random_ip_list(count: int) -> list[str]:
    """Return ``count`` distinct random IP addresses."""
    seen: set[str] = set()
    result: list[str] = []
    while len(result) < count:
        ip = random_ip()
        if ip not in seen:
            seen.add(ip)
            result.append(ip)
    return result


def random_machines(count: int) -> list[Machine]:
    """Create ``count`` machines with distinct random addresses."""
    return [new_machine(ip) for ip in random_ip_list(count)]


def key_list(count: int) -> list[str]:
    """Return the keys ``Key_0`` to ``Key_{count-1}``."""
    return [f"Key_{index}" for index in range(count)]


def assign_keys(machines: Sequence[Machine], keys: Iterable[str]) -> dict[int, list[str]]:
    """Map each machine id to the keys that land on it."""
    ordered, hashes = _ring(machines)
    assignment: dict[int, list[str]] = {}
    for key in keys:
        machine = _locate(ordered, hashes, key)
        if machine is None:
            raise ValueError("cannot assign keys without any machines")
        assignment.setdefault(machine.machine_id, []).append(key)
    return assignment


def distribution_stats(assignment: Mapping[int, Sequence[str]]) -> DistributionStats | None:
    """Return mean, standard deviation and imbalance of keys per machine, or None if empty."""
    counts = [len(keys) for keys in assignment.values()]
    if not counts:
        return None
    n = len(counts)
    mean = sum(counts) / n
    std_dev = math.sqrt(sum((count - mean) ** 2 for count in counts) / n)
    imbalance = std_dev / mean if mean else 0.0
    return DistributionStats(mean=mean, std_dev=std_dev, imbalance=imbalance)


def format_assignment(assignment: Mapping[int, Sequence[str]]) -> str:
    """Render key counts per machine, ordered by machine id."""
    return "\n".join(
        f"Machine:  {machine_id}  Keys:  {len(keys)}"
        for machine_id, keys in sorted(assignment.items())
    )


def format_stats(stats: DistributionStats) -> str:
    """Render the distribution statistics with two decimals."""
    return (
        f"Mean: {stats.mean:.2f}\n"
        f"Standard Deviation: {stats.std_dev:.2f}\n"
        f"Imbalance Ratio: {stats.imbalance:.2f}"
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Spread keys over machines by consistent hashing.")
    parser.add_argument("--machines", type=int, default=MACHINES_TO_START_WITH)
    parser.add_argument("--keys", type=int, default=NUM_OF_KEYS)
    args = parser.parse_args(argv)

    machines = random_machines(args.machines)
    assignment = assign_keys(machines, key_list(args.keys))
    if assignment:
        print(format_assignment(assignment))
    stats = distribution_stats(assignment)
    if stats is not None:
        print(format_stats(stats))
    return 0


if __name__ == "__main__":
    sys.exit(main())