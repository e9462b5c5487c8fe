"""Small exercises: greeting, integer division, engine range and squaring."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from typing import Protocol


class _HasRange(Protocol):
    def miles_left(self) -> int: ...


def _check_uint8(name: str, value: int) -> None:
    if not 0 <= value <= 255:
        raise ValueError(f"{name} must be between 0 and 255")


@dataclass(frozen=True)
class Owner:
    """The owner of a vehicle."""

    name: str


@dataclass(frozen=True)
class GasEngine:
    """A petrol engine described by miles per gallon and gallons in the tank."""

    mpg: int
    gallons: int
    owner: Owner

    def __post_init__(self) -> None:
        _check_uint8("mpg", self.mpg)
        _check_uint8("gallons", self.gallons)

    def miles_left(self) -> int:
        # The product is taken in 8 bits, so it wraps above 255.
        return (self.mpg * self.gallons) % 256


@dataclass(frozen=True)
class ElectricEngine:
    """An electric engine described by miles per kWh and kWh in the battery."""

    mpkwh: int
    kwh: int
    owner: Owner

    def __post_init__(self) -> None:
        _check_uint8("mpkwh", self.mpkwh)
        _check_uint8("kwh", self.kwh)

    def miles_left(self) -> int:
        # The product is taken in 8 bits, so it wraps above 255.
        return (self.kwh * self.mpkwh) % 256


def greeting() -> str:
    return "Hello, World!"


def int_division_and_remainder(a: int, b: int) -> tuple[int, int]:
    """Divide truncating toward zero; the remainder takes the sign of ``a``."""
    if b == 0:
        raise ZeroDivisionError("division by zero")
    quotient = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        quotient = -quotient
    return quotient, a - b * quotient


def describe_division(a: int, b: int) -> list[str]:
    """Return the lines that report dividing ``a`` by ``b``."""
    try:
        result, remainder = int_division_and_remainder(a, b)
    except ZeroDivisionError as error:
        return [f"Error: {error}"]
    if remainder == 0:
        lines = ["The result is an integer."]
    else:
        lines = ["The result is a float.", f"Integer Division Remainder: {remainder}"]
    lines.append(f"Integer Division Result: {result}")
    return lines


def can_make_it(engine: _HasRange, distance: int) -> bool:
    """Whether the engine has at least ``distance`` miles left."""
    return distance <= engine.miles_left()


def engine_details(engine: _HasRange) -> str:
    return f"Engine Details:\nMiles Left: {engine.miles_left()}"


def squared(values: list[int]) -> list[int]:
    """Return a new list of the squares, leaving ``values`` as it is."""
    return [value * value for value in values]


def square_in_place(values: list[int]) -> None:
    """Replace every item of ``values`` by its square."""
    values[:] = squared(values)


def _format_list(values: list[int]) -> str:
    return "[" + " ".join(str(value) for value in values) + "]"


def main(argv: list[str] | None = None) -> int:
    argparse.ArgumentParser(description="Run the basic exercises.").parse_args(argv)

    print(greeting())

    print("Function Example")
    print("This is a function that prints a message.")
    print("Value passed to printMe2:", "Hello, Go Functions!")
    for _ in range(2):
        for a, b in ((10, 2), (10, 0), (13, 3)):
            print("\n".join(describe_division(a, b)))

    gas = GasEngine(mpg=25, gallons=10, owner=Owner("John Doe"))
    electric = ElectricEngine(mpkwh=4, kwh=50, owner=Owner("Jane Smith"))
    print(engine_details(gas))
    print(engine_details(electric))
    for engine, distance in ((gas, 300), (electric, 100)):
        print("You can make it!" if can_make_it(engine, distance) else "You cannot make it!")

    original = [1, 2, 3, 4, 5]
    print("Original array:", _format_list(original))
    result = squared(original)
    print("Original array after calling square:", _format_list(original))
    print("Squared array:", _format_list(result))
    shared = [1, 2, 3, 4, 5]
    print("Original array with pointer:", _format_list(shared))
    square_in_place(shared)
    print("Original array after calling square:", _format_list(shared))
    return 0


if __name__ == "__main__":
    sys.exit(main())