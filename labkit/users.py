"""Users stored in MySQL, and mock users for filling a test database."""

from __future__ import annotations

import argparse
import contextlib
import random
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from labkit.mysqlclient import DEFAULT_CONFIG_FILE, DatabaseError, connect, execute, select

SELECT_USERS = "SELECT idUsers, username, age FROM users LIMIT 1000"
INSERT_USER = "INSERT INTO users (username, age) VALUES (%s, %s)"
DELETE_USERS = "DELETE FROM users"
MOCK_USER_COUNT = 10


@dataclass(frozen=True)
class User:
    """A row of the users table."""

    id: str
    username: str
    age: int


def _to_int8(value: int) -> int:
    return (value + 128) % 256 - 128


def generate_mock_users(count: int) -> list[User]:
    """Return ``count`` users with unique, time-stamped names and random ages below 100."""
    if count < 0:
        raise ValueError("count must not be negative")
    return [
        User(id="NA", username=f"user_{time.time_ns() // 1_000_000}_{index}", age=random.randrange(100))
        for index in range(count)
    ]


def create_mock_users(connection: Any, count: int) -> None:
    """Insert ``count`` mock users, stopping at the first failure."""
    for user in generate_mock_users(count):
        create_user(connection, user.username, user.age)


def get_users(connection: Any) -> list[User]:
    """Return up to 1000 users from the table."""
    return [
        User(id=str(user_id), username=username, age=_to_int8(int(age)))
        for user_id, username, age in select(connection, SELECT_USERS)
    ]


def create_user(connection: Any, username: str, age: int) -> None:
    """Insert one user."""
    if not -128 <= age <= 127:
        raise ValueError("age must fit in a signed byte")
    try:
        execute(connection, INSERT_USER, username, age)
    except DatabaseError as error:
        raise DatabaseError(f"error inserting new user: {error}") from error


def delete_all_users(connection: Any) -> None:
    """Remove every user."""
    try:
        execute(connection, DELETE_USERS)
    except DatabaseError as error:
        raise DatabaseError(f"error deleting all users: {error}") from error


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Fill the users table with mock users.")
    parser.add_argument("--config", type=Path, default=Path(DEFAULT_CONFIG_FILE))
    parser.add_argument("--count", type=int, default=MOCK_USER_COUNT)
    args = parser.parse_args(argv)

    try:
        connection = connect(args.config)
    except DatabaseError as error:
        print(f"Error: error creating connection to database: {error}")
        return 1
    print("Successfully connected to the database.")
    with contextlib.closing(connection):
        try:
            create_mock_users(connection, args.count)
        except DatabaseError as error:
            print(f"Error: error creating mock users: {error}")
            return 1
    print("Successfully created mock users.")
    return 0


if __name__ == "__main__":
    sys.exit(main())