"""An in-memory user database holding login tokens and coin balances."""

from __future__ import annotations

import time
from dataclasses import dataclass

DEFAULT_DELAY = 1.0

_BALANCES = {"alice": 1000, "bob": 2000, "charlie": 3000}


@dataclass(frozen=True)
class LoginDetails:
    """A user's name and the token that authorises them."""

    username: str
    token: str


@dataclass(frozen=True)
class CoinDetails:
    """A user's name and their coin balance."""

    username: str
    coins: int


def _token_for(username: str) -> str:
    return "-".join((username, "token"))


_LOGIN_DETAILS = {name: LoginDetails(name, _token_for(name)) for name in _BALANCES}
_COIN_DETAILS = {name: CoinDetails(name, coins) for name, coins in _BALANCES.items()}


@dataclass
class MockDatabase:
    """A fixed set of users; every lookup waits ``delay`` seconds first."""

    delay: float = DEFAULT_DELAY

    def __post_init__(self) -> None:
        if self.delay < 0:
            raise ValueError("delay must not be negative")

    def _wait(self) -> None:
        if self.delay:
            time.sleep(self.delay)

    def get_user_login_details(self, username: str) -> LoginDetails | None:
        """Return the login details of ``username``, or None if there is no such user."""
        self._wait()
        return _LOGIN_DETAILS.get(username)

    def get_user_coins(self, username: str) -> CoinDetails | None:
        """Return the coin balance of ``username``, or None if there is no such user."""
        self._wait()
        return _COIN_DETAILS.get(username)

    def setup(self) -> None:
        """Prepare the database; the in-memory data needs no preparation."""


def new_database(delay: float = DEFAULT_DELAY) -> MockDatabase:
    """Create a database that is ready to answer lookups."""
    database = MockDatabase(delay=delay)
    database.setup()
    return database