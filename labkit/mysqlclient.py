"""Connecting to MySQL from a JSON configuration file and running queries."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pymysql

DEFAULT_CONFIG_FILE = "db.config.json"
DEFAULT_DB_NAME = "db_exp"


class DatabaseError(Exception):
    """Raised when configuring, connecting to or querying the database fails."""


@dataclass(frozen=True)
class DBConfig:
    """Credentials and address of a MySQL server."""

    username: str = ""
    password: str = ""
    host: str = ""
    port: int = 0


@dataclass(frozen=True)
class ExecResult:
    """What a statement that returns no rows reports."""

    rows_affected: int
    last_insert_id: int


def load_config(path: str | Path = DEFAULT_CONFIG_FILE) -> DBConfig:
    """Read the configuration from a JSON file."""
    try:
        with open(path, encoding="utf-8") as handle:
            text = handle.read()
    except OSError as error:
        raise DatabaseError(f"failed to open config file: {error}") from error
    try:
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError("config must be a JSON object")
        values = {name: data[name] for name in ("username", "password", "host", "port") if name in data}
        for name in ("username", "password", "host"):
            if name in values and not isinstance(values[name], str):
                raise ValueError(f"{name} must be a string")
        port = values.get("port", 0)
        if isinstance(port, bool) or not isinstance(port, int):
            raise ValueError("port must be an integer")
    except ValueError as error:
        raise DatabaseError(f"failed to decode config: {error}") from error
    return DBConfig(**values)


def format_dsn(config: DBConfig, database: str = DEFAULT_DB_NAME) -> str:
    """Render the connection string ``user:password@tcp(host:port)/database``."""
    return f"{config.username}:{config.password}@tcp({config.host}:{config.port})/{database}"


def connect(config_path: str | Path = DEFAULT_CONFIG_FILE) -> Any:
    """Open a connection using the configuration file and check it is alive."""
    try:
        config = load_config(config_path)
    except DatabaseError as error:
        raise DatabaseError("database DSN is empty, please check your configuration") from error
    try:
        connection = pymysql.connect(
            host=config.host,
            port=config.port,
            user=config.username,
            password=config.password,
            database=DEFAULT_DB_NAME,
            autocommit=True,
        )
    except pymysql.MySQLError as error:
        raise DatabaseError(
            f"error creating connection to database: failed to connect to MySQL: {error}"
        ) from error
    try:
        connection.ping(reconnect=False)
    except pymysql.MySQLError as error:
        connection.close()
        raise DatabaseError(
            f"error creating connection to database: failed to ping MySQL: {error}"
        ) from error
    return connection


def _run(connection: Any, query: str, args: tuple[Any, ...]) -> Any:
    cursor = connection.cursor()
    cursor.execute(query, args or None)
    return cursor


def execute_with_new_connection(
    query: str, *args: Any, config_path: str | Path = DEFAULT_CONFIG_FILE
) -> ExecResult:
    """Open a connection, run one statement and close the connection again."""
    try:
        connection = connect(config_path)
    except DatabaseError as error:
        raise DatabaseError(f"error creating new connection to database: {error}") from error
    try:
        with connection.cursor() as cursor:
            cursor.execute(query, args or None)
            return ExecResult(rows_affected=cursor.rowcount, last_insert_id=cursor.lastrowid)
    except pymysql.MySQLError as error:
        raise DatabaseError(f"error executing query: {error}") from error
    finally:
        connection.close()


def select(connection: Any, query: str, *args: Any) -> list[tuple[Any, ...]]:
    """Run a query and return all of its rows."""
    try:
        with connection.cursor() as cursor:
            cursor.execute(query, args or None)
            return list(cursor.fetchall())
    except pymysql.MySQLError as error:
        raise DatabaseError(f"error executing query: {error}") from error


def execute(connection: Any, query: str, *args: Any) -> int:
    """Run a statement that returns no rows and return how many rows it affected."""
    try:
        with connection.cursor() as cursor:
            cursor.execute(query, args or None)
            return cursor.rowcount
    except pymysql.MySQLError as error:
        raise DatabaseError(str(error)) from error