import json
from unittest.mock import patch

import pymysql
import pytest

from labkit.mysqlclient import (
    DEFAULT_DB_NAME,
    DatabaseError,
    DBConfig,
    ExecResult,
    connect,
    execute,
    execute_with_new_connection,
    format_dsn,
    load_config,
    select,
)


class FakeCursor:
    def __init__(self, connection):
        self.connection = connection
        self.rowcount = 0
        self.lastrowid = 0

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, query, args=None):
        if self.connection.error is not None:
            raise self.connection.error
        self.connection.executed.append((query, args))
        self.rowcount = self.connection.rowcount
        self.lastrowid = self.connection.lastrowid
        return self.rowcount

    def fetchall(self):
        return self.connection.rows


class FakeConnection:
    def __init__(self, rows=(), rowcount=0, lastrowid=0, error=None, ping_error=None):
        self.rows = list(rows)
        self.rowcount = rowcount
        self.lastrowid = lastrowid
        self.error = error
        self.ping_error = ping_error
        self.executed = []
        self.closed = False

    def cursor(self):
        return FakeCursor(self)

    def ping(self, reconnect=True):
        if self.ping_error is not None:
            raise self.ping_error

    def close(self):
        self.closed = True


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "db.config.json"
    password = "password"
    path.write_text(
        json.dumps({"username": "user", "password": password, "host": "localhost", "port": 3306}),
        encoding="utf-8",
    )
    return path


def test_load_config(config_file):
    password = "password"
    assert load_config(config_file) == DBConfig(username="user", password=password, host="localhost", port=3306)


def test_load_config_missing_file(tmp_path):
    with pytest.raises(DatabaseError, match="failed to open config file"):
        load_config(tmp_path / "absent.json")


@pytest.mark.parametrize("text", ["not json", "[1, 2]", '{"port": "3306"}', '{"host": 5}'])
def test_load_config_bad_content(tmp_path, text):
    path = tmp_path / "bad.json"
    path.write_text(text, encoding="utf-8")
    with pytest.raises(DatabaseError, match="failed to decode config"):
        load_config(path)


def test_load_config_missing_fields_take_defaults(tmp_path):
    path = tmp_path / "partial.json"
    path.write_text('{"host": "localhost"}', encoding="utf-8")
    assert load_config(path) == DBConfig(host="localhost")


def test_format_dsn(config_file):
    assert format_dsn(load_config(config_file)) == "user:password@tcp(localhost:3306)/db_exp"


def test_connect_without_config(tmp_path):
    with pytest.raises(DatabaseError, match="database DSN is empty"):
        connect(tmp_path / "absent.json")


def test_connect_passes_config(config_file):
    fake = FakeConnection()
    with patch("pymysql.connect", return_value=fake) as opener:
        assert connect(config_file) is fake
    kwargs = opener.call_args.kwargs
    assert kwargs["host"] == "localhost"
    assert kwargs["port"] == 3306
    assert kwargs["user"] == "user"
    assert kwargs["database"] == DEFAULT_DB_NAME
    assert kwargs["autocommit"] is True


def test_connect_failure_is_wrapped(config_file):
    with patch("pymysql.connect", side_effect=pymysql.err.OperationalError(2003, "refused")):
        with pytest.raises(DatabaseError, match="failed to connect to MySQL"):
            connect(config_file)


def test_ping_failure_closes_connection(config_file):
    fake = FakeConnection(ping_error=pymysql.err.OperationalError(2006, "gone"))
    with patch("pymysql.connect", return_value=fake):
        with pytest.raises(DatabaseError, match="failed to ping MySQL"):
            connect(config_file)
    assert fake.closed


def test_execute_with_new_connection(config_file):
    fake = FakeConnection(rowcount=1, lastrowid=7)
    with patch("pymysql.connect", return_value=fake):
        result = execute_with_new_connection("DELETE FROM t WHERE id = %s", 7, config_path=config_file)
    assert result == ExecResult(rows_affected=1, last_insert_id=7)
    assert fake.executed == [("DELETE FROM t WHERE id = %s", (7,))]
    assert fake.closed


def test_execute_with_new_connection_without_config(tmp_path):
    with pytest.raises(DatabaseError, match="error creating new connection"):
        execute_with_new_connection("SELECT 1", config_path=tmp_path / "absent.json")


def test_select_returns_rows():
    fake = FakeConnection(rows=[(1, "a"), (2, "b")])
    assert select(fake, "SELECT id, name FROM t") == [(1, "a"), (2, "b")]
    assert fake.executed == [("SELECT id, name FROM t", None)]


def test_select_error_is_wrapped():
    fake = FakeConnection(error=pymysql.err.ProgrammingError(1146, "no table"))
    with pytest.raises(DatabaseError, match="error executing query"):
        select(fake, "SELECT * FROM missing")


def test_execute_returns_row_count():
    fake = FakeConnection(rowcount=3)
    assert execute(fake, "UPDATE t SET a = %s", 1) == 3
    assert fake.executed == [("UPDATE t SET a = %s", (1,))]


def test_execute_error_is_raised():
    fake = FakeConnection(error=pymysql.err.IntegrityError(1062, "duplicate"))
    with pytest.raises(DatabaseError):
        execute(fake, "INSERT INTO t VALUES (1)")