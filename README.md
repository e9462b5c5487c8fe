# labkit

A collection of small, self-contained experiments you can run and read:
locked and unlocked queues, a consistent-hashing ring, threads that deadlock
on a ring of locks, racing counters, list-building timings, simulated
database calls, a tiny TCP server, a coin-balance web API and a MySQL user
table client.

Each experiment is a module in the `labkit` package, and each comes with a
command that runs the demonstration.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Commands

| Command            | Module              | Options                                              |
|--------------------|---------------------|------------------------------------------------------|
| `labkit-basics`    | `labkit.basics`     | none                                                 |
| `labkit-queues`    | `labkit.queues`     | `--version v1\|v2\|v3`, `--count`, `--workers`       |
| `labkit-counter`   | `labkit.counter`    | `--increments`                                       |
| `labkit-bench`     | `labkit.bench`      | `--size`                                             |
| `labkit-hashring`  | `labkit.hashring`   | `--machines`, `--keys`                               |
| `labkit-deadlock`  | `labkit.deadlock`   | `--threads`, `--hold`, `--timeout`                   |
| `labkit-dbcalls`   | `labkit.dbcalls`    | `--count`, `--max-delay`, `--mode sequential\|threaded\|shared` |
| `labkit-tcpserver` | `labkit.tcpserver`  | `--mode simple\|v2\|v3\|v4`, `--host`, `--port`, `--delay` |
| `labkit-coinapi`   | `labkit.coinapi`    | `--host`, `--port`                                   |
| `labkit-users`     | `labkit.users`      | `--config`, `--count`                                |

What they do:

- **labkit-basics** prints a greeting, integer division with remainder
  (truncating toward zero, with a message for division by zero), the range
  of a gas and an electric engine and whether each can cover a distance, and
  squaring a list into a copy versus in place.
- **labkit-queues** with `v1` dequeues once more than it enqueued and exits
  with status 1 on `QueueEmptyError`; `v2` fills an `UnsafeQueue` from many
  threads; `v3` (the default) fills and then drains a `ConcurrentQueue` and
  prints the size left (zero).
- **labkit-counter** increments a shared counter from eight threads, first
  without a lock (updates may be lost) and then with one, printing the time
  taken in microseconds and the final count.
- **labkit-bench** times appending to an empty list against filling a list
  whose length was set up front, and prints a table.
- **labkit-hashring** places machines with random IPv4 addresses on a
  SHA-256 ring, assigns keys `Key_0` … to the first machine whose hash is
  above the key's (wrapping round), and prints the keys per machine with the
  mean, standard deviation and imbalance ratio (standard deviation over mean).
- **labkit-deadlock** starts threads that each lock mutex `i % 3` and then
  `(i + 1) % 3`. Without `--timeout` a cycle hangs the run; with it, a thread
  that waits longer gives up, and the command lists those threads and exits
  with status 1.
- **labkit-dbcalls** makes one call per record, each sleeping a random
  number of milliseconds below `--max-delay`, either in turn, on threads
  with a line per call, or (`shared`, the default) on threads that gather
  the records into one list as they complete.
- **labkit-tcpserver** listens on port 1729 and answers each client with
  `HTTP/1.1 200 OK` and `Hello from TCP server!` after reading up to 1024
  bytes and waiting `--delay` seconds (8 by default). `simple` accepts one
  client and closes it at once, `v2` answers one client, `v3` answers
  clients one at a time, and `v4` (the default) answers each on its own
  thread. Any HTTP client pointed at `http://localhost:1729` will do.
- **labkit-coinapi** serves the coin API described below.
- **labkit-users** inserts mock users into a MySQL table, as described below.

## The coin API

`labkit-coinapi` starts a web server on `localhost:8000` with one route:

```
GET /account/coins?username=<name>
```

The request must carry an `Authorization` header holding that user's token
exactly as stored in the in-memory database of `labkit.coindb`, which knows
the users `alice`, `bob` and `charlie`. Every lookup in that database waits
one second by default.

On success the reply has status 200 and the JSON body `{"Code":200,"Balance":...}`.
Failures have the body `{"Code":...,"Message":...}`: status 400 when the
header or username is missing, the token does not match, or the user has no
balance; status 500 when the database cannot be created or the query holds a
parameter other than `username`. A trailing slash in the path is ignored.

The application can be built in code with `labkit.coinapi.create_app`,
passing a function that returns a database for each request:

```python
from labkit.coinapi import create_app
from labkit.coindb import new_database

app = create_app(lambda: new_database(delay=0))
client = app.test_client()
```

## MySQL

`labkit.mysqlclient.connect` reads its settings from `db.config.json` in the
working directory (or another path you give) and connects to the `db_exp`
database:

```json
{
  "username": "user",
  "password": "password",
  "host": "localhost",
  "port": 3306
}
```

The module also offers `load_config`, `format_dsn`, `select` (returns all
rows), `execute` (returns the number of rows affected) and
`execute_with_new_connection`, which opens a connection, runs one statement
and closes it.

`labkit.users` works on a table named `users` with the columns `idUsers`,
`username` and `age`: `get_users` (up to 1000 rows), `create_user`,
`create_mock_users`, `generate_mock_users` and `delete_all_users`.
`labkit-users` connects with the file given by `--config` and inserts
`--count` mock users (ten by default) with time-stamped names and random
ages below 100.

All failures are raised as `labkit.mysqlclient.DatabaseError`.

## Using the modules directly

Everything the commands do is available as plain functions and classes:

```python
from labkit.hashring import assign_keys, distribution_stats, key_list, random_machines

machines = random_machines(50)
assignment = assign_keys(machines, key_list(10_000))
print(distribution_stats(assignment))
```

```python
from labkit.queues import ConcurrentQueue, QueueEmptyError

queue = ConcurrentQueue()
queue.enqueue(1)
print(queue.dequeue())
try:
    queue.dequeue()
except QueueEmptyError:
    print("empty")
```

## What the package does not do

- The coin API has no real user store: its users, tokens and balances are
  fixed in memory, and there is no way to add users or change balances.
- The MySQL client does not create the database or the `users` table; both
  must exist before `labkit-users` is run.
- The TCP server does not parse HTTP; it sends the same reply to whatever it
  reads.