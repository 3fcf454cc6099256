"""A small connection pool and the routine that opens the application database."""

from __future__ import annotations

import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Mapping

import pymysql

PING_ATTEMPTS = 3
PING_INTERVAL_SECONDS = 1.0


@dataclass
class Options:
    """Pool limits; zero or less means unlimited open / no idle connections."""

    max_open_conns: int = 0
    max_idle_conns: int = 0


class DatabaseError(Exception):
    """The database could not be opened or used."""


def _close_quietly(conn: Any) -> None:
    try:
        conn.close()
    except Exception:
        pass


class Database:
    """A thread-safe pool of DB-API connections created by ``connect``."""

    def __init__(self, connect: Callable[[], Any], options: Options) -> None:
        self._connect = connect
        self._max_open = max(options.max_open_conns, 0)
        max_idle = max(options.max_idle_conns, 0)
        if self._max_open:
            max_idle = min(max_idle, self._max_open)
        self._max_idle = max_idle
        self._idle: list[Any] = []
        self._open = 0
        self._closed = False
        self._cond = threading.Condition()

    @property
    def open_connections(self) -> int:
        """Connections currently open, in use or idle."""
        with self._cond:
            return self._open

    @property
    def idle_connections(self) -> int:
        """Connections waiting in the pool."""
        with self._cond:
            return len(self._idle)

    def _acquire(self) -> Any:
        with self._cond:
            while True:
                if self._closed:
                    raise DatabaseError("database is closed")
                if self._idle:
                    return self._idle.pop()
                if not self._max_open or self._open < self._max_open:
                    self._open += 1
                    break
                self._cond.wait()
        try:
            return self._connect()
        except BaseException:
            with self._cond:
                self._open -= 1
                self._cond.notify()
            raise

    def _release(self, conn: Any, reusable: bool) -> None:
        with self._cond:
            keep = reusable and not self._closed and len(self._idle) < self._max_idle
            if keep:
                self._idle.append(conn)
            else:
                self._open -= 1
            self._cond.notify()
        if not keep:
            _close_quietly(conn)

    @contextmanager
    def connection(self) -> Iterator[Any]:
        """Borrow a connection; it is discarded if the block raises."""
        conn = self._acquire()
        try:
            yield conn
        except BaseException:
            self._release(conn, reusable=False)
            raise
        self._release(conn, reusable=True)

    def ping(self) -> None:
        """Check that a connection to the database can be used."""
        with self.connection() as conn:
            ping = getattr(conn, "ping", None)
            if ping is not None:
                ping()
            else:
                cursor = conn.cursor()
                try:
                    cursor.execute("SELECT 1")
                finally:
                    cursor.close()

    def close(self) -> None:
        """Close idle connections and refuse further use."""
        with self._cond:
            self._closed = True
            idle, self._idle = self._idle, []
            self._open -= len(idle)
            self._cond.notify_all()
        for conn in idle:
            _close_quietly(conn)

    def __enter__(self) -> "Database":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def _mysql_connector(settings: Mapping[str, Any]) -> Callable[[], Any]:
    params = dict(settings)
    return lambda: pymysql.connect(**params)


_DRIVERS: dict[str, Callable[[Mapping[str, Any]], Callable[[], Any]]] = {
    "mysql": _mysql_connector,
}


def open_database(driver: str, settings: Mapping[str, Any], options: Options) -> Database:
    """Open a pool for ``driver`` and make sure the server answers.

    ``settings`` are keyword arguments for the driver's connect function.
    """
    try:
        factory = _DRIVERS[driver]
    except KeyError:
        raise DatabaseError(f'unknown driver "{driver}"') from None

    db = Database(factory(settings), options)
    for _ in range(PING_ATTEMPTS):
        try:
            db.ping()
        except Exception:
            time.sleep(PING_INTERVAL_SECONDS)
        else:
            return db
    db.close()
    raise DatabaseError("failed to ping database after retries")