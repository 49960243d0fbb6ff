"""Async SQLite wrapper using stdlib sqlite3 + anyio.

Runs every blocking sqlite3 call in a worker thread via
``anyio.to_thread``. ``check_same_thread=False`` is required because the
thread pool may dispatch consecutive calls to different threads; the
``Database`` serializes access with an ``anyio.Lock``.
"""

import sqlite3
from collections.abc import Callable, Sequence
from typing import Any

import anyio


def _run_sync(func: Callable[..., Any], *args: Any) -> Any:
    return anyio.to_thread.run_sync(func, *args)  # type: ignore[union-attr]


class AsyncCursor:
    """Async wrapper around ``sqlite3.Cursor``."""

    __slots__ = ("_cursor",)

    def __init__(self, cursor: sqlite3.Cursor) -> None:
        self._cursor = cursor

    @property
    def description(self) -> Any:
        return self._cursor.description

    @property
    def rowcount(self) -> int:
        return self._cursor.rowcount

    async def fetchone(self) -> Any:
        return await _run_sync(self._cursor.fetchone)


class AsyncConnection:
    """Async wrapper around ``sqlite3.Connection``."""

    __slots__ = ("_conn",)

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    async def execute(self, sql: str, params: Sequence[Any] = ()) -> AsyncCursor:
        cursor = await _run_sync(lambda: self._conn.execute(sql, params))
        return AsyncCursor(cursor)

    async def close(self) -> None:
        await _run_sync(self._conn.close)


async def connect(path: str) -> AsyncConnection:
    """Open an autocommitting async SQLite connection."""
    conn = await _run_sync(
        lambda: sqlite3.connect(path, autocommit=True, check_same_thread=False)
    )
    return AsyncConnection(conn)
