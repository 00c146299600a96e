"""Persistence of the single start time in an SQLite ``times`` table."""

from __future__ import annotations

import os
import sqlite3
from contextlib import closing
from datetime import datetime, time

TIME_FORMAT = "%H:%M"


def parse_time(text: str) -> time:
    """Parse an ``HH:MM`` string, raising ValueError if it is not one."""
    try:
        return datetime.strptime(text, TIME_FORMAT).time()
    except (TypeError, ValueError) as exc:
        raise ValueError(f"not a valid time: {text!r}, expected {TIME_FORMAT}") from exc


def format_time(value: time) -> str:
    """Format a time as ``HH:MM``."""
    return value.strftime(TIME_FORMAT)


class TimeStore:
    """Holds at most one start time; setting a new one replaces the old."""

    def __init__(self, database_url: str) -> None:
        if not database_url:
            raise ValueError("database_url must not be empty")
        self.database_url = database_url
        self._path = database_url.removeprefix("sqlite:///").removeprefix("sqlite://")
        self._run(
            "CREATE TABLE IF NOT EXISTS times ("
            "id INTEGER PRIMARY KEY AUTOINCREMENT, time TEXT NOT NULL)"
        )

    @classmethod
    def from_env(cls) -> TimeStore:
        """Build a store from the ``DATABASE_URL`` environment variable."""
        database_url = os.environ.get("DATABASE_URL")
        if not database_url:
            raise RuntimeError("DATABASE_URL must be set")
        return cls(database_url)

    def _run(self, *statements: str | tuple[str, tuple]) -> list:
        try:
            connection = sqlite3.connect(self._path)
        except sqlite3.Error as exc:
            raise RuntimeError(f"Error connecting to {self.database_url}") from exc
        rows: list = []
        with closing(connection) as conn, conn:
            for statement in statements:
                sql, params = statement if isinstance(statement, tuple) else (statement, ())
                rows = conn.execute(sql, params).fetchall()
        return rows

    def get_time(self) -> time | None:
        """Return the stored time, or None when no time is set."""
        rows = self._run("SELECT time FROM times ORDER BY id LIMIT 1")
        return parse_time(rows[0][0]) if rows else None

    def set_time(self, value: time | str) -> time:
        """Replace any stored time with ``value`` and return it."""
        text = format_time(parse_time(value) if isinstance(value, str) else value)
        self._run("DELETE FROM times", ("INSERT INTO times (time) VALUES (?)", (text,)))
        return parse_time(text)

    def clear(self) -> None:
        """Remove any stored time."""
        self._run("DELETE FROM times")