"""SQLite storage for points and chat memory."""

from __future__ import annotations

import json
import os
import sqlite3
from collections import deque
from dataclasses import asdict
from datetime import datetime
from typing import Union

from bocchi.event import Sender
from bocchi.models import CachedMessage, Memory, Point

DEFAULT_PATH = "./db.sqlite3"

_SCHEMA = """
CREATE TABLE IF NOT EXISTS points (
    id INTEGER PRIMARY KEY,
    name TEXT NOT NULL,
    point INTEGER NOT NULL,
    last_update TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS points_by_point ON points (point);
CREATE TABLE IF NOT EXISTS memories (
    id TEXT PRIMARY KEY,
    history TEXT NOT NULL
);
"""

PathLike = Union[str, "os.PathLike[str]"]


class Database:
    """Points and memories in one SQLite file."""

    def __init__(self, path: PathLike = DEFAULT_PATH) -> None:
        self.path = os.fspath(path)
        self._conn = sqlite3.connect(self.path)
        self._conn.executescript(_SCHEMA)
        self.closed = False

    def __enter__(self) -> "Database":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def get_point(self, user_id: int) -> Point | None:
        row = self._conn.execute(
            "SELECT id, name, point, last_update FROM points WHERE id = ?", (user_id,)
        ).fetchone()
        if row is None:
            return None
        return Point(id=row[0], name=row[1], point=row[2], last_update=datetime.fromisoformat(row[3]))

    def save_point(self, point: Point) -> None:
        with self._conn:
            self._conn.execute(
                "INSERT OR REPLACE INTO points (id, name, point, last_update) VALUES (?, ?, ?, ?)",
                (point.id, point.name, point.point, point.last_update.isoformat()),
            )

    def get_memory(self, memory_id: str) -> Memory | None:
        row = self._conn.execute("SELECT history FROM memories WHERE id = ?", (memory_id,)).fetchone()
        if row is None:
            return None
        history = deque(
            CachedMessage(
                sender=None if item["sender"] is None else Sender.from_dict(item["sender"]),
                content=item["content"],
            )
            for item in json.loads(row[0])
        )
        return Memory(id=memory_id, history=history)

    def save_memory(self, memory: Memory) -> None:
        history = [
            {"sender": None if m.sender is None else asdict(m.sender), "content": m.content}
            for m in memory.history
        ]
        with self._conn:
            self._conn.execute(
                "INSERT OR REPLACE INTO memories (id, history) VALUES (?, ?)",
                (memory.id, json.dumps(history, ensure_ascii=False)),
            )

    def close(self) -> None:
        self._conn.close()
        self.closed = True


_open: dict[str, Database] = {}


def database(path: PathLike = DEFAULT_PATH) -> Database:
    """The shared database for a path, opened on first use."""
    key = os.path.abspath(os.fspath(path))
    db = _open.get(key)
    if db is None or db.closed:
        db = Database(path)
        _open[key] = db
    return db