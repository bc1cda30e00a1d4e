"""Find-query example for lite_orm QueryHandler."""

from __future__ import annotations

import logging
import sqlite3
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

# Allow running this script directly from repository root.
PROJECT_ROOT = next(
    (parent for parent in Path(__file__).resolve().parents if (parent / "lite_orm").exists()),
    None,
)
if PROJECT_ROOT and str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from lite_orm import (
    Conditions,
    Database,
    PlaceholderArgumentMismatch,
    QueryHandler,
    SQLiteDialect,
    SqlQueryExecutor,
)


@dataclass
class User:
    id: Optional[int] = field(default=None, metadata={"pk": True})
    email: str = ""
    age: Optional[int] = None


def main() -> None:
    # Show the compiled SQL for every query.
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    # 1) Create DB adapter and handler. Table creation is up to the caller.
    conn = sqlite3.connect(":memory:")
    conn.execute('CREATE TABLE "user" (id INTEGER PRIMARY KEY, email TEXT, age INTEGER)')
    conn.executemany(
        'INSERT INTO "user" (email, age) VALUES (?, ?)',
        [("alice@example.com", 25), ("bob@example.com", 30), ("carol@example.com", 35)],
    )
    db = Database(conn, SQLiteDialect())
    handler = QueryHandler(SqlQueryExecutor(db))

    try:
        # 2) Shorthand shapes.
        print("By id:", handler.find_by_id(User, 2))
        print("Missing id:", handler.find_by_id(User, 99))
        print("First:", handler.find_first(User))
        print("Last:", handler.find_last(User))
        print("Some ids:", handler.find_all(User, 1, 3))
        # No ids means every row, not an empty result.
        print("All:", handler.find_all(User))

        # 3) Arbitrary conditions as a flat array or typed Conditions.
        print("Raw:", handler.find(User, None, ["age > ?", 26], "id desc", "10"))
        older = Conditions.of("age >= ? and email like ?", 30, "%@example.com")
        print("Typed:", handler.find(User, ["id", "email"], older))

        # 4) Chained form.
        print("Fluent:", handler.query(User).where("age < ?", 31).order("age desc").find())

        # 5) Placeholder/argument mismatches fail before any SQL runs.
        try:
            handler.find(User, conditions=["age > ? and age < ?", 20])
        except PlaceholderArgumentMismatch as exc:
            print("Rejected:", exc)
    finally:
        db.close()


if __name__ == "__main__":
    main()
