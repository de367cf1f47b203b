"""Test fixtures: sample DDL and seed rows for the integration tests."""

from __future__ import annotations

USERS_DDL = """
CREATE TABLE users (
    Id          INTEGER PRIMARY KEY,
    UserName    TEXT    NOT NULL,
    MiddleName  TEXT,
    Age         INTEGER,
    IsActive    INTEGER NOT NULL DEFAULT 1,
    Score       REAL,
    Status      TEXT
);
"""

USERS_ROWS = [
    (1, "alice", None, 34, 1, 91.5, "A"),
    (2, "bob", "J", 17, 1, 55.0, "P"),
    (3, "carol", None, 52, 0, None, "X"),
    (4, "o'brien", None, 29, 1, 70.25, "A"),
]


def users_ddl() -> str:
    """Return the DDL for the ``users`` table used across integration tests."""
    return USERS_DDL
