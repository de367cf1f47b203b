"""Shared pytest fixtures for brickstmt unit and integration tests."""
from __future__ import annotations

import pytest

from brickstmt.compile.registry import DialectRegistry
from brickstmt.schema.dialect import EngineDialect


@pytest.fixture(scope="session")
def default_dialect() -> EngineDialect:
    """``?`` placeholders, backslash escape, rear limit."""
    return EngineDialect()


@pytest.fixture(scope="session")
def dollar_dialect() -> EngineDialect:
    """PostgreSQL-style ``$1, $2`` placeholders."""
    return EngineDialect.builder().placeholder("$", numbered=True).quoting(escape="'").build()


@pytest.fixture(scope="session")
def sqlserver_dialect() -> EngineDialect:
    return DialectRegistry.create("sqlserver")


@pytest.fixture(scope="session")
def sqlite_dialect() -> EngineDialect:
    return DialectRegistry.create("sqlite")
