"""Utilities for building an EngineDialect from external sources.

SQLAlchemy converter
--------------------
:func:`dialect_from_sqlalchemy` inspects a SQLAlchemy engine (or a bare
``Dialect``) and returns an :class:`~brickstmt.schema.dialect.EngineDialect`
whose placeholder style matches the engine's DB-API driver.

Install the optional dependency before using this module::

    pip install "brickstmt[sqlalchemy]"

Example::

    from sqlalchemy import create_engine
    from brickstmt.schema.converters import dialect_from_sqlalchemy

    engine = create_engine("sqlite:///mydb.db")
    dialect = dialect_from_sqlalchemy(engine)   # '?' placeholders
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from brickstmt.errors import ProfileConfigError
from brickstmt.schema.dialect import EngineDialect
from brickstmt.schema.statement import LimitPosition

if TYPE_CHECKING:
    from sqlalchemy.engine import Dialect, Engine

#: DB-API ``paramstyle`` → (placeholder token, numbered).
_PARAMSTYLES: dict[str, tuple[str, bool]] = {
    "qmark": ("?", False),
    "numeric": (":", True),
    "numeric_dollar": ("$", True),
    "named": (":", True),
    "format": ("%s", False),
    "pyformat": ("%s", False),
}

# Engines whose string literals escape quotes with a backslash; the rest
# double the enclosing quote.
_BACKSLASH_ESCAPE = frozenset({"mysql", "mariadb"})

# Engines that limit rows with SELECT TOP n.
_FRONT_LIMIT = frozenset({"mssql"})


def dialect_from_sqlalchemy(bind: Engine | Dialect) -> EngineDialect:
    """Build an :class:`EngineDialect` matching a SQLAlchemy engine or dialect.

    Args:
        bind: A :class:`sqlalchemy.engine.Engine` or its ``dialect``.

    Returns:
        An :class:`EngineDialect` using the driver's positional parameter
        style, the engine's identifier quoting and its row-limit syntax.

    Raises:
        ProfileConfigError: If the driver reports an unknown ``paramstyle``.
    """
    dialect = getattr(bind, "dialect", bind)
    paramstyle = dialect.paramstyle
    try:
        token, numbered = _PARAMSTYLES[paramstyle]
    except KeyError as exc:
        raise ProfileConfigError(
            f"Unsupported DB-API paramstyle '{paramstyle}' for dialect "
            f"'{dialect.name}'. Known styles: {sorted(_PARAMSTYLES)}.",
            setting="parameter_placeholder",
        ) from exc

    preparer = dialect.identifier_preparer
    reserved = preparer.initial_quote
    if preparer.final_quote and preparer.final_quote != preparer.initial_quote:
        reserved += preparer.final_quote

    return EngineDialect(
        string_enclosing_char="'",
        string_escape_char="\\" if dialect.name in _BACKSLASH_ESCAPE else "'",
        reserved_word_escape=reserved,
        parameter_placeholder=token,
        parameter_in_sequence=numbered,
        result_limit_position=(
            LimitPosition.FRONT if dialect.name in _FRONT_LIMIT else LimitPosition.REAR
        ),
    )
