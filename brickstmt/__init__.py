"""brickstmt – Programmatic SQL statement assembly.

Register columns, values and filters; get back SQL and its arguments.

Public API
----------
``StatementBuilder``
    Mutable, chainable builder for SELECT, INSERT, UPDATE and DELETE.
    ``build()`` returns parameterized SQL plus the ordered argument list;
    ``build_literal()`` returns SQL with every value inlined.

``interpolate_table``
    Rewrite ``{Table}`` tokens with a schema or reference prefix.

Re-exported types
-----------------
``EngineDialect``, ``DatabaseInfo``, ``CompiledStatement``, ``Ref``,
``ConditionSet``, and all error classes.

Extensibility
-------------
Engine presets are looked up by name through :class:`DialectRegistry`::

    from brickstmt import DialectRegistry, EngineDialect

    DialectRegistry.register(
        "duckdb",
        EngineDialect.builder().placeholder("$", numbered=True).build(),
    )
    qb = StatementBuilder.select("{users}", dialect="duckdb")

Example::

    qb = StatementBuilder.insert("{users}", schema="sales")
    qb.add_value("UserName", "john.doe").add_value("Created", "GETDATE()", sql_string=False)
    sql, args = qb.build()
    # INSERT INTO sales.users (UserName, Created) VALUES (?, GETDATE());
    cursor.execute(sql, args)
"""

from __future__ import annotations

from brickstmt.compile.assembler import StatementAssembler
from brickstmt.compile.base import CompiledStatement, wrap_count
from brickstmt.compile.builder import StatementBuilder
from brickstmt.compile.interpolate import interpolate_table
from brickstmt.compile.registry import DialectRegistry
from brickstmt.errors import (
    BrickStmtError,
    MissingColumnsError,
    MissingSourceError,
    ProfileConfigError,
    RawFragmentError,
    StatementError,
    UnsupportedClauseError,
)
from brickstmt.filters.conditions import Condition, ConditionSet
from brickstmt.schema.converters import dialect_from_sqlalchemy
from brickstmt.schema.dialect import DatabaseInfo, DialectProfileBuilder, EngineDialect
from brickstmt.schema.spec import FilterContributor, StatementSpec
from brickstmt.schema.statement import CommandType, LimitPosition, SortDirection
from brickstmt.schema.values import (
    NVarCharMax,
    Ref,
    ScalarKind,
    VarChar,
    VarCharMax,
    normalize,
    scalar_kind,
)

__version__ = "0.1.0"

__all__ = [
    # Building
    "StatementBuilder",
    "StatementAssembler",
    "StatementSpec",
    "CompiledStatement",
    "wrap_count",
    "interpolate_table",
    # Configuration
    "EngineDialect",
    "DialectProfileBuilder",
    "DatabaseInfo",
    "DialectRegistry",
    "dialect_from_sqlalchemy",
    # Statement vocabulary
    "CommandType",
    "SortDirection",
    "LimitPosition",
    # Values
    "Ref",
    "VarChar",
    "VarCharMax",
    "NVarCharMax",
    "ScalarKind",
    "normalize",
    "scalar_kind",
    # Filter contribution
    "FilterContributor",
    "Condition",
    "ConditionSet",
    # Errors
    "BrickStmtError",
    "StatementError",
    "MissingSourceError",
    "MissingColumnsError",
    "UnsupportedClauseError",
    "RawFragmentError",
    "ProfileConfigError",
]
