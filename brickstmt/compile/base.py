"""Compiler abstractions: CompiledStatement and the ValueRenderer ABC.

The Template Method pattern (GoF) is used:
- The clause builders walk the statement in a fixed order.
- ``ValueRenderer`` subclasses decide how each value is written:
  ``ParameterRenderer`` emits placeholders and collects bound arguments,
  ``LiteralRenderer`` inlines SQL literals.
"""
from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Any

from brickstmt.errors import RawFragmentError, UnsupportedClauseError
from brickstmt.schema.statement import CommandType, ResolvedFilter, ResolvedValue
from brickstmt.schema.values import Scalar

NULL = "NULL"


@dataclass
class CompiledStatement:
    """The output of a successful build.

    Attributes:
        sql: Semicolon-terminated statement text.
        args: Bound argument values, aligned 1:1 with the placeholders in
            ``sql`` (left to right).  Empty for literal builds.
        command: The statement kind that was built.
        parameter_offset: Placeholder counter after this build; seed the
            next builder with it to continue the numbering.
    """

    sql: str
    args: list[Any] = field(default_factory=list)
    command: CommandType = CommandType.SELECT
    parameter_offset: int = 0

    def __iter__(self):
        # Allows ``sql, args = builder.build()``.
        yield self.sql
        yield self.args


def wrap_count(compiled: CompiledStatement, alias: str = "_count") -> CompiledStatement:
    """Wrap a built SELECT as ``SELECT COUNT(*) FROM (<inner>) AS <alias>;``.

    Args:
        compiled: A built SELECT statement.
        alias: Alias of the derived table.

    Returns:
        A new :class:`CompiledStatement` reusing ``compiled.args``.

    Raises:
        UnsupportedClauseError: If ``compiled`` is not a SELECT.
    """
    if compiled.command is not CommandType.SELECT:
        raise UnsupportedClauseError("COUNT wrapping", compiled.command.value)
    inner = compiled.sql.rstrip().rstrip(";").rstrip()
    return replace(
        compiled,
        sql=f"SELECT COUNT(*) FROM ({inner}) AS {alias};",
        args=list(compiled.args),
    )


def render_raw_fragment(column: str, value: Scalar, textual_only: bool = False) -> str:
    """Render a non-parameter value verbatim.

    Strings are inserted as-is (e.g. ``GETDATE()``).  Unless
    ``textual_only`` is set, finite numbers and booleans are formatted.
    Any other kind raises.

    Raises:
        RawFragmentError: If ``value`` has no textual SQL form.
    """
    if isinstance(value, str):
        return value
    if textual_only:
        raise RawFragmentError(column, value)
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, Decimal) and value.is_finite():
        return str(value)
    if isinstance(value, float) and math.isfinite(value):
        return repr(value)
    raise RawFragmentError(column, value)


class ValueRenderer(ABC):
    """Abstract strategy deciding how bound values are written.

    The column and filter rules are shared; subclasses only decide what a
    bound value looks like (:meth:`bind`) and what happens to externally
    contributed arguments (:meth:`contribute`).
    """

    def column_value(self, resolved: ResolvedValue, textual_only: bool = False) -> str:
        """Return the SQL text for a rendered INSERT/UPDATE column value.

        ``textual_only`` restricts raw fragments to strings (INSERT).
        """
        if resolved.is_null:
            return NULL
        if not resolved.is_parameter:
            return render_raw_fragment(resolved.column, resolved.value, textual_only)
        return self.bind(resolved.value)

    def filter_value(self, resolved: ResolvedFilter) -> str:
        """Return the right-hand side of ``expression = ...``."""
        return self.bind(resolved.value)

    @abstractmethod
    def bind(self, value: Scalar) -> str:
        """Return the SQL text standing for ``value``."""

    @abstractmethod
    def contribute(self, args: list[Any]) -> None:
        """Accept the arguments returned by an external filter contributor."""

    @property
    @abstractmethod
    def offset(self) -> int:
        """Current placeholder counter."""

    @property
    @abstractmethod
    def args(self) -> list[Any]:
        """Bound arguments collected so far, in placeholder order."""
