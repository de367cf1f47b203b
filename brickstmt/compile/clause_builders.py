"""Clause-level SQL builders.

Each class handles exactly one SQL clause.  Builders that write values
receive the shared :class:`~brickstmt.compile.base.ValueRenderer` so that
placeholders and bound arguments are produced in a single left-to-right
pass and can never drift apart.

Classes
-------
SelectClauseBuilder   — ``SELECT [DISTINCT] [TOP n] <cols> FROM <src>``
InsertClauseBuilder   — ``INSERT INTO <src> (<cols>) VALUES (<vals>)``
UpdateClauseBuilder   — ``UPDATE <src> SET <col> = <val>, …``
DeleteClauseBuilder   — ``DELETE FROM <src>``
WhereClauseBuilder    — ``WHERE <filter> AND … AND <contributed>``
GroupByClauseBuilder  — ``GROUP BY …``
OrderByClauseBuilder  — ``ORDER BY <col> ASC|DESC, …``
LimitClauseBuilder    — ``LIMIT n``
"""
from __future__ import annotations

from brickstmt.compile.base import NULL, ValueRenderer
from brickstmt.compile.context import CompilationContext
from brickstmt.errors import MissingColumnsError
from brickstmt.schema.spec import FilterContributor
from brickstmt.schema.statement import (
    LimitPosition,
    ResolvedFilter,
    ResolvedValue,
    Sort,
)

_AND = " AND "


class SelectClauseBuilder:
    """Builds ``SELECT … FROM <src>``.  Every registered column is listed."""

    def __init__(self, ctx: CompilationContext) -> None:
        self._ctx = ctx

    def build(self, values: list[ResolvedValue], distinct: bool, result_limit: str) -> str:
        parts = ["SELECT"]
        if distinct:
            parts.append("DISTINCT")
        if result_limit and self._ctx.dialect.result_limit_position is LimitPosition.FRONT:
            parts.append(f"TOP {result_limit}")
        parts.append(", ".join(v.column for v in values))
        return f"{' '.join(parts)} FROM {self._ctx.source}"


class InsertClauseBuilder:
    """Builds ``INSERT INTO <src> (…) VALUES (…)``, leaving out skipped columns."""

    def __init__(self, ctx: CompilationContext, renderer: ValueRenderer) -> None:
        self._ctx = ctx
        self._renderer = renderer

    def build(self, values: list[ResolvedValue]) -> str:
        rendered = [v for v in values if v.rendered]
        if not rendered:
            raise MissingColumnsError(self._ctx.source, self._ctx.command.value)
        columns = ", ".join(v.column for v in rendered)
        placeholders = ", ".join(
            self._renderer.column_value(v, textual_only=True) for v in rendered
        )
        return f"INSERT INTO {self._ctx.source} ({columns}) VALUES ({placeholders})"


class UpdateClauseBuilder:
    """Builds ``UPDATE <src> SET …``, leaving out skipped columns."""

    def __init__(self, ctx: CompilationContext, renderer: ValueRenderer) -> None:
        self._ctx = ctx
        self._renderer = renderer

    def build(self, values: list[ResolvedValue]) -> str:
        rendered = [v for v in values if v.rendered]
        if not rendered:
            raise MissingColumnsError(self._ctx.source, self._ctx.command.value)
        assignments = ", ".join(
            f"{v.column} = {self._renderer.column_value(v)}" for v in rendered
        )
        return f"UPDATE {self._ctx.source} SET {assignments}"


class DeleteClauseBuilder:
    def __init__(self, ctx: CompilationContext) -> None:
        self._ctx = ctx

    def build(self) -> str:
        return f"DELETE FROM {self._ctx.source}"


class WhereClauseBuilder:
    """Builds the ``WHERE`` clause from filters and an optional contributor.

    The contributor is called at most once, after the built-in filters,
    with the renderer's current placeholder offset so its own numbering
    continues where ours stopped.
    """

    def __init__(self, ctx: CompilationContext, renderer: ValueRenderer) -> None:
        self._ctx = ctx
        self._renderer = renderer

    def build(
        self,
        filters: list[ResolvedFilter],
        contributor: FilterContributor | None = None,
    ) -> str:
        parts = [self._build_filter(f) for f in filters]
        if contributor is not None:
            dialect = self._ctx.dialect
            fragments, args = contributor(
                self._renderer.offset,
                dialect.parameter_placeholder,
                dialect.parameter_in_sequence,
            )
            if fragments:
                parts.extend(fragments)
                self._renderer.contribute(list(args))
        if not parts:
            return ""
        return f"WHERE {_AND.join(parts)}"

    def _build_filter(self, flt: ResolvedFilter) -> str:
        if flt.value is not None:
            return f"{flt.expression} = {self._renderer.filter_value(flt)}"
        if flt.expression_only:
            return flt.expression
        return f"{flt.expression} IS {NULL}"


class GroupByClauseBuilder:
    def build(self, groups: list[str]) -> str:
        if not groups:
            return ""
        return f"GROUP BY {', '.join(groups)}"


class OrderByClauseBuilder:
    def build(self, sorts: list[Sort]) -> str:
        if not sorts:
            return ""
        items = ", ".join(f"{s.column} {s.direction.value}" for s in sorts)
        return f"ORDER BY {items}"


class LimitClauseBuilder:
    """Builds the trailing ``LIMIT n``; front limits live in the SELECT clause."""

    def __init__(self, ctx: CompilationContext) -> None:
        self._ctx = ctx

    def build(self, result_limit: str) -> str:
        if not result_limit:
            return ""
        if self._ctx.dialect.result_limit_position is not LimitPosition.REAR:
            return ""
        return f"LIMIT {result_limit}"
