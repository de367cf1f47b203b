"""Core statement assembly.

``StatementAssembler`` turns a :class:`~brickstmt.schema.spec.StatementSpec`
into SQL text.  The algorithm runs in four phases:

1. **Validate** the builder state (source present, columns present for non-DELETE,
   ORDER BY / GROUP BY / limit only on SELECT).
2. **Resolve** every value slot and filter into immutable records: the
   value is normalized, the default substituted when it is absent, the
   match-to-null sentinel applied and the skip-nil policy evaluated, in
   that order.  The builder state itself is never written to.
3. **Qualify** the structural text when interpolation is on: the source,
   column names, filter expressions, grouping and sort items, raw fragments
   and contributed conditions have their ``{Table}`` tokens rewritten.
   Bound and literal values are never touched.
4. **Emit** the clauses for the command kind through a
   :class:`~brickstmt.compile.base.ValueRenderer`.  The renderer is the
   only place where placeholders are numbered and arguments collected, so
   the argument list always lines up with the placeholders in the text.

Clause order
------------
``<head> [WHERE …] [GROUP BY …] [ORDER BY …] [LIMIT n];``
"""

from __future__ import annotations

from dataclasses import replace
from typing import Callable

from brickstmt.compile.base import CompiledStatement, ValueRenderer
from brickstmt.compile.clause_builders import (
    DeleteClauseBuilder,
    GroupByClauseBuilder,
    InsertClauseBuilder,
    LimitClauseBuilder,
    OrderByClauseBuilder,
    SelectClauseBuilder,
    UpdateClauseBuilder,
    WhereClauseBuilder,
)
from brickstmt.compile.context import CompilationContext
from brickstmt.compile.interpolate import interpolate_table
from brickstmt.compile.literal import LiteralRenderer
from brickstmt.compile.parameters import ParameterRenderer
from brickstmt.errors import MissingColumnsError, MissingSourceError, UnsupportedClauseError
from brickstmt.schema.spec import FilterContributor, StatementSpec
from brickstmt.schema.statement import (
    CommandType,
    Filter,
    ResolvedFilter,
    ResolvedValue,
    Sort,
    ValueEntry,
)
from brickstmt.schema.values import normalize, values_match
from brickstmt.utils.logging import get_logger

logger = get_logger("compile.assembler")


def resolve_value(entry: ValueEntry, skip_nil_write: bool) -> ResolvedValue:
    """Resolve one value slot for a single build.

    Order matters: default substitution happens before the match-to-null
    check, so a default equal to the sentinel still yields NULL.
    """
    effective = normalize(entry.value)
    is_null = effective is None
    if is_null:
        default = normalize(entry.default)
        if default is not None:
            effective = default
            is_null = False

    is_parameter = entry.is_parameter
    force_null = False
    if not is_null:
        sentinel = normalize(entry.match_to_null)
        if sentinel is not None and values_match(sentinel, effective):
            is_null = True
            force_null = True
            is_parameter = True

    return ResolvedValue(
        column=entry.column,
        value=None if is_null else effective,
        is_parameter=is_parameter,
        is_null=is_null,
        force_null=force_null,
        skip=skip_nil_write and is_null and not force_null,
    )


def resolve_filter(flt: Filter) -> ResolvedFilter:
    return ResolvedFilter(
        expression=flt.expression,
        value=normalize(flt.value),
        expression_only=flt.expression_only,
    )


def table_qualifier_func(spec: StatementSpec) -> Callable[[str], str]:
    """Return the function that rewrites ``{Table}`` tokens for ``spec``."""
    if not spec.interpolate:
        return lambda text: text
    qualifier = spec.table_qualifier()
    return lambda text: interpolate_table(text, qualifier)


def qualify_value(resolved: ResolvedValue, qualify: Callable[[str], str]) -> ResolvedValue:
    value = resolved.value
    if not resolved.is_parameter and isinstance(value, str):
        value = qualify(value)
    return replace(resolved, column=qualify(resolved.column), value=value)


def qualify_contributor(
    contributor: FilterContributor | None,
    qualify: Callable[[str], str],
) -> FilterContributor | None:
    if contributor is None:
        return None

    def qualified(offset: int, placeholder: str, in_sequence: bool):
        fragments, args = contributor(offset, placeholder, in_sequence)
        return [qualify(f) for f in fragments or []], args

    return qualified


class StatementAssembler:
    """Assembles parameterized or literal SQL from a :class:`StatementSpec`.

    The assembler is stateless; one instance may serve any number of specs.
    """

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def build(self, spec: StatementSpec) -> CompiledStatement:
        """Build parameterized SQL and its bound arguments.

        Args:
            spec: The builder state.

        Returns:
            :class:`~brickstmt.compile.base.CompiledStatement` whose ``args``
            line up with the placeholders in ``sql``.

        Raises:
            StatementError: (or subclass) if the builder state cannot be assembled.
        """
        renderer = ParameterRenderer(spec.dialect, spec.parameter_offset)
        return self._assemble(spec, renderer)

    def build_literal(self, spec: StatementSpec) -> CompiledStatement:
        """Build SQL with every value inlined as a literal; ``args`` is empty.

        Raises:
            StatementError: (or subclass) if the builder state cannot be assembled.
        """
        renderer = LiteralRenderer(spec.dialect, spec.parameter_offset)
        return self._assemble(spec, renderer)

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------

    def _assemble(self, spec: StatementSpec, renderer: ValueRenderer) -> CompiledStatement:
        self._validate(spec)

        qualify = table_qualifier_func(spec)
        ctx = CompilationContext(
            dialect=spec.dialect, command=spec.command, source=qualify(spec.source)
        )
        values = [
            qualify_value(resolve_value(v, spec.skip_nil_write), qualify) for v in spec.values
        ]
        filters = [
            replace(f, expression=qualify(f.expression))
            for f in map(resolve_filter, spec.filters)
        ]
        contributor = qualify_contributor(spec.filter_func, qualify)

        parts = [self._build_head(ctx, spec, values, renderer)]
        if ctx.has_where:
            parts.append(WhereClauseBuilder(ctx, renderer).build(filters, contributor))
        groups = [qualify(g) for g in spec.groups]
        sorts = [Sort(qualify(s.column), s.direction) for s in spec.sorts]
        parts.append(GroupByClauseBuilder().build(groups))
        parts.append(OrderByClauseBuilder().build(sorts))
        parts.append(LimitClauseBuilder(ctx).build(spec.result_limit))

        sql = " ".join(p for p in parts if p) + ";"

        logger.debug(
            "Built %s on %s with %d bound argument(s), parameter offset %d",
            spec.command.value,
            spec.source,
            len(renderer.args),
            renderer.offset,
        )
        return CompiledStatement(
            sql=sql,
            args=renderer.args,
            command=spec.command,
            parameter_offset=renderer.offset,
        )

    @staticmethod
    def _validate(spec: StatementSpec) -> None:
        if not spec.source:
            raise MissingSourceError()
        command = spec.command
        if command is not CommandType.DELETE and not spec.columns:
            raise MissingColumnsError(spec.source, command.value)
        if command is CommandType.SELECT:
            return
        if spec.sorts:
            raise UnsupportedClauseError("ORDER BY", command.value)
        if spec.groups:
            raise UnsupportedClauseError("GROUP BY", command.value)
        if spec.result_limit:
            raise UnsupportedClauseError("Result limit", command.value)

    @staticmethod
    def _build_head(
        ctx: CompilationContext,
        spec: StatementSpec,
        values: list[ResolvedValue],
        renderer: ValueRenderer,
    ) -> str:
        if ctx.command is CommandType.SELECT:
            return SelectClauseBuilder(ctx).build(values, spec.distinct, spec.result_limit)
        if ctx.command is CommandType.INSERT:
            return InsertClauseBuilder(ctx, renderer).build(values)
        if ctx.command is CommandType.UPDATE:
            return UpdateClauseBuilder(ctx, renderer).build(values)
        return DeleteClauseBuilder(ctx).build()


def build(spec: StatementSpec) -> CompiledStatement:
    """Build parameterized SQL for ``spec`` (see :meth:`StatementAssembler.build`)."""
    return StatementAssembler().build(spec)


def build_literal(spec: StatementSpec) -> CompiledStatement:
    """Build literal SQL for ``spec`` (see :meth:`StatementAssembler.build_literal`)."""
    return StatementAssembler().build_literal(spec)
