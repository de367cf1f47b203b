"""Fluent statement builder.

``StatementBuilder`` is the mutable, chainable front end over a
:class:`~brickstmt.schema.spec.StatementSpec`.  Registration calls mutate
the state; :meth:`StatementBuilder.build` hands it to the
:class:`~brickstmt.compile.assembler.StatementAssembler`.

Example::

    qb = StatementBuilder.update("{users}", schema="sales")
    qb.add_value("UserName", "john.doe").add_value("MiddleName", None)
    qb.add_filter("Id", 123)
    sql, args = qb.build()
    # UPDATE sales.users SET UserName = ? WHERE Id = ?;   ["john.doe", 123]

Not thread-safe: a builder is meant to be filled and built by one caller.
"""

from __future__ import annotations

from typing import Any

from brickstmt.compile.assembler import StatementAssembler
from brickstmt.compile.base import CompiledStatement, wrap_count
from brickstmt.compile.literal import LiteralRenderer
from brickstmt.compile.registry import DialectRegistry
from brickstmt.schema.dialect import DatabaseInfo, EngineDialect
from brickstmt.schema.spec import FilterContributor, StatementSpec
from brickstmt.schema.statement import (
    Column,
    CommandType,
    Filter,
    Sort,
    SortDirection,
    ValueEntry,
)
from brickstmt.utils.logging import get_logger

logger = get_logger("compile.builder")

#: Advisory column lengths used by the registration helpers.
DEFAULT_COLUMN_LENGTH = 255
VALUE_COLUMN_LENGTH = 8000


class StatementBuilder:
    """Builds SELECT, INSERT, UPDATE and DELETE statements.

    Args:
        source: Table, view or joined-source name.  ``{Name}`` tokens are
            qualified at build time when interpolation is on.
        command: Statement kind.
        dialect: An :class:`EngineDialect`, or the name of a registered
            preset.  Defaults to the dialect derived from ``database_info``.
        database_info: Application database configuration.
        schema: Shortcut for ``database_info.schema_name``.
        reference_mode: Shortcut for ``database_info.reference_mode``.
        reference_prefix: Shortcut for ``database_info.reference_prefix``.
        distinct: Emit ``SELECT DISTINCT``.
        interpolate: Rewrite ``{Name}`` tokens in source, columns and expressions.
        skip_nil_write: Omit absent-valued columns from INSERT/UPDATE.
        result_limit: Row limit text, e.g. ``"10"``.
        parameter_offset: Seed for numbered placeholders.
        filter_func: External filter contributor.
        assembler: Assembler instance; defaults to a fresh one.
    """

    def __init__(
        self,
        source: str = "",
        command: CommandType = CommandType.SELECT,
        *,
        dialect: EngineDialect | str | None = None,
        database_info: DatabaseInfo | None = None,
        schema: str | None = None,
        reference_mode: bool | None = None,
        reference_prefix: str | None = None,
        distinct: bool = False,
        interpolate: bool = True,
        skip_nil_write: bool = True,
        result_limit: str = "",
        parameter_offset: int = 0,
        filter_func: FilterContributor | None = None,
        assembler: StatementAssembler | None = None,
    ) -> None:
        database_info = _merge_database_info(
            database_info, schema, reference_mode, reference_prefix
        )
        self._spec = StatementSpec(
            source=source,
            command=CommandType(command),
            dialect=_resolve_dialect(dialect, database_info),
            database_info=database_info,
            distinct=distinct,
            interpolate=interpolate,
            skip_nil_write=skip_nil_write,
            result_limit=result_limit,
            parameter_offset=parameter_offset,
            filter_func=filter_func,
        )
        self._assembler = assembler or StatementAssembler()

    # ------------------------------------------------------------------
    # Shortcut constructors
    # ------------------------------------------------------------------

    @classmethod
    def select(cls, source: str, **options: Any) -> StatementBuilder:
        """Builder for a SELECT on a table, view or joined source."""
        return cls(source, CommandType.SELECT, **options)

    @classmethod
    def insert(cls, table: str, **options: Any) -> StatementBuilder:
        return cls(table, CommandType.INSERT, **options)

    @classmethod
    def update(cls, table: str, **options: Any) -> StatementBuilder:
        return cls(table, CommandType.UPDATE, **options)

    @classmethod
    def delete(cls, table: str, **options: Any) -> StatementBuilder:
        return cls(table, CommandType.DELETE, **options)

    def spawn(
        self,
        source: str,
        command: CommandType = CommandType.SELECT,
        **options: Any,
    ) -> StatementBuilder:
        """Create a fresh builder sharing this builder's engine settings.

        Dialect, database info, interpolation and the skip-nil policy are
        carried over; columns, filters, limits and the parameter offset are
        not.  ``options`` override the carried settings.
        """
        carried: dict[str, Any] = {
            "dialect": self._spec.dialect,
            "database_info": self._spec.database_info,
            "interpolate": self._spec.interpolate,
            "skip_nil_write": self._spec.skip_nil_write,
            "assembler": self._assembler,
        }
        carried.update(options)
        return type(self)(source, command, **carried)

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------

    @property
    def spec(self) -> StatementSpec:
        """The underlying builder state."""
        return self._spec

    @property
    def source(self) -> str:
        return self._spec.source

    @property
    def command(self) -> CommandType:
        return self._spec.command

    @property
    def dialect(self) -> EngineDialect:
        return self._spec.dialect

    @property
    def result_limit(self) -> str:
        return self._spec.result_limit

    @result_limit.setter
    def result_limit(self, value: str) -> None:
        self._spec.result_limit = value

    @property
    def parameter_offset(self) -> int:
        """Placeholder counter seed; advanced by every :meth:`build`."""
        return self._spec.parameter_offset

    @parameter_offset.setter
    def parameter_offset(self, value: int) -> None:
        self._spec.parameter_offset = value

    @property
    def filter_func(self) -> FilterContributor | None:
        return self._spec.filter_func

    @filter_func.setter
    def filter_func(self, func: FilterContributor | None) -> None:
        self._spec.filter_func = func

    # ------------------------------------------------------------------
    # Columns and values
    # ------------------------------------------------------------------

    def add_column(self, name: str) -> StatementBuilder:
        """Register a column.  Ignored for DELETE."""
        return self.add_column_fixed(name, DEFAULT_COLUMN_LENGTH)

    def add_column_fixed(self, name: str, length: int) -> StatementBuilder:
        """Register a column with an advisory length.  Ignored for DELETE."""
        if self._spec.command is CommandType.DELETE:
            return self
        self._set_value(self._add_column(name, length), None, True, None, None)
        return self

    def add_value(
        self,
        name: str,
        value: Any,
        *,
        sql_string: bool = True,
        default: Any = None,
        match_to_null: Any = None,
    ) -> StatementBuilder:
        """Register a column together with its value.

        Args:
            name: Column name; re-adding a name overwrites its value slot.
            value: The value (scalar, ``None`` or :class:`Ref`).
            sql_string: ``True`` binds the value as a parameter; ``False``
                inserts it verbatim as a SQL fragment (e.g. ``"GETDATE()"``).
            default: Used when ``value`` is absent.
            match_to_null: When the effective value equals this, NULL is
                written instead.
        """
        index = self._add_column(name, VALUE_COLUMN_LENGTH)
        self._set_value(index, value, sql_string, default, match_to_null)
        return self

    def set_column_value(self, name: str, value: Any) -> StatementBuilder:
        """Replace the value of an already registered column.

        Unknown names and DELETE builders are left untouched.
        """
        if self._spec.command is CommandType.DELETE:
            return self
        for entry in self._spec.values:
            if entry.column.lower() == name.lower():
                entry.value = value
                entry.is_parameter = True
                entry.default = None
                entry.match_to_null = None
                break
        return self

    def escape(self, text: str) -> str:
        """Escape the string enclosing character inside ``text``."""
        return LiteralRenderer(self._spec.dialect).escape(text)

    # ------------------------------------------------------------------
    # Filters, ordering, grouping
    # ------------------------------------------------------------------

    def add_filter(self, expression: str, value: Any) -> StatementBuilder:
        """Add ``expression = <value>``, or ``expression IS NULL`` when absent."""
        self._spec.filters.append(Filter(expression=expression, value=value))
        return self

    def add_filter_exp(self, expression: str) -> StatementBuilder:
        """Add a filter expression used verbatim (e.g. ``"Age > 18"``)."""
        self._spec.filters.append(Filter(expression=expression, expression_only=True))
        return self

    def add_order(
        self,
        column: str,
        direction: SortDirection | str = SortDirection.ASC,
    ) -> StatementBuilder:
        self._spec.sorts.append(Sort(column=column, direction=SortDirection(direction)))
        return self

    def add_group(self, group: str) -> StatementBuilder:
        self._spec.groups.append(group)
        return self

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------

    def build(self) -> CompiledStatement:
        """Build parameterized SQL.

        The builder's ``parameter_offset`` is advanced to the counter value
        after this statement, so a second builder seeded with it (or a
        second call) continues the numbering.

        Raises:
            StatementError: (or subclass) if the statement cannot be built.
        """
        compiled = self._assembler.build(self._spec)
        self._spec.parameter_offset = compiled.parameter_offset
        return compiled

    def build_literal(self) -> str:
        """Build SQL with all values inlined as literals.

        Raises:
            StatementError: (or subclass) if the statement cannot be built.
        """
        return self._assembler.build_literal(self._spec).sql

    def build_count(self, alias: str = "_count") -> CompiledStatement:
        """Build this SELECT wrapped in ``SELECT COUNT(*) FROM (…) AS alias``.

        Raises:
            UnsupportedClauseError: If the builder is not a SELECT.
        """
        return wrap_count(self.build(), alias)

    # ------------------------------------------------------------------
    # Registry internals
    # ------------------------------------------------------------------

    def _add_column(self, name: str, length: int) -> int:
        for index, column in enumerate(self._spec.columns):
            if column.name.lower() == name.lower():
                return index
        self._spec.columns.append(Column(name=name, length=length))
        return len(self._spec.columns) - 1

    def _set_value(
        self,
        index: int,
        value: Any,
        is_parameter: bool,
        default: Any,
        match_to_null: Any,
    ) -> None:
        name = self._spec.columns[index].name
        for entry in self._spec.values:
            if entry.column.lower() == name.lower():
                entry.value = value
                entry.is_parameter = is_parameter
                entry.default = default
                entry.match_to_null = match_to_null
                return
        self._spec.values.append(
            ValueEntry(
                column=name,
                value=value,
                default=default,
                match_to_null=match_to_null,
                is_parameter=is_parameter,
            )
        )


def _merge_database_info(
    info: DatabaseInfo | None,
    schema: str | None,
    reference_mode: bool | None,
    reference_prefix: str | None,
) -> DatabaseInfo | None:
    update: dict[str, Any] = {}
    if schema is not None:
        update["schema_name"] = schema
    if reference_mode is not None:
        update["reference_mode"] = reference_mode
    if reference_prefix:
        update["reference_prefix"] = reference_prefix
    if not update:
        return info
    if info is None:
        logger.warning(
            "DatabaseInfo was not explicitly set; using engine defaults for %s",
            ", ".join(sorted(update)),
        )
        return DatabaseInfo(**update)
    return info.model_copy(update=update)


def _resolve_dialect(
    dialect: EngineDialect | str | None,
    info: DatabaseInfo | None,
) -> EngineDialect:
    if isinstance(dialect, str):
        return DialectRegistry.create(dialect)
    if dialect is not None:
        return dialect
    return EngineDialect.from_database_info(info)
