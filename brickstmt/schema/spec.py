"""The complete builder state handed to the assembler."""
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from brickstmt.schema.dialect import DatabaseInfo, EngineDialect
from brickstmt.schema.statement import Column, CommandType, Filter, Sort, ValueEntry


#: External filter contribution: ``(offset, placeholder, numbered) -> (fragments, args)``.
FilterContributor = Callable[[int, str, bool], tuple[list[str], list[Any]]]


@dataclass
class StatementSpec:
    """Complete builder state consumed by the assembler.

    Attributes:
        source: Table, view or joined-source name.
        command: Statement kind.
        dialect: Engine constants.
        database_info: Optional configuration supplying the table qualifier.
        distinct: Emit ``SELECT DISTINCT``.
        columns: Registered columns in insertion order.
        values: One value slot per column, same order.
        filters: WHERE predicates in insertion order.
        sorts: ORDER BY items.
        groups: GROUP BY expressions.
        result_limit: Row limit text; empty means no limit.
        skip_nil_write: Omit absent-valued columns from INSERT/UPDATE.
        interpolate: Rewrite ``{Table}`` tokens after assembly.
        parameter_offset: Seed of the placeholder counter.
        filter_func: Optional external filter contributor.
    """

    source: str = ""
    command: CommandType = CommandType.SELECT
    dialect: EngineDialect = field(default_factory=EngineDialect)
    database_info: DatabaseInfo | None = None
    distinct: bool = False
    columns: list[Column] = field(default_factory=list)
    values: list[ValueEntry] = field(default_factory=list)
    filters: list[Filter] = field(default_factory=list)
    sorts: list[Sort] = field(default_factory=list)
    groups: list[str] = field(default_factory=list)
    result_limit: str = ""
    skip_nil_write: bool = True
    interpolate: bool = True
    parameter_offset: int = 0
    filter_func: FilterContributor | None = None

    def table_qualifier(self) -> str:
        """Qualifier for ``{Table}`` tokens: schema, then reference prefix."""
        if self.database_info is None:
            return ""
        return self.database_info.table_qualifier()
