"""Comparison conditions contributed to a statement's WHERE clause.

A :class:`ConditionSet` collects ``<column> <op> <value>`` conditions and
renders them on demand through the filter-contribution protocol::

    conds = ConditionSet().gte("Age", 18).in_("Status", ["A", "P"])
    qb = StatementBuilder.select("{users}", filter_func=conds.build_func)
    qb.add_column("Id").add_filter("Active", True)
    qb.build().sql
    # SELECT Id FROM users WHERE Active = ? AND Age >= ? AND Status IN (?, ?);

Placeholders are numbered from the offset the assembler passes in, so the
set can be reused across builders with different dialects.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from brickstmt.errors import StatementError
from brickstmt.schema.spec import FilterContributor
from brickstmt.schema.values import normalize


@dataclass(frozen=True)
class Condition:
    """One contributed condition.

    Attributes:
        column: Left-hand expression, used verbatim.
        operator: SQL operator (``=``, ``<>``, ``LIKE``, ``IN``, ``IS NULL`` …).
        values: Bound values; empty for ``IS [NOT] NULL``.
    """

    column: str
    operator: str
    values: tuple[Any, ...] = ()


@dataclass
class ConditionSet:
    """Mutable, chainable collection of :class:`Condition` objects."""

    conditions: list[Condition] = field(default_factory=list)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def _add(self, column: str, operator: str, *values: Any) -> ConditionSet:
        self.conditions.append(Condition(column, operator, tuple(values)))
        return self

    def eq(self, column: str, value: Any) -> ConditionSet:
        """``column = value``; an absent value becomes ``column IS NULL``."""
        if normalize(value) is None:
            return self.is_null(column)
        return self._add(column, "=", value)

    def ne(self, column: str, value: Any) -> ConditionSet:
        """``column <> value``; an absent value becomes ``column IS NOT NULL``."""
        if normalize(value) is None:
            return self.is_not_null(column)
        return self._add(column, "<>", value)

    def _compare(self, column: str, operator: str, value: Any) -> ConditionSet:
        if normalize(value) is None:
            raise StatementError(
                f"{operator} condition on '{column}' needs a value.",
                code="MISSING_CONDITION_VALUE",
                details={"column": column, "operator": operator},
            )
        return self._add(column, operator, value)

    def lt(self, column: str, value: Any) -> ConditionSet:
        return self._compare(column, "<", value)

    def lte(self, column: str, value: Any) -> ConditionSet:
        return self._compare(column, "<=", value)

    def gt(self, column: str, value: Any) -> ConditionSet:
        return self._compare(column, ">", value)

    def gte(self, column: str, value: Any) -> ConditionSet:
        return self._compare(column, ">=", value)

    def like(self, column: str, pattern: str) -> ConditionSet:
        return self._compare(column, "LIKE", pattern)

    def in_(self, column: str, values: list[Any] | tuple[Any, ...]) -> ConditionSet:
        """``column IN (…)``.

        Raises:
            StatementError: If ``values`` is empty; ``IN ()`` is not valid SQL.
        """
        if not values:
            raise StatementError(
                f"IN condition on '{column}' needs at least one value.",
                code="EMPTY_IN_LIST",
                details={"column": column},
            )
        return self._add(column, "IN", *values)

    def is_null(self, column: str) -> ConditionSet:
        return self._add(column, "IS NULL")

    def is_not_null(self, column: str) -> ConditionSet:
        return self._add(column, "IS NOT NULL")

    def __len__(self) -> int:
        return len(self.conditions)

    # ------------------------------------------------------------------
    # Contribution
    # ------------------------------------------------------------------

    def build(
        self,
        offset: int,
        placeholder: str,
        numbered: bool,
    ) -> tuple[list[str], list[Any]]:
        """Render every condition.

        Args:
            offset: Placeholder counter at the point of contribution.
            placeholder: The dialect's placeholder token.
            numbered: Whether placeholders carry a sequence number.

        Returns:
            ``(fragments, args)``; ``args`` lines up with the placeholders
            in ``fragments``.
        """
        fragments: list[str] = []
        args: list[Any] = []

        def bind(value: Any) -> str:
            args.append(normalize(value))
            if numbered:
                return f"{placeholder}{offset + len(args)}"
            return placeholder

        for cond in self.conditions:
            if not cond.values:
                fragments.append(f"{cond.column} {cond.operator}")
            elif cond.operator == "IN":
                items = ", ".join(bind(v) for v in cond.values)
                fragments.append(f"{cond.column} IN ({items})")
            else:
                fragments.append(f"{cond.column} {cond.operator} {bind(cond.values[0])}")
        return fragments, args

    @property
    def build_func(self) -> FilterContributor:
        """This set as a ``filter_func`` for :class:`StatementBuilder`."""
        return self.build
