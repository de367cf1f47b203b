"""Builder state records: columns, values, filters and sorts.

These are plain mutable dataclasses owned by
:class:`~brickstmt.compile.builder.StatementBuilder`.  The assembler never
writes to them; per-build resolution results live in
:class:`ResolvedValue`.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from brickstmt.schema.values import Scalar


class CommandType(str, Enum):
    """Statement kind."""

    SELECT = "SELECT"
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class SortDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


class LimitPosition(str, Enum):
    """Where the row limit goes: ``SELECT TOP n`` (FRONT) or ``LIMIT n`` (REAR)."""

    FRONT = "FRONT"
    REAR = "REAR"


@dataclass
class Column:
    """A registered column.  ``length`` is advisory only."""

    name: str
    length: int = 255


@dataclass
class ValueEntry:
    """Value slot for one column.

    Attributes:
        column: Column name, matched case-insensitively.
        value: Raw caller value (normalized at build time).
        default: Substituted when ``value`` normalizes to absent.
        match_to_null: When equal to the effective value, forces NULL.
        is_parameter: Render as placeholder / quoted literal when True;
            insert verbatim as a SQL fragment when False.
    """

    column: str
    value: Any = None
    default: Any = None
    match_to_null: Any = None
    is_parameter: bool = True


@dataclass
class Filter:
    """A WHERE predicate.

    With ``expression_only`` the expression is emitted verbatim.  Otherwise
    a present value renders ``expression = <ph>`` and an absent one renders
    ``expression IS NULL``.
    """

    expression: str
    value: Any = None
    expression_only: bool = False


@dataclass
class Sort:
    column: str
    direction: SortDirection = SortDirection.ASC


@dataclass(frozen=True)
class ResolvedValue:
    """Outcome of resolving one :class:`ValueEntry` for a single build."""

    column: str
    value: Scalar | None
    is_parameter: bool
    is_null: bool
    force_null: bool
    skip: bool

    @property
    def rendered(self) -> bool:
        """True when the column takes part in INSERT/UPDATE output."""
        return not self.skip


@dataclass(frozen=True)
class ResolvedFilter:
    expression: str
    value: Scalar | None
    expression_only: bool
