"""Compilation context value object.

Packages the ``(dialect, command, source)`` data clump shared by the
assembler and every clause-level builder into a single object.
"""
from __future__ import annotations

from dataclasses import dataclass

from brickstmt.schema.dialect import EngineDialect
from brickstmt.schema.statement import CommandType


@dataclass(frozen=True)
class CompilationContext:
    """Immutable context for a single build.

    Attributes:
        dialect: Engine constants.
        command: Statement kind being built.
        source: Table or view name, before interpolation.
    """

    dialect: EngineDialect
    command: CommandType
    source: str

    @property
    def has_where(self) -> bool:
        """True for commands that carry a WHERE clause."""
        return self.command is not CommandType.INSERT
