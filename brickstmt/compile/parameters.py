"""Placeholder emission and bound-argument collection."""
from __future__ import annotations

from typing import Any

from brickstmt.compile.base import ValueRenderer
from brickstmt.schema.dialect import EngineDialect
from brickstmt.schema.values import Scalar


class ParameterRenderer(ValueRenderer):
    """Accumulates bound arguments during a single parameterized build.

    One instance is threaded through every clause builder so that the
    placeholder counter is shared by column values, filters and the
    external filter contributor, and so that ``args`` stays in placeholder
    order.

    Args:
        dialect: Supplies the placeholder token and numbering flag.
        offset: Counter seed; the first numbered placeholder is
            ``offset + 1``.
    """

    def __init__(self, dialect: EngineDialect, offset: int = 0) -> None:
        self._dialect = dialect
        self._offset = offset
        self._args: list[Any] = []

    def bind(self, value: Scalar) -> str:
        self._args.append(value)
        if not self._dialect.parameter_in_sequence:
            return self._dialect.placeholder()
        self._offset += 1
        return self._dialect.placeholder(self._offset)

    def contribute(self, args: list[Any]) -> None:
        # The contributor numbered its own placeholders from our offset.
        self._args.extend(args)
        if self._dialect.parameter_in_sequence:
            self._offset += len(args)

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def args(self) -> list[Any]:
        return self._args
