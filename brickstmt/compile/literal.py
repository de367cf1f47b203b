"""SQL literal rendering for literal-mode builds.

Literal mode inlines every value instead of emitting placeholders, which
is handy for logging, fixtures and tooling that cannot bind parameters.
Bound values are quoted and escaped per the dialect; raw fragments still go
in verbatim.
"""
from __future__ import annotations

import math
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from brickstmt.compile.base import NULL, ValueRenderer
from brickstmt.errors import StatementError
from brickstmt.schema.dialect import EngineDialect
from brickstmt.schema.values import Scalar


class LiteralRenderer(ValueRenderer):
    """Renders bound values as SQL literals.

    Args:
        dialect: Supplies the string enclosing and escape characters.
    """

    def __init__(self, dialect: EngineDialect, offset: int = 0) -> None:
        self._dialect = dialect
        self._offset = offset

    def escape(self, text: str) -> str:
        """Prefix every enclosing char in ``text`` with the escape char.

        When the escape char differs from the enclosing char (``\\`` vs
        ``'``) it is doubled first, so a trailing escape char in ``text``
        cannot swallow the escape of the following quote.
        """
        enclosing = self._dialect.string_enclosing_char
        escape = self._dialect.string_escape_char
        if not text:
            return text
        if escape and escape != enclosing:
            text = text.replace(escape, escape + escape)
        return text.replace(enclosing, escape + enclosing)

    def quote(self, text: str) -> str:
        enclosing = self._dialect.string_enclosing_char
        return f"{enclosing}{self.escape(text)}{enclosing}"

    def bind(self, value: Scalar | None) -> str:
        if value is None:
            return NULL
        if isinstance(value, bool):
            return "1" if value else "0"
        if isinstance(value, int):
            return str(value)
        if isinstance(value, Decimal):
            if not value.is_finite():
                raise _non_finite(value)
            return str(value)
        if isinstance(value, float):
            if not math.isfinite(value):
                raise _non_finite(value)
            return repr(value)
        if isinstance(value, str):
            return self.quote(value)
        if isinstance(value, datetime):
            return self.quote(value.isoformat(timespec="seconds"))
        if isinstance(value, date):
            return self.quote(value.isoformat())
        if isinstance(value, (bytes, bytearray)):
            return f"X'{bytes(value).hex().upper()}'"
        raise StatementError(
            f"Cannot render {type(value).__name__} as a SQL literal.",
            code="UNRENDERABLE_LITERAL",
            details={"type": type(value).__name__},
        )

    def contribute(self, args: list[Any]) -> None:
        if args:
            raise StatementError(
                "A filter contributor returned bound arguments; literal "
                "builds cannot carry them.",
                code="LITERAL_ARGUMENTS",
                details={"count": len(args)},
            )

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def args(self) -> list[Any]:
        return []


def _non_finite(value: float | Decimal) -> StatementError:
    return StatementError(
        f"Cannot render non-finite number {value!r} as a SQL literal.",
        code="UNRENDERABLE_LITERAL",
        details={"type": type(value).__name__, "value": str(value)},
    )
