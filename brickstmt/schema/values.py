"""Value normalization: reduce caller-supplied values to a known scalar.

Callers hand the builder whatever they hold: plain scalars, ``None``, or a
:class:`Ref` box standing in for a value that may or may not be set (the
equivalent of a nullable pointer).  :func:`normalize` turns every input
into either ``None`` (absent) or one of the scalars listed in
:class:`ScalarKind`.

Unwrapping is deliberately shallow::

    normalize(Ref(5))            # 5
    normalize(Ref(Ref(5)))       # 5   (outer box, then one dereference)
    normalize(Ref(Ref(Ref(5))))  # None
    normalize({"a": 1})          # None (unrecognized kinds are absent)
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Union


class VarChar(str):
    """A database ``VARCHAR`` string."""


class VarCharMax(str):
    """A database ``VARCHAR(MAX)`` string."""


class NVarCharMax(str):
    """A database ``NVARCHAR(MAX)`` string."""


@dataclass
class Ref:
    """A mutable box around an optional value.

    ``Ref(None)`` is absent; ``Ref(x)`` normalizes to ``x`` when ``x`` is a
    recognized scalar (or a ``Ref`` to one).
    """

    value: Any = None


class ScalarKind(str, Enum):
    """Closed set of value kinds the assembler knows how to render."""

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    TIMESTAMP = "timestamp"
    BYTES = "bytes"
    DECIMAL = "decimal"


#: A normalized value.  ``None`` stands for *absent*.
Scalar = Union[str, int, float, bool, datetime, date, bytes, Decimal]

_SCALAR_TYPES: tuple[type, ...] = (
    str, bool, int, float, datetime, date, bytes, bytearray, Decimal,
)


def normalize(value: Any) -> Scalar | None:
    """Return the concrete scalar behind ``value`` or ``None`` when absent."""
    if value is None:
        return None
    if isinstance(value, Ref):
        if value.value is None:
            return None
        return _classify(value.value)
    return _classify(value)


def _classify(value: Any) -> Scalar | None:
    if isinstance(value, Ref):
        inner = value.value
        if inner is None or isinstance(inner, Ref):
            return None
        return _scalar_or_none(inner)
    return _scalar_or_none(value)


def _scalar_or_none(value: Any) -> Scalar | None:
    if isinstance(value, bytearray):
        return bytes(value)
    if isinstance(value, _SCALAR_TYPES):
        return value
    return None


def scalar_kind(value: Scalar) -> ScalarKind:
    """Classify a normalized value.

    Raises:
        TypeError: If ``value`` is not a normalized scalar.
    """
    # bool before int: bool is an int subclass.
    if isinstance(value, bool):
        return ScalarKind.BOOLEAN
    if isinstance(value, int):
        return ScalarKind.INTEGER
    if isinstance(value, float):
        return ScalarKind.FLOAT
    if isinstance(value, Decimal):
        return ScalarKind.DECIMAL
    if isinstance(value, str):
        return ScalarKind.STRING
    if isinstance(value, (datetime, date)):
        return ScalarKind.TIMESTAMP
    if isinstance(value, (bytes, bytearray)):
        return ScalarKind.BYTES
    raise TypeError(f"Not a normalized scalar: {type(value).__name__}")


def values_match(left: Scalar, right: Scalar) -> bool:
    """Return True when two normalized scalars are of one kind and equal.

    ``0`` does not match ``False`` and ``1`` does not match ``1.0``.
    """
    return scalar_kind(left) is scalar_kind(right) and left == right
