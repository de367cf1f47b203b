"""brickstmt schema models: dialect, builder state records, value kinds."""
from brickstmt.schema.dialect import DatabaseInfo, DialectProfileBuilder, EngineDialect
from brickstmt.schema.statement import (
    Column,
    CommandType,
    Filter,
    LimitPosition,
    Sort,
    SortDirection,
    ValueEntry,
)
from brickstmt.schema.values import (
    NVarCharMax,
    Ref,
    ScalarKind,
    VarChar,
    VarCharMax,
    normalize,
    scalar_kind,
)

__all__ = [
    "DatabaseInfo",
    "DialectProfileBuilder",
    "EngineDialect",
    "Column",
    "CommandType",
    "Filter",
    "LimitPosition",
    "Sort",
    "SortDirection",
    "ValueEntry",
    "NVarCharMax",
    "Ref",
    "ScalarKind",
    "VarChar",
    "VarCharMax",
    "normalize",
    "scalar_kind",
]
