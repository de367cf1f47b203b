"""brickstmt compilation layer: builder state → parameterized or literal SQL."""
from brickstmt.compile.assembler import StatementAssembler
from brickstmt.compile.base import CompiledStatement, ValueRenderer, wrap_count
from brickstmt.compile.builder import StatementBuilder
from brickstmt.compile.interpolate import interpolate_table
from brickstmt.compile.literal import LiteralRenderer
from brickstmt.compile.parameters import ParameterRenderer
from brickstmt.compile.registry import DialectRegistry

__all__ = [
    "CompiledStatement",
    "DialectRegistry",
    "LiteralRenderer",
    "ParameterRenderer",
    "StatementAssembler",
    "StatementBuilder",
    "ValueRenderer",
    "interpolate_table",
    "wrap_count",
]
