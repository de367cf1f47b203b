"""Pydantic models for the engine dialect and database configuration.

The ``EngineDialect`` carries the handful of engine-specific constants the
assembler needs: string quoting, reserved-word escaping, the parameter
placeholder token and whether placeholders are numbered, and where the row
limit goes.  ``DatabaseInfo`` is the configuration object an application
usually owns (loaded from its own settings) and from which a dialect can
be derived.

Create a dialect through the builder, or take one of the presets from
:class:`~brickstmt.compile.registry.DialectRegistry`::

    from brickstmt import EngineDialect

    # PostgreSQL-style numbered placeholders: $1, $2, ...
    dialect = EngineDialect.builder().placeholder("$", numbered=True).build()

    # SQL Server: @p1, @p2, ... and SELECT TOP n
    dialect = (
        EngineDialect.builder()
        .placeholder("@p", numbered=True)
        .quoting(reserved_word_escape="[]")
        .limit_front()
        .build()
    )
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from brickstmt.errors import ProfileConfigError
from brickstmt.schema.statement import LimitPosition

_DEFAULT_RESERVED_WORD_ESCAPE = '"'


def parse_reserved_word_chars(chars: str) -> tuple[str, str]:
    """Return the opening and closing reserved-word escape characters.

    A single character is used on both sides; ``"[]"`` yields ``("[", "]")``;
    an empty string falls back to double quotes.
    """
    if len(chars) == 1:
        return chars, chars
    if len(chars) >= 2:
        return chars[0], chars[1]
    return _DEFAULT_RESERVED_WORD_ESCAPE, _DEFAULT_RESERVED_WORD_ESCAPE


class EngineDialect(BaseModel):
    """Engine constants consumed by the assembler.

    Attributes:
        string_enclosing_char: Encloses string literals (literal mode).
        string_escape_char: Prefixed to an enclosing char inside a string.
        reserved_word_escape: One char, or an opening/closing pair (``[]``).
        parameter_placeholder: Placeholder token for prepared statements.
        parameter_in_sequence: Append a running number to each placeholder.
        result_limit_position: ``FRONT`` (``TOP n``) or ``REAR`` (``LIMIT n``).
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    string_enclosing_char: str = "'"
    string_escape_char: str = "\\"
    reserved_word_escape: str = _DEFAULT_RESERVED_WORD_ESCAPE
    parameter_placeholder: str = "?"
    parameter_in_sequence: bool = False
    result_limit_position: LimitPosition = LimitPosition.REAR

    @field_validator("string_enclosing_char", "parameter_placeholder")
    @classmethod
    def _not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("must not be empty")
        return value

    @property
    def reserved_word_chars(self) -> tuple[str, str]:
        """Opening and closing reserved-word escape characters."""
        return parse_reserved_word_chars(self.reserved_word_escape)

    def quote_identifier(self, name: str) -> str:
        """Return ``name`` enclosed in the reserved-word escape characters."""
        opening, closing = self.reserved_word_chars
        return f"{opening}{name}{closing}"

    def placeholder(self, number: int | None = None) -> str:
        """Return the placeholder token, suffixed with ``number`` when numbered."""
        if self.parameter_in_sequence and number is not None:
            return f"{self.parameter_placeholder}{number}"
        return self.parameter_placeholder

    @classmethod
    def builder(cls) -> "DialectProfileBuilder":
        """Return a :class:`DialectProfileBuilder` starting from the defaults."""
        return DialectProfileBuilder()

    @classmethod
    def from_database_info(cls, info: "DatabaseInfo | None") -> "EngineDialect":
        """Derive a dialect from ``info``; unset or empty settings keep defaults."""
        if info is None:
            return cls()
        overrides: dict[str, object] = {}
        for name in (
            "string_enclosing_char",
            "string_escape_char",
            "reserved_word_escape",
            "parameter_placeholder",
        ):
            setting = getattr(info, name)
            if setting:
                overrides[name] = setting
        if info.parameter_in_sequence is not None:
            overrides["parameter_in_sequence"] = info.parameter_in_sequence
        if info.result_limit_position is not None:
            overrides["result_limit_position"] = info.result_limit_position
        return cls(**overrides)


class DatabaseInfo(BaseModel):
    """Application-side database configuration.

    Only the fields relevant to statement assembly are modelled.  Every
    engine constant is optional; :meth:`EngineDialect.from_database_info`
    falls back to the defaults for anything left unset.

    Attributes:
        schema_name: Qualifier for ``{Table}`` tokens; wins over reference mode.
        reference_mode: Qualify ``{Table}`` tokens with ``reference_prefix``.
        reference_prefix: Prefix used in reference mode (``_`` is appended).
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    schema_name: str | None = Field(default=None, alias="schema")
    reference_mode: bool = False
    reference_prefix: str = "ref"
    string_enclosing_char: str | None = None
    string_escape_char: str | None = None
    reserved_word_escape: str | None = None
    parameter_placeholder: str | None = None
    parameter_in_sequence: bool | None = None
    result_limit_position: LimitPosition | None = None

    def table_qualifier(self) -> str:
        """Resolve the qualifier used when interpolating ``{Table}`` tokens."""
        if self.schema_name:
            return self.schema_name
        if self.reference_mode and self.reference_prefix:
            prefix = self.reference_prefix
            return prefix if prefix.endswith("_") else f"{prefix}_"
        return ""


class DialectProfileBuilder:
    """Fluent builder for :class:`EngineDialect`.

    Always obtained via :meth:`EngineDialect.builder`.  Each method sets one
    group of engine constants; they can be called in any order.
    """

    def __init__(self) -> None:
        self._enclosing = "'"
        self._escape = "\\"
        self._reserved = _DEFAULT_RESERVED_WORD_ESCAPE
        self._placeholder = "?"
        self._numbered = False
        self._limit_position = LimitPosition.REAR

    def placeholder(self, token: str, numbered: bool = False) -> "DialectProfileBuilder":
        """Set the placeholder token (``?``, ``$``, ``@p``, ``:``)."""
        self._placeholder = token
        self._numbered = numbered
        return self

    def quoting(
        self,
        enclosing: str | None = None,
        escape: str | None = None,
        reserved_word_escape: str | None = None,
    ) -> "DialectProfileBuilder":
        """Set string-literal quoting and reserved-word escaping."""
        if enclosing is not None:
            self._enclosing = enclosing
        if escape is not None:
            self._escape = escape
        if reserved_word_escape is not None:
            self._reserved = reserved_word_escape
        return self

    def limit_front(self) -> "DialectProfileBuilder":
        """Render the row limit as ``SELECT TOP n``."""
        self._limit_position = LimitPosition.FRONT
        return self

    def limit_rear(self) -> "DialectProfileBuilder":
        """Render the row limit as a trailing ``LIMIT n``."""
        self._limit_position = LimitPosition.REAR
        return self

    def build(self) -> EngineDialect:
        """Validate the configuration and return the :class:`EngineDialect`.

        Raises:
            ProfileConfigError: When a setting would make every statement
                built with this dialect unusable.
        """
        self._validate()
        return EngineDialect(
            string_enclosing_char=self._enclosing,
            string_escape_char=self._escape,
            reserved_word_escape=self._reserved,
            parameter_placeholder=self._placeholder,
            parameter_in_sequence=self._numbered,
            result_limit_position=self._limit_position,
        )

    def _validate(self) -> None:
        if not self._placeholder:
            raise ProfileConfigError(
                "Parameter placeholder must not be empty.",
                setting="parameter_placeholder",
            )
        if not self._enclosing:
            raise ProfileConfigError(
                "String enclosing character must not be empty.",
                setting="string_enclosing_char",
            )
        if len(self._reserved) > 2:
            raise ProfileConfigError(
                f"Reserved word escape must be one character or an "
                f"opening/closing pair, got '{self._reserved}'.",
                setting="reserved_word_escape",
            )
