"""Engine dialect registry (Open/Closed Principle).

Built-in presets are registered once at import time; applications add
their own without touching this module.

Usage::

    from brickstmt.compile.registry import DialectRegistry

    DialectRegistry.register(
        "snowflake",
        EngineDialect(parameter_placeholder="?", string_escape_char="\\\\"),
    )
    dialect = DialectRegistry.create("snowflake")
"""

from __future__ import annotations

from typing import ClassVar

from brickstmt.errors import ProfileConfigError
from brickstmt.schema.dialect import EngineDialect


class DialectRegistry:
    """Registry mapping engine names to :class:`EngineDialect` presets.

    Example::

        dialect = DialectRegistry.create("sqlserver")
        dialect.placeholder(1)   # '@p1'
    """

    _dialects: ClassVar[dict[str, EngineDialect]] = {}

    @classmethod
    def register(cls, name: str, dialect: EngineDialect) -> None:
        """Register ``dialect`` under ``name``, replacing any earlier entry.

        Args:
            name: Engine name (e.g. ``"postgres"``); matched case-insensitively.
            dialect: The preset to hand out.
        """
        cls._dialects[name.lower()] = dialect

    @classmethod
    def create(cls, name: str) -> EngineDialect:
        """Return the dialect registered for ``name``.

        Raises:
            ProfileConfigError: If no dialect is registered for ``name``.
        """
        dialect = cls._dialects.get(name.lower())
        if dialect is None:
            registered = sorted(cls._dialects)
            raise ProfileConfigError(
                f"Unknown engine dialect: '{name}'. Registered dialects: {registered}.",
                setting="dialect",
            )
        return dialect

    @classmethod
    def registered_targets(cls) -> list[str]:
        """Return the sorted list of registered dialect names."""
        return sorted(cls._dialects)


# ---------------------------------------------------------------------------
# Built-in presets
# ---------------------------------------------------------------------------

DialectRegistry.register("default", EngineDialect())
DialectRegistry.register(
    "sqlserver",
    EngineDialect.builder()
    .placeholder("@p", numbered=True)
    .quoting(escape="'", reserved_word_escape="[]")
    .limit_front()
    .build(),
)
DialectRegistry.register(
    "postgres",
    EngineDialect.builder().placeholder("$", numbered=True).quoting(escape="'").build(),
)
DialectRegistry.register(
    "mysql",
    EngineDialect.builder().placeholder("?").quoting(reserved_word_escape="`").build(),
)
DialectRegistry.register(
    "sqlite",
    EngineDialect.builder().placeholder("?").quoting(escape="'").build(),
)
DialectRegistry.register(
    "oracle",
    EngineDialect.builder().placeholder(":", numbered=True).quoting(escape="'").build(),
)
