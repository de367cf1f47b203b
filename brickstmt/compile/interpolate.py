"""Table-name interpolation.

Sources and expressions may mark table names with braces, e.g.
``{Users}``.  At build time each token is replaced with the qualified
name (``sales.Users``) or, without a qualifier, just stripped of its
braces (``Users``).
"""
from __future__ import annotations

import re

_TABLE_TOKEN = re.compile(r'\{([a-zA-Z0-9\[\]"_\-]*)\}')


def interpolate_table(sql: str, qualifier: str = "") -> str:
    """Replace every ``{Name}`` token in ``sql``.

    Args:
        sql: Assembled statement text.
        qualifier: Schema or reference prefix; empty for no qualification.

    Returns:
        ``sql`` with ``{Name}`` rewritten to ``qualifier.Name`` or ``Name``.
    """
    prefix = f"{qualifier}." if qualifier else ""
    return _TABLE_TOKEN.sub(lambda m: prefix + m.group(1), sql)
