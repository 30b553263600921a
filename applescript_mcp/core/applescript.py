"""AppleScript literal helpers.

Every value interpolated into a script template passes through this module,
so producers never hand-roll escaping.
"""
from __future__ import annotations


def escape_string(value: object) -> str:
    """Escape ``value`` for use inside an AppleScript double-quoted string.

    AppleScript string literals treat backslash as the escape character, so
    backslashes are doubled before double quotes are escaped.  ``None``
    becomes the empty string.
    """
    if value is None:
        return ""
    return str(value).replace("\\", "\\\\").replace('"', '\\"')


def quote(value: object) -> str:
    """Return ``value`` as a complete AppleScript string literal."""
    return f'"{escape_string(value)}"'


def boolean(value: object) -> str:
    """Render a truthy/falsy value as an AppleScript boolean literal."""
    return "true" if value else "false"


def escape_sql(value: str) -> str:
    """Escape a SQLite single-quoted literal (quotes doubled, line breaks flattened).

    The result still has to go through ``escape_string`` when it lands inside
    an AppleScript string.
    """
    return value.replace("'", "''").replace("\r", " ").replace("\n", " ")


def is_blank(value: str | None) -> bool:
    """True for ``None``, empty and whitespace-only strings."""
    return value is None or not value.strip()
