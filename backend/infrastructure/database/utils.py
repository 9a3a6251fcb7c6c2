"""
Shared query helpers.
"""

LIKE_ESCAPE = "\\"


def escape_like(value: str) -> str:
    """Escape LIKE wildcards for safe use in SQL LIKE/ILIKE patterns."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def contains_pattern(value: str) -> str:
    """Substring pattern for ``ilike(..., escape=LIKE_ESCAPE)``."""
    return f"%{escape_like(value.strip())}%"
