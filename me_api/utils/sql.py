"""SQL helpers shared by repositories and search."""

LIKE_ESCAPE = "\\"


def contains_pattern(text: str) -> str:
    """Build a LIKE pattern matching ``text`` anywhere in a column.

    LIKE wildcards in ``text`` are escaped so they match literally; use with
    ``escape=LIKE_ESCAPE``.

    Examples:
        >>> contains_pattern("50%_off")
        '%50\\\\%\\\\_off%'
    """
    escaped = (
        text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"
