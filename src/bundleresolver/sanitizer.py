"""Free-text sanitization for tabular output."""

import re
import unicodedata

_WHITESPACE_RE = re.compile(r"\s+")


def sanitize(value: str) -> str:
    """Sanitize a free-text field for a single output cell.

    - Collapses every whitespace run (tabs and newlines included) to one space
    - Removes control and format characters (e.g. bidi embedding marks)
    - Strips leading/trailing whitespace

    Args:
        value: Input string

    Returns:
        Sanitized string, empty for empty input
    """
    if not value:
        return ""

    value = "".join(
        ch
        for ch in value
        if ch.isspace() or unicodedata.category(ch) not in ("Cc", "Cf")
    )
    value = _WHITESPACE_RE.sub(" ", value)
    return value.strip()
