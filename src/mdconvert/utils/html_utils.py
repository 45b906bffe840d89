#  Copyright (c) 2025 Tom Villani, Ph.D.
"""HTML escaping and URL helpers used by the renderer."""

from __future__ import annotations

import re
from urllib.parse import quote

from mdconvert.constants import DANGEROUS_SCHEMES, SAFE_DATA_IMAGE_PREFIXES

_SCHEME_PATTERN = re.compile(r"^([A-Za-z][A-Za-z0-9+.\-]{1,31}):")

# Characters left as-is when percent-encoding a link destination
_URL_SAFE_CHARS = ";/?:@&=+$,-_.!~*'()#%[]"

_TEXT_ESCAPES = str.maketrans({"&": "&amp;", "<": "&lt;", ">": "&gt;"})
_ATTRIBUTE_ESCAPES = str.maketrans({"&": "&amp;", "<": "&lt;", ">": "&gt;", '"': "&quot;"})


def escape_html(text: str, *, enabled: bool = True) -> str:
    """Escape ``&``, ``<`` and ``>`` for use in element content."""
    if not enabled:
        return text
    return text.translate(_TEXT_ESCAPES)


def escape_attribute(value: str) -> str:
    """Escape a value for a double-quoted attribute (also escapes ``"``)."""
    return value.translate(_ATTRIBUTE_ESCAPES)


def normalize_url(url: str) -> str:
    """Percent-encode characters that may not appear raw in an ``href``.

    Existing ``%XX`` escapes and URL delimiters are preserved, so normalizing
    twice gives the same result.

    Examples
    --------
    >>> normalize_url("my file.md")
    'my%20file.md'

    """
    return quote(url, safe=_URL_SAFE_CHARS)


def is_dangerous_url(url: str) -> bool:
    """Return True if the URL uses a scheme that can execute code or read local files.

    ``data:`` URLs are allowed only for common raster image types.
    """
    match = _SCHEME_PATTERN.match(url.strip())
    if not match:
        return False
    scheme = match.group(1).lower()
    if scheme not in DANGEROUS_SCHEMES:
        return False
    if scheme == "data":
        return not url.strip().lower().startswith(SAFE_DATA_IMAGE_PREFIXES)
    return True


__all__ = ["escape_html", "escape_attribute", "normalize_url", "is_dangerous_url"]
