#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconvert/utils/text.py
"""Slug generation for heading anchors.

Examples
--------
    >>> from mdconvert.utils.text import slugify
    >>> seen = set()
    >>> slugify("My Heading", seen_slugs=seen)
    'my-heading'
    >>> slugify("My Heading", seen_slugs=seen)
    'my-heading-2'

"""

from __future__ import annotations

import re
import unicodedata
from typing import Set

from mdconvert.constants import DEFAULT_SLUG_MAX_LENGTH


def slugify(text: str, *, seen_slugs: Set[str] | None = None, max_length: int = DEFAULT_SLUG_MAX_LENGTH) -> str:
    """Create a URL-safe anchor slug from heading text.

    Accents are stripped, the text is lower-cased, whitespace and
    underscores become hyphens and every other non-alphanumeric character
    is dropped. Text with nothing left becomes ``"section"``.

    Parameters
    ----------
    text : str
        Plain heading text
    seen_slugs : Set[str] or None, default = None
        Slugs already handed out in this document. When given, a colliding
        slug gets a ``-2``, ``-3``, ... suffix and the result is added to the set.
    max_length : int
        Maximum length of the slug before any collision suffix

    Returns
    -------
    str
        URL-safe slug, unique within ``seen_slugs`` if provided

    Examples
    --------
        >>> slugify("API Reference (v2.0)")
        'api-reference-v20'
        >>> slugify("Café résumé")
        'cafe-resume'

    """
    normalized = unicodedata.normalize("NFD", text)
    normalized = "".join(char for char in normalized if unicodedata.category(char) != "Mn")

    slug = normalized.lower()
    slug = re.sub(r"[\s_]+", "-", slug)
    slug = re.sub(r"[^\w\-]", "", slug, flags=re.ASCII)
    slug = slug.replace("_", "")
    slug = re.sub(r"-+", "-", slug).strip("-")

    if not slug:
        slug = "section"

    if len(slug) > max_length:
        slug = slug[:max_length].rstrip("-")

    if seen_slugs is None:
        return slug

    unique_slug = slug
    counter = 2
    while unique_slug in seen_slugs:
        unique_slug = f"{slug}-{counter}"
        counter += 1
    seen_slugs.add(unique_slug)
    return unique_slug


__all__ = ["slugify"]
