#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconvert/parsers/frontmatter.py
"""Front matter extraction.

A document may open with a metadata block fenced by ``---`` lines::

    ---
    title: Release notes
    author: Jane Doe
    ---

The block is read with ``yaml.safe_load``. When that fails, or yields
something other than a mapping, the block is read line by line as simple
``key: value`` pairs so a sloppy header still contributes metadata. Without
a closing ``---`` there is no front matter and the text is ordinary Markdown.
"""

from __future__ import annotations

import datetime
import logging
import re
from typing import Any, Sequence

import yaml

from mdconvert.constants import FRONTMATTER_DELIMITER

logger = logging.getLogger(__name__)

_KEY_VALUE_LINE = re.compile(r"^\s*([^:#\s][^:]*?)\s*:\s*(.*?)\s*$")


def find_frontmatter_end(lines: Sequence[str]) -> int | None:
    """Return the index of the closing delimiter line, or None if there is no front matter."""
    if not lines or lines[0].rstrip() != FRONTMATTER_DELIMITER:
        return None
    for index in range(1, len(lines)):
        if lines[index].rstrip() == FRONTMATTER_DELIMITER:
            return index
    return None


def extract_frontmatter(lines: Sequence[str]) -> tuple[dict[str, Any], int]:
    """Split a front matter block off the start of a document.

    Parameters
    ----------
    lines : Sequence[str]
        Document lines without line terminators

    Returns
    -------
    tuple[dict[str, Any], int]
        The metadata mapping and the number of lines the block used
        (including both delimiters). ``({}, 0)`` when the document has no
        front matter.

    Examples
    --------
    >>> extract_frontmatter(["---", "title: Hi", "---", "# Body"])
    ({'title': 'Hi'}, 3)
    >>> extract_frontmatter(["---", "no closing delimiter"])
    ({}, 0)

    """
    end = find_frontmatter_end(lines)
    if end is None:
        return {}, 0
    block = "\n".join(lines[1:end])
    return parse_frontmatter_block(block), end + 1


def parse_frontmatter_block(block: str) -> dict[str, Any]:
    """Parse the text between the delimiters into a flat metadata mapping."""
    if not block.strip():
        return {}

    try:
        data = yaml.safe_load(block)
    except yaml.YAMLError as e:
        logger.debug("Front matter is not valid YAML (%s); reading key: value lines", e)
        data = None

    if isinstance(data, dict):
        return {str(key): _to_scalar(value) for key, value in data.items()}

    return _parse_key_value_lines(block)


def _parse_key_value_lines(block: str) -> dict[str, Any]:
    metadata: dict[str, Any] = {}
    for line in block.split("\n"):
        match = _KEY_VALUE_LINE.match(line)
        if not match:
            continue
        value = match.group(2)
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        metadata.setdefault(match.group(1), value)
    return metadata


def _to_scalar(value: Any) -> Any:
    """Flatten a YAML value to a scalar or a string."""
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    if isinstance(value, (list, tuple)) and all(
        item is None or isinstance(item, (str, int, float, bool)) for item in value
    ):
        return ", ".join("" if item is None else str(item) for item in value)
    return yaml.safe_dump(value, default_flow_style=True, sort_keys=False).strip()


__all__ = ["extract_frontmatter", "find_frontmatter_end", "parse_frontmatter_block"]
