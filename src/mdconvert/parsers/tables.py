#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconvert/parsers/tables.py
"""Pipe table rule for the mistune block parser.

mistune's bundled table plugin rejects a table whose body rows do not have
exactly as many cells as the header. This rule keeps such tables: short rows
are padded with empty cells and the excess cells of long rows are dropped,
so every row in the resulting ``table`` token has the header's width.

The header and delimiter rows must still agree on the number of columns;
when they do not, the lines are ordinary paragraph text.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any, Match, Optional

from mistune.plugins.table import NP_TABLE_PATTERN

from mdconvert.ast import Alignment

if TYPE_CHECKING:
    from mistune import BlockParser, BlockState, Markdown

logger = logging.getLogger(__name__)

_DELIMITER_CELL = re.compile(r"^(:?)-+(:?)$")

# A line starting one of these blocks ends the table even when it holds a pipe
_BLOCK_START = re.compile(r"^ {0,3}(?:>|#{1,6}(?:[ \t]|$)|`{3,}|~{3,}|[-+*][ \t]|\d{1,9}[.)][ \t])")


def _is_escaped(text: str, pos: int) -> bool:
    backslashes = 0
    pos -= 1
    while pos >= 0 and text[pos] == "\\":
        backslashes += 1
        pos -= 1
    return backslashes % 2 == 1


def split_table_row(line: str) -> list[str]:
    """Split a table line into stripped cell texts.

    One leading and one trailing pipe are optional. A pipe preceded by an odd
    number of backslashes is part of the cell; the backslash is resolved
    later by the inline scanner.

    Examples
    --------
    >>> split_table_row("| a | b \\\\| c |")
    ['a', 'b \\\\| c']

    """
    text = line.strip()
    if text.startswith("|"):
        text = text[1:]
    if text.endswith("|") and not _is_escaped(text, len(text) - 1):
        text = text[:-1]

    cells: list[str] = []
    start = 0
    for pos, char in enumerate(text):
        if char == "|" and not _is_escaped(text, pos):
            cells.append(text[start:pos].strip())
            start = pos + 1
    cells.append(text[start:].strip())
    return cells


def parse_delimiter_row(line: str) -> Optional[list[Optional[Alignment]]]:
    """Return the column alignments of a delimiter row, or None if ``line`` is not one."""
    if "-" not in line:
        return None
    alignments: list[Optional[Alignment]] = []
    for cell in split_table_row(line):
        match = _DELIMITER_CELL.match(cell)
        if match is None:
            return None
        left, right = bool(match.group(1)), bool(match.group(2))
        if left and right:
            alignments.append("center")
        elif left:
            alignments.append("left")
        elif right:
            alignments.append("right")
        else:
            alignments.append(None)
    return alignments


def _row_token(cells: list[str], alignments: list[Optional[Alignment]], head: bool) -> list[dict[str, Any]]:
    width = len(alignments)
    if len(cells) > width:
        logger.debug("Dropping %d table cell(s) beyond the header width of %d", len(cells) - width, width)
    cells = cells[:width] + [""] * (width - len(cells))
    return [
        {"type": "table_cell", "text": text, "attrs": {"align": alignments[column], "head": head}}
        for column, text in enumerate(cells)
    ]


def parse_pipe_table(block: BlockParser, m: Match[str], state: BlockState) -> Optional[int]:
    """Parse a pipe table starting at the header line matched by ``m``.

    Returns the position after the last body row, or None when the line after
    the header is not a delimiter row with the header's column count.
    """
    pos = m.end()
    header = split_table_row(m.group(0))
    alignments = parse_delimiter_row(state.get_line(pos))
    if alignments is None or len(alignments) != len(header):
        return None
    pos += len(state.get_line(pos))

    rows: list[dict[str, Any]] = []
    while pos < state.cursor_max:
        line = state.get_line(pos)
        if not line.strip() or _BLOCK_START.match(line):
            break
        rows.append({"type": "table_row", "children": _row_token(split_table_row(line), alignments, head=False)})
        pos += len(line)

    children = [
        {"type": "table_head", "children": _row_token(header, alignments, head=True)},
        {"type": "table_body", "children": rows},
    ]
    state.append_token({"type": "table", "children": children})
    return pos


def pipe_table(md: Markdown) -> None:
    """Register the pipe table rule on ``md``, including inside block quotes and list items.

    Use it like any mistune plugin::

        markdown = mistune.create_markdown(renderer=None, plugins=[pipe_table])

    """
    md.block.register("table", NP_TABLE_PATTERN, parse_pipe_table, before="paragraph")
    md.block.insert_rule(md.block.block_quote_rules, "table", before="paragraph")
    md.block.insert_rule(md.block.list_rules, "table", before="paragraph")


__all__ = ["pipe_table", "parse_pipe_table", "parse_delimiter_row", "split_table_row"]
