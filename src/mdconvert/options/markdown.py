#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for Markdown parsing."""

from __future__ import annotations

from dataclasses import dataclass, field

from mdconvert.constants import (
    DEFAULT_PARSE_DEFINITION_LISTS,
    DEFAULT_PARSE_FOOTNOTES,
    DEFAULT_PARSE_FRONTMATTER,
    DEFAULT_PARSE_STRIKETHROUGH,
    DEFAULT_PARSE_TABLES,
    DEFAULT_PARSE_TASK_LISTS,
)
from mdconvert.options.base import BaseParserOptions


@dataclass(frozen=True)
class MarkdownParserOptions(BaseParserOptions):
    """Configuration options for parsing Markdown into a document tree.

    Disabling an extension never makes parsing fail: the syntax it would have
    recognized simply stays literal text.

    Parameters
    ----------
    parse_frontmatter : bool, default True
        Extract a leading ``---`` delimited block as document metadata
    parse_tables : bool, default True
        Recognize pipe tables
    parse_footnotes : bool, default True
        Recognize ``[^label]`` references and ``[^label]:`` definitions
    parse_task_lists : bool, default True
        Recognize ``[ ]`` / ``[x]`` checkboxes at the start of list items
    parse_strikethrough : bool, default True
        Recognize ``~~text~~``
    parse_definition_lists : bool, default True
        Recognize ``Term`` followed by ``: definition`` lines

    """

    parse_frontmatter: bool = field(
        default=DEFAULT_PARSE_FRONTMATTER,
        metadata={"help": "Extract leading --- front matter as metadata", "importance": "core"},
    )
    parse_tables: bool = field(
        default=DEFAULT_PARSE_TABLES,
        metadata={"help": "Parse pipe tables", "importance": "core"},
    )
    parse_footnotes: bool = field(
        default=DEFAULT_PARSE_FOOTNOTES,
        metadata={"help": "Parse footnote references and definitions", "importance": "core"},
    )
    parse_task_lists: bool = field(
        default=DEFAULT_PARSE_TASK_LISTS,
        metadata={"help": "Parse task list checkboxes", "importance": "core"},
    )
    parse_strikethrough: bool = field(
        default=DEFAULT_PARSE_STRIKETHROUGH,
        metadata={"help": "Parse ~~strikethrough~~", "importance": "core"},
    )
    parse_definition_lists: bool = field(
        default=DEFAULT_PARSE_DEFINITION_LISTS,
        metadata={"help": "Parse description lists (term / : definition)", "importance": "advanced"},
    )
