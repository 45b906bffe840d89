#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconvert/parsers/__init__.py
"""Parsers turning Markdown source into a document tree.

- markdown: mistune token stream to document tree
- inline: inline tokens (emphasis, links, code spans, footnote references) to nodes
- tables: pipe table rule that normalizes row widths
- frontmatter: leading ``---`` metadata block
"""

from mdconvert.parsers.base import BaseParser
from mdconvert.parsers.inline import InlineParser, LinkReference
from mdconvert.parsers.markdown import MarkdownParser

__all__ = ["BaseParser", "InlineParser", "LinkReference", "MarkdownParser"]
