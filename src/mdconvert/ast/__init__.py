#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconvert/ast/__init__.py
"""Document tree used between parsing and rendering.

The Markdown parser produces a :class:`Document`; renderers walk it through
the visitor pattern. A tree is built once per conversion and is read-only
afterwards.

- nodes: node classes representing document structure
- visitors: visitor base class and structural validator
- utils: text extraction, label normalization, footnote lookup

Examples
--------
    >>> from mdconvert.ast import Document, Heading, Paragraph, Text
    >>> from mdconvert.renderers.html import HtmlRenderer
    >>> doc = Document(children=[
    ...     Heading(level=1, content=[Text(content="Title")]),
    ...     Paragraph(content=[Text(content="Hello world")])
    ... ])
    >>> HtmlRenderer().render_to_string(doc)
    '<h1>Title</h1>\\n<p>Hello world</p>\\n'

"""

from __future__ import annotations

from mdconvert.ast.nodes import (
    Alignment,
    BlockQuote,
    Code,
    CodeBlock,
    DefinitionDescription,
    DefinitionList,
    DefinitionTerm,
    Document,
    Emphasis,
    FootnoteDefinition,
    FootnoteReference,
    Heading,
    Image,
    LineBreak,
    Link,
    List,
    ListItem,
    Node,
    Paragraph,
    SourceLocation,
    Strikethrough,
    Strong,
    Table,
    TableCell,
    TableRow,
    TaskStatus,
    Text,
    ThematicBreak,
    get_node_children,
)
from mdconvert.ast.utils import collect_footnote_definitions, extract_text, iter_nodes, normalize_label
from mdconvert.ast.visitors import NodeVisitor, ValidationVisitor

__all__ = [
    # Nodes
    "Node",
    "SourceLocation",
    "Alignment",
    "TaskStatus",
    "Document",
    "Heading",
    "Paragraph",
    "CodeBlock",
    "BlockQuote",
    "List",
    "ListItem",
    "Table",
    "TableRow",
    "TableCell",
    "ThematicBreak",
    "FootnoteDefinition",
    "DefinitionList",
    "DefinitionTerm",
    "DefinitionDescription",
    "Text",
    "Emphasis",
    "Strong",
    "Strikethrough",
    "Code",
    "Link",
    "Image",
    "LineBreak",
    "FootnoteReference",
    # Node helpers
    "get_node_children",
    # Visitors
    "NodeVisitor",
    "ValidationVisitor",
    # Utilities
    "extract_text",
    "normalize_label",
    "iter_nodes",
    "collect_footnote_definitions",
]
