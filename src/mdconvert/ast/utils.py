#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconvert/ast/utils.py
"""Utility functions for working with document tree nodes.

Functions
---------
extract_text : Plain text of a node or list of nodes
normalize_label : Canonical form of a link or footnote label
collect_footnote_definitions : Label -> definition lookup table
iter_nodes : Depth-first walk over a tree

Examples
--------
    >>> from mdconvert.ast import Heading, Text, Emphasis
    >>> from mdconvert.ast.utils import extract_text
    >>> heading = Heading(level=1, content=[
    ...     Text(content="Hello "),
    ...     Emphasis(content=[Text(content="world")])
    ... ])
    >>> extract_text(heading)
    'Hello world'

"""

from __future__ import annotations

import re
from typing import Iterator, Union

from mdconvert.ast.nodes import Code, FootnoteDefinition, Image, LineBreak, Node, Text, get_node_children

_WHITESPACE_RUN = re.compile(r"\s+")


def extract_text(node_or_nodes: Union[Node, list[Node]]) -> str:
    """Extract the plain text of a node or list of nodes.

    Text and code span content is concatenated as-is, image alt text stands in
    for the image and every line break becomes a single space.

    Parameters
    ----------
    node_or_nodes : Node or list of Node
        A single node or list of nodes to extract text from

    Returns
    -------
    str
        Concatenated text content

    """
    if isinstance(node_or_nodes, list):
        return "".join(extract_text(node) for node in node_or_nodes)

    node = node_or_nodes
    if isinstance(node, (Text, Code)):
        return node.content
    if isinstance(node, Image):
        return node.alt_text
    if isinstance(node, LineBreak):
        return " "
    return "".join(extract_text(child) for child in get_node_children(node))


def normalize_label(label: str) -> str:
    """Normalize a reference label for case-insensitive matching.

    Surrounding whitespace is stripped, internal whitespace runs collapse to
    one space and the result is case-folded.

    Examples
    --------
        >>> normalize_label("  Foo\\n  Bar ")
        'foo bar'

    """
    return _WHITESPACE_RUN.sub(" ", label.strip()).casefold()


def iter_nodes(node: Node) -> Iterator[Node]:
    """Yield ``node`` and all of its descendants in document order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(get_node_children(current)))


def collect_footnote_definitions(document: Node) -> dict[str, FootnoteDefinition]:
    """Build the identifier -> FootnoteDefinition lookup table for a document.

    The table is built in a separate pass over the finished tree so that
    references never hold pointers into the tree. When two definitions share
    an identifier, the first one in document order wins.

    Parameters
    ----------
    document : Node
        Root of the tree (normally a Document)

    Returns
    -------
    dict[str, FootnoteDefinition]
        Definitions keyed by their identifier

    """
    table: dict[str, FootnoteDefinition] = {}
    for node in iter_nodes(document):
        if isinstance(node, FootnoteDefinition):
            table.setdefault(node.identifier, node)
    return table


__all__ = [
    "extract_text",
    "normalize_label",
    "iter_nodes",
    "collect_footnote_definitions",
]
