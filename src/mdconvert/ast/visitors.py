#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconvert/ast/visitors.py
"""Visitor pattern for document tree traversal.

Every node kind has one abstract ``visit_*`` method on :class:`NodeVisitor`,
so a concrete visitor that forgets a node kind cannot be instantiated. The
HTML renderer and the structural validator are both visitors.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from mdconvert.ast.nodes import (
    BLOCK_NODE_TYPES,
    INLINE_NODE_TYPES,
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
    Strikethrough,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
    ThematicBreak,
)


class NodeVisitor(ABC):
    """Abstract base class for tree visitors.

    Subclasses implement one ``visit_*`` method per node kind. Container
    visits are responsible for visiting their own children.

    Examples
    --------
    Counting text characters:

        >>> class TextCounter(NodeVisitor):
        ...     def __init__(self):
        ...         self.count = 0
        ...     def visit_text(self, node):
        ...         self.count += len(node.content)
        ...     # ... remaining visit_* methods walk children

    """

    @abstractmethod
    def visit_document(self, node: Document) -> Any:
        """Visit a Document node."""

    @abstractmethod
    def visit_heading(self, node: Heading) -> Any:
        """Visit a Heading node."""

    @abstractmethod
    def visit_paragraph(self, node: Paragraph) -> Any:
        """Visit a Paragraph node."""

    @abstractmethod
    def visit_code_block(self, node: CodeBlock) -> Any:
        """Visit a CodeBlock node."""

    @abstractmethod
    def visit_block_quote(self, node: BlockQuote) -> Any:
        """Visit a BlockQuote node."""

    @abstractmethod
    def visit_list(self, node: List) -> Any:
        """Visit a List node."""

    @abstractmethod
    def visit_list_item(self, node: ListItem) -> Any:
        """Visit a ListItem node."""

    @abstractmethod
    def visit_table(self, node: Table) -> Any:
        """Visit a Table node."""

    @abstractmethod
    def visit_table_row(self, node: TableRow) -> Any:
        """Visit a TableRow node."""

    @abstractmethod
    def visit_table_cell(self, node: TableCell) -> Any:
        """Visit a TableCell node."""

    @abstractmethod
    def visit_thematic_break(self, node: ThematicBreak) -> Any:
        """Visit a ThematicBreak node."""

    @abstractmethod
    def visit_footnote_definition(self, node: FootnoteDefinition) -> Any:
        """Visit a FootnoteDefinition node."""

    @abstractmethod
    def visit_definition_list(self, node: DefinitionList) -> Any:
        """Visit a DefinitionList node."""

    @abstractmethod
    def visit_definition_term(self, node: DefinitionTerm) -> Any:
        """Visit a DefinitionTerm node."""

    @abstractmethod
    def visit_definition_description(self, node: DefinitionDescription) -> Any:
        """Visit a DefinitionDescription node."""

    @abstractmethod
    def visit_text(self, node: Text) -> Any:
        """Visit a Text node."""

    @abstractmethod
    def visit_emphasis(self, node: Emphasis) -> Any:
        """Visit an Emphasis node."""

    @abstractmethod
    def visit_strong(self, node: Strong) -> Any:
        """Visit a Strong node."""

    @abstractmethod
    def visit_strikethrough(self, node: Strikethrough) -> Any:
        """Visit a Strikethrough node."""

    @abstractmethod
    def visit_code(self, node: Code) -> Any:
        """Visit a Code node."""

    @abstractmethod
    def visit_link(self, node: Link) -> Any:
        """Visit a Link node."""

    @abstractmethod
    def visit_image(self, node: Image) -> Any:
        """Visit an Image node."""

    @abstractmethod
    def visit_line_break(self, node: LineBreak) -> Any:
        """Visit a LineBreak node."""

    @abstractmethod
    def visit_footnote_reference(self, node: FootnoteReference) -> Any:
        """Visit a FootnoteReference node."""


class ValidationVisitor(NodeVisitor):
    """Visitor that checks the structural invariants of a parsed tree.

    Checked invariants:
    - block containers hold block nodes, inline containers hold inline nodes
    - heading levels are 1-6
    - every table row has exactly as many cells as the header
    - every FootnoteReference resolves to a FootnoteDefinition in the document

    Parameters
    ----------
    strict : bool, default = True
        Raise ``ValueError`` on the first violation instead of collecting them

    Examples
    --------
        >>> validator = ValidationVisitor(strict=False)
        >>> doc.accept(validator)
        >>> validator.errors
        []

    """

    def __init__(self, strict: bool = True):
        """Initialize the validator."""
        self.strict = strict
        self.errors: list[str] = []
        self._footnote_labels: set[str] = set()

    def _add_error(self, message: str) -> None:
        self.errors.append(message)
        if self.strict:
            raise ValueError(message)

    def _check_inline(self, children: list[Node], context: str) -> None:
        for i, child in enumerate(children):
            if not isinstance(child, INLINE_NODE_TYPES):
                self._add_error(f"{context} can only contain inline nodes, but child {i} is {type(child).__name__}")
            child.accept(self)

    def _check_blocks(self, children: list[Node], context: str) -> None:
        for i, child in enumerate(children):
            if not isinstance(child, BLOCK_NODE_TYPES):
                self._add_error(f"{context} can only contain block nodes, but child {i} is {type(child).__name__}")
            child.accept(self)

    def visit_document(self, node: Document) -> None:
        """Validate a Document node."""
        from mdconvert.ast.utils import collect_footnote_definitions

        self._footnote_labels = set(collect_footnote_definitions(node))
        self._check_blocks(node.children, "Document")

    def visit_heading(self, node: Heading) -> None:
        """Validate a Heading node."""
        if not 1 <= node.level <= 6:
            self._add_error(f"Invalid heading level: {node.level}")
        self._check_inline(node.content, "Heading")

    def visit_paragraph(self, node: Paragraph) -> None:
        """Validate a Paragraph node."""
        self._check_inline(node.content, "Paragraph")

    def visit_code_block(self, node: CodeBlock) -> None:
        """Validate a CodeBlock node."""
        if not isinstance(node.content, str):
            self._add_error("CodeBlock content must be a string")

    def visit_block_quote(self, node: BlockQuote) -> None:
        """Validate a BlockQuote node."""
        self._check_blocks(node.children, "BlockQuote")

    def visit_list(self, node: List) -> None:
        """Validate a List node."""
        for item in node.items:
            if not isinstance(item, ListItem):
                self._add_error(f"List items must be ListItem, got {type(item).__name__}")
                continue
            item.accept(self)

    def visit_list_item(self, node: ListItem) -> None:
        """Validate a ListItem node."""
        if node.task_status not in (None, "checked", "unchecked"):
            self._add_error(f"Invalid task status: {node.task_status!r}")
        self._check_blocks(node.children, "ListItem")

    def visit_table(self, node: Table) -> None:
        """Validate a Table node."""
        width = node.column_count
        if len(node.alignments) != width:
            self._add_error(f"Table has {len(node.alignments)} alignments for {width} columns")
        node.header.accept(self)
        for index, row in enumerate(node.rows):
            if len(row.cells) != width:
                self._add_error(f"Table row {index} has {len(row.cells)} cells, header has {width}")
            row.accept(self)

    def visit_table_row(self, node: TableRow) -> None:
        """Validate a TableRow node."""
        for cell in node.cells:
            cell.accept(self)

    def visit_table_cell(self, node: TableCell) -> None:
        """Validate a TableCell node."""
        self._check_inline(node.content, "TableCell")

    def visit_thematic_break(self, node: ThematicBreak) -> None:
        """Validate a ThematicBreak node."""

    def visit_footnote_definition(self, node: FootnoteDefinition) -> None:
        """Validate a FootnoteDefinition node."""
        if not node.identifier:
            self._add_error("FootnoteDefinition has an empty identifier")
        self._check_blocks(node.content, "FootnoteDefinition")

    def visit_definition_list(self, node: DefinitionList) -> None:
        """Validate a DefinitionList node."""
        for term, descriptions in node.items:
            term.accept(self)
            for description in descriptions:
                description.accept(self)

    def visit_definition_term(self, node: DefinitionTerm) -> None:
        """Validate a DefinitionTerm node."""
        self._check_inline(node.content, "DefinitionTerm")

    def visit_definition_description(self, node: DefinitionDescription) -> None:
        """Validate a DefinitionDescription node."""
        self._check_blocks(node.content, "DefinitionDescription")

    def visit_text(self, node: Text) -> None:
        """Validate a Text node."""
        if not isinstance(node.content, str):
            self._add_error("Text content must be a string")

    def visit_emphasis(self, node: Emphasis) -> None:
        """Validate an Emphasis node."""
        self._check_inline(node.content, "Emphasis")

    def visit_strong(self, node: Strong) -> None:
        """Validate a Strong node."""
        self._check_inline(node.content, "Strong")

    def visit_strikethrough(self, node: Strikethrough) -> None:
        """Validate a Strikethrough node."""
        self._check_inline(node.content, "Strikethrough")

    def visit_code(self, node: Code) -> None:
        """Validate a Code node."""

    def visit_link(self, node: Link) -> None:
        """Validate a Link node."""
        self._check_inline(node.content, "Link")

    def visit_image(self, node: Image) -> None:
        """Validate an Image node."""

    def visit_line_break(self, node: LineBreak) -> None:
        """Validate a LineBreak node."""

    def visit_footnote_reference(self, node: FootnoteReference) -> None:
        """Validate a FootnoteReference node."""
        if node.identifier not in self._footnote_labels:
            self._add_error(f"Footnote reference [^{node.identifier}] has no definition")
