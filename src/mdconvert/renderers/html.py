#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconvert/renderers/html.py
"""HTML rendering from the document tree.

:class:`HtmlRenderer` walks a :class:`~mdconvert.ast.Document` with the
visitor pattern and produces an HTML body fragment. Wrapping the fragment in
a full page is the job of :mod:`mdconvert.renderers.document`.

All text is escaped; there is no raw HTML passthrough. Output depends only
on the tree and the options, so rendering the same tree twice gives
byte-identical HTML.

"""

from __future__ import annotations

import logging

from mdconvert.ast.nodes import (
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
    TaskStatus,
    Text,
    ThematicBreak,
)
from mdconvert.ast.utils import collect_footnote_definitions, extract_text, iter_nodes
from mdconvert.ast.visitors import NodeVisitor
from mdconvert.constants import FOOTNOTE_BACKREF_SYMBOL, FOOTNOTE_ID_PREFIX, FOOTNOTE_REF_ID_PREFIX
from mdconvert.options.html import HtmlRendererOptions
from mdconvert.renderers.base import BaseRenderer, InlineContentMixin
from mdconvert.utils.html_utils import escape_attribute, escape_html, is_dangerous_url, normalize_url
from mdconvert.utils.text import slugify

logger = logging.getLogger(__name__)


def _footnote_ref_id(number: int, occurrence: int) -> str:
    """Return the id of the ``occurrence``-th reference to footnote ``number``."""
    if occurrence == 1:
        return f"{FOOTNOTE_REF_ID_PREFIX}{number}"
    return f"{FOOTNOTE_REF_ID_PREFIX}{number}-{occurrence}"


class HtmlRenderer(NodeVisitor, InlineContentMixin, BaseRenderer):
    """Render a document tree to an HTML fragment.

    Footnote references are numbered in order of first appearance and the
    referenced definitions are emitted in that order, in a
    ``<section class="footnotes">`` after the body. Definitions nobody
    references are not rendered.

    Parameters
    ----------
    options : HtmlRendererOptions or None, default = None
        HTML rendering options

    Examples
    --------
        >>> from mdconvert.ast import Document, Paragraph, Strong, Text
        >>> doc = Document(children=[
        ...     Paragraph(content=[Text(content="a "), Strong(content=[Text(content="b")])])
        ... ])
        >>> HtmlRenderer().render_to_string(doc)
        '<p>a <strong>b</strong></p>\\n'

    """

    def __init__(self, options: HtmlRendererOptions | None = None):
        """Initialize the HTML renderer with options."""
        BaseRenderer._validate_options_type(options, HtmlRendererOptions, "html")
        options = options or HtmlRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: HtmlRendererOptions = options
        self._output: list[str] = []
        self._seen_slugs: set[str] = set()
        self._tight_lists: list[bool] = []
        self._footnotes: dict[str, FootnoteDefinition] = {}
        self._footnote_numbers: dict[str, int] = {}
        self._footnote_order: list[str] = []
        self._footnote_ref_counts: dict[str, int] = {}

    def render_to_string(self, doc: Document) -> str:
        """Render a document to an HTML fragment.

        Parameters
        ----------
        doc : Document
            The document to render

        Returns
        -------
        str
            HTML body fragment, footnote section included

        """
        self._output = []
        self._seen_slugs = set()
        self._tight_lists = []
        self._footnotes = collect_footnote_definitions(doc)
        self._footnote_numbers = {}
        self._footnote_order = []
        self._footnote_ref_counts = {}
        if self.options.heading_ids:
            self._seen_slugs.update(self._footnote_ids(doc))

        doc.accept(self)
        return "".join(self._output)

    def _footnote_ids(self, doc: Document) -> set[str]:
        """Return the element ids the footnote markup of ``doc`` will use.

        References are counted in rendering order: the body first, then each
        footnote body in the order its footnote is first referenced.
        """
        order: list[str] = []
        counts: dict[str, int] = {}
        pending: list[Node] = [child for child in doc.children if not isinstance(child, FootnoteDefinition)]
        index = 0
        while True:
            for root in pending:
                for node in iter_nodes(root):
                    if isinstance(node, FootnoteReference) and node.identifier in self._footnotes:
                        if node.identifier not in counts:
                            order.append(node.identifier)
                        counts[node.identifier] = counts.get(node.identifier, 0) + 1
            if index >= len(order):
                break
            pending = list(self._footnotes[order[index]].content)
            index += 1

        ids: set[str] = set()
        for number, identifier in enumerate(order, start=1):
            ids.add(f"{FOOTNOTE_ID_PREFIX}{number}")
            ids.update(_footnote_ref_id(number, occurrence) for occurrence in range(1, counts[identifier] + 1))
        return ids

    # ------------------------------------------------------------------
    # Block nodes
    # ------------------------------------------------------------------

    def visit_document(self, node: Document) -> None:
        """Render the document's blocks followed by the footnote section."""
        for child in node.children:
            child.accept(self)
        self._render_footnote_section()

    def visit_heading(self, node: Heading) -> None:
        """Render a Heading node."""
        level = min(6, max(1, node.level))
        content = self._render_inline_content(node.content)
        id_attr = ""
        if self.options.heading_ids:
            slug = slugify(extract_text(node.content), seen_slugs=self._seen_slugs)
            id_attr = f' id="{escape_attribute(slug)}"'
        self._output.append(f"<h{level}{id_attr}>{content}</h{level}>\n")

    def visit_paragraph(self, node: Paragraph) -> None:
        """Render a Paragraph node."""
        content = self._render_inline_content(node.content)
        self._output.append(f"<p>{content}</p>\n")

    def visit_code_block(self, node: CodeBlock) -> None:
        """Render a CodeBlock node; the content is emitted verbatim, escaped."""
        class_attr = f' class="language-{escape_attribute(node.language)}"' if node.language else ""
        self._output.append(f"<pre><code{class_attr}>{escape_html(node.content)}</code></pre>\n")

    def visit_block_quote(self, node: BlockQuote) -> None:
        """Render a BlockQuote node."""
        self._output.append("<blockquote>\n")
        for child in node.children:
            child.accept(self)
        self._output.append("</blockquote>\n")

    def visit_list(self, node: List) -> None:
        """Render a List node.

        Tightness is pushed on a stack so that items know whether to wrap
        their paragraphs in ``<p>``.
        """
        tag = "ol" if node.ordered else "ul"
        start_attr = f' start="{node.start}"' if node.ordered and node.start != 1 else ""
        self._output.append(f"<{tag}{start_attr}>\n")

        self._tight_lists.append(node.tight)
        try:
            for item in node.items:
                item.accept(self)
        finally:
            self._tight_lists.pop()

        self._output.append(f"</{tag}>\n")

    def visit_list_item(self, node: ListItem) -> None:
        """Render a ListItem node.

        In a tight list, paragraphs are written without ``<p>`` tags. A task
        item starts with a disabled checkbox, placed inside the first
        paragraph when there is one.
        """
        tight = self._tight_lists[-1] if self._tight_lists else False
        checkbox = self._checkbox(node.task_status)
        self._output.append("<li>")

        children = node.children
        if not children:
            self._output.append(checkbox.rstrip())
        for index, child in enumerate(children):
            prefix = checkbox if index == 0 else ""
            if isinstance(child, Paragraph):
                content = self._render_inline_content(child.content)
                if tight:
                    self._output.append(f"{prefix}{content}")
                    if index < len(children) - 1:
                        self._output.append("\n")
                    continue
                if index == 0:
                    self._output.append("\n")
                self._output.append(f"<p>{prefix}{content}</p>\n")
                continue
            if index == 0:
                self._output.append(f"{prefix}\n")
            child.accept(self)

        self._output.append("</li>\n")

    @staticmethod
    def _checkbox(status: TaskStatus | None) -> str:
        if status is None:
            return ""
        if status == "checked":
            return '<input type="checkbox" checked disabled> '
        return '<input type="checkbox" disabled> '

    def visit_table(self, node: Table) -> None:
        """Render a Table node.

        Body rows are padded with empty cells, or cut, to the header width.
        """
        width = len(node.header.cells)
        self._output.append("<table>\n<thead>\n<tr>")
        for column, cell in enumerate(node.header.cells):
            self._output.append(self._table_cell("th", cell, self._column_alignment(node, column, cell)))
        self._output.append("</tr>\n</thead>\n")

        if node.rows:
            self._output.append("<tbody>\n")
            for row in node.rows:
                self._output.append("<tr>")
                cells: list[TableCell | None] = list(row.cells[:width])
                cells.extend([None] * (width - len(cells)))
                for column, body_cell in enumerate(cells):
                    self._output.append(
                        self._table_cell("td", body_cell, self._column_alignment(node, column, body_cell))
                    )
                self._output.append("</tr>\n")
            self._output.append("</tbody>\n")

        self._output.append("</table>\n")

    @staticmethod
    def _column_alignment(node: Table, column: int, cell: TableCell | None) -> str | None:
        if column < len(node.alignments) and node.alignments[column]:
            return node.alignments[column]
        return cell.alignment if cell is not None else None

    def _table_cell(self, tag: str, cell: TableCell | None, alignment: str | None) -> str:
        align = f' style="text-align:{alignment}"' if alignment else ""
        content = self._render_inline_content(cell.content) if cell is not None else ""
        return f"<{tag}{align}>{content}</{tag}>"

    def visit_table_row(self, node: TableRow) -> None:
        """Render a TableRow node."""
        pass  # Handled by visit_table

    def visit_table_cell(self, node: TableCell) -> None:
        """Render a TableCell node."""
        pass  # Handled by visit_table

    def visit_thematic_break(self, node: ThematicBreak) -> None:
        """Render a ThematicBreak node."""
        self._output.append("<hr>\n")

    def visit_footnote_definition(self, node: FootnoteDefinition) -> None:
        """Footnote definitions are rendered in the footnote section, not in place."""
        pass

    def visit_definition_list(self, node: DefinitionList) -> None:
        """Render a DefinitionList node."""
        self._output.append("<dl>\n")
        for term, descriptions in node.items:
            self._output.append(f"<dt>{self._render_inline_content(term.content)}</dt>\n")
            for description in descriptions:
                self._output.append("<dd>")
                if len(description.content) == 1 and isinstance(description.content[0], Paragraph):
                    self._output.append(self._render_inline_content(description.content[0].content))
                else:
                    self._output.append("\n")
                    for child in description.content:
                        child.accept(self)
                self._output.append("</dd>\n")
        self._output.append("</dl>\n")

    def visit_definition_term(self, node: DefinitionTerm) -> None:
        """Render a DefinitionTerm node."""
        pass  # Handled by visit_definition_list

    def visit_definition_description(self, node: DefinitionDescription) -> None:
        """Render a DefinitionDescription node."""
        pass  # Handled by visit_definition_list

    # ------------------------------------------------------------------
    # Inline nodes
    # ------------------------------------------------------------------

    def visit_text(self, node: Text) -> None:
        """Render a Text node."""
        self._output.append(escape_html(node.content))

    def visit_emphasis(self, node: Emphasis) -> None:
        """Render an Emphasis node."""
        self._output.append(f"<em>{self._render_inline_content(node.content)}</em>")

    def visit_strong(self, node: Strong) -> None:
        """Render a Strong node."""
        self._output.append(f"<strong>{self._render_inline_content(node.content)}</strong>")

    def visit_strikethrough(self, node: Strikethrough) -> None:
        """Render a Strikethrough node."""
        self._output.append(f"<del>{self._render_inline_content(node.content)}</del>")

    def visit_code(self, node: Code) -> None:
        """Render a Code node."""
        self._output.append(f"<code>{escape_html(node.content)}</code>")

    def _safe_url(self, url: str) -> str:
        if self.options.safe_links and is_dangerous_url(url):
            logger.debug("Dropping unsafe URL %r", url[:80])
            return ""
        return escape_attribute(normalize_url(url))

    def visit_link(self, node: Link) -> None:
        """Render a Link node."""
        content = self._render_inline_content(node.content)
        title_attr = f' title="{escape_attribute(node.title)}"' if node.title else ""
        self._output.append(f'<a href="{self._safe_url(node.url)}"{title_attr}>{content}</a>')

    def visit_image(self, node: Image) -> None:
        """Render an Image node."""
        title_attr = f' title="{escape_attribute(node.title)}"' if node.title else ""
        alt = escape_attribute(node.alt_text)
        self._output.append(f'<img src="{self._safe_url(node.url)}" alt="{alt}"{title_attr}>')

    def visit_line_break(self, node: LineBreak) -> None:
        """Render a LineBreak node.

        Hard breaks are always ``<br>``; soft breaks follow the
        ``soft_break`` option.
        """
        if not node.soft or self.options.soft_break == "br":
            self._output.append("<br>\n")
        elif self.options.soft_break == "space":
            self._output.append(" ")
        else:
            self._output.append("\n")

    def visit_footnote_reference(self, node: FootnoteReference) -> None:
        """Render a FootnoteReference node.

        A reference whose identifier has no definition in the document is
        written back as the literal ``[^label]`` text.
        """
        identifier = node.identifier
        if identifier not in self._footnotes:
            logger.debug("Footnote reference [^%s] has no definition; rendering it as text", identifier)
            self._output.append(escape_html(f"[^{identifier}]"))
            return

        number = self._footnote_numbers.get(identifier)
        if number is None:
            number = len(self._footnote_order) + 1
            self._footnote_numbers[identifier] = number
            self._footnote_order.append(identifier)

        count = self._footnote_ref_counts.get(identifier, 0) + 1
        self._footnote_ref_counts[identifier] = count
        self._output.append(
            f'<sup class="footnote-ref"><a href="#{FOOTNOTE_ID_PREFIX}{number}" id="{_footnote_ref_id(number, count)}">'
            f"{number}</a></sup>"
        )

    def _render_footnote_section(self) -> None:
        if not self._footnote_order:
            return

        self._output.append('<section class="footnotes">\n<ol>\n')
        # Footnote bodies may reference further footnotes, which extends the order
        index = 0
        while index < len(self._footnote_order):
            identifier = self._footnote_order[index]
            index += 1
            self._render_footnote_item(index, self._footnotes[identifier])
        self._output.append("</ol>\n</section>\n")

    def _render_footnote_item(self, number: int, definition: FootnoteDefinition) -> None:
        """Render one list item of the footnote section.

        Every reference to the footnote gets its own back link, the first one
        marked with the plain symbol and later ones numbered.
        """
        self._output.append(f'<li id="{FOOTNOTE_ID_PREFIX}{number}">\n')
        children: list[Node] = list(definition.content)
        last = children.pop() if children and isinstance(children[-1], Paragraph) else None
        for child in children:
            child.accept(self)
        content = self._render_inline_content(last.content) if last is not None else ""

        backrefs: list[str] = []
        if self.options.footnote_backrefs:
            count = max(1, self._footnote_ref_counts.get(definition.identifier, 0))
            for occurrence in range(1, count + 1):
                label = FOOTNOTE_BACKREF_SYMBOL if occurrence == 1 else f"{FOOTNOTE_BACKREF_SYMBOL}<sup>{occurrence}</sup>"
                backrefs.append(
                    f'<a href="#{_footnote_ref_id(number, occurrence)}" class="footnote-backref">{label}</a>'
                )
        backref = " ".join(backrefs)

        if last is not None:
            separator = " " if backref and content else ""
            self._output.append(f"<p>{content}{separator}{backref}</p>\n")
        elif backref:
            self._output.append(f"{backref}\n")
        self._output.append("</li>\n")


__all__ = ["HtmlRenderer"]
