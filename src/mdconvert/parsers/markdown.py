#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconvert/parsers/markdown.py
"""Markdown to document tree parser.

Parsing runs in three steps:

1. **Front matter.** A leading ``---`` block is split off and read as
   document metadata (see :mod:`mdconvert.parsers.frontmatter`).
2. **Tokens.** mistune tokenizes the rest, block and inline, with the
   plugins enabled in :class:`~mdconvert.options.markdown.MarkdownParserOptions`.
   Pipe tables use the rule in :mod:`mdconvert.parsers.tables`, which pads
   and truncates body rows to the header width.
3. **Tree.** The token stream is converted into :mod:`mdconvert.ast` nodes,
   with :class:`~mdconvert.parsers.inline.InlineParser` handling inline
   tokens. Raw HTML blocks become paragraphs of literal text and footnote
   definitions are appended after the body.

No input makes parsing fail; only undecodable bytes raise
:class:`~mdconvert.exceptions.DecodingError`.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import mistune
from mistune.plugins.footnotes import parse_footnote_item
from mistune.util import unescape

from mdconvert.ast import (
    BlockQuote,
    CodeBlock,
    DefinitionDescription,
    DefinitionList,
    DefinitionTerm,
    Document,
    FootnoteDefinition,
    Heading,
    LineBreak,
    List,
    ListItem,
    Node,
    Paragraph,
    Table,
    TableCell,
    TableRow,
    TaskStatus,
    Text,
    ThematicBreak,
    normalize_label,
)
from mdconvert.constants import MAX_NESTING_DEPTH
from mdconvert.options.markdown import MarkdownParserOptions
from mdconvert.parsers.base import BaseParser, SourceInput
from mdconvert.parsers.frontmatter import extract_frontmatter
from mdconvert.parsers.inline import InlineParser
from mdconvert.parsers.tables import pipe_table

logger = logging.getLogger(__name__)


def split_lines(text: str) -> list[str]:
    """Normalize line endings and split text into lines.

    CRLF and lone CR become LF and NUL characters become U+FFFD. A final
    line terminator does not produce an extra empty line.
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n").replace("\0", "\ufffd")
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


class MarkdownParser(BaseParser):
    """Convert Markdown source to a document tree.

    Recognizes CommonMark block and inline structure plus pipe tables, task
    lists, strikethrough, footnotes, description lists and ``---`` front
    matter. Each extension can be switched off in
    :class:`~mdconvert.options.markdown.MarkdownParserOptions`.

    Parameters
    ----------
    options : MarkdownParserOptions or None, default = None
        Parser configuration options

    Examples
    --------
    Basic parsing:

        >>> parser = MarkdownParser()
        >>> doc = parser.parse("# Title\\n\\nSome *emphasis*.")
        >>> [type(block).__name__ for block in doc.children]
        ['Heading', 'Paragraph']

    Front matter becomes document metadata:

        >>> doc = parser.parse("---\\ntitle: Notes\\n---\\nBody")
        >>> doc.metadata
        {'title': 'Notes'}

    """

    def __init__(self, options: MarkdownParserOptions | None = None):
        """Initialize the parser with options."""
        BaseParser._validate_options_type(options, MarkdownParserOptions, "markdown")
        options = options or MarkdownParserOptions()
        super().__init__(options)
        self.options: MarkdownParserOptions = options
        self._inline = InlineParser()

    def parse(self, input_data: SourceInput, source_name: str | None = None) -> Document:
        """Parse Markdown into a Document.

        Parameters
        ----------
        input_data : str, bytes, Path, or stream
            Markdown source. Byte input must be UTF-8.
        source_name : str, optional
            Name of the source, used in decoding error messages

        Returns
        -------
        Document
            Document tree; front matter, if any, is in ``metadata``

        Raises
        ------
        DecodingError
            If byte input is not valid UTF-8

        """
        text = self._load_text(input_data, source_name=source_name)

        lines = split_lines(text)
        metadata: dict = {}
        consumed = 0
        if self.options.parse_frontmatter:
            metadata, consumed = extract_frontmatter(lines)
            if consumed:
                logger.debug("Front matter: %d line(s), keys %s", consumed, sorted(metadata))

        markdown = self._create_markdown()
        tokens, state = markdown.parse("\n".join(lines[consumed:]))
        self._inline = InlineParser(markdown=markdown)

        children = self._process_tokens(tokens)
        footnotes: list[Node] = []
        if self.options.parse_footnotes:
            footnotes = self._process_footnote_definitions(markdown, state)

        logger.debug(
            "Parsed %d top-level block(s), %d link reference(s), %d footnote definition(s)",
            len(children),
            len(state.env.get("ref_links", {})),
            len(footnotes),
        )
        return Document(children=children + footnotes, metadata=metadata)

    def _create_markdown(self) -> mistune.Markdown:
        """Build a token-producing mistune instance with the enabled extensions."""
        plugins: list[Any] = []
        if self.options.parse_strikethrough:
            plugins.append("strikethrough")
        if self.options.parse_tables:
            plugins.append(pipe_table)
        if self.options.parse_footnotes:
            plugins.append("footnotes")
        if self.options.parse_task_lists:
            plugins.append("task_lists")
        if self.options.parse_definition_lists:
            plugins.append("def_list")

        markdown = mistune.create_markdown(plugins=plugins, renderer=None)
        markdown.block.max_nested_level = MAX_NESTING_DEPTH
        return markdown

    # ------------------------------------------------------------------
    # Block tokens
    # ------------------------------------------------------------------

    def _process_tokens(self, tokens: list[dict[str, Any]]) -> list[Node]:
        """Convert a sequence of block tokens, dropping those that produce no node."""
        nodes: list[Node] = []
        for token in tokens:
            node = self._process_token(token)
            if node is not None:
                nodes.append(node)
        return nodes

    def _process_token(self, token: dict[str, Any]) -> Optional[Node]:
        """Process a single mistune block token into a tree node.

        Parameters
        ----------
        token : dict
            mistune token dictionary with 'type' and other fields

        Returns
        -------
        Node or None
            Resulting node; None for blank lines, the footnote section
            mistune appends (definitions are read separately) and unknown
            token kinds

        """
        token_type = token.get("type", "")

        if token_type == "heading":
            return self._process_heading(token)
        elif token_type in ("paragraph", "block_text"):
            return self._process_paragraph(token)
        elif token_type == "block_code":
            return self._process_code_block(token)
        elif token_type == "block_quote":
            return BlockQuote(children=self._process_tokens(token.get("children", [])))
        elif token_type == "list":
            return self._process_list(token)
        elif token_type == "table":
            return self._process_table(token)
        elif token_type == "thematic_break":
            return ThematicBreak()
        elif token_type == "block_html":
            return self._process_html_block(token)
        elif token_type == "def_list":
            return self._process_definition_list(token)
        elif token_type not in ("blank_line", "footnotes"):
            logger.debug("Ignoring unsupported block token %r", token_type)
        return None

    def _process_heading(self, token: dict[str, Any]) -> Heading:
        level = token.get("attrs", {}).get("level", 1)
        return Heading(level=level, content=self._inline.convert(token.get("children", [])))

    def _process_paragraph(self, token: dict[str, Any]) -> Optional[Paragraph]:
        """Process paragraph and block_text tokens; an empty one (a bare task box) yields None."""
        content = self._inline.convert(token.get("children", []))
        if not content:
            return None
        return Paragraph(content=content)

    def _process_code_block(self, token: dict[str, Any]) -> CodeBlock:
        """Process code block token.

        Parameters
        ----------
        token : dict
            Code block token with 'raw', 'style', 'marker' and optional 'attrs'

        Returns
        -------
        CodeBlock
            Code block node; the language is the first word of the info string

        """
        content = token.get("raw", "")
        if content and not content.endswith("\n"):
            content += "\n"

        info_string = token.get("attrs", {}).get("info")
        metadata: dict[str, Any] = {}
        language = None
        if info_string:
            info_string = unescape(info_string.strip())
            metadata["info_string"] = info_string
            parts = info_string.split(maxsplit=1)
            if parts:
                language = parts[0]

        if token.get("style") == "fenced":
            marker = token.get("marker", "```")
            return CodeBlock(
                content=content,
                language=language,
                fence_char=marker[0],
                fence_length=len(marker),
                metadata=metadata,
            )
        return CodeBlock(content=content, language=language, fence_char=None, fence_length=0, metadata=metadata)

    def _process_list(self, token: dict[str, Any]) -> List:
        """Process list token.

        Parameters
        ----------
        token : dict
            List token with 'children', 'tight', 'bullet' and 'attrs'
            (ordered, start)

        Returns
        -------
        List
            List node

        """
        attrs = token.get("attrs", {})
        items = [self._process_list_item(child) for child in token.get("children", [])]
        return List(
            ordered=attrs.get("ordered", False),
            items=items,
            start=attrs.get("start", 1),
            tight=token.get("tight", True),
            marker=token.get("bullet", "-"),
        )

    def _process_list_item(self, token: dict[str, Any]) -> ListItem:
        """Process list_item and task_list_item tokens."""
        task_status: TaskStatus | None = None
        if token.get("type") == "task_list_item":
            task_status = "checked" if token.get("attrs", {}).get("checked") else "unchecked"
        return ListItem(children=self._process_tokens(token.get("children", [])), task_status=task_status)

    def _process_table(self, token: dict[str, Any]) -> Table:
        """Process table token.

        Parameters
        ----------
        token : dict
            Table token with 'table_head' and 'table_body' children; every
            row already has the header's width

        Returns
        -------
        Table
            Table node

        """
        header = TableRow(is_header=True)
        rows: list[TableRow] = []
        for section in token.get("children", []):
            if section.get("type") == "table_head":
                header = TableRow(cells=self._process_table_cells(section), is_header=True)
            elif section.get("type") == "table_body":
                rows.extend(TableRow(cells=self._process_table_cells(row)) for row in section.get("children", []))

        alignments = [cell.alignment for cell in header.cells]
        return Table(header=header, rows=rows, alignments=alignments)

    def _process_table_cells(self, token: dict[str, Any]) -> list[TableCell]:
        return [
            TableCell(
                content=self._inline.convert(cell.get("children", [])),
                alignment=cell.get("attrs", {}).get("align"),
            )
            for cell in token.get("children", [])
        ]

    def _process_html_block(self, token: dict[str, Any]) -> Optional[Paragraph]:
        """Turn a raw HTML block into a paragraph of literal text, one soft break per line."""
        raw = token.get("raw", "").strip("\n")
        if not raw.strip():
            return None
        content: list[Node] = []
        for line in raw.split("\n"):
            if content:
                content.append(LineBreak(soft=True))
            content.append(Text(content=line))
        return Paragraph(content=content)

    def _process_definition_list(self, token: dict[str, Any]) -> DefinitionList:
        """Process definition list token.

        Each line of the paragraph before the ``:`` lines is a term of its
        own; the descriptions belong to the last term.
        """
        items: list[tuple[DefinitionTerm, list[DefinitionDescription]]] = []
        for child in token.get("children", []):
            child_type = child.get("type", "")
            if child_type == "def_list_head":
                term = DefinitionTerm(content=self._inline.convert(child.get("children", [])))
                items.append((term, []))
            elif child_type == "def_list_item" and items:
                description = DefinitionDescription(content=self._process_tokens(child.get("children", [])))
                items[-1][1].append(description)
        return DefinitionList(items=items)

    # ------------------------------------------------------------------
    # Footnotes
    # ------------------------------------------------------------------

    def _process_footnote_definitions(self, markdown: mistune.Markdown, state: mistune.BlockState) -> list[Node]:
        """Build a FootnoteDefinition for every ``[^label]:`` definition in the document.

        Definitions are read from mistune's environment in source order,
        whether or not they are referenced; the renderer decides which ones
        to show. A definition nested in another one's body is picked up too.
        The first definition of a label wins.
        """
        definitions: dict[str, str] = state.env.get("ref_footnotes") or {}
        keys: list[str] = []
        items: list[dict[str, Any]] = []
        while len(keys) < len(definitions):
            for key in list(definitions)[len(keys) :]:
                keys.append(key)
                items.append(parse_footnote_item(markdown.block, key, len(keys), state))

        if not items:
            return []

        footer = mistune.BlockState(parent=state)
        footer.tokens = items
        rendered = markdown.render_state(footer)
        return [
            FootnoteDefinition(
                identifier=normalize_label(item["attrs"]["key"]),
                content=self._process_tokens(item.get("children", [])),
            )
            for item in rendered
        ]


__all__ = ["MarkdownParser", "split_lines"]
