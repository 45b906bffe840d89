#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconvert/parsers/inline.py
"""Inline Markdown scanning.

The text of paragraphs, headings, table cells and description terms is
tokenized by mistune's inline parser; :class:`InlineParser` turns those token
dicts into inline tree nodes. Conversion never fails:

- raw HTML tokens become literal Text, so markup is escaped on output
- undefined footnote references already arrive as text from mistune
- token kinds without a node of their own keep their text
- nodes nested deeper than :data:`~mdconvert.constants.MAX_INLINE_DEPTH`
  keep only the plain text of their content

mistune caps emphasis nesting itself, leaving deeper delimiter runs as text.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping, Optional

import mistune
from mistune.util import unescape

from mdconvert.ast.nodes import (
    Code,
    Emphasis,
    FootnoteReference,
    Image,
    LineBreak,
    Link,
    Node,
    Strikethrough,
    Strong,
    Text,
)
from mdconvert.ast.utils import extract_text, normalize_label
from mdconvert.constants import MAX_INLINE_DEPTH

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LinkReference:
    """Target of a link reference definition (``[label]: url "title"``)."""

    url: str
    title: Optional[str] = None


def flatten_tokens(tokens: list[dict[str, Any]]) -> str:
    """Return the plain text of inline tokens.

    The tokens are walked with an explicit stack, so arbitrarily deep token
    trees are safe to flatten.
    """
    parts: list[str] = []
    stack = list(reversed(tokens))
    while stack:
        token = stack.pop()
        token_type = token.get("type")
        if token_type in ("linebreak", "softbreak"):
            parts.append(" ")
        elif "children" in token:
            stack.extend(reversed(token["children"]))
        elif token_type == "text":
            parts.append(unescape(token.get("raw", "")))
        else:
            parts.append(token.get("raw", ""))
    return "".join(parts)


def _merge_text(nodes: list[Node]) -> list[Node]:
    merged: list[Node] = []
    for node in nodes:
        if isinstance(node, Text) and merged and isinstance(merged[-1], Text):
            merged[-1] = Text(content=merged[-1].content + node.content)
        elif isinstance(node, Text) and not node.content:
            continue
        else:
            merged.append(node)
    return merged


class InlineParser:
    """Scan inline Markdown into a list of inline nodes.

    Parameters
    ----------
    markdown : mistune.Markdown, optional
        Configured mistune instance whose inline rules do the scanning. When
        omitted, one is created from ``strikethrough`` and ``footnotes``.
    references : Mapping[str, LinkReference], optional
        Link reference definitions keyed by label, used by :meth:`parse`
    footnotes : Iterable[str], optional
        Labels of the footnotes defined in the document, used by
        :meth:`parse`. None switches footnote references off.
    strikethrough : bool, default True
        Recognize ``~~text~~``

    Examples
    --------
        >>> [type(node).__name__ for node in InlineParser().parse("Some **bold** text")]
        ['Text', 'Strong', 'Text']

    """

    def __init__(
        self,
        markdown: mistune.Markdown | None = None,
        references: Mapping[str, LinkReference] | None = None,
        footnotes: Iterable[str] | None = None,
        strikethrough: bool = True,
    ):
        """Initialize the scanner."""
        if markdown is None:
            plugins = ["strikethrough"] if strikethrough else []
            if footnotes is not None:
                plugins.append("footnotes")
            markdown = mistune.create_markdown(renderer=None, plugins=plugins)
        self._markdown = markdown
        self._env: dict[str, Any] = {
            "ref_links": {
                mistune.unikey(label): {"url": mistune.escape_url(ref.url), "title": ref.title, "label": label}
                for label, ref in (references or {}).items()
            },
            "ref_footnotes": {mistune.unikey(label): "" for label in footnotes or ()},
        }
        self._depth = 0
        self._handlers: dict[str, Callable[[dict[str, Any]], Optional[Node]]] = {
            "text": self._handle_text_token,
            "strong": self._handle_strong_token,
            "emphasis": self._handle_emphasis_token,
            "strikethrough": self._handle_strikethrough_token,
            "codespan": self._handle_codespan_token,
            "link": self._handle_link_token,
            "image": self._handle_image_token,
            "linebreak": self._handle_linebreak_token,
            "softbreak": self._handle_softbreak_token,
            "inline_html": self._handle_inline_html_token,
            "footnote_ref": self._handle_footnote_ref_token,
        }

    def parse(self, text: str) -> list[Node]:
        """Scan ``text`` and return its inline nodes.

        Parameters
        ----------
        text : str
            Raw inline Markdown (no block structure)

        Returns
        -------
        list of Node
            Inline nodes covering the whole input

        """
        tokens = self._markdown.inline(text, dict(self._env))
        return self.convert(tokens)

    def convert(self, tokens: list[dict[str, Any]]) -> list[Node]:
        """Convert mistune inline tokens to inline nodes.

        Parameters
        ----------
        tokens : list of dict
            Inline token dictionaries, as produced by mistune

        Returns
        -------
        list of Node
            Inline nodes, with adjacent text merged

        """
        nodes: list[Node] = []
        for token in tokens:
            handler = self._handlers.get(token.get("type", ""))
            if handler is not None:
                node = handler(token)
                if node is not None:
                    nodes.append(node)
            elif "children" in token:
                nodes.extend(self._children(token))
            elif token.get("raw"):
                nodes.append(Text(content=token["raw"]))
        return _merge_text(nodes)

    def _children(self, token: dict[str, Any]) -> list[Node]:
        children = token.get("children", [])
        if self._depth >= MAX_INLINE_DEPTH:
            logger.debug("Inline nesting deeper than %d levels; keeping the text only", MAX_INLINE_DEPTH)
            return _merge_text([Text(content=flatten_tokens(children))])
        self._depth += 1
        try:
            return self.convert(children)
        finally:
            self._depth -= 1

    def _handle_text_token(self, token: dict[str, Any]) -> Text:
        return Text(content=unescape(token.get("raw", "")))

    def _handle_strong_token(self, token: dict[str, Any]) -> Strong:
        return Strong(content=self._children(token))

    def _handle_emphasis_token(self, token: dict[str, Any]) -> Emphasis:
        return Emphasis(content=self._children(token))

    def _handle_strikethrough_token(self, token: dict[str, Any]) -> Strikethrough:
        return Strikethrough(content=self._children(token))

    def _handle_codespan_token(self, token: dict[str, Any]) -> Code:
        return Code(content=token.get("raw", ""))

    def _handle_link_token(self, token: dict[str, Any]) -> Link:
        """Handle link token; the URL arrives percent-encoded from mistune."""
        attrs = token.get("attrs", {})
        title = attrs.get("title")
        return Link(url=attrs.get("url", ""), content=self._children(token), title=unescape(title) if title else None)

    def _handle_image_token(self, token: dict[str, Any]) -> Image:
        """Handle image token; the description becomes plain alt text."""
        attrs = token.get("attrs", {})
        title = attrs.get("title")
        return Image(
            url=attrs.get("url", ""),
            alt_text=extract_text(self._children(token)),
            title=unescape(title) if title else None,
        )

    def _handle_linebreak_token(self, token: dict[str, Any]) -> LineBreak:
        return LineBreak(soft=False)

    def _handle_softbreak_token(self, token: dict[str, Any]) -> LineBreak:
        return LineBreak(soft=True)

    def _handle_inline_html_token(self, token: dict[str, Any]) -> Text:
        """Handle inline_html token; HTML is never passed through."""
        return Text(content=token.get("raw", ""))

    def _handle_footnote_ref_token(self, token: dict[str, Any]) -> FootnoteReference:
        """Handle footnote_ref token; mistune only emits it for defined labels."""
        return FootnoteReference(identifier=normalize_label(token.get("raw", "")))


__all__ = ["InlineParser", "LinkReference", "flatten_tokens"]
