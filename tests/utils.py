"""Test utilities for the mdconvert test suite.

This module provides helpers for rendering Markdown and for checking the
HTML the renderer produces.
"""

import re

from mdconvert import markdown_to_html
from mdconvert.options import HtmlRendererOptions, MarkdownParserOptions

# Void elements the renderer emits without a closing tag
VOID_ELEMENTS = frozenset({"br", "hr", "img", "input", "meta", "link"})

_TAG = re.compile(r"<(/?)([a-zA-Z][a-zA-Z0-9]*)\b[^>]*>")


def render_fragment(
    markdown: str,
    parser_options: MarkdownParserOptions | None = None,
    renderer_options: HtmlRendererOptions | None = None,
) -> str:
    """Convert Markdown to an HTML body fragment (no page shell)."""
    return markdown_to_html(
        markdown,
        parser_options=parser_options,
        renderer_options=renderer_options,
        standalone=False,
    )


def assert_tags_balanced(html: str) -> None:
    """Assert that every non-void element in ``html`` is closed in nesting order."""
    stack: list[str] = []
    for match in _TAG.finditer(html):
        closing, name = match.group(1), match.group(2).lower()
        if name in VOID_ELEMENTS:
            continue
        if not closing:
            stack.append(name)
            continue
        assert stack, f"Closing </{name}> without an open element"
        opened = stack.pop()
        assert opened == name, f"Expected </{opened}>, found </{name}>"
    assert not stack, f"Unclosed elements: {stack}"

