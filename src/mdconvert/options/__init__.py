#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for parsing, rendering and page composition.

Each stage of the conversion pipeline has its own frozen dataclass.
"""

from __future__ import annotations

from mdconvert.options.base import BaseParserOptions, BaseRendererOptions, CloneFrozenMixin
from mdconvert.options.html import DocumentShellOptions, HtmlRendererOptions
from mdconvert.options.markdown import MarkdownParserOptions

__all__ = [
    "CloneFrozenMixin",
    "BaseParserOptions",
    "BaseRendererOptions",
    "MarkdownParserOptions",
    "HtmlRendererOptions",
    "DocumentShellOptions",
]
