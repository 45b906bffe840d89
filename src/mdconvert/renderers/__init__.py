#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconvert/renderers/__init__.py
"""Renderers turning a document tree into HTML.

- html: body fragment rendering (HtmlRenderer)
- document: full-page shell around a fragment (DocumentShellComposer)
"""

from mdconvert.renderers.base import BaseRenderer, InlineContentMixin
from mdconvert.renderers.document import DocumentShellComposer
from mdconvert.renderers.html import HtmlRenderer

__all__ = ["BaseRenderer", "DocumentShellComposer", "HtmlRenderer", "InlineContentMixin"]
