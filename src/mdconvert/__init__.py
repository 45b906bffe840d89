"""mdconvert - Markdown to styled, self-contained HTML.

mdconvert parses Markdown (CommonMark blocks and inlines plus the GitHub
extensions: tables, task lists, strikethrough and footnotes, as well as
front matter and description lists) into a typed document tree, renders the
tree to an HTML fragment and wraps it in a complete page styled with the
GitHub markdown stylesheet.

Raw HTML in the source is never passed through; it is always escaped. Any
text decodes to a document, so the only error the conversion itself raises
is :class:`DecodingError` for bytes that are not valid UTF-8.

Examples
--------
One call for the whole pipeline:

    >>> from mdconvert import markdown_to_html
    >>> page = markdown_to_html("# Notes\\n\\n- [x] done", source_name="notes.md")

Working with the tree directly:

    >>> from mdconvert import parse_markdown, render_html
    >>> doc = parse_markdown("Hello *world*")
    >>> render_html(doc)
    '<p>Hello <em>world</em></p>\\n'

Converting files:

    >>> from mdconvert import convert_file
    >>> convert_file("README.md")  # writes README.html
    PosixPath('README.html')

See Also
--------
mdconvert.ast : document tree node definitions and utilities
mdconvert.cli : the ``mdconvert`` command

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

__version__ = "1.0.0"

from mdconvert.api import (
    convert_file,
    default_output_path,
    markdown_file_to_html,
    markdown_to_html,
    parse_markdown,
    render_html,
)
from mdconvert.ast.nodes import Document
from mdconvert.exceptions import (
    DecodingError,
    FileAccessError,
    FileError,
    FileNotFoundError,
    InvalidOptionsError,
    MdConvertError,
    OutputWriteError,
    RenderingError,
    ValidationError,
)
from mdconvert.options import DocumentShellOptions, HtmlRendererOptions, MarkdownParserOptions
from mdconvert.parsers.markdown import MarkdownParser
from mdconvert.renderers.document import DocumentShellComposer
from mdconvert.renderers.html import HtmlRenderer

__all__ = [
    "__version__",
    # Conversion functions
    "parse_markdown",
    "render_html",
    "markdown_to_html",
    "markdown_file_to_html",
    "convert_file",
    "default_output_path",
    # Pipeline components
    "MarkdownParser",
    "HtmlRenderer",
    "DocumentShellComposer",
    "Document",
    # Options
    "MarkdownParserOptions",
    "HtmlRendererOptions",
    "DocumentShellOptions",
    # Exceptions
    "MdConvertError",
    "ValidationError",
    "InvalidOptionsError",
    "DecodingError",
    "FileError",
    "FileNotFoundError",
    "FileAccessError",
    "RenderingError",
    "OutputWriteError",
]
