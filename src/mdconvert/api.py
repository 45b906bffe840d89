#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconvert/api.py
"""Public conversion API.

The pipeline is ``parse -> render -> compose``:

    >>> from mdconvert import markdown_to_html
    >>> page = markdown_to_html("# Hello\\n\\nWorld", source_name="hello.md")
    >>> "<h1>Hello</h1>" in page
    True

:func:`convert_file` adds the file I/O around it and maps operating system
errors onto the package's exception types.
"""

from __future__ import annotations

import errno
import logging
from pathlib import Path
from typing import Optional, Union

from mdconvert.ast.nodes import Document
from mdconvert.constants import HTML_EXTENSION
from mdconvert.exceptions import FileAccessError, FileError, FileNotFoundError, OutputWriteError
from mdconvert.options.html import DocumentShellOptions, HtmlRendererOptions
from mdconvert.options.markdown import MarkdownParserOptions
from mdconvert.parsers.base import SourceInput
from mdconvert.parsers.markdown import MarkdownParser
from mdconvert.renderers.document import DocumentShellComposer
from mdconvert.renderers.html import HtmlRenderer
from mdconvert.utils.timing import debug_timer

logger = logging.getLogger(__name__)


def parse_markdown(
    source: SourceInput,
    options: Optional[MarkdownParserOptions] = None,
    *,
    source_name: Optional[str] = None,
) -> Document:
    """Parse Markdown source into a document tree.

    Parameters
    ----------
    source : str, bytes, Path, or stream
        Markdown source; bytes must be UTF-8
    options : MarkdownParserOptions, optional
        Parser options
    source_name : str, optional
        Name used in decoding error messages

    Returns
    -------
    Document
        The document tree

    Raises
    ------
    DecodingError
        If byte input is not valid UTF-8

    """
    with debug_timer(logger, "Parsing"):
        return MarkdownParser(options).parse(source, source_name=source_name)


def render_html(document: Document, options: Optional[HtmlRendererOptions] = None) -> str:
    """Render a document tree to an HTML body fragment."""
    with debug_timer(logger, "Rendering"):
        return HtmlRenderer(options).render_to_string(document)


def markdown_to_html(
    source: SourceInput,
    *,
    parser_options: Optional[MarkdownParserOptions] = None,
    renderer_options: Optional[HtmlRendererOptions] = None,
    shell_options: Optional[DocumentShellOptions] = None,
    source_name: Optional[str] = None,
    standalone: bool = True,
) -> str:
    """Convert Markdown to HTML.

    Parameters
    ----------
    source : str, bytes, Path, or stream
        Markdown source
    parser_options : MarkdownParserOptions, optional
        Which Markdown extensions to recognize
    renderer_options : HtmlRendererOptions, optional
        Fragment rendering options
    shell_options : DocumentShellOptions, optional
        Page options, used when ``standalone`` is True
    source_name : str, optional
        Source file name; used for the fallback page title and in errors
    standalone : bool, default True
        Return a complete HTML document. When False, return only the body fragment.

    Returns
    -------
    str
        HTML document or fragment

    Raises
    ------
    DecodingError
        If byte input is not valid UTF-8

    """
    document = parse_markdown(source, parser_options, source_name=source_name)
    body = render_html(document, renderer_options)
    if not standalone:
        return body
    return DocumentShellComposer(shell_options).compose(body, metadata=document.metadata, source_name=source_name)


def default_output_path(input_path: Union[str, Path]) -> Path:
    """Derive the output path for a source file: same location, ``.html`` extension.

    Examples
    --------
    >>> default_output_path("docs/readme.md")
    PosixPath('docs/readme.html')

    """
    path = Path(input_path)
    output = path.with_suffix(HTML_EXTENSION)
    if output == path:
        output = path.with_name(path.name + HTML_EXTENSION)
    return output


def _read_source(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except PermissionError as e:
        raise FileAccessError(str(path), original_error=e) from e
    except OSError as e:
        if e.errno == errno.ENOENT:
            raise FileNotFoundError(str(path), original_error=e) from e
        raise FileError(f"Could not read {path}: {e.strerror or e}", file_path=str(path), original_error=e) from e


def markdown_file_to_html(
    input_path: Union[str, Path],
    *,
    parser_options: Optional[MarkdownParserOptions] = None,
    renderer_options: Optional[HtmlRendererOptions] = None,
    shell_options: Optional[DocumentShellOptions] = None,
) -> str:
    """Read a Markdown file and return the standalone HTML page for it.

    Raises
    ------
    FileNotFoundError
        If the input file does not exist
    FileAccessError
        If the input file cannot be read because of permissions
    DecodingError
        If the input is not valid UTF-8

    """
    source_path = Path(input_path)
    return markdown_to_html(
        _read_source(source_path),
        parser_options=parser_options,
        renderer_options=renderer_options,
        shell_options=shell_options,
        source_name=source_path.name,
    )


def convert_file(
    input_path: Union[str, Path],
    output_path: Union[str, Path, None] = None,
    *,
    parser_options: Optional[MarkdownParserOptions] = None,
    renderer_options: Optional[HtmlRendererOptions] = None,
    shell_options: Optional[DocumentShellOptions] = None,
) -> Path:
    """Convert a Markdown file to a standalone HTML file.

    Parameters
    ----------
    input_path : str or Path
        Markdown file to read
    output_path : str or Path, optional
        Where to write the HTML; defaults to :func:`default_output_path`
    parser_options, renderer_options, shell_options : optional
        Options for each pipeline stage

    Returns
    -------
    Path
        The path written

    Raises
    ------
    FileNotFoundError
        If the input file does not exist
    FileAccessError
        If the input file cannot be read because of permissions
    DecodingError
        If the input is not valid UTF-8
    OutputWriteError
        If the output file cannot be written

    """
    source_path = Path(input_path)
    target_path = Path(output_path) if output_path is not None else default_output_path(source_path)

    logger.info("Converting %s -> %s", source_path, target_path)
    html_text = markdown_file_to_html(
        source_path,
        parser_options=parser_options,
        renderer_options=renderer_options,
        shell_options=shell_options,
    )

    try:
        target_path.write_text(html_text, encoding="utf-8")
    except OSError as e:
        raise OutputWriteError(str(target_path), original_error=e) from e

    logger.debug("Wrote %d characters to %s", len(html_text), target_path)
    return target_path


__all__ = [
    "parse_markdown",
    "render_html",
    "markdown_to_html",
    "markdown_file_to_html",
    "default_output_path",
    "convert_file",
]
