#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for HTML rendering and document shell composition."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from mdconvert.constants import (
    DEFAULT_BODY_CLASS,
    DEFAULT_CSS_MODE,
    DEFAULT_DOCUMENT_LANGUAGE,
    DEFAULT_FOOTNOTE_BACKREFS,
    DEFAULT_HEADING_IDS,
    DEFAULT_SAFE_LINKS,
    DEFAULT_SOFT_BREAK,
    GITHUB_MARKDOWN_CSS_URL,
    CssMode,
    SoftBreakMode,
)
from mdconvert.options.base import BaseRendererOptions

_SOFT_BREAK_MODES = ("newline", "space", "br")
_CSS_MODES = ("link", "embed", "none")


# src/mdconvert/options/html.py
@dataclass(frozen=True)
class HtmlRendererOptions(BaseRendererOptions):
    """Configuration options for rendering a document tree to an HTML fragment.

    Parameters
    ----------
    heading_ids : bool, default False
        Add GitHub-style slug ``id`` attributes to headings
    soft_break : {"newline", "space", "br"}, default "newline"
        How a soft line break (a plain newline inside a paragraph) is emitted
    safe_links : bool, default True
        Replace ``javascript:``, ``vbscript:``, ``file:`` and non-image
        ``data:`` URLs with an empty href/src
    footnote_backrefs : bool, default True
        Append a back-reference link to each rendered footnote

    """

    heading_ids: bool = field(
        default=DEFAULT_HEADING_IDS,
        metadata={"help": "Add slug id attributes to headings", "importance": "core"},
    )
    soft_break: SoftBreakMode = field(
        default=DEFAULT_SOFT_BREAK,
        metadata={"help": "Soft line break output: newline, space or br", "choices": _SOFT_BREAK_MODES},
    )
    safe_links: bool = field(
        default=DEFAULT_SAFE_LINKS,
        metadata={"help": "Blank out dangerous link and image URLs", "importance": "security"},
    )
    footnote_backrefs: bool = field(
        default=DEFAULT_FOOTNOTE_BACKREFS,
        metadata={"help": "Add back-reference links to footnotes", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate enumerated fields.

        Raises
        ------
        ValueError
            If soft_break is not a known mode.

        """
        if self.soft_break not in _SOFT_BREAK_MODES:
            raise ValueError(f"soft_break must be one of {_SOFT_BREAK_MODES}, got {self.soft_break!r}")


@dataclass(frozen=True)
class DocumentShellOptions(BaseRendererOptions):
    """Configuration options for wrapping a body fragment in a full HTML page.

    Parameters
    ----------
    css_mode : {"link", "embed", "none"}, default "link"
        Link the GitHub markdown stylesheet, embed the bundled copy in a
        ``<style>`` element, or emit no stylesheet
    css_url : str
        Stylesheet URL used in ``link`` mode
    body_class : str, default "markdown-body"
        CSS class of the element wrapping the body fragment
    language : str, default "en"
        Value of the ``<html lang>`` attribute
    title : str or None, default None
        Page title; when unset the title is taken from the front matter
        ``title`` key, then from the source filename

    """

    css_mode: CssMode = field(
        default=DEFAULT_CSS_MODE,
        metadata={"help": "Stylesheet handling: link, embed or none", "choices": _CSS_MODES, "importance": "core"},
    )
    css_url: str = field(
        default=GITHUB_MARKDOWN_CSS_URL,
        metadata={"help": "Stylesheet URL for link mode", "importance": "advanced"},
    )
    body_class: str = field(
        default=DEFAULT_BODY_CLASS,
        metadata={"help": "CSS class of the content wrapper", "importance": "advanced"},
    )
    language: str = field(
        default=DEFAULT_DOCUMENT_LANGUAGE,
        metadata={"help": "Document language for <html lang>", "importance": "advanced"},
    )
    title: Optional[str] = field(
        default=None,
        metadata={"help": "Page title (defaults to front matter title or file name)", "importance": "core"},
    )

    def __post_init__(self) -> None:
        """Validate enumerated fields.

        Raises
        ------
        ValueError
            If css_mode is not a known mode or body_class is empty.

        """
        if self.css_mode not in _CSS_MODES:
            raise ValueError(f"css_mode must be one of {_CSS_MODES}, got {self.css_mode!r}")
        if not self.body_class.strip():
            raise ValueError("body_class must not be empty")
