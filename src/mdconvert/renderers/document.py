#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdconvert/renderers/document.py
"""Full-page HTML document composition.

:class:`DocumentShellComposer` wraps a rendered body fragment in a complete
HTML page: doctype, ``<head>`` with charset, viewport, title and stylesheet,
and a ``<body>`` holding the fragment inside an ``<article>`` carrying the
``markdown-body`` class that the GitHub stylesheet targets.

The page is produced from the ``document.html.jinja`` template with
autoescaping on; only the body fragment and the stylesheet, which are
generated by this package, are marked safe.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from importlib.resources import files
from pathlib import PurePath
from typing import Any, Mapping

from jinja2 import Environment, PackageLoader, Template, select_autoescape
from markupsafe import Markup

from mdconvert.constants import DEFAULT_DOCUMENT_TITLE, DOCUMENT_TEMPLATE_NAME, GITHUB_CSS_ASSET_NAME
from mdconvert.exceptions import InvalidOptionsError, RenderingError
from mdconvert.options.html import DocumentShellOptions

logger = logging.getLogger(__name__)

# Metadata keys copied into <meta name=...> tags
_META_TAG_KEYS = ("author", "description", "keywords")


@lru_cache(maxsize=1)
def _document_template() -> Template:
    # nosemgrep: python.flask.security.xss.audit.direct-use-of-jinja2.direct-use-of-jinja2
    env = Environment(
        loader=PackageLoader("mdconvert", "renderers/templates"),
        autoescape=select_autoescape(enabled_extensions=("html", "html.jinja"), default_for_string=True),
        trim_blocks=True,
        keep_trailing_newline=True,
    )
    return env.get_template(DOCUMENT_TEMPLATE_NAME)


@lru_cache(maxsize=1)
def load_bundled_stylesheet() -> str:
    """Return the bundled GitHub-style stylesheet used in ``embed`` mode."""
    return files("mdconvert.renderers").joinpath("assets").joinpath(GITHUB_CSS_ASSET_NAME).read_text(encoding="utf-8")


class DocumentShellComposer:
    """Wrap an HTML body fragment in a complete, styled HTML document.

    Parameters
    ----------
    options : DocumentShellOptions or None, default = None
        Page options (stylesheet mode, title, language, wrapper class)

    Examples
    --------
        >>> composer = DocumentShellComposer()
        >>> page = composer.compose("<p>Hi</p>\\n", source_name="notes.md")
        >>> page.startswith("<!DOCTYPE html>")
        True
        >>> "<title>notes</title>" in page
        True

    """

    def __init__(self, options: DocumentShellOptions | None = None):
        """Initialize the composer with options."""
        if options is not None and not isinstance(options, DocumentShellOptions):
            raise InvalidOptionsError(
                component_name="document shell",
                expected_type=DocumentShellOptions,
                received_type=type(options),
            )
        self.options: DocumentShellOptions = options or DocumentShellOptions()

    def resolve_title(self, metadata: Mapping[str, Any] | None = None, source_name: str | None = None) -> str:
        """Pick the page title.

        The explicit ``title`` option wins, then a non-empty front matter
        ``title``, then the source file name without its extension.
        """
        if self.options.title:
            return self.options.title
        if metadata:
            title = metadata.get("title")
            if title is not None and str(title).strip():
                return str(title).strip()
        if source_name:
            stem = PurePath(source_name).stem
            if stem:
                return stem
        return DEFAULT_DOCUMENT_TITLE

    def compose(
        self,
        body: str,
        *,
        metadata: Mapping[str, Any] | None = None,
        source_name: str | None = None,
    ) -> str:
        """Compose the full HTML page.

        Parameters
        ----------
        body : str
            Rendered HTML body fragment, inserted as-is
        metadata : Mapping[str, Any], optional
            Document metadata (front matter)
        source_name : str, optional
            Source file name, used for the fallback title

        Returns
        -------
        str
            Complete HTML document

        Raises
        ------
        RenderingError
            If the bundled stylesheet cannot be loaded in ``embed`` mode

        """
        stylesheet = ""
        if self.options.css_mode == "embed":
            try:
                stylesheet = load_bundled_stylesheet()
            except OSError as e:
                raise RenderingError(
                    f"Could not load the bundled stylesheet: {e}", rendering_stage="document_shell", original_error=e
                ) from e

        meta_tags = []
        for key in _META_TAG_KEYS:
            value = (metadata or {}).get(key)
            if value is not None and str(value).strip():
                meta_tags.append((key, str(value)))

        title = self.resolve_title(metadata, source_name)
        logger.debug("Composing document %r (css mode %s)", title, self.options.css_mode)

        return _document_template().render(
            language=self.options.language,
            title=title,
            meta_tags=meta_tags,
            css_mode=self.options.css_mode,
            css_url=self.options.css_url,
            stylesheet=Markup(stylesheet),
            body_class=self.options.body_class,
            content=Markup(body),
        )


__all__ = ["DocumentShellComposer", "load_bundled_stylesheet"]
