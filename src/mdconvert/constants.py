#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for mdconvert.

This module centralizes the hardcoded values and default configuration
constants used across the package.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Markdown Parsing - Block and inline parsing defaults
3. HTML Rendering - Body fragment rendering defaults
4. Document Shell - Full-page wrapping defaults
5. Security Constants - URL filtering
6. CLI - Exit codes and file naming
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

SoftBreakMode = Literal["newline", "space", "br"]
CssMode = Literal["link", "embed", "none"]

# =============================================================================
# Markdown Parsing
# =============================================================================

DEFAULT_PARSE_FRONTMATTER = True
DEFAULT_PARSE_TABLES = True
DEFAULT_PARSE_FOOTNOTES = True
DEFAULT_PARSE_TASK_LISTS = True
DEFAULT_PARSE_STRIKETHROUGH = True
DEFAULT_PARSE_DEFINITION_LISTS = True

FRONTMATTER_DELIMITER = "---"

# Containers nested deeper than this are read as plain paragraph text
MAX_NESTING_DEPTH = 32

# Inline nodes nested deeper than this keep only the plain text of their content
MAX_INLINE_DEPTH = 32

# =============================================================================
# HTML Rendering
# =============================================================================

DEFAULT_HEADING_IDS = False
DEFAULT_SOFT_BREAK: SoftBreakMode = "newline"
DEFAULT_SAFE_LINKS = True
DEFAULT_FOOTNOTE_BACKREFS = True
DEFAULT_SLUG_MAX_LENGTH = 100

FOOTNOTE_ID_PREFIX = "fn-"
FOOTNOTE_REF_ID_PREFIX = "fnref-"
FOOTNOTE_BACKREF_SYMBOL = "↩"

# =============================================================================
# Document Shell
# =============================================================================

DEFAULT_CSS_MODE: CssMode = "link"
GITHUB_MARKDOWN_CSS_URL = "https://cdnjs.cloudflare.com/ajax/libs/github-markdown-css/4.0.0/github-markdown.min.css"
DEFAULT_BODY_CLASS = "markdown-body"
DEFAULT_DOCUMENT_LANGUAGE = "en"
DEFAULT_DOCUMENT_TITLE = "Document"
DOCUMENT_TEMPLATE_NAME = "document.html.jinja"
GITHUB_CSS_ASSET_NAME = "github-markdown.css"

# =============================================================================
# Security Constants
# =============================================================================

DANGEROUS_SCHEMES = frozenset({"javascript", "vbscript", "file", "data"})
SAFE_DATA_IMAGE_PREFIXES = (
    "data:image/png",
    "data:image/gif",
    "data:image/jpeg",
    "data:image/webp",
)

# =============================================================================
# CLI
# =============================================================================

HTML_EXTENSION = ".html"
CONFIG_ENV_VAR = "MDCONVERT_CONFIG"
CONFIG_FILENAMES = [".mdconvert.toml", ".mdconvert.yaml", ".mdconvert.yml", ".mdconvert.json"]
PYPROJECT_TOOL_SECTION = "mdconvert"

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_DECODING_ERROR = 6
EXIT_RENDERING_ERROR = 7
