#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the frozen options classes."""

from dataclasses import FrozenInstanceError

import pytest

from mdconvert.constants import GITHUB_MARKDOWN_CSS_URL
from mdconvert.exceptions import ValidationError
from mdconvert.options import DocumentShellOptions, HtmlRendererOptions, MarkdownParserOptions


@pytest.mark.unit
class TestDefaults:
    """Tests for default option values."""

    def test_markdown_defaults(self):
        options = MarkdownParserOptions()
        assert options.parse_frontmatter
        assert options.parse_tables
        assert options.parse_footnotes
        assert options.parse_task_lists
        assert options.parse_strikethrough
        assert options.parse_definition_lists

    def test_html_defaults(self):
        options = HtmlRendererOptions()
        assert options.heading_ids is False
        assert options.soft_break == "newline"
        assert options.safe_links is True
        assert options.footnote_backrefs is True

    def test_document_defaults(self):
        options = DocumentShellOptions()
        assert options.css_mode == "link"
        assert options.css_url == GITHUB_MARKDOWN_CSS_URL
        assert options.body_class == "markdown-body"
        assert options.language == "en"
        assert options.title is None


@pytest.mark.unit
class TestImmutability:
    """Tests for frozen options and cloning."""

    def test_options_are_frozen(self):
        options = HtmlRendererOptions()
        with pytest.raises(FrozenInstanceError):
            options.heading_ids = True  # type: ignore[misc]

    def test_create_updated_returns_new_instance(self):
        original = MarkdownParserOptions()
        updated = original.create_updated(parse_tables=False)
        assert updated.parse_tables is False
        assert original.parse_tables is True
        assert updated is not original

    def test_create_updated_rejects_unknown_fields(self):
        with pytest.raises(ValidationError) as exc_info:
            DocumentShellOptions().create_updated(colour="blue")
        assert exc_info.value.parameter_name == "colour"
        assert "DocumentShellOptions" in exc_info.value.message

    def test_create_updated_validates_values(self):
        with pytest.raises(ValueError):
            HtmlRendererOptions().create_updated(soft_break="tab")


@pytest.mark.unit
class TestFromMapping:
    """Tests for building options from configuration mappings."""

    def test_from_mapping(self):
        options = HtmlRendererOptions.from_mapping({"heading_ids": True, "soft_break": "br"})
        assert options.heading_ids is True
        assert options.soft_break == "br"

    def test_empty_mapping_gives_defaults(self):
        assert DocumentShellOptions.from_mapping({}) == DocumentShellOptions()

    def test_unknown_key(self):
        with pytest.raises(ValidationError):
            MarkdownParserOptions.from_mapping({"parse_emoji": True})


@pytest.mark.unit
class TestValidation:
    """Tests for value checks in __post_init__."""

    def test_css_mode(self):
        with pytest.raises(ValueError, match="css_mode"):
            DocumentShellOptions(css_mode="inline")

    def test_soft_break(self):
        with pytest.raises(ValueError, match="soft_break"):
            HtmlRendererOptions(soft_break="tab")
