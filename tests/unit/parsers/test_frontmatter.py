#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for front matter extraction."""

import pytest

from mdconvert.ast import Heading, Paragraph, ThematicBreak
from mdconvert.options import MarkdownParserOptions
from mdconvert.parsers.frontmatter import extract_frontmatter, find_frontmatter_end, parse_frontmatter_block
from mdconvert.parsers.markdown import MarkdownParser


@pytest.mark.unit
class TestFindFrontmatterEnd:
    """Tests for locating the closing delimiter."""

    def test_closing_delimiter_found(self):
        assert find_frontmatter_end(["---", "a: 1", "---", "body"]) == 2

    def test_no_closing_delimiter(self):
        assert find_frontmatter_end(["---", "a: 1", "body"]) is None

    def test_must_start_on_first_line(self):
        assert find_frontmatter_end(["", "---", "a: 1", "---"]) is None

    def test_trailing_whitespace_on_delimiters(self):
        assert find_frontmatter_end(["--- ", "a: 1", "---\t"]) == 2

    def test_empty_document(self):
        assert find_frontmatter_end([]) is None


@pytest.mark.unit
class TestExtractFrontmatter:
    """Tests for splitting metadata off the document."""

    def test_basic_block(self):
        """Test that the block and both delimiters are consumed."""
        metadata, consumed = extract_frontmatter(["---", "title: Hi", "---", "# Body"])
        assert metadata == {"title": "Hi"}
        assert consumed == 3

    def test_missing_close_means_no_front_matter(self):
        """Test that an unclosed block is not front matter."""
        assert extract_frontmatter(["---", "no closing delimiter"]) == ({}, 0)

    def test_empty_block(self):
        """Test that '---' directly followed by '---' yields no metadata."""
        assert extract_frontmatter(["---", "---", "body"]) == ({}, 2)


@pytest.mark.unit
class TestParseFrontmatterBlock:
    """Tests for converting the block text to metadata."""

    def test_scalars_are_kept(self):
        metadata = parse_frontmatter_block("title: Notes\ncount: 3\ndraft: true\nempty:")
        assert metadata == {"title": "Notes", "count": 3, "draft": True, "empty": None}

    def test_dates_become_iso_strings(self):
        assert parse_frontmatter_block("date: 2024-01-15") == {"date": "2024-01-15"}

    def test_scalar_lists_are_joined(self):
        assert parse_frontmatter_block("tags: [python, markdown]") == {"tags": "python, markdown"}

    def test_nested_mappings_are_flattened_to_strings(self):
        assert parse_frontmatter_block("author: {name: Ann}") == {"author": "{name: Ann}"}

    def test_invalid_yaml_falls_back_to_key_value_lines(self):
        """Test that a header YAML rejects still yields its key: value pairs."""
        metadata = parse_frontmatter_block("title: Notes: part 1\nauthor: 'Ann'")
        assert metadata == {"title": "Notes: part 1", "author": "Ann"}

    def test_non_mapping_yaml_without_pairs(self):
        """Test that a plain string block gives no metadata."""
        assert parse_frontmatter_block("just a sentence") == {}

    def test_blank_block(self):
        assert parse_frontmatter_block("  \n") == {}


@pytest.mark.unit
class TestFrontmatterInParser:
    """Tests for front matter handling in MarkdownParser."""

    def test_metadata_on_document(self):
        doc = MarkdownParser().parse("---\ntitle: Notes\n---\nBody")
        assert doc.metadata == {"title": "Notes"}
        assert len(doc.children) == 1
        assert isinstance(doc.children[0], Paragraph)

    def test_unclosed_block_is_markdown(self):
        """Test that an unclosed block renders as a rule and a paragraph."""
        doc = MarkdownParser().parse("---\ntitle: x")
        assert doc.metadata == {}
        assert isinstance(doc.children[0], ThematicBreak)
        assert isinstance(doc.children[1], Paragraph)

    def test_disabled(self):
        """Test that the block is ordinary Markdown when extraction is off."""
        doc = MarkdownParser(MarkdownParserOptions(parse_frontmatter=False)).parse("---\ntitle: Notes\n---\nBody")
        assert doc.metadata == {}
        assert isinstance(doc.children[0], ThematicBreak)
        assert isinstance(doc.children[1], Heading)
