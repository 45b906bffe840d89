#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Integration tests for the public conversion API.

These tests run the whole parse -> render -> compose pipeline, including
file input and output.
"""

from pathlib import Path
from unittest.mock import patch

import pytest
from utils import assert_tags_balanced, render_fragment

from mdconvert import (
    DecodingError,
    Document,
    DocumentShellOptions,
    FileAccessError,
    FileError,
    FileNotFoundError,
    HtmlRendererOptions,
    MarkdownParserOptions,
    OutputWriteError,
    RenderingError,
    convert_file,
    default_output_path,
    markdown_file_to_html,
    markdown_to_html,
    parse_markdown,
    render_html,
)


@pytest.mark.integration
class TestMarkdownToHtml:
    """Tests for in-memory conversion."""

    def test_standalone_page(self):
        page = markdown_to_html("---\ntitle: Notes\n---\n# Hello\n\nWorld")
        assert page.startswith("<!DOCTYPE html>\n")
        assert "<title>Notes</title>" in page
        assert '<article class="markdown-body">\n<h1>Hello</h1>\n<p>World</p>\n</article>' in page

    def test_fragment_only(self):
        assert markdown_to_html("# Hello", standalone=False) == "<h1>Hello</h1>\n"

    def test_source_name_gives_title(self):
        assert "<title>meeting</title>" in markdown_to_html("text", source_name="meeting.md")

    def test_bytes_input(self):
        assert render_fragment("**é**".encode("utf-8")) == "<p><strong>é</strong></p>\n"

    def test_invalid_bytes(self):
        with pytest.raises(DecodingError) as exc_info:
            markdown_to_html(b"fine\n\xc3\x28", source_name="broken.md")
        assert exc_info.value.byte_offset == 5
        assert "broken.md" in exc_info.value.message

    def test_all_options(self):
        page = markdown_to_html(
            "# Title\n\nline one\nline two",
            parser_options=MarkdownParserOptions(parse_tables=False),
            renderer_options=HtmlRendererOptions(heading_ids=True, soft_break="br"),
            shell_options=DocumentShellOptions(css_mode="none", title="Custom"),
        )
        assert '<h1 id="title">Title</h1>' in page
        assert "<p>line one<br>\nline two</p>" in page
        assert "<title>Custom</title>" in page
        assert "<link" not in page

    def test_parse_then_render(self):
        doc = parse_markdown("Hello *world*")
        assert isinstance(doc, Document)
        assert render_html(doc) == "<p>Hello <em>world</em></p>\n"


@pytest.mark.integration
class TestEndToEndRendering:
    """Tests for complete documents through the pipeline."""

    def test_sample_document(self, sample_markdown):
        page = markdown_to_html(sample_markdown, source_name="sample.md")
        assert "<title>Sample Document</title>" in page
        assert '<meta name="author" content="Test Author">' in page
        assert "<h1>Sample Document</h1>" in page
        assert "<del>removed</del>" in page
        assert '<pre><code class="language-python">' in page
        assert "print(&quot;" not in page
        assert "&lt;Hello, World!&gt;" in page
        assert '<tr><td style="text-align:left">Bob</td><td style="text-align:right"></td></tr>' in page
        assert "<blockquote>\n<p>A quoted line\ncontinued lazily.</p>\n</blockquote>" in page
        assert "<dl>\n<dt>Markdown</dt>\n<dd>A lightweight markup language.</dd>\n</dl>" in page
        assert '<li><input type="checkbox" checked disabled> Written</li>' in page
        assert '<section class="footnotes">' in page
        assert '<a href="https://example.com" title="Example">link</a>' in page

    def test_sample_fragment_is_balanced(self, sample_markdown):
        assert_tags_balanced(render_fragment(sample_markdown))

    def test_output_is_deterministic(self, sample_markdown):
        assert markdown_to_html(sample_markdown) == markdown_to_html(sample_markdown)

    def test_raw_html_is_escaped(self):
        fragment = render_fragment('<script>alert("x")</script>\n\nText <b>bold</b>')
        assert fragment == (
            '<p>&lt;script&gt;alert("x")&lt;/script&gt;</p>\n<p>Text &lt;b&gt;bold&lt;/b&gt;</p>\n'
        )

    def test_javascript_link_is_neutralized(self):
        assert render_fragment("[x](javascript:alert(1))") == '<p><a href="">x</a></p>\n'

    def test_crlf_input(self):
        assert render_fragment("# A\r\n\r\ntext\r\n") == "<h1>A</h1>\n<p>text</p>\n"

    def test_unclosed_front_matter(self):
        assert render_fragment("---\ntitle: x") == "<hr>\n<p>title: x</p>\n"

    def test_unresolved_footnote_is_literal(self):
        assert render_fragment("text[^2]\n\n[^1]: one") == "<p>text[^2]</p>\n"

    def test_footnote_round_trip(self):
        assert render_fragment("text[^1]\n\n[^1]: note") == (
            '<p>text<sup class="footnote-ref"><a href="#fn-1" id="fnref-1">1</a></sup></p>\n'
            '<section class="footnotes">\n<ol>\n'
            '<li id="fn-1">\n<p>note <a href="#fnref-1" class="footnote-backref">↩</a></p>\n</li>\n'
            "</ol>\n</section>\n"
        )

    def test_repeated_footnote_reference_gets_its_own_backref(self):
        fragment = render_fragment("a[^1] b[^1]\n\n[^1]: n")
        assert 'id="fnref-1-2"' in fragment
        assert 'href="#fnref-1-2"' in fragment
        assert fragment.count('class="footnote-backref"') == 2

    def test_heading_slug_avoids_footnote_id(self):
        fragment = render_fragment(
            "# fn-1\n\ntext[^1]\n\n[^1]: note", renderer_options=HtmlRendererOptions(heading_ids=True)
        )
        assert '<h1 id="fn-1-2">' in fragment
        assert fragment.count('id="fn-1"') == 1

    @pytest.mark.parametrize("marker", ["*", "~~"])
    def test_deeply_nested_inline_markup_converts(self, marker):
        fragment = render_fragment(f"{marker}a " * 1000 + "b" + f" a{marker}" * 1000)
        assert_tags_balanced(fragment)


@pytest.mark.integration
class TestDefaultOutputPath:
    """Tests for deriving the output path."""

    @pytest.mark.parametrize(
        "source,expected",
        [
            ("docs/readme.md", Path("docs/readme.html")),
            ("notes.markdown", Path("notes.html")),
            ("notes", Path("notes.html")),
            ("page.html", Path("page.html.html")),
        ],
    )
    def test_paths(self, source, expected):
        assert default_output_path(source) == expected


@pytest.mark.integration
class TestFileConversion:
    """Tests for file-based conversion."""

    def test_convert_next_to_input(self, tmp_path):
        source = tmp_path / "notes.md"
        source.write_text("# Notes\n", encoding="utf-8")
        written = convert_file(source)
        assert written == tmp_path / "notes.html"
        html_text = written.read_text(encoding="utf-8")
        assert "<h1>Notes</h1>" in html_text
        assert "<title>notes</title>" in html_text

    def test_convert_to_explicit_path(self, tmp_path):
        source = tmp_path / "in.md"
        source.write_bytes(b"text")
        target = tmp_path / "out" / "page.html"
        target.parent.mkdir()
        assert convert_file(str(source), str(target)) == target
        assert target.exists()

    def test_markdown_file_to_html(self, tmp_path):
        source = tmp_path / "doc.md"
        source.write_bytes("Café".encode("utf-8"))
        assert "<p>Café</p>" in markdown_file_to_html(source)

    def test_missing_input(self, tmp_path):
        missing = tmp_path / "missing.md"
        with pytest.raises(FileNotFoundError) as exc_info:
            convert_file(missing)
        assert exc_info.value.message == f"File not found: {missing}"
        assert not (tmp_path / "missing.html").exists()

    def test_unreadable_input(self, tmp_path):
        source = tmp_path / "secret.md"
        source.write_text("x", encoding="utf-8")
        with patch("pathlib.Path.read_bytes", side_effect=PermissionError(13, "Permission denied")):
            with pytest.raises(FileAccessError) as exc_info:
                markdown_file_to_html(source)
        assert exc_info.value.message == f"Permission denied: {source}"

    def test_directory_input(self, tmp_path):
        with pytest.raises(FileError) as exc_info:
            markdown_file_to_html(tmp_path)
        assert not isinstance(exc_info.value, FileNotFoundError)

    def test_invalid_utf8_file(self, tmp_path):
        source = tmp_path / "latin.md"
        source.write_bytes(b"na\xefve")
        with pytest.raises(DecodingError) as exc_info:
            convert_file(source)
        assert exc_info.value.byte_offset == 2
        assert "latin.md" in exc_info.value.message
        assert not (tmp_path / "latin.html").exists()

    def test_unwritable_output(self, tmp_path):
        source = tmp_path / "in.md"
        source.write_text("x", encoding="utf-8")
        target = tmp_path / "no-such-dir" / "out.html"
        with pytest.raises(OutputWriteError) as exc_info:
            convert_file(source, target)
        assert isinstance(exc_info.value, RenderingError)
        assert exc_info.value.message == f"Could not write output file: {target}"
