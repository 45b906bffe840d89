#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/parsers/test_inline_parser.py
"""Unit tests for the inline Markdown scanner.

Tests cover:
- Emphasis, strong emphasis and strikethrough with the flanking rules
- Code spans and backslash escapes
- Inline, reference and auto links, and images
- Footnote references, resolved and unresolved
- Line breaks and entity references
- Degradation of unmatched delimiters to literal text
- Flattening of markup nested past the depth limit

"""

import pytest

from mdconvert.ast import (
    Code,
    Emphasis,
    FootnoteReference,
    Image,
    LineBreak,
    Link,
    Strikethrough,
    Strong,
    Text,
    extract_text,
)
from mdconvert.constants import MAX_INLINE_DEPTH
from mdconvert.parsers.inline import InlineParser, LinkReference, flatten_tokens


def parse(text, **kwargs):
    return InlineParser(**kwargs).parse(text)


@pytest.mark.unit
class TestEmphasis:
    """Tests for emphasis delimiter runs."""

    def test_strong(self):
        """Test that a double asterisk pair produces a Strong node."""
        assert parse("Some **bold** text") == [
            Text(content="Some "),
            Strong(content=[Text(content="bold")]),
            Text(content=" text"),
        ]

    @pytest.mark.parametrize("source", ["*text*", "_text_"])
    def test_single_delimiters_produce_emphasis(self, source):
        """Test that * and _ pairs both produce one Emphasis node."""
        assert parse(source) == [Emphasis(content=[Text(content="text")])]

    def test_triple_delimiters_nest_strong_in_emphasis(self):
        """Test that ***x*** becomes emphasis wrapping strong emphasis."""
        assert parse("***both***") == [Emphasis(content=[Strong(content=[Text(content="both")])])]

    def test_intraword_underscores_stay_literal(self):
        """Test that underscores inside a word do not open emphasis."""
        assert parse("snake_case_name") == [Text(content="snake_case_name")]

    def test_intraword_asterisks_open_emphasis(self):
        """Test that asterisks may emphasize part of a word."""
        assert parse("foo*bar*baz") == [
            Text(content="foo"),
            Emphasis(content=[Text(content="bar")]),
            Text(content="baz"),
        ]

    def test_unmatched_opener_is_literal(self):
        """Test that an opener without a closer stays as text."""
        assert parse("*foo") == [Text(content="*foo")]

    def test_surplus_delimiter_is_left_over(self):
        """Test that the unmatched part of a longer run stays literal."""
        assert parse("**foo*") == [Text(content="*"), Emphasis(content=[Text(content="foo")])]

    def test_delimiter_followed_by_space_cannot_open(self):
        """Test the left-flanking rule: '* a *' is not emphasis."""
        assert parse("* a *") == [Text(content="* a *")]

    def test_very_long_delimiter_run_keeps_its_text(self):
        """Test that a hundred-deep delimiter run still yields the enclosed text."""
        run = "*" * 100
        nodes = parse(f"{run}x{run}")
        assert "x" in extract_text(nodes)


@pytest.mark.unit
class TestStrikethrough:
    """Tests for ~~strikethrough~~."""

    def test_double_tilde(self):
        """Test that a double tilde pair produces a Strikethrough node."""
        assert parse("~~gone~~") == [Strikethrough(content=[Text(content="gone")])]

    def test_single_tilde_is_literal(self):
        """Test that single tildes are not strikethrough."""
        assert parse("~one~") == [Text(content="~one~")]

    def test_disabled(self):
        """Test that strikethrough can be switched off."""
        assert parse("~~gone~~", strikethrough=False) == [Text(content="~~gone~~")]


@pytest.mark.unit
class TestCodeSpans:
    """Tests for backtick code spans."""

    def test_code_span_content_is_literal(self):
        """Test that emphasis markers inside a code span are not interpreted."""
        assert parse("`a*b*c`") == [Code(content="a*b*c")]

    def test_longer_fence_allows_backticks_inside(self):
        """Test that a double backtick span may contain a single backtick."""
        assert parse("``a ` b``") == [Code(content="a ` b")]

    def test_one_space_is_stripped_from_each_side(self):
        """Test that a single surrounding space is removed."""
        assert parse("` `` `") == [Code(content="``")]

    def test_newline_becomes_space(self):
        """Test that line endings inside a code span become spaces."""
        assert parse("`a\nb`") == [Code(content="a b")]

    def test_unmatched_backticks_are_literal(self):
        """Test that an unclosed backtick run is text."""
        assert parse("`foo") == [Text(content="`foo")]

    def test_code_span_binds_tighter_than_emphasis(self):
        """Test that a code span interrupts an emphasis delimiter pair."""
        assert parse("*a `*` b*") == [Emphasis(content=[Text(content="a "), Code(content="*"), Text(content=" b")])]


@pytest.mark.unit
class TestEscapes:
    """Tests for backslash escapes and entity references."""

    def test_escaped_punctuation_is_literal(self):
        """Test that an escaped asterisk does not open emphasis."""
        assert parse(r"\*not emphasis\*") == [Text(content="*not emphasis*")]

    def test_backslash_before_letter_is_kept(self):
        """Test that a backslash before a non-punctuation character stays."""
        assert parse(r"\a") == [Text(content="\\a")]

    def test_entities_are_decoded(self):
        """Test that known entities decode and unknown ones stay literal."""
        assert parse("&copy; &amp; &#35; &bogus;") == [Text(content="© & # &bogus;")]

    def test_escaped_backslash_before_delimiter(self):
        """Test that an escaped backslash leaves the following delimiter active."""
        assert parse(r"\\*a*") == [Text(content="\\"), Emphasis(content=[Text(content="a")])]


@pytest.mark.unit
class TestLineBreaks:
    """Tests for soft and hard line breaks."""

    def test_soft_break(self):
        """Test that a plain newline is a soft break."""
        assert parse("a\nb") == [Text(content="a"), LineBreak(soft=True), Text(content="b")]

    def test_trailing_spaces_make_hard_break(self):
        """Test that two trailing spaces make a hard break."""
        assert parse("a  \nb") == [Text(content="a"), LineBreak(soft=False), Text(content="b")]

    def test_trailing_backslash_makes_hard_break(self):
        """Test that a backslash before the newline makes a hard break."""
        assert parse("a\\\nb") == [Text(content="a"), LineBreak(soft=False), Text(content="b")]


@pytest.mark.unit
class TestLinks:
    """Tests for links, images and autolinks."""

    def test_inline_link_with_title(self):
        """Test [text](url "title")."""
        assert parse('[text](https://example.com "Title")') == [
            Link(url="https://example.com", content=[Text(content="text")], title="Title")
        ]

    def test_link_destination_in_angle_brackets(self):
        """Test that a bracketed destination may contain spaces."""
        assert parse("[a](<my file.md>)") == [Link(url="my%20file.md", content=[Text(content="a")])]

    def test_link_without_closing_paren_is_literal(self):
        """Test that a link with no closing ')' degrades to text."""
        assert parse("[broken](no closing") == [Text(content="[broken](no closing")]

    def test_link_text_keeps_emphasis(self):
        """Test that emphasis inside link text is resolved."""
        assert parse("[*a*](/x)") == [Link(url="/x", content=[Emphasis(content=[Text(content="a")])])]

    def test_links_do_not_nest(self):
        """Test that an inner link deactivates the outer bracket."""
        nodes = parse("[a [b](/x)](/y)")
        assert [node for node in nodes if isinstance(node, Link)] == [Link(url="/x", content=[Text(content="b")])]
        assert extract_text(nodes) == "[a b](/y)"

    def test_image_alt_text_is_plain(self):
        """Test that image alt text is the plain text of its content."""
        assert parse("![alt *text*](img.png)") == [Image(url="img.png", alt_text="alt text")]

    def test_full_reference_link(self):
        """Test [text][label] against a definition."""
        references = {"foo": LinkReference(url="/url", title="T")}
        assert parse("[text][foo]", references=references) == [
            Link(url="/url", content=[Text(content="text")], title="T")
        ]

    def test_shortcut_reference_is_case_insensitive(self):
        """Test [Label] matching a lower-case definition."""
        references = {"foo": LinkReference(url="/url")}
        assert parse("[Foo]", references=references) == [Link(url="/url", content=[Text(content="Foo")])]

    def test_undefined_reference_is_literal(self):
        """Test that a reference with no definition stays as text."""
        assert parse("[nothing]") == [Text(content="[nothing]")]

    def test_uri_autolink(self):
        """Test <scheme:...> autolinks."""
        assert parse("<https://example.com>") == [
            Link(url="https://example.com", content=[Text(content="https://example.com")])
        ]

    def test_email_autolink(self):
        """Test <user@host> autolinks become mailto links."""
        assert parse("<user@example.com>") == [
            Link(url="mailto:user@example.com", content=[Text(content="user@example.com")])
        ]

    def test_raw_html_is_text(self):
        """Test that an HTML tag is not recognized as anything but text."""
        assert parse("<b>hi</b>") == [Text(content="<b>hi</b>")]


@pytest.mark.unit
class TestFootnoteReferences:
    """Tests for [^label] references."""

    def test_defined_reference(self):
        """Test that a reference with a known label becomes a FootnoteReference."""
        assert parse("text[^1]", footnotes=["1"]) == [
            Text(content="text"),
            FootnoteReference(identifier="1"),
        ]

    def test_reference_resolves_to_definition_identifier(self):
        """Test that labels match case-insensitively and use the definition's spelling."""
        assert parse("[^Note]", footnotes=["note"]) == [FootnoteReference(identifier="note")]

    def test_undefined_reference_is_literal(self):
        """Test that a reference without a definition stays bracketed text."""
        assert parse("text[^2]", footnotes=["1"]) == [Text(content="text[^2]")]


@pytest.mark.unit
class TestNestingLimit:
    """Tests for markup nested beyond the inline depth limit."""

    @staticmethod
    def _depth(nodes):
        deepest = 0
        stack = [(node, 1) for node in nodes]
        while stack:
            node, depth = stack.pop()
            deepest = max(deepest, depth)
            content = getattr(node, "content", None)
            if isinstance(content, list):
                stack.extend((child, depth + 1) for child in content)
        return deepest

    def test_nested_tokens_are_flattened_past_the_limit(self):
        """Test that tokens deeper than the limit keep only their text."""
        token = {"type": "text", "raw": "core"}
        for _ in range(MAX_INLINE_DEPTH * 3):
            token = {"type": "strong", "children": [token]}
        nodes = InlineParser().convert([token])
        assert self._depth(nodes) <= MAX_INLINE_DEPTH + 1
        assert extract_text(nodes) == "core"

    def test_deep_strikethrough_is_bounded(self):
        """Test that a thousand stacked ~~ openers parse without deep recursion."""
        nodes = parse("~~a " * 1000 + "b" + " a~~" * 1000)
        assert self._depth(nodes) <= MAX_INLINE_DEPTH + 1
        assert "b" in extract_text(nodes)

    def test_flatten_tokens(self):
        """Test plain text extraction from nested token dicts."""
        tokens = [
            {"type": "text", "raw": "a &amp; "},
            {"type": "emphasis", "children": [{"type": "codespan", "raw": "x"}]},
            {"type": "softbreak"},
            {"type": "inline_html", "raw": "<b>"},
        ]
        assert flatten_tokens(tokens) == "a & x <b>"
