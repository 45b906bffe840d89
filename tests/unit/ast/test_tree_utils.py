#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for tree helpers and the structural validator."""

import pytest

from mdconvert.ast import (
    Code,
    DefinitionDescription,
    DefinitionList,
    DefinitionTerm,
    Document,
    Emphasis,
    FootnoteDefinition,
    FootnoteReference,
    Heading,
    Image,
    LineBreak,
    Link,
    List,
    ListItem,
    Paragraph,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
    ValidationVisitor,
    collect_footnote_definitions,
    extract_text,
    get_node_children,
    iter_nodes,
    normalize_label,
)


@pytest.mark.unit
class TestExtractText:
    """Tests for extract_text."""

    def test_nested_inlines(self):
        heading = Heading(
            level=1,
            content=[Text(content="Hello "), Emphasis(content=[Strong(content=[Text(content="world")])])],
        )
        assert extract_text(heading) == "Hello world"

    def test_code_image_and_breaks(self):
        nodes = [
            Code(content="x()"),
            LineBreak(soft=True),
            Image(url="a.png", alt_text="pic"),
            LineBreak(),
            Link(url="/", content=[Text(content="link")]),
        ]
        assert extract_text(nodes) == "x() pic link"


@pytest.mark.unit
class TestNormalizeLabel:
    """Tests for normalize_label."""

    @pytest.mark.parametrize(
        "label,expected",
        [("Foo", "foo"), ("  Foo\n  Bar ", "foo bar"), ("ẞ", "ss"), ("a\tb", "a b")],
    )
    def test_normalization(self, label, expected):
        assert normalize_label(label) == expected


@pytest.mark.unit
class TestTraversal:
    """Tests for get_node_children and iter_nodes."""

    def test_document_order(self):
        doc = Document(children=[Paragraph(content=[Text(content="a"), Strong(content=[Text(content="b")])])])
        assert [type(node).__name__ for node in iter_nodes(doc)] == ["Document", "Paragraph", "Text", "Strong", "Text"]

    def test_table_children(self):
        header = TableRow(cells=[TableCell()], is_header=True)
        row = TableRow(cells=[TableCell()])
        assert get_node_children(Table(header=header, rows=[row])) == [header, row]

    def test_definition_list_children(self):
        term = DefinitionTerm()
        description = DefinitionDescription()
        assert get_node_children(DefinitionList(items=[(term, [description])])) == [term, description]

    def test_leaves_have_no_children(self):
        assert get_node_children(Text(content="x")) == []
        assert get_node_children(Code(content="x")) == []


@pytest.mark.unit
class TestCollectFootnoteDefinitions:
    """Tests for the footnote lookup table."""

    def test_first_definition_wins(self):
        first = FootnoteDefinition(identifier="n", content=[Paragraph(content=[Text(content="first")])])
        second = FootnoteDefinition(identifier="n", content=[Paragraph(content=[Text(content="second")])])
        table = collect_footnote_definitions(Document(children=[first, second]))
        assert table["n"] is first

    def test_nested_definitions_are_found(self):
        inner = FootnoteDefinition(identifier="deep")
        doc = Document(children=[List(ordered=False, items=[ListItem(children=[inner])])])
        assert collect_footnote_definitions(doc) == {"deep": inner}


@pytest.mark.unit
class TestValidationVisitor:
    """Tests for structural validation."""

    def test_valid_tree(self):
        doc = Document(
            children=[
                Paragraph(content=[Text(content="x"), FootnoteReference(identifier="1")]),
                FootnoteDefinition(identifier="1", content=[Paragraph(content=[Text(content="note")])]),
            ]
        )
        validator = ValidationVisitor()
        doc.accept(validator)
        assert validator.errors == []

    def test_strict_mode_raises(self):
        with pytest.raises(ValueError, match="heading level"):
            Document(children=[Heading(level=7)]).accept(ValidationVisitor())

    def test_collecting_mode(self):
        doc = Document(children=[Text(content="loose inline"), Heading(level=0)])
        validator = ValidationVisitor(strict=False)
        doc.accept(validator)
        assert len(validator.errors) == 2

    def test_dangling_footnote_reference(self):
        validator = ValidationVisitor(strict=False)
        Document(children=[Paragraph(content=[FootnoteReference(identifier="x")])]).accept(validator)
        assert validator.errors == ["Footnote reference [^x] has no definition"]

    def test_ragged_table(self):
        header = TableRow(cells=[TableCell(), TableCell()], is_header=True)
        table = Table(header=header, rows=[TableRow(cells=[TableCell()])], alignments=[None, None])
        validator = ValidationVisitor(strict=False)
        Document(children=[table]).accept(validator)
        assert validator.errors == ["Table row 0 has 1 cells, header has 2"]

    def test_block_inside_paragraph(self):
        validator = ValidationVisitor(strict=False)
        Document(children=[Paragraph(content=[Paragraph()])]).accept(validator)
        assert len(validator.errors) == 1
