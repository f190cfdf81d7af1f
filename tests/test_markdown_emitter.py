"""Tests for Markdown emission."""

import pytest

from pdf_structure_markdown.classifiers import StructureClassifier
from pdf_structure_markdown.errors import EmissionError
from pdf_structure_markdown.generators import MarkdownEmitter
from pdf_structure_markdown.generators.syntax import (
    escape_text,
    format_image,
    parse_image,
    split_table_row,
    unescape_text,
)
from pdf_structure_markdown.models import BlockRole, ImageReference


@pytest.fixture
def emitter():
    return MarkdownEmitter()


def _cell(classified, text_block, text, row, column, group=0, index=0):
    return classified(text_block(text, index=index), BlockRole.TABLE_CELL,
                      table_row=row, table_column=column, group_id=group)


class TestImages:
    def test_image_syntax_is_verbatim(self, emitter, classified, image_block):
        block = classified(
            image_block(path="test/data/picture.png", alt="Test Image 1", title="Picture 1"),
            BlockRole.IMAGE,
        )
        assert emitter.emit([block]) == '![Test Image 1](test/data/picture.png "Picture 1")\n'

    def test_alt_defaults_to_stem_and_title_is_optional(self, emitter, classified, image_block):
        block = classified(image_block(path="assets/chart-2.png"), BlockRole.IMAGE)
        assert emitter.emit([block]) == "![chart-2](assets/chart-2.png)\n"

    def test_special_characters(self):
        image = ImageReference('my pics/a.png', alt="a [b]", title='Say "hi"')
        assert format_image(image) == '![a \\[b\\]](<my pics/a.png> "Say \\"hi\\"")'
        assert parse_image(format_image(image)) == image

    def test_absolute_path_is_rejected(self, emitter, classified, image_block):
        block = classified(image_block(path="/tmp/picture.png", index=3, page_number=2), BlockRole.IMAGE)
        with pytest.raises(EmissionError) as info:
            emitter.emit([block])
        assert info.value.page_number == 2
        assert info.value.block_index == 3
        assert "not a relative reference" in info.value.reason

    def test_remote_url_is_rejected(self, emitter, classified, image_block):
        block = classified(image_block(path="https://example.com/a.png"), BlockRole.IMAGE)
        with pytest.raises(EmissionError):
            emitter.emit([block])


class TestTables:
    def test_two_by_two_grid(self, emitter, text_block):
        blocks = [
            text_block("Name", x=72, y=100, index=0),
            text_block("Qty", x=232, y=100, index=1),
            text_block("Apple", x=72, y=118, index=2),
            text_block("3", x=232, y=118, index=3),
        ]
        classified = StructureClassifier().classify(blocks).blocks
        assert emitter.emit(classified) == (
            "| Name | Qty |\n"
            "|---|---|\n"
            "| Apple | 3 |\n"
        )

    def test_rows_share_column_count(self, emitter, classified, text_block):
        cells = [
            _cell(classified, text_block, "a", 0, 0),
            _cell(classified, text_block, "b", 0, 1),
            _cell(classified, text_block, "c", 0, 2),
            _cell(classified, text_block, "d", 1, 0),
            _cell(classified, text_block, "e", 2, 2),
        ]
        lines = emitter.emit(cells).splitlines()
        assert len(lines) == 4
        assert all(len(split_table_row(line)) == 3 for line in lines)
        assert lines[2] == "| d |  |  |"

    def test_pipes_are_escaped(self, emitter, classified, text_block):
        cells = [
            _cell(classified, text_block, "a|b", 0, 0),
            _cell(classified, text_block, "c", 0, 1),
            _cell(classified, text_block, "d", 1, 0),
            _cell(classified, text_block, "e", 1, 1),
        ]
        first = emitter.emit(cells).splitlines()[0]
        assert first == "| a\\|b | c |"
        assert split_table_row(first) == ["a|b", "c"]

    def test_malformed_grid_is_rejected(self, emitter, classified, text_block):
        cells = [
            _cell(classified, text_block, "a", 0, 0),
            _cell(classified, text_block, "b", 0, 0, index=1),
        ]
        with pytest.raises(EmissionError, match="share row 0, column 0"):
            emitter.emit(cells)

    def test_group_change_starts_new_table(self, emitter, classified, text_block):
        cells = [
            _cell(classified, text_block, "a", 0, 0, group=0),
            _cell(classified, text_block, "b", 0, 1, group=0),
            _cell(classified, text_block, "c", 0, 0, group=1),
            _cell(classified, text_block, "d", 0, 1, group=1),
        ]
        assert emitter.emit(cells) == "| a | b |\n|---|---|\n\n| c | d |\n|---|---|\n"


class TestLists:
    def test_ordered_numbering_increases_from_start(self, emitter, classified, text_block):
        items = [
            classified(text_block(f"{n}. item"), BlockRole.LIST_ITEM_ORDERED,
                       list_number=n, list_text=f"item {i}", group_id=0)
            for i, n in enumerate([3, 7, 9])
        ]
        assert emitter.emit(items) == "3. item 0\n4. item 1\n5. item 2\n"

    def test_unordered_items(self, emitter, classified, text_block):
        items = [
            classified(text_block("• a"), BlockRole.LIST_ITEM_UNORDERED, list_text="a", group_id=0),
            classified(text_block("• b"), BlockRole.LIST_ITEM_UNORDERED, list_text="b", group_id=0),
        ]
        assert emitter.emit(items) == "- a\n- b\n"

    def test_kind_change_closes_list(self, emitter, classified, text_block):
        items = [
            classified(text_block("1. a"), BlockRole.LIST_ITEM_ORDERED, list_number=1, list_text="a", group_id=0),
            classified(text_block("• b"), BlockRole.LIST_ITEM_UNORDERED, list_text="b", group_id=1),
            classified(text_block("after"), BlockRole.PARAGRAPH),
        ]
        assert emitter.emit(items) == "1. a\n\n- b\n\nafter\n"

    def test_adjacent_ordered_lists_are_separated(self, emitter, lines):
        result = StructureClassifier().classify(lines("1. a", "3. c", "4. d"))
        assert result.roles() == [BlockRole.LIST_ITEM_ORDERED] * 3
        assert result.blocks[0].group_id != result.blocks[1].group_id
        assert emitter.emit(result.blocks) == "1. a\n\n<!-- -->\n\n3. c\n4. d\n"

    def test_adjacent_unordered_lists_are_separated(self, emitter, classified, text_block):
        items = [
            classified(text_block("• a"), BlockRole.LIST_ITEM_UNORDERED, list_text="a", group_id=0),
            classified(text_block("• b"), BlockRole.LIST_ITEM_UNORDERED, list_text="b", group_id=1),
        ]
        assert emitter.emit(items) == "- a\n\n<!-- -->\n\n- b\n"

    def test_numeral_text_in_unordered_item_is_escaped(self, emitter, classified, text_block):
        item = classified(text_block("7. seven"), BlockRole.LIST_ITEM_UNORDERED, list_text="7. seven", group_id=0)
        assert emitter.emit([item]) == "- 7\\. seven\n"


class TestTextBlocks:
    def test_headings_and_paragraphs(self, emitter, classified, text_block):
        blocks = [
            classified(text_block("Title", size=24), BlockRole.HEADING, heading_level=1),
            classified(text_block("Body text."), BlockRole.PARAGRAPH),
            classified(text_block("Part", size=18), BlockRole.HEADING, heading_level=2),
        ]
        assert emitter.emit(blocks) == "# Title\n\nBody text.\n\n## Part\n"

    def test_heading_level_is_clamped(self, classified, text_block):
        block = classified(text_block("Deep"), BlockRole.HEADING, heading_level=5)
        assert MarkdownEmitter(max_heading_level=3).emit([block]) == "### Deep\n"

    def test_trailing_hash_in_heading(self, emitter, classified, text_block):
        block = classified(text_block("Learn C#"), BlockRole.HEADING, heading_level=1)
        assert emitter.emit([block]) == "# Learn C\\#\n"

    def test_empty_input(self, emitter):
        assert emitter.emit([]) == ""

    @pytest.mark.parametrize(
        "text, escaped",
        [
            ("# not a heading", "\\# not a heading"),
            ("1. not a list", "1\\. not a list"),
            ("- not a list", "\\- not a list"),
            ("| not a table", "\\| not a table"),
            ("> not a quote", "\\> not a quote"),
            ("![not](an image)", "\\![not](an image)"),
            ("---", "\\---"),
            ("2.5 million", "2.5 million"),
            ("-dash", "-dash"),
            ("```", "\\```"),
            ("~~~ python", "\\~~~ python"),
            ("``inline``", "``inline``"),
            ("[ref]: https://example.com", "\\[ref]: https://example.com"),
            ("[not a definition]", "[not a definition]"),
            ("<div>", "\\<div>"),
        ],
    )
    def test_block_syntax_is_escaped(self, text, escaped):
        assert escape_text(text) == escaped
        assert unescape_text(escaped) == text
