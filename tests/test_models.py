"""Tests for the data models."""

import pytest

from pdf_structure_markdown.errors import EmissionError
from pdf_structure_markdown.models import (
    BlockKind,
    BlockRole,
    BoundingBox,
    ClassifiedBlock,
    ImageReference,
    PageObjects,
    PositionedBlock,
    RawImage,
    RawTextRun,
    TableGrid,
)


class TestBoundingBox:
    def test_derived_coordinates(self):
        box = BoundingBox(10, 20, 30, 40)
        assert box.x2 == 40
        assert box.y2 == 60
        assert box.center_x == 25
        assert box.center_y == 40
        assert box.area == 1200

    def test_negative_size_rejected(self):
        with pytest.raises(ValueError, match="Width"):
            BoundingBox(0, 0, -1, 5)
        with pytest.raises(ValueError, match="Height"):
            BoundingBox(0, 0, 1, -5)

    def test_from_corners_normalises_order(self):
        box = BoundingBox.from_corners(50, 80, 10, 20)
        assert (box.x, box.y, box.width, box.height) == (10, 20, 40, 60)

    def test_overlap_and_gap(self):
        left = BoundingBox(0, 0, 10, 10)
        right = BoundingBox(15, 5, 10, 10)
        assert left.horizontal_overlap(right) == 0
        assert left.horizontal_gap(right) == 5
        assert left.vertical_overlap(right) == 5
        assert not left.overlaps_horizontally(right)
        assert left.overlaps_horizontally(right, tolerance=5)
        assert left.overlaps_vertically(right)

    def test_merge_and_scale(self):
        merged = BoundingBox(0, 0, 10, 10).merge_with(BoundingBox(20, 5, 10, 10))
        assert merged == BoundingBox(0, 0, 30, 15)
        assert merged.scaled(2) == BoundingBox(0, 0, 60, 30)

    def test_dict_conversion(self):
        box = BoundingBox(1.5, 2.5, 3, 4)
        assert box.to_dict() == {"x": 1.5, "y": 2.5, "width": 3, "height": 4}

    def test_contains_point(self):
        box = BoundingBox(0, 0, 10, 10)
        assert box.contains_point(5, 5)
        assert not box.contains_point(12, 5)
        assert box.contains_point(12, 5, margin=2)


class TestImageReference:
    def test_alt_falls_back_to_stem(self):
        assert ImageReference("images/chart.png").resolved_alt == "chart"
        assert ImageReference("images/chart.png", alt="Sales").resolved_alt == "Sales"

    @pytest.mark.parametrize("path", ["images/a.png", "a.png", "./img/b c.jpg", "page1-image1.jpeg",
                                      "../assets/a.png", "img/../../a.png"])
    def test_relative_paths(self, path):
        assert ImageReference(path).is_relative

    @pytest.mark.parametrize(
        "path",
        ["", " a.png", "/abs/a.png", "C:\\img\\a.png", "http://example.com/a.png",
         "data:image/png;base64,AAAA", "/../a.png"],
    )
    def test_non_relative_paths(self, path):
        assert not ImageReference(path).is_relative


class TestPageObjects:
    def test_objects_are_split_by_type(self):
        run = RawTextRun(BoundingBox(0, 0, 10, 10), "hi")
        image = RawImage(BoundingBox(0, 20, 10, 10), ImageReference("a.png"))
        page = PageObjects(page_number=3, objects=[run, image])

        assert isinstance(page.objects, tuple)
        assert page.text_runs == (run,)
        assert page.images == (image,)
        assert len(page) == 2

    def test_baseline_defaults_to_box_bottom(self):
        run = RawTextRun(BoundingBox(0, 10, 10, 12), "hi")
        assert run.effective_baseline == 22
        assert RawTextRun(BoundingBox(0, 10, 10, 12), "hi", baseline=19).effective_baseline == 19


class TestPositionedBlock:
    def test_text_block_requires_text(self):
        with pytest.raises(ValueError):
            PositionedBlock(bbox=BoundingBox(0, 0, 1, 1), kind=BlockKind.TEXT)

    def test_image_block_requires_image(self):
        with pytest.raises(ValueError):
            PositionedBlock(bbox=BoundingBox(0, 0, 1, 1), kind=BlockKind.IMAGE)

    def test_to_dict(self, text_block):
        data = text_block("Hello", index=4).to_dict()
        assert data["kind"] == "text"
        assert data["text"] == "Hello"
        assert data["index"] == 4
        assert data["image"] is None


class TestClassifiedBlock:
    def test_list_item_text_strips_marker(self, text_block):
        block = ClassifiedBlock(
            block=text_block("1. Apples"),
            role=BlockRole.LIST_ITEM_ORDERED,
            list_number=1,
            list_text="Apples",
        )
        assert block.text == "Apples"

    def test_with_role_clears_role_fields(self, text_block):
        block = ClassifiedBlock(
            block=text_block("- Apples"),
            role=BlockRole.LIST_ITEM_UNORDERED,
            list_text="Apples",
            group_id=3,
        )
        paragraph = block.with_role(BlockRole.PARAGRAPH)
        assert paragraph.role is BlockRole.PARAGRAPH
        assert paragraph.list_text is None
        assert paragraph.group_id is None
        assert paragraph.text == "- Apples"

    def test_signature_ignores_geometry_and_group(self, text_block):
        a = ClassifiedBlock(text_block("Name", x=72, y=100), BlockRole.TABLE_CELL,
                            table_row=0, table_column=0, group_id=1)
        b = ClassifiedBlock(text_block("Name", x=300, y=500, index=9), BlockRole.TABLE_CELL,
                            table_row=0, table_column=0, group_id=7)
        assert a.signature() == b.signature()

    def test_is_list_item(self):
        assert BlockRole.LIST_ITEM_ORDERED.is_list_item
        assert BlockRole.LIST_ITEM_UNORDERED.is_list_item
        assert not BlockRole.TABLE_CELL.is_list_item


class TestTableGrid:
    def _cell(self, text_block, text, row, column, index=0):
        return ClassifiedBlock(text_block(text, index=index), BlockRole.TABLE_CELL,
                               table_row=row, table_column=column, group_id=0)

    def test_grid_compacts_positions(self, text_block):
        grid = TableGrid.from_cells([
            self._cell(text_block, "a", 2, 5),
            self._cell(text_block, "b", 2, 9),
            self._cell(text_block, "c", 4, 5),
            self._cell(text_block, "d", 4, 9),
        ])
        assert (grid.row_count, grid.column_count) == (2, 2)
        assert grid.row_texts() == [["a", "b"], ["c", "d"]]

    def test_missing_cells_are_padded(self, text_block):
        grid = TableGrid.from_cells([
            self._cell(text_block, "a", 0, 0),
            self._cell(text_block, "b", 0, 1),
            self._cell(text_block, "c", 1, 0),
        ])
        assert grid.row_texts() == [["a", "b"], ["c", ""]]

    def test_duplicate_slot_rejected(self, text_block):
        with pytest.raises(EmissionError, match="share row 0, column 0"):
            TableGrid.from_cells([
                self._cell(text_block, "a", 0, 0),
                self._cell(text_block, "b", 0, 0, index=1),
            ])

    def test_missing_position_rejected(self, text_block):
        cell = ClassifiedBlock(text_block("a"), BlockRole.TABLE_CELL, table_row=0)
        with pytest.raises(EmissionError, match="without row/column"):
            TableGrid.from_cells([cell])

    def test_non_cell_rejected(self, text_block):
        with pytest.raises(EmissionError, match="paragraph block inside table"):
            TableGrid.from_cells([ClassifiedBlock(text_block("a"), BlockRole.PARAGRAPH)])

    def test_empty_rejected(self):
        with pytest.raises(EmissionError):
            TableGrid.from_cells([])
