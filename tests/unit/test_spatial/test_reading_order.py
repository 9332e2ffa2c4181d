"""
Unit tests for spatial.reading_order module.
"""
import pytest
from core.models import BoundingBox, DocumentLayout, Line
from spatial.reading_order import (
    overlaps_vertically,
    compare_reading_order,
    sort_page,
    sort_layout
)


def _line(text, x1, y1, x2, y2):
    return Line(words=(), text=text, bounding_box=BoundingBox.from_rect(x1, y1, x2, y2))


class TestOverlapsVertically:
    """Tests for overlaps_vertically function."""

    def test_same_row(self):
        """Test items overlapping by more than half share a row."""
        a = _line("a", 0, 0, 10, 20)
        b = _line("b", 50, 4, 60, 24)

        assert overlaps_vertically(a, b)
        assert overlaps_vertically(b, a)

    def test_different_rows(self):
        """Test stacked items do not share a row."""
        a = _line("a", 0, 0, 10, 20)
        b = _line("b", 0, 30, 10, 50)

        assert not overlaps_vertically(a, b)
        assert not overlaps_vertically(b, a)


class TestCompareReadingOrder:
    """Tests for compare_reading_order function."""

    def test_above(self):
        """Test an item above another precedes it."""
        assert compare_reading_order(_line("a", 0, 0, 10, 20), _line("b", 0, 30, 10, 50)) < 0

    def test_below(self):
        """Test an item below another follows it."""
        assert compare_reading_order(_line("a", 0, 30, 10, 50), _line("b", 0, 0, 10, 20)) > 0

    def test_same_row_left_to_right(self):
        """Test same-row items compare by upper-left x."""
        left = _line("left", 0, 2, 10, 22)
        right = _line("right", 100, 0, 110, 20)

        assert compare_reading_order(left, right) == -100
        assert compare_reading_order(right, left) == 100

    @pytest.mark.parametrize("a,b", [
        ((0, 0, 10, 20), (50, 4, 60, 24)),
        ((0, 0, 10, 20), (50, 10, 60, 30)),
        ((0, 10, 10, 30), (50, 0, 60, 20)),
        ((0, 0, 10, 20), (50, 11, 60, 31)),
        ((0, 0, 10, 20), (50, 30, 60, 50)),
        ((0, 0, 10, 100), (50, 40, 60, 50)),
    ])
    def test_agrees_with_row_predicate(self, a, b):
        """Test items compare by x exactly when they share a row."""
        item_a = _line("a", *a)
        item_b = _line("b", *b)

        same_row = compare_reading_order(item_a, item_b) == -50

        assert same_row is overlaps_vertically(item_a, item_b)


class TestSortPage:
    """Tests for sort_page function."""

    def test_reading_order(self):
        """Test top-to-bottom then left-to-right ordering."""
        page = [
            _line("total", 0, 100, 50, 120),
            _line("amount", 200, 2, 260, 22),
            _line("date", 0, 0, 40, 20),
            _line("value", 0, 40, 40, 60),
        ]

        result = sort_page(page)

        assert [item.text for item in result] == ["date", "amount", "value", "total"]

    def test_does_not_mutate_input(self):
        """Test input order is preserved."""
        page = [_line("b", 0, 30, 10, 50), _line("a", 0, 0, 10, 20)]

        result = sort_page(page)

        assert [item.text for item in page] == ["b", "a"]
        assert isinstance(result, tuple)

    def test_idempotent(self):
        """Test sorting a sorted page changes nothing."""
        page = [
            _line("c", 0, 60, 10, 80),
            _line("b", 50, 1, 60, 21),
            _line("a", 0, 0, 10, 20),
        ]

        once = sort_page(page)

        assert sort_page(once) == once

    def test_ties_are_stable(self):
        """Test items on the same row at the same x keep their order."""
        page = [_line("first", 0, 0, 10, 20), _line("second", 0, 2, 10, 22)]

        assert [item.text for item in sort_page(page)] == ["first", "second"]

    def test_empty_page(self):
        assert sort_page([]) == ()


class TestSortLayout:
    """Tests for sort_layout function."""

    def test_sorts_every_page(self):
        """Test each page is sorted independently."""
        layout = DocumentLayout(
            file_name="a.pdf",
            pages=(
                (_line("2", 0, 30, 10, 50), _line("1", 0, 0, 10, 20)),
                (),
                (_line("4", 50, 0, 60, 20), _line("3", 0, 0, 10, 20)),
            )
        )

        result = sort_layout(layout)

        assert result.file_name == "a.pdf"
        assert [[item.text for item in page] for page in result.pages] == [["1", "2"], [], ["3", "4"]]
        assert layout.pages[0][0].text == "2"
