"""
Reading Order Module

Orders the lines or words of each page top-to-bottom, then left-to-right.

OCR boxes for items on the same visual row rarely share exact
y-coordinates, so rows are grouped by vertical overlap rather than equality:
two items are on the same row unless one ends above the other's midpoint.
Sorting never mutates its input; it returns new ordered sequences.
"""
from functools import cmp_to_key
from typing import Sequence

from core.models import DocumentLayout, LayoutItem, Page


def overlaps_vertically(item_a: LayoutItem, item_b: LayoutItem) -> bool:
    """
    Whether two items share a row under the half-overlap rule.

    A is above B when A's lower edge is above B's midpoint; A is below B
    when A's midpoint is below B's lower edge. Otherwise they overlap by
    more than half and are treated as the same row.
    """
    a = item_a.bounding_box
    b = item_b.bounding_box
    if a.lower_y < b.mid_y:
        return False
    if a.mid_y > b.lower_y:
        return False
    return True


def compare_reading_order(item_a: LayoutItem, item_b: LayoutItem) -> float:
    """
    Comparator for reading order.

    Returns:
        Negative if A precedes B, positive if A follows B, and the
        difference of upper-left x when both share a row
    """
    a = item_a.bounding_box
    b = item_b.bounding_box
    if overlaps_vertically(item_a, item_b):
        return a.upper_x - b.upper_x
    return -1 if a.lower_y < b.mid_y else 1


_reading_order_key = cmp_to_key(compare_reading_order)


def sort_page(page: Sequence[LayoutItem]) -> Page:
    """
    Sort one page into reading order.

    Args:
        page: Lines or words of a page

    Returns:
        New tuple in reading order (stable for ties)
    """
    return tuple(sorted(page, key=_reading_order_key))


def sort_layout(layout: DocumentLayout) -> DocumentLayout:
    """Sort every page of a document layout, returning a new layout."""
    return DocumentLayout(
        file_name=layout.file_name,
        pages=tuple(sort_page(page) for page in layout.pages)
    )
