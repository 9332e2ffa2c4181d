"""
Bounding box utilities for the extraction engine.

Handles vertex selection from raw OCR boxes and the envelope/plane geometry
shared by line building, sorting and anchor searches.
"""
from typing import Dict, Iterable, List, Tuple

from core.models import BoundingBox, Point


def select_vertices(raw_box: Dict) -> Tuple[List[Dict], bool]:
    """
    Pick the populated vertex list of a raw OCR bounding box.

    PDF extractions carry `normalizedVertices`, image extractions carry
    `vertices`; exactly one of them is populated.

    Args:
        raw_box: Dict with `vertices` and/or `normalizedVertices`

    Returns:
        Tuple of (vertex dicts, whether they are normalized)
    """
    vertices = raw_box.get('vertices') or []
    if vertices:
        return vertices, False
    return raw_box.get('normalizedVertices') or [], True


def bounding_box_from_raw(raw_box: Dict) -> BoundingBox:
    """
    Convert a raw OCR bounding box into a BoundingBox.

    The OCR service omits zero-valued coordinates, so missing keys read as 0.
    Boxes with fewer than four corners are padded with the origin.
    """
    vertices, normalized = select_vertices(raw_box)
    points = [Point(v.get('x', 0) or 0, v.get('y', 0) or 0) for v in vertices[:4]]
    while len(points) < 4:
        points.append(Point())
    return BoundingBox(vertices=tuple(points), normalized=normalized)


def envelope(boxes: Iterable[BoundingBox]) -> BoundingBox:
    """
    Outer envelope of several boxes.

    Takes the leftmost of the upper-left/lower-left x, the topmost of the
    upper-left/upper-right y, the rightmost of the upper-right/lower-right x
    and the lowest of the lower-right/lower-left y.

    Raises:
        ValueError: If `boxes` is empty
    """
    boxes = list(boxes)
    if not boxes:
        raise ValueError("Cannot envelope an empty set of boxes")

    return BoundingBox.from_rect(
        min(min(b.upper_left.x, b.lower_left.x) for b in boxes),
        min(min(b.upper_left.y, b.upper_right.y) for b in boxes),
        max(max(b.upper_right.x, b.lower_right.x) for b in boxes),
        max(max(b.lower_right.y, b.lower_left.y) for b in boxes),
        boxes[-1].normalized
    )


def span_box(first: BoundingBox, last: BoundingBox) -> BoundingBox:
    """Box from the upper-left of `first` to the lower-right of `last`."""
    return BoundingBox.from_rect(
        first.upper_x,
        first.upper_y,
        last.lower_x,
        last.lower_y,
        first.normalized
    )


def horizontal_gap(current: BoundingBox, following: BoundingBox) -> float:
    """Distance from the right edge of `current` to the left edge of `following`."""
    return following.upper_left.x - current.upper_right.x


def overlaps_horizontally(a: BoundingBox, b: BoundingBox) -> bool:
    """Whether the x-ranges of two boxes strictly overlap."""
    return a.lower_x > b.upper_x and a.upper_x < b.lower_x


def straddles(box: BoundingBox, y: float) -> bool:
    """Whether `y` lies strictly inside the vertical range of `box`."""
    return box.lower_y > y and box.upper_y < y


def shares_horizontal_plane(reference: BoundingBox, box: BoundingBox) -> bool:
    """
    Whether `box` sits on the same horizontal plane as `reference`.

    Two boxes share a plane when `box` spans the vertical midpoint of
    `reference`, i.e. they share more than half of their y-coordinates.
    """
    return straddles(box, reference.mid_y)
