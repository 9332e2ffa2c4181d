"""Utilities package - Helper functions for bbox, text, and date processing."""

from .bbox_utils import (
    select_vertices,
    bounding_box_from_raw,
    envelope,
    span_box,
    horizontal_gap,
    overlaps_horizontally,
    straddles,
    shares_horizontal_plane,
)

from .text_utils import (
    iter_page_texts,
    contains_phrase,
    first_pattern_match,
    trim_start,
)

from .date_utils import (
    parse_date,
    format_date,
    get_formatted_date,
)

__all__ = [
    # BBox utils
    'select_vertices',
    'bounding_box_from_raw',
    'envelope',
    'span_box',
    'horizontal_gap',
    'overlaps_horizontally',
    'straddles',
    'shares_horizontal_plane',

    # Text utils
    'iter_page_texts',
    'contains_phrase',
    'first_pattern_match',
    'trim_start',

    # Date utils
    'parse_date',
    'format_date',
    'get_formatted_date',
]
