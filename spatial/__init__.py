"""Spatial analysis package - Line grouping and reading order from OCR geometry."""

from .grouping import (
    get_line_word,
    is_line_break_point,
    get_paragraph_lines,
    get_page_lines,
    get_page_words,
    get_doc_lines,
    get_word_list,
    group_documents,
)

from .reading_order import (
    overlaps_vertically,
    compare_reading_order,
    sort_page,
    sort_layout,
)

__all__ = [
    # Grouping
    'get_line_word',
    'is_line_break_point',
    'get_paragraph_lines',
    'get_page_lines',
    'get_page_words',
    'get_doc_lines',
    'get_word_list',
    'group_documents',

    # Reading order
    'overlaps_vertically',
    'compare_reading_order',
    'sort_page',
    'sort_layout',
]
