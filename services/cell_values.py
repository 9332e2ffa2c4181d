"""
Cell Value Extraction - Computes template field values for one document.

Each cell section obtains a raw value with its search or input method:
- pattern: first regular expression match in the full page texts
- topPhrase / leftPhrase: the text positioned below / after an anchor phrase
- customValue: the section's literal value
- today: the caller-supplied date string

The raw value is then optionally reinterpreted as a date, suffixed with
append characters and stripped of leading whitespace. Absent data always
yields an empty string rather than an error.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, Optional, Sequence

from core.constants import DEFAULT_DATE_FORMAT
from core.models import (
    BoundingBox,
    CellSection,
    DataCell,
    DocumentLayout,
    DocumentText,
    LayoutItem,
    Line,
    SearchMethod,
)
from utils.bbox_utils import overlaps_horizontally, shares_horizontal_plane, span_box
from utils.date_utils import get_formatted_date
from utils.text_utils import first_pattern_match, trim_start

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtractionContext:
    """Everything a cell section needs to compute its value for one document."""
    doc_text: DocumentText
    layout: DocumentLayout
    date_today: str
    default_date_format: str = DEFAULT_DATE_FORMAT
    date_parse_default: Optional[datetime] = None


@dataclass(frozen=True)
class Anchor:
    """First occurrence of an anchor phrase in the sorted layout."""
    page_index: int
    line_index: int
    start_index: int
    end_index: int
    bounding_box: BoundingBox


def get_phrase_bounding_box(item: LayoutItem, start_index: int, end_index: int) -> BoundingBox:
    """
    Bounding box of the words spanning a substring of a line.

    Uses the upper-left corner of the first word and the lower-right corner
    of the last word overlapping the inclusive span. Falls back to the whole
    item when no word overlaps (e.g. a phrase made only of spaces).
    """
    if not isinstance(item, Line):
        return item.bounding_box

    covering = [
        w for w in item.words
        if w.end_index >= start_index and w.start_index <= end_index
    ]
    if not covering:
        return item.bounding_box
    return span_box(covering[0].bounding_box, covering[-1].bounding_box)


def find_anchor(layout: DocumentLayout, phrase: str) -> Optional[Anchor]:
    """
    Find the first occurrence of a phrase, scanning pages then sorted lines.

    Args:
        layout: Sorted document layout
        phrase: Anchor phrase searched as a substring of each line's text

    Returns:
        Anchor, or None if the phrase is never found
    """
    for page_index, page in enumerate(layout.pages):
        for line_index, item in enumerate(page):
            start_index = item.text.find(phrase)
            if start_index == -1:
                continue
            end_index = start_index + len(phrase) - 1
            return Anchor(
                page_index=page_index,
                line_index=line_index,
                start_index=start_index,
                end_index=end_index,
                bounding_box=get_phrase_bounding_box(item, start_index, end_index)
            )
    return None


def get_value_from_left_phrase(
    page: Sequence[LayoutItem],
    anchor: Anchor,
    phrase_count: int = 1
) -> str:
    """
    Text following a left anchor phrase.

    Text after the anchor on its own line is occurrence #1; otherwise the
    next line is. Each further count advances one line. Counting stops at
    the end of the anchor's page, yielding an empty string.
    """
    line_text = page[anchor.line_index].text
    suffix = line_text[anchor.end_index + 1:]

    count = 0
    value = ""
    if suffix:
        count = 1
        value = suffix

    index = anchor.line_index
    while count < phrase_count:
        index += 1
        if index >= len(page):
            return ""
        value = page[index].text
        count += 1

    return value


def get_value_from_top_phrase(
    page: Sequence[LayoutItem],
    anchor: Anchor,
    phrase_count: int = 1
) -> str:
    """
    Text positioned below a top anchor phrase.

    Candidates are later lines on the anchor's page whose x-range overlaps
    the anchor's and which do not share a horizontal plane with the anchor
    (or with the previous qualifying line). Returns the `phrase_count`-th
    candidate, or an empty string when the page ends first.
    """
    reference = anchor.bounding_box
    count = 0

    for item in page[anchor.line_index + 1:]:
        box = item.bounding_box
        if not overlaps_horizontally(box, anchor.bounding_box):
            continue
        if shares_horizontal_plane(reference, box):
            continue
        count += 1
        if count >= phrase_count:
            return item.text
        reference = box

    return ""


def get_value_from_position(cell_sect: CellSection, context: ExtractionContext) -> str:
    """Locate a value relative to the first occurrence of the anchor phrase."""
    anchor = find_anchor(context.layout, cell_sect.phrase_or_value)
    if anchor is None:
        logger.debug(
            "Anchor %r not found in %s",
            cell_sect.phrase_or_value,
            context.layout.file_name
        )
        return ""

    page = context.layout.pages[anchor.page_index]
    if cell_sect.search_or_input_method is SearchMethod.LEFT_PHRASE:
        return get_value_from_left_phrase(page, anchor, cell_sect.phrase_count)
    return get_value_from_top_phrase(page, anchor, cell_sect.phrase_count)


def get_value_from_pattern(cell_sect: CellSection, context: ExtractionContext) -> str:
    """First match of the section's regular expression, page by page."""
    return first_pattern_match(context.doc_text, cell_sect.phrase_or_value) or ""


def get_custom_value(cell_sect: CellSection, context: ExtractionContext) -> str:
    return cell_sect.phrase_or_value


def get_today_value(cell_sect: CellSection, context: ExtractionContext) -> str:
    return context.date_today


def get_no_value(cell_sect: CellSection, context: ExtractionContext) -> str:
    return ""


METHOD_HANDLERS: Dict[SearchMethod, Callable[[CellSection, ExtractionContext], str]] = {
    SearchMethod.PATTERN: get_value_from_pattern,
    SearchMethod.TOP_PHRASE: get_value_from_position,
    SearchMethod.LEFT_PHRASE: get_value_from_position,
    SearchMethod.CUSTOM_VALUE: get_custom_value,
    SearchMethod.TODAY: get_today_value,
    SearchMethod.NONE: get_no_value,
}


def post_process(value: str, cell_sect: CellSection, context: ExtractionContext) -> str:
    """Apply date formatting, append characters and trim leading whitespace."""
    if cell_sect.date_format or cell_sect.days_added:
        value = get_formatted_date(
            value,
            cell_sect.date_format or context.default_date_format,
            cell_sect.days_added,
            context.date_parse_default
        )
    if cell_sect.append_chars:
        value += cell_sect.append_chars
    return trim_start(value)


def get_cell_sect_value(cell_sect: CellSection, context: ExtractionContext) -> str:
    """
    Compute one cell section's value.

    Args:
        cell_sect: Template cell section
        context: Document being extracted

    Returns:
        The post-processed value (possibly empty)

    Raises:
        re.error: If a pattern section holds an invalid regular expression
    """
    handler = METHOD_HANDLERS[cell_sect.search_or_input_method]
    return post_process(handler(cell_sect, context), cell_sect, context)


def get_cell_value(data_cell: DataCell, context: ExtractionContext) -> str:
    """Concatenate the values of a data cell's sections, in order."""
    return ''.join(
        get_cell_sect_value(cell_sect, context)
        for cell_sect in data_cell.cell_sects
    )
