"""
Grouping Module

Groups OCR words into reading-order units:
- Line grouping: words of a paragraph joined into visual lines
- Word lists: every word of a page, for word-level extraction
- Document layouts: one grouped page per extraction response
"""
import logging
from typing import List, Optional, Sequence

from core.constants import BREAK_SPACE
from core.models import (
    DocumentLayout,
    DocumentText,
    Line,
    LineWord,
    Page,
    PageAnnotation,
    Paragraph,
    Word,
)
from utils.bbox_utils import envelope, horizontal_gap

logger = logging.getLogger(__name__)


def get_line_word(word: Word, line_text: str) -> LineWord:
    """
    Place a word at the end of the line text built so far.

    Args:
        word: Paragraph word
        line_text: Line text accumulated before this word

    Returns:
        LineWord with its inclusive character span in the line
    """
    text = word.text
    return LineWord(
        word=word,
        start_index=len(line_text),
        end_index=len(line_text) + len(text) - 1
    )


def is_line_break_point(current: Word, following: Word) -> bool:
    """
    Determine whether a SPACE break between two words ends the line.

    The line breaks when the space before the next word is at least as wide
    as the current word is tall.
    """
    gap = horizontal_gap(current.bounding_box, following.bounding_box)
    return gap >= current.bounding_box.height


def _close_line(line_words: List[LineWord], line_text: str) -> Line:
    return Line(
        words=tuple(line_words),
        text=line_text,
        bounding_box=envelope(w.bounding_box for w in line_words)
    )


def get_paragraph_lines(paragraph: Paragraph) -> List[Line]:
    """
    Get all lines within a paragraph.

    Words accumulate into the current line. A SPACE break that does not
    qualify as a line break point appends a single space and keeps the line
    open; any other detected break, or the end of the paragraph, closes it.

    Args:
        paragraph: OCR paragraph

    Returns:
        Lines in paragraph order
    """
    lines: List[Line] = []
    line_words: List[LineWord] = []
    line_text = ""
    words = paragraph.words

    for index, word in enumerate(words):
        line_word = get_line_word(word, line_text)
        line_words.append(line_word)
        line_text += line_word.text

        detected_break = word.detected_break
        if not detected_break:
            continue

        following = words[index + 1] if index + 1 < len(words) else None
        if (
            detected_break == BREAK_SPACE
            and following is not None
            and not is_line_break_point(word, following)
        ):
            line_text += ' '
            continue

        lines.append(_close_line(line_words, line_text))
        line_words = []
        line_text = ""

    if line_words:
        lines.append(_close_line(line_words, line_text))

    return lines


def get_page_lines(page: Optional[PageAnnotation]) -> Page:
    """
    Get all lines within a page, paragraph by paragraph.

    A page with no annotation yields an empty page.
    """
    if page is None:
        return ()

    lines: List[Line] = []
    for paragraph in page.paragraphs:
        lines.extend(get_paragraph_lines(paragraph))
    return tuple(lines)


def get_page_words(page: Optional[PageAnnotation]) -> Page:
    """Get every word of a page in tree order."""
    if page is None:
        return ()

    return tuple(
        word
        for paragraph in page.paragraphs
        for word in paragraph.words
    )


def get_doc_lines(doc_text: DocumentText) -> DocumentLayout:
    """
    Group every page of a document into lines (unsorted).

    Args:
        doc_text: Raw document extraction

    Returns:
        DocumentLayout with one page per extraction response
    """
    pages = tuple(get_page_lines(page) for page in doc_text.extraction)
    logger.debug(
        "Grouped %s into %d lines across %d pages",
        doc_text.file_name,
        sum(len(page) for page in pages),
        len(pages)
    )
    return DocumentLayout(file_name=doc_text.file_name, pages=pages)


def get_word_list(doc_text: DocumentText) -> DocumentLayout:
    """Collect the words of every page of a document (unsorted)."""
    pages = tuple(get_page_words(page) for page in doc_text.extraction)
    return DocumentLayout(file_name=doc_text.file_name, pages=pages)


def group_documents(docs_text: Sequence[DocumentText]) -> List[DocumentLayout]:
    """Group a batch of documents into line layouts, preserving batch order."""
    return [get_doc_lines(doc_text) for doc_text in docs_text]
