"""
Text utilities for the extraction engine.

Handles full-page text access and phrase searches.
"""
import re
from typing import Iterator, Optional, Pattern, Tuple, Union

from core.models import DocumentText


def iter_page_texts(doc_text: DocumentText) -> Iterator[Tuple[int, str]]:
    """
    Yield (page index, full page text) for every annotated page.

    Pages without annotation are skipped.
    """
    for index, page in enumerate(doc_text.extraction):
        if page is not None:
            yield index, page.text


def contains_phrase(doc_text: DocumentText, phrase: str) -> bool:
    """Whether `phrase` occurs in the full text of any page."""
    return any(phrase in text for _, text in iter_page_texts(doc_text))


def first_pattern_match(
    doc_text: DocumentText,
    pattern: Union[str, Pattern]
) -> Optional[str]:
    """
    Search each page's full text in page order.

    Args:
        doc_text: Raw document extraction
        pattern: Regular expression (compiled or source text)

    Returns:
        The first matched substring, or None if no page matches

    Raises:
        re.error: If `pattern` is not a valid regular expression
    """
    regex = re.compile(pattern) if isinstance(pattern, str) else pattern
    for _, text in iter_page_texts(doc_text):
        match = regex.search(text)
        if match:
            return match.group(0)
    return None


def trim_start(value: str) -> str:
    """Strip leading whitespace only."""
    return value.lstrip()
