"""
Unit tests for utils.text_utils module.
"""
import re
import pytest
from core.models import DocumentText, PageAnnotation
from utils.text_utils import (
    iter_page_texts,
    contains_phrase,
    first_pattern_match,
    trim_start
)


@pytest.fixture
def two_page_doc():
    return DocumentText(
        "doc.pdf",
        (
            PageAnnotation(text="Account 1234\nStatement"),
            None,
            PageAnnotation(text="Invoice #555\nInvoice #777"),
        )
    )


class TestIterPageTexts:
    """Tests for iter_page_texts function."""

    def test_skips_unannotated_pages(self, two_page_doc):
        """Test pages without annotation are skipped but keep their index."""
        indexes = [index for index, _ in iter_page_texts(two_page_doc)]

        assert indexes == [0, 2]


class TestContainsPhrase:
    """Tests for contains_phrase function."""

    def test_found_on_later_page(self, two_page_doc):
        """Test phrases are searched on every page."""
        assert contains_phrase(two_page_doc, "Invoice #")

    def test_not_found(self, two_page_doc):
        """Test missing phrase."""
        assert not contains_phrase(two_page_doc, "Receipt")

    def test_case_sensitive(self, two_page_doc):
        """Test search is case-sensitive."""
        assert not contains_phrase(two_page_doc, "statement")


class TestFirstPatternMatch:
    """Tests for first_pattern_match function."""

    def test_first_match_in_page_order(self, two_page_doc):
        """Test the first match of the first matching page wins."""
        assert first_pattern_match(two_page_doc, r'#\d+') == '#555'

    def test_whole_match_returned(self, two_page_doc):
        """Test group 0 is returned even with capture groups."""
        assert first_pattern_match(two_page_doc, r'Account (\d+)') == 'Account 1234'

    def test_compiled_pattern(self, two_page_doc):
        """Test compiled patterns are accepted."""
        assert first_pattern_match(two_page_doc, re.compile(r'\d{4}')) == '1234'

    def test_no_match(self, two_page_doc):
        """Test None when no page matches."""
        assert first_pattern_match(two_page_doc, r'\$\d+') is None

    def test_invalid_pattern(self, two_page_doc):
        """Test invalid expressions raise."""
        with pytest.raises(re.error):
            first_pattern_match(two_page_doc, r'(unclosed')


class TestTrimStart:
    """Tests for trim_start function."""

    def test_strips_leading_only(self):
        """Test trailing whitespace is kept."""
        assert trim_start("  \t42.50 ") == "42.50 "

    def test_empty(self):
        assert trim_start("") == ""
