"""
Unit tests for spatial.grouping module.
"""
import pytest
from core.constants import BREAK_EOL_SURE_SPACE, BREAK_LINE_BREAK, BREAK_SPACE
from core.models import DocumentText, PageAnnotation, Paragraph, Point
from spatial.grouping import (
    get_line_word,
    is_line_break_point,
    get_paragraph_lines,
    get_page_lines,
    get_page_words,
    get_doc_lines,
    get_word_list,
    group_documents
)


class TestGetLineWord:
    """Tests for get_line_word function."""

    def test_first_word(self, make_word):
        """Test span of the first word in a line."""
        line_word = get_line_word(make_word("Hello", 0, 0, 50, 20), "")

        assert line_word.start_index == 0
        assert line_word.end_index == 4
        assert line_word.text == "Hello"

    def test_word_after_text(self, make_word):
        """Test span is offset by the existing line text."""
        line_word = get_line_word(make_word("World", 55, 0, 105, 20), "Hello ")

        assert line_word.start_index == 6
        assert line_word.end_index == 10


class TestIsLineBreakPoint:
    """Tests for is_line_break_point function."""

    def test_narrow_gap(self, make_word):
        """Test a gap narrower than the word height keeps the line."""
        current = make_word("Total", 0, 0, 50, 20)
        following = make_word("Due", 60, 0, 90, 20)

        assert not is_line_break_point(current, following)

    def test_wide_gap(self, make_word):
        """Test a gap at least the word height breaks the line."""
        current = make_word("Total", 0, 0, 50, 20)
        following = make_word("42.50", 70, 0, 120, 20)

        assert is_line_break_point(current, following)


class TestGetParagraphLines:
    """Tests for get_paragraph_lines function."""

    def test_space_joins_words(self, make_row):
        """Test SPACE breaks join words with a single space."""
        lines = get_paragraph_lines(Paragraph(words=tuple(make_row("Invoice Date"))))

        assert len(lines) == 1
        assert lines[0].text == "Invoice Date"
        assert [(w.start_index, w.end_index) for w in lines[0].words] == [(0, 6), (8, 11)]

    def test_line_envelope(self, make_row):
        """Test the line box envelopes its words."""
        lines = get_paragraph_lines(Paragraph(words=tuple(make_row("Invoice Date", 10, 30))))

        box = lines[0].bounding_box
        assert box.upper_left == Point(10, 30)
        assert box.lower_right == Point(125, 50)

    def test_line_far_from_origin(self, make_row):
        """Test line boxes of words beyond 10000 pixels are not clamped."""
        lines = get_paragraph_lines(Paragraph(words=tuple(make_row("Far Word", 12000, 11000))))

        box = lines[0].bounding_box
        assert (box.upper_x, box.upper_y) == (12000, 11000)
        assert (box.lower_x, box.lower_y) == (12075, 11020)

    def test_wide_gap_splits_line(self, make_word):
        """Test a wide space after a SPACE break starts a new line."""
        words = (
            make_word("Total", 0, 0, 50, 20, BREAK_SPACE),
            make_word("42.50", 300, 0, 350, 20, BREAK_EOL_SURE_SPACE),
        )

        lines = get_paragraph_lines(Paragraph(words=words))

        assert [line.text for line in lines] == ["Total", "42.50"]

    def test_line_break_closes_line(self, make_word):
        """Test non-space breaks close the line."""
        words = (
            make_word("Account", 0, 0, 70, 20, BREAK_LINE_BREAK),
            make_word("Summary", 0, 30, 70, 50, BREAK_EOL_SURE_SPACE),
        )

        lines = get_paragraph_lines(Paragraph(words=words))

        assert [line.text for line in lines] == ["Account", "Summary"]

    def test_words_without_break_concatenate(self, make_word):
        """Test words with no detected break join without a space."""
        words = (
            make_word("$", 0, 0, 10, 20, None),
            make_word("10.00", 10, 0, 60, 20, BREAK_EOL_SURE_SPACE),
        )

        lines = get_paragraph_lines(Paragraph(words=words))

        assert lines[0].text == "$10.00"
        assert lines[0].words[1].start_index == 1

    def test_trailing_space_at_paragraph_end(self, make_word):
        """Test a SPACE break on the last word closes the line without a space."""
        words = (make_word("Total", 0, 0, 50, 20, BREAK_SPACE),)

        lines = get_paragraph_lines(Paragraph(words=words))

        assert [line.text for line in lines] == ["Total"]

    def test_pending_line_closed_at_paragraph_end(self, make_word):
        """Test words after the last break still form a line."""
        words = (
            make_word("Net", 0, 0, 30, 20, BREAK_SPACE),
            make_word("30", 35, 0, 55, 20, None),
        )

        lines = get_paragraph_lines(Paragraph(words=words))

        assert [line.text for line in lines] == ["Net 30"]

    def test_empty_paragraph(self):
        """Test a paragraph without words."""
        assert get_paragraph_lines(Paragraph()) == []


class TestPageGrouping:
    """Tests for page and document grouping functions."""

    def test_page_lines_across_paragraphs(self, make_page):
        """Test lines of every paragraph, in paragraph order."""
        page = make_page([("Invoice Date", 0, 0), ("01-Sep-20", 0, 40)])

        lines = get_page_lines(page)

        assert [line.text for line in lines] == ["Invoice Date", "01-Sep-20"]

    def test_unannotated_page(self):
        """Test a page with no annotation is empty."""
        assert get_page_lines(None) == ()
        assert get_page_words(None) == ()

    def test_page_words(self, make_page):
        """Test word list of a page."""
        page = make_page([("Invoice Date", 0, 0), ("01-Sep-20", 0, 40)])

        words = get_page_words(page)

        assert [w.text for w in words] == ["Invoice", "Date", "01-Sep-20"]

    def test_doc_lines_keep_page_positions(self, make_page, make_doc):
        """Test one layout page per extraction response, empty for None."""
        doc = make_doc("a.pdf", make_page([("First", 0, 0)]), None, make_page([("Third", 0, 0)]))

        layout = get_doc_lines(doc)

        assert layout.file_name == "a.pdf"
        assert len(layout.pages) == 3
        assert layout.pages[1] == ()
        assert layout.pages[2][0].text == "Third"

    def test_word_list(self, make_page, make_doc):
        """Test word layout of a document."""
        layout = get_word_list(make_doc("a.pdf", make_page([("Net 30", 0, 0)])))

        assert [w.text for w in layout.pages[0]] == ["Net", "30"]

    def test_group_documents_order(self, make_page, make_doc):
        """Test batch order is preserved."""
        docs = [
            make_doc("b.pdf", make_page([("B", 0, 0)])),
            make_doc("a.pdf", make_page([("A", 0, 0)])),
        ]

        layouts = group_documents(docs)

        assert [layout.file_name for layout in layouts] == ["b.pdf", "a.pdf"]

    def test_no_text_document(self):
        """Test documents without pages."""
        layout = get_doc_lines(DocumentText("empty.pdf"))

        assert layout.pages == ()
