"""
Pytest configuration and global fixtures.
"""
import sys
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.constants import BREAK_EOL_SURE_SPACE, BREAK_SPACE
from core.models import (
    BoundingBox,
    CellSection,
    DataCell,
    DataRow,
    DocumentText,
    HeaderCell,
    PageAnnotation,
    Paragraph,
    SearchMethod,
    Symbol,
    Template,
    Word,
)
from data.db_models import Base


@pytest.fixture(scope="session")
def test_db_engine():
    """Create in-memory SQLite engine for tests."""
    engine = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)


@pytest.fixture
def test_db_session(test_db_engine):
    """Create fresh database session for each test."""
    Session = sessionmaker(bind=test_db_engine)
    session = Session()

    yield session

    # Rollback any uncommitted changes and close
    session.rollback()
    session.close()


def _make_word(text, x1, y1, x2, y2, detected_break=BREAK_SPACE):
    symbols = [Symbol(text=char) for char in text]
    symbols[-1] = Symbol(text=text[-1], detected_break=detected_break)
    return Word(
        symbols=tuple(symbols),
        bounding_box=BoundingBox.from_rect(x1, y1, x2, y2)
    )


def _make_row(text, x=0, y=0, char_width=10, height=20, gap=5,
              final_break=BREAK_EOL_SURE_SPACE):
    """Lay out the space separated tokens of `text` as one visual row."""
    tokens = text.split(' ')
    words = []
    for index, token in enumerate(tokens):
        x2 = x + char_width * len(token)
        detected_break = BREAK_SPACE if index < len(tokens) - 1 else final_break
        words.append(_make_word(token, x, y, x2, y + height, detected_break))
        x = x2 + gap
    return words


def _make_page(rows, text=None):
    """Build a page with one paragraph per (text, x, y) row."""
    paragraphs = tuple(
        Paragraph(words=tuple(_make_row(row_text, x, y)))
        for row_text, x, y in rows
    )
    if text is None:
        text = '\n'.join(row[0] for row in rows)
    return PageAnnotation(text=text, paragraphs=paragraphs)


def _make_doc(file_name, *pages):
    return DocumentText(file_name=file_name, extraction=tuple(pages))


def _make_template(name, id_phrase, header, rows, id_phrase2=None):
    """
    Build a template from header titles and rows of cells.

    Each cell is a list of CellSection keyword dicts.
    """
    return Template(
        name=name,
        id_phrase=id_phrase,
        id_phrase2=id_phrase2,
        header=tuple(HeaderCell(value=value) for value in header),
        data_rows=tuple(
            DataRow(data_cells=tuple(
                DataCell(cell_sects=tuple(CellSection(**sect) for sect in cell))
                for cell in row
            ))
            for row in rows
        )
    )


@pytest.fixture
def make_word():
    """Factory for OCR words with one symbol per character."""
    return _make_word


@pytest.fixture
def make_row():
    """Factory for the words of one visual row."""
    return _make_row


@pytest.fixture
def make_page():
    """Factory for page annotations."""
    return _make_page


@pytest.fixture
def make_doc():
    """Factory for document extractions."""
    return _make_doc


@pytest.fixture
def make_template():
    """Factory for templates."""
    return _make_template


@pytest.fixture
def invoice_doc():
    """A two-column invoice page with labels above their values."""
    return _make_doc(
        "invoice.pdf",
        _make_page(
            [
                ("Invoice Date", 0, 0),
                ("Description", 200, 0),
                ("01-Sep-20", 0, 40),
                ("Service Fee", 200, 40),
                ("Total: 42.50", 0, 100),
            ],
            text="GIF Invoice\nInvoice Date Description\n01-Sep-20 Service Fee\nTotal: 42.50"
        )
    )


@pytest.fixture
def invoice_template():
    """Template extracting the invoice date and a fixed description."""
    return _make_template(
        "GIF",
        "GIF Invoice",
        ["Date", "Description"],
        [[
            [{'search_or_input_method': SearchMethod.TOP_PHRASE,
              'phrase_or_value': 'Invoice Date'}],
            [{'search_or_input_method': SearchMethod.CUSTOM_VALUE,
              'phrase_or_value': 'Service Fee'}],
        ]]
    )
