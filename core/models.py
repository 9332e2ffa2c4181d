"""
Core domain models for the extraction engine.

These are pure, immutable data structures without business logic. Pipeline
stages take these values and return new ones.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union


@dataclass(frozen=True)
class Point:
    """A single bounding box corner."""
    x: float = 0
    y: float = 0


@dataclass(frozen=True)
class BoundingBox:
    """
    Four corner points in pixel or normalized space.

    Corners are ordered upper-left, upper-right, lower-right, lower-left.
    """
    vertices: Tuple[Point, Point, Point, Point]
    normalized: bool = False

    @classmethod
    def from_rect(
        cls,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        normalized: bool = False
    ) -> 'BoundingBox':
        """Build an axis-aligned box from its upper-left and lower-right corners."""
        return cls(
            vertices=(Point(x1, y1), Point(x2, y1), Point(x2, y2), Point(x1, y2)),
            normalized=normalized
        )

    @property
    def upper_left(self) -> Point:
        return self.vertices[0]

    @property
    def upper_right(self) -> Point:
        return self.vertices[1]

    @property
    def lower_right(self) -> Point:
        return self.vertices[2]

    @property
    def lower_left(self) -> Point:
        return self.vertices[3]

    @property
    def upper_x(self) -> float:
        return self.vertices[0].x

    @property
    def upper_y(self) -> float:
        return self.vertices[0].y

    @property
    def lower_x(self) -> float:
        return self.vertices[2].x

    @property
    def lower_y(self) -> float:
        return self.vertices[2].y

    @property
    def height(self) -> float:
        """Left edge height (lower-left y minus upper-left y)."""
        return self.vertices[3].y - self.vertices[0].y

    @property
    def mid_y(self) -> float:
        """Vertical midpoint."""
        return (self.upper_y + self.lower_y) / 2

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'vertices': [{'x': v.x, 'y': v.y} for v in self.vertices],
            'normalized': self.normalized
        }


@dataclass(frozen=True)
class Symbol:
    """One OCR character and the break detected after it."""
    text: str
    bounding_box: Optional[BoundingBox] = None
    detected_break: Optional[str] = None


@dataclass(frozen=True)
class Word:
    """Ordered symbols plus the word's bounding box."""
    symbols: Tuple[Symbol, ...]
    bounding_box: BoundingBox

    @property
    def text(self) -> str:
        return ''.join(symbol.text for symbol in self.symbols)

    @property
    def detected_break(self) -> Optional[str]:
        """Break type on the last symbol, if any."""
        if not self.symbols:
            return None
        return self.symbols[-1].detected_break


@dataclass(frozen=True)
class Paragraph:
    """Words of one OCR paragraph, in tree order."""
    words: Tuple[Word, ...] = ()


@dataclass(frozen=True)
class PageAnnotation:
    """
    Annotation of one physical page.

    `text` is the OCR service's full page text; `paragraphs` flattens the
    page/block/paragraph levels of the tree in document order.
    """
    text: str = ""
    paragraphs: Tuple[Paragraph, ...] = ()


@dataclass(frozen=True)
class DocumentText:
    """Raw extraction for one uploaded file. A None page has no text."""
    file_name: str
    extraction: Tuple[Optional[PageAnnotation], ...] = ()

    @property
    def has_text(self) -> bool:
        return any(page is not None for page in self.extraction)


@dataclass(frozen=True)
class LineWord:
    """A word placed in a line, with inclusive character span in the line text."""
    word: Word
    start_index: int
    end_index: int

    @property
    def text(self) -> str:
        return self.word.text

    @property
    def bounding_box(self) -> BoundingBox:
        return self.word.bounding_box


@dataclass(frozen=True)
class Line:
    """One visual row of words with its envelope bounding box."""
    words: Tuple[LineWord, ...]
    text: str
    bounding_box: BoundingBox


LayoutItem = Union[Line, Word]
Page = Tuple[LayoutItem, ...]


@dataclass(frozen=True)
class DocumentLayout:
    """Normalized, sorted page items consumed by extraction."""
    file_name: str
    pages: Tuple[Page, ...] = ()


class SearchMethod(Enum):
    """How a cell section obtains its value."""
    TOP_PHRASE = 'topPhrase'
    LEFT_PHRASE = 'leftPhrase'
    PATTERN = 'pattern'
    CUSTOM_VALUE = 'customValue'
    TODAY = 'today'
    NONE = ''

    @property
    def is_anchor_search(self) -> bool:
        return self in (SearchMethod.TOP_PHRASE, SearchMethod.LEFT_PHRASE)


@dataclass(frozen=True)
class CellSection:
    """One sub-rule contributing part of a data cell's value."""
    search_or_input_method: SearchMethod = SearchMethod.NONE
    phrase_count: int = 1
    string_type: Optional[str] = None
    phrase_or_value: str = ""
    append_chars: str = ""
    date_format: str = ""
    days_added: int = 0
    notes: str = ""


@dataclass(frozen=True)
class DataCell:
    """Cell sections whose values are concatenated in order."""
    cell_sects: Tuple[CellSection, ...]


@dataclass(frozen=True)
class DataRow:
    """One output row; holds one cell per header cell."""
    data_cells: Tuple[DataCell, ...]


@dataclass(frozen=True)
class HeaderCell:
    value: str


@dataclass(frozen=True)
class Template:
    """A recurring document definition."""
    name: str
    id_phrase: str
    header: Tuple[HeaderCell, ...]
    data_rows: Tuple[DataRow, ...]
    id_phrase2: Optional[str] = None


@dataclass(frozen=True)
class HeaderEntry:
    """CSV header column."""
    id: str
    title: str

    def to_dict(self) -> dict:
        return {'id': self.id, 'title': self.title}


@dataclass(frozen=True)
class Blueprint:
    """Per-document header and rows prior to cross-document merging."""
    file_name: str
    header: Tuple[HeaderEntry, ...]
    data_rows: Tuple[Dict[str, str], ...] = ()

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'fileName': self.file_name,
            'CSVHeader': [entry.to_dict() for entry in self.header],
            'CSVDataRows': [dict(row) for row in self.data_rows]
        }


@dataclass(frozen=True)
class ConsolidatedBlueprint:
    """Rows of every blueprint sharing one header."""
    header: Tuple[HeaderEntry, ...]
    data_rows: Tuple[Dict[str, str], ...] = ()


@dataclass(frozen=True)
class MatchResult:
    """Outcome of matching a batch against a template list."""
    matched_file_names: Tuple[str, ...] = ()
    matched_templates: Tuple[Tuple[str, Template], ...] = ()
    unmatched_file_names: Tuple[str, ...] = ()


@dataclass(frozen=True)
class CSVFile:
    """One emitted CSV payload."""
    name: str
    content: bytes


@dataclass
class BatchResult:
    """Result of compiling one batch."""
    identified_file_names: List[str] = field(default_factory=list)
    unidentified_file_names: List[str] = field(default_factory=list)
    csv_files: List[CSVFile] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Identification summary reported upstream."""
        return {
            'identifiedFileNames': list(self.identified_file_names),
            'unidentifiedFileNames': list(self.unidentified_file_names)
        }
