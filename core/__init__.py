"""Core package - Domain models and constants."""

from .models import (
    Point,
    BoundingBox,
    Symbol,
    Word,
    Paragraph,
    PageAnnotation,
    DocumentText,
    LineWord,
    Line,
    Page,
    DocumentLayout,
    SearchMethod,
    CellSection,
    DataCell,
    DataRow,
    HeaderCell,
    Template,
    HeaderEntry,
    Blueprint,
    ConsolidatedBlueprint,
    MatchResult,
    CSVFile,
    BatchResult,
)
from .constants import (
    BREAK_SPACE,
    DEFAULT_DATE_FORMAT,
    DATE_FORMAT_ALLOWED_CHARS,
    TEMPLATE_LIMITS,
)

__all__ = [
    'Point',
    'BoundingBox',
    'Symbol',
    'Word',
    'Paragraph',
    'PageAnnotation',
    'DocumentText',
    'LineWord',
    'Line',
    'Page',
    'DocumentLayout',
    'SearchMethod',
    'CellSection',
    'DataCell',
    'DataRow',
    'HeaderCell',
    'Template',
    'HeaderEntry',
    'Blueprint',
    'ConsolidatedBlueprint',
    'MatchResult',
    'CSVFile',
    'BatchResult',
    'BREAK_SPACE',
    'DEFAULT_DATE_FORMAT',
    'DATE_FORMAT_ALLOWED_CHARS',
    'TEMPLATE_LIMITS',
]
