"""
Pydantic schemas for boundary validation.

Parses OCR annotate responses and recurring document templates as the
collaborators deliver them (camelCase JSON) and converts them into core
values. Template rules are enforced here, at template-save time, so the
engine can assume well-formed templates.
"""
import re
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from core.constants import (
    DATE_FORMAT_ALLOWED_CHARS,
    PHRASE_REQUIRED_METHODS,
    TEMPLATE_LIMITS,
)
from core.models import (
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
from utils.bbox_utils import bounding_box_from_raw


# ---------------------------------------------------------------------------
# OCR annotate responses
# ---------------------------------------------------------------------------

class OcrVertex(BaseModel):
    """Vertex; the OCR service omits zero coordinates."""
    x: float = 0
    y: float = 0


class OcrBoundingPoly(BaseModel):
    model_config = ConfigDict(extra='ignore')

    vertices: List[OcrVertex] = Field(default_factory=list)
    normalizedVertices: List[OcrVertex] = Field(default_factory=list)

    def to_core(self):
        return bounding_box_from_raw(self.model_dump())


class OcrDetectedBreak(BaseModel):
    model_config = ConfigDict(extra='ignore')

    type: Optional[str] = None


class OcrTextProperty(BaseModel):
    model_config = ConfigDict(extra='ignore')

    detectedBreak: Optional[OcrDetectedBreak] = None


class OcrSymbol(BaseModel):
    model_config = ConfigDict(extra='ignore', populate_by_name=True)

    text: str = ""
    boundingBox: Optional[OcrBoundingPoly] = None
    text_property: Optional[OcrTextProperty] = Field(default=None, alias='property')

    def to_core(self) -> Symbol:
        detected_break = None
        if self.text_property and self.text_property.detectedBreak:
            detected_break = self.text_property.detectedBreak.type
        return Symbol(
            text=self.text,
            bounding_box=self.boundingBox.to_core() if self.boundingBox else None,
            detected_break=detected_break
        )


class OcrWord(BaseModel):
    model_config = ConfigDict(extra='ignore')

    symbols: List[OcrSymbol] = Field(default_factory=list)
    boundingBox: OcrBoundingPoly = Field(default_factory=OcrBoundingPoly)

    def to_core(self) -> Word:
        return Word(
            symbols=tuple(symbol.to_core() for symbol in self.symbols),
            bounding_box=self.boundingBox.to_core()
        )


class OcrParagraph(BaseModel):
    model_config = ConfigDict(extra='ignore')

    words: List[OcrWord] = Field(default_factory=list)


class OcrBlock(BaseModel):
    model_config = ConfigDict(extra='ignore')

    paragraphs: List[OcrParagraph] = Field(default_factory=list)


class OcrPage(BaseModel):
    model_config = ConfigDict(extra='ignore')

    blocks: List[OcrBlock] = Field(default_factory=list)


class OcrTextAnnotation(BaseModel):
    model_config = ConfigDict(extra='ignore')

    text: str = ""
    pages: List[OcrPage] = Field(default_factory=list)

    def to_core(self) -> PageAnnotation:
        paragraphs = tuple(
            Paragraph(words=tuple(word.to_core() for word in paragraph.words))
            for page in self.pages
            for block in page.blocks
            for paragraph in block.paragraphs
        )
        return PageAnnotation(text=self.text, paragraphs=paragraphs)


class AnnotateImageResponse(BaseModel):
    """One page of an annotate response; no fullTextAnnotation means no text."""
    model_config = ConfigDict(extra='ignore')

    fullTextAnnotation: Optional[OcrTextAnnotation] = None

    def to_core(self) -> Optional[PageAnnotation]:
        if self.fullTextAnnotation is None:
            return None
        return self.fullTextAnnotation.to_core()


class DocTextSchema(BaseModel):
    """OCR output for one uploaded file."""
    model_config = ConfigDict(extra='ignore')

    fileName: str
    extraction: List[AnnotateImageResponse] = Field(default_factory=list)

    def to_core(self) -> DocumentText:
        return DocumentText(
            file_name=self.fileName,
            extraction=tuple(page.to_core() for page in self.extraction)
        )


# ---------------------------------------------------------------------------
# Recurring document templates
# ---------------------------------------------------------------------------

_MAX_TEXT = TEMPLATE_LIMITS['max_text_length']


class CellSectSchema(BaseModel):
    """One cell section as stored by the template store."""
    model_config = ConfigDict(extra='ignore', populate_by_name=True)

    search_or_input_method: Optional[SearchMethod] = Field(
        default=None, alias='searchOrInputMethod'
    )
    phrase_count: int = Field(
        default=1,
        ge=TEMPLATE_LIMITS['min_phrase_count'],
        le=TEMPLATE_LIMITS['max_phrase_count'],
        alias='phraseCount',
        strict=True
    )
    string_type: Optional[str] = Field(default=None, alias='stringType')
    phrase_or_value: Optional[str] = Field(
        default=None, max_length=_MAX_TEXT, alias='phraseOrValue'
    )
    append_chars: Optional[str] = Field(default=None, alias='appendChars')
    date_format: Optional[str] = Field(default=None, alias='dateFormat')
    days_added: Optional[int] = Field(
        default=None,
        ge=TEMPLATE_LIMITS['min_days_added'],
        le=TEMPLATE_LIMITS['max_days_added'],
        alias='daysAdded',
        strict=True
    )
    notes: Optional[str] = None

    @field_validator('date_format')
    @classmethod
    def date_format_contains_valid_chars(cls, v: Optional[str]) -> Optional[str]:
        if v and not set(v) <= DATE_FORMAT_ALLOWED_CHARS:
            raise ValueError(
                'Date format may only contain the characters M, D, Y, "-", "/", "," and space'
            )
        return v

    @model_validator(mode='after')
    def check_method_requirements(self) -> 'CellSectSchema':
        method = self.search_or_input_method
        has_method = method not in (None, SearchMethod.NONE)

        if not has_method:
            for name in ('phrase_or_value', 'append_chars', 'date_format'):
                if getattr(self, name):
                    raise ValueError(
                        f'The inclusion of {name} requires a searchOrInputMethod'
                    )
            return self

        if method is SearchMethod.TODAY and self.phrase_or_value:
            raise ValueError(
                'PhraseOrValue cannot be included when the searchOrInputMethod is "today"'
            )
        if method.value in PHRASE_REQUIRED_METHODS and not self.phrase_or_value:
            raise ValueError(f'PhraseOrValue is required for {method.value}')
        if method is SearchMethod.PATTERN:
            try:
                re.compile(self.phrase_or_value)
            except re.error as e:
                raise ValueError(f'Invalid regular expression: {e}') from e
        return self

    def to_core(self) -> CellSection:
        return CellSection(
            search_or_input_method=self.search_or_input_method or SearchMethod.NONE,
            phrase_count=self.phrase_count,
            string_type=self.string_type,
            phrase_or_value=self.phrase_or_value or "",
            append_chars=self.append_chars or "",
            date_format=self.date_format or "",
            days_added=self.days_added or 0,
            notes=self.notes or ""
        )


class DataCellSchema(BaseModel):
    model_config = ConfigDict(extra='ignore', populate_by_name=True)

    cell_sects: List[CellSectSchema] = Field(
        ...,
        min_length=1,
        max_length=TEMPLATE_LIMITS['max_cell_sects'],
        alias='cellSects'
    )

    def to_core(self) -> DataCell:
        return DataCell(cell_sects=tuple(s.to_core() for s in self.cell_sects))


class DataRowSchema(BaseModel):
    model_config = ConfigDict(extra='ignore', populate_by_name=True)

    data_cells: List[DataCellSchema] = Field(..., alias='dataCells')

    def to_core(self) -> DataRow:
        return DataRow(data_cells=tuple(c.to_core() for c in self.data_cells))


class HeaderCellSchema(BaseModel):
    model_config = ConfigDict(extra='ignore', str_strip_whitespace=True)

    value: str = Field(..., min_length=1, max_length=_MAX_TEXT)


class RecurringDocSchema(BaseModel):
    """A recurring document template as stored by the template store."""
    model_config = ConfigDict(extra='ignore', populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=_MAX_TEXT)
    id_phrase: str = Field(..., min_length=1, max_length=_MAX_TEXT, alias='idPhrase')
    id_phrase2: Optional[str] = Field(default=None, max_length=_MAX_TEXT, alias='idPhrase2')
    header: List[HeaderCellSchema] = Field(
        ..., min_length=1, max_length=TEMPLATE_LIMITS['max_header_cells']
    )
    data_rows: List[DataRowSchema] = Field(
        ...,
        min_length=1,
        max_length=TEMPLATE_LIMITS['max_data_rows'],
        alias='dataRows'
    )

    @field_validator('header')
    @classmethod
    def header_has_no_duplicates(cls, v: List[HeaderCellSchema]) -> List[HeaderCellSchema]:
        values = [cell.value for cell in v]
        if len(values) != len(set(values)):
            raise ValueError('Duplicate header cell values not allowed')
        return v

    @model_validator(mode='after')
    def data_cells_match_header(self) -> 'RecurringDocSchema':
        for row in self.data_rows:
            if len(row.data_cells) != len(self.header):
                raise ValueError(
                    'Number of cells in a data row must equal that of the header'
                )
        return self

    def to_core(self) -> Template:
        return Template(
            name=self.name,
            id_phrase=self.id_phrase,
            id_phrase2=self.id_phrase2 or None,
            header=tuple(HeaderCell(value=cell.value) for cell in self.header),
            data_rows=tuple(row.to_core() for row in self.data_rows)
        )


class BatchIdentificationResponse(BaseModel):
    """Identification summary reported upstream for a batch."""
    identifiedFileNames: List[str] = Field(default_factory=list)
    unidentifiedFileNames: List[str] = Field(default_factory=list)
