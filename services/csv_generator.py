"""
CSV Generator - Compiles a batch of extracted documents into CSV payloads.

Orchestrates the batch workflow: template matching, line grouping and
sorting, cell value extraction, blueprint consolidation and CSV emission.
Per-document work is independent and may run in a thread pool; results are
re-joined in batch order before consolidation, since group order decides
payload numbering.
"""
import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Awaitable, Callable, List, Optional, Sequence, Tuple

from core.constants import CSV_FILE_NAME_PATTERN, DEFAULT_DATE_FORMAT
from core.models import BatchResult, Blueprint, DocumentText, Template
from services.blueprints import get_consolidated_blueprints, get_csv_blueprint
from services.cell_values import ExtractionContext
from services.csv_writer import write_csv_files
from services.template_matcher import match_documents, summarize_matches
from spatial.grouping import get_doc_lines
from spatial.reading_order import sort_layout

logger = logging.getLogger(__name__)

CSVSink = Callable[[str, bytes], Awaitable[None]]


def extract_blueprint(
    doc_text: DocumentText,
    template: Template,
    date_today: str,
    default_date_format: str = DEFAULT_DATE_FORMAT,
    date_parse_default: Optional[datetime] = None
) -> Blueprint:
    """
    Build the sorted layout of a matched document and extract its blueprint.

    Args:
        doc_text: Raw document extraction
        template: Template the document matched
        date_today: Caller's date string for `today` sections

    Returns:
        Blueprint for the document
    """
    layout = sort_layout(get_doc_lines(doc_text))
    context = ExtractionContext(
        doc_text=doc_text,
        layout=layout,
        date_today=date_today,
        default_date_format=default_date_format,
        date_parse_default=date_parse_default
    )
    return get_csv_blueprint(template, context)


def compile_data(
    docs_text: Sequence[DocumentText],
    templates: Sequence[Template],
    date_today: str,
    parallel: bool = False,
    max_workers: Optional[int] = None,
    default_date_format: str = DEFAULT_DATE_FORMAT,
    date_parse_default: Optional[datetime] = None,
    file_name_pattern: str = CSV_FILE_NAME_PATTERN
) -> BatchResult:
    """
    Compile a batch into identification lists and CSV payloads.

    Args:
        docs_text: Extracted text of every document in the batch
        templates: The user's templates, in precedence order
        date_today: Caller's date string for `today` sections
        parallel: Extract documents in a thread pool
        max_workers: Thread pool size when `parallel` is set
        default_date_format: Format used when a section only adds days
        date_parse_default: Supplies date parts missing from extracted text
        file_name_pattern: Payload name, formatted with the group index

    Returns:
        BatchResult with identified/unidentified names and CSV files
    """
    matches = match_documents(docs_text, templates)
    match_result = summarize_matches(matches)
    jobs: List[Tuple[DocumentText, Template]] = [
        (doc_text, template) for doc_text, template in matches if template is not None
    ]

    def run(job: Tuple[DocumentText, Template]) -> Blueprint:
        doc_text, template = job
        return extract_blueprint(
            doc_text,
            template,
            date_today,
            default_date_format,
            date_parse_default
        )

    if parallel and len(jobs) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            blueprints = list(executor.map(run, jobs))
    else:
        blueprints = [run(job) for job in jobs]

    csv_files = []
    if blueprints:
        consolidated = get_consolidated_blueprints(blueprints)
        csv_files = write_csv_files(consolidated, file_name_pattern)

    logger.info(
        "Compiled %d blueprints into %d CSV files",
        len(blueprints),
        len(csv_files)
    )

    return BatchResult(
        identified_file_names=list(match_result.matched_file_names),
        unidentified_file_names=list(match_result.unmatched_file_names),
        csv_files=csv_files
    )


def compile_data_from_settings(
    docs_text: Sequence[DocumentText],
    templates: Sequence[Template],
    date_today: str
) -> BatchResult:
    """Compile a batch using the global settings."""
    from config.settings import settings

    return compile_data(
        docs_text,
        templates,
        date_today,
        **settings.get_extraction_config()
    )


async def compile_and_store(
    docs_text: Sequence[DocumentText],
    templates: Sequence[Template],
    date_today: str,
    sink: CSVSink,
    **kwargs
) -> dict:
    """
    Compile a batch and hand every CSV payload to a storage sink.

    The pure compilation runs in a worker thread. The sink is awaited for
    one payload at a time, in payload order. The first sink failure
    propagates to the caller and no later payload is handed over.

    Args:
        docs_text: Extracted text of every document in the batch
        templates: The user's templates, in precedence order
        date_today: Caller's date string for `today` sections
        sink: Coroutine function receiving (payload name, CSV bytes)
        **kwargs: Forwarded to compile_data

    Returns:
        Dict with identifiedFileNames and unidentifiedFileNames
    """
    result = await asyncio.to_thread(
        compile_data, docs_text, templates, date_today, **kwargs
    )
    for csv_file in result.csv_files:
        await sink(csv_file.name, csv_file.content)
    return result.to_dict()
