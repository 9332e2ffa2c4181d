#!/usr/bin/env python3
"""
CLI workflow runner for the CSV extraction pipeline.

Compiles OCR extraction JSON files into CSV payloads using either a JSON
file of templates or a user's templates from the template store.
"""
import argparse
import asyncio
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import List

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent))

from api.schemas import BatchIdentificationResponse, DocTextSchema, RecurringDocSchema
from config.settings import configure_logging, settings
from core.models import DocumentText, Template
from data.database import get_db_manager
from services.csv_generator import CSVSink, compile_and_store

logger = logging.getLogger(__name__)


def load_document(path: Path) -> DocumentText:
    """
    Load one extraction file.

    The file holds either a `{fileName, extraction}` object or a bare list of
    annotate responses, in which case the file name is used.
    """
    with open(path, 'r', encoding='utf-8') as f:
        payload = json.load(f)

    if isinstance(payload, list):
        payload = {'fileName': path.stem, 'extraction': payload}
    return DocTextSchema.model_validate(payload).to_core()


def load_templates_file(path: Path) -> List[Template]:
    """Load and validate a JSON list of templates, keeping file order."""
    with open(path, 'r', encoding='utf-8') as f:
        payload = json.load(f)
    return [RecurringDocSchema.model_validate(item).to_core() for item in payload]


def load_user_templates(user_id: str) -> List[Template]:
    """Load a user's templates from the template store."""
    return get_db_manager().load_templates(user_id)


def directory_sink(output_dir: Path) -> CSVSink:
    """Sink writing each CSV payload into `output_dir`."""
    output_dir.mkdir(parents=True, exist_ok=True)

    async def sink(name: str, content: bytes) -> None:
        await asyncio.to_thread((output_dir / name).write_bytes, content)
        logger.info("Wrote %s", output_dir / name)

    return sink


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Compile OCR extractions into CSV files using recurring document templates'
    )
    parser.add_argument(
        'inputs',
        nargs='+',
        help='Extraction JSON files'
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        '--templates',
        type=Path,
        help='JSON file with a list of templates'
    )
    source.add_argument(
        '--user-id',
        help='Load the templates of this user from the template store'
    )
    parser.add_argument(
        '--output-dir',
        type=Path,
        default=Path('csv_output'),
        help='Directory receiving the CSV files (default: csv_output)'
    )
    parser.add_argument(
        '--date-today',
        default=date.today().isoformat(),
        help='Value of "today" cell sections (default: current date)'
    )
    parser.add_argument(
        '--log-level',
        default=None,
        help='Logging level (default: LOG_LEVEL setting)'
    )

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if args.templates:
        templates = load_templates_file(args.templates)
    else:
        templates = load_user_templates(args.user_id)

    if not templates:
        logger.error("No templates available")
        return 1

    docs_text = [load_document(Path(p)) for p in args.inputs]
    logger.info("Loaded %d documents and %d templates", len(docs_text), len(templates))

    summary = asyncio.run(compile_and_store(
        docs_text,
        templates,
        args.date_today,
        directory_sink(args.output_dir),
        **settings.get_extraction_config()
    ))

    print(BatchIdentificationResponse.model_validate(summary).model_dump_json(indent=2))
    return 0


if __name__ == '__main__':
    sys.exit(main())
