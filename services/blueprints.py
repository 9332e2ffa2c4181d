"""
Blueprint assembly and consolidation.

A blueprint is one document's CSV header plus its data rows. Blueprints
whose headers are identical (same ids, same titles, same order) are merged
into one consolidated group per distinct header.
"""
import logging
from typing import Dict, List, Sequence, Tuple

from core.models import (
    Blueprint,
    ConsolidatedBlueprint,
    HeaderEntry,
    Template,
)
from services.cell_values import ExtractionContext, get_cell_value

logger = logging.getLogger(__name__)


def get_csv_header(template: Template) -> Tuple[HeaderEntry, ...]:
    """Header entries keyed by the stringified header cell index."""
    return tuple(
        HeaderEntry(id=str(index), title=header_cell.value)
        for index, header_cell in enumerate(template.header)
    )


def get_csv_data_rows(
    template: Template,
    csv_header: Sequence[HeaderEntry],
    context: ExtractionContext
) -> Tuple[Dict[str, str], ...]:
    """
    One output row per template data row.

    Raises:
        IndexError: If a data row has more cells than the header
    """
    rows: List[Dict[str, str]] = []
    for data_row in template.data_rows:
        row: Dict[str, str] = {}
        for cell_index, data_cell in enumerate(data_row.data_cells):
            row[csv_header[cell_index].id] = get_cell_value(data_cell, context)
        rows.append(row)
    return tuple(rows)


def get_csv_blueprint(template: Template, context: ExtractionContext) -> Blueprint:
    """
    Compile all CSV data for a matched document.

    Args:
        template: Template the document matched
        context: The document's text, sorted layout and today's date

    Returns:
        Blueprint for the document
    """
    csv_header = get_csv_header(template)
    data_rows = get_csv_data_rows(template, csv_header, context)
    logger.debug(
        "Built blueprint for %s with %d rows",
        context.doc_text.file_name,
        len(data_rows)
    )
    return Blueprint(
        file_name=context.doc_text.file_name,
        header=csv_header,
        data_rows=data_rows
    )


def get_consolidated_blueprints(
    blueprints: Sequence[Blueprint]
) -> List[ConsolidatedBlueprint]:
    """
    Merge blueprints sharing an identical header.

    Groups appear in first-occurrence order of their header; rows keep
    batch order within each group.
    """
    groups: Dict[Tuple[HeaderEntry, ...], List[Dict[str, str]]] = {}

    for blueprint in blueprints:
        header = tuple(blueprint.header)
        groups.setdefault(header, []).extend(blueprint.data_rows)

    consolidated = [
        ConsolidatedBlueprint(header=header, data_rows=tuple(rows))
        for header, rows in groups.items()
    ]
    logger.debug(
        "Consolidated %d blueprints into %d groups",
        len(blueprints),
        len(consolidated)
    )
    return consolidated
