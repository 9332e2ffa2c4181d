"""
CSV Writer - Serializes consolidated blueprints to CSV payloads.

Each consolidated group becomes one payload: a header line of titles, then
one line per row with cells looked up by header id. Fields are quoted only
when they contain a comma, double quote or newline.
"""
import csv
import io
from typing import List, Sequence

from core.constants import CSV_FILE_NAME_PATTERN
from core.models import ConsolidatedBlueprint, CSVFile


def stringify_blueprint(blueprint: ConsolidatedBlueprint) -> str:
    """
    Render a consolidated blueprint as CSV text.

    Absent row keys render as empty cells.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator='\n')
    writer.writerow([entry.title for entry in blueprint.header])
    for row in blueprint.data_rows:
        writer.writerow([row.get(entry.id, '') for entry in blueprint.header])
    return buffer.getvalue()


def write_csv_files(
    consolidated_blueprints: Sequence[ConsolidatedBlueprint],
    file_name_pattern: str = CSV_FILE_NAME_PATTERN
) -> List[CSVFile]:
    """
    Serialize every consolidated group, in group order.

    Args:
        consolidated_blueprints: Groups from get_consolidated_blueprints
        file_name_pattern: Payload name, formatted with the 0-based group index

    Returns:
        One CSVFile of UTF-8 bytes per group
    """
    return [
        CSVFile(
            name=file_name_pattern.format(index=index),
            content=stringify_blueprint(blueprint).encode('utf-8')
        )
        for index, blueprint in enumerate(consolidated_blueprints)
    ]
