"""Export change logs for admin review (CSV, Excel or JSON)."""

import csv
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import openpyxl

from .diff.listing_diff import ChangeEntry
from .normalizer import normalize

CHANGE_LOG_HEADERS = [
    "field",
    "category",
    "old_value",
    "new_value",
    "moderation_passed",
    "moderation_reasons",
]


def change_log_rows(changes: Sequence[ChangeEntry]) -> List[Dict[str, Any]]:
    """Flatten change entries into export rows.

    Old/new values are written in their normalized form so structured values
    fit in a single cell.
    """
    rows = []
    for change in changes:
        result = change.moderation_result
        rows.append({
            "field": change.field,
            "category": change.category.value,
            "old_value": normalize(change.old_value),
            "new_value": normalize(change.new_value),
            "moderation_passed": "" if result is None else ("yes" if result.passed else "no"),
            "moderation_reasons": "" if result is None else "; ".join(result.reasons),
        })
    return rows


def export_change_log(
    changes: Sequence[ChangeEntry],
    output_path: str,
    format: Optional[str] = None
) -> str:
    """Export change entries to a file.

    Args:
        changes: Change entries to export
        output_path: Path where the file should be saved
        format: 'csv', 'excel', 'json', or None to auto-detect from the extension

    Returns:
        Path to the exported file

    Raises:
        ValueError: If there is nothing to export or the format is unsupported
    """
    if not changes:
        raise ValueError("Cannot export empty change log")

    output_path = Path(output_path)

    if format is None:
        suffix = output_path.suffix.lower()
        if suffix in ['.csv', '.tsv']:
            format = 'csv'
        elif suffix in ['.xlsx', '.xls']:
            format = 'excel'
        elif suffix == '.json':
            format = 'json'
        else:
            format = 'csv'
            output_path = output_path.with_suffix('.csv')

    format = format.lower()

    if format == 'csv':
        _export_csv(change_log_rows(changes), output_path)
    elif format == 'excel':
        _export_excel(change_log_rows(changes), output_path)
    elif format == 'json':
        _export_json(changes, output_path)
    else:
        raise ValueError(f"Unsupported export format: {format}. Supported formats: csv, excel, json")

    return str(output_path)


def _export_csv(rows: List[Dict[str, Any]], output_path: Path) -> None:
    with open(output_path, 'w', newline='', encoding='utf-8') as f:
        writer = csv.DictWriter(f, fieldnames=CHANGE_LOG_HEADERS)
        writer.writeheader()
        for row in rows:
            writer.writerow(row)


def _export_excel(rows: List[Dict[str, Any]], output_path: Path) -> None:
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "Changes"

    for col_idx, header in enumerate(CHANGE_LOG_HEADERS, start=1):
        ws.cell(row=1, column=col_idx, value=header)

    for row_idx, row_data in enumerate(rows, start=2):
        for col_idx, header in enumerate(CHANGE_LOG_HEADERS, start=1):
            ws.cell(row=row_idx, column=col_idx, value=row_data.get(header, ''))

    wb.save(output_path)


def _export_json(changes: Sequence[ChangeEntry], output_path: Path) -> None:
    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump([c.to_dict() for c in changes], f, indent=2, ensure_ascii=False, default=str)
