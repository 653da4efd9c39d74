#!/usr/bin/env python3
"""Example: classify the edits between two listing snapshots.

Reads the last approved snapshot and the edited listing from JSON files,
prints every tracked change with its tier and moderation result, and the
reapproval verdict. Optionally exports the change log.
"""

import json
import logging

from listingguard.diff import review_changes, summarize_changes
from listingguard.export import export_change_log
from listingguard.quality import perform_quality_checks


def review(approved_file: str, current_file: str, company_name: str = None, output_file: str = None):
    """Review the edits of one listing.

    Args:
        approved_file: JSON file with the last approved snapshot
        current_file: JSON file with the edited listing
        company_name: Submitter's company name (screened for in tier-B text)
        output_file: Optional change-log export path (.csv, .xlsx or .json)
    """
    with open(approved_file, encoding="utf-8") as f:
        approved = json.load(f)
    with open(current_file, encoding="utf-8") as f:
        current = json.load(f)

    result = review_changes(approved, current, company_name=company_name, debug=True)

    print(f"Reapproval: {result.reapproval_type.value}")
    for change in result.changes:
        line = f"  [{change.category.value:>4}] {change.field}"
        if change.moderation_failed:
            line += f"  -> {'; '.join(change.moderation_result.reasons)}"
        print(line)

    summary = summarize_changes(result.changes)
    print(f"\n{summary['totalChanges']} changes: {summary['changesByCategory']}")

    for check in perform_quality_checks(current):
        print(f"  warning: {check.message}")

    if output_file and result.changes:
        path = export_change_log(result.changes, output_file)
        print(f"\nChange log saved to: {path}")

    return result


if __name__ == "__main__":
    import sys

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    if len(sys.argv) < 3:
        print("Usage: python review_listing.py <approved.json> <current.json> [company_name] [output_file]")
        print("\nExample:")
        print("  python review_listing.py approved.json current.json \"Acme Corp\" changes.xlsx")
        sys.exit(1)

    review(
        sys.argv[1],
        sys.argv[2],
        company_name=sys.argv[3] if len(sys.argv) > 3 else None,
        output_file=sys.argv[4] if len(sys.argv) > 4 else None,
    )
