"""Listing diff module: change detection and reapproval decision."""

from .listing_diff import (
    compute_listing_diff,
    ChangeEntry,
)

from .reapproval import (
    # Main decision function
    determine_reapproval_type,
    review_changes,
    summarize_changes,
    # Enums
    ReapprovalType,
    # Data classes
    ReapprovalResult,
)

__all__ = [
    # Layer 1: Change detection
    "compute_listing_diff",
    "ChangeEntry",
    # Layer 2: Reapproval decision
    "determine_reapproval_type",
    "review_changes",
    "summarize_changes",
    "ReapprovalType",
    "ReapprovalResult",
]
