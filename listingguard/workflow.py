"""
Review workflow for edits to a published listing.

Glue between the record store and the diff engine:

1. Load the last approved snapshot and the current state
2. Normalize preparation durations on both (so unit back-fills never diff)
3. Compute the change list and the reapproval verdict
4. Record the change log and move the listing to its new status

Verdict -> status:
- NONE: ``published``; the current state becomes the approved snapshot
  (an edit reverted to the approved state is republished without a log row)
- FULL: ``pending`` (full admin reapproval)
- MODERATION_FAILED: ``pending`` (admin reviews the flagged content)
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .diff.listing_diff import ChangeEntry, compute_listing_diff
from .diff.reapproval import ReapprovalType, determine_reapproval_type
from .durations import normalize_preparation_duration
from .moderation.screening import TextScreener
from .quality import QualityCheck, perform_quality_checks
from .store.record_store import RecordStore

logger = logging.getLogger(__name__)

STATUS_PUBLISHED = "published"
STATUS_PENDING = "pending"

STATUS_BY_REAPPROVAL_TYPE = {
    ReapprovalType.NONE: STATUS_PUBLISHED,
    ReapprovalType.FULL: STATUS_PENDING,
    ReapprovalType.MODERATION_FAILED: STATUS_PENDING,
}


@dataclass
class ReviewOutcome:
    """Result of reviewing one listing update."""
    listing_id: str
    reapproval_type: ReapprovalType
    status: str
    changes: List[ChangeEntry] = field(default_factory=list)
    quality_checks: List[QualityCheck] = field(default_factory=list)
    change_log_id: Optional[str] = None

    @property
    def requires_admin_review(self) -> bool:
        return self.reapproval_type is not ReapprovalType.NONE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "listingId": self.listing_id,
            "reapprovalType": self.reapproval_type.value,
            "status": self.status,
            "changes": [c.to_dict() for c in self.changes],
            "qualityChecks": [q.to_dict() for q in self.quality_checks],
            "changeLogId": self.change_log_id,
        }


def review_listing_update(
    store: RecordStore,
    listing_id: str,
    company_name: Optional[str] = None,
    screener: Optional[TextScreener] = None,
    debug: Optional[bool] = None
) -> ReviewOutcome:
    """
    Review the pending edits of a listing and apply the verdict.

    Args:
        store: Record store holding the listing
        listing_id: Listing to review
        company_name: Submitter's company name for content screening
        screener: Optional text screener (default: lexicon screener)
        debug: Log each changed field (defaults to settings)

    Returns:
        ReviewOutcome describing the verdict and the new status

    Raises:
        ValueError: If the listing does not exist or was never approved
        Exception: If store operations fail (transaction is rolled back)
    """
    store.begin_transaction()

    try:
        approved = store.get_approved_snapshot(listing_id)
        if approved is None:
            raise ValueError(
                f"Listing {listing_id} has no approved snapshot; "
                "first submissions go through full review"
            )

        current = store.get_current_state(listing_id)

        previous_snapshot = normalize_preparation_duration(approved)
        current_data = normalize_preparation_duration(current)

        changes = compute_listing_diff(
            previous_snapshot,
            current_data,
            company_name=company_name,
            screener=screener,
            debug=debug
        )
        reapproval_type = determine_reapproval_type(changes)
        status = STATUS_BY_REAPPROVAL_TYPE[reapproval_type]

        change_log_id = None
        if changes:
            change_log_id = store.save_change_log(
                listing_id,
                [c.to_dict() for c in changes],
                reapproval_type.value
            )
            if reapproval_type is ReapprovalType.NONE:
                store.save_approved_snapshot(listing_id, current_data)

        # An empty diff means the listing matches its approved snapshot again
        store.set_status(listing_id, status)

        store.commit_transaction()

    except Exception as e:
        store.rollback_transaction()
        logger.error(f"Review of listing {listing_id} failed: {e}", exc_info=True)
        raise

    logger.info(
        f"Listing {listing_id} reviewed: {len(changes)} changes, "
        f"reapproval={reapproval_type.value}, status={status}"
    )

    return ReviewOutcome(
        listing_id=listing_id,
        reapproval_type=reapproval_type,
        status=status,
        changes=changes,
        quality_checks=perform_quality_checks(current_data),
        change_log_id=change_log_id
    )
