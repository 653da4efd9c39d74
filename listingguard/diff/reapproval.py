"""
Reapproval decision for listing changes.

Reduces a list of change entries to a single verdict:

- FULL: at least one tier-A (structural) change
- MODERATION_FAILED: no tier-A change, but a tier-B change failed screening
- NONE: only operational changes and/or tier-B changes that passed

Rules are ordered and explicit. First match wins. The verdict is never
stored on its own; it is always recomputed from the change list.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence

from ..moderation.screening import TextScreener, dedupe_reasons
from ..schema import Tier
from .listing_diff import ChangeEntry, compute_listing_diff


class ReapprovalType(str, Enum):
    """Outcome of reducing a change list."""
    FULL = "full"
    MODERATION_FAILED = "moderation_failed"
    NONE = "none"


# =============================================================================
# DECISION RULES
# =============================================================================
# Each rule: (changes) -> Optional[ReapprovalType]

def _rule_structural_change(changes: Sequence[ChangeEntry]) -> Optional[ReapprovalType]:
    """Any tier-A change forces a full reapproval."""
    if any(c.category is Tier.A for c in changes):
        return ReapprovalType.FULL
    return None


def _rule_moderation_failure(changes: Sequence[ChangeEntry]) -> Optional[ReapprovalType]:
    """A tier-B change whose screening failed escalates to admin review."""
    if any(c.category is Tier.B and c.moderation_failed for c in changes):
        return ReapprovalType.MODERATION_FAILED
    return None


# CRITICAL: Order matters - structural > content failure > harmless
REAPPROVAL_RULES: List[Callable[[Sequence[ChangeEntry]], Optional[ReapprovalType]]] = [
    _rule_structural_change,
    _rule_moderation_failure,
]


def determine_reapproval_type(changes: Sequence[ChangeEntry]) -> ReapprovalType:
    """
    Determine the reapproval type for a list of changes.

    Args:
        changes: Change entries from compute_listing_diff

    Returns:
        ReapprovalType.NONE for an empty list, otherwise the first matching rule
    """
    if not changes:
        return ReapprovalType.NONE

    for rule in REAPPROVAL_RULES:
        verdict = rule(changes)
        if verdict is not None:
            return verdict

    return ReapprovalType.NONE


# =============================================================================
# REVIEW RESULT
# =============================================================================

@dataclass
class ReapprovalResult:
    """Change list plus the verdict derived from it."""
    changes: List[ChangeEntry] = field(default_factory=list)

    @property
    def reapproval_type(self) -> ReapprovalType:
        return determine_reapproval_type(self.changes)

    def changes_by_category(self, category: Tier) -> List[ChangeEntry]:
        """Filter changes by tier."""
        return [c for c in self.changes if c.category is category]

    def failed_moderation(self) -> List[ChangeEntry]:
        """Tier-B changes whose screening failed."""
        return [c for c in self.changes if c.moderation_failed]

    def moderation_reasons(self) -> List[str]:
        """All failing reasons across changes, deduplicated, first-seen order."""
        reasons = []
        for change in self.failed_moderation():
            reasons.extend(change.moderation_result.reasons)
        return dedupe_reasons(reasons)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary for JSON output."""
        return {
            "reapprovalType": self.reapproval_type.value,
            "changes": [c.to_dict() for c in self.changes],
            "moderationReasons": self.moderation_reasons(),
        }


def review_changes(
    previous_snapshot: Any,
    current_data: Any,
    company_name: Optional[str] = None,
    screener: Optional[TextScreener] = None,
    debug: Optional[bool] = None
) -> ReapprovalResult:
    """
    Diff two snapshots and wrap the result with its verdict.

    Example:
        >>> result = review_changes({"category": "plumbing"}, {"category": "electrical"})
        >>> result.reapproval_type.value
        'full'
    """
    changes = compute_listing_diff(
        previous_snapshot,
        current_data,
        company_name=company_name,
        screener=screener,
        debug=debug
    )
    return ReapprovalResult(changes=changes)


def summarize_changes(changes: Sequence[ChangeEntry]) -> Dict[str, Any]:
    """
    Produce a summary dictionary of a change list.

    Convenience for admin dashboards and debugging.
    """
    by_category = {tier.value: 0 for tier in Tier}
    for change in changes:
        by_category[change.category.value] += 1

    result = ReapprovalResult(changes=list(changes))

    return {
        "reapprovalType": result.reapproval_type.value,
        "totalChanges": len(changes),
        "changesByCategory": by_category,
        "changedFields": [c.field for c in changes],
        "failedModerationFields": [c.field for c in result.failed_moderation()],
        "moderationReasons": result.moderation_reasons(),
    }
