"""
Change detector for service listings.

Compares the last approved snapshot of a listing with its current, edited
state and produces one ChangeEntry per tracked field whose normalized value
differs. Tier-B entries carry the moderation result of their new value.

CORE PRINCIPLES:
1. Values are compared in normalized form only (internal ids never diff)
2. Output order follows the tracked-field table, not snapshot key order
3. Every tracked field is visited; a tier-A hit does not stop the pass
4. Nothing here fetches, stores or sends anything
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..config import settings
from ..moderation.field_moderation import moderate_field_value
from ..moderation.screening import ModerationResult, TextScreener
from ..normalizer import normalize, to_plain
from ..schema import TRACKED_FIELDS, Tier, get_field_category

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChangeEntry:
    """
    One tracked field's before/after values.

    ``old_value``/``new_value`` hold the raw (not normalized) values, with
    None for a missing key. ``moderation_result`` is set only for tier-B
    fields.
    """
    field: str
    category: Tier
    old_value: Any
    new_value: Any
    moderation_result: Optional[ModerationResult] = None

    @property
    def moderation_failed(self) -> bool:
        return self.moderation_result is not None and not self.moderation_result.passed

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary for audit records / JSON output."""
        data = {
            "field": self.field,
            "category": self.category.value,
            "oldValue": self.old_value,
            "newValue": self.new_value,
        }
        if self.moderation_result is not None:
            data["moderationResult"] = self.moderation_result.to_dict()
        return data


def _as_mapping(snapshot: Any) -> Mapping:
    plain = to_plain(snapshot)
    if isinstance(plain, Mapping):
        return plain
    return {}


def compute_listing_diff(
    previous_snapshot: Any,
    current_data: Any,
    company_name: Optional[str] = None,
    screener: Optional[TextScreener] = None,
    debug: Optional[bool] = None
) -> List[ChangeEntry]:
    """
    Compute the tracked-field diff between two listing snapshots.

    Args:
        previous_snapshot: Last approved snapshot (mapping or document wrapper)
        current_data: Current listing state, same shape
        company_name: Submitter's company name, used when screening tier-B text
        screener: Text screener for tier-B fields (default: lexicon screener)
        debug: Log each changed field; defaults to ``settings.verbose_diff_logging``

    Returns:
        Change entries in tracked-field order (tier A, tier B, operational)

    Example:
        >>> changes = compute_listing_diff({"title": "Old"}, {"title": "New"})
        >>> [(c.field, c.category.value) for c in changes]
        [('title', 'B')]
    """
    if debug is None:
        debug = settings.verbose_diff_logging

    previous = _as_mapping(previous_snapshot)
    current = _as_mapping(current_data)

    changes: List[ChangeEntry] = []

    for field in TRACKED_FIELDS:
        old_val = previous.get(field)
        new_val = current.get(field)

        if normalize(old_val) == normalize(new_val):
            continue

        category = get_field_category(field)

        moderation_result = None
        if category is Tier.B:
            moderation_result = moderate_field_value(
                field,
                new_val,
                old_val,
                company_name=company_name,
                screener=screener
            )

        if debug:
            logger.info(f"Field '{field}' changed | category: {category.value}")
            if moderation_result is not None:
                logger.info(
                    f"Field '{field}' moderation: passed={moderation_result.passed} "
                    f"reasons={moderation_result.reasons}"
                )

        changes.append(ChangeEntry(
            field=field,
            category=category,
            old_value=old_val,
            new_value=new_val,
            moderation_result=moderation_result
        ))

    return changes
