"""Pre-submission quality checks for listings.

Checks only warn; they never block a submission and never raise.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List

from .durations import duration_in_hours

MIN_DESCRIPTION_LENGTH = 100


@dataclass
class QualityCheck:
    category: str
    status: str  # "passed" | "failed" | "warning"
    message: str
    checked_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "status": self.status,
            "message": self.message,
            "checkedAt": self.checked_at.isoformat(),
        }


def _check_description(listing: Mapping) -> List[QualityCheck]:
    description = listing.get("description")
    if isinstance(description, str) and len(description) < MIN_DESCRIPTION_LENGTH:
        return [QualityCheck("description", "warning", "Description is very short")]
    return []


def _check_media(listing: Mapping) -> List[QualityCheck]:
    media = listing.get("media")
    if isinstance(media, Mapping):
        images = media.get("images")
        if isinstance(images, list) and len(images) == 0:
            return [QualityCheck("media", "warning", "No images uploaded")]
    return []


def _check_subproject_durations(listing: Mapping) -> List[QualityCheck]:
    subprojects = listing.get("subprojects")
    if not isinstance(subprojects, list):
        return []

    checks = []
    for idx, subproject in enumerate(subprojects):
        if not isinstance(subproject, Mapping):
            continue
        preparation = duration_in_hours(subproject.get("preparationDuration"))
        execution = duration_in_hours(subproject.get("executionDuration"))
        if preparation is None or execution is None:
            continue
        if preparation > execution:
            name = subproject.get("name") or f"subproject {idx + 1}"
            checks.append(QualityCheck(
                "subprojects",
                "warning",
                f"Preparation takes longer than execution for {name}"
            ))
    return checks


QUALITY_CHECKS = [
    _check_description,
    _check_media,
    _check_subproject_durations,
]


def perform_quality_checks(listing: Any) -> List[QualityCheck]:
    """Run every quality check against a listing and collect the findings."""
    if not isinstance(listing, Mapping):
        return []

    checks: List[QualityCheck] = []
    for check in QUALITY_CHECKS:
        checks.extend(check(listing))
    return checks
