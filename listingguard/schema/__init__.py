"""Field classification table for service listings.

Every tracked listing field belongs to at most one tier:

- Tier A (structural): any change forces a full admin reapproval.
- Tier B (content): changes are screened automatically; a failed screen
  escalates to admin review, a clean screen auto-clears.
- No tier (operational): changes never block publication.
"""

from enum import Enum
from typing import Dict, FrozenSet, List


class Tier(str, Enum):
    """Reapproval tier of a listing field."""
    A = "A"
    B = "B"
    NONE = "none"


# Tier A: structural / classification fields
CATEGORY_A_FIELDS: List[str] = [
    "category",
    "service",
    "areaOfWork",
    "certifications",
    "services",
    "categories",
    "serviceConfigurationId",
]

# Tier B: content fields (text is screened, media is always gated)
CATEGORY_B_FIELDS: List[str] = [
    "title",
    "description",
    "media",
    "subprojects",
    "extraOptions",
    "termsConditions",
    "faq",
    "rfqQuestions",
    "postBookingQuestions",
    "customConfirmationMessage",
]

# Operational fields: tracked for the audit log, never block publication
NO_REAPPROVAL_FIELDS: List[str] = [
    "distance",
    "resources",
    "intakeMeeting",
    "renovationPlanning",
    "priceModel",
    "keywords",
    "timeMode",
    "preparationDuration",
    "executionDuration",
    "bufferDuration",
    "minResources",
    "minOverlapPercentage",
]

# Diff order: tier A, then tier B, then operational
TRACKED_FIELDS: List[str] = CATEGORY_A_FIELDS + CATEGORY_B_FIELDS + NO_REAPPROVAL_FIELDS

# The one tier-B field whose changes are never auto-screened
MEDIA_FIELD = "media"

# Text-bearing keys screened inside objects of array-valued tier-B fields
MODERATED_SUBFIELDS = (
    "name",
    "description",
    "question",
    "answer",
    "customConfirmationMessage",
)

_CATEGORY_A_SET: FrozenSet[str] = frozenset(CATEGORY_A_FIELDS)
_CATEGORY_B_SET: FrozenSet[str] = frozenset(CATEGORY_B_FIELDS)


def get_field_category(field: str) -> Tier:
    """Resolve the tier of a (possibly dotted) field name.

    Only the first path segment is consulted, so ``subprojects.0.name``
    resolves to the tier of ``subprojects``. Unknown fields resolve to
    ``Tier.NONE``.

    Args:
        field: Field name, e.g. ``"title"`` or ``"faq.2.answer"``

    Returns:
        The field's tier
    """
    if not isinstance(field, str) or not field:
        return Tier.NONE

    top_level = field.split(".", 1)[0]

    if top_level in _CATEGORY_A_SET:
        return Tier.A
    if top_level in _CATEGORY_B_SET:
        return Tier.B
    return Tier.NONE


def get_classification_table() -> Dict[str, Tier]:
    """Return the full field -> tier table in tracked-field order."""
    return {field: get_field_category(field) for field in TRACKED_FIELDS}
