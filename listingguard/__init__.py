from .schema import Tier, TRACKED_FIELDS, get_field_category
from .normalizer import normalize
from .moderation import ModerationResult, moderate_text, moderate_field_value
from .diff import ChangeEntry, ReapprovalType, compute_listing_diff, determine_reapproval_type

__all__ = [
    "Tier",
    "TRACKED_FIELDS",
    "get_field_category",
    "normalize",
    "ModerationResult",
    "moderate_text",
    "moderate_field_value",
    "ChangeEntry",
    "ReapprovalType",
    "compute_listing_diff",
    "determine_reapproval_type",
]
