"""
Moderation of tier-B field values.

Dispatches on the shape of the new value:

- the media field is never auto-screened; any change is gated
- text is screened directly
- sequences are screened element by element (strings directly, objects
  through their known text-bearing keys, ``options`` and
  ``professionalAttachments``)
- anything else passes
"""

from collections.abc import Mapping
from typing import Any, Iterable, List, Optional

from ..normalizer import ValueKind, to_plain, value_kind
from ..schema import MEDIA_FIELD, MODERATED_SUBFIELDS
from .screening import ModerationResult, TextScreener, get_default_screener

MEDIA_REVIEW_REASON = "Media changes require admin review"

# Attachment entries that look like this are file references, not user text
URL_PREFIX = "http"


def _prefixed(prefix: str, result: ModerationResult) -> List[str]:
    if result.passed:
        return []
    return [f"{prefix}: {reason}" for reason in result.reasons]


def _moderate_record_element(
    field: str,
    item: Mapping,
    screener: TextScreener,
    company_name: Optional[str]
) -> List[str]:
    """Screen the text-bearing parts of one object inside a sequence field."""
    reasons = []

    for key in MODERATED_SUBFIELDS:
        text = item.get(key)
        if isinstance(text, str):
            reasons.extend(_prefixed(f"{field}.{key}", screener.screen(text, company_name)))

    options = to_plain(item.get("options"))
    if isinstance(options, (list, tuple)):
        for idx, option in enumerate(options):
            if isinstance(option, str):
                reasons.extend(
                    _prefixed(f"{field}.options[{idx}]", screener.screen(option, company_name))
                )

    attachments = to_plain(item.get("professionalAttachments"))
    if isinstance(attachments, (list, tuple)):
        for idx, attachment in enumerate(attachments):
            if isinstance(attachment, str) and not attachment.startswith(URL_PREFIX):
                reasons.extend(
                    _prefixed(
                        f"{field}.professionalAttachments[{idx}]",
                        screener.screen(attachment, company_name)
                    )
                )

    return reasons


def _moderate_sequence(
    field: str,
    items: Iterable[Any],
    screener: TextScreener,
    company_name: Optional[str]
) -> ModerationResult:
    reasons: List[str] = []

    for item in items:
        kind = value_kind(item)
        if kind is ValueKind.PRIMITIVE and isinstance(item, str):
            result = screener.screen(item, company_name)
            if not result.passed:
                reasons.extend(result.reasons)
        elif kind is ValueKind.RECORD:
            reasons.extend(_moderate_record_element(field, to_plain(item), screener, company_name))

    return ModerationResult.from_reasons(reasons)


def moderate_field_value(
    field: str,
    new_value: Any,
    old_value: Any = None,
    company_name: Optional[str] = None,
    screener: Optional[TextScreener] = None
) -> ModerationResult:
    """
    Moderate the new value of a tier-B field.

    Args:
        field: Top-level field name (e.g. ``"faq"``)
        new_value: The edited value
        old_value: The previously approved value (currently unused; the whole
            new value is screened, not just the delta)
        company_name: Submitter's company name for leakage detection
        screener: Text screener; defaults to the shared lexicon screener

    Returns:
        ModerationResult. Reasons from nested objects are prefixed with the
        path they came from, e.g. ``"faq.answer: Contains inappropriate language"``.
    """
    screener = screener or get_default_screener()

    if field == MEDIA_FIELD:
        return ModerationResult.from_reasons([MEDIA_REVIEW_REASON])

    kind = value_kind(new_value)

    if kind is ValueKind.PRIMITIVE:
        plain = to_plain(new_value)
        if isinstance(plain, str):
            return screener.screen(plain, company_name)
        return ModerationResult.ok()

    if kind is ValueKind.SEQUENCE:
        return _moderate_sequence(field, to_plain(new_value), screener, company_name)

    # ABSENT and RECORD values carry no screenable text at the top level
    return ModerationResult.ok()
