"""Text screening for listing content.

A screener inspects one string and reports whether it may be published
without admin review. The default screener checks for:

- profanity, against the merged multi-language lexicon
- the submitter's company name (professionals must not advertise their
  company inside listing content)

Screening degrades to "passed" for anything that is not a non-empty string.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, List, Optional

from .lexicon import get_lexicon

INAPPROPRIATE_LANGUAGE_REASON = "Contains inappropriate language"

# Company names of two characters or fewer match too much ordinary text
MIN_COMPANY_NAME_LENGTH = 3

_TOKEN_SEPARATORS = re.compile(r"[\s.,;:!?()\[\]{}\"'’«»/\-]+")


def dedupe_reasons(reasons: Iterable[str]) -> List[str]:
    """Remove duplicate reasons, keeping first-seen order."""
    return list(dict.fromkeys(reasons))


@dataclass(frozen=True)
class ModerationResult:
    """Outcome of screening one value. ``passed`` is true iff there are no reasons."""
    passed: bool
    reasons: List[str] = field(default_factory=list)

    @classmethod
    def from_reasons(cls, reasons: Iterable[str]) -> "ModerationResult":
        unique = dedupe_reasons(reasons)
        return cls(passed=not unique, reasons=unique)

    @classmethod
    def ok(cls) -> "ModerationResult":
        return cls(passed=True, reasons=[])

    def to_dict(self) -> Dict[str, Any]:
        return {"passed": self.passed, "reasons": list(self.reasons)}


def company_name_reason(company_name: str) -> str:
    return f'Contains company name "{company_name}"'


class TextScreener:
    """
    Pluggable text-screening capability.

    Implementations inspect ``text`` (and optionally the submitter's company
    name) and return a ModerationResult. They must not raise for malformed
    input.
    """

    def screen(self, text: Any, company_name: Optional[str] = None) -> ModerationResult:
        raise NotImplementedError


class LexiconTextScreener(TextScreener):
    """
    Default screener: whole-word lexicon lookup plus company-name matching.

    Args:
        words: Explicit lexicon. When omitted, the shared process-wide
            lexicon is used (built on first use).
    """

    def __init__(self, words: Optional[Iterable[str]] = None):
        self._words: Optional[FrozenSet[str]] = (
            frozenset(w.strip().lower() for w in words if w and w.strip())
            if words is not None else None
        )

    @property
    def words(self) -> FrozenSet[str]:
        if self._words is not None:
            return self._words
        return get_lexicon()

    def contains_profanity(self, text: str) -> bool:
        words = self.words
        if not words:
            return False
        tokens = _TOKEN_SEPARATORS.split(text.lower())
        return any(token in words for token in tokens if token)

    def contains_company_name(self, text: str, company_name: Optional[str]) -> bool:
        if not isinstance(company_name, str) or len(company_name) < MIN_COMPANY_NAME_LENGTH:
            return False
        pattern = re.compile(rf"\b{re.escape(company_name)}\b", re.IGNORECASE)
        return pattern.search(text) is not None

    def screen(self, text: Any, company_name: Optional[str] = None) -> ModerationResult:
        if not text or not isinstance(text, str):
            return ModerationResult.ok()

        reasons = []

        if self.contains_profanity(text):
            reasons.append(INAPPROPRIATE_LANGUAGE_REASON)

        if self.contains_company_name(text, company_name):
            reasons.append(company_name_reason(company_name))

        return ModerationResult.from_reasons(reasons)


_default_screener = LexiconTextScreener()


def get_default_screener() -> TextScreener:
    """Return the shared default screener (backed by the process-wide lexicon)."""
    return _default_screener


def moderate_text(
    text: Any,
    company_name: Optional[str] = None,
    screener: Optional[TextScreener] = None
) -> ModerationResult:
    """Screen a single piece of text.

    Args:
        text: Text to screen; anything other than a non-empty string passes
        company_name: Submitter's company name, matched as a whole word
        screener: Screener to use instead of the default lexicon screener

    Returns:
        ModerationResult with deduplicated reasons
    """
    return (screener or _default_screener).screen(text, company_name)
