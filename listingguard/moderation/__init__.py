"""Content moderation: lexicon, text screening and tier-B field moderation."""

from .screening import (
    ModerationResult,
    TextScreener,
    LexiconTextScreener,
    moderate_text,
    get_default_screener,
)
from .field_moderation import moderate_field_value
from .lexicon import build_lexicon, get_lexicon, reset_lexicon

__all__ = [
    "ModerationResult",
    "TextScreener",
    "LexiconTextScreener",
    "moderate_text",
    "get_default_screener",
    "moderate_field_value",
    "build_lexicon",
    "get_lexicon",
    "reset_lexicon",
]
