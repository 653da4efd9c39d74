"""Shared fixtures for listingguard tests."""

import pytest

from listingguard.moderation.lexicon import reset_lexicon
from listingguard.moderation.screening import LexiconTextScreener


# Small, explicit lexicon so tests do not depend on the packaged word lists
TEST_WORDS = {"darn", "heck", "zut"}


@pytest.fixture
def screener():
    return LexiconTextScreener(words=TEST_WORDS)


@pytest.fixture
def fresh_lexicon():
    """Rebuild the shared lexicon from current settings, and again afterwards."""
    reset_lexicon()
    yield
    reset_lexicon()
