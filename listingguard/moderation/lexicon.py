"""Profanity lexicon loading.

The lexicon is a single lower-cased word set assembled from a base language
plus any number of supplementary languages. It is built once, on first use,
and is read-only afterwards, so concurrent screeners can share it freely.

Word lists are plain text files named ``<language>.txt`` with one entry per
line. Blank lines and ``#`` comments are ignored. Files may come from any
editor or export tool, so the encoding is detected rather than assumed.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import FrozenSet, Iterable, List, Optional, Set

import chardet

from ..config import settings

logger = logging.getLogger(__name__)

# Word lists shipped with the package
PACKAGED_WORDLIST_DIR = Path(__file__).parent / "wordlists"


def _detect_encoding(file_path: Path) -> str:
    """Detect word-list encoding using chardet with a UTF-8 fallback."""
    try:
        with open(file_path, 'rb') as f:
            raw_data = f.read(10000)

        if raw_data.startswith(b'\xef\xbb\xbf'):
            return 'utf-8-sig'

        # Short files confuse chardet; valid UTF-8 wins outright
        try:
            raw_data.decode('utf-8')
            return 'utf-8'
        except UnicodeDecodeError:
            pass

        result = chardet.detect(raw_data)
        encoding = result.get('encoding') or 'utf-8'

        encoding_lower = encoding.lower()
        if 'utf-8' in encoding_lower or 'utf8' in encoding_lower or encoding_lower == 'ascii':
            return 'utf-8'

        return encoding
    except OSError:
        return 'utf-8'


def read_word_list(file_path: Path) -> Set[str]:
    """Read one word-list file into a set of lower-cased entries.

    Args:
        file_path: Path to a ``<language>.txt`` word list

    Returns:
        Set of lexicon entries

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file cannot be decoded
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"Word list not found: {file_path}")

    encoding = _detect_encoding(file_path)

    try:
        with open(file_path, 'r', encoding=encoding) as f:
            lines = f.read().splitlines()
    except (UnicodeDecodeError, LookupError) as e:
        raise ValueError(f"Could not decode word list {file_path}: {e}")

    words = set()
    for line in lines:
        entry = line.strip().lower()
        if not entry or entry.startswith('#'):
            continue
        words.add(entry)
    return words


def _candidate_paths(language: str, lexicon_dir: Optional[str]) -> List[Path]:
    paths = []
    if lexicon_dir:
        paths.append(Path(lexicon_dir) / f"{language}.txt")
    paths.append(PACKAGED_WORDLIST_DIR / f"{language}.txt")
    return paths


def load_language(language: str, lexicon_dir: Optional[str] = None) -> Set[str]:
    """Load the word list for one language.

    A custom ``lexicon_dir`` is searched before the packaged word lists.

    Raises:
        FileNotFoundError: If no word list exists for the language
    """
    for path in _candidate_paths(language, lexicon_dir):
        if path.exists():
            return read_word_list(path)
    raise FileNotFoundError(f"No word list available for language '{language}'")


def build_lexicon(
    base_language: str = "en",
    supplementary_languages: Iterable[str] = (),
    lexicon_dir: Optional[str] = None
) -> FrozenSet[str]:
    """Assemble the merged lexicon.

    The base language is always attempted first. Supplementary languages are
    merged best-effort: a missing or unreadable list only narrows coverage.

    Args:
        base_language: Language code of the base word list
        supplementary_languages: Extra language codes to merge in
        lexicon_dir: Optional directory searched before the packaged lists

    Returns:
        Frozen set of lower-cased lexicon entries
    """
    words: Set[str] = set()

    try:
        words |= load_language(base_language, lexicon_dir)
    except (OSError, ValueError) as e:
        logger.warning(f"Base lexicon '{base_language}' unavailable: {e}")

    for language in supplementary_languages:
        if language == base_language:
            continue
        try:
            words |= load_language(language, lexicon_dir)
        except (OSError, ValueError) as e:
            # Supplementary languages are optional
            logger.warning(f"Skipping supplementary lexicon '{language}': {e}")

    return frozenset(words)


@lru_cache(maxsize=None)
def get_lexicon() -> FrozenSet[str]:
    """Return the process-wide lexicon, building it on first use."""
    lexicon = build_lexicon(
        base_language=settings.base_language,
        supplementary_languages=settings.supplementary_languages,
        lexicon_dir=settings.lexicon_dir
    )
    logger.info(f"Screening lexicon ready: {len(lexicon)} entries")
    return lexicon


def reset_lexicon() -> None:
    """Drop the memoized lexicon so the next use rebuilds it from settings."""
    get_lexicon.cache_clear()
