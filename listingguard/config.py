"""Environment-driven settings for listingguard."""

import os
from typing import List, Optional


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name, default)
    return [item.strip().lower() for item in raw.split(",") if item.strip()]


class Settings:
    """Settings loaded from environment variables.

    Values are read when the object is created; call ``reload()`` after
    changing the environment (tests do this through monkeypatch).
    """

    def __init__(self):
        self.reload()

    def reload(self) -> None:
        # Per-field diff logging (one INFO line per changed field)
        self.verbose_diff_logging: bool = _env_flag("LISTINGGUARD_DEBUG_DIFF")

        # Screening lexicon
        self.base_language: str = os.getenv("LISTINGGUARD_BASE_LANGUAGE", "en").strip().lower()
        self.supplementary_languages: List[str] = _env_list(
            "LISTINGGUARD_SUPPLEMENTARY_LANGUAGES", "fr"
        )
        self.lexicon_dir: Optional[str] = os.getenv("LISTINGGUARD_LEXICON_DIR") or None

        # Record store (PostgreSQL)
        self.db_url: Optional[str] = os.getenv("LISTINGGUARD_DB_URL") or None
        self.db_host: Optional[str] = os.getenv("LISTINGGUARD_DB_HOST")
        self.db_port: int = int(os.getenv("LISTINGGUARD_DB_PORT", "5432"))
        self.db_name: Optional[str] = os.getenv("LISTINGGUARD_DB_NAME")
        self.db_user: Optional[str] = os.getenv("LISTINGGUARD_DB_USER")
        self.db_password: Optional[str] = os.getenv("LISTINGGUARD_DB_PASSWORD")


settings = Settings()
