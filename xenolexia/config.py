"""
Runtime configuration.

Values come from environment variables (optionally loaded from a .env file).
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from xenolexia.schemas import TranslationOptions

# Load environment
load_dotenv()

# Configuration
BUNDLED_DICTIONARY_DIR = Path(__file__).resolve().parent / "lexicon" / "data"
DEFAULT_DB_NAME = "xenolexia"
DEFAULT_DICTIONARY_COLLECTION = "dictionary"


def get_dictionary_dir() -> Path:
    """Directory holding <src>_<tgt>.json word lists."""
    override = os.getenv("XENOLEXIA_DICTIONARY_DIR")
    if override:
        return Path(override)
    return BUNDLED_DICTIONARY_DIR


def get_mongo_uri() -> str:
    mongo_uri = os.getenv("MONGO_URI")
    if not mongo_uri:
        raise ValueError("MONGO_URI not found in environment variables")
    return mongo_uri


def get_db_name() -> str:
    return os.getenv("XENOLEXIA_DB_NAME", DEFAULT_DB_NAME)


def get_dictionary_collection_name() -> str:
    return os.getenv("XENOLEXIA_DICTIONARY_COLLECTION", DEFAULT_DICTIONARY_COLLECTION)


def get_default_options(exclude_words: Optional[set[str]] = None) -> TranslationOptions:
    """
    Build translation options from the environment.

    Env vars:
        XENOLEXIA_SOURCE_LANGUAGE (default: en)
        XENOLEXIA_TARGET_LANGUAGE (default: el)
        XENOLEXIA_PROFICIENCY (default: beginner)
        XENOLEXIA_DENSITY (default: 0.3)
    """
    return TranslationOptions(
        source_language=os.getenv("XENOLEXIA_SOURCE_LANGUAGE", "en"),
        target_language=os.getenv("XENOLEXIA_TARGET_LANGUAGE", "el"),
        proficiency_level=os.getenv("XENOLEXIA_PROFICIENCY", "beginner"),
        density=float(os.getenv("XENOLEXIA_DENSITY", "0.3")),
        exclude_words=exclude_words or frozenset(),
    )
