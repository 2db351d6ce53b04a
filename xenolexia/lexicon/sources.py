"""
Word-list sources for dictionary construction.

A source turns external word-list data for one language pair into a list of
DictionaryEntry objects. Three sources are provided:
- BundledWordListSource: JSON assets shipped with the package
- CsvWordListSource: a directory of CSV files (read with pandas)
- MongoWordListSource: a MongoDB collection
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, Optional, Protocol

import pandas as pd
from pymongo import MongoClient
from pymongo.collection import Collection

from xenolexia import config
from xenolexia.errors import UnsupportedLanguagePairError
from xenolexia.schemas import (
    DictionaryEntry,
    Language,
    PROFICIENCY_RANKS,
    ProficiencyLevel,
    WordListRow,
)

logger = logging.getLogger(__name__)

CSV_COLUMNS = ["source", "target", "pos", "level", "cefr", "rank", "variants", "pronunciation"]


class WordListSource(Protocol):
    def load_entries(
        self,
        source_language: Language | str,
        target_language: Language | str,
    ) -> list[DictionaryEntry]:
        ...


def _pair_key(source_language: Language | str, target_language: Language | str) -> str:
    return f"{Language(source_language).value}_{Language(target_language).value}"


def _parse_pair(source_language, target_language) -> tuple[Language, Language]:
    """Validate a language pair, treating unknown codes as unsupported."""
    try:
        return Language(source_language), Language(target_language)
    except ValueError:
        raise UnsupportedLanguagePairError(source_language, target_language) from None


def build_entries(
    rows: Iterable[WordListRow],
    source_language: Language,
    target_language: Language,
    default_start_rank: int = 1,
) -> list[DictionaryEntry]:
    """
    Convert validated rows to entries with sequential ids.

    Rows without a rank get default_start_rank + their position.
    """
    pair = _pair_key(source_language, target_language)
    entries = []
    for position, row in enumerate(rows):
        entries.append(
            row.to_entry(
                entry_id=f"{pair}_{position + 1}",
                source_language=source_language,
                target_language=target_language,
                default_rank=default_start_rank + position,
            )
        )
    return entries


# ---- Bundled JSON ----

class BundledWordListSource:
    """
    JSON word lists named <src>_<tgt>.json.

    File layout:
        {"source_language": "en", "target_language": "el",
         "levels": {"beginner": [{"source": ..., "target": ..., ...}], ...}}

    Rows without a rank are ranked from the start of their level's band.
    """

    def __init__(self, directory: Optional[Path | str] = None):
        self.directory = Path(directory) if directory is not None else config.get_dictionary_dir()

    def path_for(self, source_language, target_language) -> Path:
        return self.directory / f"{_pair_key(source_language, target_language)}.json"

    def load_entries(self, source_language, target_language) -> list[DictionaryEntry]:
        src, tgt = _parse_pair(source_language, target_language)
        path = self.path_for(src, tgt)
        if not path.exists():
            raise UnsupportedLanguagePairError(src.value, tgt.value)

        with path.open("r", encoding="utf-8") as f:
            payload = json.load(f)

        pair = _pair_key(src, tgt)
        entries: list[DictionaryEntry] = []
        for level_name, raw_rows in payload.get("levels", {}).items():
            level = ProficiencyLevel(level_name)
            band_start = PROFICIENCY_RANKS[level][0]
            for position, raw in enumerate(raw_rows):
                row = WordListRow.model_validate({"level": level, **raw})
                entries.append(
                    row.to_entry(
                        entry_id=f"{pair}_{len(entries) + 1}",
                        source_language=src,
                        target_language=tgt,
                        default_rank=band_start + position,
                    )
                )

        logger.debug("Loaded %d bundled entries from %s", len(entries), path)
        return entries


# ---- CSV ----

def _clean_value(value):
    if value is None:
        return None
    if isinstance(value, float) and pd.isna(value):
        return None
    if isinstance(value, str) and value.strip() == "":
        return None
    return value


def read_word_list_csv(path: Path | str) -> list[WordListRow]:
    """
    Read a CSV word list into validated rows.

    Required columns: source, target. Optional: pos, level, cefr, rank,
    variants ('|'-separated), pronunciation.
    """
    df = pd.read_csv(path, dtype=str, keep_default_na=True)
    missing = {"source", "target"} - set(df.columns)
    if missing:
        raise ValueError(f"CSV {path} is missing required columns: {sorted(missing)}")

    rows = []
    for record in df.to_dict(orient="records"):
        cleaned = {
            key: _clean_value(record.get(key))
            for key in CSV_COLUMNS
            if _clean_value(record.get(key)) is not None
        }
        if "rank" in cleaned:
            cleaned["rank"] = int(float(cleaned["rank"]))
        rows.append(WordListRow.model_validate(cleaned))
    return rows


class CsvWordListSource:
    """CSV word lists named <src>_<tgt>.csv in one directory."""

    def __init__(self, directory: Path | str):
        self.directory = Path(directory)

    def path_for(self, source_language, target_language) -> Path:
        return self.directory / f"{_pair_key(source_language, target_language)}.csv"

    def load_entries(self, source_language, target_language) -> list[DictionaryEntry]:
        src, tgt = _parse_pair(source_language, target_language)
        path = self.path_for(src, tgt)
        if not path.exists():
            raise UnsupportedLanguagePairError(src.value, tgt.value)

        entries = build_entries(read_word_list_csv(path), src, tgt)
        logger.debug("Loaded %d CSV entries from %s", len(entries), path)
        return entries


# ---- MongoDB ----

# Global connection pool (reused across loads)
_client: Optional[MongoClient] = None
_collection: Optional[Collection] = None


def get_collection() -> Collection:
    """
    Get the MongoDB dictionary collection.

    Uses a persistent client that's reused across loads.
    """
    global _client, _collection

    if _collection is not None:
        return _collection

    _client = MongoClient(
        config.get_mongo_uri(),
        maxPoolSize=10,
        minPoolSize=1,
        maxIdleTimeMS=60000
    )
    db = _client[config.get_db_name()]
    _collection = db[config.get_dictionary_collection_name()]
    return _collection


class MongoWordListSource:
    """
    Dictionary documents stored in MongoDB.

    Each document holds the WordListRow fields plus source_language and
    target_language. Documents are ordered by rank, then source word.
    """

    def __init__(self, collection: Optional[Collection] = None):
        self._collection = collection

    @property
    def collection(self) -> Collection:
        if self._collection is None:
            self._collection = get_collection()
        return self._collection

    def load_entries(self, source_language, target_language) -> list[DictionaryEntry]:
        src, tgt = _parse_pair(source_language, target_language)
        query = {"source_language": src.value, "target_language": tgt.value}
        documents = list(self.collection.find(query))
        if not documents:
            raise UnsupportedLanguagePairError(src.value, tgt.value)

        documents.sort(key=lambda d: (d.get("rank") or 0, d.get("source", "")))
        rows = [
            WordListRow.model_validate(
                {key: doc[key] for key in CSV_COLUMNS if doc.get(key) is not None}
            )
            for doc in documents
        ]
        entries = build_entries(rows, src, tgt)
        logger.debug("Loaded %d entries from MongoDB for %s", len(entries), _pair_key(src, tgt))
        return entries
