"""
Lexicon - dictionary data and lookups per language pair.

Quick start:
    from xenolexia.lexicon import DictionaryIndex

    index = DictionaryIndex.load("en", "el")
    entry = index.resolve("Houses", "beginner")   # -> entry for "house"
"""

from xenolexia.lexicon.index import (
    DictionaryIndex,
    DictionaryRegistry,
    get_default_registry,
)
from xenolexia.lexicon.sources import (
    BundledWordListSource,
    CsvWordListSource,
    MongoWordListSource,
    WordListSource,
    build_entries,
    read_word_list_csv,
)


__all__ = [
    "DictionaryIndex",
    "DictionaryRegistry",
    "get_default_registry",
    "WordListSource",
    "BundledWordListSource",
    "CsvWordListSource",
    "MongoWordListSource",
    "build_entries",
    "read_word_list_csv",
]
