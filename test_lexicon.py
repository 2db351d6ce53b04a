"""
Tests for dictionary entries, the dictionary index, the registry and the
word-list sources.
"""

import threading

import pytest

from scripts.import_word_list import row_to_document
from xenolexia import config
from xenolexia.errors import UnsupportedLanguagePairError
from xenolexia.lexicon import (
    BundledWordListSource,
    CsvWordListSource,
    DictionaryIndex,
    DictionaryRegistry,
    MongoWordListSource,
)
from xenolexia.schemas import (
    DictionaryEntry,
    Language,
    ProficiencyLevel,
    WordListRow,
    is_within_level,
)

LEVELS = [ProficiencyLevel.BEGINNER, ProficiencyLevel.INTERMEDIATE, ProficiencyLevel.ADVANCED]


def make_entry(source, target, level="beginner", variants=(), rank=1, entry_id=None):
    return DictionaryEntry(
        id=entry_id or source,
        source_word=source,
        target_word=target,
        source_language="en",
        target_language="el",
        proficiency_level=level,
        frequency_rank=rank,
        variants=variants,
    )


@pytest.fixture(scope="module")
def bundled_index():
    return DictionaryIndex.load("en", "el")


# ---- Entries ----

def test_entry_drops_canonical_form_from_variants():
    entry = make_entry("House", "σπίτι", variants=["houses", "HOUSE", "house"])
    assert entry.source_word == "house"
    assert entry.variants == frozenset({"houses"})


def test_entry_is_immutable():
    entry = make_entry("dog", "σκύλος")
    with pytest.raises(Exception):
        entry.target_word = "γάτα"


def test_proficiency_order_and_mappings():
    assert is_within_level("beginner", "intermediate")
    assert not is_within_level("advanced", "intermediate")
    assert ProficiencyLevel.from_cefr("B2") == ProficiencyLevel.INTERMEDIATE
    assert ProficiencyLevel.from_frequency_rank(1) == ProficiencyLevel.BEGINNER
    assert ProficiencyLevel.from_frequency_rank(500) == ProficiencyLevel.BEGINNER
    assert ProficiencyLevel.from_frequency_rank(501) == ProficiencyLevel.INTERMEDIATE
    assert ProficiencyLevel.from_frequency_rank(2001) == ProficiencyLevel.ADVANCED


def test_word_list_row_needs_some_level_information():
    row = WordListRow(source="dog", target="σκύλος")
    with pytest.raises(ValueError):
        row.resolved_level()
    assert WordListRow(source="dog", target="σκύλος", cefr="C1").resolved_level() == ProficiencyLevel.ADVANCED


# ---- Index ----

def test_resolve_canonical_and_variant(bundled_index):
    assert bundled_index.resolve("house", "beginner").target_word == "σπίτι"
    assert bundled_index.resolve("Houses", "beginner").source_word == "house"
    assert bundled_index.resolve("WENT", "beginner").source_word == "go"
    assert bundled_index.resolve("zebra", "advanced") is None


def test_resolve_respects_proficiency_ceiling(bundled_index):
    assert bundled_index.resolve("phenomena", "intermediate") is None
    assert bundled_index.resolve("phenomena", "advanced").source_word == "phenomenon"
    assert bundled_index.resolve("problem", "beginner") is None
    assert bundled_index.resolve("problem", "intermediate") is not None


def test_proficiency_monotonicity(bundled_index):
    words = set()
    for entry in bundled_index.entries():
        words.add(entry.source_word)
        words.update(entry.variants)

    resolvable = {
        level: {w for w in words if bundled_index.resolve(w, level) is not None}
        for level in LEVELS
    }
    assert resolvable[ProficiencyLevel.BEGINNER] <= resolvable[ProficiencyLevel.INTERMEDIATE]
    assert resolvable[ProficiencyLevel.INTERMEDIATE] <= resolvable[ProficiencyLevel.ADVANCED]
    assert resolvable[ProficiencyLevel.ADVANCED] == words


def test_get_words_by_level_sorted_by_rank(bundled_index):
    advanced = bundled_index.get_words_by_level("advanced")
    assert [e.source_word for e in advanced][:2] == ["phenomenon", "hypothesis"]
    ranks = [e.frequency_rank for e in advanced]
    assert ranks == sorted(ranks)
    assert all(r >= 2001 for r in ranks)


def test_index_container_protocol(bundled_index):
    assert "children" in bundled_index
    assert "zebra" not in bundled_index
    assert len(bundled_index) == 63


def test_duplicate_source_word_keeps_later_entry():
    index = DictionaryIndex.from_entries("en", "el", [
        make_entry("time", "χρόνος", entry_id="1"),
        make_entry("time", "ώρα", entry_id="2"),
    ])
    assert len(index) == 1
    assert index.resolve("time", "beginner").target_word == "ώρα"


# ---- Registry ----

class CountingSource:
    def __init__(self, entries):
        self.entries = entries
        self.calls = 0
        self._lock = threading.Lock()

    def load_entries(self, source_language, target_language):
        with self._lock:
            self.calls += 1
        if (Language(source_language), Language(target_language)) != (Language.ENGLISH, Language.GREEK):
            raise UnsupportedLanguagePairError(source_language, target_language)
        return list(self.entries)


def test_registry_builds_each_pair_once_under_concurrency():
    source = CountingSource([make_entry("dog", "σκύλος")])
    registry = DictionaryRegistry(source)
    barrier = threading.Barrier(8)
    results = []

    def worker():
        barrier.wait()
        results.append(registry.get("en", "el"))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert source.calls == 1
    assert len({id(index) for index in results}) == 1
    assert registry.is_loaded(Language.ENGLISH, Language.GREEK)


def test_registry_remembers_unsupported_pairs():
    source = CountingSource([make_entry("dog", "σκύλος")])
    registry = DictionaryRegistry(source)

    for _ in range(3):
        with pytest.raises(UnsupportedLanguagePairError):
            registry.get("en", "fr")
    assert source.calls == 1


def test_registry_clear_keeps_handed_out_index_valid():
    source = CountingSource([make_entry("dog", "σκύλος")])
    registry = DictionaryRegistry(source)
    first = registry.get("en", "el")
    registry.clear()
    second = registry.get("en", "el")

    assert first is not second
    assert first.resolve("dog", "beginner") is not None
    assert source.calls == 2


# ---- Sources ----

def test_bundled_source_unsupported_pair():
    with pytest.raises(UnsupportedLanguagePairError):
        DictionaryIndex.load("en", "fr")
    with pytest.raises(UnsupportedLanguagePairError):
        BundledWordListSource().load_entries("en", "xx")


def test_bundled_ranks_follow_level_bands():
    entries = BundledWordListSource().load_entries("en", "el")
    by_word = {e.source_word: e for e in entries}
    assert by_word["house"].frequency_rank == 1
    assert by_word["government"].frequency_rank == 501
    assert by_word["phenomenon"].frequency_rank == 2001
    assert len({e.id for e in entries}) == len(entries)


def test_csv_source(tmp_path):
    (tmp_path / "en_es.csv").write_text(
        "source,target,pos,level,rank,variants\n"
        "house,casa,noun,beginner,1,houses\n"
        "dog,perro,noun,,2,dogs|doggy\n"
        "phenomenon,fenómeno,noun,,2500,phenomena\n",
        encoding="utf-8",
    )
    index = DictionaryIndex.load("en", "es", source=CsvWordListSource(tmp_path))

    assert index.resolve("doggy", "beginner").target_word == "perro"
    assert index.resolve("phenomena", "advanced").proficiency_level == ProficiencyLevel.ADVANCED
    assert index.resolve("phenomena", "intermediate") is None

    with pytest.raises(UnsupportedLanguagePairError):
        CsvWordListSource(tmp_path).load_entries("en", "el")


def test_csv_source_rejects_missing_columns(tmp_path):
    (tmp_path / "en_es.csv").write_text("word,translation\nhouse,casa\n", encoding="utf-8")
    with pytest.raises(ValueError):
        CsvWordListSource(tmp_path).load_entries("en", "es")


class FakeCollection:
    def __init__(self, documents):
        self.documents = documents

    def find(self, query):
        return [
            dict(d) for d in self.documents
            if all(d.get(k) == v for k, v in query.items())
        ]


def test_mongo_source_with_imported_documents():
    rows = [
        WordListRow(source="House", target="maison", pos="noun", rank=3, variants="houses"),
        WordListRow(source="cat", target="chat", pos="noun", cefr="A1"),
    ]
    documents = [row_to_document(row, Language.ENGLISH, Language.FRENCH) for row in rows]
    assert documents[0]["source"] == "house"
    assert documents[0]["variants"] == ["houses"]
    assert documents[0]["level"] == "beginner"

    source = MongoWordListSource(FakeCollection(documents))
    index = DictionaryIndex.load("en", "fr", source=source)
    assert index.resolve("Houses", "beginner").target_word == "maison"
    assert index.resolve("cat", "beginner").target_word == "chat"

    with pytest.raises(UnsupportedLanguagePairError):
        source.load_entries("en", "de")


# ---- Configuration ----

def test_default_options_from_environment(monkeypatch):
    monkeypatch.setenv("XENOLEXIA_TARGET_LANGUAGE", "es")
    monkeypatch.setenv("XENOLEXIA_PROFICIENCY", "intermediate")
    monkeypatch.setenv("XENOLEXIA_DENSITY", "0.5")

    options = config.get_default_options({"The"})
    assert options.source_language == Language.ENGLISH
    assert options.target_language == Language.SPANISH
    assert options.proficiency_level == ProficiencyLevel.INTERMEDIATE
    assert options.density == 0.5
    assert options.exclude_words == frozenset({"the"})

    monkeypatch.setenv("XENOLEXIA_DENSITY", "1.5")
    with pytest.raises(ValueError):
        config.get_default_options()


def test_dictionary_dir_and_mongo_settings(monkeypatch, tmp_path):
    monkeypatch.setenv("XENOLEXIA_DICTIONARY_DIR", str(tmp_path))
    assert BundledWordListSource().directory == tmp_path
    with pytest.raises(UnsupportedLanguagePairError):
        BundledWordListSource().load_entries("en", "el")

    monkeypatch.delenv("MONGO_URI", raising=False)
    with pytest.raises(ValueError):
        config.get_mongo_uri()

    monkeypatch.delenv("XENOLEXIA_DB_NAME", raising=False)
    assert config.get_db_name() == "xenolexia"
