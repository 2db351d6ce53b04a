"""
Import a CSV word list into the MongoDB dictionary collection.

The CSV needs `source` and `target` columns; `pos`, `level`, `cefr`, `rank`,
`variants` ('|'-separated) and `pronunciation` are optional. Rows are
validated before anything is written.

Usage:
    python -m scripts.import_word_list --csv data/en_el.csv --source en --target el [--dry-run]
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from pymongo.errors import DuplicateKeyError

from xenolexia.lexicon.sources import get_collection, read_word_list_csv
from xenolexia.schemas import Language, WordListRow

logger = logging.getLogger(__name__)


def row_to_document(row: WordListRow, source_language: Language, target_language: Language) -> dict:
    """MongoDB document for one validated row."""
    document = row.model_dump(mode="json", exclude_none=True)
    document["source"] = row.source.strip().lower()
    document["variants"] = sorted(row.variants)
    document["level"] = row.resolved_level().value
    document["source_language"] = Language(source_language).value
    document["target_language"] = Language(target_language).value
    return document


def import_word_list(
    csv_path: Path,
    source_language: str,
    target_language: str,
    dry_run: bool = False
) -> dict[str, int]:
    """
    Import rows from csv_path for one language pair.

    Args:
        csv_path: CSV word list
        source_language: Source language code (e.g. "en")
        target_language: Target language code (e.g. "el")
        dry_run: If True, validate only and don't write to MongoDB

    Returns:
        Counts of inserted, duplicate and failed rows
    """
    src = Language(source_language)
    tgt = Language(target_language)

    if not csv_path.exists():
        raise FileNotFoundError(f"CSV not found: {csv_path}")

    rows = read_word_list_csv(csv_path)
    print(f"Loaded {len(rows)} words from {csv_path}")

    collection = None
    if not dry_run:
        collection = get_collection()
        collection.create_index(
            [("source_language", 1), ("target_language", 1), ("source", 1)],
            unique=True
        )

    counts = {"inserted": 0, "duplicates": 0, "errors": 0}
    for idx, row in enumerate(rows):
        try:
            document = row_to_document(row, src, tgt)
        except ValueError as e:
            counts["errors"] += 1
            logger.error("Row %d (%s): %s", idx + 1, row.source, e)
            continue

        if dry_run:
            counts["inserted"] += 1
            continue

        try:
            collection.insert_one(document)
            counts["inserted"] += 1
        except DuplicateKeyError:
            counts["duplicates"] += 1
            logger.warning("Duplicate word skipped: %s", document["source"])

    print(f"\n{'='*60}")
    print("Import complete!")
    print(f"{'='*60}")
    print(f"{'Would insert' if dry_run else 'Inserted'}:  {counts['inserted']}")
    print(f"Duplicates skipped: {counts['duplicates']}")
    print(f"Errors:             {counts['errors']}")
    return counts


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    parser = argparse.ArgumentParser(
        description="Import a CSV word list into the MongoDB dictionary collection"
    )
    parser.add_argument("--csv", type=Path, required=True, help="Path to the CSV word list")
    parser.add_argument("--source", default="en", help="Source language code (default: en)")
    parser.add_argument("--target", default="el", help="Target language code (default: el)")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate the CSV without writing to MongoDB"
    )

    args = parser.parse_args()

    import_word_list(
        csv_path=args.csv,
        source_language=args.source,
        target_language=args.target,
        dry_run=args.dry_run
    )


if __name__ == "__main__":
    main()
