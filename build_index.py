"""
Build the search engine index from a collection and print it.

Usage:
    python build_index.py
    python build_index.py --collection collections/documents.txt --no-postings
    python build_index.py --squad data/train.jsonl

Output:
  - one line per term: [term: df]->[doc_id,tf: positions],...
  - analytics table (documents, unique terms)
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent))

from minisearch import IngestionError, SearchEngine, load_squad_file, load_tagged_file


def get_collection_path() -> Path:
    base = Path(__file__).resolve().parent
    return base / "collections" / "documents.txt"


def main() -> None:
    parser = argparse.ArgumentParser(description="Build the inverted index and print it")
    parser.add_argument(
        "--collection",
        type=Path,
        default=None,
        help="Tagged document file (default: collections/documents.txt)",
    )
    parser.add_argument(
        "--squad",
        type=Path,
        default=None,
        help="SQuAD JSON Lines file to index instead of the tagged collection",
    )
    parser.add_argument(
        "--no-postings",
        action="store_true",
        help="Print terms and document frequency only",
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    engine = SearchEngine()
    try:
        if args.squad is not None:
            load_squad_file(engine, args.squad)
        else:
            load_tagged_file(engine, args.collection or get_collection_path())
    except IngestionError as e:
        print(f"Error: {e}")
        sys.exit(1)

    if len(engine) == 0:
        print("No documents found in the collection.")
        sys.exit(1)

    for line in engine.index.dump(include_postings=not args.no_postings):
        print(line)

    print("\n" + "=" * 50)
    print("INDEX ANALYTICS")
    print("=" * 50)
    print()
    print("| Metric                      | Value |")
    print("|-----------------------------|-------|")
    print(f"| Number of indexed documents | {len(engine)} |")
    print(f"| Number of unique terms      | {len(engine.index)} |")
    print()


if __name__ == "__main__":
    main()
