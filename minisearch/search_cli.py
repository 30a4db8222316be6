"""
Command-line front end for the search engine.

Builds the collection once, then evaluates queries against it:
- interactive menu with predefined queries, a custom query and a
  boolean/ranked toggle (default);
- a single query with --query;
- an index listing with --index-only.

Usage (from repo root):
    python -m minisearch.search_cli --collection collections/documents.txt
    python -m minisearch.search_cli --squad-train train.jsonl --squad-dev dev.jsonl
    python -m minisearch.search_cli --query "0(touch screen) fix repair" --mode boolean
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, List

from .engine import SearchEngine
from .index_builder import IngestionError, load_html_directory, load_squad_file, load_tagged_file
from .ranking import ScoredDocument

logger = logging.getLogger(__name__)

DEFAULT_COLLECTION_PATH = Path("collections/documents.txt")

PREDEFINED_QUERIES = [
    "nexus like love happy",
    "asus repair",
    "0(touch screen) fix repair",
    "1(great tablet) 2(tablet fast)",
    "tablet",
]

BOOLEAN = "boolean"
RANKED = "ranked"

CUSTOM_QUERY_KEY = "6"
TOGGLE_SEARCH_TYPE_KEY = "t"
EXIT_KEY = "q"


def build_engine(args: argparse.Namespace) -> SearchEngine:
    """Load the collection selected on the command line."""
    engine = SearchEngine()
    if args.squad_train or args.squad_dev:
        for path in (args.squad_train, args.squad_dev):
            if path is not None:
                load_squad_file(engine, path, tokenize_collection=args.tokenize_collection)
    elif args.html_dir is not None:
        load_html_directory(engine, args.html_dir)
    else:
        load_tagged_file(engine, args.collection)
    return engine


def format_boolean_results(query: str, doc_ids: List[int]) -> str:
    lines = [f'QUERY: "{query}"']
    if doc_ids:
        lines.append("RESULT: match found in doc(s) " + ", ".join(str(d) for d in doc_ids))
    else:
        lines.append("RESULT: no match found.")
    return "\n".join(lines)


def format_ranked_results(query: str, scored: List[ScoredDocument]) -> str:
    lines = [f'QUERY: "{query}"', "RESULT:"]
    if scored:
        # best first
        for score, doc_id in reversed(scored):
            lines.append(f"DocID: {doc_id}, score={score:.4f}")
    else:
        lines.append("no match found.")
    return "\n".join(lines)


def run_query(engine: SearchEngine, query: str, mode: str) -> str:
    if mode == BOOLEAN:
        return format_boolean_results(query, engine.boolean_search(query))
    return format_ranked_results(query, engine.ranked_search(query))


def run_menu_loop(engine: SearchEngine, mode: str = RANKED) -> None:
    """
    Interactive menu. Empty input, Ctrl+C or 'q' exits.
    """
    print("Welcome to the search engine!")
    print(f"Loaded {len(engine)} documents, {len(engine.index)} terms.")

    while True:
        print(f"Select query below to execute {mode} search...")
        for i, query in enumerate(PREDEFINED_QUERIES, start=1):
            print(f'[{i}] - "{query}"')
        print(f"[{CUSTOM_QUERY_KEY}] - custom query...")
        print(f"[{TOGGLE_SEARCH_TYPE_KEY}] - toggle search type (boolean or ranked)")
        print(f"[{EXIT_KEY}] - exit")

        try:
            selection = input("> ").strip().lower()
            if selection == CUSTOM_QUERY_KEY:
                query = input("query> ").strip()
            elif selection.isdigit() and 1 <= int(selection) <= len(PREDEFINED_QUERIES):
                query = PREDEFINED_QUERIES[int(selection) - 1]
            else:
                query = None
        except (EOFError, KeyboardInterrupt):
            print()
            break

        if selection in ("", EXIT_KEY):
            print("Good bye!")
            break
        if selection == TOGGLE_SEARCH_TYPE_KEY:
            mode = BOOLEAN if mode == RANKED else RANKED
            continue
        if query is None:
            continue
        if not query:
            print("No valid terms in query.")
            continue

        print(run_query(engine, query, mode))
        print()


def main(argv: Iterable[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="In-memory boolean and ranked search.")
    parser.add_argument(
        "--collection",
        type=Path,
        default=DEFAULT_COLLECTION_PATH,
        help="Tagged document file (<DOC id > ... </DOC>).",
    )
    parser.add_argument("--squad-train", type=Path, default=None, help="SQuAD JSON Lines file.")
    parser.add_argument("--squad-dev", type=Path, default=None, help="Second SQuAD JSON Lines file.")
    parser.add_argument(
        "--tokenize-collection",
        action="store_true",
        help="Index SQuAD questions/answers and write a .tokenized copy of each file.",
    )
    parser.add_argument("--html-dir", type=Path, default=None, help="Directory of .html documents.")
    parser.add_argument(
        "--index-only",
        action="store_true",
        help="Print index terms with document frequency and exit.",
    )
    parser.add_argument("--query", default=None, help="Run a single query and exit.")
    parser.add_argument("--mode", choices=(BOOLEAN, RANKED), default=RANKED, help="Search type.")
    parser.add_argument("--verbose", action="store_true", help="Debug logging.")
    args = parser.parse_args(list(argv) if argv is not None else None)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        engine = build_engine(args)
    except IngestionError as e:
        logger.error("Could not build the collection: %s", e)
        return 1

    if args.index_only:
        for line in engine.index.dump(include_postings=False):
            print(line)
        return 0

    if args.query is not None:
        print(run_query(engine, args.query, args.mode))
        return 0

    run_menu_loop(engine, mode=args.mode)
    return 0


if __name__ == "__main__":
    sys.exit(main())
