"""
Posting and inverted index data structures.

A posting records one term's occurrences inside one document:
document_id, term frequency and the positions of every occurrence.
Postings of a term are kept in ascending doc_id order, which the
merge-based intersection relies on.
"""

from __future__ import annotations

import bisect
from dataclasses import dataclass, field
from typing import Iterator, Sequence

from .tokenizer import Normalizer, normalize


@dataclass
class Posting:
    """
    Represents a term's occurrences in a document.
    - doc_id: document identifier
    - tf: term frequency, always equal to len(positions)
    - positions: term positions in reading order
    """

    doc_id: int
    tf: int = 0
    positions: list[int] = field(default_factory=list)

    def add_occurrence(self, position: int) -> None:
        self.positions.append(position)
        self.tf += 1

    def __str__(self) -> str:
        return f"[{self.doc_id},{self.tf}: {','.join(str(p) for p in self.positions)}]"


class PostingList:
    """
    doc_id -> Posting mapping that iterates in ascending doc_id order.

    Documents are normally indexed in ascending id order, so new ids are
    appended; an out-of-order id is placed with bisect.
    """

    def __init__(self) -> None:
        self._postings: dict[int, Posting] = {}
        self._doc_ids: list[int] = []

    def posting_for(self, doc_id: int) -> Posting:
        """Return the posting for doc_id, creating an empty one if needed."""
        posting = self._postings.get(doc_id)
        if posting is None:
            posting = Posting(doc_id=doc_id)
            self._postings[doc_id] = posting
            if not self._doc_ids or self._doc_ids[-1] < doc_id:
                self._doc_ids.append(doc_id)
            else:
                bisect.insort(self._doc_ids, doc_id)
        return posting

    @property
    def doc_ids(self) -> Sequence[int]:
        """Ascending doc ids. Read-only view, do not mutate."""
        return self._doc_ids

    def get(self, doc_id: int) -> Posting | None:
        return self._postings.get(doc_id)

    def __getitem__(self, doc_id: int) -> Posting:
        return self._postings[doc_id]

    def __contains__(self, doc_id: object) -> bool:
        return doc_id in self._postings

    def __len__(self) -> int:
        return len(self._doc_ids)

    def __iter__(self) -> Iterator[Posting]:
        for doc_id in self._doc_ids:
            yield self._postings[doc_id]


@dataclass
class TermInfo:
    """
    Everything the index knows about one term.
    df is the number of documents containing the term (== len(postings)).
    """

    term: str
    df: int = 0
    postings: PostingList = field(default_factory=PostingList)

    def format(self, include_postings: bool = True) -> str:
        line = f"[{self.term}: {self.df}]"
        if include_postings:
            line += "->" + ",".join(str(p) for p in self.postings)
        return line


class InvertedIndex:
    """
    Inverted index: map from term -> TermInfo (df + ordered posting list).
    Built once during ingestion, read-only while queries are evaluated.
    """

    def __init__(self, normalizer: Normalizer = normalize) -> None:
        self._terms: dict[str, TermInfo] = {}
        self._normalize = normalizer

    def add_term(self, term: str, doc_id: int, position: int) -> None:
        """Record one occurrence of an already normalized term."""
        info = self._terms.get(term)
        if info is None:
            info = TermInfo(term=term)
            self._terms[term] = info
        info.postings.posting_for(doc_id).add_occurrence(position)
        info.df = len(info.postings)

    def add_text(self, text: str, doc_id: int, position: int) -> int:
        """
        Normalize text and add every resulting term.
        The first term goes to `position`, each following one to the next
        position. Returns the last position used so the caller can continue
        numbering after it.
        """
        for i, term in enumerate(self._normalize(text)):
            if i > 0:
                position += 1
            self.add_term(term, doc_id, position)
        return position

    def get_postings(self, term: str) -> PostingList | None:
        """Return the posting list for a term, or None if it was never indexed."""
        info = self._terms.get(term)
        if info is None:
            return None
        return info.postings

    def get_term_info(self, term: str) -> TermInfo | None:
        return self._terms.get(term)

    def terms(self) -> Iterator[str]:
        """Iterate over all terms in the index."""
        return iter(self._terms)

    def dump(self, include_postings: bool = True) -> Iterator[str]:
        """Yield one formatted line per term, terms in ascending order."""
        for term in sorted(self._terms):
            yield self._terms[term].format(include_postings)

    def __len__(self) -> int:
        return len(self._terms)

    def __contains__(self, term: object) -> bool:
        return term in self._terms
