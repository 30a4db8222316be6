"""
Search engine: the document collection, its inverted index, and
boolean / ranked query evaluation.

Boolean search narrows the candidate set step by step:
  1. proximity queries (if any) produce a filter, ANDed across all of them;
  2. each free-text query intersects the running set with the documents
     containing all of its terms.
A candidate set of None means "no filter applied yet"; the first set
produced seeds it. Any step that yields no documents ends the search.

Ranked search scores every candidate (the proximity filter, or the whole
collection when there are no proximity queries) with TF-IDF.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from .intersect import doc_ids, find_proximity_pair, intersect, intersect_postings
from .posting import InvertedIndex
from .query import FreeTextQuery, ProximityQuery, QueryParser
from .ranking import ScoredDocument, score_document, sort_scores
from .tokenizer import Normalizer, normalize

logger = logging.getLogger(__name__)

# Terms that do not belong to any document (e.g. question/answer text)
# are indexed under this id. Real documents start at 1.
SENTINEL_DOC_ID = 0


@dataclass
class Document:
    doc_id: int
    body: str
    title: str = ""
    length: int = 0  # number of normalized terms


class SearchEngine:
    def __init__(self, normalizer: Normalizer = normalize) -> None:
        self.normalizer = normalizer
        self.index = InvertedIndex(normalizer)
        self.parser = QueryParser(normalizer)
        self.documents: dict[int, Document] = {}
        self._doc_ids: list[int] = []

    @property
    def doc_ids(self) -> Sequence[int]:
        """Ids of all collection documents, ascending."""
        return self._doc_ids

    @property
    def next_doc_id(self) -> int:
        """Next unused sequential id (ids start at 1)."""
        return self._doc_ids[-1] + 1 if self._doc_ids else 1

    def __len__(self) -> int:
        return len(self._doc_ids)

    def __contains__(self, doc_id: object) -> bool:
        return doc_id in self.documents

    def add_document(self, doc_id: int, text: str, title: str = "") -> Document:
        """
        Add a document to the collection and index its text.
        Each whitespace-separated token advances the position by one,
        starting at 1; a token that normalizes to several terms takes
        consecutive positions.
        """
        if doc_id == SENTINEL_DOC_ID:
            raise ValueError(f"Document id {SENTINEL_DOC_ID} is reserved")
        if doc_id in self.documents:
            raise ValueError(f"Duplicate document id: {doc_id}")

        length = 0
        position = 0
        for token in text.split():
            position += 1
            length += len(self.normalizer(token))
            position = self.index.add_text(token, doc_id, position)

        document = Document(doc_id=doc_id, body=text, title=title, length=length)
        self.documents[doc_id] = document
        if self._doc_ids and self._doc_ids[-1] > doc_id:
            self._doc_ids.append(doc_id)
            self._doc_ids.sort()
        else:
            self._doc_ids.append(doc_id)
        return document

    def add_sentinel_text(self, text: str) -> None:
        """Index text outside of any document, under SENTINEL_DOC_ID."""
        for term in self.normalizer(text):
            self.index.add_term(term, SENTINEL_DOC_ID, 0)

    def filter_by(self, proximity_queries: Sequence[ProximityQuery]) -> list[int]:
        """Documents satisfying every proximity query."""
        combined: list[int] | None = None
        for query in proximity_queries:
            p1 = self.index.get_postings(query.first)
            p2 = self.index.get_postings(query.second)
            matches: list[int] = []
            for doc_id in intersect_postings(p1, p2):
                if find_proximity_pair(p1[doc_id], p2[doc_id], query.window):
                    matches.append(doc_id)
            combined = matches if combined is None else intersect(combined, matches)
            if not combined:
                break
        return combined or []

    def intersect_with_query(
        self,
        candidates: Sequence[int] | None,
        query: FreeTextQuery,
    ) -> list[int]:
        """
        Documents containing every term of the query, restricted to
        candidates unless candidates is None.
        """
        matches: list[int] | None = None
        for term in query.terms:
            term_docs = doc_ids(self.index.get_postings(term))
            matches = term_docs if matches is None else intersect(matches, term_docs)
            if not matches:
                return []
        matches = matches or []
        if candidates is None:
            return matches
        return intersect(candidates, matches)

    def boolean_search(self, query: str) -> list[int]:
        parsed = self.parser.parse(query)

        result: list[int] | None = None
        if parsed.proximity:
            result = self.filter_by(parsed.proximity)
            logger.debug("Proximity filter kept %d documents", len(result))
            if not result:
                return []

        for free_text in parsed.free_text:
            result = self.intersect_with_query(result, free_text)
            if not result:
                return []

        return [d for d in (result or []) if d != SENTINEL_DOC_ID]

    def ranked_search(self, query: str) -> list[ScoredDocument]:
        """
        Scored matching documents, ordered by score ascending
        (see ranking.sort_scores); present them from the end.
        """
        parsed = self.parser.parse(query)

        if parsed.proximity:
            candidates: Sequence[int] = self.filter_by(parsed.proximity)
        else:
            candidates = self._doc_ids
        logger.debug("Scoring %d candidate documents", len(candidates))

        terms = parsed.terms()
        n_docs = len(self._doc_ids)
        scored: list[ScoredDocument] = []
        for doc_id in candidates:
            if doc_id == SENTINEL_DOC_ID:
                continue
            matched, score = score_document(self.index, terms, doc_id, n_docs)
            if matched:
                scored.append(ScoredDocument(score=score, doc_id=doc_id))
        return sort_scores(scored)
