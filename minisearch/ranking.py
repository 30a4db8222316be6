"""
TF-IDF scoring of a document against the terms of a query.

    w(t, d) = (1 + log2(tf)) * log2(N / df)
    score(d) = sum of w(t, d) over query terms t found in d

Query terms are not deduplicated: a term named twice counts twice.
"""

from __future__ import annotations

import math
from typing import Iterable, NamedTuple

from .posting import InvertedIndex


class ScoredDocument(NamedTuple):
    score: float
    doc_id: int


def term_weight(tf: int, df: int, n_docs: int) -> float:
    return (1 + math.log2(tf)) * math.log2(n_docs / df)


def score_document(
    index: InvertedIndex,
    terms: Iterable[str],
    doc_id: int,
    n_docs: int,
) -> tuple[bool, float]:
    """
    Score one document. Returns (matched, score); matched is False when
    the document contains none of the terms, in which case it must not be
    ranked even though its score is 0.
    """
    score = 0.0
    matched = False
    for term in terms:
        info = index.get_term_info(term)
        if info is None:
            continue
        posting = info.postings.get(doc_id)
        if posting is None:
            continue
        score += term_weight(posting.tf, info.df, n_docs)
        matched = True
    return matched, score


def sort_scores(scored: Iterable[ScoredDocument]) -> list[ScoredDocument]:
    """
    Order by score ascending. Equal scores are ordered by descending doc id
    so that reading the list from the end (best first) gives ties in
    ascending doc id order.
    """
    return sorted(scored, key=lambda s: (s.score, -s.doc_id))
