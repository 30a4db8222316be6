"""
Merge-based set operations over document ids, and the positional
proximity test used by proximity queries.

Every doc id sequence handled here is ascending and free of duplicates;
posting lists guarantee it and every function returns sequences that keep it.
"""

from __future__ import annotations

from typing import Sequence

from .posting import Posting, PostingList


def intersect(left: Sequence[int], right: Sequence[int]) -> list[int]:
    """
    Intersect two ascending doc id sequences with a two-pointer merge.
    O(len(left) + len(right)).
    """
    result: list[int] = []
    i = j = 0
    while i < len(left) and j < len(right):
        d1 = left[i]
        d2 = right[j]
        if d1 == d2:
            result.append(d1)
            i += 1
            j += 1
        elif d1 < d2:
            i += 1
        else:
            j += 1
    return result


def intersect_postings(p1: PostingList | None, p2: PostingList | None) -> list[int]:
    """Doc ids present in both posting lists. A missing list matches nothing."""
    if p1 is None or p2 is None:
        return []
    return intersect(p1.doc_ids, p2.doc_ids)


def doc_ids(postings: PostingList | None) -> list[int]:
    """Ascending doc ids of a posting list (empty for an unknown term)."""
    if postings is None:
        return []
    return list(postings.doc_ids)


def find_proximity_pair(p1: Posting, p2: Posting, window: int) -> bool:
    """
    True if some occurrence in p2 follows some occurrence in p1 by
    1..window+1 positions. Order matters: p2 must come after p1.
    """
    for pos1 in p1.positions:
        for pos2 in p2.positions:
            if 0 < pos2 - pos1 <= window + 1:
                return True
    return False
