"""
Query objects and the query-string parser.

A query string mixes free text with proximity blocks written as
`<digit>(<word> <word>)`, for example "0(touch screen) fix repair".
The parser is a small two-state machine:

    state            input                   action
    ---------------  ----------------------  ------------------------------------------
    FREE_TEXT        digit followed by "("   flush free text, window = digit -> BLOCK
    FREE_TEXT        anything else           append to the free-text buffer
    PROXIMITY_BLOCK  digit followed by "("   blocks do not nest: flush the partial block
                                             as free text and reopen with the new window
    PROXIMITY_BLOCK  ")"                     emit a proximity query (needs 2 terms) -> FREE_TEXT
    PROXIMITY_BLOCK  anything else           append to the block buffer

At the end of input a free-text buffer is flushed; an unclosed block is dropped.
Sub-queries that normalize to nothing (or a block with fewer than two
terms) are dropped without error.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field

from .tokenizer import Normalizer, normalize

logger = logging.getLogger(__name__)

_DIGITS = "0123456789"


@dataclass
class Query:
    """Original query text plus its normalized terms."""

    text: str
    terms: list[str]


@dataclass
class FreeTextQuery(Query):
    """All terms must be present in a document (AND)."""


@dataclass
class ProximityQuery(Query):
    """
    Two terms that must appear in order, the second at most
    `window + 1` positions after the first.
    """

    window: int = 0

    @property
    def first(self) -> str:
        return self.terms[0]

    @property
    def second(self) -> str:
        return self.terms[1]


@dataclass
class ParsedQuery:
    proximity: list[ProximityQuery] = field(default_factory=list)
    free_text: list[FreeTextQuery] = field(default_factory=list)

    def terms(self) -> list[str]:
        """All proximity terms followed by all free-text terms, duplicates kept."""
        combined: list[str] = []
        for query in self.proximity:
            combined.extend(query.terms)
        for query in self.free_text:
            combined.extend(query.terms)
        return combined

    def __bool__(self) -> bool:
        return bool(self.proximity or self.free_text)


class ParserState(enum.Enum):
    SCANNING_FREE_TEXT = "free_text"
    SCANNING_PROXIMITY_BLOCK = "proximity_block"


class QueryParser:
    def __init__(self, normalizer: Normalizer = normalize) -> None:
        self._normalize = normalizer

    def parse(self, text: str) -> ParsedQuery:
        result = ParsedQuery()
        state = ParserState.SCANNING_FREE_TEXT
        buffer: list[str] = []
        window = 0

        i = 0
        while i < len(text):
            char = text[i]
            if char in _DIGITS and i + 1 < len(text) and text[i + 1] == "(":
                self._flush_free_text("".join(buffer), result)
                buffer = []
                window = int(char)
                state = ParserState.SCANNING_PROXIMITY_BLOCK
                i += 2
                continue
            if char == ")" and state is ParserState.SCANNING_PROXIMITY_BLOCK:
                self._flush_proximity("".join(buffer), window, result)
                buffer = []
                state = ParserState.SCANNING_FREE_TEXT
            else:
                buffer.append(char)
            i += 1

        if state is ParserState.SCANNING_FREE_TEXT:
            self._flush_free_text("".join(buffer), result)
        elif buffer:
            logger.debug("Dropping unclosed proximity block %r", "".join(buffer))

        logger.debug(
            "Parsed %r into %d proximity and %d free-text queries",
            text,
            len(result.proximity),
            len(result.free_text),
        )
        return result

    def _flush_free_text(self, chunk: str, result: ParsedQuery) -> None:
        if not chunk:
            return
        terms = self._normalize(chunk)
        if not terms:
            logger.debug("Dropping free-text query %r: no terms", chunk)
            return
        result.free_text.append(FreeTextQuery(text=chunk, terms=terms))

    def _flush_proximity(self, chunk: str, window: int, result: ParsedQuery) -> None:
        terms = self._normalize(chunk)
        if len(terms) < 2:
            logger.debug("Dropping proximity query %r: needs two terms", chunk)
            return
        result.proximity.append(ProximityQuery(text=chunk, terms=terms[:2], window=window))
