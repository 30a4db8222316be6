"""
Text normalization for the search engine.

Every piece of text, whether it comes from a document or from a user query,
goes through `normalize` so both sides agree on the same terms:
lowercase, split on non-alphanumeric boundaries, drop stop words, stem (Porter).

HTML helpers are used by the directory loader in index_builder.
"""

import re
import warnings
from pathlib import Path
from typing import Callable

from bs4 import BeautifulSoup, XMLParsedAsHTMLWarning, MarkupResemblesLocatorWarning
warnings.filterwarnings("ignore", category=XMLParsedAsHTMLWarning)
warnings.filterwarnings("ignore", category=MarkupResemblesLocatorWarning)

from nltk.stem import PorterStemmer

_STEMMER = PorterStemmer()

_TOKEN_RE = re.compile(r"[a-z0-9]+")

# Closed set, checked before stemming.
STOP_WORDS = frozenset({"the", "is", "at", "of", "on", "and", "a"})

Normalizer = Callable[[str], list[str]]


def stem_token(word: str) -> str:
    """Return Porter stem of word."""
    return _STEMMER.stem(word)


def tokenize(text: str) -> list[str]:
    """
    Split text into lowercase runs of ASCII letters and digits.
    Any other character is a boundary.
    """
    if not text:
        return []
    return _TOKEN_RE.findall(text.lower())


def normalize(text: str) -> list[str]:
    """
    Turn free text (a query or document text) into the ordered list of index terms.
    """
    terms: list[str] = []
    for token in tokenize(text):
        if token in STOP_WORDS:
            continue
        term = stem_token(token)
        if term:
            terms.append(term)
    return terms


def extract_text_from_html(html_content: str) -> str:
    """
    Extract visible text from HTML content, stripping tags and scripts.
    """
    soup = BeautifulSoup(html_content, "lxml")
    for element in soup(["script", "style"]):
        element.decompose()
    return soup.get_text(separator=" ", strip=True)


def read_html_file(filepath: Path) -> str:
    """
    Read HTML file content, handling common encodings.
    """
    for encoding in ("utf-8", "latin-1", "cp1252"):
        try:
            return Path(filepath).read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    raise ValueError(f"Could not decode file: {filepath}")
