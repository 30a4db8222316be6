"""In-memory boolean and ranked search engine package."""

from .posting import Posting, PostingList, TermInfo, InvertedIndex
from .query import FreeTextQuery, ProximityQuery, QueryParser
from .engine import Document, SearchEngine, SENTINEL_DOC_ID
from .index_builder import IngestionError, load_html_directory, load_squad_file, load_tagged_file
from .tokenizer import normalize
