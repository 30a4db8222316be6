import pytest

from minisearch.engine import SearchEngine


@pytest.fixture
def engine() -> SearchEngine:
    """Two-document collection used by most search tests."""
    search_engine = SearchEngine()
    search_engine.add_document(1, "the quick fox")
    search_engine.add_document(2, "quick fox jumps")
    return search_engine
