import pytest

from minisearch.engine import SENTINEL_DOC_ID, SearchEngine
from minisearch.ranking import ScoredDocument


def test_add_document_positions(engine: SearchEngine) -> None:
    # "the" is a stop word but still takes position 1
    assert engine.index.get_postings("quick")[1].positions == [2]
    assert engine.index.get_postings("fox")[1].positions == [3]
    assert engine.index.get_postings("jump")[2].positions == [3]
    assert engine.documents[1].length == 2
    assert engine.documents[2].length == 3
    assert list(engine.doc_ids) == [1, 2]
    assert engine.next_doc_id == 3


def test_add_document_rejects_bad_ids(engine: SearchEngine) -> None:
    with pytest.raises(ValueError):
        engine.add_document(1, "again")
    with pytest.raises(ValueError):
        engine.add_document(SENTINEL_DOC_ID, "reserved")


def test_out_of_order_documents_keep_doc_ids_sorted() -> None:
    engine = SearchEngine()
    engine.add_document(7, "fox")
    engine.add_document(3, "fox")

    assert list(engine.doc_ids) == [3, 7]
    assert engine.boolean_search("fox") == [3, 7]
    assert engine.next_doc_id == 8


def test_boolean_single_term(engine: SearchEngine) -> None:
    assert engine.boolean_search("quick") == [1, 2]


def test_boolean_proximity_adjacent_terms(engine: SearchEngine) -> None:
    assert engine.boolean_search("0(quick fox)") == [1, 2]


def test_boolean_proximity_and_free_text(engine: SearchEngine) -> None:
    assert engine.boolean_search("1(fox jumps) quick") == [2]


def test_boolean_free_text_is_and(engine: SearchEngine) -> None:
    assert engine.boolean_search("quick jumps") == [2]
    assert engine.boolean_search("quick") == [1, 2]
    assert engine.boolean_search("quick elephant") == []


def test_boolean_proximity_order_matters(engine: SearchEngine) -> None:
    assert engine.boolean_search("0(fox quick)") == []


def test_boolean_proximity_queries_are_anded(engine: SearchEngine) -> None:
    assert engine.boolean_search("0(quick fox) 0(fox jumps)") == [2]
    assert engine.boolean_search("0(quick fox) 0(fox elephant)") == []


def test_boolean_empty_step_empties_result(engine: SearchEngine) -> None:
    assert engine.boolean_search("elephant 0(quick fox) quick") == []
    assert engine.boolean_search("elephant quick") == []
    assert engine.boolean_search("elephant 0(quick fox)") == []


def test_boolean_query_without_terms(engine: SearchEngine) -> None:
    assert engine.boolean_search("") == []
    assert engine.boolean_search("the") == []
    assert engine.boolean_search("0(fox)") == []


def test_boolean_never_returns_sentinel(engine: SearchEngine) -> None:
    engine.add_sentinel_text("quick question")

    assert SENTINEL_DOC_ID in engine.index.get_postings("quick")
    assert engine.boolean_search("quick") == [1, 2]
    assert engine.boolean_search("question") == []


def test_ranked_single_rare_term(engine: SearchEngine) -> None:
    assert engine.ranked_search("jumps") == [ScoredDocument(score=1.0, doc_id=2)]


def test_ranked_orders_by_score(engine: SearchEngine) -> None:
    results = engine.ranked_search("quick jumps")

    assert results == [ScoredDocument(score=0.0, doc_id=1), ScoredDocument(score=1.0, doc_id=2)]


def test_ranked_keeps_zero_scores_and_breaks_ties_by_doc_id(engine: SearchEngine) -> None:
    results = engine.ranked_search("quick")

    assert [s.score for s in results] == [0.0, 0.0]
    assert [s.doc_id for s in reversed(results)] == [1, 2]


def test_ranked_with_proximity_restricts_candidates(engine: SearchEngine) -> None:
    results = engine.ranked_search("1(fox jumps)")

    assert results == [ScoredDocument(score=1.0, doc_id=2)]


def test_ranked_without_match(engine: SearchEngine) -> None:
    assert engine.ranked_search("elephant") == []
    assert engine.ranked_search("0(fox quick) jumps") == []


def test_injected_normalizer_keeps_stop_words() -> None:
    engine = SearchEngine(normalizer=lambda text: text.lower().split())
    engine.add_document(1, "The fox")

    assert engine.boolean_search("the") == [1]
    assert engine.index.get_postings("fox")[1].positions == [2]
