import logging

from minisearch.query import FreeTextQuery, ProximityQuery, QueryParser


def test_mixed_query() -> None:
    parsed = QueryParser().parse("0(touch screen) fix repair")

    assert parsed.proximity == [ProximityQuery(text="touch screen", terms=["touch", "screen"], window=0)]
    assert [q.terms for q in parsed.free_text] == [["fix", "repair"]]


def test_several_proximity_blocks() -> None:
    parsed = QueryParser().parse("1(great tablet) 2(tablet fast)")

    assert [(q.first, q.second, q.window) for q in parsed.proximity] == [
        ("great", "tablet", 1),
        ("tablet", "fast", 2),
    ]
    # the blank between the blocks normalizes to nothing
    assert parsed.free_text == []


def test_free_text_before_block_is_flushed_first() -> None:
    parsed = QueryParser().parse("jumps 0(quick fox) quick")

    assert [q.terms for q in parsed.free_text] == [["jump"], ["quick"]]
    assert parsed.free_text[0] == FreeTextQuery(text="jumps ", terms=["jump"])
    assert parsed.terms() == ["quick", "fox", "jump", "quick"]


def test_unclosed_block_is_dropped(caplog) -> None:
    with caplog.at_level(logging.DEBUG, logger="minisearch.query"):
        parsed = QueryParser().parse("fix 0(quick fox")

    assert parsed.proximity == []
    assert [q.terms for q in parsed.free_text] == [["fix"]]
    assert "unclosed proximity block" in caplog.text


def test_block_with_fewer_than_two_terms_is_dropped() -> None:
    assert QueryParser().parse("0(fox)").proximity == []
    assert QueryParser().parse("0(the fox)").proximity == []
    assert not QueryParser().parse("0()")


def test_block_keeps_first_two_terms() -> None:
    parsed = QueryParser().parse("3(quick brown fox)")

    assert parsed.proximity[0].terms == ["quick", "brown"]
    assert parsed.proximity[0].window == 3


def test_closing_parenthesis_outside_block_is_text() -> None:
    parsed = QueryParser().parse("quick) fox")

    assert parsed.proximity == []
    assert [q.terms for q in parsed.free_text] == [["quick", "fox"]]


def test_blocks_do_not_nest() -> None:
    parsed = QueryParser().parse("0(quick 1(fox jumps))")

    assert [q.terms for q in parsed.free_text] == [["quick"]]
    assert [(q.first, q.second, q.window) for q in parsed.proximity] == [("fox", "jump", 1)]


def test_only_one_digit_is_the_window() -> None:
    parsed = QueryParser().parse("10(quick fox)")

    assert parsed.proximity[0].window == 0
    assert [q.terms for q in parsed.free_text] == [["1"]]


def test_stop_words_only() -> None:
    parsed = QueryParser().parse("the")

    assert parsed.proximity == []
    assert parsed.free_text == []
    assert not parsed


def test_injected_normalizer() -> None:
    parsed = QueryParser(normalizer=lambda text: text.split()).parse("The Fox")

    assert parsed.free_text[0].terms == ["The", "Fox"]
