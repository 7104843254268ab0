# tests/test_section_packer.py
from core.entities import PageRecord, RankedResult
from core.section_packer import SEPARATOR, pack


def _pages(*specs):
    return {
        title: PageRecord(identifier=title, content=content, token_length=tokens)
        for title, content, tokens in specs
    }


def _ranked(*titles):
    return [RankedResult(similarity=1.0 - i * 0.1, identifier=t) for i, t in enumerate(titles)]


def test_pages_within_budget_are_kept_whole_in_rank_order():
    pages = _pages(("Page 1", "alpha", 10), ("Page 2", "beta", 10))
    sections = pack(_ranked("Page 2", "Page 1"), pages, 1000)
    assert [s.text for s in sections] == ["\n* beta", "\n* alpha"]


def test_unknown_identifiers_are_skipped():
    pages = _pages(("Page 1", "alpha", 10))
    sections = pack(_ranked("Page 5", "Page 1"), pages, 1000)
    assert [s.text for s in sections] == [SEPARATOR + "alpha"]


def test_page_that_crosses_budget_is_truncated():
    # 504 + 404 = 908 fits; + 204 = 1112 > 1000 -> keep 1000 - 1112 - 4 < 0 chars
    pages = _pages(
        ("Page 1", "a" * 50, 500),
        ("Page 2", "b" * 50, 400),
        ("Page 3", "c" * 50, 200),
    )
    sections = pack(_ranked("Page 1", "Page 2", "Page 3"), pages, 1000)
    assert sections[0].text == "\n* " + "a" * 50
    assert sections[1].text == "\n* " + "b" * 50
    assert sections[2].text == "\n* "


def test_custom_separator_and_overhead():
    pages = _pages(("Page 1", "abcdefghij", 5), ("Page 2", "klmnopqrst", 5))
    sections = pack(
        _ranked("Page 1", "Page 2"), pages, 9, separator="\n-- ", separator_overhead=0
    )
    # 5 fits, 10 > 9 so Page 2 is cut to 9 - 10 - 0 characters
    assert [s.text for s in sections] == ["\n-- abcdefghij", "\n-- "]


def test_packing_continues_after_overflow():
    pages = _pages(
        ("Page 1", "x" * 20, 990),
        ("Page 2", "y" * 20, 10),
        ("Page 3", "z" * 20, 1),
    )
    sections = pack(_ranked("Page 1", "Page 2", "Page 3"), pages, 1000)
    assert len(sections) == 3
    assert sections[0].text == "\n* " + "x" * 20
    assert sections[1].text == "\n* "
    assert sections[2].text == "\n* "


def test_stop_on_overflow_ends_after_first_overflowing_page():
    pages = _pages(
        ("Page 1", "x" * 20, 990),
        ("Page 2", "y" * 20, 10),
        ("Page 3", "z" * 20, 1),
    )
    sections = pack(
        _ranked("Page 1", "Page 2", "Page 3"), pages, 1000, stop_on_overflow=True
    )
    assert len(sections) == 2


def test_exact_budget_is_not_overflow():
    pages = _pages(("Page 1", "full", 996))
    sections = pack(_ranked("Page 1"), pages, 1000)
    assert sections[0].text == "\n* full"


def test_repeated_identifiers_are_not_deduplicated():
    pages = _pages(("Page 1", "alpha", 1))
    sections = pack(_ranked("Page 1", "Page 1"), pages, 1000)
    assert len(sections) == 2


def test_empty_inputs():
    assert pack([], {}, 1000) == []
