"""
Tests for skip pattern parsing
"""

import config
from skip_pattern import parse_skip_pattern


def test_pages_and_ranges():
    assert parse_skip_pattern("1,2,10-12") == {1, 2, 10, 11, 12}


def test_empty_and_blank_patterns():
    assert parse_skip_pattern("") == set()
    assert parse_skip_pattern("   ") == set()
    assert parse_skip_pattern(None) == set()


def test_bad_tokens_are_ignored_individually():
    assert parse_skip_pattern("abc,3") == {3}
    assert parse_skip_pattern("4,,x-2,7-y, 9") == {4, 9}


def test_whitespace_around_tokens_and_hyphen():
    assert parse_skip_pattern(" 5 , 7 - 8 ") == {5, 7, 8}


def test_reversed_range_adds_nothing():
    assert parse_skip_pattern("12-10") == set()
    assert parse_skip_pattern("12-10,3") == {3}


def test_single_page_range():
    assert parse_skip_pattern("6-6") == {6}


def test_ranges_stop_at_last_page():
    assert parse_skip_pattern("2-9999999999", max_page=5) == {2, 3, 4, 5}
    assert parse_skip_pattern("3,8,7-9", max_page=5) == {3}
    assert parse_skip_pattern("6-9", max_page=5) == set()


def test_huge_range_without_page_count_is_capped():
    skip_pages = parse_skip_pattern("1-99999999999999999999")
    assert len(skip_pages) == config.MAX_SKIP_PAGE
    assert max(skip_pages) == config.MAX_SKIP_PAGE


def test_overlong_numbers_do_not_break_parsing():
    assert parse_skip_pattern("9" * 5000 + ",4") == {4}
    assert parse_skip_pattern("1-" + "9" * 5000, max_page=3) == {1, 2, 3}
    assert parse_skip_pattern("007") == {7}
