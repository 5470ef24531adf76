"""Tests for fuzzy name ranking."""
from servoy_intel.index import fuzzy_search, levenshtein_distance


def test_edit_distance():
    assert levenshtein_distance('kitten', 'sitting') == 3
    assert levenshtein_distance('', 'abc') == 3
    assert levenshtein_distance('same', 'same') == 0


def test_prefix_beats_distance_beats_length():
    result = fuzzy_search(['getSomething', 'getSome', 'other'], 'getsome')
    assert result.index('getSome') < result.index('getSomething')
    assert 'other' not in result


def test_distance_within_tolerance_is_kept():
    # tolerance for a 4 character query is 2
    assert fuzzy_search(['otup', 'outp', 'unrelated'], 'outp') == ['outp', 'otup']


def test_original_order_breaks_ties():
    assert fuzzy_search(['abd', 'abc', 'abe'], 'ab') == ['abd', 'abc', 'abe']
