import itertools

import pytest

from tracesim.core.distance import (
    DamerauLevenshtein,
    Levenshtein,
    OptimalStringAlignment,
    get_distance,
    intern_symbols,
)
from tracesim.core.errors import InvalidConfiguration

SAMPLES = [
    "",
    "a",
    "ab",
    "ba",
    "abc",
    "ca",
    "abab",
    "baba",
    "aaaa",
    "kitten",
    "sitting",
    "abcdef",
    "badcfe",
]

VARIANTS = [DamerauLevenshtein(), OptimalStringAlignment(), Levenshtein()]


@pytest.mark.parametrize("metric", VARIANTS, ids=lambda m: m.name)
def test_identity_symmetry_and_bounds(metric):
    for a, b in itertools.product(SAMPLES, repeat=2):
        d = metric.distance(list(a), list(b))
        assert d == metric.distance(list(b), list(a))
        assert 0 <= d <= max(len(a), len(b))
        if a == b:
            assert d == 0


@pytest.mark.parametrize("metric", VARIANTS, ids=lambda m: m.name)
def test_empty_sequences(metric):
    assert metric.distance([], []) == 0
    assert metric.distance([], ["x", "y", "z"]) == 3
    assert metric.distance(["x", "y"], []) == 2


def test_adjacent_transposition_costs_one():
    a, b = ["a", "b"], ["b", "a"]
    assert DamerauLevenshtein().distance(a, b) == 1
    assert OptimalStringAlignment().distance(a, b) == 1
    assert Levenshtein().distance(a, b) == 2


def test_unrestricted_differs_from_optimal_string_alignment():
    # "ca" -> "ac" -> "abc": a transposition followed by an insertion
    assert DamerauLevenshtein().distance("ca", "abc") == 2
    assert OptimalStringAlignment().distance("ca", "abc") == 3


def test_known_distances():
    dl = DamerauLevenshtein()
    assert dl.distance("kitten", "sitting") == 3
    assert dl.distance("abcd", "acbd") == 1
    assert dl.distance("abab", "baba") == 2
    assert dl.distance("aaaa", "aa") == 2
    assert dl.distance("abcdef", "badcfe") == 3
    assert dl.distance(["foo", "bar", "baz"], ["foo", "bar", "alice"]) == 1


def test_tuple_symbols_compare_structurally():
    dl = DamerauLevenshtein()
    a = [("A", "R1"), ("B", "R2")]
    b = [("A", "R1"), ("B", "R3")]
    assert dl.distance(a, b) == 1
    assert dl.distance(a, [tuple(s) for s in a]) == 0
    # whole traces as symbols
    assert dl.distance([tuple(a), tuple(b)], [tuple(b), tuple(a)]) == 1


def test_intern_symbols_shares_codes():
    ca, cb, size = intern_symbols([("x",), ("y",), ("x",)], [("y",), ("z",)])
    assert ca == [0, 1, 0]
    assert cb == [1, 2]
    assert size == 3


def test_get_distance():
    assert isinstance(get_distance(None), DamerauLevenshtein)
    assert isinstance(get_distance("Damerau_Levenshtein"), DamerauLevenshtein)
    assert isinstance(get_distance("osa"), OptimalStringAlignment)
    assert isinstance(get_distance("levenshtein"), Levenshtein)
    with pytest.raises(InvalidConfiguration):
        get_distance("hamming")


def test_variants_are_ordered_on_longer_sequences():
    a = list("abcdefghij" * 4)
    b = list("badcfehgji" * 3 + "acegi")
    dl = DamerauLevenshtein().distance(a, b)
    osa = OptimalStringAlignment().distance(a, b)
    lev = Levenshtein().distance(a, b)
    assert isinstance(dl, int)
    assert dl <= osa <= lev
    assert dl == DamerauLevenshtein().distance(b, a)
