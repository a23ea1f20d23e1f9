from __future__ import annotations
from typing import Dict, Hashable, List, Protocol, Sequence, Tuple

from tracesim.core.errors import InvalidConfiguration


class EditDistance(Protocol):
    name: str

    def distance(self, a: Sequence[Hashable], b: Sequence[Hashable]) -> int: ...


def intern_symbols(a: Sequence[Hashable], b: Sequence[Hashable]) -> Tuple[List[int], List[int], int]:
    """
    Map both sequences onto small integer codes drawn from one shared table.
    Equal symbols (structural equality) get equal codes. Returns (codes_a, codes_b, alphabet_size).
    """
    table: Dict[Hashable, int] = {}
    codes_a = [table.setdefault(s, len(table)) for s in a]
    codes_b = [table.setdefault(s, len(table)) for s in b]
    return codes_a, codes_b, len(table)


class DamerauLevenshtein:
    """
    Unrestricted Damerau-Levenshtein distance (Lowrance-Wagner).

    Unit-cost insertions, deletions, substitutions and transpositions of
    adjacent symbols; a transposed pair may still be edited afterwards,
    unlike the optimal string alignment variant.

    The transposition step can reach back to any earlier row, so the whole
    (n+2)x(m+2) table is kept: memory grows with n*m. Comparing two flat logs
    of 20k events each needs a 400M-cell table; use case granularity for
    logs that large.
    """

    name = "damerau_levenshtein"

    def distance(self, a: Sequence[Hashable], b: Sequence[Hashable]) -> int:
        n, m = len(a), len(b)
        if n == 0:
            return m
        if m == 0:
            return n

        ca, cb, alphabet = intern_symbols(a, b)
        max_dist = n + m

        # Row/column 0 hold the sentinel; the usual table lives at offset 1.
        d = [[max_dist] * (m + 2) for _ in range(n + 2)]
        d[1][1:] = range(m + 1)
        for i in range(n + 1):
            d[i + 1][1] = i

        # last row (1-based) where each symbol occurred in `a`
        last_row = [0] * alphabet

        for i in range(1, n + 1):
            ai = ca[i - 1]
            last_match_col = 0
            row, above = d[i + 1], d[i]
            for j in range(1, m + 1):
                bj = cb[j - 1]
                k = last_row[bj]
                l = last_match_col
                if ai == bj:
                    cost = 0
                    last_match_col = j
                else:
                    cost = 1
                row[j + 1] = min(
                    above[j] + cost,                         # match / substitution
                    row[j] + 1,                              # insertion
                    above[j + 1] + 1,                        # deletion
                    d[k][l] + (i - k - 1) + 1 + (j - l - 1),  # transposition
                )
            last_row[ai] = i

        return d[n + 1][m + 1]


class OptimalStringAlignment:
    """Restricted Damerau-Levenshtein: no substring is edited more than once."""

    name = "osa"

    def distance(self, a: Sequence[Hashable], b: Sequence[Hashable]) -> int:
        n, m = len(a), len(b)
        if n == 0:
            return m
        if m == 0:
            return n

        ca, cb, _ = intern_symbols(a, b)
        prev2: List[int] = []
        prev = list(range(m + 1))
        for i in range(1, n + 1):
            cur = [i] + [0] * m
            for j in range(1, m + 1):
                cost = 0 if ca[i - 1] == cb[j - 1] else 1
                best = min(prev[j] + 1, cur[j - 1] + 1, prev[j - 1] + cost)
                if i > 1 and j > 1 and ca[i - 1] == cb[j - 2] and ca[i - 2] == cb[j - 1]:
                    best = min(best, prev2[j - 2] + 1)
                cur[j] = best
            prev2, prev = prev, cur
        return prev[m]


class Levenshtein:
    """Plain edit distance without transpositions."""

    name = "levenshtein"

    def distance(self, a: Sequence[Hashable], b: Sequence[Hashable]) -> int:
        n, m = len(a), len(b)
        if n == 0:
            return m
        if m == 0:
            return n

        ca, cb, _ = intern_symbols(a, b)
        prev = list(range(m + 1))
        for i in range(1, n + 1):
            cur = [i] + [0] * m
            for j in range(1, m + 1):
                cost = 0 if ca[i - 1] == cb[j - 1] else 1
                cur[j] = min(prev[j] + 1, cur[j - 1] + 1, prev[j - 1] + cost)
            prev = cur
        return prev[m]


_VARIANTS = {
    "damerau_levenshtein": DamerauLevenshtein,
    "damerau-levenshtein": DamerauLevenshtein,
    "dl": DamerauLevenshtein,
    "osa": OptimalStringAlignment,
    "optimal_string_alignment": OptimalStringAlignment,
    "restricted": OptimalStringAlignment,
    "levenshtein": Levenshtein,
}


def get_distance(name: str | None = None) -> EditDistance:
    """Resolve a distance variant by name; defaults to unrestricted Damerau-Levenshtein."""
    if not name:
        return DamerauLevenshtein()
    key = str(name).strip().lower()
    if key not in _VARIANTS:
        raise InvalidConfiguration(f"unknown distance variant {name!r}; expected one of {sorted(set(_VARIANTS))}")
    return _VARIANTS[key]()
