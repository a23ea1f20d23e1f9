"""
tracesim: Damerau-Levenshtein similarity between event logs.

This package provides a small core for:
- Projecting events onto a chosen set of attribute columns (one symbol per event)
- Grouping events into traces by case key, in first-occurrence order
- Computing transposition-aware edit distance between logs, trace sequences or trace pairs
- Normalizing distances into a similarity score in [0, 1]

Typical use is comparing a simulated event log against the recorded one.
Reading CSV/JSON logs, configuration and reporting live in `tracesim.io`,
`tracesim.reporting` and the `tracesim` command line.
"""

__all__ = [
    "__version__",
]

__version__ = "0.1.0"
