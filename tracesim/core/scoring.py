from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Any, Dict, Iterable, Optional
import numpy as np

from tracesim.core.similarity import PairResult


@dataclass
class PairingSummary:
    resolved: int
    unresolved: int
    total_distance: int
    mean_similarity: Optional[float] = None
    min_similarity: Optional[float] = None
    max_similarity: Optional[float] = None
    weighted_similarity: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def summarize(pairs: Iterable[PairResult]) -> PairingSummary:
    """
    Aggregate case-level results. Only resolved pairs contribute to the scores;
    `weighted_similarity` is 1 - sum(d) / sum(max(n, m, 1)), so long traces weigh more.
    """
    pairs = list(pairs)
    resolved = [p.result for p in pairs if p.result is not None]
    unresolved = len(pairs) - len(resolved)
    if not resolved:
        return PairingSummary(resolved=0, unresolved=unresolved, total_distance=0)

    sims = np.array([r.similarity for r in resolved], dtype=float)
    dists = np.array([r.distance for r in resolved], dtype=np.int64)
    spans = np.array([max(r.len_a, r.len_b, 1) for r in resolved], dtype=np.int64)

    return PairingSummary(
        resolved=len(resolved),
        unresolved=unresolved,
        total_distance=int(dists.sum()),
        mean_similarity=float(sims.mean()),
        min_similarity=float(sims.min()),
        max_similarity=float(sims.max()),
        weighted_similarity=float(1.0 - dists.sum() / spans.sum()),
    )
