from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Any, Dict, Hashable, Optional, Sequence

from tracesim.core.distance import DamerauLevenshtein, EditDistance
from tracesim.core.errors import ContractViolation, UnresolvedPairing


@dataclass(frozen=True)
class DistanceResult:
    distance: int
    similarity: float
    len_a: int = 0
    len_b: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def similarity(distance: int, len_a: int, len_b: int) -> float:
    """
    1 - d / max(n, m, 1).

    Two empty sequences are identical (similarity 1). Since any valid edit
    distance is at most max(n, m), the result stays in [0, 1].
    """
    if distance < 0 or len_a < 0 or len_b < 0:
        raise ContractViolation(
            f"distance and lengths must be non-negative (distance={distance}, len_a={len_a}, len_b={len_b})"
        )
    return 1.0 - distance / max(len_a, len_b, 1)


def measure(a: Sequence[Hashable], b: Sequence[Hashable], metric: EditDistance | None = None) -> DistanceResult:
    metric = metric or DamerauLevenshtein()
    d = metric.distance(a, b)
    return DistanceResult(distance=d, similarity=similarity(d, len(a), len(b)), len_a=len(a), len_b=len(b))


@dataclass
class PairResult:
    """Outcome for one trace pair; `error` is set instead of `result` when the pair is unresolved."""
    case_a: Any
    case_b: Any
    result: Optional[DistanceResult] = None
    error: Optional[UnresolvedPairing] = None

    @property
    def ok(self) -> bool:
        return self.result is not None

    @property
    def distance(self) -> Optional[int]:
        return self.result.distance if self.result else None

    @property
    def similarity(self) -> Optional[float]:
        return self.result.similarity if self.result else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "case_a": self.case_a,
            "case_b": self.case_b,
            "distance": self.distance,
            "similarity": self.similarity,
            "len_a": self.result.len_a if self.result else None,
            "len_b": self.result.len_b if self.result else None,
            "error": str(self.error) if self.error else None,
        }
