from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from itertools import zip_longest
from typing import Any, Dict, Hashable, Iterable, List, Mapping, Optional, Sequence, Tuple, Union
import logging

from tracesim.core.event import EventEncoder, Log, Trace, flatten_records
from tracesim.core.distance import EditDistance, DamerauLevenshtein
from tracesim.core.errors import InvalidConfiguration, UnresolvedPairing
from tracesim.core.similarity import DistanceResult, PairResult, measure
from tracesim.core.scoring import PairingSummary, summarize

logger = logging.getLogger(__name__)

DEFAULT_CASE_ATTRIBUTE = "case:concept:name"

LogInput = Union[Log, Sequence[Mapping[str, Any]]]
PairKey = Tuple[Optional[Hashable], Optional[Hashable]]


class Granularity(str, Enum):
    LOG = "log"        # whole log as one flat event sequence
    TRACES = "traces"  # whole log as a sequence of traces, one symbol per trace
    CASE = "case"      # one distance per matched trace pair

    @classmethod
    def parse(cls, value: Union[str, "Granularity"]) -> "Granularity":
        try:
            return cls(str(value.value if isinstance(value, Enum) else value).lower())
        except ValueError:
            raise InvalidConfiguration(
                f"unknown granularity {value!r}; expected one of {[g.value for g in cls]}"
            ) from None


class Pairing(str, Enum):
    CASE_ID = "case_id"    # traces sharing the same case key
    POSITION = "position"  # i-th trace of log a with i-th trace of log b

    @classmethod
    def parse(cls, value: Union[str, "Pairing"]) -> "Pairing":
        try:
            return cls(str(value.value if isinstance(value, Enum) else value).lower())
        except ValueError:
            raise InvalidConfiguration(
                f"unknown pairing {value!r}; expected one of {[p.value for p in cls]}"
            ) from None


@dataclass
class CompareRequest:
    log_a: LogInput
    log_b: LogInput
    attributes: Sequence[str]
    granularity: Granularity = Granularity.LOG
    case_attribute: str = DEFAULT_CASE_ATTRIBUTE
    pairing: Pairing = Pairing.CASE_ID
    metric: EditDistance = DamerauLevenshtein()


@dataclass
class CompareResult:
    granularity: Granularity
    # Set for LOG and TRACES granularity.
    result: Optional[DistanceResult] = None
    # Set for CASE granularity; the missing side of an unresolved pair is None.
    pairs: Dict[PairKey, PairResult] = field(default_factory=dict)
    summary: Optional[PairingSummary] = None

    @property
    def distance(self) -> Optional[int]:
        return self.result.distance if self.result else None

    @property
    def similarity(self) -> Optional[float]:
        return self.result.similarity if self.result else None

    @property
    def unresolved(self) -> List[PairResult]:
        return [p for p in self.pairs.values() if not p.ok]


class LogComparator:
    def compare(self, req: CompareRequest) -> CompareResult:
        # Configuration is checked before any record is touched.
        encoder = EventEncoder(req.attributes)
        granularity = Granularity.parse(req.granularity)
        pairing = Pairing.parse(req.pairing)
        metric = req.metric or DamerauLevenshtein()

        if granularity is Granularity.LOG:
            a = encoder.encode_all(self._events(req.log_a))
            b = encoder.encode_all(self._events(req.log_b))
            logger.debug("log-level comparison: %d vs %d events (%s)", len(a), len(b), metric.name)
            return CompareResult(granularity=granularity, result=measure(a, b, metric))

        log_a = self._as_log(req.log_a, req.case_attribute)
        log_b = self._as_log(req.log_b, req.case_attribute)

        if granularity is Granularity.TRACES:
            a = [t.symbols(encoder) for t in log_a]
            b = [t.symbols(encoder) for t in log_b]
            logger.debug("trace-sequence comparison: %d vs %d traces (%s)", len(a), len(b), metric.name)
            return CompareResult(granularity=granularity, result=measure(a, b, metric))

        pairs = self._compare_cases(log_a, log_b, encoder, pairing, metric)
        summary = summarize(pairs.values())
        if summary.unresolved:
            logger.warning("%d trace(s) without a counterpart (pairing=%s)", summary.unresolved, pairing.value)
        return CompareResult(granularity=granularity, pairs=pairs, summary=summary)

    def _compare_cases(
        self,
        log_a: Log,
        log_b: Log,
        encoder: EventEncoder,
        pairing: Pairing,
        metric: EditDistance,
    ) -> Dict[PairKey, PairResult]:
        out: Dict[PairKey, PairResult] = {}
        for ta, tb in self._pair_traces(log_a, log_b, pairing):
            if ta is None or tb is None:
                side, trace = ("b", tb) if ta is None else ("a", ta)
                err = UnresolvedPairing(trace.case_id, side, pairing.value)
                logger.debug("%s", err)
                key = (None, tb.case_id) if ta is None else (ta.case_id, None)
                out[key] = PairResult(case_a=key[0], case_b=key[1], error=err)
                continue
            res = measure(ta.symbols(encoder), tb.symbols(encoder), metric)
            out[(ta.case_id, tb.case_id)] = PairResult(case_a=ta.case_id, case_b=tb.case_id, result=res)
        logger.debug("compared %d trace pair(s) (pairing=%s)", len(out), pairing.value)
        return out

    @staticmethod
    def _pair_traces(log_a: Log, log_b: Log, pairing: Pairing) -> Iterable[Tuple[Optional[Trace], Optional[Trace]]]:
        if pairing is Pairing.POSITION:
            return list(zip_longest(log_a.traces, log_b.traces))

        by_case_b: Dict[Hashable, Trace] = {}
        for t in log_b:
            by_case_b.setdefault(t.case_id, t)
        seen = set()
        pairs: List[Tuple[Optional[Trace], Optional[Trace]]] = []
        for ta in log_a:
            pairs.append((ta, by_case_b.get(ta.case_id)))
            seen.add(ta.case_id)
        for tb in log_b:
            if tb.case_id not in seen:
                pairs.append((None, tb))
        return pairs

    @staticmethod
    def _events(src: LogInput):
        if isinstance(src, Log):
            return src.events()
        return flatten_records(src)

    @staticmethod
    def _as_log(src: LogInput, case_attribute: str) -> Log:
        if isinstance(src, Log):
            return src
        return Log.from_records(src, case_attribute)

    @staticmethod
    def default() -> "LogComparator":
        return LogComparator()


def compare_logs(log_a: LogInput, log_b: LogInput, attributes: Sequence[str], **kwargs) -> CompareResult:
    """
    Compare two logs in one call.

    kwargs may include: granularity, case_attribute, pairing, metric.
    """
    req = CompareRequest(log_a=log_a, log_b=log_b, attributes=attributes, **kwargs)
    return LogComparator.default().compare(req)
