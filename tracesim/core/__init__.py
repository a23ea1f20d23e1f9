from .errors import TraceSimError, InvalidConfiguration, UnresolvedPairing, ContractViolation
from .event import ABSENT, Event, Symbol, EventEncoder, encode_event, Trace, Log, build_traces, group_records, flatten_records
from .distance import EditDistance, DamerauLevenshtein, OptimalStringAlignment, Levenshtein, intern_symbols, get_distance
from .similarity import DistanceResult, PairResult, similarity, measure
from .scoring import PairingSummary, summarize
from .comparator import Granularity, Pairing, LogComparator, CompareRequest, CompareResult, compare_logs

__all__ = [
    "TraceSimError",
    "InvalidConfiguration",
    "UnresolvedPairing",
    "ContractViolation",
    "ABSENT",
    "Event",
    "Symbol",
    "EventEncoder",
    "encode_event",
    "Trace",
    "Log",
    "build_traces",
    "group_records",
    "flatten_records",
    "EditDistance",
    "DamerauLevenshtein",
    "OptimalStringAlignment",
    "Levenshtein",
    "intern_symbols",
    "get_distance",
    "DistanceResult",
    "PairResult",
    "similarity",
    "measure",
    "PairingSummary",
    "summarize",
    "Granularity",
    "Pairing",
    "LogComparator",
    "CompareRequest",
    "CompareResult",
    "compare_logs",
]
