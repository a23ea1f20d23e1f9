from __future__ import annotations
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Hashable, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union
import logging

from tracesim.core.errors import ContractViolation, InvalidConfiguration

logger = logging.getLogger(__name__)

Symbol = Tuple[Any, ...]


class _Absent:
    """Marker for an attribute the event does not carry."""

    _instance: Optional["_Absent"] = None

    def __new__(cls) -> "_Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "<absent>"

    def __reduce__(self):
        return (_Absent, ())


ABSENT = _Absent()


@dataclass(frozen=True)
class Event:
    attributes: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        attrs = dict(self.attributes)
        for name, value in attrs.items():
            # values become parts of symbols, which are dictionary keys during interning
            try:
                hash(value)
            except TypeError:
                raise ContractViolation(
                    f"attribute {name!r} holds a non-scalar value of type {type(value).__name__}; records must be flat"
                ) from None
        object.__setattr__(self, "attributes", MappingProxyType(attrs))

    def get(self, name: str, default: Any = ABSENT) -> Any:
        return self.attributes.get(name, default)

    def __getitem__(self, name: str) -> Any:
        return self.attributes[name]

    def __contains__(self, name: object) -> bool:
        return name in self.attributes

    @staticmethod
    def from_record(record: Mapping[str, Any]) -> "Event":
        if not isinstance(record, Mapping):
            raise ContractViolation(f"record must be a mapping of attribute names to values, got {type(record).__name__}")
        return Event(record)


EventLike = Union[Event, Mapping[str, Any]]


def _attributes_of(event: EventLike) -> Mapping[str, Any]:
    if isinstance(event, Event):
        return event.attributes
    if isinstance(event, Mapping):
        return Event.from_record(event).attributes
    raise ContractViolation(f"cannot encode {type(event).__name__}: expected Event or mapping")


def encode_event(event: EventLike, attributes: Sequence[str]) -> Symbol:
    """Project an event onto `attributes`, in order. Missing names map to ABSENT."""
    attrs = _attributes_of(event)
    return tuple(attrs.get(name, ABSENT) for name in attributes)


class EventEncoder:
    """
    Turns events into comparison symbols using a fixed, ordered attribute list.
    Two events encode to equal symbols iff every projected value is equal.
    """

    def __init__(self, attributes: Iterable[str]) -> None:
        if isinstance(attributes, str):
            raise InvalidConfiguration("attributes must be a list of names, not a single string")
        names = tuple(attributes or ())
        if not names:
            raise InvalidConfiguration("at least one attribute is required to encode events")
        bad = [n for n in names if not isinstance(n, str)]
        if bad:
            raise InvalidConfiguration(f"attribute names must be strings: {bad!r}")
        self.attributes: Tuple[str, ...] = names

    def encode(self, event: EventLike) -> Symbol:
        return encode_event(event, self.attributes)

    def encode_all(self, events: Iterable[EventLike]) -> List[Symbol]:
        return [self.encode(e) for e in events]

    def __repr__(self) -> str:
        return f"EventEncoder({list(self.attributes)!r})"


class Trace:
    def __init__(self, case_id: Hashable = None, events: Iterable[Event] | None = None) -> None:
        self.case_id = case_id
        self.events: List[Event] = list(events or [])

    def __len__(self) -> int:
        return len(self.events)

    def __iter__(self) -> Iterator[Event]:
        return iter(self.events)

    def __repr__(self) -> str:
        return f"Trace(case_id={self.case_id!r}, events={len(self.events)})"

    def symbols(self, encoder: EventEncoder) -> Tuple[Symbol, ...]:
        return tuple(encoder.encode(e) for e in self.events)

    def sort_by(self, attribute: str, in_place: bool = False) -> "Trace":
        # Stable; events lacking the attribute keep their relative order at the front.
        sorted_events = sorted(
            self.events,
            key=lambda e: (attribute in e, e.get(attribute, "")),
        )
        if in_place:
            self.events = sorted_events
            return self
        return Trace(self.case_id, sorted_events)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "case_id": self.case_id,
            "events": [dict(e.attributes) for e in self.events],
        }

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "Trace":
        return Trace(d.get("case_id"), [Event.from_record(item) for item in d.get("events", [])])


class Log:
    """Ordered collection of traces, in first-occurrence order of their case keys."""

    def __init__(self, traces: Iterable[Trace] | None = None) -> None:
        self.traces: List[Trace] = list(traces or [])
        seen = set()
        for t in self.traces:
            if t.case_id in seen:
                raise ContractViolation(f"duplicate case key {t.case_id!r}: a log holds one trace per case")
            seen.add(t.case_id)

    def __len__(self) -> int:
        return len(self.traces)

    def __iter__(self) -> Iterator[Trace]:
        return iter(self.traces)

    def __repr__(self) -> str:
        return f"Log(traces={len(self.traces)})"

    @property
    def case_ids(self) -> List[Hashable]:
        return [t.case_id for t in self.traces]

    def get(self, case_id: Hashable) -> Optional[Trace]:
        for t in self.traces:
            if t.case_id == case_id:
                return t
        return None

    def events(self) -> List[Event]:
        return [e for t in self.traces for e in t.events]

    @staticmethod
    def from_records(records: Iterable[Mapping[str, Any]], case_attribute: str) -> "Log":
        return Log(group_records(records, case_attribute))


def build_traces(pairs: Iterable[Tuple[Hashable, Event]]) -> List[Trace]:
    """
    Group (case key, event) pairs into traces.

    Traces come out in the order their case keys first appear; events keep
    their input order inside each trace. Nothing is sorted here.
    """
    grouped: Dict[Hashable, List[Event]] = {}
    for case_id, event in pairs:
        grouped.setdefault(case_id, []).append(event)
    return [Trace(case_id, events) for case_id, events in grouped.items()]


def group_records(records: Iterable[Mapping[str, Any]], case_attribute: str) -> List[Trace]:
    missing = 0

    def pairs() -> Iterator[Tuple[Hashable, Event]]:
        nonlocal missing
        for rec in records:
            event = rec if isinstance(rec, Event) else Event.from_record(rec)
            case_id = event.get(case_attribute)
            if case_id is ABSENT:
                missing += 1
            yield case_id, event

    traces = build_traces(pairs())
    if missing:
        logger.warning("%d record(s) lack %r and were grouped into one trace", missing, case_attribute)
    return traces


def flatten_records(records: Iterable[EventLike]) -> List[Event]:
    return [rec if isinstance(rec, Event) else Event.from_record(rec) for rec in records]
