import copy

import pytest

from tracesim.core import (
    CompareRequest,
    Granularity,
    InvalidConfiguration,
    Log,
    LogComparator,
    OptimalStringAlignment,
    Pairing,
    UnresolvedPairing,
    compare_logs,
)

LOG_A = [
    {"case": "1", "concept:name": "X", "org:resource": "R1"},
    {"case": "1", "concept:name": "Y", "org:resource": "R2"},
]
LOG_B = [
    {"case": "1", "concept:name": "X", "org:resource": "R1"},
    {"case": "1", "concept:name": "Z", "org:resource": "R2"},
]


def test_log_level_end_to_end():
    res = compare_logs(LOG_A, LOG_B, ["concept:name"])
    assert res.granularity is Granularity.LOG
    assert res.distance == 1
    assert res.similarity == 0.5


def test_resource_only_projection_is_identical():
    res = compare_logs(LOG_A, LOG_B, ["org:resource"])
    assert res.distance == 0
    assert res.similarity == 1.0


def test_case_level_end_to_end():
    res = compare_logs(LOG_A, LOG_B, ["concept:name"], granularity="case", case_attribute="case")
    assert list(res.pairs) == [("1", "1")]
    pair = res.pairs[("1", "1")]
    assert pair.distance == 1 and pair.similarity == 0.5
    assert res.summary.resolved == 1 and res.summary.unresolved == 0


def test_empty_logs_are_identical():
    res = compare_logs([], [], ["concept:name"])
    assert res.distance == 0 and res.similarity == 1.0
    res = compare_logs([], [], ["concept:name"], granularity=Granularity.CASE)
    assert res.pairs == {}
    assert res.summary.resolved == 0


def test_empty_projection_fails_before_computation():
    with pytest.raises(InvalidConfiguration):
        compare_logs(LOG_A, LOG_B, [])
    with pytest.raises(InvalidConfiguration):
        compare_logs(LOG_A, LOG_B, ["concept:name"], granularity="events")
    with pytest.raises(InvalidConfiguration):
        compare_logs(LOG_A, LOG_B, ["concept:name"], pairing="nearest")


def _records(layout):
    return [{"case": c, "a": a} for c, trace in layout for a in trace]


def test_case_id_pairing_reports_unresolved_without_aborting():
    log_a = _records([("1", "ab"), ("2", "abc"), ("3", "x")])
    log_b = _records([("2", "acb"), ("1", "ab"), ("4", "yy")])
    res = compare_logs(log_a, log_b, ["a"], granularity="case", case_attribute="case")

    assert list(res.pairs) == [("1", "1"), ("2", "2"), ("3", None), (None, "4")]
    assert res.pairs[("1", "1")].similarity == 1.0
    assert res.pairs[("2", "2")].distance == 1
    missing_b = res.pairs[("3", None)]
    assert missing_b.similarity is None
    assert isinstance(missing_b.error, UnresolvedPairing)
    assert missing_b.error.side == "a"
    assert res.pairs[(None, "4")].error.side == "b"
    assert len(res.unresolved) == 2
    assert res.summary.resolved == 2


def test_position_pairing():
    log_a = _records([("a1", "ab"), ("a2", "xyz")])
    log_b = _records([("b1", "ba"), ("b2", "xyz"), ("b3", "q")])
    res = compare_logs(
        log_a, log_b, ["a"], granularity=Granularity.CASE, case_attribute="case", pairing=Pairing.POSITION
    )
    assert list(res.pairs) == [("a1", "b1"), ("a2", "b2"), (None, "b3")]
    assert res.pairs[("a1", "b1")].distance == 1
    assert res.pairs[("a2", "b2")].distance == 0
    assert not res.pairs[(None, "b3")].ok


def test_trace_sequence_granularity():
    log_a = _records([("1", "ab"), ("2", "cd")])
    log_b = _records([("1", "cd"), ("2", "ab")])
    res = compare_logs(log_a, log_b, ["a"], granularity="traces", case_attribute="case")
    # the two traces are swapped: one transposition
    assert res.distance == 1
    assert res.similarity == 0.5
    assert res.result.len_a == 2


def test_accepts_prebuilt_logs_and_metric():
    log_a = Log.from_records(_records([("1", "ca")]), "case")
    log_b = Log.from_records(_records([("1", "abc")]), "case")
    req = CompareRequest(log_a=log_a, log_b=log_b, attributes=["a"], granularity=Granularity.CASE)
    assert LogComparator().compare(req).pairs[("1", "1")].distance == 2
    req.metric = OptimalStringAlignment()
    assert LogComparator().compare(req).pairs[("1", "1")].distance == 3
    # flat comparison of a prebuilt log uses its events in trace order
    flat = compare_logs(log_a, log_b, ["a"])
    assert flat.distance == 2


def test_inputs_are_not_mutated():
    log_a = _records([("2", "ba"), ("1", "ab")])
    log_b = _records([("1", "ab")])
    before_a, before_b = copy.deepcopy(log_a), copy.deepcopy(log_b)
    compare_logs(log_a, log_b, ["a"], granularity="case", case_attribute="case")
    compare_logs(log_a, log_b, ["a"])
    assert log_a == before_a
    assert log_b == before_b


def test_nested_record_values_are_contract_violations():
    from tracesim.core import ContractViolation

    records = [{"case": "1", "concept:name": ["A"]}]
    with pytest.raises(ContractViolation):
        compare_logs(records, records, ["concept:name"])
    with pytest.raises(ContractViolation):
        compare_logs(records, records, ["concept:name"], granularity="case", case_attribute="case")


def test_every_compared_pair_gets_its_own_result():
    from tracesim.core import ContractViolation, Event, Trace

    x, y = Event({"a": "x"}), Event({"a": "y"})
    with pytest.raises(ContractViolation):
        Log([Trace("1", [x]), Trace("1", [y])])

    res = compare_logs(
        Log([Trace("1", [x]), Trace("2", [y])]),
        Log([Trace("1", [x]), Trace("2", [x])]),
        ["a"],
        granularity="case",
    )
    assert len(res.pairs) == 2
    assert res.summary.resolved == 2
    assert res.pairs[("1", "1")].distance == 0
    assert res.pairs[("2", "2")].distance == 1
