"""
Simple tracesim example: a recorded log against a simulated one, compared at
every granularity.
"""
from tracesim.core import CompareRequest, Granularity, LogComparator, Pairing
from tracesim.reporting import format_text_report

COLUMNS = ["concept:name", "org:resource"]

RECORDED = [
    {"case:concept:name": "c1", "concept:name": "Register", "org:resource": "Ann"},
    {"case:concept:name": "c2", "concept:name": "Register", "org:resource": "Bob"},
    {"case:concept:name": "c1", "concept:name": "Check", "org:resource": "Ann"},
    {"case:concept:name": "c1", "concept:name": "Approve", "org:resource": "Eve"},
    {"case:concept:name": "c2", "concept:name": "Reject", "org:resource": "Eve"},
]

SIMULATED = [
    {"case:concept:name": "c1", "concept:name": "Register", "org:resource": "Ann"},
    {"case:concept:name": "c1", "concept:name": "Approve", "org:resource": "Eve"},
    {"case:concept:name": "c1", "concept:name": "Check", "org:resource": "Ann"},
    {"case:concept:name": "c3", "concept:name": "Register", "org:resource": "Bob"},
]


def main() -> None:
    comparator = LogComparator.default()
    for granularity in (Granularity.LOG, Granularity.TRACES, Granularity.CASE):
        req = CompareRequest(
            log_a=RECORDED,
            log_b=SIMULATED,
            attributes=COLUMNS,
            granularity=granularity,
            pairing=Pairing.CASE_ID,
        )
        res = comparator.compare(req)
        print(format_text_report(res, req=req, title=f"tracesim example ({granularity.value})"))


if __name__ == "__main__":
    main()
