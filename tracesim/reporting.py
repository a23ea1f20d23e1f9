from __future__ import annotations
from typing import Any, Dict, List, Optional

from tracesim.core.comparator import CompareRequest, CompareResult, Granularity
from tracesim.core.similarity import PairResult


def _trim(s: str, width: int) -> str:
    return s if len(s) <= width else (s[: max(0, width - 1)] + "…")


def _case(v: Any) -> str:
    return "—" if v is None else str(v)


def build_pair_rows(pairs: List[PairResult]) -> List[Dict[str, Any]]:
    rows: List[Dict[str, Any]] = []
    for idx, p in enumerate(pairs, start=1):
        row = p.to_dict()
        row["index"] = idx
        row["status"] = "ok" if p.ok else "unresolved"
        rows.append(row)
    return rows


def format_pair_table(
    rows: List[Dict[str, Any]],
    *,
    max_rows: int = 50,
    col_widths: Optional[Dict[str, int]] = None,
) -> str:
    """
    Text table of per-case results.

    Columns:
      IDX | CASE.a | CASE.b | LEN.a | LEN.b | DIST | SIM | STATUS
    """
    widths = {
        "idx": 4,
        "case_a": 18,
        "case_b": 18,
        "len": 6,
        "dist": 6,
        "sim": 7,
        "status": 10,
    }
    if col_widths:
        widths.update(col_widths)

    header = (
        f"{'IDX':>{widths['idx']}} | "
        f"{'CASE.a':<{widths['case_a']}} | {'CASE.b':<{widths['case_b']}} | "
        f"{'LEN.a':>{widths['len']}} | {'LEN.b':>{widths['len']}} | "
        f"{'DIST':>{widths['dist']}} | {'SIM':>{widths['sim']}} | {'STATUS':<{widths['status']}}"
    )
    sep = "-" * len(header)

    def num(v: Any, fmt: str = "") -> str:
        return "—" if v is None else format(v, fmt)

    out_lines = [header, sep]
    shown = 0
    for r in rows:
        if shown >= max_rows:
            break
        line = (
            f"{r['index']:>{widths['idx']}} | "
            f"{_trim(_case(r['case_a']), widths['case_a']):<{widths['case_a']}} | "
            f"{_trim(_case(r['case_b']), widths['case_b']):<{widths['case_b']}} | "
            f"{num(r['len_a']):>{widths['len']}} | {num(r['len_b']):>{widths['len']}} | "
            f"{num(r['distance']):>{widths['dist']}} | {num(r['similarity'], '.3f'):>{widths['sim']}} | "
            f"{r['status']:<{widths['status']}}"
        )
        out_lines.append(line)
        shown += 1

    if shown < len(rows):
        out_lines.append(f"... ({len(rows) - shown} more rows)")
    return "\n".join(out_lines)


def _request_info(req: CompareRequest) -> Dict[str, Any]:
    return {
        "attributes": list(req.attributes),
        "granularity": Granularity.parse(req.granularity).value,
        "case_attribute": req.case_attribute,
        "pairing": str(getattr(req.pairing, "value", req.pairing)),
        "distance": getattr(req.metric, "name", type(req.metric).__name__),
    }


def build_json_report(result: CompareResult, *, req: Optional[CompareRequest] = None) -> Dict[str, Any]:
    report: Dict[str, Any] = {"granularity": result.granularity.value}
    if req is not None:
        report["request"] = _request_info(req)
    if result.result is not None:
        report["result"] = result.result.to_dict()
    if result.granularity is Granularity.CASE:
        report["pairs"] = build_pair_rows(list(result.pairs.values()))
        report["summary"] = result.summary.to_dict() if result.summary else None
    return report


def format_text_report(
    result: CompareResult,
    req: Optional[CompareRequest] = None,
    *,
    max_rows: int = 50,
    title: Optional[str] = None,
) -> str:
    lines: List[str] = []
    lines.append("=" * 80)
    lines.append(title or "tracesim report")
    lines.append("=" * 80)

    if req is not None:
        info = _request_info(req)
        lines.append(f"Columns:     {', '.join(info['attributes'])}")
        lines.append(f"Granularity: {info['granularity']}")
        lines.append(f"Distance:    {info['distance']}")
        if result.granularity is Granularity.CASE:
            lines.append(f"Pairing:     {info['pairing']} (case attribute {info['case_attribute']!r})")

    if result.result is not None:
        r = result.result
        lines.append("")
        lines.append(f"The Damerau-Levenshtein distance: {r.distance}")
        lines.append(f"The similarity: {r.similarity}")
        lines.append(f"  · lengths: {r.len_a} vs {r.len_b}")

    if result.granularity is Granularity.CASE:
        s = result.summary
        lines.append("")
        lines.append("Summary:")
        if s is None or not s.resolved:
            lines.append(f"  resolved pairs: 0, unresolved: {s.unresolved if s else 0}")
        else:
            lines.append(f"  resolved pairs:      {s.resolved}")
            lines.append(f"  unresolved:          {s.unresolved}")
            lines.append(f"  total distance:      {s.total_distance}")
            lines.append(f"  mean similarity:     {s.mean_similarity:.3f}")
            lines.append(f"  weighted similarity: {s.weighted_similarity:.3f}")
            lines.append(f"  min / max:           {s.min_similarity:.3f} / {s.max_similarity:.3f}")
        lines.append("")
        lines.append("Pairs (first rows):")
        lines.append(format_pair_table(build_pair_rows(list(result.pairs.values())), max_rows=max_rows))

    lines.append("=" * 80)
    return "\n".join(lines)
