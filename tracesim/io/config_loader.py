from __future__ import annotations
from typing import Any, Dict, List, Optional, Tuple
import json
import logging
from pathlib import Path

import yaml

from tracesim.core.comparator import (
    DEFAULT_CASE_ATTRIBUTE,
    CompareRequest,
    Granularity,
    LogComparator,
    LogInput,
    Pairing,
)
from tracesim.core.distance import EditDistance, get_distance
from tracesim.core.errors import ContractViolation, InvalidConfiguration
from tracesim.io import csv_io, json_io

logger = logging.getLogger(__name__)

# Column set of simulation logs the tool was first written for.
DEFAULT_COLUMNS = ["concept:name", "Resource", "start_timestamp", "time:timestamp"]


def load_config(path: str | Path) -> Dict[str, Any]:
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        text = f.read()
    suffix = p.suffix.lower()
    if suffix in (".yaml", ".yml"):
        cfg = yaml.safe_load(text) or {}
    else:
        # default to JSON
        cfg = json.loads(text or "{}")
    if not isinstance(cfg, dict):
        raise InvalidConfiguration(f"{p}: configuration must be a mapping, got {type(cfg).__name__}")
    return cfg


def _columns(cfg: Dict[str, Any]) -> List[str]:
    cols = cfg.get("columns")
    if cols is None:
        return list(DEFAULT_COLUMNS)
    if isinstance(cols, str):
        # allow "a,b,c" in YAML or on the command line
        cols = [c.strip() for c in cols.split(",") if c.strip()]
    if not isinstance(cols, (list, tuple)) or not cols:
        raise InvalidConfiguration("'columns' must be a non-empty list of attribute names")
    return [str(c) for c in cols]


def _make_metric(spec: Any) -> EditDistance:
    if isinstance(spec, dict):
        spec = spec.get("name")
    return get_distance(spec)


def load_log(path: str | Path, cfg: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Read one event log as flat records, keeping only the columns the comparison needs."""
    p = Path(path)
    if p.suffix.lower() == ".json":
        return _load_json_log(p, cfg)

    columns = _columns(cfg)
    granularity = Granularity.parse(cfg.get("granularity", Granularity.LOG))
    case_attribute = str(cfg.get("case_attribute", DEFAULT_CASE_ATTRIBUTE))
    if granularity is not Granularity.LOG and case_attribute not in columns:
        columns = columns + [case_attribute]
    return csv_io.load_records(
        p,
        columns=columns,
        sort_by=cfg.get("sort_by"),
        timestamp_format=cfg.get("timestamp_format", csv_io.DEFAULT_TIMESTAMP_FORMAT),
    )


def _load_json_log(p: Path, cfg: Dict[str, Any]) -> List[Dict[str, Any]]:
    # JSON events keep all their keys: a key an event lacks projects to ABSENT.
    records = json_io.load_records(p)
    sort_by = cfg.get("sort_by")
    if not sort_by:
        return records
    if records and not any(sort_by in r for r in records):
        raise ContractViolation(f"{p}: cannot sort by {sort_by!r}, no event carries it")
    order = csv_io.timestamp_order(
        [r.get(sort_by) for r in records],
        cfg.get("timestamp_format", csv_io.DEFAULT_TIMESTAMP_FORMAT),
        source=f"{p}:{sort_by}",
    )
    return [records[i] for i in order]


def build_from_config(log_a: LogInput, log_b: LogInput, cfg: Dict[str, Any]) -> Tuple[LogComparator, CompareRequest]:
    req = CompareRequest(
        log_a=log_a,
        log_b=log_b,
        attributes=_columns(cfg),
        granularity=Granularity.parse(cfg.get("granularity", Granularity.LOG)),
        case_attribute=str(cfg.get("case_attribute", DEFAULT_CASE_ATTRIBUTE)),
        pairing=Pairing.parse(cfg.get("pairing", Pairing.CASE_ID)),
        metric=_make_metric(cfg.get("distance")),
    )
    logger.debug(
        "configured comparison: columns=%s granularity=%s pairing=%s distance=%s",
        list(req.attributes), req.granularity.value, req.pairing.value, req.metric.name,
    )
    return LogComparator(), req


def merge_overrides(cfg: Dict[str, Any], overrides: Dict[str, Optional[Any]]) -> Dict[str, Any]:
    """Return a copy of `cfg` with every non-None override applied (command-line flags win)."""
    merged = dict(cfg)
    for k, v in overrides.items():
        if v is not None:
            merged[k] = v
    return merged