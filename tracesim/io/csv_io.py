from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence
import logging

import pandas as pd

from tracesim.core.errors import ContractViolation

logger = logging.getLogger(__name__)

DEFAULT_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S%z"


def timestamp_order(values: Sequence[Any], timestamp_format: Optional[str] = DEFAULT_TIMESTAMP_FORMAT, source: str = "") -> List[int]:
    """Stable ordering of positions by parsed timestamp; values that do not parse come first."""
    parsed = pd.to_datetime(pd.Series(list(values), dtype=object), format=timestamp_format, errors="coerce", utc=True)
    bad = int(parsed.isna().sum())
    if bad:
        logger.warning("%s: %d value(s) could not be parsed as timestamps", source or "timestamps", bad)
    return [int(i) for i in parsed.sort_values(kind="stable", na_position="first").index]


def read_log_frame(
    path: str | Path,
    columns: Optional[Sequence[str]] = None,
    sort_by: Optional[str] = None,
    timestamp_format: Optional[str] = DEFAULT_TIMESTAMP_FORMAT,
) -> pd.DataFrame:
    """
    Read an event log CSV with every cell as a string (empty cells stay "").

    If `columns` is given, only those columns are kept and each must exist.
    If `sort_by` names a timestamp column, rows are stably sorted by its parsed
    value; rows whose timestamp does not parse come first.
    """
    p = Path(path)
    df = pd.read_csv(p, dtype=str, keep_default_na=False)

    wanted = list(columns or [])
    if sort_by and wanted and sort_by not in wanted:
        wanted.append(sort_by)
    missing = [c for c in wanted if c not in df.columns]
    if missing:
        raise ContractViolation(f"{p}: missing column(s) {missing}; available: {list(df.columns)}")
    if wanted:
        df = df[wanted]

    if sort_by:
        if sort_by not in df.columns:
            raise ContractViolation(f"{p}: cannot sort by missing column {sort_by!r}")
        order = timestamp_order(df[sort_by].tolist(), timestamp_format, source=f"{p}:{sort_by}")
        df = df.iloc[order].reset_index(drop=True)

    logger.debug("read %d event(s) from %s", len(df), p)
    return df


def load_records(
    path: str | Path,
    columns: Optional[Sequence[str]] = None,
    sort_by: Optional[str] = None,
    timestamp_format: Optional[str] = DEFAULT_TIMESTAMP_FORMAT,
) -> List[Dict[str, Any]]:
    df = read_log_frame(path, columns=columns, sort_by=sort_by, timestamp_format=timestamp_format)
    return df.to_dict(orient="records")
