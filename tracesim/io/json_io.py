from __future__ import annotations
import json
from typing import Any, Dict, List
from pathlib import Path

from tracesim.core.errors import ContractViolation


def save_records(path: str | Path, records: List[Dict[str, Any]]) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as f:
        json.dump({"schema_version": "1", "events": records}, f, ensure_ascii=False, indent=2)


def load_records(path: str | Path) -> List[Dict[str, Any]]:
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict) and "events" in data:
        data = data["events"]
    if not isinstance(data, list):
        raise ContractViolation(f"{p}: unrecognized event log JSON format")
    for i, item in enumerate(data):
        if not isinstance(item, dict):
            raise ContractViolation(f"{p}: event #{i} is not a flat object")
        nested = [k for k, v in item.items() if isinstance(v, (dict, list))]
        if nested:
            raise ContractViolation(f"{p}: event #{i} is not a flat object (nested value in {nested})")
    return data


def save_json(path: str | Path, obj: Dict[str, Any]) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as f:
        json.dump(obj, f, ensure_ascii=False, indent=2, default=str)
