import json
from pathlib import Path

import pytest

from tracesim.core import DamerauLevenshtein, Granularity, InvalidConfiguration, OptimalStringAlignment, Pairing
from tracesim.io import build_from_config, load_config, load_log
from tracesim.io.config_loader import DEFAULT_COLUMNS, merge_overrides

CSV_A = """case,concept:name,Resource,start_timestamp
c1,X,R1,2023-01-01 10:00:00+0000
c1,Y,R2,2023-01-01 10:01:00+0000
c2,X,R1,2023-01-01 10:02:00+0000
"""
CSV_B = """case,concept:name,Resource,start_timestamp
c1,X,R1,2023-01-01 10:00:00+0000
c1,Z,R2,2023-01-01 10:01:00+0000
c3,X,R1,2023-01-01 10:02:00+0000
"""


def test_build_from_json_config(tmp_path: Path):
    a = tmp_path / "a.csv"
    b = tmp_path / "b.csv"
    a.write_text(CSV_A, encoding="utf-8")
    b.write_text(CSV_B, encoding="utf-8")

    cfg = {
        "columns": ["concept:name"],
        "granularity": "case",
        "case_attribute": "case",
        "pairing": "case_id",
        "distance": "osa",
        "sort_by": "start_timestamp",
    }
    cfg_path = tmp_path / "config.json"
    cfg_path.write_text(json.dumps(cfg), encoding="utf-8")

    loaded = load_config(cfg_path)
    log_a = load_log(a, loaded)
    log_b = load_log(b, loaded)
    # the case column is pulled in even though it is not a symbol column
    assert set(log_a[0]) == {"concept:name", "case", "start_timestamp"}

    comparator, req = build_from_config(log_a, log_b, loaded)
    assert req.granularity is Granularity.CASE
    assert req.pairing is Pairing.CASE_ID
    assert isinstance(req.metric, OptimalStringAlignment)

    res = comparator.compare(req)
    assert res.pairs[("c1", "c1")].similarity == 0.5
    assert not res.pairs[("c2", None)].ok
    assert not res.pairs[(None, "c3")].ok


def test_load_yaml_config(tmp_path: Path):
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text(
        "columns:\n  - concept:name\n  - Resource\ngranularity: log\ndistance: damerau_levenshtein\n",
        encoding="utf-8",
    )
    cfg = load_config(cfg_path)
    assert cfg["columns"] == ["concept:name", "Resource"]
    _, req = build_from_config([], [], cfg)
    assert list(req.attributes) == ["concept:name", "Resource"]
    assert isinstance(req.metric, DamerauLevenshtein)


def test_defaults_and_bad_values():
    _, req = build_from_config([], [], {})
    assert list(req.attributes) == DEFAULT_COLUMNS
    assert req.granularity is Granularity.LOG
    _, req = build_from_config([], [], {"columns": "concept:name, Resource"})
    assert list(req.attributes) == ["concept:name", "Resource"]

    with pytest.raises(InvalidConfiguration):
        build_from_config([], [], {"columns": []})
    with pytest.raises(InvalidConfiguration):
        build_from_config([], [], {"granularity": "events"})
    with pytest.raises(InvalidConfiguration):
        build_from_config([], [], {"distance": "jaro"})


def test_config_must_be_mapping(tmp_path: Path):
    p = tmp_path / "config.yml"
    p.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(InvalidConfiguration):
        load_config(p)


def test_merge_overrides_skips_unset_flags():
    merged = merge_overrides({"granularity": "case", "pairing": "position"}, {"granularity": None, "pairing": "case_id"})
    assert merged == {"granularity": "case", "pairing": "case_id"}
