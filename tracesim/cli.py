from __future__ import annotations
import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

import pandas as pd
import yaml

from tracesim.io.json_io import save_json
from tracesim.io import load_config, load_log, build_from_config
from tracesim.io.config_loader import merge_overrides
from tracesim.core.errors import TraceSimError
from tracesim.reporting import format_text_report, build_json_report
from tracesim import __version__

logger = logging.getLogger("tracesim")


def configure_logging(verbose: bool = False, debug: bool = False) -> None:
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="[%(levelname)s] %(name)s: %(message)s", stream=sys.stderr)


def _columns_arg(values: Optional[List[str]]) -> Optional[List[str]]:
    if not values:
        return None
    # accept both "--columns a b" and "--columns a,b"
    out: List[str] = []
    for v in values:
        out.extend(c.strip() for c in v.split(",") if c.strip())
    return out


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="tracesim", description="Damerau-Levenshtein similarity of event logs")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_cmp = sub.add_parser("compare", help="Compare two event logs (CSV or JSON)")
    p_cmp.add_argument("log_a", help="Path to the reference event log")
    p_cmp.add_argument("log_b", help="Path to the event log compared against it")
    p_cmp.add_argument("--config", required=False, help="Path to configuration file (JSON/YAML)")
    p_cmp.add_argument("--columns", nargs="+", help="Attribute columns that make up an event symbol")
    p_cmp.add_argument("--granularity", choices=["log", "traces", "case"], help="Comparison unit")
    p_cmp.add_argument("--case-attribute", dest="case_attribute", help="Column holding the case key")
    p_cmp.add_argument("--pairing", choices=["case_id", "position"], help="How traces are paired in case mode")
    p_cmp.add_argument("--distance", help="damerau_levenshtein (default), osa or levenshtein")
    p_cmp.add_argument("--sort-by", dest="sort_by", help="Timestamp column to sort CSV events by")
    p_cmp.add_argument("--out", required=False, help="Path to write the JSON report")
    p_cmp.add_argument("--max-rows", dest="max_rows", type=int, default=50, help="Rows shown in the pair table")
    p_cmp.add_argument("-v", "--verbose", action="store_true")
    p_cmp.add_argument("--debug", action="store_true")

    sub.add_parser("version", help="Show tracesim version and exit")

    args = parser.parse_args(argv)

    if args.cmd == "version":
        print(__version__)
        return 0

    configure_logging(verbose=args.verbose, debug=args.debug)

    try:
        cfg: Dict[str, Any] = load_config(args.config) if args.config else {}
        cfg = merge_overrides(cfg, {
            "columns": _columns_arg(args.columns),
            "granularity": args.granularity,
            "case_attribute": args.case_attribute,
            "pairing": args.pairing,
            "distance": args.distance,
            "sort_by": args.sort_by,
        })
        log_a = load_log(args.log_a, cfg)
        log_b = load_log(args.log_b, cfg)
        comparator, req = build_from_config(log_a, log_b, cfg)
        result = comparator.compare(req)
    except TraceSimError as e:
        print(f"tracesim: error: {e}", file=sys.stderr)
        return 2
    except OSError as e:
        print(f"tracesim: error: cannot read {e.filename or 'input'}: {e.strerror or e}", file=sys.stderr)
        return 2
    except (json.JSONDecodeError, yaml.YAMLError, pd.errors.ParserError) as e:
        print(f"tracesim: error: malformed input: {e}", file=sys.stderr)
        return 2

    if args.out:
        report: Dict[str, Any] = build_json_report(result, req=req)
        save_json(args.out, report)
        logger.info("report written to %s", args.out)
    else:
        print(format_text_report(result, req=req, max_rows=args.max_rows))
    return 0


if __name__ == "__main__":
    sys.exit(main())
