#!/usr/bin/env python3
"""Dump the part flight data stored in a checkpoint file.

Reads a cfg checkpoint written by ``FlightScenario.save_file`` (or any
scenario node containing ``FLIGHTDATA_PART`` nodes) and prints every part
type with its per-scope flight data.

Usage
-----
::

    python scripts/dump_flight_data.py persistent.cfg
    python scripts/dump_flight_data.py persistent.cfg --packed
    python scripts/dump_flight_data.py persistent.cfg --json --part liquidEngine
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from tfcore import FlightScenario, TfError  # noqa: E402


def _as_dict(scenario: FlightScenario, only: str | None) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for part_data in scenario.store:
        if only is not None and part_data.part_name != only:
            continue
        out[part_data.part_name] = {record.scope: record.flight_data for record in part_data.get_flight_data()}
    return out


def main() -> int:
    parser = argparse.ArgumentParser(description="Dump part flight data from a checkpoint file.")
    parser.add_argument("path", help="Checkpoint cfg file")
    parser.add_argument("--part", help="Only show this part type")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--json", action="store_true", help="Output as machine-readable JSON")
    group.add_argument("--packed", action="store_true", help="Output packed strings, one per part type")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    path = Path(args.path)
    if not path.exists():
        print(f"No such file: {path}", file=sys.stderr)
        return 1

    scenario = FlightScenario()
    try:
        scenario.load_file(path)
    except TfError as exc:
        print(f"Could not read {path}: {exc}", file=sys.stderr)
        return 1

    if args.packed:
        for part_data in scenario.store:
            if args.part is None or part_data.part_name == args.part:
                print(part_data.to_packed())
        return 0

    data = _as_dict(scenario, args.part)
    if args.json:
        print(json.dumps(data, indent=2, sort_keys=True))
        return 0

    if not data:
        print("No flight data found.")
        return 0
    for part_name, scopes in data.items():
        print(part_name)
        for scope, value in scopes.items():
            print(f"  {scope:<30} {value:>12g}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
