#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import os
import sys

# Make viewer-backend importable
THIS_DIR = os.path.dirname(__file__)
BACKEND_DIR = os.path.abspath(os.path.join(THIS_DIR, "..", "viewer-backend"))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

from ingest.csv_io import parse_points_csv  # type: ignore


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Normalize a sites CSV and print the resulting points")
    ap.add_argument("path", help="CSV file to normalize")
    ap.add_argument("--json", action="store_true", help="emit a JSON array instead of a table")
    ap.add_argument("--limit", type=int, default=None, help="print at most N points")
    args = ap.parse_args(argv)

    try:
        with open(args.path, "rb") as f:
            raw = f.read()
    except OSError as e:
        print(f"cannot read {args.path}: {e}", file=sys.stderr)
        return 2

    points, dropped, encoding = parse_points_csv(raw)
    shown = points if args.limit is None else points[: args.limit]

    if args.json:
        print(json.dumps([p.model_dump() for p in shown], ensure_ascii=False, indent=2))
    else:
        for p in shown:
            print(f"{p.lat:>12.6f} {p.lon:>12.6f}  {p.label}")
    print(f"{len(points)} point(s), {dropped} dropped, encoding={encoding}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
