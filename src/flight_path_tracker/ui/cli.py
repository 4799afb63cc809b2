"""CLI entry point for the flight path tracker."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from flight_path_tracker.adapters.io.exports import serialize_legs
from flight_path_tracker.adapters.storage.repositories import write_json
from flight_path_tracker.core.config import load_settings
from flight_path_tracker.core.errors import FlightPathTrackerError
from flight_path_tracker.modules.itinerary.chaining import reconstruct_path, summarize_path
from flight_path_tracker.services.tracker import normalize_legs


def build_parser() -> argparse.ArgumentParser:
    settings = load_settings()
    parser = argparse.ArgumentParser(description="Flight Path Tracker CLI")
    parser.add_argument("--log-level", type=str, default=settings.log_level, help="Logging level")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", type=str, default=settings.host, help=f"Bind address (default: {settings.host})")
    serve.add_argument("--port", type=int, default=settings.port, help=f"Bind port (default: {settings.port})")

    reconstruct = subparsers.add_parser("reconstruct", help="Order legs into a single path")
    source = reconstruct.add_mutually_exclusive_group(required=True)
    source.add_argument("--legs", type=str, help='JSON array of legs, e.g. \'[["SFO", "ATL"]]\'')
    source.add_argument("--input", type=str, help="Path to a JSON file holding the legs")
    reconstruct.add_argument("--output", type=str, default=None, help="Output JSON path (default: stdout)")
    return parser


def _load_legs(args: argparse.Namespace) -> List[List[str]]:
    if args.input:
        with Path(args.input).open("r", encoding="utf-8") as handle:
            return json.load(handle)
    return json.loads(args.legs)


def run_reconstruct(args: argparse.Namespace) -> int:
    try:
        legs = normalize_legs(_load_legs(args))
        ordered = reconstruct_path(legs)
        summary = summarize_path(ordered)
    except (FlightPathTrackerError, OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    payload = {"sorted_path": serialize_legs(ordered), "optimized_path": serialize_legs([summary])}
    if args.output:
        write_json(Path(args.output), payload)
    else:
        print(json.dumps(payload))
    return 0


def run_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("flight_path_tracker.api.app:app", host=args.host, port=args.port, log_level=args.log_level.lower())
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if args.command == "serve":
        return run_serve(args)
    return run_reconstruct(args)


if __name__ == "__main__":
    raise SystemExit(main())
