"""Command-line front end: read polygons, run one operation, report."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional, Sequence

from polyset import __version__
from polyset.combine import Operation
from polyset.config import OUTPUT_FORMATS, Config, load_config
from polyset.errors import PolysetError
from polyset.geom import vstr
from polyset.io import read_polygons
from polyset.orchestrator import OperationResult, run_operation
from polyset.region import Region
from polyset.sink import DirectorySink

logger = logging.getLogger(__name__)

MENU_PROMPT = "Choose operation (1 for Union, 2 for Intersection, 3 for Difference): "


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="polyset",
        description="Union, intersection or difference of simple polygons.")
    parser.add_argument("input", help="Polygon file: one polygon per line, or a .json document")
    parser.add_argument("-o", "--operation",
                        help="union, intersection, difference (or 1, 2, 3); prompted for when omitted")
    parser.add_argument("--config", help="Path to a YAML config file")
    parser.add_argument("--output-dir", help="Parent directory of the <Operation>Results folders")
    parser.add_argument("--format", dest="formats", nargs="+", choices=OUTPUT_FORMATS,
                        help="Result file formats (default: json)")
    parser.add_argument("--epsilon", type=float, help="Vertex merge tolerance")
    parser.add_argument("--workers", type=int, help="Threads for pairwise operations")
    parser.add_argument("--legacy-union", action="store_true",
                        help="Single-accumulator union that drops disjoint polygons")
    parser.add_argument("--no-write", action="store_true", help="Print results only")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _resolve_config(args: argparse.Namespace) -> Config:
    config = load_config(args.config) if args.config else Config()
    engine = config.engine
    changes = {}
    if args.epsilon is not None:
        changes["epsilon"] = args.epsilon
    if args.workers is not None:
        changes["workers"] = args.workers
    if args.legacy_union:
        changes["union_mode"] = "legacy"
    if changes:
        engine = replace(engine, **changes)
    output = config.output
    out_changes = {}
    if args.output_dir:
        out_changes["directory"] = Path(args.output_dir)
    if args.formats:
        out_changes["formats"] = tuple(args.formats)
    if out_changes:
        output = replace(output, **out_changes)
    return Config(engine=engine, output=output, raw=config.raw)


def _print_region(region: Region, operation: Operation) -> None:
    print(f"Resulting polygon points after {operation.verb} operation are: ")
    print(vstr(region.outer))
    for k, hole in enumerate(region.holes):
        print(f"Hole {k}: {vstr(hole)}")
    print()


def report(result: OperationResult) -> None:
    """Print an operation result the way the interactive tool did."""

    op = result.operation
    if op is Operation.UNION:
        if result.is_empty:
            print("Union result is an empty polygon.")
        for region in result.regions:
            _print_region(region, op)
        return
    for pair in result.pairs:
        print(f"Calculating {op.verb} of polygon {pair.first + 1} and polygon {pair.second + 1}:")
        if pair.is_empty:
            print(f"No {op.verb} among polygons {pair.first + 1} and {pair.second + 1}.")
            print()
            continue
        for region in pair.regions:
            _print_region(region, op)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s")

    try:
        config = _resolve_config(args)
        polygons = read_polygons(args.input)
        logger.debug("read %d polygon(s) from %s", len(polygons), args.input)
        selector = args.operation if args.operation is not None else input(MENU_PROMPT)
        operation = Operation.parse(selector)
        result = run_operation(operation, polygons, config)
    except (PolysetError, OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except EOFError:
        print("Error: no operation selected", file=sys.stderr)
        return 1

    report(result)

    if not args.no_write:
        sink = DirectorySink(config.output.directory, config.output.formats)
        try:
            with sink:
                sink.consume(result)
        except OSError as exc:
            print(f"Error: unable to write results: {exc}", file=sys.stderr)
            return 1
        written: List[Path] = sink.written
        for path in written:
            print(f"Result saved to: {path}")
    return 0


__all__ = ["main", "report"]


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
