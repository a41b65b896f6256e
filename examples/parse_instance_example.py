"""CLI script that loads a MineLib instance and prints a short summary."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from minelib_parser import (  # noqa: E402
    BlockModel,
    CPITData,
    MineLibError,
    PCPSPData,
    ParserOptions,
    Precedences,
    UPITData,
    load_instance,
)


def describe(record: object) -> str:
    if isinstance(record, BlockModel):
        return f"block model with {len(record)} blocks (num_blocks={record.num_blocks})"
    if isinstance(record, Precedences):
        return f"precedences for {record.num_blocks} blocks, {record.num_arcs()} arcs"

    assert isinstance(record, (UPITData, CPITData, PCPSPData))
    parts = [f"{record.problem_type.name} '{record.name}' with {record.num_blocks} blocks"]
    if isinstance(record, (CPITData, PCPSPData)):
        parts.append(f"{record.num_periods} periods")
        parts.append(f"{record.num_resources} resources")
    if isinstance(record, PCPSPData):
        parts.append(f"{record.num_destinations} destinations")
    if record.precedences is not None:
        parts.append(f"{record.precedences.num_arcs()} precedence arcs")
    return ", ".join(parts)


def main() -> None:
    parser = argparse.ArgumentParser(description="Summarize a MineLib instance file")
    parser.add_argument(
        "path",
        nargs="?",
        type=Path,
        default=Path(__file__).resolve().parent / "data" / "sample.cpit",
        help="Instance file (.blocks, .prec, .upit, .cpit or .pcpsp)",
    )
    parser.add_argument(
        "--columns",
        nargs="*",
        default=None,
        help="Names of the block-model columns after x, y, z",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject limit lines with an unknown bound type",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v for INFO, -vv for DEBUG)",
    )
    args = parser.parse_args()

    # Configure logging based on verbosity
    if args.verbose >= 2:
        level = logging.DEBUG
    elif args.verbose >= 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(levelname)-8s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    options = ParserOptions(strict_bound_types=args.strict, column_names=args.columns)
    try:
        record = load_instance(args.path, options=options)
    except (MineLibError, OSError) as e:
        print(f"Could not load {args.path}: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Loaded {args.path.name}: {describe(record)}")


if __name__ == "__main__":
    main()
