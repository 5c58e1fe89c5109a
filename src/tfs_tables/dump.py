"""Tool for dumping TFS file contents to the console."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from tfs_tables.codec import read_tfs
from tfs_tables.errors import TfsError
from tfs_tables.table import Table
from tfs_tables.types import FIELD_WIDTH, FloatPrecision


def dump_rows(table: Table, limit: int | None = None) -> None:
    """Print the column names followed by the first ``limit`` rows."""
    names = table.column_names()
    print("  " + "".join(f"{name:>{FIELD_WIDTH}} " for name in names))
    print("-" * (2 + (FIELD_WIDTH + 1) * len(names)))

    count = table.row_count()
    display_count = min(count, limit) if limit is not None else count
    for i in range(display_count):
        cells = []
        for name in names:
            column = table.get_column(name)
            # Columns may be shorter than the first one
            text = column.format_at(i) if i < len(column) else ""
            cells.append(f"{text:>{FIELD_WIDTH}} ")
        print("  " + "".join(cells))

    if display_count < count:
        print(f"... {count - display_count} more rows")


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Dump the contents of a TFS file to the console"
    )
    parser.add_argument(
        "path",
        type=Path,
        help="Path to the TFS file",
    )
    parser.add_argument(
        "-i", "--index",
        default=None,
        help="Name of a string column to build the row index on",
    )
    parser.add_argument(
        "--float32",
        action="store_true",
        help="Hold floating-point values at single precision",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject unknown type tags, ragged rows and malformed numbers",
    )
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Report the length of every column",
    )
    parser.add_argument(
        "-n", "--limit",
        type=int,
        default=None,
        help="Limit number of rows to display",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Log parser progress (repeat for debug output)",
    )

    args = parser.parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    if not args.path.exists():
        print(f"Error: File not found: {args.path}", file=sys.stderr)
        return 1

    precision = FloatPrecision.FLOAT32 if args.float32 else FloatPrecision.FLOAT64
    try:
        table = read_tfs(args.path, args.index, precision=precision, strict=args.strict)
    except (TfsError, OSError) as e:
        print(f"Error loading {args.path}: {e}", file=sys.stderr)
        return 1

    print(table.describe())
    print()
    if args.verify:
        for name, length in table.verify().items():
            print(f"  {name:<20} {length:>6} elements")
        print()
    dump_rows(table, args.limit)

    return 0


if __name__ == "__main__":
    sys.exit(main())
