"""
combinatorial CLI: inspect the values a test function would be run with.

Provides commands for:
- show: Parameters, their winning value source and a sample of values
- list: The first combinations of a test function
- expand: Expand a numeric range from the command line
"""

from __future__ import annotations

import argparse
import importlib
import inspect
import itertools
import json
import logging
import sys
from decimal import Decimal, InvalidOperation
from typing import Any, Callable

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from combinatorial.combinations import CombinationSource
from combinatorial.config import ProjectConfig
from combinatorial.errors import CombinatorialError
from combinatorial.numeric import KINDS, NumericKind, get_kind
from combinatorial.parameters import parameters_of
from combinatorial.ranges import iter_bounds, iter_count
from combinatorial.resolver import select_source

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="combinatorial",
        description="Inspect the combinations generated for parameterized tests",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # show
    show_parser = subparsers.add_parser(
        "show",
        help="Show the resolved values of each parameter",
    )
    show_parser.add_argument("target", help="Test function as MODULE:FUNCTION")
    show_parser.add_argument(
        "--sample",
        type=int,
        help="Values shown per parameter (default: from config, else 5)",
    )
    show_parser.add_argument(
        "--json",
        action="store_true",
        dest="json_output",
        help="Output as JSON",
    )

    # list
    list_parser = subparsers.add_parser(
        "list",
        help="List combinations in product order",
    )
    list_parser.add_argument("target", help="Test function as MODULE:FUNCTION")
    list_parser.add_argument(
        "--limit", "-n",
        type=int,
        help="Number of combinations to list (default: from config, else 20)",
    )

    # expand
    expand_parser = subparsers.add_parser(
        "expand",
        help="Expand a numeric range",
    )
    expand_parser.add_argument("start", help="First value")
    shape = expand_parser.add_mutually_exclusive_group(required=True)
    shape.add_argument("--count", "-c", help="Number of consecutive values")
    shape.add_argument("--stop", help="Inclusive end of a stepped range")
    expand_parser.add_argument(
        "--step",
        default="1",
        help="Increment for --stop (default: 1)",
    )
    expand_parser.add_argument(
        "--kind", "-k",
        choices=sorted(KINDS),
        help="Numeric kind (default: int32, or float64 for decimal points)",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    for option in ("sample", "limit"):
        value = getattr(args, option, None)
        if value is not None and value < 1:
            parser.error(f"--{option} must be at least 1, got {value}")

    # Setup logging
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    console = Console()
    try:
        if args.command == "show":
            return handle_show(args, console)
        elif args.command == "list":
            return handle_list(args, console)
        elif args.command == "expand":
            return handle_expand(args, console)
        else:
            parser.print_help()
            return 0
    except CombinatorialError as e:
        Console(stderr=True).print(f"[red]Error:[/red] {escape(str(e))}")
        return 1


def load_target(target: str) -> Callable[..., Any]:
    """
    Import ``MODULE:FUNCTION`` (the function part may be dotted, e.g.
    ``tests.test_x:TestSuite.test_method``).

    Raises:
        CombinatorialError: If the target cannot be imported.
    """
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise CombinatorialError(f"Target must look like MODULE:FUNCTION, got {target!r}")
    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise CombinatorialError(f"Cannot import {module_name!r}: {e}") from e
    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError:
            raise CombinatorialError(f"{target!r}: no attribute {part!r}") from None
    if not callable(obj):
        raise CombinatorialError(f"{target!r} is not callable")
    return obj


def _annotation_name(annotation: Any) -> str:
    if annotation is None or annotation is inspect.Parameter.empty:
        return "-"
    if isinstance(annotation, type):
        return annotation.__qualname__
    return repr(annotation)


def handle_show(args: argparse.Namespace, console: Console) -> int:
    """Handle the show command."""
    config = ProjectConfig.load()
    sample = args.sample if args.sample is not None else config.preview.sample

    func = load_target(args.target)
    source = CombinationSource(parameters_of(func))

    rows = []
    for param in source.parameters:
        winner = select_source(param)
        values = source.values_for(param.name)
        rows.append(
            {
                "name": param.name,
                "type": _annotation_name(param.annotation),
                "source": winner.describe() if winner is not None else "default",
                "count": len(values),
                "sample": [repr(v) for v in itertools.islice(values, sample)],
            }
        )

    if args.json_output:
        print(json.dumps({"parameters": rows, "combinations": len(source)}, indent=2))
        return 0

    table = Table(title=args.target)
    table.add_column("Parameter")
    table.add_column("Type")
    table.add_column("Source")
    table.add_column("Values", justify="right")
    table.add_column("Sample")
    for row in rows:
        more = ", ..." if row["count"] > len(row["sample"]) else ""
        table.add_row(
            row["name"],
            escape(row["type"]),
            escape(row["source"]),
            f"{row['count']:,}",
            escape(", ".join(row["sample"]) + more),
        )
    console.print(table)
    console.print(f"[bold]Combinations:[/bold] {len(source):,}")
    return 0


def handle_list(args: argparse.Namespace, console: Console) -> int:
    """Handle the list command."""
    config = ProjectConfig.load()
    limit = args.limit if args.limit is not None else config.preview.max_rows

    func = load_target(args.target)
    source = CombinationSource(parameters_of(func))

    table = Table(title=args.target)
    table.add_column("#", justify="right")
    for param in source.parameters:
        table.add_column(param.name)
    table.add_column("case_id", style="dim")

    for combo in itertools.islice(source, limit):
        table.add_row(
            str(combo.index),
            *(escape(repr(v)) for v in combo.params.values()),
            combo.case_id,
        )
    console.print(table)
    console.print(f"[bold]Combinations:[/bold] {len(source):,}")
    return 0


def parse_value(text: str, kind: NumericKind) -> Any:
    """
    Parse a command-line value for ``kind``.

    Character kinds take a single character or an integer code.

    Raises:
        CombinatorialError: If the text is not a number of that kind.
    """
    try:
        if kind.category == "char":
            return text if len(text) == 1 and not text.isdigit() else int(text, 0)
        if kind.is_integral:
            return int(text, 0)
        if kind.category == "binary":
            return float(text)
        return Decimal(text)
    except (ValueError, InvalidOperation):
        raise CombinatorialError(f"{text!r} is not a valid {kind.name} value") from None


def handle_expand(args: argparse.Namespace, console: Console) -> int:
    """Handle the expand command."""
    if args.kind:
        kind = get_kind(args.kind)
    else:
        numeric = [args.start, args.count or args.stop, args.step]
        looks_float = any(c in t for t in numeric for c in ".eE" if not t.lower().startswith("0x"))
        kind = get_kind("float64" if looks_float else "int32")
    logger.debug(f"Expanding range over {kind.name}")

    start = parse_value(args.start, kind)
    if args.count is not None:
        values = iter_count(kind, start, parse_value(args.count, kind))
    else:
        values = iter_bounds(kind, start, parse_value(args.stop, kind), parse_value(args.step, kind))

    for value in values:
        console.print(repr(value) if kind.category == "char" else str(value), highlight=False)
    return 0


if __name__ == "__main__":
    sys.exit(main())
