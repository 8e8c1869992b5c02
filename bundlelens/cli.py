"""Command-line front door for bundlelens.

Loads a stats manifest, optionally parses the emitted bundles next to it,
and prints the per-asset module tree (or the raw chart data as JSON).
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .analyzer import get_module_source, get_viewer_data, read_stats_file
from .config import load_config, load_defaults, save_config
from .log import LOG_LEVELS, configure_logging
from .options import COMPRESSION_ALGORITHMS
from .render import highlight_source, render_chart_lines, size_field_name

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bundlelens",
        description="Show which modules make up each JavaScript asset of a bundler build, and how big they are.",
    )
    parser.add_argument("stats", help="Path to the bundler stats JSON file.")
    parser.add_argument(
        "bundle_dir",
        nargs="?",
        default=None,
        help="Directory with the emitted bundles. Defaults to the stats file's directory.",
    )
    parser.add_argument(
        "-c",
        "--compression",
        choices=COMPRESSION_ALGORITHMS,
        default=None,
        help="Compression algorithm used for compressed sizes.",
    )
    parser.add_argument(
        "-e",
        "--exclude",
        action="append",
        default=None,
        metavar="PATTERN",
        help="Regex of asset names to leave out. Repeatable.",
    )
    parser.add_argument("-l", "--log-level", choices=tuple(LOG_LEVELS), default=None, help="Logging verbosity.")
    parser.add_argument("--format", choices=("tree", "json"), default="tree", help="Output format.")
    parser.add_argument(
        "--size",
        choices=("stat", "parsed", "compressed"),
        default="parsed",
        help="Size shown next to each tree node.",
    )
    parser.add_argument("--max-depth", type=_positive_int, default=None, help="Limit tree depth.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument("--module", metavar="ID", default=None, help="Print the parsed source of one module and exit.")
    parser.add_argument(
        "--save-defaults",
        action="store_true",
        help="Store the given -c, -l and -e values as defaults for later runs.",
    )
    return parser


def _save_defaults(args: argparse.Namespace) -> None:
    """Merge the explicitly given flags into the persisted config."""
    data = load_config()
    if args.compression is not None:
        data["compression_algorithm"] = args.compression
    if args.log_level is not None:
        data["log_level"] = args.log_level
    if args.exclude:
        data["exclude_assets"] = list(args.exclude)
    save_config(data)


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and print the analysis.

    Flags left unset fall back to the persisted config defaults.
    """
    args = build_parser().parse_args(argv)
    if args.save_defaults:
        _save_defaults(args)
    defaults = load_defaults()
    configure_logging(args.log_level or defaults.log_level, force=True)

    stats_path = Path(args.stats)
    if not stats_path.is_file():
        raise SystemExit(f"Stats file not found: {stats_path}")
    try:
        stats = read_stats_file(stats_path)
    except (OSError, ValueError) as exc:
        raise SystemExit(f"Couldn't read stats file {stats_path}: {exc}") from exc

    bundle_dir = Path(args.bundle_dir) if args.bundle_dir is not None else stats_path.parent
    if not bundle_dir.is_dir():
        raise SystemExit(f"Bundle directory not found: {bundle_dir}")

    algorithm = args.compression or defaults.compression_algorithm
    exclude_assets = list(args.exclude) if args.exclude else list(defaults.exclude_assets)
    no_color = args.no_color or not sys.stdout.isatty()

    if args.module is not None:
        source = get_module_source(stats, bundle_dir, args.module, exclude_assets=exclude_assets)
        if source is None:
            raise SystemExit(f"Module {args.module} not found in any parsed bundle")
        sys.stdout.write(highlight_source(source, no_color))
        if not source.endswith("\n"):
            sys.stdout.write("\n")
        return

    logger.debug("Analyzing %s with bundles from %s", stats_path, bundle_dir)
    chart = get_viewer_data(
        stats,
        bundle_dir,
        compression_algorithm=algorithm,
        exclude_assets=exclude_assets,
    )

    if args.format == "json":
        sys.stdout.write(json.dumps(chart, indent=2) + "\n")
        return

    size_field = size_field_name(args.size, algorithm)
    for line in render_chart_lines(chart, size_field, args.max_depth, no_color):
        sys.stdout.write(line + "\n")
