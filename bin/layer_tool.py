#!/usr/bin/env python3
"""
Layer Tool CLI

Inspect, filter, convert and index code layer files.

Commands:
    stats    - Lines and files per kind
    filter   - Keep the files whose name starts with a prefix
    convert  - Re-encode a layer (.json <-> compact, by suffix)
    index    - Merge layers and summarize what each file gets
    chart    - Write a PNG bar chart of lines per kind

Usage:
    python bin/layer_tool.py stats layers/deadcode.json
    python bin/layer_tool.py filter layers/deadcode.json --prefix src/ -o out/src.json
    python bin/layer_tool.py convert layers/deadcode.json layers/deadcode.layer
    python bin/layer_tool.py index layers/*.json --root /path/to/repo --inactive coverage
    python bin/layer_tool.py chart layers/deadcode.json -o deadcode.png
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import argparse
import json
import logging

from codelayers.config import Settings
from codelayers.core import (
    build_index_of_layers,
    filter_layer,
    files_per_kind,
    load_layer,
    save_layer,
    stat_of_layer,
)
from codelayers.visualization.display import (
    Colors,
    colored,
    display_layer_set,
    display_layer_stats,
)


# ---------------------------------------------------------------------------
# CLI Argument Parsing
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per operation."""
    parser = argparse.ArgumentParser(
        prog="layer_tool",
        description="Inspect, filter, convert and index code layer files.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--quiet", "-q", action="store_true", help="Only log warnings and errors")
    parser.add_argument("--lenient", action="store_true",
                        help="Ignore unknown fields in JSON layer files")

    commands = parser.add_subparsers(dest="command", required=True)

    stats = commands.add_parser("stats", help="Lines and files per kind")
    stats.add_argument("layer", help="Layer file")
    stats.add_argument("--json", action="store_true", help="Print statistics as JSON")

    flt = commands.add_parser("filter", help="Keep files whose name starts with a prefix")
    flt.add_argument("layer", help="Layer file")
    flt.add_argument("--prefix", required=True, help="Filename prefix to keep")
    flt.add_argument("--output", "-o", required=True, metavar="FILE", help="Filtered layer file")

    convert = commands.add_parser("convert", help="Re-encode a layer file")
    convert.add_argument("source", help="Layer file to read")
    convert.add_argument("target", help="Layer file to write, encoding chosen by suffix")

    index = commands.add_parser("index", help="Merge layers and summarize the index")
    index.add_argument("layers", nargs="+", help="Layer files, in priority order")
    index.add_argument("--root", help="Root the layer filenames are relative to")
    index.add_argument("--inactive", action="append", default=[], metavar="NAME",
                       help="Layer (file stem) to load but not show; repeatable")
    index.add_argument("--max-files", type=int, default=20, help="Files to list (default: 20)")

    chart = commands.add_parser("chart", help="PNG chart of lines per kind")
    chart.add_argument("layer", help="Layer file")
    chart.add_argument("--output", "-o", required=True, metavar="FILE", help="PNG file")

    return parser


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def cmd_stats(args: argparse.Namespace, strict: bool) -> None:
    layer = load_layer(args.layer, strict=strict)
    stats = stat_of_layer(layer)
    files = files_per_kind(layer)
    if args.json:
        print(json.dumps({"lines": stats, "files": files}, indent=2))
    else:
        display_layer_stats(Path(args.layer).stem, layer, stats, files)


def cmd_filter(args: argparse.Namespace, strict: bool) -> None:
    layer = load_layer(args.layer, strict=strict)
    filtered = filter_layer(lambda filename: filename.startswith(args.prefix), layer)
    save_layer(filtered, args.output)
    print(colored(f"✓ Kept {len(filtered.files)}/{len(layer.files)} files in {args.output}",
                  Colors.GREEN))


def cmd_convert(args: argparse.Namespace, strict: bool) -> None:
    save_layer(load_layer(args.source, strict=strict), args.target)
    print(colored(f"✓ Converted {args.source} -> {args.target}", Colors.GREEN))


def cmd_index(args: argparse.Namespace, strict: bool, settings: Settings) -> None:
    root = str(Path(args.root).resolve()) if args.root else settings.root
    names = [Path(path).stem for path in args.layers]
    pairs = [
        (load_layer(path, strict=strict), name not in args.inactive)
        for path, name in zip(args.layers, names)
    ]
    display_layer_set(build_index_of_layers(pairs, root), names, max_files=args.max_files)


def cmd_chart(args: argparse.Namespace, strict: bool) -> None:
    from codelayers.visualization.charts import ChartGenerator

    layer = load_layer(args.layer, strict=strict)
    chart = ChartGenerator().plot_kind_distribution(
        stat_of_layer(layer), layer.kinds_mapping(), f"Layer: {Path(args.layer).stem}"
    )
    if chart is None:
        print(colored("Nothing to plot: the layer declares no kinds", Colors.YELLOW))
        return
    chart.write_png(args.output)
    print(colored(f"✓ Chart written to {args.output}", Colors.GREEN))


# ---------------------------------------------------------------------------
# Entry Point
# ---------------------------------------------------------------------------

def resolve_log_level(name: str) -> int:
    """Numeric logging level for a name such as INFO."""
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {name}")
    return level


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = Settings.from_env()
    strict = settings.strict_decode and not args.lenient

    try:
        # Logging setup
        log_level = (
            logging.DEBUG if args.verbose
            else logging.WARNING if args.quiet
            else resolve_log_level(settings.log_level)
        )
        logging.basicConfig(
            level=log_level,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )

        if args.command == "stats":
            cmd_stats(args, strict)
        elif args.command == "filter":
            cmd_filter(args, strict)
        elif args.command == "convert":
            cmd_convert(args, strict)
        elif args.command == "index":
            cmd_index(args, strict, settings)
        elif args.command == "chart":
            cmd_chart(args, strict)
        return 0

    except Exception as exc:
        print(colored(f"Error: {exc}", Colors.RED), file=sys.stderr)
        if args.verbose:
            logging.exception("Command failed")
        return 1


if __name__ == "__main__":
    sys.exit(main())
