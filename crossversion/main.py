"""Entry point for cross-version test graph generation.

Generates one cross-version test unit per released version plus the
all-versions and quick-feedback aggregate groups, and writes or lists
the result for the build tool that executes it.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from crossversion.catalog.provider import CatalogProvider, StaticCatalogProvider, parse_version_list
from crossversion.catalog.released_versions import ReleasedVersionsFile
from crossversion.config import OUTPUT_FORMATS, GenerationConfig
from crossversion.errors import GenerationError
from crossversion.generation.graph import GenerationGraph, generate_graph
from crossversion.reporting.graph_writer import format_summary, format_unit, render_graph, write_graph


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config-file",
        type=Path,
        default=None,
        help="Path to the .crossversion_config JSON file",
    )
    common.add_argument(
        "--released-versions",
        type=Path,
        default=None,
        help="Path to the released versions JSON file "
             "(default: released_versions_file from the config)",
    )
    common.add_argument(
        "--versions",
        type=str,
        default=None,
        help="Comma-separated versions to test (overrides --released-versions)",
    )
    common.add_argument(
        "--quick-versions",
        type=str,
        default=None,
        help="Comma-separated quick feedback versions (requires --versions)",
    )

    parser = argparse.ArgumentParser(
        description="Cross-version test generator - one test unit per released version"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # generate subcommand
    generate_parser = subparsers.add_parser(
        "generate",
        parents=[common],
        help="Generate the cross-version test graph",
    )
    generate_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Path to write the graph (default: print to stdout)",
    )
    generate_parser.add_argument(
        "--format",
        choices=list(OUTPUT_FORMATS),
        default=None,
        help="Output format (default: output_format from the config)",
    )

    # list subcommand
    list_parser = subparsers.add_parser(
        "list",
        parents=[common],
        help="List generated units in catalog order",
    )
    list_parser.add_argument(
        "--quick",
        action="store_true",
        default=False,
        help="Only list quick feedback units",
    )

    # show subcommand
    show_parser = subparsers.add_parser(
        "show",
        parents=[common],
        help="Show one unit by name or target version",
    )
    show_parser.add_argument(
        "unit",
        help="Unit name (e.g. 7.0CrossVersionTest) or version (e.g. 7.0)",
    )

    return parser.parse_args(argv)


def _build_provider(
    args: argparse.Namespace, config: GenerationConfig,
) -> CatalogProvider:
    """Pick the catalog source from CLI flags, falling back to the config.

    Raises:
        ValueError: If --quick-versions is given without --versions.
    """
    if args.versions is not None:
        return StaticCatalogProvider(
            parse_version_list(args.versions),
            parse_version_list(args.quick_versions),
        )
    if args.quick_versions is not None:
        raise ValueError("--quick-versions requires --versions")

    path = args.released_versions or config.released_versions_file
    return ReleasedVersionsFile(
        path,
        lowest_tested_version=config.lowest_tested_version,
        excluded_versions=config.excluded_versions,
    )


def _generate(
    args: argparse.Namespace, config: GenerationConfig,
) -> GenerationGraph | None:
    """Generate the graph, reporting failures on stderr."""
    try:
        provider = _build_provider(args, config)
        graph = generate_graph(provider, config)
    except (GenerationError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return None

    if not graph.units:
        print("Warning: catalog is empty, no cross-version units generated",
              file=sys.stderr)
    return graph


def cmd_generate(args: argparse.Namespace) -> int:
    """Handle generate subcommand.

    Returns:
        Exit code (0 for success).
    """
    config = GenerationConfig(args.config_file)
    graph = _generate(args, config)
    if graph is None:
        return 1

    fmt = args.format or config.output_format
    if args.output is None:
        sys.stdout.write(render_graph(graph, fmt))
        return 0

    write_graph(graph, args.output, fmt)
    print(f"Graph written to {args.output}")
    print(f"  Units: {len(graph.units)}")
    print(f"  {graph.all_versions.name}: {len(graph.all_versions.depends_on)} units")
    print(f"  {graph.quick_feedback.name}: {len(graph.quick_feedback.depends_on)} units")
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    """Handle list subcommand."""
    config = GenerationConfig(args.config_file)
    graph = _generate(args, config)
    if graph is None:
        return 1

    lines = format_summary(graph, quick_only=args.quick)
    if not lines:
        print("No cross-version units")
        return 0
    for line in lines:
        print(line)
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    """Handle show subcommand."""
    config = GenerationConfig(args.config_file)
    graph = _generate(args, config)
    if graph is None:
        return 1

    unit = graph.units.get(args.unit) or graph.unit_for_version(args.unit)
    if unit is None:
        print(f"Error: Unknown cross-version unit: {args.unit}", file=sys.stderr)
        return 1

    memberships = [
        g.name for g in graph.groups.values() if unit.name in g.depends_on
    ]
    print(format_unit(unit, unit.name in graph.quick_feedback.depends_on))
    print(f"  Description: {unit.description}")
    print(f"  Strategy: {unit.strategy.value}")
    for key, value in sorted(unit.system_properties.items()):
        print(f"  -D{key}={value}")
    print(f"  Groups: {', '.join(memberships)}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    if args.command is None:
        parse_args(["--help"])
        return 1

    if args.command == "generate":
        return cmd_generate(args)
    elif args.command == "list":
        return cmd_list(args)
    elif args.command == "show":
        return cmd_show(args)
    else:
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
