"""Graph output for external executors.

Writes the generated graph as JSON or YAML and renders the text listings
used by the CLI. Dependency lists follow catalog order so that repeated
runs over the same catalog produce identical bytes.
"""

from __future__ import annotations

import json
from pathlib import Path

import yaml

from crossversion.generation.graph import GenerationGraph
from crossversion.generation.units import ExecutionUnit


def render_graph(graph: GenerationGraph, fmt: str = "json") -> str:
    """Serialize the graph.

    Args:
        graph: The generated graph.
        fmt: "json" or "yaml".

    Raises:
        ValueError: If the format is unknown.
    """
    data = graph.to_dict()
    if fmt == "json":
        return json.dumps(data, indent=2) + "\n"
    if fmt == "yaml":
        return yaml.safe_dump(
            data,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )
    raise ValueError(f"Unknown output format: {fmt}")


def write_graph(graph: GenerationGraph, path: Path, fmt: str = "json") -> None:
    """Write the serialized graph to ``path``, creating parent directories."""
    text = render_graph(graph, fmt)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        f.write(text)


def format_unit(unit: ExecutionUnit, quick: bool = False) -> str:
    """One listing line: name, version and a quick marker."""
    marker = "  [quick]" if quick else ""
    return f"{unit.name}  {unit.target_version}{marker}"


def format_summary(graph: GenerationGraph, quick_only: bool = False) -> list[str]:
    """Listing lines for the units of a graph, in catalog order."""
    quick_names = graph.quick_feedback.depends_on
    lines = []
    for unit in graph.units.values():
        is_quick = unit.name in quick_names
        if quick_only and not is_quick:
            continue
        lines.append(format_unit(unit, is_quick))
    return lines
