"""Serialization of generated graphs: JSON, YAML and text summaries."""

from crossversion.reporting.graph_writer import format_summary, format_unit, render_graph, write_graph

__all__ = ["format_summary", "format_unit", "render_graph", "write_graph"]
