"""Cross-version graph generation: units, aggregate groups and the orchestrator."""

from crossversion.generation.graph import GenerationGraph, generate_graph
from crossversion.generation.groups import (
    ALL_VERSIONS,
    QUICK_FEEDBACK,
    AggregateGroup,
    AggregateGroupBuilder,
)
from crossversion.generation.units import ExecutionStrategy, ExecutionUnit, UnitFactory, unit_name

__all__ = [
    "ALL_VERSIONS",
    "AggregateGroup",
    "AggregateGroupBuilder",
    "ExecutionStrategy",
    "ExecutionUnit",
    "GenerationGraph",
    "QUICK_FEEDBACK",
    "UnitFactory",
    "generate_graph",
    "unit_name",
]
