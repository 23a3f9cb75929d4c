"""Cross-version test graph generation.

``generate_graph`` is the single entry point: it reads the catalog once,
creates one execution unit per version in catalog order and links every
unit into the all-versions group and the quick subset into the
quick-feedback group. The returned graph is immutable.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping

from crossversion.catalog.provider import CatalogProvider, VersionCatalog, fetch_catalog
from crossversion.config import GenerationConfig
from crossversion.generation.groups import (
    ALL_VERSIONS,
    QUICK_FEEDBACK,
    AggregateGroup,
    AggregateGroupBuilder,
)
from crossversion.generation.units import ExecutionUnit, UnitFactory, unit_name


@dataclass(frozen=True)
class GenerationGraph:
    """Execution units plus the two aggregate groups depending on them."""

    catalog: VersionCatalog
    units: Mapping[str, ExecutionUnit]
    all_versions: AggregateGroup
    quick_feedback: AggregateGroup
    name_prefix: str = ""

    @property
    def groups(self) -> dict[str, AggregateGroup]:
        return {
            self.all_versions.name: self.all_versions,
            self.quick_feedback.name: self.quick_feedback,
        }

    def unit_for_version(self, version: str) -> ExecutionUnit | None:
        """Look up a unit by its target version via the derived name."""
        return self.units.get(unit_name(version, self.name_prefix))

    def quick_units(self) -> list[ExecutionUnit]:
        """Units in the quick-feedback group, in catalog order."""
        return self.resolve(self.quick_feedback)

    def resolve(self, group: AggregateGroup) -> list[ExecutionUnit]:
        """Resolve a group's dependency names against the owned units.

        Raises:
            KeyError: If the group names a unit the graph does not own.
        """
        missing = set(group.depends_on) - set(self.units)
        if missing:
            raise KeyError(f"Group {group.name} depends on unknown units: {sorted(missing)}")
        return [u for u in self.units.values() if u.name in group.depends_on]

    def to_dict(self) -> dict[str, Any]:
        order = list(self.units)
        return {
            "units": {name: unit.to_dict() for name, unit in self.units.items()},
            "groups": {name: g.to_dict(order) for name, g in self.groups.items()},
        }


def generate_graph(
    provider: CatalogProvider,
    config: GenerationConfig | None = None,
) -> GenerationGraph:
    """Generate the cross-version test graph for a catalog.

    Args:
        provider: Catalog source, queried exactly once per call.
        config: Naming and parameterization settings (defaults if None).

    Returns:
        The generated GenerationGraph.

    Raises:
        CatalogUnavailable: If the provider cannot supply its versions.
        DuplicateVersion: If the full list repeats a version.
        InvalidQuickSubset: If a quick version is missing from the full list.
    """
    config = config or GenerationConfig()

    catalog = fetch_catalog(provider)
    catalog.validate()

    factory = UnitFactory(config)
    builder = AggregateGroupBuilder(config.product)
    all_versions = builder.create_all_versions_group()
    quick_feedback = builder.create_quick_feedback_group()

    units: dict[str, ExecutionUnit] = {}
    for version in catalog.full_versions:
        unit = factory.create_unit(version)
        units[unit.name] = unit
        builder.link_unit(all_versions, unit)
        if catalog.is_quick(version):
            builder.link_unit(quick_feedback, unit)

    groups = builder.freeze()
    return GenerationGraph(
        catalog=catalog,
        units=MappingProxyType(units),
        all_versions=groups[ALL_VERSIONS],
        quick_feedback=groups[QUICK_FEEDBACK],
        name_prefix=factory.name_prefix,
    )
