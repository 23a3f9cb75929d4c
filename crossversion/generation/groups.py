"""Aggregate groups bundling execution units for a single invocation.

Groups reference units by name only; the generated graph owns the units.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from crossversion.generation.units import ExecutionUnit

ALL_VERSIONS = "allVersionsCrossVersionTests"
QUICK_FEEDBACK = "quickFeedbackCrossVersionTests"
GROUP_CATEGORY = "verification"


@dataclass
class AggregateGroup:
    """A named node depending on a set of execution units."""

    name: str
    description: str
    group: str = GROUP_CATEGORY
    depends_on: set[str] | frozenset[str] = field(default_factory=set)

    def to_dict(self, order: list[str] | None = None) -> dict[str, object]:
        """Serialize the group.

        Args:
            order: Unit names in catalog order, used to list dependencies
                deterministically. Names not in ``order`` sort last.
        """
        if order is None:
            deps = sorted(self.depends_on)
        else:
            rank = {name: i for i, name in enumerate(order)}
            deps = sorted(self.depends_on, key=lambda n: (rank.get(n, len(rank)), n))
        return {
            "description": self.description,
            "group": self.group,
            "depends_on": deps,
        }


class AggregateGroupBuilder:
    """Creates the all-versions and quick-feedback groups for one run."""

    def __init__(self, product: str = "") -> None:
        self.product = product or "the product"
        self._groups: dict[str, AggregateGroup] = {}
        self._frozen = False

    def create_all_versions_group(self) -> AggregateGroup:
        return self._create(
            ALL_VERSIONS,
            "Runs the cross-version tests against all "
            f"{self.product} versions with 'forking' executer",
        )

    def create_quick_feedback_group(self) -> AggregateGroup:
        return self._create(
            QUICK_FEEDBACK,
            "Runs the cross-version tests against a subset of selected "
            f"{self.product} versions with 'forking' executer for quick feedback",
        )

    def _create(self, name: str, description: str) -> AggregateGroup:
        if self._frozen:
            raise RuntimeError("Aggregate groups are frozen")
        if name in self._groups:
            raise RuntimeError(f"Aggregate group already created: {name}")
        group = AggregateGroup(name=name, description=description)
        self._groups[name] = group
        return group

    def link_unit(self, group: AggregateGroup, unit: ExecutionUnit) -> None:
        """Make ``group`` depend on ``unit``. Linking twice is a no-op."""
        if self._frozen:
            raise RuntimeError("Aggregate groups are frozen")
        if self._groups.get(group.name) is not group:
            raise ValueError(f"Group was not created by this builder: {group.name}")
        assert isinstance(group.depends_on, set)
        group.depends_on.add(unit.name)

    def freeze(self) -> dict[str, AggregateGroup]:
        """Finish building and return the groups with immutable dependencies."""
        self._frozen = True
        return {
            name: AggregateGroup(
                name=g.name,
                description=g.description,
                group=g.group,
                depends_on=frozenset(g.depends_on),
            )
            for name, g in self._groups.items()
        }
