"""Execution units: one configured cross-version test run per version."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from crossversion.config import GenerationConfig

UNIT_SUFFIX = "CrossVersionTest"


class ExecutionStrategy(enum.Enum):
    """How a unit runs the product version under test."""

    # Each historical version runs in its own process
    FORKING = "forking"


@dataclass(frozen=True)
class ExecutionUnit:
    """A cross-version test run scoped to exactly one target version."""

    name: str
    target_version: str
    description: str
    strategy: ExecutionStrategy = ExecutionStrategy.FORKING
    system_properties: Mapping[str, str] = field(default_factory=dict, hash=False)

    def to_dict(self) -> dict[str, object]:
        return {
            "target_version": self.target_version,
            "strategy": self.strategy.value,
            "description": self.description,
            "system_properties": dict(self.system_properties),
        }


def unit_name(version: str, prefix: str = "") -> str:
    """Derive the unit name for a version, e.g. ``gradle7.0CrossVersionTest``."""
    return f"{prefix}{version}{UNIT_SUFFIX}"


class UnitFactory:
    """Builds ExecutionUnits parameterized from the generation config."""

    def __init__(self, config: GenerationConfig | None = None) -> None:
        config = config or GenerationConfig()
        self.product = config.product
        self.name_prefix = self.product.lower().replace(" ", "")
        self.property_prefix = config.system_property_prefix
        self.strategy = ExecutionStrategy.FORKING

    def name_for(self, version: str) -> str:
        return unit_name(version, self.name_prefix)

    def create_unit(self, version: str) -> ExecutionUnit:
        """Create the unit targeting ``version``.

        Raises:
            ValueError: If the version is empty.
        """
        if not version:
            raise ValueError("Cannot create a cross-version unit without a version")

        target = f"{self.product} {version}" if self.product else f"version {version}"
        properties = {
            f"{self.property_prefix}.versions": version,
            f"{self.property_prefix}.executer": self.strategy.value,
        }
        return ExecutionUnit(
            name=self.name_for(version),
            target_version=version,
            description=f"Runs the cross-version tests against {target}",
            strategy=self.strategy,
            system_properties=MappingProxyType(properties),
        )
