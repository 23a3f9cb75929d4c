"""Error types raised while generating the cross-version test graph.

Any of these aborts the run: no partial graph is ever returned.
"""

from __future__ import annotations


class GenerationError(Exception):
    """Base class for failures that prevent graph generation."""


class CatalogUnavailable(GenerationError, RuntimeError):
    """The catalog provider could not supply the tested versions."""


class InvalidQuickSubset(GenerationError, ValueError):
    """The quick versions contain identifiers absent from the full list."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = sorted(missing)
        super().__init__(
            "Quick versions not present in the full version list: "
            + ", ".join(self.missing)
        )


class DuplicateVersion(GenerationError, ValueError):
    """The full version list names the same version more than once."""

    def __init__(self, version: str) -> None:
        self.version = version
        super().__init__(f"Version listed more than once in catalog: {version}")
