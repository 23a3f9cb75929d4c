"""Version catalog interface consumed by graph generation.

A provider answers two queries: the ordered list of every version to
test, and the quick-feedback subset. ``fetch_catalog`` asks each question
exactly once so a generation run sees one self-consistent catalog.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Protocol

from crossversion.errors import CatalogUnavailable, DuplicateVersion, InvalidQuickSubset


class CatalogProvider(Protocol):
    """Source of the versions a generation run targets."""

    def get_full_versions(self) -> Sequence[str]:
        ...

    def get_quick_versions(self) -> Iterable[str]:
        ...


@dataclass(frozen=True)
class VersionCatalog:
    """Immutable snapshot of the tested versions for one generation run."""

    full_versions: tuple[str, ...] = ()
    quick_versions: frozenset[str] = field(default_factory=frozenset)

    def validate(self) -> None:
        """Check the catalog invariants.

        Raises:
            DuplicateVersion: If a version appears twice in the full list.
            InvalidQuickSubset: If a quick version is not in the full list.
        """
        seen: set[str] = set()
        for version in self.full_versions:
            if version in seen:
                raise DuplicateVersion(version)
            seen.add(version)

        missing = self.quick_versions - seen
        if missing:
            raise InvalidQuickSubset(list(missing))

    def is_quick(self, version: str) -> bool:
        return version in self.quick_versions


class StaticCatalogProvider:
    """Serves versions from explicit lists."""

    def __init__(
        self,
        full_versions: Sequence[str],
        quick_versions: Iterable[str] = (),
    ) -> None:
        self._full = list(full_versions)
        self._quick = list(quick_versions)

    def get_full_versions(self) -> list[str]:
        return list(self._full)

    def get_quick_versions(self) -> set[str]:
        return set(self._quick)


def fetch_catalog(provider: CatalogProvider) -> VersionCatalog:
    """Read the full and quick version lists from a provider.

    Args:
        provider: The catalog source. Each query is invoked once.

    Returns:
        A VersionCatalog. It is not validated here; see VersionCatalog.validate.

    Raises:
        CatalogUnavailable: If the provider fails to resolve its versions.
    """
    try:
        full_versions = tuple(provider.get_full_versions())
        quick_versions = frozenset(provider.get_quick_versions())
    except CatalogUnavailable:
        raise
    except (OSError, ValueError, KeyError, TypeError) as e:
        raise CatalogUnavailable(f"Cannot resolve tested versions: {e}") from e

    return VersionCatalog(full_versions=full_versions, quick_versions=quick_versions)


def parse_version_list(text: str | None) -> list[str]:
    """Split a comma-separated version list, dropping blanks."""
    if not text:
        return []
    return [v.strip() for v in text.split(",") if v.strip()]
