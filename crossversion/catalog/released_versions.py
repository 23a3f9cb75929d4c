"""Catalog provider backed by a released-versions JSON file.

The file is kept in version control next to the product sources and is
updated on every release:

    {
      "latestReleaseSnapshot": {"version": "7.5-20220601000000+0000", "buildTime": "..."},
      "latestRc": {"version": "7.5-rc-1", "buildTime": "..."},
      "finalReleases": [{"version": "7.4.2", "buildTime": "..."}, ...]
    }

Full versions are the final releases from ``lowest_tested_version`` up,
plus the latest RC and snapshot when they are newer than every final
release. Quick versions are the oldest and newest tested final releases
plus the newest tested pre-release.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from crossversion.catalog.versions import ReleaseVersion
from crossversion.errors import CatalogUnavailable


class ReleasedVersionsFile:
    """Reads tested versions from a released-versions JSON file."""

    def __init__(
        self,
        path: str | Path,
        lowest_tested_version: str | None = None,
        excluded_versions: Iterable[str] = (),
    ) -> None:
        self.path = Path(path)
        self.lowest_tested_version = lowest_tested_version
        self.excluded_versions = frozenset(excluded_versions)
        self._tested: list[ReleaseVersion] | None = None
        self._quick: list[ReleaseVersion] | None = None

    def get_full_versions(self) -> list[str]:
        """All tested versions, oldest first."""
        self._resolve()
        assert self._tested is not None
        return [v.text for v in self._tested]

    def get_quick_versions(self) -> set[str]:
        """The quick-feedback subset of the tested versions."""
        self._resolve()
        assert self._quick is not None
        return {v.text for v in self._quick}

    def _load(self) -> dict[str, Any]:
        """Load and shape-check the JSON document.

        Raises:
            CatalogUnavailable: If the file is missing, unreadable or malformed.
        """
        try:
            data = json.loads(self.path.read_text())
        except FileNotFoundError:
            raise CatalogUnavailable(f"Released versions file not found: {self.path}")
        except json.JSONDecodeError as e:
            raise CatalogUnavailable(f"Invalid JSON in {self.path}: {e}") from e
        except OSError as e:
            raise CatalogUnavailable(f"Cannot read {self.path}: {e}") from e

        if not isinstance(data, dict) or not isinstance(data.get("finalReleases"), list):
            raise CatalogUnavailable(
                f"Released versions file {self.path} has no 'finalReleases' list"
            )
        return data

    def _resolve(self) -> None:
        if self._tested is not None:
            return

        data = self._load()
        try:
            finals = sorted({
                ReleaseVersion.parse(entry["version"])
                for entry in data["finalReleases"]
            })
            rc = _optional_version(data, "latestRc")
            snapshot = _optional_version(data, "latestReleaseSnapshot")
            lowest = (
                ReleaseVersion.parse(self.lowest_tested_version)
                if self.lowest_tested_version
                else None
            )
            excluded = {ReleaseVersion.parse(v) for v in self.excluded_versions}
        except (KeyError, TypeError, ValueError) as e:
            raise CatalogUnavailable(
                f"Malformed release entry in {self.path}: {e}"
            ) from e

        tested = [
            v for v in finals
            if (lowest is None or v >= lowest) and v not in excluded
        ]

        newest_final = finals[-1] if finals else None
        pre_releases: list[ReleaseVersion] = []
        if rc is not None and (newest_final is None or rc > newest_final):
            pre_releases.append(rc)
        if snapshot is not None and all(snapshot > v for v in [newest_final, rc] if v is not None):
            pre_releases.append(snapshot)
        pre_releases = [v for v in pre_releases if v not in excluded]

        self._tested = sorted(set(tested + pre_releases))

        quick: list[ReleaseVersion] = []
        if tested:
            quick.extend([tested[0], tested[-1]])
        if pre_releases:
            quick.append(max(pre_releases))
        self._quick = quick


def _optional_version(data: dict[str, Any], key: str) -> ReleaseVersion | None:
    entry = data.get(key)
    if not entry:
        return None
    return ReleaseVersion.parse(entry["version"])
