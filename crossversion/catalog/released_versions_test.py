"""Unit tests for the released-versions file provider."""

from __future__ import annotations

import json
import tempfile
from pathlib import Path

import pytest

from crossversion.catalog.released_versions import ReleasedVersionsFile
from crossversion.errors import CatalogUnavailable


def _write_released(tmpdir: str, data) -> Path:
    path = Path(tmpdir) / "released-versions.json"
    path.write_text(json.dumps(data) if not isinstance(data, str) else data)
    return path


def _finals(*versions: str) -> list[dict[str, str]]:
    return [{"version": v, "buildTime": "20200101000000+0000"} for v in versions]


class TestFullVersions:
    """Tests for get_full_versions()."""

    def test_final_releases_sorted_ascending(self):
        """Final releases are returned oldest first regardless of file order."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write_released(tmpdir, {"finalReleases": _finals("7.0", "6.10", "6.9")})
            provider = ReleasedVersionsFile(path)
            assert provider.get_full_versions() == ["6.9", "6.10", "7.0"]

    def test_lowest_tested_version_filters(self):
        """Releases older than lowest_tested_version are excluded."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write_released(tmpdir, {"finalReleases": _finals("5.6", "6.0", "6.1")})
            provider = ReleasedVersionsFile(path, lowest_tested_version="6.0")
            assert provider.get_full_versions() == ["6.0", "6.1"]

    def test_excluded_versions_removed(self):
        """Explicitly excluded versions are never tested."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write_released(tmpdir, {"finalReleases": _finals("6.0", "6.1", "7.0")})
            provider = ReleasedVersionsFile(path, excluded_versions=["6.1"])
            assert provider.get_full_versions() == ["6.0", "7.0"]

    def test_newer_rc_and_snapshot_included(self):
        """RC and snapshot newer than the latest final are appended."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write_released(tmpdir, {
                "latestReleaseSnapshot": {"version": "7.6-20220601000000+0000"},
                "latestRc": {"version": "7.5-rc-1"},
                "finalReleases": _finals("7.3", "7.4.2"),
            })
            provider = ReleasedVersionsFile(path)
            assert provider.get_full_versions() == [
                "7.3", "7.4.2", "7.5-rc-1", "7.6-20220601000000+0000",
            ]

    def test_stale_rc_ignored(self):
        """An RC already superseded by its final release is not tested."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write_released(tmpdir, {
                "latestRc": {"version": "7.4-rc-2"},
                "finalReleases": _finals("7.3", "7.4"),
            })
            provider = ReleasedVersionsFile(path)
            assert provider.get_full_versions() == ["7.3", "7.4"]

    def test_snapshot_older_than_rc_ignored(self):
        """A snapshot older than the latest RC is not tested."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write_released(tmpdir, {
                "latestReleaseSnapshot": {"version": "7.5-20220601000000+0000"},
                "latestRc": {"version": "7.5-rc-1"},
                "finalReleases": _finals("7.4"),
            })
            provider = ReleasedVersionsFile(path)
            assert provider.get_full_versions() == ["7.4", "7.5-rc-1"]

    def test_empty_final_releases(self):
        """No releases yields an empty catalog rather than an error."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write_released(tmpdir, {"finalReleases": []})
            provider = ReleasedVersionsFile(path)
            assert provider.get_full_versions() == []
            assert provider.get_quick_versions() == set()


class TestQuickVersions:
    """Tests for get_quick_versions()."""

    def test_oldest_and_newest_final(self):
        """Quick set holds the oldest and newest tested finals."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write_released(tmpdir, {"finalReleases": _finals("6.0", "6.1", "7.0")})
            provider = ReleasedVersionsFile(path)
            assert provider.get_quick_versions() == {"6.0", "7.0"}

    def test_newest_pre_release_added(self):
        """The newest tested pre-release joins the quick set."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write_released(tmpdir, {
                "latestReleaseSnapshot": {"version": "7.6-20220601000000+0000"},
                "latestRc": {"version": "7.5-rc-1"},
                "finalReleases": _finals("6.0", "7.4"),
            })
            provider = ReleasedVersionsFile(path)
            assert provider.get_quick_versions() == {
                "6.0", "7.4", "7.6-20220601000000+0000",
            }

    def test_quick_is_subset_of_full(self):
        """Quick versions always come from the full list."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write_released(tmpdir, {
                "latestRc": {"version": "8.0-rc-1"},
                "finalReleases": _finals("5.0", "6.0", "6.1", "7.0"),
            })
            provider = ReleasedVersionsFile(
                path, lowest_tested_version="6.0", excluded_versions=["7.0"],
            )
            assert provider.get_quick_versions() <= set(provider.get_full_versions())
            assert provider.get_quick_versions() == {"6.0", "6.1", "8.0-rc-1"}

    def test_single_release(self):
        """One release is both oldest and newest."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write_released(tmpdir, {"finalReleases": _finals("7.0")})
            assert ReleasedVersionsFile(path).get_quick_versions() == {"7.0"}


class TestErrors:
    """Tests for unavailable or malformed release metadata."""

    def test_missing_file(self):
        """A missing file raises CatalogUnavailable."""
        with tempfile.TemporaryDirectory() as tmpdir:
            provider = ReleasedVersionsFile(Path(tmpdir) / "missing.json")
            with pytest.raises(CatalogUnavailable, match="not found"):
                provider.get_full_versions()

    def test_invalid_json(self):
        """Unparseable JSON raises CatalogUnavailable."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write_released(tmpdir, "{ invalid json }")
            with pytest.raises(CatalogUnavailable, match="Invalid JSON"):
                ReleasedVersionsFile(path).get_full_versions()

    def test_missing_final_releases(self):
        """A document without finalReleases raises CatalogUnavailable."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write_released(tmpdir, {"latestRc": {"version": "7.0-rc-1"}})
            with pytest.raises(CatalogUnavailable, match="finalReleases"):
                ReleasedVersionsFile(path).get_full_versions()

    def test_unparseable_version(self):
        """A malformed version entry raises CatalogUnavailable."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write_released(tmpdir, {"finalReleases": _finals("6.0", "bogus")})
            with pytest.raises(CatalogUnavailable, match="Malformed release entry"):
                ReleasedVersionsFile(path).get_full_versions()

    def test_entry_without_version_key(self):
        """An entry lacking 'version' raises CatalogUnavailable."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write_released(tmpdir, {"finalReleases": [{"buildTime": "x"}]})
            with pytest.raises(CatalogUnavailable, match="Malformed release entry"):
                ReleasedVersionsFile(path).get_quick_versions()


class TestLoadOnce:
    """Tests for lazy single read."""

    def test_file_read_once(self):
        """Both queries share a single read of the file."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write_released(tmpdir, {"finalReleases": _finals("6.0", "7.0")})
            provider = ReleasedVersionsFile(path)
            assert provider.get_full_versions() == ["6.0", "7.0"]
            path.unlink()
            assert provider.get_quick_versions() == {"6.0", "7.0"}


class TestMalformedVersionValues:
    """Tests for version entries that are not strings."""

    def test_numeric_final_version(self):
        """A numeric version value raises CatalogUnavailable."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write_released(tmpdir, {"finalReleases": [{"version": 7.4}]})
            with pytest.raises(CatalogUnavailable, match="Malformed release entry"):
                ReleasedVersionsFile(path).get_full_versions()

    def test_numeric_rc_version(self):
        """A numeric latestRc version raises CatalogUnavailable."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write_released(tmpdir, {
                "latestRc": {"version": 8},
                "finalReleases": _finals("7.0"),
            })
            with pytest.raises(CatalogUnavailable):
                ReleasedVersionsFile(path).get_quick_versions()

    def test_padded_version_is_stripped(self):
        """Surrounding whitespace does not leak into tested versions."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write_released(tmpdir, {"finalReleases": _finals(" 7.4.2", "7.3 ")})
            provider = ReleasedVersionsFile(path)
            assert provider.get_full_versions() == ["7.3", "7.4.2"]
            assert provider.get_quick_versions() == {"7.3", "7.4.2"}


class TestEquivalentExclusions:
    """Exclusions match versions by value, not by spelling."""

    def test_exclude_long_form_of_short_version(self):
        """Excluding 7.0.0 removes a release listed as 7.0."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write_released(tmpdir, {"finalReleases": _finals("6.0", "7.0", "7.1")})
            provider = ReleasedVersionsFile(path, excluded_versions=["7.0.0"])
            assert provider.get_full_versions() == ["6.0", "7.1"]

    def test_exclude_short_form_of_long_version(self):
        """Excluding 7.0 removes a release listed as 7.0.0."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write_released(tmpdir, {"finalReleases": _finals("6.0", "7.0.0")})
            provider = ReleasedVersionsFile(path, excluded_versions=["7.0"])
            assert provider.get_full_versions() == ["6.0"]

    def test_exclude_pre_release(self):
        """A pre-release can be excluded."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write_released(tmpdir, {
                "latestRc": {"version": "7.1-rc-1"},
                "finalReleases": _finals("7.0"),
            })
            provider = ReleasedVersionsFile(path, excluded_versions=["7.1-rc-1"])
            assert provider.get_full_versions() == ["7.0"]
            assert provider.get_quick_versions() == {"7.0"}

    def test_malformed_exclusion(self):
        """An unparseable excluded version raises CatalogUnavailable."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write_released(tmpdir, {"finalReleases": _finals("7.0")})
            provider = ReleasedVersionsFile(path, excluded_versions=["seven"])
            with pytest.raises(CatalogUnavailable):
                provider.get_full_versions()
