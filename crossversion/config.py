"""Generation configuration file management.

Reads the .crossversion_config JSON file that names the
released-versions source, the product being tested and how generated
units are parameterized.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

# Default configuration values
DEFAULT_CONFIG: dict[str, Any] = {
    "released_versions_file": "released-versions.json",
    "lowest_tested_version": None,
    "excluded_versions": [],
    "product": "",
    "system_property_prefix": "integtest",
    "output_format": "json",
}

OUTPUT_FORMATS = ("json", "yaml")


class GenerationConfig:
    """Manages the .crossversion_config JSON configuration file."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = path
        self._data: dict[str, Any] = dict(DEFAULT_CONFIG)
        if path is not None and path.exists():
            self._load()

    def _load(self) -> None:
        """Load config from the file."""
        assert self.path is not None
        try:
            text = self.path.read_text()
            data = json.loads(text)
            if isinstance(data, dict):
                self._data = {**DEFAULT_CONFIG, **data}
        except (json.JSONDecodeError, OSError):
            self._data = dict(DEFAULT_CONFIG)

    @property
    def released_versions_file(self) -> Path:
        """Path of the released-versions JSON, relative to the config file."""
        path = Path(
            self._data.get(
                "released_versions_file",
                DEFAULT_CONFIG["released_versions_file"],
            )
        )
        if not path.is_absolute() and self.path is not None:
            return self.path.parent / path
        return path

    @property
    def lowest_tested_version(self) -> str | None:
        """Get the oldest final release still tested (None = all)."""
        val = self._data.get("lowest_tested_version")
        return str(val) if val else None

    @property
    def excluded_versions(self) -> list[str]:
        """Get the versions never tested."""
        return [str(v) for v in self._data.get("excluded_versions") or []]

    @property
    def product(self) -> str:
        """Get the product name used in unit names and descriptions."""
        return str(self._data.get("product") or "")

    @property
    def system_property_prefix(self) -> str:
        """Get the prefix of the system properties passed to each unit."""
        return str(
            self._data.get("system_property_prefix")
            or DEFAULT_CONFIG["system_property_prefix"]
        )

    @property
    def output_format(self) -> str:
        """Get the default graph output format."""
        val = self._data.get("output_format", DEFAULT_CONFIG["output_format"])
        return val if val in OUTPUT_FORMATS else DEFAULT_CONFIG["output_format"]
