"""Version catalogs: the consumed provider interface and its implementations."""

from crossversion.catalog.provider import (
    CatalogProvider,
    StaticCatalogProvider,
    VersionCatalog,
    fetch_catalog,
    parse_version_list,
)
from crossversion.catalog.released_versions import ReleasedVersionsFile
from crossversion.catalog.versions import ReleaseVersion

__all__ = [
    "CatalogProvider",
    "ReleaseVersion",
    "ReleasedVersionsFile",
    "StaticCatalogProvider",
    "VersionCatalog",
    "fetch_catalog",
    "parse_version_list",
]
