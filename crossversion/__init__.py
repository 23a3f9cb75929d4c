"""Cross-version test task generation."""

from crossversion.errors import CatalogUnavailable, DuplicateVersion, GenerationError, InvalidQuickSubset

__all__ = ["CatalogUnavailable", "DuplicateVersion", "GenerationError", "InvalidQuickSubset"]
