"""
Catalog-related exceptions.
"""

from .base import StorefrontException


class CatalogException(StorefrontException):
    """Base exception for catalog errors."""
    pass


class CatalogLoadException(CatalogException):
    """Raised when the catalog seed data cannot be read or parsed."""

    def __init__(self, source: str, reason: str):
        super().__init__(
            f"Failed to load catalog from {source}: {reason}",
            details={'source': source, 'reason': reason}
        )
        self.source = source
        self.reason = reason
