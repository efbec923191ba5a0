"""Exception types raised by the dex package."""

from __future__ import annotations


class DexError(Exception):
    """Base class for dex bot errors."""


class CatalogLoadError(DexError):
    """Raised when the species catalog cannot be built from its data files."""


class EntryNotFound(DexError, LookupError):
    """Raised when a species id falls outside the loaded catalog."""

    def __init__(self, species_id: int, size: int):
        self.species_id = species_id
        self.size = size
        super().__init__(f"Species #{species_id} is not in the catalog (valid ids: 1-{size}).")


__all__ = ["CatalogLoadError", "DexError", "EntryNotFound"]
