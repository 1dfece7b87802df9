"""Navigator state: sidecar, favorites, and the joined preset index."""

from .asset_index import AssetIndex, is_listable
from .favorites import FavoritesRegistry
from .metadata_store import MetadataStore

__all__ = ["AssetIndex", "FavoritesRegistry", "MetadataStore", "is_listable"]
