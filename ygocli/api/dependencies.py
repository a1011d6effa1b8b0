"""
FastAPI dependency providers.

One card client and one store per backing document for the life of the
process, so every request goes through the same document lock. Tests
replace these with ``app.dependency_overrides``.
"""

from functools import lru_cache

from ygocli.config import settings
from ygocli.services.card_lookup import YGOProDeckClient
from ygocli.services.collection_store import CollectionStore
from ygocli.services.wishlist_store import WishlistStore
from ygocli.storage.json_document import JsonDocument


@lru_cache(maxsize=1)
def get_card_client() -> YGOProDeckClient:
    """Card database client configured from settings."""
    return YGOProDeckClient()


@lru_cache(maxsize=1)
def get_collection_store() -> CollectionStore:
    """Collection store at ``settings.collection_path``."""
    return CollectionStore(JsonDocument(settings.collection_path), get_card_client())


@lru_cache(maxsize=1)
def get_wishlist_store() -> WishlistStore:
    """Wishlist store at ``settings.wishlist_path``."""
    return WishlistStore(JsonDocument(settings.wishlist_path), get_card_client())
