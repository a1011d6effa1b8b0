"""
ygocli services.

Card lookup and the collection/wishlist stores.
"""

from ygocli.services.card_lookup import CardLookup, SearchParams, YGOProDeckClient
from ygocli.services.collection_store import CollectionStore, find_name
from ygocli.services.wishlist_store import WishlistStore
from ygocli.services.ydk_formatter import format_ydk

__all__ = [
    "CardLookup",
    "CollectionStore",
    "SearchParams",
    "WishlistStore",
    "YGOProDeckClient",
    "find_name",
    "format_ydk",
]
