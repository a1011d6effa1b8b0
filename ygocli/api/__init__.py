from ygocli.api.cards import router as cards_router
from ygocli.api.collection import router as collection_router
from ygocli.api.health import router as health_router
from ygocli.api.wishlist import router as wishlist_router

__all__ = [
    "cards_router",
    "collection_router",
    "health_router",
    "wishlist_router",
]
