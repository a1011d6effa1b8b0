from ygocli.models.card import CardPrice, CardRecord
from ygocli.models.collection import (
    AddResult,
    CollectionEntry,
    CollectionListing,
    PricedEntry,
    Priority,
    RemoveResult,
    WishlistAddResult,
    WishlistEntry,
)
from ygocli.models.failure import (
    ApiResponse,
    CardNotFoundError,
    FailureDetail,
    FailureKind,
    InvalidPriorityError,
    InvalidQuantityError,
    KnownError,
    LookupUnavailableError,
    NotInCollectionError,
    NotInWishlistError,
    OutcomeType,
    PersistenceReadError,
    PersistenceWriteError,
)

__all__ = [
    "AddResult",
    "ApiResponse",
    "CardNotFoundError",
    "CardPrice",
    "CardRecord",
    "CollectionEntry",
    "CollectionListing",
    "FailureDetail",
    "FailureKind",
    "InvalidPriorityError",
    "InvalidQuantityError",
    "KnownError",
    "LookupUnavailableError",
    "NotInCollectionError",
    "NotInWishlistError",
    "OutcomeType",
    "PersistenceReadError",
    "PersistenceWriteError",
    "PricedEntry",
    "Priority",
    "RemoveResult",
    "WishlistAddResult",
    "WishlistEntry",
]
