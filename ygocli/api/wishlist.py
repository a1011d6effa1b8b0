"""Wishlist API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import Field

from ygocli.api.collection import CamelModel
from ygocli.api.dependencies import get_wishlist_store
from ygocli.models.collection import Priority
from ygocli.services.wishlist_store import WishlistStore

router = APIRouter(prefix="/api/wishlist", tags=["wishlist"])


class WishlistCard(CamelModel):
    name: str
    added: str
    card_id: int
    priority: Priority


class WishlistResponse(CamelModel):
    wishlist: dict[str, WishlistCard] = Field(default_factory=dict)
    total_cards: int = 0


class WishlistAddRequest(CamelModel):
    card_name: str = Field(..., min_length=1, examples=["Blue-Eyes White Dragon"])
    priority: Priority = Priority.MEDIUM


class WishlistRemoveRequest(CamelModel):
    card_name: str = Field(..., min_length=1)


class WishlistMutationResponse(CamelModel):
    success: bool = True
    message: str
    name: str | None = None
    already_present: bool = False


@router.get("", response_model=WishlistResponse)
async def get_wishlist(
    store: Annotated[WishlistStore, Depends(get_wishlist_store)],
) -> WishlistResponse:
    entries = store.list()
    return WishlistResponse(
        wishlist={
            name: WishlistCard(
                name=entry.name,
                added=entry.added,
                card_id=entry.card_id,
                priority=entry.priority,
            )
            for name, entry in entries.items()
        },
        total_cards=len(entries),
    )


@router.post("/add", response_model=WishlistMutationResponse)
async def add_card(
    request: WishlistAddRequest,
    store: Annotated[WishlistStore, Depends(get_wishlist_store)],
) -> WishlistMutationResponse:
    """
    Wish for a card.

    Adding a card that is already on the wishlist succeeds with
    ``alreadyPresent: true`` and leaves the entry unchanged.
    """
    result = await store.add(request.card_name, request.priority)
    return WishlistMutationResponse(
        message=str(result),
        name=result.name,
        already_present=result.already_present,
    )


@router.post("/remove", response_model=WishlistMutationResponse)
async def remove_card(
    request: WishlistRemoveRequest,
    store: Annotated[WishlistStore, Depends(get_wishlist_store)],
) -> WishlistMutationResponse:
    name = await store.remove(request.card_name)
    return WishlistMutationResponse(message=f"{name} removed from wishlist", name=name)


@router.delete("", response_model=WishlistMutationResponse)
async def clear_wishlist(
    store: Annotated[WishlistStore, Depends(get_wishlist_store)],
) -> WishlistMutationResponse:
    await store.clear()
    return WishlistMutationResponse(message="Wishlist cleared")
