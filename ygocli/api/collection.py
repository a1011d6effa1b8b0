"""
Collection API endpoints.

Thin REST surface over CollectionStore. Store failures are KnownErrors
and are mapped to JSON error responses by the handler in ``main``.
"""

from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ygocli.api.dependencies import get_collection_store
from ygocli.services.collection_store import CollectionStore

router = APIRouter(prefix="/api/collection", tags=["collection"])

EMPTY_COLLECTION_MESSAGE = "Your collection is empty!"


class CamelModel(BaseModel):
    """Request/response model that speaks camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CollectionCard(CamelModel):
    """One owned card with its current price."""

    name: str
    count: int
    price: Decimal | None = Field(
        default=None,
        description="TCGPlayer price in USD; null when the database has none",
    )


class CollectionResponse(CamelModel):
    """Response model for the priced collection."""

    collection: list[CollectionCard] = Field(default_factory=list)
    total_cards: int = Field(default=0, description="Unique cards")
    total_copies: int = 0
    total_value: Decimal = Decimal("0.00")


class CardCountRequest(CamelModel):
    """Request model for adding or removing copies."""

    card_name: str = Field(
        ...,
        min_length=1,
        description="Card name (partial names resolve to the first match on add)",
        examples=["Dark Magician"],
    )
    count: int = Field(default=1, ge=1, description="Copies to add or remove")


class MutationResponse(CamelModel):
    """Response model for add/remove/clear."""

    success: bool = True
    message: str
    name: str | None = None
    count: int | None = Field(
        default=None,
        description="Copies owned after the operation (0 when the card was removed)",
    )


class ValueResponse(CamelModel):
    value: Decimal


@router.get("", response_model=CollectionResponse)
async def get_collection(
    store: Annotated[CollectionStore, Depends(get_collection_store)],
) -> CollectionResponse:
    """
    Get the collection with current prices.

    Cards whose price cannot be fetched are listed with a null price and
    count as 0 towards the total.
    """
    listing = await store.list()

    return CollectionResponse(
        collection=[
            CollectionCard(name=entry.name, count=entry.count, price=entry.price)
            for entry in listing.entries
        ],
        total_cards=listing.unique_cards(),
        total_copies=listing.total_copies(),
        total_value=listing.total_value(),
    )


@router.post("/add", response_model=MutationResponse)
async def add_card(
    request: CardCountRequest,
    store: Annotated[CollectionStore, Depends(get_collection_store)],
) -> MutationResponse:
    """Add copies of a card. 404 if the name does not resolve."""
    result = await store.add(request.card_name, request.count)

    return MutationResponse(
        message=f"Added {result} to collection",
        name=result.name,
        count=result.count,
    )


@router.post("/remove", response_model=MutationResponse)
async def remove_card(
    request: CardCountRequest,
    store: Annotated[CollectionStore, Depends(get_collection_store)],
) -> MutationResponse:
    """Remove copies of a card (name matched ignoring case). 404 if not owned."""
    result = await store.remove(request.card_name, request.count)

    return MutationResponse(message=str(result), name=result.name, count=result.remaining)


@router.get("/value", response_model=ValueResponse)
async def get_value(
    store: Annotated[CollectionStore, Depends(get_collection_store)],
) -> ValueResponse:
    """Total value of the collection in USD."""
    return ValueResponse(value=await store.value())


@router.get("/export", response_class=PlainTextResponse)
async def export_collection(
    store: Annotated[CollectionStore, Depends(get_collection_store)],
) -> PlainTextResponse:
    """Export the collection as a YDK deck list."""
    ydk = store.export()
    if ydk is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=EMPTY_COLLECTION_MESSAGE,
        )
    return PlainTextResponse(ydk)


@router.delete("", response_model=MutationResponse)
async def clear_collection(
    store: Annotated[CollectionStore, Depends(get_collection_store)],
) -> MutationResponse:
    """Delete every card from the collection. Irreversible."""
    await store.clear()
    return MutationResponse(message="Collection cleared")
