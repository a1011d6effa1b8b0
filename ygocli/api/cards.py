"""
Card search endpoints.

Pass-through to the card database; nothing here touches local state.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ygocli.api.dependencies import get_card_client
from ygocli.config import MAX_SEARCH_RESULTS
from ygocli.services.card_lookup import SearchParams, YGOProDeckClient

router = APIRouter(prefix="/api/cards", tags=["cards"])


def _not_found(name: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Card not found: {name}",
    )


@router.get("")
async def search_cards(
    client: Annotated[YGOProDeckClient, Depends(get_card_client)],
    name: str | None = None,
    type: str | None = None,
    attribute: str | None = None,
    race: str | None = None,
    archetype: str | None = None,
    atk: str | None = None,
    defense: Annotated[str | None, Query(alias="def")] = None,
    level: str | None = None,
) -> dict[str, Any]:
    """
    Search cards by partial name and/or attributes.

    Returns at most 20 cards; ``count`` is the full number of matches.
    """
    cards = await client.fetch_cards(
        SearchParams(
            name=name,
            type=type,
            attribute=attribute,
            race=race,
            archetype=archetype,
            atk=atk,
            defense=defense,
            level=level,
        )
    )
    return {
        "cards": [card.to_dict() for card in cards[:MAX_SEARCH_RESULTS]],
        "count": len(cards),
    }


@router.get("/random")
async def random_card(
    client: Annotated[YGOProDeckClient, Depends(get_card_client)],
) -> dict[str, Any]:
    card = await client.get_random_card()
    return {"card": card.to_dict()}


@router.get("/{name}")
async def get_card(
    name: str,
    client: Annotated[YGOProDeckClient, Depends(get_card_client)],
) -> dict[str, Any]:
    """First card whose name contains ``name``."""
    card = await client.resolve(name)
    if card is None:
        raise _not_found(name)
    return {"card": card.to_dict()}


@router.get("/{name}/prices")
async def get_card_prices(
    name: str,
    client: Annotated[YGOProDeckClient, Depends(get_card_client)],
) -> dict[str, Any]:
    card = await client.resolve(name)
    if card is None:
        raise _not_found(name)
    return {
        "name": card.name,
        "prices": card.prices.to_dict() if card.prices else None,
    }
