import asyncio
from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

from ygocli.models.card import CardPrice, CardRecord
from ygocli.models.failure import LookupUnavailableError
from ygocli.services.collection_store import CollectionStore
from ygocli.services.wishlist_store import WishlistStore
from ygocli.storage.json_document import JsonDocument

TODAY = date(2026, 3, 14)


def make_card(card_id: int, name: str, price: str | None = None) -> CardRecord:
    return CardRecord(
        id=card_id,
        name=name,
        type="Normal Monster",
        prices=CardPrice(tcgplayer_price=price) if price is not None else None,
    )


SAMPLE_CARDS = [
    make_card(46986414, "Dark Magician", "10.00"),
    make_card(89631139, "Blue-Eyes White Dragon", "15.00"),
    make_card(38033121, "Dark Magician Girl", "5.50"),
    make_card(55144522, "Pot of Greed"),
]


class FakeCardLookup:
    """
    Deterministic CardLookup.

    Resolves like the real database: first card whose name contains the
    query, ignoring case, in list order.
    """

    def __init__(self, cards: list[CardRecord], failing: set[str] | None = None):
        self.cards = list(cards)
        self.failing = failing or set()
        self.resolve_calls: list[str] = []
        self.price_calls: list[str] = []

    async def resolve(self, name: str) -> CardRecord | None:
        self.resolve_calls.append(name)
        await asyncio.sleep(0)
        wanted = name.lower()
        return next((card for card in self.cards if wanted in card.name.lower()), None)

    async def get_price(self, name: str) -> Decimal | None:
        self.price_calls.append(name)
        await asyncio.sleep(0)
        if name in self.failing:
            raise LookupUnavailableError(detail=f"timeout pricing {name}")
        card = next((card for card in self.cards if name.lower() in card.name.lower()), None)
        return card.price if card else None


@pytest.fixture
def lookup() -> FakeCardLookup:
    return FakeCardLookup(SAMPLE_CARDS)


@pytest.fixture
def collection_path(tmp_path: Path) -> Path:
    return tmp_path / ".ygo-collection.json"


@pytest.fixture
def wishlist_path(tmp_path: Path) -> Path:
    return tmp_path / ".ygo-wishlist.json"


@pytest.fixture
def collection_store(collection_path: Path, lookup: FakeCardLookup) -> CollectionStore:
    return CollectionStore(JsonDocument(collection_path), lookup, today=lambda: TODAY)


@pytest.fixture
def wishlist_store(wishlist_path: Path, lookup: FakeCardLookup) -> WishlistStore:
    return WishlistStore(JsonDocument(wishlist_path), lookup, today=lambda: TODAY)
