"""
Collection store.

Durable ledger of owned cards: canonical name -> CollectionEntry, kept in
one JSON document. Counts are always positive; removing as many copies
as are owned (or more) deletes the entry.

Names are resolved through a CardLookup on add. Removal never calls the
lookup: it matches existing keys ignoring case.

Prices are looked up fresh for ``list`` and ``value``, one request per
entry. A failed price lookup counts that card as unpriced and the rest
of the computation carries on.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from datetime import date
from decimal import Decimal

from ygocli.models.collection import (
    AddResult,
    CollectionEntry,
    CollectionListing,
    PricedEntry,
    RemoveResult,
)
from ygocli.models.failure import (
    CardNotFoundError,
    InvalidQuantityError,
    LookupUnavailableError,
    NotInCollectionError,
)
from ygocli.services.card_lookup import CardLookup
from ygocli.services.ydk_formatter import format_ydk
from ygocli.storage.json_document import JsonDocument

logger = logging.getLogger(__name__)


class CollectionStore:
    """
    Owned-card ledger backed by a JsonDocument.

    Args:
        document: Backing document
        lookup: Name resolution and pricing
        today: Clock for the ``added`` date (injectable for tests)
    """

    def __init__(
        self,
        document: JsonDocument,
        lookup: CardLookup,
        today: Callable[[], date] = date.today,
    ):
        self.document = document
        self.lookup = lookup
        self._today = today

    def load(self) -> dict[str, CollectionEntry]:
        """Current entries keyed by canonical name. Empty if there is no document."""
        entries: dict[str, CollectionEntry] = {}
        for key, raw in self.document.load().items():
            try:
                entry = CollectionEntry.from_dict(raw)
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping malformed collection entry %r: %s", key, e)
                continue
            if entry.count < 1:
                logger.warning("Dropping %r with non-positive count %d", key, entry.count)
                continue
            entries[entry.name] = entry
        return entries

    async def _save(self, entries: dict[str, CollectionEntry]) -> None:
        await self.document.write({name: entry.to_dict() for name, entry in entries.items()})

    async def add(self, name: str, count: int = 1) -> AddResult:
        """
        Add copies of a card.

        Raises:
            InvalidQuantityError: If count < 1
            CardNotFoundError: If the name does not resolve
            LookupUnavailableError: If the card database cannot be reached
            PersistenceWriteError: If the collection cannot be saved
        """
        if count < 1:
            raise InvalidQuantityError(count)

        card = await self.lookup.resolve(name)
        if card is None:
            raise CardNotFoundError(name)

        async with self.document.locked():
            entries = self.load()
            entry = entries.get(card.name)
            if entry is None:
                entry = CollectionEntry(
                    name=card.name,
                    count=count,
                    added=self._today().isoformat(),
                    card_id=card.id,
                )
                entries[card.name] = entry
            else:
                entry.count += count
                entry.card_id = card.id
            await self._save(entries)

        logger.info("Added %d x %s (now %d)", count, entry.name, entry.count)
        return AddResult(name=entry.name, count=entry.count)

    async def remove(self, name: str, count: int = 1) -> RemoveResult:
        """
        Remove copies of a card, matching the name ignoring case.

        Raises:
            InvalidQuantityError: If count < 1
            NotInCollectionError: If no entry matches
            PersistenceWriteError: If the collection cannot be saved
        """
        if count < 1:
            raise InvalidQuantityError(count)

        async with self.document.locked():
            entries = self.load()
            key = find_name(entries, name)
            if key is None:
                raise NotInCollectionError(name)

            entry = entries[key]
            if entry.count <= count:
                del entries[key]
                remaining = 0
            else:
                entry.count -= count
                remaining = entry.count
            await self._save(entries)

        logger.info("Removed %d x %s (%d left)", count, entry.name, remaining)
        return RemoveResult(name=entry.name, remaining=remaining)

    async def _price(self, entry: CollectionEntry) -> Decimal | None:
        try:
            return await self.lookup.get_price(entry.name)
        except LookupUnavailableError as e:
            logger.warning("No price for %s: %s", entry.name, e.detail or e.message)
            return None

    async def list(self) -> CollectionListing:
        """Entries with current prices, in store order. ``is_empty`` on an empty collection."""
        priced = [
            PricedEntry(name=entry.name, count=entry.count, price=await self._price(entry))
            for entry in self.load().values()
        ]
        return CollectionListing(entries=priced)

    async def value(self) -> Decimal:
        """Sum of price x count over all entries. Unpriced cards count as 0."""
        listing = await self.list()
        return listing.total_value()

    def export(self) -> str | None:
        """YDK deck list of every owned copy, or None if the collection is empty."""
        entries = self.load()
        if not entries:
            return None
        return format_ydk((entry.card_id, entry.count) for entry in entries.values())

    async def clear(self) -> None:
        """Discard every entry."""
        async with self.document.locked():
            await self.document.clear()
        logger.info("Cleared collection at %s", self.document.path)


def find_name(entries: Mapping[str, object], name: str) -> str | None:
    """Existing key equal to ``name`` ignoring case."""
    wanted = name.casefold()
    return next((key for key in entries if key.casefold() == wanted), None)
