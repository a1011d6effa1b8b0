"""
Wishlist store.

Same persistence pattern as the collection, without quantities or
pricing. Adding a card that is already wished for is a no-op that reports
"already present"; the original date and priority are kept.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date

from ygocli.models.collection import Priority, WishlistAddResult, WishlistEntry
from ygocli.models.failure import CardNotFoundError, NotInWishlistError
from ygocli.services.card_lookup import CardLookup
from ygocli.services.collection_store import find_name
from ygocli.storage.json_document import JsonDocument

logger = logging.getLogger(__name__)


class WishlistStore:
    """Wanted-card ledger backed by a JsonDocument."""

    def __init__(
        self,
        document: JsonDocument,
        lookup: CardLookup,
        today: Callable[[], date] = date.today,
    ):
        self.document = document
        self.lookup = lookup
        self._today = today

    def load(self) -> dict[str, WishlistEntry]:
        entries: dict[str, WishlistEntry] = {}
        for key, raw in self.document.load().items():
            try:
                entry = WishlistEntry.from_dict(raw)
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping malformed wishlist entry %r: %s", key, e)
                continue
            entries[entry.name] = entry
        return entries

    async def _save(self, entries: dict[str, WishlistEntry]) -> None:
        await self.document.write({name: entry.to_dict() for name, entry in entries.items()})

    async def add(
        self, name: str, priority: Priority | str = Priority.MEDIUM
    ) -> WishlistAddResult:
        """
        Wish for a card.

        Raises:
            InvalidPriorityError: If priority is not high, medium or low
            CardNotFoundError: If the name does not resolve
            LookupUnavailableError: If the card database cannot be reached
            PersistenceWriteError: If the wishlist cannot be saved
        """
        level = Priority.parse(priority)

        card = await self.lookup.resolve(name)
        if card is None:
            raise CardNotFoundError(name)

        async with self.document.locked():
            entries = self.load()
            if card.name in entries:
                return WishlistAddResult(name=card.name, added=False)

            entries[card.name] = WishlistEntry(
                name=card.name,
                added=self._today().isoformat(),
                card_id=card.id,
                priority=level,
            )
            await self._save(entries)

        logger.info("Wishlisted %s (%s)", card.name, level.value)
        return WishlistAddResult(name=card.name, added=True)

    async def remove(self, name: str) -> str:
        """
        Drop a card, matching the name ignoring case. Returns the stored name.

        Raises:
            NotInWishlistError: If no entry matches
            PersistenceWriteError: If the wishlist cannot be saved
        """
        async with self.document.locked():
            entries = self.load()
            key = find_name(entries, name)
            if key is None:
                raise NotInWishlistError(name)

            entry = entries.pop(key)
            await self._save(entries)

        logger.info("Removed %s from wishlist", entry.name)
        return entry.name

    def list(self) -> dict[str, WishlistEntry]:
        """Every entry, as stored."""
        return self.load()

    async def clear(self) -> None:
        async with self.document.locked():
            await self.document.clear()
        logger.info("Cleared wishlist at %s", self.document.path)
