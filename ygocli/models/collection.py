"""
Collection and wishlist records.

Entries are keyed by canonical card name in their store. On disk each
entry is a JSON object with camelCase ``cardId``; these classes convert
to and from that shape.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any

from ygocli.models.failure import InvalidPriorityError

CENTS = Decimal("0.01")


class Priority(str, Enum):
    """How much a wishlist card is wanted."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @classmethod
    def parse(cls, value: "str | Priority") -> "Priority":
        """Accept a Priority or its string value. Raises InvalidPriorityError otherwise."""
        if isinstance(value, Priority):
            return value
        try:
            return cls(str(value).lower())
        except ValueError as e:
            raise InvalidPriorityError(str(value)) from e


@dataclass(slots=True)
class CollectionEntry:
    """
    An owned card.

    Attributes:
        name: Canonical card name (also the store key)
        count: Copies owned, always at least 1
        added: ISO date of the first acquisition; never changes afterwards
        card_id: Card passcode from the most recent lookup
    """

    name: str
    count: int
    added: str
    card_id: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CollectionEntry":
        return cls(
            name=str(data["name"]),
            count=int(data["count"]),
            added=str(data["added"]),
            card_id=int(data["cardId"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "count": self.count,
            "added": self.added,
            "cardId": self.card_id,
        }


@dataclass(slots=True)
class WishlistEntry:
    """
    A wanted card.

    Attributes:
        name: Canonical card name (also the store key)
        added: ISO date the card was wished for
        card_id: Card passcode
        priority: Set once on insertion
    """

    name: str
    added: str
    card_id: int
    priority: Priority = Priority.MEDIUM

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "WishlistEntry":
        return cls(
            name=str(data["name"]),
            added=str(data["added"]),
            card_id=int(data["cardId"]),
            priority=_stored_priority(data.get("priority")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "added": self.added,
            "cardId": self.card_id,
            "priority": self.priority.value,
        }


def _stored_priority(value: Any) -> Priority:
    """Priority read from disk. Missing or unknown values fall back to medium."""
    try:
        return Priority(str(value).lower())
    except ValueError:
        return Priority.MEDIUM


# --- Operation results ---


@dataclass(frozen=True, slots=True)
class AddResult:
    """Outcome of adding copies to the collection."""

    name: str
    count: int

    def __str__(self) -> str:
        return f"{self.name} x{self.count}"


@dataclass(frozen=True, slots=True)
class RemoveResult:
    """Outcome of removing copies. ``remaining == 0`` means the entry is gone."""

    name: str
    remaining: int

    @property
    def removed(self) -> bool:
        return self.remaining == 0

    def __str__(self) -> str:
        if self.removed:
            return f"{self.name} removed from collection"
        return f"{self.name} x{self.remaining}"


@dataclass(frozen=True, slots=True)
class PricedEntry:
    """A collection entry with its current price (None when unavailable)."""

    name: str
    count: int
    price: Decimal | None

    @property
    def value(self) -> Decimal:
        return (self.price or Decimal(0)) * self.count


@dataclass(frozen=True, slots=True)
class CollectionListing:
    """Priced view of the collection, in store order."""

    entries: list[PricedEntry] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.entries

    def unique_cards(self) -> int:
        return len(self.entries)

    def total_copies(self) -> int:
        return sum(entry.count for entry in self.entries)

    def total_value(self) -> Decimal:
        total = sum((entry.value for entry in self.entries), Decimal(0))
        return total.quantize(CENTS)


@dataclass(frozen=True, slots=True)
class WishlistAddResult:
    """Outcome of adding to the wishlist. ``added`` is False for an existing card."""

    name: str
    added: bool

    @property
    def already_present(self) -> bool:
        return not self.added

    def __str__(self) -> str:
        if self.added:
            return f"{self.name} added to wishlist"
        return f"{self.name} is already in your wishlist"
