from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any


def _to_decimal(value: Any) -> Decimal | None:
    """Parse a price string from the API. Blank or malformed values give None."""
    if value is None or value == "":
        return None
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return None


@dataclass(frozen=True, slots=True)
class CardPrice:
    """
    Vendor prices for a card, as the API reports them (USD strings).

    Attributes:
        tcgplayer_price: TCGPlayer market price
        cardmarket_price: Cardmarket price
        ebay_price: eBay price
        amazon_price: Amazon price
        coolstuffinc_price: CoolStuffInc price
    """

    tcgplayer_price: str = ""
    cardmarket_price: str = ""
    ebay_price: str = ""
    amazon_price: str = ""
    coolstuffinc_price: str = ""

    @property
    def tcgplayer(self) -> Decimal | None:
        return _to_decimal(self.tcgplayer_price)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "CardPrice":
        return cls(
            tcgplayer_price=str(data.get("tcgplayer_price", "")),
            cardmarket_price=str(data.get("cardmarket_price", "")),
            ebay_price=str(data.get("ebay_price", "")),
            amazon_price=str(data.get("amazon_price", "")),
            coolstuffinc_price=str(data.get("coolstuffinc_price", "")),
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "tcgplayer": self.tcgplayer_price,
            "cardmarket": self.cardmarket_price,
            "ebay": self.ebay_price,
            "amazon": self.amazon_price,
            "coolstuffinc": self.coolstuffinc_price,
        }


@dataclass(frozen=True, slots=True)
class CardRecord:
    """
    A card as returned by the YGOPRODeck card database.

    Attributes:
        id: Passcode printed on the card, used in deck-list exports
        name: Canonical card name
        type: Card type (e.g., "Normal Monster", "Spell Card")
        desc: Card text
        atk: Attack, monsters only
        defense: Defense, monsters only (``def`` in the API)
        level: Level or rank, monsters only
        race: Monster type or spell/trap sub-type (e.g., "Spellcaster")
        attribute: DARK, LIGHT, WATER, FIRE, EARTH, WIND or DIVINE
        archetype: Archetype name if any
        ygoprodeck_url: Card page on ygoprodeck.com
        image_url: First artwork URL
        prices: First price block, if the API sent one
        banlist: Format -> status (e.g., {"TCG": "Limited"})
    """

    id: int
    name: str
    type: str = ""
    desc: str = ""
    atk: int | None = None
    defense: int | None = None
    level: int | None = None
    race: str | None = None
    attribute: str | None = None
    archetype: str | None = None
    ygoprodeck_url: str | None = None
    image_url: str | None = None
    prices: CardPrice | None = None
    banlist: dict[str, str] = field(default_factory=dict)

    @property
    def price(self) -> Decimal | None:
        """TCGPlayer price, or None if unavailable."""
        return self.prices.tcgplayer if self.prices else None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "CardRecord":
        """Build a record from one element of the API's ``data`` array."""
        price_list = data.get("card_prices") or []
        images = data.get("card_images") or []

        return cls(
            id=int(data["id"]),
            name=str(data["name"]),
            type=data.get("type", ""),
            desc=data.get("desc", ""),
            atk=data.get("atk"),
            defense=data.get("def"),
            level=data.get("level"),
            race=data.get("race"),
            attribute=data.get("attribute"),
            archetype=data.get("archetype"),
            ygoprodeck_url=data.get("ygoprodeck_url"),
            image_url=images[0].get("image_url") if images else None,
            prices=CardPrice.from_api(price_list[0]) if price_list else None,
            banlist=dict(data.get("banlist_info") or {}),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "desc": self.desc,
            "atk": self.atk,
            "def": self.defense,
            "level": self.level,
            "race": self.race,
            "attribute": self.attribute,
            "archetype": self.archetype,
            "ygoprodeck_url": self.ygoprodeck_url,
            "image_url": self.image_url,
            "prices": self.prices.to_dict() if self.prices else None,
            "banlist": self.banlist,
        }
