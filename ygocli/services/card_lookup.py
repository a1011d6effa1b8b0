"""
Card lookup against the YGOPRODeck database.

API docs: https://ygoprodeck.com/api-guide/

Stores depend only on the CardLookup protocol, so tests can hand them a
deterministic fake and the REST/CLI layers hand them YGOProDeckClient.

Name resolution always takes the first result of a partial-name search.
An ambiguous fragment ("magician") therefore resolves to whatever card
the database lists first.
"""

import logging
from dataclasses import asdict, dataclass
from decimal import Decimal
from typing import Any, Protocol

import httpx

from ygocli.config import settings
from ygocli.models.card import CardRecord
from ygocli.models.failure import LookupUnavailableError

logger = logging.getLogger(__name__)


class CardLookup(Protocol):
    """Resolve a card name to its canonical record and price."""

    async def resolve(self, name: str) -> CardRecord | None: ...

    async def get_price(self, name: str) -> Decimal | None: ...


@dataclass(frozen=True, slots=True)
class SearchParams:
    """
    Filters for ``cardinfo.php``. Unset fields are not sent.

    Attributes:
        name: Partial name match (``fname``)
        exact_name: Exact name match (``name``)
        type: Card type, e.g. "XYZ Monster"
        attribute: DARK, LIGHT, ...
        race: Monster type, e.g. "Dragon"
        archetype: Archetype name
        atk: Attack value
        defense: Defense value (``def``)
        level: Level or rank
        misc: "yes" to include misc_info (rarity, konami id)
    """

    name: str | None = None
    exact_name: str | None = None
    type: str | None = None
    attribute: str | None = None
    race: str | None = None
    archetype: str | None = None
    atk: str | None = None
    defense: str | None = None
    level: str | None = None
    misc: str | None = None

    def to_query(self) -> dict[str, str]:
        renames = {"name": "fname", "exact_name": "name", "defense": "def"}
        return {
            renames.get(key, key): str(value)
            for key, value in asdict(self).items()
            if value not in (None, "")
        }


def _parse_card(data: Any) -> CardRecord:
    try:
        return CardRecord.from_api(data)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise LookupUnavailableError(detail="Unexpected card payload") from e


class YGOProDeckClient:
    """
    Async client for the YGOPRODeck v7 API.

    Every request is bounded by ``timeout``. Pass ``client`` to reuse a
    connection pool (or a mocked transport); otherwise a client is created
    per request.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self._client = client

    async def _get(self, path: str, params: dict[str, str] | None = None) -> httpx.Response:
        url = f"{self.base_url}/{path}"
        headers = {"User-Agent": settings.user_agent}
        logger.debug("GET %s %s", url, params or {})

        try:
            if self._client is not None:
                return await self._client.get(
                    url, params=params, headers=headers, timeout=self.timeout
                )
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                return await client.get(url, params=params, headers=headers)
        except httpx.TimeoutException as e:
            raise LookupUnavailableError(detail=f"Timed out after {self.timeout}s: {url}") from e
        except httpx.HTTPError as e:
            raise LookupUnavailableError(detail=f"Request to {url} failed: {e}") from e

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise LookupUnavailableError(detail="Card database returned invalid JSON") from e

    async def fetch_cards(self, params: SearchParams | None = None) -> list[CardRecord]:
        """
        Search the card database.

        Args:
            params: Search filters (all cards if omitted)

        Returns:
            Matching cards in database order. Empty if nothing matched.

        Raises:
            LookupUnavailableError: On timeout, transport failure, HTTP error, bad JSON
                or a card entry that does not parse
        """
        query = (params or SearchParams()).to_query()
        response = await self._get("cardinfo.php", params=query)

        # The API answers "no match" with 400 and an error message
        if response.status_code == httpx.codes.BAD_REQUEST:
            logger.debug("No cards matched %s", query)
            return []

        if response.is_error:
            raise LookupUnavailableError(
                detail=f"API request failed: {response.status_code}",
            )

        payload = self._json(response)
        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, list):
            raise LookupUnavailableError(detail="Unexpected card payload")
        return [_parse_card(card) for card in data]

    async def search_by_name(self, name: str) -> list[CardRecord]:
        """Cards whose name contains ``name``."""
        return await self.fetch_cards(SearchParams(name=name))

    async def get_card_by_exact_name(self, name: str) -> CardRecord | None:
        cards = await self.fetch_cards(SearchParams(exact_name=name))
        return cards[0] if cards else None

    async def get_random_card(self) -> CardRecord:
        """
        Fetch a random card.

        Raises:
            LookupUnavailableError: If the request fails or returns no card
        """
        response = await self._get("randomcard.php")
        if response.is_error:
            raise LookupUnavailableError(detail=f"API request failed: {response.status_code}")

        payload = self._json(response)
        # Older API versions return the card itself, newer ones wrap it in "data"
        if isinstance(payload, dict) and isinstance(payload.get("data"), list):
            cards = payload["data"]
            if not cards:
                raise LookupUnavailableError(detail="No cards found in database")
            return _parse_card(cards[0])
        if isinstance(payload, dict) and "id" in payload:
            return _parse_card(payload)
        raise LookupUnavailableError(detail="Unexpected random card payload")

    # --- CardLookup ---

    async def resolve(self, name: str) -> CardRecord | None:
        """First card whose name contains ``name``, or None."""
        cards = await self.search_by_name(name)
        return cards[0] if cards else None

    async def get_price(self, name: str) -> Decimal | None:
        """TCGPlayer price of the card ``name`` resolves to, or None."""
        card = await self.resolve(name)
        return card.price if card else None
