"""Tests for the collection store."""

import asyncio
import json
from datetime import date
from decimal import Decimal
from pathlib import Path

import httpx
import pytest

from tests.conftest import TODAY, FakeCardLookup, make_card
from ygocli.models.failure import (
    CardNotFoundError,
    InvalidQuantityError,
    NotInCollectionError,
    PersistenceWriteError,
)
from ygocli.services.card_lookup import YGOProDeckClient
from ygocli.services.collection_store import CollectionStore, find_name
from ygocli.storage.json_document import JsonDocument


def read_document(path: Path) -> dict:
    return json.loads(path.read_text(encoding="utf-8"))


class TestLoad:
    def test_missing_document_is_empty(self, collection_store: CollectionStore) -> None:
        assert collection_store.load() == {}

    def test_corrupt_document_is_empty(
        self, collection_store: CollectionStore, collection_path: Path
    ) -> None:
        """An unparsable document reads as an empty collection instead of raising."""
        collection_path.write_text("{not json", encoding="utf-8")

        assert collection_store.load() == {}

    def test_skips_malformed_entries(
        self, collection_store: CollectionStore, collection_path: Path
    ) -> None:
        collection_path.write_text(
            json.dumps(
                {
                    "Dark Magician": {
                        "name": "Dark Magician",
                        "count": 2,
                        "added": "2025-01-01",
                        "cardId": 46986414,
                    },
                    "Broken": {"name": "Broken"},
                }
            ),
            encoding="utf-8",
        )

        entries = collection_store.load()

        assert list(entries) == ["Dark Magician"]
        assert entries["Dark Magician"].count == 2


class TestAdd:
    async def test_add_new_card(
        self, collection_store: CollectionStore, collection_path: Path
    ) -> None:
        result = await collection_store.add("Dark Magician")

        assert result.name == "Dark Magician"
        assert result.count == 1
        assert str(result) == "Dark Magician x1"
        assert read_document(collection_path) == {
            "Dark Magician": {
                "name": "Dark Magician",
                "count": 1,
                "added": TODAY.isoformat(),
                "cardId": 46986414,
            }
        }

    async def test_add_accumulates_and_keeps_first_date(
        self, collection_path: Path, lookup: FakeCardLookup
    ) -> None:
        """Adding n then m copies gives one entry of n + m dated at the first add."""
        clock = [date(2025, 12, 1)]
        store = CollectionStore(JsonDocument(collection_path), lookup, today=lambda: clock[0])

        await store.add("Dark Magician", 2)
        clock[0] = date(2026, 2, 1)
        result = await store.add("Dark Magician", 3)

        entries = store.load()
        assert result.count == 5
        assert list(entries) == ["Dark Magician"]
        assert entries["Dark Magician"].count == 5
        assert entries["Dark Magician"].added == "2025-12-01"

    async def test_add_resolves_partial_name_to_first_match(
        self, collection_store: CollectionStore
    ) -> None:
        result = await collection_store.add("magician")

        assert result.name == "Dark Magician"

    async def test_add_uses_canonical_casing(self, collection_store: CollectionStore) -> None:
        await collection_store.add("dark magician")

        assert list(collection_store.load()) == ["Dark Magician"]

    async def test_add_refreshes_card_id(
        self, collection_store: CollectionStore, lookup: FakeCardLookup
    ) -> None:
        await collection_store.add("Dark Magician")
        lookup.cards[0] = make_card(36996508, "Dark Magician", "10.00")

        await collection_store.add("Dark Magician")

        assert collection_store.load()["Dark Magician"].card_id == 36996508

    async def test_add_unknown_card_raises(
        self, collection_store: CollectionStore, collection_path: Path
    ) -> None:
        with pytest.raises(CardNotFoundError, match="Card not found: Exodia the Forbidden One"):
            await collection_store.add("Exodia the Forbidden One")

        assert not collection_path.exists()

    @pytest.mark.parametrize("count", [0, -2])
    async def test_add_rejects_non_positive_count(
        self, collection_store: CollectionStore, lookup: FakeCardLookup, count: int
    ) -> None:
        with pytest.raises(InvalidQuantityError):
            await collection_store.add("Dark Magician", count)

        assert lookup.resolve_calls == []

    async def test_concurrent_adds_do_not_lose_updates(
        self, collection_store: CollectionStore
    ) -> None:
        """Each add awaits the threaded write between load and save."""
        await asyncio.gather(*(collection_store.add("Dark Magician") for _ in range(10)))

        assert collection_store.load()["Dark Magician"].count == 10

    async def test_adds_from_two_stores_on_one_file_do_not_lose_updates(
        self, collection_path: Path, lookup: FakeCardLookup
    ) -> None:
        """Two stores share only the file lock, as two CLI processes would."""
        first = CollectionStore(JsonDocument(collection_path), lookup, today=lambda: TODAY)
        second = CollectionStore(JsonDocument(collection_path), lookup, today=lambda: TODAY)

        await asyncio.gather(
            *(store.add("Dark Magician") for store in (first, second) for _ in range(5))
        )

        assert first.load()["Dark Magician"].count == 10

    async def test_write_failure_propagates(
        self, collection_store: CollectionStore, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def fail(*_args: object) -> None:
            raise OSError("disk full")

        monkeypatch.setattr("ygocli.storage.json_document.os.replace", fail)

        with pytest.raises(PersistenceWriteError):
            await collection_store.add("Dark Magician")


class TestRemove:
    async def test_remove_some_copies(self, collection_store: CollectionStore) -> None:
        await collection_store.add("Dark Magician", 3)

        result = await collection_store.remove("Dark Magician", 2)

        assert result.remaining == 1
        assert not result.removed
        assert str(result) == "Dark Magician x1"
        assert collection_store.load()["Dark Magician"].count == 1

    @pytest.mark.parametrize("count", [3, 5])
    async def test_remove_all_copies_deletes_entry(
        self, collection_store: CollectionStore, count: int
    ) -> None:
        await collection_store.add("Dark Magician", 3)

        result = await collection_store.remove("Dark Magician", count)

        assert result.removed
        assert str(result) == "Dark Magician removed from collection"
        assert collection_store.load() == {}

    async def test_remove_keeps_added_date(
        self, collection_path: Path, lookup: FakeCardLookup
    ) -> None:
        clock = [date(2025, 6, 1)]
        store = CollectionStore(JsonDocument(collection_path), lookup, today=lambda: clock[0])
        await store.add("Dark Magician", 3)
        clock[0] = date(2026, 1, 1)

        await store.remove("Dark Magician")

        assert store.load()["Dark Magician"].added == "2025-06-01"

    async def test_remove_matches_ignoring_case(
        self, collection_store: CollectionStore, lookup: FakeCardLookup
    ) -> None:
        await collection_store.add("Dark Magician")
        lookup.resolve_calls.clear()

        result = await collection_store.remove("DARK magician")

        assert result.name == "Dark Magician"
        assert lookup.resolve_calls == []

    async def test_remove_then_add_restores_canonical_casing(
        self, collection_store: CollectionStore
    ) -> None:
        await collection_store.add("Dark Magician")
        await collection_store.remove("Dark Magician")

        result = await collection_store.add("dark magician")

        assert result.name == "Dark Magician"
        assert list(collection_store.load()) == ["Dark Magician"]

    async def test_remove_does_not_match_partial_names(
        self, collection_store: CollectionStore
    ) -> None:
        await collection_store.add("Dark Magician Girl")

        with pytest.raises(NotInCollectionError):
            await collection_store.remove("Dark Magician")

    async def test_remove_missing_card_raises(self, collection_store: CollectionStore) -> None:
        with pytest.raises(NotInCollectionError, match="Card not in collection: Kuriboh"):
            await collection_store.remove("Kuriboh")

    async def test_remove_rejects_non_positive_count(
        self, collection_store: CollectionStore
    ) -> None:
        await collection_store.add("Dark Magician", 2)

        with pytest.raises(InvalidQuantityError):
            await collection_store.remove("Dark Magician", 0)

        assert collection_store.load()["Dark Magician"].count == 2


class TestValue:
    async def test_empty_collection_is_zero(self, collection_store: CollectionStore) -> None:
        assert await collection_store.value() == Decimal("0")

    async def test_sums_price_times_count(self, collection_store: CollectionStore) -> None:
        await collection_store.add("Dark Magician", 2)
        await collection_store.add("Blue-Eyes White Dragon", 1)

        value = await collection_store.value()

        assert value == Decimal("35.00")
        assert str(value) == "35.00"

    async def test_unpriced_card_counts_as_zero(self, collection_store: CollectionStore) -> None:
        await collection_store.add("Pot of Greed")

        assert await collection_store.value() == Decimal("0.00")

    async def test_failed_lookup_is_skipped(
        self, collection_store: CollectionStore, lookup: FakeCardLookup
    ) -> None:
        await collection_store.add("Dark Magician", 2)
        await collection_store.add("Blue-Eyes White Dragon")
        lookup.failing.add("Blue-Eyes White Dragon")

        assert await collection_store.value() == Decimal("20.00")

    async def test_malformed_database_reply_is_skipped(
        self, collection_store: CollectionStore
    ) -> None:
        """A card entry the client cannot parse prices as unavailable, not as a crash."""
        await collection_store.add("Dark Magician", 2)
        await collection_store.add("Blue-Eyes White Dragon")

        def database(request: httpx.Request) -> httpx.Response:
            if request.url.params["fname"] == "Dark Magician":
                card = {
                    "id": 46986414,
                    "name": "Dark Magician",
                    "card_prices": [{"tcgplayer_price": "10.00"}],
                }
            else:
                card = {"name": "Blue-Eyes White Dragon"}
            return httpx.Response(200, json={"data": [card]})

        async with httpx.AsyncClient(transport=httpx.MockTransport(database)) as http:
            collection_store.lookup = YGOProDeckClient(
                base_url="https://db.test/api/v7", client=http
            )

            value = await collection_store.value()

        assert value == Decimal("20.00")

    async def test_one_price_request_per_entry(
        self, collection_store: CollectionStore, lookup: FakeCardLookup
    ) -> None:
        await collection_store.add("Dark Magician", 4)
        await collection_store.add("Pot of Greed", 2)

        await collection_store.value()

        assert sorted(lookup.price_calls) == ["Dark Magician", "Pot of Greed"]


class TestList:
    async def test_empty_listing(self, collection_store: CollectionStore) -> None:
        listing = await collection_store.list()

        assert listing.is_empty
        assert listing.total_value() == Decimal("0.00")

    async def test_lists_entries_with_prices_in_store_order(
        self, collection_store: CollectionStore, lookup: FakeCardLookup
    ) -> None:
        await collection_store.add("Blue-Eyes White Dragon")
        await collection_store.add("Dark Magician", 2)
        await collection_store.add("Pot of Greed")
        lookup.failing.add("Pot of Greed")

        listing = await collection_store.list()

        assert [(e.name, e.count, e.price) for e in listing.entries] == [
            ("Blue-Eyes White Dragon", 1, Decimal("15.00")),
            ("Dark Magician", 2, Decimal("10.00")),
            ("Pot of Greed", 1, None),
        ]
        assert listing.unique_cards() == 3
        assert listing.total_copies() == 4
        assert listing.total_value() == Decimal("35.00")


class TestExport:
    async def test_empty_collection_exports_nothing(
        self, collection_store: CollectionStore
    ) -> None:
        assert collection_store.export() is None

    async def test_repeats_card_id_per_copy(self, collection_store: CollectionStore) -> None:
        await collection_store.add("Dark Magician", 3)

        ydk = collection_store.export()

        assert ydk is not None
        lines = ydk.splitlines()
        main = lines[lines.index("#main") + 1 : lines.index("#extra")]
        assert main == ["46986414", "46986414", "46986414"]

    async def test_exact_format(self, collection_store: CollectionStore) -> None:
        await collection_store.add("Dark Magician", 2)
        await collection_store.add("Blue-Eyes White Dragon")

        assert collection_store.export() == (
            "#created by YGO CLI Collection\n"
            "#main\n"
            "46986414\n"
            "46986414\n"
            "89631139\n"
            "#extra\n"
            "!side\n"
        )


class TestClear:
    async def test_clear_empties_store_and_document(
        self, collection_store: CollectionStore, collection_path: Path
    ) -> None:
        await collection_store.add("Dark Magician", 2)

        await collection_store.clear()

        assert (await collection_store.list()).is_empty
        assert read_document(collection_path) == {}

    async def test_clear_without_document(
        self, collection_store: CollectionStore, collection_path: Path
    ) -> None:
        await collection_store.clear()

        assert read_document(collection_path) == {}


class TestFindName:
    def test_matches_ignoring_case(self) -> None:
        assert find_name({"Dark Magician": 1}, "dark MAGICIAN") == "Dark Magician"

    def test_no_match(self) -> None:
        assert find_name({"Dark Magician": 1}, "Dark") is None
