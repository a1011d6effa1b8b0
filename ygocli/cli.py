"""
Command-line interface.

    ygo search "dark magician" [--type ...] [--json]
    ygo random
    ygo collection add|remove <name> [-n COUNT]
    ygo collection list|value|export|clear
    ygo wishlist add <name> [-p high|medium|low]
    ygo wishlist remove <name>
    ygo wishlist list|clear

Store and lookup failures print ``Error: <message>`` to stderr and exit 1.
"""

import argparse
import asyncio
import json
import logging
import sys

from ygocli.config import VERSION, settings
from ygocli.models.card import CardRecord
from ygocli.models.failure import KnownError
from ygocli.services.card_lookup import SearchParams, YGOProDeckClient
from ygocli.services.collection_store import CollectionStore
from ygocli.services.wishlist_store import WishlistStore
from ygocli.storage.json_document import JsonDocument

logger = logging.getLogger(__name__)

# Search results printed before "... and N more cards"
MAX_CLI_RESULTS = 10


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ygo",
        description="Search the Yu-Gi-Oh! card database and track your collection",
        epilog="API: https://ygoprodeck.com",
    )
    parser.add_argument("--version", action="version", version=f"ygo-cli v{VERSION}")
    commands = parser.add_subparsers(dest="command", required=True)

    # --- search ---
    search = commands.add_parser("search", help="Search cards by name and attributes")
    search.add_argument("name", nargs="*", help="Partial card name")
    search.add_argument("--type", help='Card type, e.g. "XYZ Monster"')
    search.add_argument("--attribute", help="DARK, LIGHT, WATER, FIRE, EARTH, WIND, DIVINE")
    search.add_argument("--race", help='Monster type, e.g. "Spellcaster"')
    search.add_argument("--archetype", help='Archetype, e.g. "Blue-Eyes"')
    search.add_argument("--atk", help="ATK value")
    search.add_argument("--def", dest="defense", help="DEF value")
    search.add_argument("--level", help="Level or rank")
    search.add_argument("--price", action="store_true", help="Show TCGPlayer price")
    search.add_argument("--json", action="store_true", help="Output as JSON")

    random_card = commands.add_parser("random", help="Show a random card")
    random_card.add_argument("--json", action="store_true", help="Output as JSON")

    # --- collection ---
    collection = commands.add_parser("collection", help="Manage your collection")
    collection_actions = collection.add_subparsers(dest="action", required=True)
    for action, verb in (("add", "Add"), ("remove", "Remove")):
        sub = collection_actions.add_parser(action, help=f"{verb} copies of a card")
        sub.add_argument("name", nargs="+", help="Card name")
        sub.add_argument("-n", "--count", type=int, default=1, help="Number of copies")
    collection_actions.add_parser("list", help="List cards with prices")
    collection_actions.add_parser("value", help="Show total collection value")
    collection_actions.add_parser("export", help="Print the collection as a YDK deck list")
    collection_actions.add_parser("clear", help="Delete every card")

    # --- wishlist ---
    wishlist = commands.add_parser("wishlist", help="Manage your wishlist")
    wishlist_actions = wishlist.add_subparsers(dest="action", required=True)
    add = wishlist_actions.add_parser("add", help="Wish for a card")
    add.add_argument("name", nargs="+", help="Card name")
    add.add_argument(
        "-p",
        "--priority",
        choices=["high", "medium", "low"],
        default="medium",
        help="Priority (default: medium)",
    )
    remove = wishlist_actions.add_parser("remove", help="Drop a card from the wishlist")
    remove.add_argument("name", nargs="+", help="Card name")
    wishlist_actions.add_parser("list", help="List wished-for cards")
    wishlist_actions.add_parser("clear", help="Delete every card")

    return parser


def _card_summary(card: CardRecord, show_price: bool) -> str:
    lines = [card.name, f"  {card.type} | #{card.id}"]
    if show_price:
        price = card.price
        lines.append(f"  TCGPlayer: ${price}" if price is not None else "  TCGPlayer: N/A")
    return "\n".join(lines)


async def _search(args: argparse.Namespace, client: YGOProDeckClient) -> int:
    params = SearchParams(
        name=" ".join(args.name) or None,
        type=args.type,
        attribute=args.attribute,
        race=args.race,
        archetype=args.archetype,
        atk=args.atk,
        defense=args.defense,
        level=args.level,
    )
    cards = await client.fetch_cards(params)

    if not cards:
        print("No cards found.")
        return 0

    shown = cards[:MAX_CLI_RESULTS]
    if args.json:
        print(json.dumps([card.to_dict() for card in shown], indent=2))
    else:
        for card in shown:
            print(_card_summary(card, args.price))
    if len(cards) > MAX_CLI_RESULTS:
        print(f"\n... and {len(cards) - MAX_CLI_RESULTS} more cards")
    return 0


async def _random(args: argparse.Namespace, client: YGOProDeckClient) -> int:
    card = await client.get_random_card()
    if args.json:
        print(json.dumps(card.to_dict(), indent=2))
    else:
        print(_card_summary(card, show_price=True))
    return 0


async def _collection(args: argparse.Namespace, store: CollectionStore) -> int:
    if args.action == "add":
        result = await store.add(" ".join(args.name), args.count)
        print(f"✅ Added {result} to collection")
    elif args.action == "remove":
        removed = await store.remove(" ".join(args.name), args.count)
        print(f"✅ {removed}")
    elif args.action == "list":
        listing = await store.list()
        if listing.is_empty:
            print("Your collection is empty!")
            return 0
        print(f"📦 Your Collection ({listing.unique_cards()} unique cards)\n")
        for entry in listing.entries:
            price = entry.price if entry.price is not None else "0.00"
            print(f"  {entry.name} x{entry.count} (${price})")
    elif args.action == "value":
        value = await store.value()
        print(f"💰 Total Collection Value: ${value:.2f}")
    elif args.action == "export":
        ydk = store.export()
        if ydk is None:
            print("Your collection is empty!")
        else:
            sys.stdout.write(ydk)
    elif args.action == "clear":
        await store.clear()
        print("✅ Collection cleared")
    return 0


async def _wishlist(args: argparse.Namespace, store: WishlistStore) -> int:
    if args.action == "add":
        result = await store.add(" ".join(args.name), args.priority)
        print(f"⭐ {result}")
    elif args.action == "remove":
        name = await store.remove(" ".join(args.name))
        print(f"✅ {name} removed from wishlist")
    elif args.action == "list":
        entries = store.list()
        if not entries:
            print("Your wishlist is empty!")
            return 0
        print(f"⭐ Your Wishlist ({len(entries)} cards)\n")
        for entry in entries.values():
            print(f"  {entry.name} [{entry.priority.value}] since {entry.added}")
    elif args.action == "clear":
        await store.clear()
        print("✅ Wishlist cleared")
    return 0


async def run_command(
    args: argparse.Namespace,
    client: YGOProDeckClient,
    collection: CollectionStore,
    wishlist: WishlistStore,
) -> int:
    """Run a parsed command. Returns the process exit code."""
    try:
        if args.command == "search":
            return await _search(args, client)
        if args.command == "random":
            return await _random(args, client)
        if args.command == "collection":
            return await _collection(args, collection)
        if args.command == "wishlist":
            return await _wishlist(args, wishlist)
    except KnownError as e:
        logger.debug("%s", e.detail or e.message)
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    print(f"Unknown command: {args.command}", file=sys.stderr)
    return 1


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    args = build_parser().parse_args(argv)

    client = YGOProDeckClient()
    collection = CollectionStore(JsonDocument(settings.collection_path), client)
    wishlist = WishlistStore(JsonDocument(settings.wishlist_path), client)

    sys.exit(asyncio.run(run_command(args, client, collection, wishlist)))


if __name__ == "__main__":
    main()
