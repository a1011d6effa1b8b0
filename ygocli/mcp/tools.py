"""
Chat-skill tool definitions for collection and wishlist management.

Each tool returns a dict with a human-readable ``output`` block that a
chat assistant can show as-is. Store failures are returned as error
payloads, never raised, so one bad request cannot break the chat session.
"""

import logging
from dataclasses import dataclass
from typing import Any

from ygocli.models.failure import KnownError
from ygocli.services.collection_store import CollectionStore
from ygocli.services.wishlist_store import WishlistStore

logger = logging.getLogger(__name__)

EMPTY_COLLECTION = "Your collection is empty!"
EMPTY_WISHLIST = "Your wishlist is empty!"


@dataclass
class ToolDefinition:
    """Definition of a chat tool."""

    name: str
    description: str
    parameters: dict[str, Any]


_CARD_NAME = {"type": "string", "description": "Card name (partial names allowed on add)"}
_COUNT = {"type": "integer", "description": "Number of copies", "default": 1, "minimum": 1}
_NO_PARAMS: dict[str, Any] = {"type": "object", "properties": {}, "required": []}


TOOL_DEFINITIONS: list[ToolDefinition] = [
    ToolDefinition(
        name="add_to_collection",
        description="Add copies of a Yu-Gi-Oh! card to the user's collection.",
        parameters={
            "type": "object",
            "properties": {"name": _CARD_NAME, "count": _COUNT},
            "required": ["name"],
        },
    ),
    ToolDefinition(
        name="remove_from_collection",
        description="Remove copies of a card from the user's collection.",
        parameters={
            "type": "object",
            "properties": {"name": _CARD_NAME, "count": _COUNT},
            "required": ["name"],
        },
    ),
    ToolDefinition(
        name="list_collection",
        description="List owned cards with counts and current prices.",
        parameters=_NO_PARAMS,
    ),
    ToolDefinition(
        name="collection_value",
        description="Total market value of the user's collection.",
        parameters=_NO_PARAMS,
    ),
    ToolDefinition(
        name="export_collection",
        description="Export the collection as a YDK deck list.",
        parameters=_NO_PARAMS,
    ),
    ToolDefinition(
        name="clear_collection",
        description="Delete every card from the collection.",
        parameters=_NO_PARAMS,
    ),
    ToolDefinition(
        name="add_to_wishlist",
        description="Add a card to the user's wishlist.",
        parameters={
            "type": "object",
            "properties": {
                "name": _CARD_NAME,
                "priority": {
                    "type": "string",
                    "enum": ["high", "medium", "low"],
                    "default": "medium",
                },
            },
            "required": ["name"],
        },
    ),
    ToolDefinition(
        name="remove_from_wishlist",
        description="Remove a card from the user's wishlist.",
        parameters={
            "type": "object",
            "properties": {"name": _CARD_NAME},
            "required": ["name"],
        },
    ),
    ToolDefinition(
        name="list_wishlist",
        description="List wished-for cards with their priority.",
        parameters=_NO_PARAMS,
    ),
    ToolDefinition(
        name="clear_wishlist",
        description="Delete every card from the wishlist.",
        parameters=_NO_PARAMS,
    ),
]


async def list_collection(collection: CollectionStore) -> dict[str, Any]:
    listing = await collection.list()
    if listing.is_empty:
        return {"output": EMPTY_COLLECTION, "cards": []}

    lines = [f"📦 **Your Collection** ({listing.unique_cards()} unique cards)", ""]
    for entry in listing.entries:
        price = f"${entry.price:.2f}" if entry.price is not None else "$0.00"
        lines.append(f"- **{entry.name}** x{entry.count} ({price})")

    return {
        "output": "\n".join(lines),
        "cards": [
            {
                "name": entry.name,
                "count": entry.count,
                "price": None if entry.price is None else str(entry.price),
            }
            for entry in listing.entries
        ],
    }


def list_wishlist(wishlist: WishlistStore) -> dict[str, Any]:
    entries = wishlist.list()
    if not entries:
        return {"output": EMPTY_WISHLIST, "cards": []}

    lines = [f"⭐ **Your Wishlist** ({len(entries)} cards)", ""]
    for entry in entries.values():
        lines.append(f"- **{entry.name}** ({entry.priority.value}, since {entry.added})")

    return {
        "output": "\n".join(lines),
        "cards": [entry.to_dict() for entry in entries.values()],
    }


async def _dispatch(
    tool_name: str,
    arguments: dict[str, Any],
    collection: CollectionStore,
    wishlist: WishlistStore,
) -> dict[str, Any]:
    if tool_name == "add_to_collection":
        added = await collection.add(arguments["name"], arguments.get("count", 1))
        return {
            "output": f"✅ Added {added} to collection",
            "name": added.name,
            "count": added.count,
        }
    elif tool_name == "remove_from_collection":
        removed = await collection.remove(arguments["name"], arguments.get("count", 1))
        return {"output": f"✅ {removed}", "name": removed.name, "count": removed.remaining}
    elif tool_name == "list_collection":
        return await list_collection(collection)
    elif tool_name == "collection_value":
        value = await collection.value()
        return {"output": f"💰 Total Collection Value: ${value:.2f}", "value": str(value)}
    elif tool_name == "export_collection":
        ydk = collection.export()
        if ydk is None:
            return {"output": EMPTY_COLLECTION, "ydk": None}
        return {"output": f"```\n{ydk}```", "ydk": ydk}
    elif tool_name == "clear_collection":
        await collection.clear()
        return {"output": "✅ Collection cleared"}
    elif tool_name == "add_to_wishlist":
        result = await wishlist.add(arguments["name"], arguments.get("priority", "medium"))
        return {
            "output": f"⭐ {result}",
            "name": result.name,
            "already_present": result.already_present,
        }
    elif tool_name == "remove_from_wishlist":
        name = await wishlist.remove(arguments["name"])
        return {"output": f"✅ {name} removed from wishlist", "name": name}
    elif tool_name == "list_wishlist":
        return list_wishlist(wishlist)
    elif tool_name == "clear_wishlist":
        await wishlist.clear()
        return {"output": "✅ Wishlist cleared"}
    else:
        raise ValueError(f"Unknown tool: {tool_name}")


async def execute_tool(
    tool_name: str,
    arguments: dict[str, Any],
    collection: CollectionStore,
    wishlist: WishlistStore,
) -> dict[str, Any]:
    """
    Execute a tool by name.

    Args:
        tool_name: Name of the tool to execute
        arguments: Tool arguments
        collection: Collection store
        wishlist: Wishlist store

    Returns:
        Tool result as dict. Known failures come back as
        ``{"error": message, "kind": kind, "output": "❌ message"}``.

    Raises:
        ValueError: If tool name is unknown
    """
    try:
        return await _dispatch(tool_name, arguments, collection, wishlist)
    except KnownError as e:
        logger.info("Tool %s failed: %s", tool_name, e.message)
        return {"error": e.message, "kind": e.kind.value, "output": f"❌ {e.message}"}
