"""Static tool and resource descriptors returned on discovery."""

from typing import List

from mcp import types

from discord_mcp.domain.channel_types import CHANNEL_TAGS
from discord_mcp.domain.listing import SORT_KEYS, SORT_ORDERS

GUILDS_URI = "discord://guilds"
JSON_MIME_TYPE = "application/json"

_SNOWFLAKE = {"type": "string", "pattern": r"^\d{1,20}$"}


def _snowflake(description: str) -> dict:
    return {**_SNOWFLAKE, "description": description}


RESOURCES: List[types.Resource] = [
    types.Resource(
        uri=GUILDS_URI,
        name="Discord Guilds",
        description="List of Discord guilds the bot is in",
        mimeType=JSON_MIME_TYPE,
    ),
]


_EMBED_SCHEMA = {
    "type": "object",
    "description": "Rich embed. Every property is optional; absent ones are omitted.",
    "properties": {
        "title": {"type": "string", "maxLength": 256},
        "description": {"type": "string", "maxLength": 4096},
        "url": {"type": "string"},
        "color": {
            "type": "integer",
            "minimum": 0,
            "maximum": 0xFFFFFF,
            "description": "RGB color as an integer, e.g. 0x5865F2",
        },
        "fields": {
            "type": "array",
            "maxItems": 25,
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string", "maxLength": 256},
                    "value": {"type": "string", "maxLength": 1024},
                    "inline": {"type": "boolean", "default": False},
                },
                "required": ["name", "value"],
            },
        },
        "author": {
            "type": "object",
            "properties": {
                "name": {"type": "string"},
                "url": {"type": "string"},
                "iconUrl": {"type": "string"},
            },
            "required": ["name"],
        },
        "thumbnail": {
            "type": "object",
            "properties": {"url": {"type": "string"}},
            "required": ["url"],
        },
        "image": {
            "type": "object",
            "properties": {"url": {"type": "string"}},
            "required": ["url"],
        },
        "footer": {
            "type": "object",
            "properties": {
                "text": {"type": "string"},
                "iconUrl": {"type": "string"},
            },
            "required": ["text"],
        },
        "timestamp": {"type": "string", "format": "date-time"},
    },
}

_ALLOWED_MENTIONS_SCHEMA = {
    "type": "object",
    "description": "Which mentions in the message are allowed to notify",
    "properties": {
        "parse": {
            "type": "array",
            "items": {"type": "string", "enum": ["roles", "users", "everyone"]},
            "description": "Mention kinds parsed from content",
        },
        "users": {"type": "array", "items": _SNOWFLAKE, "maxItems": 100},
        "roles": {"type": "array", "items": _SNOWFLAKE, "maxItems": 100},
        "repliedUser": {
            "type": "boolean",
            "default": True,
            "description": "Whether to ping the author of the replied-to message",
        },
    },
}


SEND_MESSAGE = types.Tool(
    name="send_message",
    description="Send a message to a Discord channel",
    inputSchema={
        "type": "object",
        "properties": {
            "channelId": _snowflake("Discord channel ID"),
            "content": {
                "type": "string",
                "maxLength": 2000,
                "description": "Message content to send (required unless embeds are given)",
            },
            "replyTo": _snowflake("ID of a message to reply to"),
            "tts": {"type": "boolean", "default": False},
            "suppressEmbeds": {"type": "boolean", "default": False},
            "suppressNotifications": {"type": "boolean", "default": False},
            "embeds": {"type": "array", "items": _EMBED_SCHEMA, "maxItems": 10},
            "allowedMentions": _ALLOWED_MENTIONS_SCHEMA,
        },
        "required": ["channelId"],
    },
)

READ_MESSAGES = types.Tool(
    name="read_messages",
    description="Read recent messages from a Discord channel",
    inputSchema={
        "type": "object",
        "properties": {
            "channelId": _snowflake("Discord channel ID"),
            "limit": {
                "type": "integer",
                "description": "Number of messages to fetch (default: 10, max: 100)",
                "minimum": 1,
                "maximum": 100,
                "default": 10,
            },
            "before": _snowflake("Fetch messages before this message ID"),
            "after": _snowflake("Fetch messages after this message ID"),
            "around": _snowflake("Fetch messages around this message ID"),
            "authorId": _snowflake("Only return messages from this user ID"),
            "includeContent": {"type": "boolean", "default": True},
            "includeEmbeds": {"type": "boolean", "default": False},
            "includeReactions": {"type": "boolean", "default": False},
            "sortOrder": {"type": "string", "enum": list(SORT_ORDERS), "default": "desc"},
        },
        "required": ["channelId"],
    },
)

LIST_CHANNELS = types.Tool(
    name="list_channels",
    description="List channels in a Discord guild",
    inputSchema={
        "type": "object",
        "properties": {
            "guildId": _snowflake("Discord guild ID"),
            "channelTypes": {
                "type": "array",
                "items": {"type": "string", "enum": list(CHANNEL_TAGS)},
                "description": "Only include these channel types",
            },
            "includeArchived": {"type": "boolean", "default": False},
            "includePrivate": {"type": "boolean", "default": False},
            "categoryId": _snowflake("Only include channels under this category"),
            "sortBy": {
                "type": "string",
                "enum": list(SORT_KEYS),
                "default": "position",
            },
            "includePermissions": {"type": "boolean", "default": False},
            "includeTopic": {"type": "boolean", "default": True},
            "includeStats": {"type": "boolean", "default": False},
        },
        "required": ["guildId"],
    },
)

TOOLS: List[types.Tool] = [SEND_MESSAGE, READ_MESSAGES, LIST_CHANNELS]
