"""Discord adapter — discord.py client, payload builders and projections."""

from discord_mcp.adapters.discord.client import DiscordClient
from discord_mcp.adapters.discord.payload import (
    build_allowed_mentions,
    build_embed,
    build_history_kwargs,
    build_send_kwargs,
)
from discord_mcp.adapters.discord.projection import (
    normalize_channel,
    normalize_guild,
    normalize_message,
)

__all__ = [
    "DiscordClient",
    "build_allowed_mentions",
    "build_embed",
    "build_history_kwargs",
    "build_send_kwargs",
    "normalize_channel",
    "normalize_guild",
    "normalize_message",
]
