"""discord.py client implementing ChatPlatformPort."""

import sys
from typing import List, Optional

import discord

from discord_mcp.domain.readiness import ReadinessGate


def _log(msg: str):
    print(msg, file=sys.stderr)


class DiscordClient(discord.Client):
    """Single-identity Discord session that opens the readiness gate on login."""

    def __init__(self, gate: ReadinessGate, **discord_kwargs):
        intents = discord.Intents.default()
        intents.message_content = True
        super().__init__(intents=intents, **discord_kwargs)
        self._gate = gate

    async def on_ready(self):
        # on_ready fires again after reconnects; only the first one counts
        if self._gate.mark_ready():
            _log(f"Discord bot logged in as {self.user}")

    async def resolve_channel(self, channel_id: int) -> Optional[discord.abc.Snowflake]:
        channel = self.get_channel(channel_id)
        if channel is not None:
            return channel
        try:
            return await self.fetch_channel(channel_id)
        except (discord.NotFound, discord.InvalidData):
            return None

    async def resolve_guild(self, guild_id: int) -> Optional[discord.Guild]:
        # REST-fetched guilds carry no channel, thread or member cache
        return self.get_guild(guild_id)

    def cached_guilds(self) -> List[discord.Guild]:
        return list(self.guilds)
