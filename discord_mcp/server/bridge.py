"""Bridge coordinator — maps MCP tool/resource requests onto the chat platform.

Handlers return plain results or raise classified ``McpError``s; the
stdio wiring lives in ``mcp_server``.
"""

import json
from typing import Any, Awaitable, Callable, Dict, List, Optional

import discord
from mcp import types

from discord_mcp.adapters.discord.payload import build_history_kwargs, build_send_kwargs
from discord_mcp.adapters.discord.projection import (
    normalize_channel,
    normalize_guild,
    normalize_message,
)
from discord_mcp.domain.listing import filter_channels, select_messages, sort_channels
from discord_mcp.domain.readiness import ReadinessGate
from discord_mcp.ports.inbound import (
    ListChannelsRequest,
    ReadMessagesRequest,
    SendMessageRequest,
)
from discord_mcp.ports.outbound import ChatPlatformPort
from discord_mcp.server.catalog import GUILDS_URI, RESOURCES, TOOLS
from discord_mcp.server.errors import (
    invalid_request,
    method_not_found,
    not_ready,
    platform_call,
)
from discord_mcp.server.requests import parse_arguments

ToolHandler = Callable[[Dict[str, Any]], Awaitable[str]]


def _to_json(payload: Any) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False)


class DiscordBridge:
    """Owns the platform collaborator and answers the four MCP requests."""

    def __init__(self, platform: ChatPlatformPort, gate: ReadinessGate):
        self._platform = platform
        self._gate = gate
        self._tools: Dict[str, ToolHandler] = {
            "send_message": self.send_message,
            "read_messages": self.read_messages,
            "list_channels": self.list_channels,
        }

    def _ensure_ready(self):
        if not self._gate.is_ready:
            raise not_ready()

    # -- Discovery --

    def list_resources(self) -> List[types.Resource]:
        return list(RESOURCES)

    def list_tools(self) -> List[types.Tool]:
        return list(TOOLS)

    # -- Resources --

    async def read_resource(self, uri: str) -> str:
        """Return the JSON text for ``uri``; only the guild list is known."""
        self._ensure_ready()
        if uri != GUILDS_URI:
            raise invalid_request(f"Unknown resource: {uri}", {"uri": uri})
        guilds = [normalize_guild(g) for g in self._platform.cached_guilds()]
        return _to_json(guilds)

    # -- Tools --

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]]) -> List[types.TextContent]:
        self._ensure_ready()
        handler = self._tools.get(name)
        if handler is None:
            raise method_not_found(f"Unknown tool: {name}")
        text = await handler(arguments or {})
        return [types.TextContent(type="text", text=text)]

    async def _resolve_text_channel(self, channel_id: str):
        channel = await self._platform.resolve_channel(int(channel_id))
        if channel is None or not isinstance(channel, discord.abc.Messageable):
            raise invalid_request(
                "Invalid channel ID or channel is not text-based",
                {"channelId": channel_id},
            )
        return channel

    async def send_message(self, arguments: Dict[str, Any]) -> str:
        request = parse_arguments(SendMessageRequest, arguments)
        if not request.has_body:
            raise invalid_request(
                "Message must have content or at least one embed",
                {"channelId": request.channel_id},
            )

        with platform_call("send message"):
            channel = await self._resolve_text_channel(request.channel_id)
            message = await channel.send(**build_send_kwargs(request))

        return f"Message sent successfully. ID: {message.id}"

    async def read_messages(self, arguments: Dict[str, Any]) -> str:
        request = parse_arguments(ReadMessagesRequest, arguments)

        with platform_call("read messages"):
            channel = await self._resolve_text_channel(request.channel_id)
            fetched = [m async for m in channel.history(**build_history_kwargs(request))]

        messages = select_messages(
            fetched,
            author_id=request.author_id,
            sort_order=request.sort_order,
        )
        return _to_json([
            normalize_message(
                m,
                include_content=request.include_content,
                include_embeds=request.include_embeds,
                include_reactions=request.include_reactions,
            )
            for m in messages
        ])

    async def list_channels(self, arguments: Dict[str, Any]) -> str:
        request = parse_arguments(ListChannelsRequest, arguments)

        with platform_call("list channels"):
            guild = await self._platform.resolve_guild(int(request.guild_id))
            if guild is None:
                raise invalid_request(f"Unknown guild: {request.guild_id}", {"guildId": request.guild_id})

            channels = filter_channels(
                [*guild.channels, *guild.threads],
                channel_types=request.channel_types,
                category_id=request.category_id,
                include_archived=request.include_archived,
                include_private=request.include_private,
            )
            member = guild.me if request.include_permissions else None
            payload = [
                normalize_channel(
                    c,
                    member=member,
                    include_permissions=request.include_permissions,
                    include_topic=request.include_topic,
                    include_stats=request.include_stats,
                )
                for c in sort_channels(channels, request.sort_by)
            ]

        return _to_json(payload)
