"""Tests for the bridge coordinator — tool and resource handlers end to end."""

import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest
from mcp.shared.exceptions import McpError
from mcp.types import INTERNAL_ERROR, INVALID_REQUEST, METHOD_NOT_FOUND

from conftest import FakePlatform, make_channel, make_message, make_text_channel, make_thread
from discord_mcp.domain.readiness import ReadinessGate
from discord_mcp.server.bridge import DiscordBridge

CT = discord.ChannelType


def _payload(result):
    assert len(result) == 1
    assert result[0].type == "text"
    return result[0].text


def _guild(guild_id=900, channels=(), threads=()):
    return SimpleNamespace(
        id=guild_id,
        name="Guild",
        member_count=12,
        channels=list(channels),
        threads=list(threads),
        me=object(),
    )


@pytest.fixture
def channel():
    return make_text_channel(100, [
        make_message(1, author_id=7, minutes=1),
        make_message(2, author_id=8, minutes=2),
        make_message(3, author_id=7, minutes=3),
        make_message(4, author_id=8, minutes=4),
        make_message(5, author_id=9, minutes=5),
    ])


@pytest.fixture
def platform(channel):
    return FakePlatform(channels={100: channel}, guilds={900: _guild()})


@pytest.fixture
def bridge(platform, ready_gate):
    return DiscordBridge(platform, ready_gate)


class TestReadinessGate:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("name,arguments", [
        ("send_message", {"channelId": "100", "content": "hi"}),
        ("read_messages", {"channelId": "100"}),
        ("list_channels", {"guildId": "900"}),
        ("nonexistent", {}),
    ])
    async def test_tools_refused_before_ready(self, platform, name, arguments):
        bridge = DiscordBridge(platform, ReadinessGate())
        with pytest.raises(McpError) as exc:
            await bridge.call_tool(name, arguments)
        assert exc.value.error.code == INTERNAL_ERROR
        assert exc.value.error.message == "Discord client not ready"
        assert platform.calls == []

    @pytest.mark.asyncio
    async def test_resource_refused_before_ready(self, platform):
        bridge = DiscordBridge(platform, ReadinessGate())
        with pytest.raises(McpError) as exc:
            await bridge.read_resource("discord://guilds")
        assert exc.value.error.code == INTERNAL_ERROR
        assert platform.calls == []

    def test_discovery_needs_no_readiness(self, platform):
        bridge = DiscordBridge(platform, ReadinessGate())
        assert [t.name for t in bridge.list_tools()] == ["send_message", "read_messages", "list_channels"]
        assert [str(r.uri) for r in bridge.list_resources()] == ["discord://guilds"]


class TestReadResource:
    @pytest.mark.asyncio
    async def test_guilds(self, bridge):
        data = json.loads(await bridge.read_resource("discord://guilds"))
        assert data == [{"id": "900", "name": "Guild", "memberCount": 12}]

    @pytest.mark.asyncio
    async def test_unknown_uri(self, bridge, platform):
        with pytest.raises(McpError) as exc:
            await bridge.read_resource("discord://unknown")
        assert exc.value.error.code == INVALID_REQUEST
        assert "discord://unknown" in exc.value.error.message
        assert platform.calls == []


class TestCallTool:
    @pytest.mark.asyncio
    async def test_unknown_tool(self, bridge):
        with pytest.raises(McpError) as exc:
            await bridge.call_tool("delete_guild", {})
        assert exc.value.error.code == METHOD_NOT_FOUND
        assert exc.value.error.message == "Unknown tool: delete_guild"

    @pytest.mark.asyncio
    async def test_missing_arguments_are_invalid_request(self, bridge, platform):
        with pytest.raises(McpError) as exc:
            await bridge.call_tool("read_messages", None)
        assert exc.value.error.code == INVALID_REQUEST
        assert exc.value.error.data == [{"field": "channelId", "message": "Field required"}]
        assert platform.calls == []


class TestSendMessage:
    @pytest.mark.asyncio
    async def test_sends_content(self, bridge, channel, platform):
        text = _payload(await bridge.call_tool("send_message", {"channelId": "100", "content": "hi"}))
        assert text == "Message sent successfully. ID: 555"
        channel.send.assert_awaited_once_with(content="hi")
        assert ("resolve_channel", 100) in platform.calls

    @pytest.mark.asyncio
    async def test_reply_with_embed(self, bridge, channel):
        await bridge.call_tool("send_message", {
            "channelId": "100",
            "replyTo": "42",
            "embeds": [{"title": "Status", "color": 0x00FF00}],
        })
        kwargs = channel.send.await_args.kwargs
        assert kwargs["reference"].message_id == 42
        assert kwargs["embeds"][0].title == "Status"
        assert "content" not in kwargs

    @pytest.mark.asyncio
    async def test_no_content_no_embeds(self, bridge, channel, platform):
        with pytest.raises(McpError) as exc:
            await bridge.call_tool("send_message", {"channelId": "100"})
        assert exc.value.error.code == INVALID_REQUEST
        channel.send.assert_not_awaited()
        assert platform.calls == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("arguments", [
        {"channelId": "C"},
        {"channelId": "C", "content": "hi"},
    ])
    async def test_malformed_channel_id(self, bridge, channel, platform, arguments):
        with pytest.raises(McpError) as exc:
            await bridge.call_tool("send_message", arguments)
        assert exc.value.error.code == INVALID_REQUEST
        assert exc.value.error.data[0]["field"] == "channelId"
        channel.send.assert_not_awaited()
        assert platform.calls == []

    @pytest.mark.asyncio
    async def test_unknown_channel(self, bridge):
        with pytest.raises(McpError) as exc:
            await bridge.call_tool("send_message", {"channelId": "404", "content": "hi"})
        assert exc.value.error.code == INVALID_REQUEST
        assert exc.value.error.message == "Invalid channel ID or channel is not text-based"

    @pytest.mark.asyncio
    async def test_non_text_channel(self, platform, ready_gate):
        platform.channels[200] = MagicMock(spec=discord.CategoryChannel)
        bridge = DiscordBridge(platform, ready_gate)
        with pytest.raises(McpError) as exc:
            await bridge.call_tool("send_message", {"channelId": "200", "content": "hi"})
        assert exc.value.error.code == INVALID_REQUEST

    @pytest.mark.asyncio
    async def test_forbidden_is_internal_error(self, bridge, channel):
        channel.send = AsyncMock(
            side_effect=discord.Forbidden(MagicMock(status=403, reason="Forbidden"), "Missing Permissions")
        )
        with pytest.raises(McpError) as exc:
            await bridge.call_tool("send_message", {"channelId": "100", "content": "hi"})
        assert exc.value.error.code == INTERNAL_ERROR
        assert exc.value.error.message.startswith("Failed to send message: ")
        assert isinstance(exc.value.__cause__, discord.Forbidden)


class TestReadMessages:
    @pytest.mark.asyncio
    async def test_author_filter(self, bridge, platform):
        platform.channels[100] = make_text_channel(100, [
            make_message(1, author_id=7, minutes=1),
            make_message(2, author_id=8, minutes=2),
            make_message(3, author_id=7, minutes=3),
            make_message(4, author_id=8, minutes=4),
            make_message(5, author_id=8, minutes=5),
        ])
        data = json.loads(_payload(await bridge.call_tool(
            "read_messages", {"channelId": "100", "limit": 5, "authorId": "7"},
        )))

        assert [m["id"] for m in data] == ["3", "1"]
        for m in data:
            assert m["content"] == "hello"
            assert "embeds" not in m
            assert "reactions" not in m

    @pytest.mark.asyncio
    async def test_limit_and_history_arguments(self, bridge, channel):
        data = json.loads(_payload(await bridge.call_tool(
            "read_messages", {"channelId": "100", "limit": 3, "before": "99"},
        )))
        assert [m["id"] for m in data] == ["5", "4", "3"]
        call = channel.history_calls[0]
        assert call["limit"] == 3
        assert call["before"].id == 99

    @pytest.mark.asyncio
    async def test_ascending(self, bridge):
        data = json.loads(_payload(await bridge.call_tool(
            "read_messages", {"channelId": "100", "sortOrder": "asc"},
        )))
        assert [m["id"] for m in data] == ["1", "2", "3", "4", "5"]

    @pytest.mark.asyncio
    async def test_history_failure_is_internal_error(self, bridge, channel):
        def broken(**kwargs):
            raise discord.HTTPException(MagicMock(status=500, reason="Server Error"), "boom")

        channel.history = broken
        with pytest.raises(McpError) as exc:
            await bridge.call_tool("read_messages", {"channelId": "100"})
        assert exc.value.error.code == INTERNAL_ERROR
        assert exc.value.error.message.startswith("Failed to read messages: ")


class TestListChannels:
    @pytest.fixture
    def guild(self, platform):
        category = make_channel(10, "Info", CT.category, position=0)
        general = make_channel(20, "general", CT.text, position=1, category=category, topic="chat")
        lobby = make_channel(30, "Lobby", CT.voice, position=0, category=category,
                             members=[object(), object(), object()], bitrate=64000, user_limit=0, topic=None)
        stage = make_channel(31, "Town hall", CT.stage_voice, position=2,
                             members=[], bitrate=64000, user_limit=0, topic="Weekly")
        thread = make_thread(50, "help", general)
        guild = _guild(900, channels=[category, general, lobby, stage], threads=[thread])
        platform.guilds[900] = guild
        return guild

    @pytest.mark.asyncio
    async def test_voice_with_stats(self, bridge, guild):
        data = json.loads(_payload(await bridge.call_tool(
            "list_channels", {"guildId": "900", "channelTypes": ["voice"], "includeStats": True},
        )))
        assert [c["name"] for c in data] == ["Lobby"]
        assert data[0]["type"] == "voice"
        assert data[0]["stats"]["memberCount"] == 3

    @pytest.mark.asyncio
    async def test_topic_kept_by_default(self, bridge, guild):
        data = json.loads(_payload(await bridge.call_tool(
            "list_channels", {"guildId": "900", "channelTypes": ["stage"], "includeStats": True},
        )))
        assert data[0]["topic"] == "Weekly"

    @pytest.mark.asyncio
    async def test_includes_threads_sorted_by_position(self, bridge, guild):
        data = json.loads(_payload(await bridge.call_tool("list_channels", {"guildId": "900"})))
        assert [c["name"] for c in data] == ["Info", "Lobby", "general", "Town hall", "help"]

    @pytest.mark.asyncio
    async def test_permissions_use_bot_member(self, bridge, guild):
        for c in guild.channels:
            c.permissions_for = MagicMock(return_value=discord.Permissions.none())
        data = json.loads(_payload(await bridge.call_tool(
            "list_channels", {"guildId": "900", "channelTypes": ["text"], "includePermissions": True},
        )))
        guild.channels[1].permissions_for.assert_called_once_with(guild.me)
        assert data[0]["permissions"]["viewChannel"] is False

    @pytest.mark.asyncio
    async def test_unknown_guild(self, bridge):
        with pytest.raises(McpError) as exc:
            await bridge.call_tool("list_channels", {"guildId": "1"})
        assert exc.value.error.code == INVALID_REQUEST
        assert exc.value.error.message == "Unknown guild: 1"
