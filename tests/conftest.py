"""Shared fakes: a ChatPlatformPort double plus channel/message factories."""

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from discord_mcp.domain.readiness import ReadinessGate

BASE_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class FakePlatform:
    """In-memory ChatPlatformPort that records every call."""

    def __init__(self, channels=None, guilds=None):
        self.channels = dict(channels or {})
        self.guilds = dict(guilds or {})
        self.calls = []

    async def start(self, token):
        self.calls.append(("start", token))

    async def resolve_channel(self, channel_id):
        self.calls.append(("resolve_channel", channel_id))
        return self.channels.get(channel_id)

    async def resolve_guild(self, guild_id):
        self.calls.append(("resolve_guild", guild_id))
        return self.guilds.get(guild_id)

    def cached_guilds(self):
        self.calls.append(("cached_guilds",))
        return list(self.guilds.values())


async def _aiter(items):
    for item in items:
        yield item


def make_message(message_id, author_id=1, *, minutes=0, content="hello", author_name="user",
                 bot=False, embeds=None, reactions=None, attachments=None, edited_at=None):
    return SimpleNamespace(
        id=message_id,
        author=SimpleNamespace(id=author_id, name=author_name, bot=bot),
        content=content,
        created_at=BASE_TIME + timedelta(minutes=minutes),
        edited_at=edited_at,
        attachments=attachments or [],
        embeds=embeds or [],
        reactions=reactions or [],
    )


def make_text_channel(channel_id=100, messages=()):
    """A Messageable channel whose history() yields ``messages`` newest-first."""
    channel = MagicMock(spec=discord.TextChannel)
    channel.id = channel_id
    channel.send = AsyncMock(return_value=SimpleNamespace(id=555))
    channel.history_calls = []
    newest_first = sorted(messages, key=lambda m: m.created_at, reverse=True)

    def history(**kwargs):
        channel.history_calls.append(kwargs)
        return _aiter(newest_first[: kwargs.get("limit", 100)])

    channel.history = history
    return channel


def make_channel(channel_id, name, channel_type=discord.ChannelType.text, *, position=None,
                 minutes=0, category=None, **extra):
    """A duck-typed guild channel (or thread, via ``parent_id``/``archived`` extras)."""
    return SimpleNamespace(
        id=channel_id,
        name=name,
        type=channel_type,
        position=position,
        created_at=BASE_TIME + timedelta(minutes=minutes),
        category_id=category.id if category is not None else None,
        category=category,
        **extra,
    )


def make_thread(channel_id, name, parent, channel_type=discord.ChannelType.public_thread, *,
                archived=False, minutes=0, **extra):
    fields = dict(
        id=channel_id,
        name=name,
        type=channel_type,
        created_at=BASE_TIME + timedelta(minutes=minutes),
        parent_id=parent.id,
        parent=parent,
        archived=archived,
        locked=False,
        message_count=3,
        member_count=2,
        archive_timestamp=BASE_TIME,
    )
    fields.update(extra)
    return SimpleNamespace(**fields)


@pytest.fixture
def ready_gate():
    gate = ReadinessGate()
    gate.mark_ready()
    return gate
