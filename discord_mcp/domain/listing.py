"""Filtering and ordering for channel and message listings.

Pure Python, no framework dependencies. Channels and messages are
duck-typed: anything exposing the discord.py attribute names works.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any, Iterable, List, Optional, Sequence

from discord_mcp.domain.channel_types import PRIVATE_THREAD, is_thread, resolve_tag

SORT_KEYS = ("name", "position", "created")
SORT_ORDERS = ("asc", "desc")

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def type_name_of(channel: Any) -> str:
    return channel.type.name


def channel_tag(channel: Any) -> str:
    return resolve_tag(type_name_of(channel))


def parent_id_of(channel: Any) -> Optional[int]:
    """Parent linkage: the parent channel for threads, the category otherwise."""
    if is_thread(type_name_of(channel)):
        return getattr(channel, "parent_id", None)
    return getattr(channel, "category_id", None)


def channel_passes(
    channel: Any,
    *,
    channel_types: Optional[Sequence[str]] = None,
    category_id: Optional[str] = None,
    include_archived: bool = False,
    include_private: bool = False,
) -> bool:
    """Return True when the channel passes every active filter."""
    type_name = type_name_of(channel)

    if channel_types and resolve_tag(type_name) not in channel_types:
        return False

    # Channels without a parent are not excluded by the category filter
    if category_id is not None:
        parent_id = parent_id_of(channel)
        if parent_id is not None and str(parent_id) != category_id:
            return False

    if is_thread(type_name):
        if getattr(channel, "archived", False) and not include_archived:
            return False
        if type_name == PRIVATE_THREAD and not include_private:
            return False

    return True


def filter_channels(channels: Iterable[Any], **filters) -> List[Any]:
    return [c for c in channels if channel_passes(c, **filters)]


def sort_channels(channels: Iterable[Any], sort_by: str = "position") -> List[Any]:
    """Stable sort by case-insensitive name, creation time, or position.

    Channels without a position sort after every channel that has one.
    """
    if sort_by == "name":
        return sorted(channels, key=lambda c: (c.name or "").casefold())
    if sort_by == "created":
        return sorted(channels, key=lambda c: c.created_at or _EPOCH)
    if sort_by == "position":
        return sorted(channels, key=_position_key)
    raise ValueError(f"Unknown sort key: {sort_by!r}")


def _position_key(channel: Any) -> float:
    position = getattr(channel, "position", None)
    return math.inf if position is None else position


def select_messages(
    messages: Iterable[Any],
    *,
    author_id: Optional[str] = None,
    sort_order: str = "desc",
) -> List[Any]:
    """Order fetched messages newest-first, drop other authors, reverse for asc.

    Never backfills: filtering may return fewer messages than were fetched.
    """
    ordered = sorted(messages, key=lambda m: (m.created_at, m.id), reverse=True)
    if author_id is not None:
        ordered = [m for m in ordered if str(m.author.id) == author_id]
    if sort_order == "asc":
        ordered.reverse()
    return ordered
