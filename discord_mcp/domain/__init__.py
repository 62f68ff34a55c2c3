"""Domain layer — pure Python, no framework dependencies."""

from discord_mcp.domain.channel_types import (
    CHANNEL_TAGS,
    CHANNEL_TYPE_TABLE,
    is_thread,
    resolve_tag,
)
from discord_mcp.domain.listing import (
    SORT_KEYS,
    SORT_ORDERS,
    channel_passes,
    filter_channels,
    parent_id_of,
    select_messages,
    sort_channels,
)
from discord_mcp.domain.readiness import ReadinessGate

__all__ = [
    "CHANNEL_TAGS",
    "CHANNEL_TYPE_TABLE",
    "is_thread",
    "resolve_tag",
    "SORT_KEYS",
    "SORT_ORDERS",
    "channel_passes",
    "filter_channels",
    "parent_id_of",
    "select_messages",
    "sort_channels",
    "ReadinessGate",
]
