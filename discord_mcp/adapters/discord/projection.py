"""Transport-safe JSON projections of discord.py guilds, channels and messages."""

from datetime import datetime
from typing import Any, Dict, Optional

from discord_mcp.domain.channel_types import FORUM_TYPES, VOICE_TYPES, is_thread
from discord_mcp.domain.listing import channel_tag, parent_id_of, type_name_of

# Permission flags reported for the bot's own member: (output key, discord.Permissions attr)
PERMISSION_FLAGS = (
    ("viewChannel", "view_channel"),
    ("sendMessages", "send_messages"),
    ("readMessageHistory", "read_message_history"),
    ("manageMessages", "manage_messages"),
    ("manageChannels", "manage_channels"),
    ("embedLinks", "embed_links"),
    ("attachFiles", "attach_files"),
    ("addReactions", "add_reactions"),
    ("mentionEveryone", "mention_everyone"),
    ("connect", "connect"),
    ("speak", "speak"),
)


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def normalize_guild(guild: Any) -> Dict[str, Any]:
    return {
        "id": str(guild.id),
        "name": guild.name,
        "memberCount": guild.member_count,
    }


# ── Messages ────────────────────────────────────────────────


def normalize_message(
    message: Any,
    *,
    include_content: bool = True,
    include_embeds: bool = False,
    include_reactions: bool = False,
) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "id": str(message.id),
        "author": {
            "id": str(message.author.id),
            "username": message.author.name,
            "isBot": message.author.bot,
        },
    }
    if include_content:
        data["content"] = message.content
    data["timestamp"] = _iso(message.created_at)
    data["editedTimestamp"] = _iso(message.edited_at)
    data["attachments"] = [
        {
            "name": a.filename,
            "url": a.url,
            "size": a.size,
            "contentType": a.content_type,
        }
        for a in message.attachments
    ]
    if include_embeds and message.embeds:
        data["embeds"] = [e.to_dict() for e in message.embeds]
    if include_reactions and message.reactions:
        data["reactions"] = [
            {"emoji": str(r.emoji), "count": r.count, "me": r.me}
            for r in message.reactions
        ]
    return data


# ── Channels ────────────────────────────────────────────────


def _parent(channel: Any) -> Optional[Dict[str, Any]]:
    parent_id = parent_id_of(channel)
    if parent_id is None:
        return None
    if is_thread(type_name_of(channel)):
        parent = getattr(channel, "parent", None)
    else:
        parent = getattr(channel, "category", None)
    return {"id": str(parent_id), "name": parent.name if parent is not None else None}


def _permissions(channel: Any, member: Any) -> Dict[str, bool]:
    perms = channel.permissions_for(member)
    return {key: bool(getattr(perms, attr)) for key, attr in PERMISSION_FLAGS}


def _stats(channel: Any) -> Optional[Dict[str, Any]]:
    type_name = type_name_of(channel)
    if type_name in VOICE_TYPES:
        return {"memberCount": len(channel.members)}
    if is_thread(type_name):
        return {
            "messageCount": channel.message_count,
            "memberCount": channel.member_count,
            "archived": channel.archived,
            "locked": channel.locked,
            "archiveTimestamp": _iso(channel.archive_timestamp),
        }
    return None


def _forum_tag(tag: Any) -> Dict[str, Any]:
    return {
        "id": str(tag.id),
        "name": tag.name,
        "moderated": tag.moderated,
        "emoji": str(tag.emoji) if tag.emoji else None,
    }


def normalize_channel(
    channel: Any,
    *,
    member: Any = None,
    include_permissions: bool = False,
    include_topic: bool = True,
    include_stats: bool = False,
) -> Dict[str, Any]:
    """Project a guild channel or thread.

    ``member`` is the bot's own guild member, used for permission flags.
    """
    type_name = type_name_of(channel)
    data: Dict[str, Any] = {
        "id": str(channel.id),
        "name": channel.name,
        "type": channel_tag(channel),
        "createdAt": _iso(channel.created_at),
    }

    position = getattr(channel, "position", None)
    if position is not None:
        data["position"] = position

    parent = _parent(channel)
    if parent is not None:
        data["parent"] = parent

    if include_topic:
        topic = getattr(channel, "topic", None)
        if topic is not None:
            data["topic"] = topic

    if include_permissions and member is not None:
        data["permissions"] = _permissions(channel, member)

    if include_stats:
        stats = _stats(channel)
        if stats is not None:
            data["stats"] = stats

    if type_name in VOICE_TYPES:
        data["bitrate"] = channel.bitrate
        data["userLimit"] = channel.user_limit
    elif type_name in FORUM_TYPES:
        data["defaultAutoArchiveDuration"] = channel.default_auto_archive_duration
        data["availableTags"] = [_forum_tag(t) for t in channel.available_tags]

    return data
