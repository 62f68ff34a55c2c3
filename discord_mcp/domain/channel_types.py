"""Channel type table shared by listing filters and channel projections.

Keys are the tags accepted in ``channelTypes`` and emitted as a channel's
``type``; values are the discord.py ``ChannelType`` member names they cover.
Pure Python, no framework dependencies.
"""

from typing import Dict, FrozenSet

CHANNEL_TYPE_TABLE: Dict[str, FrozenSet[str]] = {
    "text": frozenset({"text"}),
    "voice": frozenset({"voice"}),
    "category": frozenset({"category"}),
    "news": frozenset({"news"}),
    "stage": frozenset({"stage_voice"}),
    "forum": frozenset({"forum"}),
    "media": frozenset({"media"}),
    "thread": frozenset({"public_thread", "private_thread", "news_thread"}),
}

CHANNEL_TAGS = tuple(CHANNEL_TYPE_TABLE)

THREAD_TYPES = CHANNEL_TYPE_TABLE["thread"]
PRIVATE_THREAD = "private_thread"
VOICE_TYPES = frozenset({"voice", "stage_voice"})
FORUM_TYPES = frozenset({"forum", "media"})

_TAG_BY_TYPE: Dict[str, str] = {
    type_name: tag
    for tag, type_names in CHANNEL_TYPE_TABLE.items()
    for type_name in type_names
}


def resolve_tag(type_name: str) -> str:
    """Map a discord.py channel type name to its output tag."""
    tag = _TAG_BY_TYPE.get(type_name)
    if tag is not None:
        return tag
    if is_thread(type_name):
        return "thread"
    return "unknown"


def is_thread(type_name: str) -> bool:
    return type_name in THREAD_TYPES or type_name.endswith("_thread")

