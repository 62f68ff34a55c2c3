"""Inbound port — typed, fully-defaulted tool arguments.

Each tool's raw ``arguments`` bag is validated into one of these models
before anything touches the chat platform.
"""

from datetime import datetime
from typing import Annotated, Any, List, Literal, Optional

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    StringConstraints,
)
from pydantic.alias_generators import to_camel

from discord_mcp.domain.channel_types import CHANNEL_TAGS
from discord_mcp.domain.listing import SORT_KEYS, SORT_ORDERS


def _int_to_str(value: Any) -> Any:
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


Snowflake = Annotated[
    str,
    BeforeValidator(_int_to_str),
    StringConstraints(strip_whitespace=True, pattern=r"^\d{1,20}$"),
]

ChannelTag = Literal[CHANNEL_TAGS]  # type: ignore[valid-type]
SortKey = Literal[SORT_KEYS]  # type: ignore[valid-type]
SortOrder = Literal[SORT_ORDERS]  # type: ignore[valid-type]


class _Arguments(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── send_message ────────────────────────────────────────────


class EmbedField(_Arguments):
    name: str = Field(min_length=1, max_length=256)
    value: str = Field(min_length=1, max_length=1024)
    inline: bool = False


class EmbedAuthor(_Arguments):
    name: str = Field(min_length=1, max_length=256)
    url: Optional[str] = None
    icon_url: Optional[str] = None


class EmbedImage(_Arguments):
    url: str = Field(min_length=1)


class EmbedFooter(_Arguments):
    text: str = Field(min_length=1, max_length=2048)
    icon_url: Optional[str] = None


class EmbedInput(_Arguments):
    title: Optional[str] = Field(None, max_length=256)
    description: Optional[str] = Field(None, max_length=4096)
    url: Optional[str] = None
    color: Optional[int] = Field(None, ge=0, le=0xFFFFFF)
    fields: List[EmbedField] = Field(default_factory=list, max_length=25)
    author: Optional[EmbedAuthor] = None
    thumbnail: Optional[EmbedImage] = None
    image: Optional[EmbedImage] = None
    footer: Optional[EmbedFooter] = None
    timestamp: Optional[datetime] = None


class AllowedMentionsInput(_Arguments):
    parse: List[Literal["roles", "users", "everyone"]] = Field(default_factory=list)
    users: List[Snowflake] = Field(default_factory=list, max_length=100)
    roles: List[Snowflake] = Field(default_factory=list, max_length=100)
    replied_user: bool = True


class SendMessageRequest(_Arguments):
    channel_id: Snowflake
    content: Optional[str] = Field(None, max_length=2000)
    reply_to: Optional[Snowflake] = None
    tts: bool = False
    suppress_embeds: bool = False
    suppress_notifications: bool = False
    embeds: List[EmbedInput] = Field(default_factory=list, max_length=10)
    allowed_mentions: Optional[AllowedMentionsInput] = None

    @property
    def has_body(self) -> bool:
        """A message needs visible content or at least one embed."""
        return bool(self.content) or bool(self.embeds)


# ── read_messages ───────────────────────────────────────────


class ReadMessagesRequest(_Arguments):
    channel_id: Snowflake
    limit: int = Field(10, ge=1, le=100)
    before: Optional[Snowflake] = None
    after: Optional[Snowflake] = None
    around: Optional[Snowflake] = None
    author_id: Optional[Snowflake] = None
    include_content: bool = True
    include_embeds: bool = False
    include_reactions: bool = False
    sort_order: SortOrder = "desc"


# ── list_channels ───────────────────────────────────────────


class ListChannelsRequest(_Arguments):
    guild_id: Snowflake
    channel_types: Optional[List[ChannelTag]] = None
    include_archived: bool = False
    include_private: bool = False
    category_id: Optional[Snowflake] = None
    sort_by: SortKey = "position"
    include_permissions: bool = False
    include_topic: bool = True
    include_stats: bool = False
