"""Port interfaces (Hexagonal Architecture)."""

from discord_mcp.ports.inbound import (
    ListChannelsRequest,
    ReadMessagesRequest,
    SendMessageRequest,
)
from discord_mcp.ports.outbound import ChatPlatformPort

__all__ = [
    "ListChannelsRequest",
    "ReadMessagesRequest",
    "SendMessageRequest",
    "ChatPlatformPort",
]
