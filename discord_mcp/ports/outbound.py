"""Outbound ports — interfaces for the chat platform collaborator."""

from typing import Any, List, Optional, Protocol, runtime_checkable


@runtime_checkable
class ChatPlatformPort(Protocol):
    """Interface the bridge needs from an authenticated chat client.

    ``resolve_*`` return None when the id does not exist; any other
    failure is raised as the platform's own exception.
    """

    async def start(self, token: str) -> None: ...

    async def resolve_channel(self, channel_id: int) -> Optional[Any]: ...

    async def resolve_guild(self, guild_id: int) -> Optional[Any]: ...

    def cached_guilds(self) -> List[Any]: ...
