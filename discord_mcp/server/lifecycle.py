"""Platform login coordination: start the session, wait for readiness."""

from __future__ import annotations

import asyncio
import sys

from discord_mcp.domain.readiness import ReadinessGate
from discord_mcp.ports.outbound import ChatPlatformPort
from discord_mcp.server.errors import StartupError


def _log(msg: str):
    print(msg, file=sys.stderr)


async def connect_platform(
    platform: ChatPlatformPort,
    token: str,
    gate: ReadinessGate,
) -> asyncio.Task:
    """Start the platform session and suspend until it reports ready.

    Returns the running session task. Raises StartupError if the session
    ends (login rejected, connection failure) before the gate opens.
    """
    session = asyncio.create_task(platform.start(token), name="discord-session")
    ready = asyncio.create_task(gate.wait(), name="discord-ready")

    done, _ = await asyncio.wait({session, ready}, return_when=asyncio.FIRST_COMPLETED)
    if ready in done:
        session.add_done_callback(_report_session_end)
        return session

    ready.cancel()
    error = None if session.cancelled() else session.exception()
    if error is not None:
        raise StartupError(f"{type(error).__name__}: {error}") from error
    raise StartupError("Discord session ended before it became ready")


def _report_session_end(task: asyncio.Task) -> None:
    if task.cancelled():
        return
    error = task.exception()
    if error is not None:
        _log(f"Discord session ended: {type(error).__name__}: {error}")
