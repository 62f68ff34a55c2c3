"""Discord MCP stdio server — low-level MCP Server entrypoint."""

import asyncio
import builtins
import sys
from typing import List

import discord
from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server

from discord_mcp.adapters.discord.client import DiscordClient
from discord_mcp.config import AppConfig, ConfigError
from discord_mcp.domain.readiness import ReadinessGate
from discord_mcp.server.bridge import DiscordBridge
from discord_mcp.server.catalog import JSON_MIME_TYPE
from discord_mcp.server.errors import StartupError
from discord_mcp.server.lifecycle import connect_platform

_original_print = builtins.print


def _log(msg: str):
    print(msg, file=sys.stderr)


def _safe_print(*args, **kwargs):
    kwargs.setdefault("file", sys.stderr)
    _original_print(*args, **kwargs)


def protect_stdout():
    """Route bare print() calls to stderr.

    MCP JSON-RPC uses stdout exclusively; the MCP library writes through
    its own transport, not print().
    """
    builtins.print = _safe_print


def build_server(bridge: DiscordBridge, config: AppConfig) -> Server:
    """Create the MCP server and register the four request handlers."""
    server = Server(config.server_name, version=config.server_version)

    @server.list_resources()
    async def list_resources() -> List[types.Resource]:
        return bridge.list_resources()

    @server.read_resource()
    async def read_resource(uri) -> List[ReadResourceContents]:
        text = await bridge.read_resource(str(uri))
        return [ReadResourceContents(content=text, mime_type=JSON_MIME_TYPE)]

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return bridge.list_tools()

    # Registered directly so McpErrors reach the client as classified
    # JSON-RPC errors instead of isError tool results.
    async def call_tool(req: types.CallToolRequest) -> types.ServerResult:
        content = await bridge.call_tool(req.params.name, req.params.arguments)
        return types.ServerResult(types.CallToolResult(content=content, isError=False))

    server.request_handlers[types.CallToolRequest] = call_tool
    return server


async def serve(config: AppConfig) -> None:
    """Log in, wait for readiness, then serve MCP over stdio until EOF."""
    gate = ReadinessGate()
    client = DiscordClient(gate)
    bridge = DiscordBridge(client, gate)
    server = build_server(bridge, config)

    try:
        session = await connect_platform(client, config.require_token(), gate)
    except StartupError:
        await client.close()
        raise

    try:
        async with stdio_server() as (read_stream, write_stream):
            _log("Discord MCP server running on stdio")
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
            )
    finally:
        await client.close()
        if not session.done():
            session.cancel()


def main():
    """Run the Discord MCP server via stdio transport."""
    protect_stdout()
    config = AppConfig.from_env()

    try:
        config.require_token()
    except ConfigError as e:
        _log(str(e))
        sys.exit(1)

    discord.utils.setup_logging(level=config.log_level_value)

    try:
        asyncio.run(serve(config))
    except StartupError as e:
        _log(f"Failed to connect to Discord: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
