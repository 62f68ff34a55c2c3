"""Discord MCP — exposes a Discord bot identity as MCP tools and resources."""

from discord_mcp.config import __version__, AppConfig, ConfigError

__all__ = [
    "__version__",
    "AppConfig",
    "ConfigError",
]
