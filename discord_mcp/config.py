"""Configuration loaded from the environment (and an optional .env file)."""

__version__ = "0.2.0"

import logging
import os
import sys
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

_stderr_print = lambda *a, **kw: print(*a, **kw, file=sys.stderr)

SERVER_NAME = "discord-mcp"
TOKEN_ENV = "DISCORD_TOKEN"

SUPPORTED_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(Exception):
    """Raised when required configuration is missing."""


def _read_log_level() -> str:
    level = os.getenv("DISCORD_MCP_LOG_LEVEL", "WARNING").strip().upper()
    if level not in SUPPORTED_LOG_LEVELS:
        _stderr_print(f"Unsupported DISCORD_MCP_LOG_LEVEL={level!r}, falling back to 'WARNING'")
        return "WARNING"
    return level


@dataclass
class AppConfig:
    """Typed process configuration."""

    discord_token: str = ""
    server_name: str = SERVER_NAME
    server_version: str = __version__
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create AppConfig from environment variables."""
        return cls(
            discord_token=os.getenv(TOKEN_ENV, "").strip(),
            log_level=_read_log_level(),
        )

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)

    def require_token(self) -> str:
        """Return the bot token, or raise ConfigError when it is not set."""
        if not self.discord_token.strip():
            raise ConfigError(f"{TOKEN_ENV} environment variable is required")
        return self.discord_token
