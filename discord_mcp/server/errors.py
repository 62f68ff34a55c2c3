"""Protocol error classifications raised by the bridge handlers."""

import sys
from contextlib import contextmanager
from typing import Any, Iterator, Optional

from mcp.shared.exceptions import McpError
from mcp.types import (
    INTERNAL_ERROR,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    ErrorData,
)

NOT_READY_MESSAGE = "Discord client not ready"


def _log(msg: str):
    print(msg, file=sys.stderr)


class StartupError(Exception):
    """The platform session failed before it became ready."""


def invalid_request(message: str, data: Optional[Any] = None) -> McpError:
    return McpError(ErrorData(code=INVALID_REQUEST, message=message, data=data))


def internal_error(message: str) -> McpError:
    return McpError(ErrorData(code=INTERNAL_ERROR, message=message))


def method_not_found(message: str) -> McpError:
    return McpError(ErrorData(code=METHOD_NOT_FOUND, message=message))


def not_ready() -> McpError:
    return internal_error(NOT_READY_MESSAGE)


@contextmanager
def platform_call(action: str) -> Iterator[None]:
    """Classify any platform failure inside the block as an internal error.

    Already-classified McpErrors pass through untouched.
    """
    try:
        yield
    except McpError:
        raise
    except Exception as e:
        _log(f"Failed to {action}: {type(e).__name__}: {e}")
        raise internal_error(f"Failed to {action}: {e}") from e
