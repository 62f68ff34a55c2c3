"""Validate raw tool ``arguments`` into the inbound request models.

Every offending field is reported at once as a single invalid-request
error; ``data`` carries the per-field breakdown.
"""

from typing import Any, Dict, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from discord_mcp.server.errors import invalid_request

RequestT = TypeVar("RequestT", bound=BaseModel)


def _field_path(loc) -> str:
    return ".".join(str(part) for part in loc) or "arguments"


def parse_arguments(model: Type[RequestT], arguments: Optional[Dict[str, Any]]) -> RequestT:
    """Validate a raw arguments bag into ``model`` or raise invalid-request."""
    try:
        return model.model_validate(arguments or {})
    except ValidationError as e:
        problems = [
            {"field": _field_path(err["loc"]), "message": err["msg"]}
            for err in e.errors()
        ]
        summary = "; ".join(f"{p['field']}: {p['message']}" for p in problems)
        raise invalid_request(f"Invalid arguments: {summary}", problems) from None
