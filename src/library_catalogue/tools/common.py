"""
Response helpers shared by the catalogue tools.

Tools answer with a human-readable text block plus structured ``data`` on
success, or an ``isError`` response with a one-line message. Rejections
such as a duplicate ISBN or an unavailable book are error responses, never
exceptions escaping the handler.
"""

import logging
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


def text_result(text: str, data: dict[str, Any] | None = None) -> dict[str, Any]:
    """Build a successful tool response."""
    result: dict[str, Any] = {"content": [{"type": "text", "text": text}]}
    if data is not None:
        result["data"] = data
    return result


def error_result(text: str) -> dict[str, Any]:
    """Build an error tool response."""
    return {"isError": True, "content": [{"type": "text", "text": text}]}


def parse_arguments(
    schema: type[T], arguments: dict[str, Any], tool_name: str
) -> T | dict[str, Any]:
    """
    Validate raw tool arguments against ``schema``.

    Returns:
        The parsed input, or an error response when validation fails
    """
    try:
        return schema.model_validate(arguments)
    except ValidationError as e:
        logger.warning("Invalid %s parameters: %s", tool_name, e)
        return error_result(f"Invalid {tool_name} parameters: {e}")
