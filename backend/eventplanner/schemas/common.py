"""
Response envelope shared by every endpoint:
{success, data?, message?, errors?, count?}
"""

from typing import Any, Iterable, Optional

from pydantic import BaseModel


def serialize(schema: type[BaseModel], obj: Any) -> dict:
    """Dump an ORM object (or plain dict) through an output schema as camelCase JSON."""
    return schema.model_validate(obj).model_dump(by_alias=True, mode="json")


def serialize_many(schema: type[BaseModel], objs: Iterable[Any]) -> list[dict]:
    return [serialize(schema, obj) for obj in objs]


def envelope(
    data: Any = None,
    message: Optional[str] = None,
    count: Optional[int] = None,
    errors: Optional[list[str]] = None,
    success: bool = True,
    **extra: Any,
) -> dict:
    body: dict[str, Any] = {"success": success}
    if message is not None:
        body["message"] = message
    if count is not None:
        body["count"] = count
    if data is not None:
        body["data"] = data
    if errors is not None:
        body["errors"] = errors
    body.update(extra)
    return body
