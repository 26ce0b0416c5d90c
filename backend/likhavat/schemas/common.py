"""
Kacchi Likhavat Backend — Shared Schema Building Blocks
========================================================

What:  The camelCase base model, the response envelope and date helpers
       used by every other schema module.

Wire format:
    Python attributes are snake_case; JSON is camelCase. `CamelModel`
    accepts both spellings on input and FastAPI serializes by alias, so
    `room_id` travels as `roomId`.

Envelope:
    Every successful response is
        {"success": true, "message": "...", "data": ..., "count": ...}
    with `data` and `count` omitted when not applicable. Errors use
    `ErrorResponse` (see main.py handlers).
"""

from datetime import date, datetime, time, timezone
from typing import Any, Dict, Generic, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(CamelModel, Generic[T]):
    """Standard success envelope."""
    success: bool = Field(default=True, description="Always true for 2xx responses")
    message: str = Field(description="Human-readable summary of the outcome")
    data: Optional[T] = Field(default=None, description="Payload, when the endpoint returns one")
    count: Optional[int] = Field(default=None, description="Number of items in `data` for list endpoints")


class ErrorResponse(CamelModel):
    """
    Standardized error envelope for all API errors.

    Example:
        {
            "success": false,
            "message": "Note not found",
            "error": "not_found",
            "requestId": "a1b2c3d4"
        }
    """
    success: bool = Field(default=False)
    message: str = Field(description="Human-readable error description")
    error: str = Field(description="Machine-readable error code")
    details: Optional[Dict[str, Any]] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class DeletedRecord(CamelModel):
    """Identifies the record removed by a DELETE call."""
    id: Any
    title: Optional[str] = None


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer probes."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")


# ══════════════════════════════════════════════════════════════════════════
# Date helpers
# ══════════════════════════════════════════════════════════════════════════

def as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC; aware ones are converted to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_datetime(value: Union[str, date, datetime], end_of_day: bool = False) -> datetime:
    """
    Parse an ISO 8601 date or datetime into an aware UTC datetime.

    A bare date ("2024-01-15") becomes midnight of that day, or the last
    microsecond of it when `end_of_day` is set, so that inclusive `to`
    filters cover the whole day.

    Raises:
        ValueError: not a date, datetime or ISO 8601 string
    """
    if isinstance(value, datetime):
        return as_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.max if end_of_day else time.min, tzinfo=timezone.utc)
    if not isinstance(value, str):
        raise ValueError(f"Expected an ISO 8601 date string, got {type(value).__name__}")

    text = value.strip()
    if len(text) == 10:
        return parse_datetime(date.fromisoformat(text), end_of_day=end_of_day)
    # fromisoformat only understands a trailing "Z" from Python 3.11 onward
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return as_utc(datetime.fromisoformat(text))
