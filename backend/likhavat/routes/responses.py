"""Shared OpenAPI error declarations and message helpers for the routers."""

from typing import Any, Dict, Optional, Union

from likhavat.schemas.common import ErrorResponse


def error_response(description: str) -> Dict[str, Any]:
    return {"description": description, "model": ErrorResponse}


AUTH_ERRORS: Dict[Union[int, str], Dict[str, Any]] = {
    400: error_response("Invalid input"),
    401: error_response("Missing, invalid or expired bearer token"),
    500: error_response("Server error"),
}

OWNED_RECORD_ERRORS: Dict[Union[int, str], Dict[str, Any]] = {
    **AUTH_ERRORS,
    404: error_response("No such record for this user"),
}


def found(count: int, singular: str, plural: Optional[str] = None) -> str:
    noun = singular if count == 1 else (plural or singular + "s")
    return f"Found {count} {noun}"
