# gst_invoice/api/v1/envelope.py
"""
Response envelope for the JSON v1 endpoints.

    {
        "status": "ok" | "error",
        "data": <payload>,
        "message": <optional string>
    }

File downloads are streamed as-is and not wrapped.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    status: str = "ok"
    data: T | None = None
    message: str | None = None


def ok(data: Any = None, message: str | None = None) -> dict:
    """Build a success response dict."""
    return ApiResponse(status="ok", data=data, message=message).model_dump()
