# billing/api/v1/envelope.py
"""
Response envelope for the GST endpoints.

Success and failure share one shape so clients branch on ``status`` only:
``{"status": "ok" | "error", "data": ..., "message": ..., "errors": [...]}``.
Decimals in ``data`` are serialized as strings.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    status: str = "ok"
    data: T | None = None
    message: str | None = None
    errors: list[dict[str, Any]] | None = None


def ok(data: Any = None, message: str | None = None) -> dict:
    return ApiResponse(status="ok", data=data, message=message).model_dump(mode="json")


def error(message: str, errors: list[dict[str, Any]] | None = None) -> dict:
    return ApiResponse(status="error", message=message, errors=errors).model_dump(mode="json")


def field_errors(details: Iterable[Mapping[str, Any]]) -> list[dict[str, Any]]:
    """
    Reduce pydantic/FastAPI error details to ``{field, message, type}``.

    ``input`` and ``ctx`` are dropped: they can hold the rejected payload or
    exception objects that do not serialize.
    """
    return [
        {
            "field": ".".join(str(part) for part in d.get("loc", ())),
            "message": d.get("msg", ""),
            "type": d.get("type", ""),
        }
        for d in details
    ]
