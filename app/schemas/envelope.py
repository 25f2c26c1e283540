# app/schemas/envelope.py

from datetime import datetime, timezone
from typing import Any, Dict, Generic, List, Literal, Optional, TypeVar

from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.errors import ApiError

T = TypeVar("T")


def utc_now_iso() -> str:
    # UTC with millisecond precision and 'Z' suffix
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class SuccessEnvelope(BaseModel, Generic[T]):
    success: Literal[True] = True
    data: T
    timestamp: str
    message: Optional[str] = None


class ErrorEnvelope(BaseModel):
    success: Literal[False] = False
    error: str
    code: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    timestamp: str


class Page(BaseModel, Generic[T]):
    """Pagination payload carried inside a success envelope's `data`."""
    page: int
    per_page: int
    total: int
    pageCount: int
    data: List[T]

    @classmethod
    def build(cls, items: List[Any], page: int, per_page: int, total: int) -> "Page":
        page_count = -(-total // per_page) if per_page else 0  # ceil division
        return cls(page=page, per_page=per_page, total=total, pageCount=page_count, data=items)


def cache_headers(cache_status: str, max_age: int = 3600, data_type: Optional[str] = None) -> Dict[str, str]:
    headers = {
        "Cache-Control": f"public, s-maxage={max_age}, stale-while-revalidate=86400",
        "X-Cache": cache_status,
        "X-Cache-Time": utc_now_iso(),
    }
    if data_type:
        headers["X-Data-Type"] = data_type
    return headers


def success_response(
    data: Any,
    message: Optional[str] = None,
    *,
    status_code: int = 200,
    cache_status: Optional[str] = None,
    max_age: int = 3600,
    data_type: Optional[str] = None,
) -> JSONResponse:
    """
    Wrap a payload in the success envelope.
    When `cache_status` is given ("HIT"/"MISS") the Cache-Control/X-Cache pair is attached.
    """
    body = SuccessEnvelope[Any](data=data, timestamp=utc_now_iso(), message=message).model_dump(mode="json")
    if body["message"] is None:
        body.pop("message")
    headers = cache_headers(cache_status, max_age, data_type) if cache_status else None
    return JSONResponse(status_code=status_code, content=body, headers=headers)


def error_response(error: ApiError) -> JSONResponse:
    body = ErrorEnvelope(error=error.message, code=error.code, details=error.details, timestamp=utc_now_iso())
    return JSONResponse(status_code=error.status_code, content=body.model_dump(mode="json", exclude_none=True))
