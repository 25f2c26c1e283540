# app/routers/common.py
"""Dependencies and helpers shared by the routers."""

from typing import Any, Callable, Optional

from fastapi import Request
from fastapi.responses import JSONResponse

from app.errors import ValidationError
from app.schemas.envelope import Page, success_response
from app.services.cache_aside import HIT, MISS, CacheAside

MAX_PER_PAGE = 100
MAX_SEARCH_LENGTH = 100


def get_cache_aside(request: Request) -> CacheAside:
    """Per-request accessor over the cache client the lifespan put on app.state."""
    return CacheAside(request.app.state.cache, request_id_of(request))


def request_id_of(request: Request) -> Optional[str]:
    return getattr(request.state, "request_id", None)


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def validate_pagination(page: int, per_page: int, search: Optional[str] = None,
                        max_per_page: int = MAX_PER_PAGE) -> Optional[str]:
    """Raise ValidationError for out-of-range values; returns the trimmed search term."""
    if page < 1:
        raise ValidationError("Invalid pagination parameters", field="page", page=page)
    if per_page < 1 or per_page > max_per_page:
        raise ValidationError("Invalid pagination parameters", field="per_page", per_page=per_page)
    if search is not None:
        search = search.strip()
        if len(search) > MAX_SEARCH_LENGTH:
            raise ValidationError("Search term too long", field="search", searchLength=len(search))
    return search or None


def cached_response(cache: CacheAside, key: str, ttl: int, loader: Callable[[], Any],
                    data_type: str, label: str) -> JSONResponse:
    """Cache-aside read rendered as a success envelope with X-Cache HIT/MISS."""
    data, hit = cache.get_or_load(key, ttl, loader)
    count = f"{len(data)} " if isinstance(data, list) else ""
    source = "from cache" if hit else "successfully"
    return success_response(
        data,
        f"Fetched {count}{label} {source}",
        cache_status=HIT if hit else MISS,
        max_age=ttl,
        data_type=data_type,
    )


def page_payload(items: list, total: int, page: int, per_page: int) -> dict:
    return Page[Any].build(items, page, per_page, total).model_dump(mode="json")
