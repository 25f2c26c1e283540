# app/routers/about.py

import logging
from typing import Any, Callable, Dict

from fastapi import APIRouter, Body, Depends, Request
from sqlalchemy.orm import Session

from app.database import get_db
from app.errors import ApiError, ErrorCode, ValidationError
from app.routers.common import cached_response, get_cache_aside, request_id_of
from app.schemas.envelope import success_response
from app.services import cache_keys
from app.services.cache_aside import CacheAside
from app.services.content_service import list_organizational, list_society_coop, list_vision

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["about"])


@router.get("/Organizational")
def get_organizational(request: Request, db: Session = Depends(get_db),
                       cache: CacheAside = Depends(get_cache_aside)):
    """
    GET /api/Organizational
    Organizational chart members ordered by Id, image paths rewritten to
    /Organizational/File/<name>. Cached under organizational:all for an hour.
    """
    return cached_response(
        cache, cache_keys.ORGANIZATIONAL, cache_keys.TTL[cache_keys.ORGANIZATIONAL],
        lambda: list_organizational(db, request_id_of(request)),
        "organizational", "organizational records",
    )


@router.get("/SocietyCoop")
def get_society_coop(request: Request, db: Session = Depends(get_db),
                     cache: CacheAside = Depends(get_cache_aside)):
    return cached_response(
        cache, cache_keys.SOCIETY_COOP, cache_keys.TTL[cache_keys.SOCIETY_COOP],
        lambda: list_society_coop(db, request_id_of(request)),
        "society-coop", "society records",
    )


@router.get("/Vision")
def get_vision(request: Request, db: Session = Depends(get_db), cache: CacheAside = Depends(get_cache_aside)):
    return cached_response(
        cache, cache_keys.VISION, cache_keys.TTL[cache_keys.VISION],
        lambda: list_vision(db, request_id_of(request)),
        "vision", "vision records",
    )


# ---- Cache management --------------------------------------------------------

def _about_loaders(db: Session) -> Dict[str, Callable[[], Any]]:
    return {
        cache_keys.ORGANIZATIONAL: lambda: list_organizational(db),
        cache_keys.SOCIETY_COOP: lambda: list_society_coop(db),
        cache_keys.VISION: lambda: list_vision(db),
    }


def _warm_up(cache: CacheAside, db: Session) -> Dict[str, Any]:
    """Populate missing About keys by running their loaders directly."""
    result: Dict[str, Any] = {"success": True, "warmedUp": [], "failed": []}
    for key, loader in _about_loaders(db).items():
        if cache.read(key) is not None:
            logger.info("cache already exists for %s, skipping warm-up", key)
            result["warmedUp"].append(key)
            continue
        try:
            data = loader()
        except Exception:
            logger.exception("cache warm-up failed for %s", key)
            data = None
        # a loaded value that never reached the cache is not warmed up
        if data is None or not cache.write(key, data, cache_keys.TTL[key]):
            result["failed"].append(key)
            result["success"] = False
            continue
        result["warmedUp"].append(key)
    return result


def _action_response(action: str, result: Dict[str, Any]):
    body = {"action": action, "result": result}
    if not result.get("success", True):
        raise ApiError(f"Cache {action} failed", body, code=ErrorCode.CACHE_ERROR)
    return success_response(body, f"Cache {action} completed")


@router.get("/cache")
def get_cache_status(cache: CacheAside = Depends(get_cache_aside)):
    """GET /api/cache: existence, TTL and size of every About cache key."""
    return success_response({"caches": cache.status(cache_keys.ABOUT_CACHE_KEYS), "keys": cache_keys.ABOUT_CACHE_KEYS})


@router.post("/cache")
def manage_cache(payload: Any = Body(None), db: Session = Depends(get_db),
                 cache: CacheAside = Depends(get_cache_aside)):
    """
    POST /api/cache {"action": "invalidate" | "warmup" | "status"}
    Any other action is a 400 listing the valid ones.
    """
    action = payload.get("action") if isinstance(payload, dict) else None
    if action == "invalidate":
        return _action_response(action, cache.invalidate(cache_keys.ABOUT_CACHE_KEYS.values()))
    if action == "warmup":
        return _action_response(action, _warm_up(cache, db))
    if action == "status":
        return _action_response(action, cache.status(cache_keys.ABOUT_CACHE_KEYS))
    raise ValidationError("Invalid action", field="action", validActions=["invalidate", "warmup", "status"])


@router.delete("/cache")
def delete_caches(cache: CacheAside = Depends(get_cache_aside)):
    return _action_response("delete_all", cache.invalidate(cache_keys.ABOUT_CACHE_KEYS.values()))
