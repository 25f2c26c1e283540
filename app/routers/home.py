# app/routers/home.py

from typing import Optional

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.database import get_db
from app.routers.common import (
    cached_response, get_cache_aside, page_payload, request_id_of, validate_pagination,
)
from app.schemas.envelope import success_response
from app.services import cache_keys
from app.services.cache_aside import CacheAside
from app.services.content_service import (
    get_album_images, list_dialog_boxes, list_interest, list_news, list_photo_covers, list_photos,
    list_slides, list_status_home, list_videos,
)

router = APIRouter(prefix="/api", tags=["home"])


@router.get("/News")
def get_news(request: Request, all: bool = False, page: int = 1, per_page: int = 10,
             search: Optional[str] = None, db: Session = Depends(get_db),
             cache: CacheAside = Depends(get_cache_aside)):
    """
    GET /api/News
    - all=true: every item as a plain list; cached under news:list unless searching
    - otherwise one page: {page, per_page, total, pageCount, data}
    Status codes: 200, 400 (page < 1, per_page outside 1..100, search over 100 chars)
    """
    search = validate_pagination(page, per_page, search)
    request_id = request_id_of(request)
    ttl = cache_keys.TTL[cache_keys.NEWS]

    if all and not search:
        return cached_response(cache, cache_keys.NEWS, ttl, lambda: list_news(db, request_id=request_id),
                               "news", "news records")
    if all:
        items = list_news(db, search=search, request_id=request_id)
        return success_response(items, f"Fetched {len(items)} news records",
                                cache_status="MISS", max_age=ttl, data_type="news")

    items, total = list_news(db, search=search, page=page, per_page=per_page, request_id=request_id)
    return success_response(page_payload(items, total, page, per_page),
                            f"Fetched page {page} of news records",
                            cache_status="MISS", max_age=ttl, data_type="news")


@router.get("/Photos")
def get_photos(all: bool = False, page: int = 1, per_page: int = 10, search: Optional[str] = None,
               db: Session = Depends(get_db), cache: CacheAside = Depends(get_cache_aside)):
    search = validate_pagination(page, per_page, search)
    ttl = cache_keys.TTL[cache_keys.PHOTOS]

    if all and not search:
        return cached_response(cache, cache_keys.PHOTOS, ttl, lambda: list_photos(db), "photos", "photo albums")
    if all:
        items = list_photos(db, search=search)
        return success_response(items, f"Fetched {len(items)} photo albums",
                                cache_status="MISS", max_age=ttl, data_type="photos")

    items, total = list_photos(db, search=search, page=page, per_page=per_page)
    return success_response(page_payload(items, total, page, per_page),
                            f"Fetched page {page} of photo albums",
                            cache_status="MISS", max_age=ttl, data_type="photos")


@router.get("/Photos/{album_id}")
def get_photo_album(album_id: int, db: Session = Depends(get_db)):
    """Album title and image URLs under /PhotoAll/File; 404 when the album does not exist."""
    return success_response(get_album_images(db, album_id))


@router.get("/PhotosCover")
def get_photo_covers(db: Session = Depends(get_db)):
    return success_response(list_photo_covers(db))


@router.get("/Slides")
def get_slides(db: Session = Depends(get_db), cache: CacheAside = Depends(get_cache_aside)):
    return cached_response(cache, cache_keys.SLIDES, cache_keys.TTL[cache_keys.SLIDES],
                           lambda: list_slides(db), "slides", "slides")


@router.get("/Interest")
def get_interest(db: Session = Depends(get_db), cache: CacheAside = Depends(get_cache_aside)):
    return cached_response(cache, cache_keys.INTEREST, cache_keys.TTL[cache_keys.INTEREST],
                           lambda: list_interest(db), "interest", "interest rates")


@router.get("/Videos")
def get_videos(db: Session = Depends(get_db), cache: CacheAside = Depends(get_cache_aside)):
    return cached_response(cache, cache_keys.VIDEOS, cache_keys.TTL[cache_keys.VIDEOS],
                           lambda: list_videos(db), "videos", "videos")


@router.get("/DialogBoxs")
def get_dialog_boxes(db: Session = Depends(get_db), cache: CacheAside = Depends(get_cache_aside)):
    return cached_response(cache, cache_keys.DIALOG_BOXES, cache_keys.TTL[cache_keys.DIALOG_BOXES],
                           lambda: list_dialog_boxes(db), "dialog-boxes", "dialog boxes")


@router.get("/StatusHome")
def get_status_home(db: Session = Depends(get_db), cache: CacheAside = Depends(get_cache_aside)):
    return cached_response(cache, cache_keys.STATUS_HOME, cache_keys.TTL[cache_keys.STATUS_HOME],
                           lambda: list_status_home(db), "status-home", "status flags")
