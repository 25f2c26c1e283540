# app/routers/elections.py

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.errors import ValidationError
from app.routers.common import cached_response, get_cache_aside, page_payload, validate_pagination
from app.schemas.envelope import success_response
from app.services import cache_keys
from app.services.cache_aside import HIT, MISS, CacheAside
from app.services.content_service import list_departments, list_election_videos, lookup_election, search_candidates

router = APIRouter(prefix="/api", tags=["elections"])

MAX_CANDIDATE_LIMIT = 100
MAX_DEPARTMENTS_PER_PAGE = 50


@router.get("/Election")
def get_election(search: Optional[str] = None, db: Session = Depends(get_db)):
    """
    GET /api/Election?search=
    Member numbers of up to six digits are zero padded; 13 characters is an ID card.
    """
    return success_response(lookup_election(db, search))


@router.get("/Candidates")
def get_candidates(search: Optional[str] = None, limit: int = 50, offset: int = 0,
                   db: Session = Depends(get_db), cache: CacheAside = Depends(get_cache_aside)):
    if limit < 1 or limit > MAX_CANDIDATE_LIMIT:
        raise ValidationError("Invalid pagination parameters", field="limit", limit=limit)
    if offset < 0:
        raise ValidationError("Invalid pagination parameters", field="offset", offset=offset)
    search = validate_pagination(1, 1, search)

    key = cache_keys.candidates_key(search, limit, offset)
    ttl = cache_keys.TTL["candidates"]
    result, hit = cache.get_or_load(key, ttl, lambda: search_candidates(db, search, limit, offset))
    return success_response(
        result, f"Fetched {len(result['data'])} of {result['total']} candidates",
        cache_status=HIT if hit else MISS, max_age=ttl, data_type="candidates",
    )


@router.get("/Departments")
def get_departments(search: Optional[str] = None, page: int = 1, per_page: int = 10,
                    db: Session = Depends(get_db), cache: CacheAside = Depends(get_cache_aside)):
    """Paginated election departments, at most 50 per page."""
    search = validate_pagination(page, per_page, search, max_per_page=MAX_DEPARTMENTS_PER_PAGE)

    def load():
        items, total = list_departments(db, search, page, per_page)
        return page_payload(items, total, page, per_page)

    key = cache_keys.departments_key(search, page, per_page)
    ttl = cache_keys.TTL["departments"]
    data, hit = cache.get_or_load(key, ttl, load)
    return success_response(
        data, f"Fetched page {page} of departments",
        cache_status=HIT if hit else MISS, max_age=ttl, data_type="departments",
    )


@router.get("/ElectionVideos")
def get_election_videos(db: Session = Depends(get_db), cache: CacheAside = Depends(get_cache_aside)):
    return cached_response(cache, cache_keys.ELECTION_VIDEOS, cache_keys.TTL[cache_keys.ELECTION_VIDEOS],
                           lambda: list_election_videos(db), "election-videos", "election videos")
