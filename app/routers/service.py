# app/routers/service.py

from typing import Optional

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.database import get_db
from app.errors import ValidationError
from app.routers.common import cached_response, get_cache_aside, request_id_of
from app.schemas.envelope import success_response
from app.services import cache_keys
from app.services.cache_aside import CacheAside
from app.services.content_service import (
    list_applications, list_assets_liabilities, list_business_reports, list_contacts, list_download_forms,
    list_member_services, list_srd,
)

router = APIRouter(prefix="/api", tags=["service"])


@router.get("/DownloadForm")
def get_download_forms(db: Session = Depends(get_db)):
    """Downloadable forms; FilePath points at /DownloadForm/File/<name> or is null."""
    return success_response(list_download_forms(db))


@router.get("/Application")
def get_applications(db: Session = Depends(get_db)):
    return success_response(list_applications(db))


@router.get("/MemberShip")
def get_member_services(request: Request, db: Session = Depends(get_db),
                        cache: CacheAside = Depends(get_cache_aside)):
    """Member services with the stored image inlined as base64."""
    return cached_response(
        cache, cache_keys.MEMBERSHIP, cache_keys.TTL[cache_keys.MEMBERSHIP],
        lambda: list_member_services(db, request_id_of(request)),
        "membership", "membership services",
    )


@router.get("/BusinessReport")
def get_business_reports(db: Session = Depends(get_db)):
    return success_response(list_business_reports(db))


@router.get("/AssetsLiabilities")
def get_assets_liabilities(year: Optional[str] = None, db: Session = Depends(get_db)):
    """Optional ?year= filter; the PDF column is returned base64 encoded."""
    year_value = None
    if year:
        if not year.isdigit():
            raise ValidationError("Year must be numeric", field="year", received=year)
        year_value = int(year)
    return success_response(list_assets_liabilities(db, year_value))


@router.get("/SRD")
def get_srd(db: Session = Depends(get_db), cache: CacheAside = Depends(get_cache_aside)):
    """Statutes, regulations and declarations."""
    return cached_response(cache, cache_keys.SRD, cache_keys.TTL[cache_keys.SRD],
                           lambda: list_srd(db), "srd", "documents")


@router.get("/Contract")
def get_contacts(db: Session = Depends(get_db)):
    return success_response(list_contacts(db))
