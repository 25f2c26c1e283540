# app/routers/background.py

from typing import Any

from fastapi import APIRouter, Body, Depends, Request
from sqlalchemy.orm import Session

from app.database import get_db
from app.routers.common import client_ip
from app.schemas.envelope import success_response
from app.schemas.validation import validate_payload
from app.services.community_service import record_complaint, record_cookie_consent, record_visit
from app.services.rate_limit import complaint_limiter

router = APIRouter(prefix="/api", tags=["background"])


@router.post("/Cookie")
def post_cookie_consent(request: Request, payload: Any = Body(None), db: Session = Depends(get_db)):
    """
    POST /api/Cookie
    Body: {consentStatus, cookieCategories, consentDate, userId?, ipAddress?, userAgent?}
    Missing ipAddress/userAgent fall back to the request's own.
    """
    data = validate_payload("cookie_consent", payload)
    result = record_cookie_consent(db, data, client_ip(request), request.headers.get("user-agent"))
    return success_response(result, "Cookie consent recorded")


@router.post("/Visits")
def post_visit(db: Session = Depends(get_db)):
    return success_response(record_visit(db), "Visit recorded")


@router.post("/Complaint", status_code=201)
def post_complaint(request: Request, payload: Any = Body(None), db: Session = Depends(get_db)):
    """
    POST /api/Complaint
    Only `complaint` is required; empty optional fields are treated as absent.
    3 per client IP per 10 minutes.
    """
    complaint_limiter.check(client_ip(request), "Too many complaints, please try again later")
    if isinstance(payload, dict):
        payload = {k: (None if isinstance(v, str) and not v.strip() else v) for k, v in payload.items()}
    data = validate_payload("complaint", payload)
    return success_response(record_complaint(db, data), "Complaint submitted", status_code=201)
