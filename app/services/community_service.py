# app/services/community_service.py
"""Q&A board and the small write endpoints (cookie consent, visits, complaints)."""

import html
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from app.errors import NotFoundError, ValidationError
from app.models.community import Answer, Complaint, CookieConsent, Question, WebVisit, utcnow
from app.schemas.records import AnswerRecord, QuestionDetail, QuestionRecord, QuestionSummary

logger = logging.getLogger(__name__)

QUESTION_LIST_LIMIT = 50


def sanitize(value: str) -> str:
    """Trim and HTML-escape user text before it is stored."""
    return html.escape(value.strip(), quote=True)


# ---- Questions & answers ---------------------------------------------------

def list_questions(db: Session) -> List[Dict[str, Any]]:
    """Newest questions with their answer counts."""
    stmt = (
        select(
            Question.id, Question.title, Question.name, Question.view_count, Question.created_at,
            func.count(Answer.id).label("answer_count"),
        )
        .outerjoin(Answer, Answer.question_id == Question.id)
        .group_by(Question.id, Question.title, Question.name, Question.view_count, Question.created_at)
        .order_by(Question.created_at.desc(), Question.id.desc())
        .limit(QUESTION_LIST_LIMIT)
    )
    return [
        QuestionSummary(
            Id=row.id, Title=row.title, Name=row.name, ViewCount=row.view_count or 0,
            AnswerCount=row.answer_count, CreatedAt=row.created_at.strftime("%Y-%m-%d %H:%M"),
        ).model_dump(mode="json")
        for row in db.execute(stmt)
    ]


def create_question(db: Session, payload: Dict[str, Any]) -> Dict[str, Any]:
    question = Question(
        name=sanitize(payload["name"]),
        member_number=payload["memberNumber"].strip(),
        title=sanitize(payload["title"]),
        body=sanitize(payload["body"]),
        created_at=utcnow(),
        view_count=0,
    )
    db.add(question)
    db.commit()
    db.refresh(question)
    logger.info("question created id=%s", question.id)
    return {
        "id": question.id,
        "name": question.name,
        "memberNumber": question.member_number,
        "title": question.title,
        "body": question.body,
    }


def _answer_records(db: Session, question_id: int) -> List[AnswerRecord]:
    rows = db.execute(
        select(Answer).where(Answer.question_id == question_id).order_by(Answer.created_at.desc(), Answer.id.desc())
    ).scalars()
    return [
        AnswerRecord(Id=a.id, QuestionId=a.question_id, Name=a.name, Body=a.body, CreatedAt=a.created_at)
        for a in rows
    ]


def get_question_detail(db: Session, question_id: int) -> Dict[str, Any]:
    """Counts a view, then returns the question with its answers."""
    result = db.execute(
        update(Question).where(Question.id == question_id).values(view_count=Question.view_count + 1)
    )
    db.commit()
    if not result.rowcount:
        raise NotFoundError("Question not found", {"id": question_id})

    q = db.execute(select(Question).where(Question.id == question_id)).scalar_one()
    detail = QuestionDetail(
        question=QuestionRecord(
            Id=q.id, Name=q.name, MemberNumber=q.member_number, Title=q.title, Body=q.body,
            CreatedAt=q.created_at, ViewCount=q.view_count,
        ),
        answers=_answer_records(db, question_id),
    )
    return detail.model_dump(mode="json")


def _require_question(db: Session, question_id: int) -> None:
    exists = db.execute(select(Question.id).where(Question.id == question_id)).first()
    if exists is None:
        raise NotFoundError("Question not found", {"id": question_id})


def list_answers(db: Session, question_id: int) -> List[Dict[str, Any]]:
    _require_question(db, question_id)
    return [a.model_dump(mode="json") for a in _answer_records(db, question_id)]


def create_answer(db: Session, question_id: int, payload: Dict[str, Any]) -> Dict[str, Any]:
    _require_question(db, question_id)
    answer = Answer(
        question_id=question_id,
        name=sanitize(payload["name"]),
        body=sanitize(payload["body"]),
        created_at=utcnow(),
    )
    db.add(answer)
    db.commit()
    db.refresh(answer)
    logger.info("answer created id=%s question_id=%s", answer.id, question_id)
    return AnswerRecord(
        Id=answer.id, QuestionId=answer.question_id, Name=answer.name, Body=answer.body, CreatedAt=answer.created_at,
    ).model_dump(mode="json")


# ---- Cookie consent --------------------------------------------------------

def parse_consent_date(value: str) -> datetime:
    """ISO 8601 (a trailing 'Z' is accepted); aware values are converted to naive UTC."""
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        raise ValidationError("Invalid consent date format", field="consentDate", received=value)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed.replace(microsecond=0)


def record_cookie_consent(db: Session, payload: Dict[str, Any], client_ip: Optional[str],
                          user_agent: Optional[str]) -> Dict[str, Any]:
    consent = CookieConsent(
        user_id=payload.get("userId") or "anonymous",
        consent_status=payload["consentStatus"],
        consent_date=parse_consent_date(payload["consentDate"]),
        cookie_categories=payload["cookieCategories"],
        ip_address=payload.get("ipAddress") or client_ip,
        user_agent=payload.get("userAgent") or user_agent,
    )
    db.add(consent)
    db.commit()
    logger.info(
        "cookie consent recorded user=%s status=%s categories=%s ip=%s",
        consent.user_id, consent.consent_status, consent.cookie_categories, consent.ip_address,
    )
    return {"success": True}


# ---- Visit counter ---------------------------------------------------------

def record_visit(db: Session, now: Optional[datetime] = None) -> Dict[str, Any]:
    """
    One counter row per calendar day. Each counter continues from the latest row
    when it falls in the same day/ISO week/month/year, otherwise restarts at 1.
    Concurrent visits may lose an increment; no row lock is taken.
    """
    now = (now or datetime.now()).replace(microsecond=0)
    day_key = now.replace(hour=0, minute=0, second=0)

    last = db.execute(select(WebVisit).order_by(WebVisit.date_time_stamp.desc()).limit(1)).scalar_one_or_none()
    if last is None:
        counts = {"day": 1, "week": 1, "month": 1, "year": 1}
    else:
        prev = last.date_time_stamp
        counts = {
            "day": last.day_count + 1 if prev.date() == now.date() else 1,
            "week": last.week_count + 1 if prev.isocalendar()[:2] == now.isocalendar()[:2] else 1,
            "month": last.month_count + 1 if (prev.year, prev.month) == (now.year, now.month) else 1,
            "year": last.year_count + 1 if prev.year == now.year else 1,
        }

    db.merge(WebVisit(
        date_time_stamp=day_key,
        day_count=counts["day"],
        week_count=counts["week"],
        month_count=counts["month"],
        year_count=counts["year"],
    ))
    db.commit()
    return {"timestamp": now.isoformat(), "counts": counts}


# ---- Complaints ------------------------------------------------------------

def record_complaint(db: Session, payload: Dict[str, Any]) -> Dict[str, Any]:
    def optional(name: str) -> Optional[str]:
        value = payload.get(name)
        return sanitize(str(value)) if value else None

    complaint = Complaint(
        member_id=optional("memberid"),
        name=optional("name"),
        tel=optional("tel"),
        email=optional("email"),
        complaint=sanitize(payload["complaint"]),
        create_date=utcnow(),
    )
    db.add(complaint)
    db.commit()
    db.refresh(complaint)
    logger.info("complaint recorded id=%s", complaint.id)
    return {"id": complaint.id}
