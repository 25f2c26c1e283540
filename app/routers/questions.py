# app/routers/questions.py

from typing import Any

from fastapi import APIRouter, Body, Depends, Request
from sqlalchemy.orm import Session

from app.database import get_db
from app.routers.common import cached_response, client_ip, get_cache_aside
from app.schemas.envelope import success_response
from app.schemas.validation import validate_payload
from app.services import cache_keys
from app.services.cache_aside import CacheAside
from app.services.community_service import (
    create_answer, create_question, get_question_detail, list_answers, list_questions,
)
from app.services.rate_limit import answer_limiter, question_limiter

router = APIRouter(prefix="/api/Questions", tags=["questions"])


@router.get("")
def get_questions(db: Session = Depends(get_db), cache: CacheAside = Depends(get_cache_aside)):
    """Latest 50 questions with answer counts; cached for two minutes."""
    return cached_response(cache, cache_keys.QUESTIONS, cache_keys.TTL[cache_keys.QUESTIONS],
                           lambda: list_questions(db), "questions", "questions")


@router.post("", status_code=201)
def post_question(request: Request, payload: Any = Body(None), db: Session = Depends(get_db),
                  cache: CacheAside = Depends(get_cache_aside)):
    """
    POST /api/Questions
    Body: {name, memberNumber, title, body}. 5 per client IP per 5 minutes.
    Status codes: 201, 400 (invalid body), 429 (rate limited)
    """
    question_limiter.check(client_ip(request), "Too many questions, please try again later")
    data = validate_payload("question", payload)
    created = create_question(db, data)
    cache.delete(cache_keys.QUESTIONS)
    return success_response(created, "Question created", status_code=201)


@router.get("/{question_id}")
def get_question(question_id: int, db: Session = Depends(get_db)):
    """Question detail with answers. Each call counts one view."""
    return success_response(get_question_detail(db, question_id))


@router.get("/{question_id}/Answers")
def get_answers(question_id: int, db: Session = Depends(get_db)):
    return success_response(list_answers(db, question_id))


@router.post("/{question_id}/Answers", status_code=201)
def post_answer(question_id: int, request: Request, payload: Any = Body(None), db: Session = Depends(get_db),
                cache: CacheAside = Depends(get_cache_aside)):
    answer_limiter.check(client_ip(request), "Too many answers, please try again later")
    data = validate_payload("answer", payload)
    created = create_answer(db, question_id, data)
    # answer counts in the list are now stale
    cache.delete(cache_keys.QUESTIONS)
    return success_response(created, "Answer created", status_code=201)
