# app/models/community.py

from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey
from app.database import Base


def utcnow() -> datetime:
    """Naive UTC timestamp, matching the DateTime columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Question(Base):
    __tablename__ = "questions"

    id = Column("Id", Integer, primary_key=True)
    name = Column("Name", String(100), nullable=False)
    member_number = Column("MemberNumber", String(10), nullable=False)
    title = Column("Title", String(200), nullable=False)
    body = Column("Body", Text, nullable=False)
    created_at = Column("CreatedAt", DateTime, default=utcnow, nullable=False)
    view_count = Column("ViewCount", Integer, default=0, nullable=False)


class Answer(Base):
    __tablename__ = "answers"

    id = Column("Id", Integer, primary_key=True)
    question_id = Column("QuestionId", Integer, ForeignKey("questions.Id"), nullable=False)
    name = Column("Name", String(100), nullable=False)
    body = Column("Body", Text, nullable=False)
    created_at = Column("CreatedAt", DateTime, default=utcnow, nullable=False)


class CookieConsent(Base):
    __tablename__ = "cookieconsents"

    id = Column("Id", Integer, primary_key=True)
    user_id = Column("UserId", String(255), nullable=False)
    consent_status = Column("ConsentStatus", Boolean, nullable=False)
    consent_date = Column("ConsentDate", DateTime, nullable=False)
    cookie_categories = Column("CookieCategories", String(500), nullable=False)
    ip_address = Column("IpAddress", String(64), nullable=True)
    user_agent = Column("UserAgent", String(500), nullable=True)


class WebVisit(Base):
    """Rolling visit counters; one row per truncated timestamp key."""
    __tablename__ = "countwebvisits"

    date_time_stamp = Column("DateTimeStamp", DateTime, primary_key=True)
    day_count = Column("DayCount", Integer, nullable=False, default=1)
    week_count = Column("WeekCount", Integer, nullable=False, default=1)
    month_count = Column("MonthCount", Integer, nullable=False, default=1)
    year_count = Column("YearCount", Integer, nullable=False, default=1)


class Complaint(Base):
    __tablename__ = "complaints"

    id = Column("Id", Integer, primary_key=True)
    member_id = Column("MemberId", String(10), nullable=True)
    name = Column("Name", String(100), nullable=True)
    tel = Column("Tel", String(20), nullable=True)
    email = Column("Email", String(254), nullable=True)
    complaint = Column("Complaint", Text, nullable=False)
    create_date = Column("CreateDate", DateTime, default=utcnow, nullable=False)


class Contact(Base):
    __tablename__ = "contact"

    id = Column("Id", Integer, primary_key=True)
    name = Column("Name", String(255), nullable=True)
    doh = Column("Doh", String(50), nullable=True)
    coop = Column("Coop", String(50), nullable=True)
    mobile = Column("Mobile", String(50), nullable=True)
