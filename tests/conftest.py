# tests/conftest.py
import os
from datetime import datetime
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import event

# Point the app at an in-memory SQLite database and the in-process cache.
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["CACHE_BACKEND"] = "memory"

from app.main import app  # import after env is set
from app.database import Base, SessionLocal, engine
from app.models.about import Organizational, SocietyCoop
from app.models.community import Contact, Question
from app.models.election import ElectionDepartment, ElectionEntry, ElectionVideo
from app.models.home import DialogBox, Interest, News, PhotoAlbum, Slide, StatusHome, Video
from app.models.service import AssetsLiabilities, MemberService, StatuteRegularityDeclare
from app.services.cache_backends import InProcessLRUCache
from app.services.rate_limit import answer_limiter, complaint_limiter, question_limiter


class FakeClock:
    """Monotonic clock the tests move by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def _seed(db):
    db.add_all([
        Organizational(id=1, name="Somchai", position="Chairman", priority=1, type="board",
                       image_path="/Uploads/Organizational/chair.jpg"),
        Organizational(id=2, name="Suda", position="Manager", priority=2, type="executive",
                       image_path="Uploads\\Organizational\\manager.png"),
        SocietyCoop(id=1, society_type="วิสัยทัศน์", is_active=True, image_path="/Uploads/SocietyCoop/vision.jpg"),
        SocietyCoop(id=2, society_type="พันธกิจ", is_active=False, image_path="/Uploads/SocietyCoop/mission.jpg"),
        SocietyCoop(id=3, society_type="ประวัติ", is_active=True, image_path="/Uploads/SocietyCoop/history.jpg"),
        News(id=1, title="Annual meeting", details="Agenda", image_path="/Uploads/News/Image/meeting.jpg",
             pdf_path="/Uploads/News/Pdf/meeting.pdf", create_date=datetime(2024, 3, 1)),
        News(id=2, title="Dividend announcement", details="Rates", image_path=None, pdf_path=None,
             create_date=datetime(2024, 4, 1)),
        News(id=3, title="New loan product", details="Details", image_path="/Uploads/News/Image/loan.jpg",
             pdf_path=None, create_date=datetime(2024, 5, 1)),
        PhotoAlbum(id=1, title="Sports day", image='["/Uploads/PhotoAlbum/sports/1.jpg", "/Uploads/PhotoAlbum/sports/2.jpg"]',
                   cover="/Uploads/PhotoAlbum/sports/cover.jpg", create_date=datetime(2024, 1, 10)),
        PhotoAlbum(id=2, title="Broken album", image="not json", cover=None, create_date=datetime(2024, 2, 10)),
        Slide(id=1, no=2, image_path="/Uploads/Slides/b.png", url_link=None),
        Slide(id=2, no=1, image_path="/Uploads/Slides/a.png", url_link="https://example.com"),
        Interest(id=1, interest_type="deposit", name="Savings", interest_date="2024-01-01",
                 conditions="none", interest_rate=1.5, interest_rate_dual=2.25),
        Video(id=1, title="Intro", youtube_url="https://youtu.be/abc", details=None),
        DialogBox(id=1, image_path="/Uploads/Dialog/popup.jpg", url_link=None, is_active=True),
        StatusHome(id=1, status=1),
        MemberService(id=1, image=b"\x89PNG", subcategories="loans", url_link=None),
        AssetsLiabilities(id=1, year=2023, title_month="December", pdf_file=b"%PDF-1.4"),
        AssetsLiabilities(id=2, year=2024, title_month="January", pdf_file=None),
        StatuteRegularityDeclare(id=1, title="Statute", type_form="A", type_member="all",
                                 file_path="/Uploads/SRD/statute.pdf"),
        ElectionEntry(id=1, member="000123", id_card="1234567890123", full_name="Anan Dee",
                      department="Finance", field_number="1", sequence_number="10"),
        ElectionEntry(id=2, member="004567", id_card="9876543210987", full_name="Busaba Jai",
                      department="Audit", field_number="2", sequence_number="20"),
        ElectionDepartment(id=1, department_name="Finance", file_path="/Uploads/ElectionDepartment/finance.pdf"),
        ElectionDepartment(id=2, department_name="Audit", file_path=None),
        ElectionVideo(id=1, title="How to vote", youtube_url="https://youtu.be/vote", details=None),
        Contact(id=1, name="Office", doh="02-000-0000", coop="1234", mobile="081-000-0000"),
        Question(id=1, name="Somsak", member_number="000123", title="Loan limits",
                 body="What is the maximum loan?", created_at=datetime(2024, 6, 1, 9, 30), view_count=0),
    ])
    db.commit()


@pytest.fixture(autouse=True)
def database():
    """Fresh schema and seed rows for every test."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        _seed(db)
    finally:
        db.close()
    yield


@pytest.fixture(autouse=True)
def reset_rate_limits():
    for limiter in (question_limiter, answer_limiter, complaint_limiter):
        limiter.reset()
    yield


@pytest.fixture(scope="function")
def client():
    """A FastAPI TestClient for calling API endpoints."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def lru_cache(client, clock):
    """Swap the app cache for an LRU driven by the fake clock."""
    cache = InProcessLRUCache(capacity=100, clock=clock)
    app.state.cache = cache
    return cache


@pytest.fixture
def query_counter():
    """Count SQL statements sent to the engine while the test runs."""
    statements = []

    def _count(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    event.listen(engine, "before_cursor_execute", _count)
    try:
        yield statements
    finally:
        event.remove(engine, "before_cursor_execute", _count)
