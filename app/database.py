from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from app.config import DATABASE_URL, SQL_ECHO, DB_POOL_SIZE


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        # single shared connection so an in-memory database survives across sessions
        return {"connect_args": {"check_same_thread": False}, "poolclass": StaticPool}
    return {"pool_size": DB_POOL_SIZE, "pool_pre_ping": True}


# creating the SQLAlchemy engine (disposed by the app lifespan on shutdown)
engine = create_engine(DATABASE_URL, echo=SQL_ECHO, future=True, **_engine_options(DATABASE_URL))

# creating a configured "Session" class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)

# Base class for ORM models
Base = declarative_base()

# Dependency to get the database session
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
