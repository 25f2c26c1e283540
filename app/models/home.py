# app/models/home.py

from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, Numeric
from app.database import Base


class News(Base):
    __tablename__ = "news"

    id = Column("Id", Integer, primary_key=True)
    title = Column("Title", String(500), nullable=True)
    details = Column("Details", Text, nullable=True)
    image_path = Column("ImagePath", String(500), nullable=True)
    pdf_path = Column("PdfPath", String(500), nullable=True)
    create_date = Column("CreateDate", DateTime, nullable=True)


class PhotoAlbum(Base):
    __tablename__ = "photoalbum"

    id = Column("Id", Integer, primary_key=True)
    title = Column("Title", String(500), nullable=True)
    # JSON array of stored image paths
    image = Column("Image", Text, nullable=True)
    cover = Column("Cover", String(500), nullable=True)
    create_date = Column("CreateDate", DateTime, nullable=True)


class Slide(Base):
    __tablename__ = "slides"

    id = Column("Id", Integer, primary_key=True)
    no = Column("No", Integer, nullable=True)
    image_path = Column("ImagePath", String(500), nullable=True)
    url_link = Column("URLLink", String(500), nullable=True)


class Interest(Base):
    __tablename__ = "interest"

    id = Column("Id", Integer, primary_key=True)
    interest_type = Column("InterestType", String(100), nullable=True)
    name = Column("Name", String(255), nullable=True)
    interest_date = Column("InterestDate", String(100), nullable=True)
    conditions = Column("Conditions", Text, nullable=True)
    interest_rate = Column("InterestRate", Numeric(6, 2), nullable=True)
    # Column name is misspelled in the live schema
    interest_rate_dual = Column("InteresrRateDual", Numeric(6, 2), nullable=True)


class Video(Base):
    __tablename__ = "videos"

    id = Column("Id", Integer, primary_key=True)
    title = Column("Title", String(500), nullable=True)
    youtube_url = Column("YouTubeUrl", String(500), nullable=True)
    details = Column("Details", Text, nullable=True)


class DialogBox(Base):
    """Pop-up notification shown on the home page."""
    __tablename__ = "notification"

    id = Column("Id", Integer, primary_key=True)
    image_path = Column("ImagePath", String(500), nullable=True)
    url_link = Column("URLLink", String(500), nullable=True)
    is_active = Column("IsActive", Boolean, nullable=True)


class StatusHome(Base):
    __tablename__ = "statushome"

    id = Column("Id", Integer, primary_key=True)
    status = Column("Status", Integer, nullable=True)
