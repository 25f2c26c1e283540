# app/models/service.py

from sqlalchemy import Column, Integer, String, Text, DateTime, LargeBinary
from app.database import Base


class DownloadForm(Base):
    # Table name is misspelled in the live schema
    __tablename__ = "formdowsloads"

    id = Column("Id", Integer, primary_key=True)
    title = Column("Title", String(500), nullable=True)
    type_form = Column("TypeForm", String(100), nullable=True)
    type_member = Column("TypeMember", String(100), nullable=True)
    file_path = Column("FilePath", String(500), nullable=True)
    create_date = Column("CreateDate", DateTime, nullable=True)


class Application(Base):
    __tablename__ = "application"

    id = Column("Id", Integer, primary_key=True)
    title = Column("Title", String(500), nullable=True)
    detail = Column("Detail", Text, nullable=True)
    image_number = Column("ImageNumber", Integer, nullable=True)
    # Stored as /Uploads/Application/<subdir>/<file>
    image_path = Column("ImagePath", String(500), nullable=True)
    application_main_type = Column("ApplicationMainType", String(100), nullable=True)
    application_type = Column("ApplicationType", String(100), nullable=True)
    create_date = Column("CreateDate", DateTime, nullable=True)


class MemberService(Base):
    __tablename__ = "services"

    id = Column("Id", Integer, primary_key=True)
    # Raw image bytes, sent to clients as base64
    image = Column("Image", LargeBinary, nullable=True)
    subcategories = Column("Subcategories", String(255), nullable=True)
    url_link = Column("URLLink", String(500), nullable=True)


class BusinessReport(Base):
    __tablename__ = "businessreport"

    id = Column("Id", Integer, primary_key=True)
    title = Column("Title", String(500), nullable=True)
    image_path = Column("ImagePath", String(500), nullable=True)
    file_path = Column("FilePath", String(500), nullable=True)
    create_date = Column("CreateDate", DateTime, nullable=True)


class AssetsLiabilities(Base):
    __tablename__ = "assetsliabilities"

    id = Column("Id", Integer, primary_key=True)
    year = Column("Year", Integer, nullable=True)
    title_month = Column("TitleMonth", String(100), nullable=True)
    pdf_file = Column("PdfFile", LargeBinary, nullable=True)


class StatuteRegularityDeclare(Base):
    __tablename__ = "statuteregularitydeclare"

    id = Column("Id", Integer, primary_key=True)
    title = Column("Title", String(500), nullable=True)
    type_form = Column("TypeForm", String(100), nullable=True)
    type_member = Column("TypeMember", String(100), nullable=True)
    file_path = Column("FilePath", String(500), nullable=True)
