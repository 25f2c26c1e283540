# app/models/election.py

from sqlalchemy import Column, Integer, String, Text
from app.database import Base


class ElectionEntry(Base):
    """Voter roll entry: which department and seat a member votes at."""
    __tablename__ = "election"

    id = Column("Id", Integer, primary_key=True)
    # Member number, zero padded to 6 digits
    member = Column("Member", String(20), nullable=True)
    id_card = Column("IdCard", String(13), nullable=True)
    full_name = Column("FullName", String(255), nullable=True)
    department = Column("Department", String(255), nullable=True)
    field_number = Column("FieldNumber", String(50), nullable=True)
    sequence_number = Column("SequenceNumber", String(50), nullable=True)


class ElectionDepartment(Base):
    __tablename__ = "electiondepartment"

    id = Column("Id", Integer, primary_key=True)
    department_name = Column("DepartmentName", String(255), nullable=True)
    file_path = Column("FilePath", String(500), nullable=True)


class ElectionVideo(Base):
    __tablename__ = "electionvideos"

    id = Column("Id", Integer, primary_key=True)
    title = Column("Title", String(500), nullable=True)
    youtube_url = Column("YouTubeUrl", String(500), nullable=True)
    details = Column("Details", Text, nullable=True)
