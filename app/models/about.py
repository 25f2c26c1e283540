# app/models/about.py

from sqlalchemy import Column, Integer, String, Boolean
from app.database import Base


class Organizational(Base):
    """One member of the organizational chart (board, officers, auditors...)."""
    __tablename__ = "treeorganizational"

    id = Column("Id", Integer, primary_key=True)
    name = Column("Name", String(255), nullable=True)
    position = Column("Position", String(255), nullable=True)
    # Display order inside a group
    priority = Column("Priority", Integer, nullable=True)
    # Group the member belongs to (board, executive, auditor, ...)
    type = Column("Type", String(100), nullable=True)
    # Stored upload path, rewritten to /Organizational/File/<name> on the way out
    image_path = Column("ImagePath", String(500), nullable=True)


class SocietyCoop(Base):
    """Society description blocks: vision, mission, values, history images."""
    __tablename__ = "cooperativesociety"

    id = Column("Id", Integer, primary_key=True)
    image_path = Column("ImagePath", String(500), nullable=True)
    society_type = Column("SocietyType", String(255), nullable=True)
    is_active = Column("IsActive", Boolean, nullable=True)
