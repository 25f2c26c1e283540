# app/schemas/records.py
"""
Public record shapes returned by the data routes.

Keys keep the stored column names (Id, Name, ImagePath...) so existing front-end
pages keep working. Path fields are already rewritten to public URLs (or None)
by the time a record is built.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class OrganizationalRecord(BaseModel):
    Id: int
    Name: Optional[str] = None
    Position: Optional[str] = None
    Priority: Optional[int] = None
    Type: Optional[str] = None
    ImagePath: Optional[str] = None


class SocietyCoopRecord(BaseModel):
    Id: int
    ImagePath: Optional[str] = None
    SocietyType: Optional[str] = None
    IsActive: Optional[bool] = None


class NewsRecord(BaseModel):
    Id: int
    Title: Optional[str] = None
    Details: Optional[str] = None
    ImagePath: Optional[str] = None
    PdfPath: Optional[str] = None
    CreateDate: Optional[datetime] = None


class PhotoAlbumRecord(BaseModel):
    Id: int
    Title: Optional[str] = None
    CreateDate: Optional[datetime] = None


class PhotoAlbumImages(BaseModel):
    title: Optional[str] = None
    images: List[str]


class PhotoCoverRecord(BaseModel):
    Id: int
    Title: Optional[str] = None
    Cover: Optional[str] = None


class SlideRecord(BaseModel):
    Id: int
    No: Optional[int] = None
    ImagePath: Optional[str] = None
    URLLink: Optional[str] = None


class InterestRecord(BaseModel):
    Id: int
    InterestType: Optional[str] = None
    Name: Optional[str] = None
    InterestDate: Optional[str] = None
    Conditions: Optional[str] = None
    InterestRate: Optional[float] = None
    InteresrRateDual: Optional[float] = None


class VideoRecord(BaseModel):
    Id: int
    Title: Optional[str] = None
    YouTubeUrl: Optional[str] = None
    Details: Optional[str] = None


class DialogBoxRecord(BaseModel):
    Id: int
    ImagePath: Optional[str] = None
    URLLink: Optional[str] = None
    IsActive: Optional[bool] = None


class StatusHomeRecord(BaseModel):
    Id: int
    Status: Optional[int] = None


class DownloadFormRecord(BaseModel):
    Id: int
    Title: Optional[str] = None
    TypeForm: Optional[str] = None
    TypeMember: Optional[str] = None
    FilePath: Optional[str] = None
    CreateDate: Optional[datetime] = None


class ApplicationRecord(BaseModel):
    Id: int
    Title: Optional[str] = None
    Detail: Optional[str] = None
    ImageNumber: Optional[int] = None
    ImagePath: Optional[str] = None
    ApplicationMainType: Optional[str] = None
    ApplicationType: Optional[str] = None
    CreateDate: Optional[datetime] = None


class MemberServiceRecord(BaseModel):
    Id: int
    # base64 of the stored image bytes
    Image: Optional[str] = None
    Subcategories: Optional[str] = None
    URLLink: Optional[str] = None


class BusinessReportRecord(BaseModel):
    Id: int
    Title: Optional[str] = None
    ImagePath: Optional[str] = None
    FilePath: Optional[str] = None
    CreateDate: Optional[datetime] = None


class AssetsLiabilitiesRecord(BaseModel):
    Id: int
    Year: Optional[int] = None
    TitleMonth: Optional[str] = None
    # base64 of the stored PDF bytes
    PdfFile: Optional[str] = None


class SRDRecord(BaseModel):
    Id: int
    Title: Optional[str] = None
    TypeForm: Optional[str] = None
    TypeMember: Optional[str] = None
    FilePath: Optional[str] = None


class ElectionRecord(BaseModel):
    Id: int
    Member: Optional[str] = None
    IdCard: Optional[str] = None
    FullName: Optional[str] = None
    Department: Optional[str] = None
    FieldNumber: Optional[str] = None
    SequenceNumber: Optional[str] = None


class ElectionDepartmentRecord(BaseModel):
    Id: int
    DepartmentName: Optional[str] = None
    FilePath: Optional[str] = None


class ContactRecord(BaseModel):
    Id: int
    Name: Optional[str] = None
    Doh: Optional[str] = None
    Coop: Optional[str] = None
    Mobile: Optional[str] = None


class QuestionSummary(BaseModel):
    Id: int
    Title: str
    Name: str
    ViewCount: int
    AnswerCount: int
    CreatedAt: str


class QuestionRecord(BaseModel):
    Id: int
    Name: str
    MemberNumber: str
    Title: str
    Body: str
    CreatedAt: datetime
    ViewCount: int


class AnswerRecord(BaseModel):
    Id: int
    QuestionId: int
    Name: str
    Body: str
    CreatedAt: datetime


class QuestionDetail(BaseModel):
    question: QuestionRecord
    answers: List[AnswerRecord]
