# app/services/content_service.py
"""
Read-only queries behind the public data routes.

Every loader returns JSON-native data (lists of dicts) so the exact same value
can be written to the cache and sent to the client.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import Select, func, or_, select
from sqlalchemy.orm import Session

from app.errors import ApiError, NotFoundError
from app.models.about import Organizational, SocietyCoop
from app.models.community import Contact
from app.models.election import ElectionDepartment, ElectionEntry, ElectionVideo
from app.models.home import DialogBox, Interest, News, PhotoAlbum, Slide, StatusHome, Video
from app.models.service import (
    Application, AssetsLiabilities, BusinessReport, DownloadForm, MemberService, StatuteRegularityDeclare,
)
from app.schemas.records import (
    ApplicationRecord, AssetsLiabilitiesRecord, BusinessReportRecord, ContactRecord, DialogBoxRecord,
    DownloadFormRecord, ElectionDepartmentRecord, ElectionRecord, InterestRecord, MemberServiceRecord,
    NewsRecord, OrganizationalRecord, PhotoAlbumImages, PhotoAlbumRecord, PhotoCoverRecord, SlideRecord,
    SocietyCoopRecord, SRDRecord, StatusHomeRecord, VideoRecord,
)
from app.services.transform import encode_blob, public_path, warn_if_incomplete

logger = logging.getLogger(__name__)

# SocietyType values (Thai) that belong on the vision page: vision, mission, values.
VISION_MARKERS = ("วิสัยทัศน", "พันธกิจ", "ค่านิยม")


def _dump(records) -> List[Dict[str, Any]]:
    return [r.model_dump(mode="json") for r in records]


def _paginate(db: Session, stmt: Select, page: int, per_page: int) -> Tuple[list, int]:
    total = db.execute(select(func.count()).select_from(stmt.order_by(None).subquery())).scalar_one()
    rows = db.execute(stmt.limit(per_page).offset((page - 1) * per_page)).scalars().all()
    return rows, total


def _like(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


# ---- About -----------------------------------------------------------------

def list_organizational(db: Session, request_id: Optional[str] = None) -> List[Dict[str, Any]]:
    rows = db.execute(select(Organizational).order_by(Organizational.id.asc())).scalars().all()
    records = []
    for row in rows:
        warn_if_incomplete("organizational", row.id,
                           {"Name": row.name, "Position": row.position, "Type": row.type}, request_id)
        records.append(OrganizationalRecord(
            Id=row.id, Name=row.name, Position=row.position, Priority=row.priority, Type=row.type,
            ImagePath=public_path("/Organizational/File", row.image_path),
        ))
    logger.info("fetched %d organizational records request_id=%s", len(records), request_id)
    return _dump(records)


def _society_record(row: SocietyCoop) -> SocietyCoopRecord:
    return SocietyCoopRecord(
        Id=row.id, SocietyType=row.society_type, IsActive=row.is_active,
        ImagePath=public_path("/SocietyCoop/File", row.image_path),
    )


def list_society_coop(db: Session, request_id: Optional[str] = None) -> List[Dict[str, Any]]:
    rows = db.execute(select(SocietyCoop).order_by(SocietyCoop.id.asc())).scalars().all()
    for row in rows:
        warn_if_incomplete("society", row.id, {"SocietyType": row.society_type}, request_id)
    return _dump(_society_record(row) for row in rows)


def list_vision(db: Session, request_id: Optional[str] = None) -> List[Dict[str, Any]]:
    """Active vision/mission/values blocks that have an image to show."""
    stmt = (
        select(SocietyCoop)
        .where(or_(*[SocietyCoop.society_type.like(f"%{marker}%") for marker in VISION_MARKERS]))
        .order_by(SocietyCoop.id.asc())
    )
    records = []
    for row in db.execute(stmt).scalars():
        record = _society_record(row)
        if record.IsActive and record.ImagePath:
            records.append(record)
        else:
            logger.debug("vision row %s skipped (inactive or no image)", row.id)
    return _dump(records)


# ---- Home ------------------------------------------------------------------

def _news_record(row: News) -> NewsRecord:
    return NewsRecord(
        Id=row.id, Title=row.title, Details=row.details, CreateDate=row.create_date,
        ImagePath=public_path("/News/File/Image", row.image_path),
        PdfPath=public_path("/News/File/Pdf", row.pdf_path),
    )


def list_news(db: Session, search: Optional[str] = None, page: Optional[int] = None,
              per_page: int = 10, request_id: Optional[str] = None):
    """All news (page=None) as a list, or one page as (items, total)."""
    stmt = select(News).order_by(News.id.desc())
    if search:
        stmt = stmt.where(News.title.like(_like(search), escape="\\"))
    if page is None:
        rows = db.execute(stmt).scalars().all()
    else:
        rows, total = _paginate(db, stmt, page, per_page)
    for row in rows:
        warn_if_incomplete("news", row.id, {"Title": row.title}, request_id)
    items = _dump(_news_record(row) for row in rows)
    return items if page is None else (items, total)


def list_photos(db: Session, search: Optional[str] = None, page: Optional[int] = None, per_page: int = 10):
    stmt = select(PhotoAlbum).order_by(PhotoAlbum.id.desc())
    if search:
        stmt = stmt.where(PhotoAlbum.title.like(_like(search), escape="\\"))
    if page is None:
        rows = db.execute(stmt).scalars().all()
    else:
        rows, total = _paginate(db, stmt, page, per_page)
    # Album images are fetched per album by get_album_images
    items = _dump(PhotoAlbumRecord(Id=row.id, Title=row.title, CreateDate=row.create_date) for row in rows)
    return items if page is None else (items, total)


def get_album_images(db: Session, album_id: int) -> Dict[str, Any]:
    row = db.execute(select(PhotoAlbum).where(PhotoAlbum.id == album_id)).scalar_one_or_none()
    if row is None:
        raise NotFoundError("Images not found", {"id": album_id})
    try:
        stored = json.loads(row.image or "[]")
    except ValueError:
        logger.error("photo album %s has malformed Image JSON", album_id)
        raise ApiError("Invalid image data format", {"id": album_id})
    if not isinstance(stored, list):
        stored = [stored]
    images = [public_path("/PhotoAll/File", item, legacy_prefix="/Uploads/PhotoAlbum/", keep_subpath=True)
              for item in stored]
    return PhotoAlbumImages(title=row.title, images=[i for i in images if i]).model_dump(mode="json")


def list_photo_covers(db: Session) -> List[Dict[str, Any]]:
    rows = db.execute(select(PhotoAlbum).order_by(PhotoAlbum.id.desc())).scalars().all()
    return _dump(
        PhotoCoverRecord(
            Id=row.id, Title=row.title,
            Cover=public_path("/PhotoAll/File", row.cover, legacy_prefix="/Uploads/PhotoAlbum/", keep_subpath=True),
        )
        for row in rows
    )


def list_slides(db: Session) -> List[Dict[str, Any]]:
    rows = db.execute(select(Slide).order_by(Slide.no.asc())).scalars().all()
    return _dump(
        SlideRecord(Id=row.id, No=row.no, URLLink=row.url_link, ImagePath=public_path("/Slides/File", row.image_path))
        for row in rows
    )


def list_interest(db: Session) -> List[Dict[str, Any]]:
    rows = db.execute(select(Interest).order_by(Interest.id.asc())).scalars().all()
    return _dump(
        InterestRecord(
            Id=row.id, InterestType=row.interest_type, Name=row.name, InterestDate=row.interest_date,
            Conditions=row.conditions, InterestRate=row.interest_rate, InteresrRateDual=row.interest_rate_dual,
        )
        for row in rows
    )


def _video_records(rows) -> List[Dict[str, Any]]:
    return _dump(VideoRecord(Id=r.id, Title=r.title, YouTubeUrl=r.youtube_url, Details=r.details) for r in rows)


def list_videos(db: Session) -> List[Dict[str, Any]]:
    return _video_records(db.execute(select(Video).order_by(Video.id.desc())).scalars())


def list_dialog_boxes(db: Session) -> List[Dict[str, Any]]:
    rows = db.execute(select(DialogBox).order_by(DialogBox.id.asc())).scalars().all()
    return _dump(
        DialogBoxRecord(Id=row.id, URLLink=row.url_link, IsActive=row.is_active,
                        ImagePath=public_path("/Dialog/File", row.image_path))
        for row in rows
    )


def list_status_home(db: Session) -> List[Dict[str, Any]]:
    rows = db.execute(select(StatusHome).order_by(StatusHome.id.asc())).scalars().all()
    return _dump(StatusHomeRecord(Id=row.id, Status=row.status) for row in rows)


# ---- Service ---------------------------------------------------------------

def list_download_forms(db: Session) -> List[Dict[str, Any]]:
    rows = db.execute(select(DownloadForm).order_by(DownloadForm.id.asc())).scalars().all()
    return _dump(
        DownloadFormRecord(
            Id=row.id, Title=row.title, TypeForm=row.type_form, TypeMember=row.type_member,
            CreateDate=row.create_date, FilePath=public_path("/DownloadForm/File", row.file_path),
        )
        for row in rows
    )


def list_applications(db: Session) -> List[Dict[str, Any]]:
    rows = db.execute(select(Application).order_by(Application.id.asc())).scalars().all()
    return _dump(
        ApplicationRecord(
            Id=row.id, Title=row.title, Detail=row.detail, ImageNumber=row.image_number,
            ApplicationMainType=row.application_main_type, ApplicationType=row.application_type,
            CreateDate=row.create_date,
            ImagePath=public_path("/Application/File", row.image_path,
                                  legacy_prefix="/Uploads/Application/", keep_subpath=True),
        )
        for row in rows
    )


def list_member_services(db: Session, request_id: Optional[str] = None) -> List[Dict[str, Any]]:
    rows = db.execute(select(MemberService).order_by(MemberService.id.asc())).scalars().all()
    records = [
        MemberServiceRecord(Id=row.id, Subcategories=row.subcategories, URLLink=row.url_link,
                            Image=encode_blob(row.image))
        for row in rows
    ]
    logger.info("fetched %d membership services (%d with images) request_id=%s",
                len(records), sum(1 for r in records if r.Image), request_id)
    return _dump(records)


def list_business_reports(db: Session) -> List[Dict[str, Any]]:
    rows = db.execute(select(BusinessReport).order_by(BusinessReport.id.desc())).scalars().all()
    return _dump(
        BusinessReportRecord(
            Id=row.id, Title=row.title, CreateDate=row.create_date,
            ImagePath=public_path("/BusinessReport/File/Image", row.image_path),
            FilePath=public_path("/BusinessReport/File/Pdf", row.file_path),
        )
        for row in rows
    )


def list_assets_liabilities(db: Session, year: Optional[int] = None) -> List[Dict[str, Any]]:
    stmt = select(AssetsLiabilities).order_by(AssetsLiabilities.year.desc(), AssetsLiabilities.id.asc())
    if year is not None:
        stmt = stmt.where(AssetsLiabilities.year == year)
    return _dump(
        AssetsLiabilitiesRecord(Id=row.id, Year=row.year, TitleMonth=row.title_month, PdfFile=encode_blob(row.pdf_file))
        for row in db.execute(stmt).scalars()
    )


def list_srd(db: Session) -> List[Dict[str, Any]]:
    stmt = select(StatuteRegularityDeclare).order_by(StatuteRegularityDeclare.type_form.asc())
    return _dump(
        SRDRecord(Id=row.id, Title=row.title, TypeForm=row.type_form, TypeMember=row.type_member,
                  FilePath=public_path("/SRD/File", row.file_path))
        for row in db.execute(stmt).scalars()
    )


def list_contacts(db: Session) -> List[Dict[str, Any]]:
    rows = db.execute(select(Contact).order_by(Contact.id.asc())).scalars().all()
    return _dump(ContactRecord(Id=r.id, Name=r.name, Doh=r.doh, Coop=r.coop, Mobile=r.mobile) for r in rows)


# ---- Elections -------------------------------------------------------------

def _election_record(row: ElectionEntry) -> ElectionRecord:
    return ElectionRecord(
        Id=row.id, Member=row.member, IdCard=row.id_card, FullName=row.full_name, Department=row.department,
        FieldNumber=row.field_number, SequenceNumber=row.sequence_number,
    )


def lookup_election(db: Session, search: Optional[str]) -> List[Dict[str, Any]]:
    """
    Voter lookup. Up to 6 characters is a member number (zero padded to 6),
    exactly 13 is a national ID card number; any other length matches nothing.
    No search term returns the whole roll.
    """
    stmt = select(ElectionEntry).order_by(ElectionEntry.id.asc())
    term = (search or "").strip()
    if term:
        if len(term) <= 6:
            stmt = stmt.where(ElectionEntry.member == term.zfill(6))
        elif len(term) == 13:
            stmt = stmt.where(ElectionEntry.id_card == term)
        else:
            return []
    return _dump(_election_record(row) for row in db.execute(stmt).scalars())


def search_candidates(db: Session, search: Optional[str], limit: int, offset: int) -> Dict[str, Any]:
    stmt = select(ElectionEntry)
    if search:
        pattern = _like(search)
        stmt = stmt.where(or_(
            ElectionEntry.member.like(pattern, escape="\\"),
            ElectionEntry.id_card.like(pattern, escape="\\"),
            ElectionEntry.full_name.like(pattern, escape="\\"),
            ElectionEntry.department.like(pattern, escape="\\"),
        ))
    total = db.execute(select(func.count()).select_from(stmt.subquery())).scalar_one()
    rows = db.execute(stmt.order_by(ElectionEntry.id.desc()).limit(limit).offset(offset)).scalars().all()
    return {
        "data": _dump(_election_record(row) for row in rows),
        "total": total,
        "limit": limit,
        "offset": offset,
        "hasMore": offset + len(rows) < total,
    }


def list_departments(db: Session, search: Optional[str], page: int, per_page: int) -> Tuple[list, int]:
    stmt = select(ElectionDepartment).order_by(ElectionDepartment.id.asc())
    if search:
        stmt = stmt.where(ElectionDepartment.department_name.like(_like(search), escape="\\"))
    rows, total = _paginate(db, stmt, page, per_page)
    items = _dump(
        ElectionDepartmentRecord(Id=row.id, DepartmentName=row.department_name,
                                 FilePath=public_path("/ElectionDepartment/File", row.file_path))
        for row in rows
    )
    return items, total


def list_election_videos(db: Session) -> List[Dict[str, Any]]:
    return _video_records(db.execute(select(ElectionVideo).order_by(ElectionVideo.id.asc())).scalars())
