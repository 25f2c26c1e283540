# app/services/files.py

import logging
import mimetypes
import os
import stat
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional

from fastapi.responses import FileResponse

from app.config import MAX_FILE_SIZE_BYTES, UPLOAD_BASE_DIR
from app.errors import ErrorCode, FileTooLargeError, ForbiddenError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".gif", ".webp"})
DOCUMENT_EXTENSIONS = IMAGE_EXTENSIONS | frozenset({
    ".pdf", ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx", ".txt", ".rtf", ".zip", ".rar",
})
MEDIA_EXTENSIONS = IMAGE_EXTENSIONS | frozenset({".mp4", ".mov"})

# Characters never valid in a stored upload name
_FORBIDDEN_CHARS = set('<>"|?*\x00')


class FileServer:
    """
    Serves files below `base_dir`. Every request path is canonicalized and must stay
    inside the base directory; only allow-listed extensions are served.
    """

    def __init__(self, base_dir: str | os.PathLike, allowed_extensions: FrozenSet[str],
                 max_size: int = MAX_FILE_SIZE_BYTES, allow_extensionless: bool = False) -> None:
        self.base_dir = Path(base_dir)
        self.allowed_extensions = allowed_extensions
        self.max_size = max_size
        # album uploads are sometimes stored without a suffix
        self.allow_extensionless = allow_extensionless

    def resolve(self, parts: List[str], client_ip: Optional[str] = None) -> Path:
        """Join `parts` onto the base directory; 400 for anything that could escape it."""
        segments = [p for p in parts if p and p.strip()]
        bad = [p for p in segments if ".." in p or _FORBIDDEN_CHARS.intersection(p) or p.startswith(("/", "\\"))]
        if not segments or bad:
            self._reject_traversal(parts, client_ip)

        base = self.base_dir.resolve()
        candidate = base.joinpath(*segments).resolve()
        if candidate != base and not candidate.is_relative_to(base):
            self._reject_traversal(parts, client_ip)
        return candidate

    def _reject_traversal(self, parts: List[str], client_ip: Optional[str]) -> None:
        logger.warning(
            "security: path traversal attempt rejected path=%r base=%s ip=%s severity=high",
            "/".join(parts), self.base_dir, client_ip,
        )
        raise ValidationError("Invalid file path", field="path")

    def check(self, path: Path, client_ip: Optional[str] = None) -> os.stat_result:
        """Extension allow-list (403), existence (404) and size ceiling (413)."""
        extension = path.suffix.lower()
        if extension not in self.allowed_extensions and not self._extensionless_ok(path):
            logger.warning(
                "security: restricted file type requested ext=%r file=%s ip=%s severity=medium",
                extension, path, client_ip,
            )
            raise ForbiddenError("File type not allowed", {"extension": extension}, code=ErrorCode.INVALID_FILE_TYPE)

        try:
            info = path.stat()
        except OSError:
            logger.info("file not found: %s ip=%s", path, client_ip)
            raise NotFoundError("File not found", code=ErrorCode.FILE_NOT_FOUND)
        if not stat.S_ISREG(info.st_mode):
            raise NotFoundError("File not found", code=ErrorCode.FILE_NOT_FOUND)

        if info.st_size > self.max_size:
            logger.warning("large file access attempt file=%s size=%d ip=%s", path, info.st_size, client_ip)
            raise FileTooLargeError("File too large", {"size": info.st_size, "limit": self.max_size})
        return info

    def _extensionless_ok(self, path: Path) -> bool:
        # dotfiles such as .env have an empty suffix too
        return self.allow_extensionless and path.suffix == "" and not path.name.startswith(".")

    def serve(self, relative_path: str, client_ip: Optional[str] = None) -> FileResponse:
        path = self.resolve(relative_path.split("/"), client_ip)
        info = self.check(path, client_ip)
        content_type = sniff_image_type(path) if not path.suffix else content_type_for(path.name)
        logger.info("file served file=%s size=%d type=%s ip=%s", path.name, info.st_size, content_type, client_ip)
        return FileResponse(
            path,
            media_type=content_type,
            filename=path.name,
            content_disposition_type="inline",
            stat_result=info,
            headers={
                "Cache-Control": "public, max-age=3600",
                "X-Content-Type-Options": "nosniff",
                "X-Frame-Options": "DENY",
            },
        )


def content_type_for(name: str) -> str:
    guessed, _ = mimetypes.guess_type(name)
    return guessed or "application/octet-stream"


def sniff_image_type(path: Path) -> str:
    """Content type of a suffix-less image from its magic bytes."""
    with path.open("rb") as f:
        head = f.read(12)
    if head.startswith(b"\xff\xd8"):
        return "image/jpeg"
    if head.startswith(b"\x89PNG"):
        return "image/png"
    if head.startswith(b"GIF"):
        return "image/gif"
    if head[8:12] == b"WEBP":
        return "image/webp"
    return "application/octet-stream"


# Public route section -> (directory under the upload root, allowed extensions)
FILE_SECTIONS: Dict[str, tuple] = {
    "Organizational": ("Organizational", IMAGE_EXTENSIONS),
    "SocietyCoop": ("SocietyCoop", IMAGE_EXTENSIONS),
    "News": ("News", DOCUMENT_EXTENSIONS),
    "PhotoAll": ("PhotoAlbum", IMAGE_EXTENSIONS),
    "PhotoAlbum": ("PhotoAlbum", IMAGE_EXTENSIONS),
    "PhotosCover": ("PhotosCover", IMAGE_EXTENSIONS),
    "Slides": ("Slides", IMAGE_EXTENSIONS),
    "Dialog": ("Dialog", IMAGE_EXTENSIONS),
    "DialogBoxs": ("DialogBoxs", IMAGE_EXTENSIONS),
    "DownloadForm": ("FileDownload", DOCUMENT_EXTENSIONS),
    "Application": ("Application", IMAGE_EXTENSIONS),
    "Serve": ("Services", DOCUMENT_EXTENSIONS),
    "BusinessReport": ("BusinessReport", DOCUMENT_EXTENSIONS),
    "SRD": ("SRD", DOCUMENT_EXTENSIONS),
    "ElectionDepartment": ("ElectionDepartment", DOCUMENT_EXTENSIONS),
    "Particles": ("Particles", MEDIA_EXTENSIONS),
}

# Sections whose files may be stored without a suffix; served by sniffing their header
EXTENSIONLESS_SECTIONS = frozenset({"PhotoAll", "PhotoAlbum"})


def server_for(section: str, upload_root: str | os.PathLike = UPLOAD_BASE_DIR) -> FileServer:
    directory, extensions = FILE_SECTIONS[section]
    return FileServer(Path(upload_root) / directory, extensions, allow_extensionless=section in EXTENSIONLESS_SECTIONS)
