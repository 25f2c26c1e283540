# app/routers/files.py
"""File routes: GET /<Section>/File/<path> for every upload section, plus /api/files/<Section>/File/<path>."""

from fastapi import APIRouter, Request

from app.errors import ValidationError
from app.routers.common import client_ip
from app.services.files import FILE_SECTIONS, server_for

router = APIRouter(tags=["files"])

category_router = APIRouter(prefix="/api/files", tags=["files"])


def _register(section: str) -> None:
    def serve_file(file_path: str, request: Request):
        server = server_for(section, request.app.state.upload_root)
        return server.serve(file_path, client_ip(request))

    serve_file.__name__ = f"serve_{section.lower()}_file"
    router.add_api_route(f"/{section}/File/{{file_path:path}}", serve_file, methods=["GET"],
                         name=serve_file.__name__)


for _section in FILE_SECTIONS:
    _register(_section)


@category_router.get("/{file_path:path}")
def serve_category_file(file_path: str, request: Request):
    """
    GET /api/files/{category}/File/{path}
    Status codes: 200, 400 (missing File segment, unknown category, bad path), 403, 404, 413
    """
    category, _, rest = file_path.partition("/")
    keyword, _, relative = rest.partition("/")
    if keyword != "File" or not relative:
        raise ValidationError("Invalid file path - missing 'File' segment", field="path")
    if category not in FILE_SECTIONS:
        raise ValidationError("Invalid file category", field="category", category=category)
    return server_for(category, request.app.state.upload_root).serve(relative, client_ip(request))
