# app/services/transform.py
"""
Row post-processing shared by the data routes.

Stored rows carry upload paths such as `/Uploads/News/Image/abc.jpg` or Windows
style `Uploads\\Slides\\a.png`; clients only ever see the public file route
(`/News/File/Image/abc.jpg`). None of these helpers raise on malformed input.
"""

import base64
import logging
import posixpath
from typing import Any, Mapping, Optional

logger = logging.getLogger(__name__)


def public_path(route: str, stored: Optional[str], legacy_prefix: Optional[str] = None,
                keep_subpath: bool = False) -> Optional[str]:
    """
    Rewrite a stored path to `<route>/<name>`, or None when there is nothing to serve.

    `name` is the basename, or with `keep_subpath` everything after `legacy_prefix`
    (albums and application images live in per-item sub-directories).
    Values already under `route` are returned unchanged.
    """
    if not isinstance(stored, str) or not stored.strip():
        return None

    value = stored.strip().replace("\\", "/")
    route = route.rstrip("/")
    if value.startswith(route + "/"):
        return value

    if keep_subpath:
        name = "/" + value.lstrip("/")
        if legacy_prefix:
            prefix = "/" + legacy_prefix.strip("/") + "/"
            marker = name.find(prefix)
            if marker >= 0:
                name = name[marker + len(prefix):]
        name = posixpath.normpath(name.lstrip("/"))
        if name in (".", "") or name.startswith(".."):
            logger.warning("unusable stored path %r for %s", stored, route)
            return None
    else:
        name = posixpath.basename(value)
        if not name:
            logger.warning("stored path %r has no file name for %s", stored, route)
            return None

    return f"{route}/{name}"


def encode_blob(value: Any) -> Optional[str]:
    """Base64 text for a binary column; None for empty or unexpected values."""
    if value is None:
        return None
    if isinstance(value, (bytes, bytearray, memoryview)):
        raw = bytes(value)
        return base64.b64encode(raw).decode("ascii") if raw else None
    if isinstance(value, str):
        # some rows were back-filled with already encoded text
        return value or None
    logger.warning("cannot base64-encode value of type %s", type(value).__name__)
    return None


def warn_if_incomplete(entity: str, row_id: Any, fields: Mapping[str, Any],
                       request_id: Optional[str] = None) -> None:
    """Log (never raise) when a row is missing fields the front-end relies on."""
    missing = [name for name, value in fields.items() if value is None or value == ""]
    if missing:
        logger.warning(
            "incomplete %s row id=%s missing=%s request_id=%s", entity, row_id, ",".join(missing), request_id
        )
