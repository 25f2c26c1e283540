# tests/test_transform.py
import pytest

from app.services.transform import encode_blob, public_path


@pytest.mark.parametrize("stored,expected", [
    ("/Uploads/Slides/a.png", "/Slides/File/a.png"),
    ("Uploads\\Slides\\b.png", "/Slides/File/b.png"),
    ("c.png", "/Slides/File/c.png"),
    ("", None),
    ("   ", None),
    (None, None),
])
def test_public_path_uses_basename(stored, expected):
    assert public_path("/Slides/File", stored) == expected


def test_public_path_is_idempotent():
    once = public_path("/News/File/Image", "/Uploads/News/Image/x.jpg")
    assert public_path("/News/File/Image", once) == once


def test_public_path_keeps_album_subdirectory():
    route = "/PhotoAll/File"
    prefix = "/Uploads/PhotoAlbum/"
    assert public_path(route, "/Uploads/PhotoAlbum/2024/sports/1.jpg", prefix, keep_subpath=True) == \
        "/PhotoAll/File/2024/sports/1.jpg"
    assert public_path(route, "/Uploads/PhotoAlbum/../../etc/passwd", prefix, keep_subpath=True) is None


def test_encode_blob():
    assert encode_blob(b"abc") == "YWJj"
    assert encode_blob(b"") is None
    assert encode_blob(None) is None
    assert encode_blob("YWJj") == "YWJj"
    assert encode_blob(42) is None
