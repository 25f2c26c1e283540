# tests/test_content_routes.py
import pytest


def test_news_first_page_by_default(client):
    res = client.get("/api/News")
    assert res.status_code == 200
    page = res.json()["data"]
    assert page["page"] == 1
    assert page["per_page"] == 10
    assert page["total"] == 3
    assert page["pageCount"] == 1
    # newest first, stored paths rewritten to the public file route
    assert [n["Id"] for n in page["data"]] == [3, 2, 1]
    assert page["data"][0]["ImagePath"] == "/News/File/Image/loan.jpg"
    assert page["data"][1]["ImagePath"] is None
    assert page["data"][2]["PdfPath"] == "/News/File/Pdf/meeting.pdf"


def test_news_second_page(client):
    page = client.get("/api/News", params={"page": 2, "per_page": 2}).json()["data"]
    assert page["total"] == 3
    assert page["pageCount"] == 2
    assert [n["Id"] for n in page["data"]] == [1]


def test_news_all_is_cached_but_search_is_not(client):
    assert client.get("/api/News", params={"all": "true"}).headers["X-Cache"] == "MISS"
    cached = client.get("/api/News", params={"all": "true"})
    assert cached.headers["X-Cache"] == "HIT"
    assert len(cached.json()["data"]) == 3

    for _ in range(2):
        searched = client.get("/api/News", params={"all": "true", "search": "loan"})
        assert searched.headers["X-Cache"] == "MISS"
        assert [n["Title"] for n in searched.json()["data"]] == ["New loan product"]


@pytest.mark.parametrize("params,field", [
    ({"page": 0}, "page"),
    ({"per_page": 0}, "per_page"),
    ({"per_page": 101}, "per_page"),
    ({"search": "x" * 101}, "search"),
])
def test_news_rejects_bad_pagination(client, params, field):
    res = client.get("/api/News", params=params)
    assert res.status_code == 400
    assert res.json()["details"]["field"] == field


def test_photos_list_and_album_images(client):
    albums = client.get("/api/Photos", params={"all": "true"}).json()["data"]
    assert [a["Title"] for a in albums] == ["Broken album", "Sports day"]

    album = client.get("/api/Photos/1").json()["data"]
    assert album == {
        "title": "Sports day",
        "images": ["/PhotoAll/File/sports/1.jpg", "/PhotoAll/File/sports/2.jpg"],
    }

    covers = client.get("/api/PhotosCover").json()["data"]
    assert covers[1]["Cover"] == "/PhotoAll/File/sports/cover.jpg"
    assert covers[0]["Cover"] is None


def test_album_errors(client):
    missing = client.get("/api/Photos/99")
    assert missing.status_code == 404
    assert missing.json()["code"] == "NOT_FOUND"

    broken = client.get("/api/Photos/2")
    assert broken.status_code == 500
    assert broken.json()["error"] == "Invalid image data format"


def test_home_lists(client):
    slides = client.get("/api/Slides").json()["data"]
    assert [s["No"] for s in slides] == [1, 2]
    assert slides[0]["ImagePath"] == "/Slides/File/a.png"

    interest = client.get("/api/Interest").json()["data"]
    assert interest[0]["InterestRate"] == 1.5
    assert interest[0]["InteresrRateDual"] == 2.25

    assert client.get("/api/Videos").json()["data"][0]["YouTubeUrl"] == "https://youtu.be/abc"
    assert client.get("/api/DialogBoxs").json()["data"][0]["ImagePath"] == "/Dialog/File/popup.jpg"
    assert client.get("/api/StatusHome").json()["data"] == [{"Id": 1, "Status": 1}]


def test_membership_inlines_image_as_base64(client):
    res = client.get("/api/MemberShip")
    assert res.headers["X-Cache"] == "MISS"
    assert res.json()["data"][0]["Image"] == "iVBORw=="


def test_assets_liabilities_year_filter(client):
    everything = client.get("/api/AssetsLiabilities").json()["data"]
    assert [r["Year"] for r in everything] == [2024, 2023]

    filtered = client.get("/api/AssetsLiabilities", params={"year": "2023"}).json()["data"]
    assert len(filtered) == 1
    assert filtered[0]["PdfFile"] == "JVBERi0xLjQ="

    bad = client.get("/api/AssetsLiabilities", params={"year": "abc"})
    assert bad.status_code == 400
    assert bad.json()["details"]["field"] == "year"


def test_srd_and_contacts(client):
    srd = client.get("/api/SRD")
    assert srd.headers["X-Cache"] == "MISS"
    assert srd.json()["data"][0]["FilePath"] == "/SRD/File/statute.pdf"

    contacts = client.get("/api/Contract").json()["data"]
    assert contacts[0]["Name"] == "Office"


@pytest.mark.parametrize("search,expected", [
    ("123", ["Anan Dee"]),            # zero padded to 000123
    ("000123", ["Anan Dee"]),
    ("9876543210987", ["Busaba Jai"]),
    ("1234567", []),                  # neither member number nor ID card
])
def test_election_lookup(client, search, expected):
    data = client.get("/api/Election", params={"search": search}).json()["data"]
    assert [r["FullName"] for r in data] == expected


def test_candidates_search_and_paging(client):
    first = client.get("/api/Candidates", params={"limit": 1})
    assert first.headers["X-Cache"] == "MISS"
    result = first.json()["data"]
    assert result["total"] == 2
    assert result["hasMore"] is True
    assert len(result["data"]) == 1

    assert client.get("/api/Candidates", params={"limit": 1}).headers["X-Cache"] == "HIT"

    audit = client.get("/api/Candidates", params={"search": "Audit"}).json()["data"]
    assert audit["total"] == 1
    assert audit["hasMore"] is False

    assert client.get("/api/Candidates", params={"limit": 0}).status_code == 400
    assert client.get("/api/Candidates", params={"offset": -1}).status_code == 400


def test_departments(client):
    page = client.get("/api/Departments").json()["data"]
    assert page["total"] == 2
    assert page["data"][0]["FilePath"] == "/ElectionDepartment/File/finance.pdf"
    assert page["data"][1]["FilePath"] is None

    res = client.get("/api/Departments", params={"per_page": 51})
    assert res.status_code == 400
    assert res.json()["details"]["field"] == "per_page"


def test_election_videos(client):
    res = client.get("/api/ElectionVideos")
    assert res.json()["data"][0]["Title"] == "How to vote"
