# app/services/cache_keys.py

# Keys of the About section; invalidated and warmed as a group by /api/cache.
ABOUT_CACHE_KEYS = {
    "ORGANIZATIONAL": "organizational:all",
    "SOCIETY_COOP": "society:coop:all",
    "VISION": "vision:mission:values",
}

ORGANIZATIONAL = ABOUT_CACHE_KEYS["ORGANIZATIONAL"]
SOCIETY_COOP = ABOUT_CACHE_KEYS["SOCIETY_COOP"]
VISION = ABOUT_CACHE_KEYS["VISION"]
NEWS = "news:list"
PHOTOS = "photos:list"
SLIDES = "slides:all"
INTEREST = "interest:all"
VIDEOS = "videos:all"
DIALOG_BOXES = "dialogboxs:active"
STATUS_HOME = "statushome:all"
MEMBERSHIP = "membership:services"
SRD = "srd:all"
ELECTION_VIDEOS = "election-videos:list"
QUESTIONS = "questions:list"


def candidates_key(search: str | None, limit: int, offset: int) -> str:
    return f"candidates:{search or 'all'}:{limit}:{offset}"


def departments_key(search: str | None, page: int, per_page: int) -> str:
    return f"departments:{search or 'all'}:{page}:{per_page}"


# TTLs in seconds. Volatile data gets 300s or less, stable reference data an hour or more.
TTL = {
    ORGANIZATIONAL: 3600,
    SOCIETY_COOP: 3600,
    VISION: 7200,
    NEWS: 1800,
    PHOTOS: 1800,
    SLIDES: 1800,
    INTEREST: 300,
    VIDEOS: 600,
    DIALOG_BOXES: 300,
    STATUS_HOME: 300,
    MEMBERSHIP: 900,
    SRD: 3600,
    ELECTION_VIDEOS: 3600,
    QUESTIONS: 120,
    "candidates": 1800,
    "departments": 1800,
}
