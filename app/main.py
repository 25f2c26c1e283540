# app/main.py

from contextlib import asynccontextmanager
import logging
import time
import uuid
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from app.config import ALLOWED_ORIGINS, LOG_LEVEL, UPLOAD_BASE_DIR
from app.database import engine
from app.errors import ApiError, ErrorCode, ValidationError, classify_database_error
from app.routers import about, background, elections, files, home, questions, service
from app.routers.common import request_id_of
from app.schemas.envelope import error_response, utc_now_iso
from app.services.cache_aside import CacheAside
from app.services.cache_factory import build_cache

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization, X-Requested-With",
    "Access-Control-Max-Age": "86400",
}

HTTP_ERROR_CODES = {
    404: ErrorCode.NOT_FOUND,
    405: ErrorCode.METHOD_NOT_ALLOWED,
    429: ErrorCode.RATE_LIMIT_EXCEEDED,
    503: ErrorCode.SERVICE_UNAVAILABLE,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: build the cache client once; routes reach it through app.state
    app.state.cache = build_cache()
    app.state.upload_root = UPLOAD_BASE_DIR
    try:
        yield
    finally:
        # Shutdown: release the cache connection and the DB pool
        app.state.cache.close()
        engine.dispose()

app = FastAPI(lifespan=lifespan)
app.include_router(about.router)
app.include_router(home.router)
app.include_router(service.router)
app.include_router(elections.router)
app.include_router(questions.router)
app.include_router(background.router)
app.include_router(files.router)
app.include_router(files.router, prefix="/api")
app.include_router(files.category_router)


@app.middleware("http")
async def preflight(request: Request, call_next):
    if request.method == "OPTIONS" and request.url.path.startswith("/api/"):
        origin = request.headers.get("origin")
        headers = dict(CORS_HEADERS)
        headers["Access-Control-Allow-Origin"] = origin if origin in ALLOWED_ORIGINS else "null"
        return Response(status_code=204, headers=headers)
    return await call_next(request)


@app.middleware("http")
async def request_id(request: Request, call_next):
    # registered last so it runs outermost and the id exists for every handler
    rid = request.headers.get("x-request-id") or uuid.uuid4().hex
    request.state.request_id = rid
    started = time.perf_counter()
    response = await call_next(request)
    response.headers["X-Request-ID"] = rid
    logger.info(
        "%s %s -> %s in %.1fms request_id=%s",
        request.method, request.url.path, response.status_code, (time.perf_counter() - started) * 1000, rid,
    )
    return response


@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError):
    if exc.status_code >= 500:
        logger.error("request failed code=%s request_id=%s: %s", exc.code, request_id_of(request), exc.message)
    return error_response(exc)


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    error = classify_database_error(exc)
    logger.error("database error code=%s request_id=%s: %s", error.code, request_id_of(request), exc)
    return error_response(error)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    loc = errors[0].get("loc", ()) if errors else ()
    field = str(loc[-1]) if loc else None
    return error_response(ValidationError("Invalid request", field=field,
                                          validationErrors=[e.get("msg") for e in errors]))


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    code = HTTP_ERROR_CODES.get(exc.status_code)
    if code is None:
        code = ErrorCode.INTERNAL_ERROR if exc.status_code >= 500 else ErrorCode.INVALID_INPUT
    return error_response(ApiError(str(exc.detail), status_code=exc.status_code, code=code))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    # runs outside the request-id middleware, so the header is set here
    rid = request_id_of(request) or request.headers.get("x-request-id") or uuid.uuid4().hex
    logger.exception("unhandled error request_id=%s", rid)
    response = error_response(ApiError("Internal server error"))
    response.headers["X-Request-ID"] = rid
    return response


@app.get("/health")
def health_check(request: Request):
    cache_ok = CacheAside(request.app.state.cache, request_id_of(request)).ping()
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error("health check: database unreachable: %s", e)
        return JSONResponse(
            status_code=503,
            content={"status": "error", "db": "unreachable", "cache": cache_ok, "timestamp": utc_now_iso()},
        )
    return {"status": "ok", "db": "connected", "cache": cache_ok, "timestamp": utc_now_iso()}


@app.get("/metrics")
def metrics():
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
