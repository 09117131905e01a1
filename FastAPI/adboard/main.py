import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from adboard.config import settings
from adboard.core.errors import (
    ListingConflictError,
    ListingForbiddenError,
    ListingNotFoundError,
    ListingValidationError,
    StoreUnavailableError,
)
from adboard.core.rate_limiter import rate_limiter
from adboard.database import init_db, engine
from adboard.logging_config import setup_logging
from adboard.routers import admin, auth, listings

setup_logging()
logger = logging.getLogger(__name__)

PLACEHOLDER_SECRET = "replace-with-a-long-random-secret-key"
AUTH_LIMITED_PATHS = {"/auth/login", "/auth/register"}

app = FastAPI(
    title="Elanlar API",
    description="Classified ads for jobs, internships and volunteering, with admin moderation.",
    version="1.0.0",
)

cors_origins = [o.strip() for o in settings.cors_allow_origins.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(listings.router)
app.include_router(admin.router)


@app.exception_handler(ListingValidationError)
async def listing_validation_handler(request, exc: ListingValidationError):
    return JSONResponse(status_code=422, content={"detail": exc.reason, "field": exc.field})


@app.exception_handler(ListingForbiddenError)
async def listing_forbidden_handler(request, exc: ListingForbiddenError):
    logger.info("Forbidden %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=403, content={"detail": str(exc)})


@app.exception_handler(ListingNotFoundError)
async def listing_not_found_handler(request, exc: ListingNotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(ListingConflictError)
async def listing_conflict_handler(request, exc: ListingConflictError):
    return JSONResponse(status_code=409, content={"detail": str(exc)})


@app.exception_handler(StoreUnavailableError)
async def store_unavailable_handler(request, exc: StoreUnavailableError):
    return JSONResponse(status_code=503, content={"detail": "Service temporarily unavailable. Please try again."})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request, exc):
    logger.exception("Unhandled server error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def _rate_limit_for(method: str, path: str) -> int | None:
    if path in AUTH_LIMITED_PATHS:
        return settings.rate_limit_auth_per_min
    if method == "POST" and path == "/listings":
        return settings.rate_limit_submit_per_min
    return None


@app.middleware("http")
async def apply_rate_limits(request, call_next):
    if request.method == "OPTIONS":
        return await call_next(request)

    path = request.url.path
    limit = _rate_limit_for(request.method, path)
    if limit is not None and limit > 0:
        client_ip = request.client.host if request.client else "unknown"
        allowed, retry_after = rate_limiter.allow(f"{client_ip}:{request.method}:{path}", limit=limit, window_seconds=60)
        if not allowed:
            logger.info("Rate limit hit for %s on %s %s", client_ip, request.method, path)
            return JSONResponse(
                status_code=429,
                content={"detail": "Too many requests. Please retry shortly."},
                headers={"Retry-After": str(retry_after)},
            )

    return await call_next(request)


@app.get("/health/live")
def health_live():
    return {"status": "ok"}


@app.get("/health/ready")
def health_ready():
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return {"status": "ready"}
    except Exception:
        logger.exception("Readiness check failed")
        return JSONResponse(status_code=503, content={"status": "not_ready"})


@app.on_event("startup")
def on_startup():
    logger.info("Starting Elanlar API")
    env = (settings.app_env or "development").lower()
    if env in {"production", "prod"}:
        if settings.secret_key == PLACEHOLDER_SECRET:
            raise RuntimeError("SECRET_KEY placeholder is not allowed in production")
        if "username:password@" in settings.database_url:
            raise RuntimeError("DATABASE_URL placeholder credentials are not allowed in production")
        if settings.database_url.startswith("sqlite"):
            logger.warning("DATABASE_URL points at SQLite in production; use Postgres for concurrent writers.")
    else:
        if settings.secret_key == PLACEHOLDER_SECRET:
            logger.warning("SECRET_KEY is using placeholder default. Set SECRET_KEY in .env for secure deployments.")
    init_db()


@app.get("/")
def root():
    return {"message": "Elanlar API. GET /listings for approved ads; POST /listings to submit one for review."}
