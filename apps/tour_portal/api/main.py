"""
Arcade Tours - Tour API
========================

REST API for storing product tours per user.

Run locally (from project root):
    python run.py api
    # or: python -m uvicorn apps.tour_portal.api.main:app --reload --port 5000

Interactive docs (non-production only):
    http://localhost:5000/docs
"""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.tours.errors import NotFoundError, ValidationError

from .config import settings
from .models.database import get_store
from .routes import auth, tours

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Cache-Control": "no-store",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    store = get_store()
    logger.info(
        "Tour API starting (%s) | database=%s | seed_fixtures=%s",
        settings.ENV, store.db_path, settings.SEED_FIXTURES,
    )
    yield
    logger.info("Tour API shutting down")


app = FastAPI(
    title="Arcade Tours API",
    description="Create, update and publish product tours",
    version=API_VERSION,
    lifespan=lifespan,
    docs_url=None if settings.is_production else "/docs",
    redoc_url=None if settings.is_production else "/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_response_headers(request: Request, call_next):
    """Security headers plus X-Process-Time on every response."""
    started = time.perf_counter()
    response = await call_next(request)
    response.headers.update(SECURITY_HEADERS)
    elapsed_ms = (time.perf_counter() - started) * 1000
    response.headers["X-Process-Time"] = f"{elapsed_ms:.2f}ms"
    return response


# ============================================================
# ERROR MAPPING
# ============================================================

@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    logger.info("%s %s -> 404 (tour %s)", request.method, request.url.path, exc.tour_id)
    return JSONResponse(status_code=404, content={"message": "Tour not found"})


@app.exception_handler(ValidationError)
async def validation_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


app.include_router(auth.router, prefix="/api/auth", tags=["Authentication"])
app.include_router(tours.router, prefix="/api/tours", tags=["Tours"])


@app.get("/health", tags=["System"])
async def health_check():
    return {"status": "healthy", "version": API_VERSION, "environment": settings.ENV}


@app.get("/", tags=["System"])
async def root():
    return {
        "name": "Arcade Tours API",
        "version": API_VERSION,
        "docs": "disabled" if settings.is_production else "/docs",
    }
