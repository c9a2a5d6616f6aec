"""FastAPI application entry point."""
import time
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from book_catalog.api import api_router
from book_catalog.api.deps import get_collection
from book_catalog.config import settings
from book_catalog.core.exceptions import (
    AppException,
    ConflictError,
    MissingDataError,
    NotFoundError,
    OperationNotAllowedError,
    StoreError,
    ValidationError,
)
from book_catalog.core.logging import get_logger, setup_logging
from book_catalog.database import close_db, init_db
from book_catalog.schemas.common import StatusResponse
from book_catalog.services.seed import seed_books

setup_logging(settings.log_level)
logger = get_logger("main")

STATIC_DIR = Path(__file__).resolve().parent / "static"

# Most specific classes first
ERROR_STATUS = [
    (MissingDataError, 422),
    (ValidationError, 400),
    (NotFoundError, 404),
    (ConflictError, 409),
    (OperationNotAllowedError, 405),
    (StoreError, 503),
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup and shutdown."""
    # Startup
    if settings.store_backend == "sql":
        await init_db()
    if settings.seed_sample_data:
        inserted = await seed_books(get_collection(settings))
        logger.info(f"Seeded {inserted} sample book(s)")
    yield
    # Shutdown
    await close_db()


app = FastAPI(
    title=settings.app_name,
    description="Book catalog with HTML views and a JSON API",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log method, path, status and latency of every request."""
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(
        f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f}ms)"
    )
    return response


def status_for(exc: AppException) -> int:
    for exc_type, status_code in ERROR_STATUS:
        if isinstance(exc, exc_type):
            return status_code
    return 400


# Exception handlers
@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException):
    """Handle application exceptions."""
    return JSONResponse(
        status_code=status_for(exc),
        content={
            "detail": exc.message,
            "error_code": exc.error_code,
            "details": exc.details,
        },
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "detail": exc.detail,
            "error_code": f"HTTP_{exc.status_code}",
            "details": {},
        },
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}")

    if settings.debug:
        return JSONResponse(
            status_code=500,
            content={
                "detail": str(exc),
                "type": type(exc).__name__,
            },
        )

    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )


app.mount("/css", StaticFiles(directory=str(STATIC_DIR / "css")), name="css")

# Include API router
app.include_router(api_router)


# Health check endpoint
@app.get("/health", response_model=StatusResponse)
async def health_check() -> StatusResponse:
    """Health check endpoint."""
    return StatusResponse(status="healthy", app=settings.app_name)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "book_catalog.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
