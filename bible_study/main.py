"""FastAPI application entrypoint."""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from bible_study import __version__
from bible_study.db import init_models
from bible_study.errors import ContentProviderError, NotFoundError, StorageFailure, ValidationError
from bible_study.logging_config import configure_logging, get_logger
from bible_study.middleware.correlation_id import CorrelationIdMiddleware
from bible_study.middleware.rate_limit import RateLimitMiddleware
from bible_study.routers import (
    api_health_router,
    health_router,
    highlights_router,
    notes_router,
    plans_router,
    references_router,
)
from bible_study.schemas.common import ErrorResponse

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown: logging, embedded schema bootstrap."""
    configure_logging()
    await init_models()
    logger.info("app_started", version=__version__)
    yield
    logger.info("app_shutdown")


app = FastAPI(
    title="Bible Study Server",
    version=__version__,
    lifespan=lifespan,
)
app.add_middleware(RateLimitMiddleware)
app.add_middleware(CorrelationIdMiddleware)

app.include_router(health_router)
app.include_router(api_health_router)
app.include_router(plans_router)
app.include_router(notes_router)
app.include_router(highlights_router)
app.include_router(references_router)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ErrorResponse(detail=str(exc), code=exc.code).model_dump(exclude_none=True),
    )


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=ErrorResponse(detail=str(exc), code=exc.code).model_dump(exclude_none=True),
    )


@app.exception_handler(StorageFailure)
async def storage_failure_handler(request: Request, exc: StorageFailure) -> JSONResponse:
    logger.error("request.storage_failure", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=ErrorResponse(detail=str(exc), code=exc.code).model_dump(exclude_none=True),
    )


@app.exception_handler(ContentProviderError)
async def content_provider_error_handler(request: Request, exc: ContentProviderError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content=ErrorResponse(detail=str(exc), code=exc.code).model_dump(exclude_none=True),
    )


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint: app name and version."""
    return {"name": "bible_study", "version": __version__}
