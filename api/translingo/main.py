"""
FastAPI application for the TransLingo translation API.
This module sets up the API server with routes, middleware, and error handling.
"""

import logging
import sys
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from prometheus_fastapi_instrumentator import Instrumentator
from prometheus_fastapi_instrumentator import metrics as instrumentator_metrics

from translingo.core.config import get_settings
from translingo.core.error_handlers import (
    base_exception_handler,
    unhandled_exception_handler,
)
from translingo.core.exceptions import BaseAppException
from translingo.routes import health, translate, translations
from translingo.services.history_service import HistoryService
from translingo.services.translation import TranslationResolver

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

logger = logging.getLogger("translingo.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("Application startup...")

    settings = get_settings()

    # One pooled client for every provider and detection call
    http_client = httpx.AsyncClient(
        timeout=settings.PROVIDER_TIMEOUT_SECONDS,
        headers={"User-Agent": settings.HTTP_USER_AGENT},
        follow_redirects=True,
    )
    app.state.http_client = http_client

    logger.info("Initializing TranslationResolver...")
    resolver = TranslationResolver.from_settings(http_client, settings)
    app.state.translation_resolver = resolver
    app.state.language_detector = resolver.detector
    if not resolver.detector.enabled:
        logger.info(
            "LANGUAGE_DETECTION_API_KEY not set - source languages will not be auto-detected"
        )

    logger.info("Initializing HistoryService...")
    app.state.history_service = HistoryService(max_entries=settings.HISTORY_MAX_ENTRIES)

    yield

    # Shutdown
    logger.info("Application shutdown...")
    await http_client.aclose()


app = FastAPI(
    title=get_settings().PROJECT_NAME,
    docs_url="/api/docs",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

# Configure CORS
# Toggle credentials off when wildcard is used (Starlette forbids wildcard + credentials)
_origins = get_settings().CORS_ORIGINS
app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins,
    allow_credentials=False if _origins == ["*"] else True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# DON'T call .expose() - the /metrics endpoint below serves the default registry
instrumentator = Instrumentator(
    should_group_status_codes=False,
    should_ignore_untemplated=True,
    should_respect_env_var=False,
    should_instrument_requests_inprogress=True,
    excluded_handlers=["/health", "/healthcheck", "/metrics"],
    inprogress_name="http_requests_inprogress",
    inprogress_labels=True,
)
instrumentator.add(instrumentator_metrics.default())
instrumentator.add(
    # Provider calls are slow; a full cascade can take several timeouts
    instrumentator_metrics.latency(buckets=(0.1, 0.5, 1, 2, 5, 10, 30, 60))
)
instrumentator.instrument(app)


@app.get("/metrics", include_in_schema=False)
async def metrics():
    """Prometheus metrics endpoint."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(translate.router)
app.include_router(translations.router)


@app.get("/healthcheck")
async def healthcheck():
    return {"status": "healthy"}


# Register exception handlers
# Register specific application exceptions first
app.add_exception_handler(BaseAppException, base_exception_handler)  # type: ignore[arg-type]
# Then register generic exception handler as fallback
app.add_exception_handler(Exception, unhandled_exception_handler)


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    # Bind to 0.0.0.0 only in DEBUG mode (container/development)
    host = "0.0.0.0" if settings.DEBUG else "127.0.0.1"

    uvicorn.run(
        "translingo.main:app",
        host=host,
        port=8000,
        reload=settings.DEBUG,
    )
