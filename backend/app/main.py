"""Main FastAPI application."""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from app.api import advocates, errors, metrics
from app.cache import RedisCache, build_cache
from app.core import settings, setup_logging
from app.core.logging import get_logger
from app.core.metrics import (
    HTTP_REQUEST_DURATION_SECONDS,
    HTTP_REQUESTS_IN_PROGRESS,
    HTTP_REQUESTS_TOTAL,
    set_app_info,
)
from app.db import SessionLocal, seed_default_data
from app.domain.exceptions import DomainError
from app.repositories import AdvocateRepository
from app.services import AdvocateListingService

setup_logging()
logger = get_logger(__name__)


async def seed_sample_data(service: AdvocateListingService) -> None:
    """Seed sample advocates; ignore failures but log them."""
    try:
        db = SessionLocal()
    except Exception as exc:  # pragma: no cover - best effort
        logger.warning("Skipping default seed (session error): %s", exc)
        return
    try:
        inserted = seed_default_data(db)
    except Exception as exc:  # pragma: no cover - best effort
        logger.warning("Skipping default seed (operation error): %s", exc)
        return
    finally:
        db.close()
    if inserted:
        try:
            await service.invalidate()
        except DomainError as exc:  # pragma: no cover - best effort
            logger.warning("Could not invalidate listing cache after seed: %s", exc.message)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the cache and listing service for the lifetime of the app."""
    service = AdvocateListingService(
        AdvocateRepository(SessionLocal),
        build_cache(settings),
        cache_ttl=settings.cache_ttl_seconds,
        max_page_size=settings.max_page_size,
        read_timeout=settings.store_read_timeout,
    )
    app.state.listing_service = service
    if not settings.testing:
        await seed_sample_data(service)
    try:
        yield
    finally:
        if isinstance(service.cache, RedisCache):
            await service.cache.close()


app = FastAPI(
    title=settings.api_title,
    version=settings.api_version,
    lifespan=lifespan,
)

set_app_info(version=settings.api_version, environment=settings.environment)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


@app.middleware("http")
async def prometheus_metrics_middleware(request: Request, call_next):
    """Collect Prometheus metrics for every HTTP request except /metrics."""
    if request.url.path == "/metrics":
        return await call_next(request)

    method = request.method
    # Replace numeric path segments to keep label cardinality bounded
    endpoint = "/".join(
        "{id}" if part.isdigit() else part for part in request.url.path.split("/")
    )

    HTTP_REQUESTS_IN_PROGRESS.labels(method=method, endpoint=endpoint).inc()
    start_time = time.perf_counter()
    status_code = "500"
    try:
        response = await call_next(request)
        status_code = str(response.status_code)
    finally:
        duration = time.perf_counter() - start_time
        HTTP_REQUESTS_IN_PROGRESS.labels(method=method, endpoint=endpoint).dec()
        HTTP_REQUEST_DURATION_SECONDS.labels(method=method, endpoint=endpoint).observe(duration)
        HTTP_REQUESTS_TOTAL.labels(method=method, endpoint=endpoint, status_code=status_code).inc()

    return response


app.include_router(metrics.router)  # Metrics at root level (not under the API prefix)
app.include_router(advocates.router, prefix=settings.api_prefix)


@app.get("/health")
async def health() -> dict:
    """Basic health check endpoint (alias for /health/live)."""
    return {"status": "healthy"}


@app.get("/health/live")
async def health_live() -> dict:
    """Liveness check endpoint; only verifies the app responds."""
    return {"status": "healthy"}


@app.get("/health/ready")
async def health_ready():
    """Readiness check endpoint with dependency status.

    Returns 200 when the database (and Redis, if it backs the cache) can be
    reached, 503 otherwise.
    """
    status = {"database": {"status": "healthy"}}
    overall_healthy = True

    try:
        db = SessionLocal()
        try:
            db.execute(text("SELECT 1"))
        finally:
            db.close()
    except Exception as e:
        logger.warning("Readiness check: database unreachable: %s", e)
        status["database"] = {"status": "unhealthy"}
        overall_healthy = False

    service = getattr(app.state, "listing_service", None)
    cache = service.cache if service is not None else None
    if isinstance(cache, RedisCache):
        try:
            await cache.client.ping()
            status["cache"] = {"status": "healthy", "backend": "redis"}
        except Exception as e:
            logger.warning("Readiness check: redis unreachable: %s", e)
            status["cache"] = {"status": "unhealthy", "backend": "redis"}
            overall_healthy = False
    else:
        status["cache"] = {"status": "healthy", "backend": settings.cache_backend}

    result = {
        "status": "healthy" if overall_healthy else "unhealthy",
        "dependencies": status,
    }
    if overall_healthy:
        return result
    return JSONResponse(status_code=503, content=result)


@app.get("/")
async def root() -> dict:
    """Root endpoint."""
    return {
        "message": settings.api_title,
        "version": settings.api_version,
        "docs": "/docs",
    }


@app.exception_handler(DomainError)
async def domain_exception_handler(request: Request, exc: DomainError):
    """Translate domain errors to HTTP responses globally."""
    http_exc = errors.to_http(exc)
    return JSONResponse(
        status_code=http_exc.status_code,
        content={"error": http_exc.detail},
    )
