"""
Event Planner API - Main Application Entry Point

A CRUD event-planning service:
- Events own guests and vendors; each event keeps live guest/vendor counters
- Deleting an event cascades to its guests and vendors in one transaction
- RSVP, booking, pricing and category statistics computed on demand
- Structured logging with request correlation, Prometheus metrics,
  optional Redis cache for event listings
"""

import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from eventplanner.core.config import get_settings
from eventplanner.core.logging import setup_logging, get_logger
from eventplanner.core.metrics import metrics_endpoint
from eventplanner.api.errors import register_exception_handlers
from eventplanner.api.router import api_router
from eventplanner.api.middleware import RequestLoggingMiddleware
from eventplanner.db.session import check_database, create_tables, engine
from eventplanner.services.cache_service import get_redis, close_redis, get_cache_stats

settings = get_settings()
STARTED_AT = time.monotonic()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle: startup and shutdown hooks."""
    setup_logging()
    logger = get_logger(__name__)

    logger.info(
        "application_starting",
        app=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
    )

    # Without a database there is nothing to serve: fail startup
    if not await check_database():
        logger.critical("database_unavailable", url=engine.url.render_as_string(hide_password=True))
        raise RuntimeError("Could not connect to the database")
    logger.info("database_connected", database=engine.url.database)

    if settings.AUTO_CREATE_TABLES:
        await create_tables()

    redis_client = await get_redis()
    if redis_client:
        logger.info("redis_ready")
    else:
        logger.warning("redis_unavailable", message="Running without cache")

    yield

    await close_redis()
    await engine.dispose()
    logger.info("application_shutdown")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Event planning API: events, guests, vendors and their statistics",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)

register_exception_handlers(app)
app.include_router(api_router)


@app.get("/health", tags=["Health"])
async def health_check():
    """Liveness plus database connectivity, for Docker and load balancers."""
    database_ok = await check_database()
    return {
        "success": True,
        "status": "healthy" if database_ok else "degraded",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "uptime": round(time.monotonic() - STARTED_AT, 2),
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": "connected" if database_ok else "disconnected",
        "cache": await get_cache_stats(),
    }


@app.get("/metrics", tags=["Health"], include_in_schema=False)
def metrics():
    return metrics_endpoint()


@app.get("/", tags=["Root"])
async def root():
    prefix = settings.API_PREFIX
    return {
        "success": True,
        "message": f"Welcome to {settings.APP_NAME}",
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "endpoints": {
            "events": f"{prefix}/events",
            "guests": f"{prefix}/guests",
            "vendors": f"{prefix}/vendors",
        },
    }
