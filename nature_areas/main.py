import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from . import __version__
from .api.v1.lookup_endpoints import router as lookup_router
from .api.v1.n2000_endpoints import router as n2000_router
from .api.v1.nvv_endpoints import router as nvv_router
from .api.v1.ramsar_endpoints import router as ramsar_router
from .config import get_settings
from .dependencies import close_service_container, get_service_container, init_service_container
from .exceptions import NatureAreasError
from .logging_config import setup_logging
from .models import ErrorDetail, ErrorResponse, HealthResponse
from .rate_limit import limiter

# Setup structured logging based on environment
setup_logging(
    level=os.environ.get('LOG_LEVEL', 'INFO'),
    service_name="nature-areas-backend"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Build the service container at startup and close its upstream
    connection pools at shutdown.

    ``app.state.upstream_transport`` may hold an httpx transport that every
    upstream client should use instead of the network.
    """
    logger.info("Starting Nature Areas Service...")
    settings = get_settings()
    init_service_container(settings, transport=getattr(app.state, "upstream_transport", None))
    logger.info(
        "Upstream APIs configured",
        extra={
            "nvr": settings.NVV_API_BASE,
            "natura2000": settings.N2000_API_BASE,
            "ramsar": settings.RAMSAR_API_BASE,
            "timeout_s": settings.UPSTREAM_TIMEOUT_S,
        }
    )

    try:
        yield  # App ready for traffic
    finally:
        logger.info("Shutting down Nature Areas Service...")
        await close_service_container()


app = FastAPI(
    title="Nature Areas Service",
    description="Swedish protected nature areas (NVR, Natura 2000, Ramsar) with geometry in WGS84",
    version=__version__,
    lifespan=lifespan
)

# Add rate limiting error handler
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(NatureAreasError)
async def nature_areas_error_handler(request: Request, exc: NatureAreasError):
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
    else:
        logger.info(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
    body = ErrorResponse(error=ErrorDetail(type=type(exc).__name__, message=exc.message))
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


# Add CORS middleware
settings = get_settings()
cors_origins = settings.cors_origin_list or ["*"]
logger.info(f"CORS configured for origins: {cors_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=cors_origins != ["*"],
    allow_methods=["GET", "POST", "OPTIONS", "HEAD"],
    allow_headers=["Content-Type", "Accept", "Origin", "User-Agent", "X-Requested-With"],
    expose_headers=["Content-Length", "Content-Type"],
    max_age=86400  # 24 hours
)

# Include routers
app.include_router(nvv_router)
app.include_router(n2000_router)
app.include_router(ramsar_router)
app.include_router(lookup_router)

logger.info("API routes registered:")
logger.info("  NVR endpoints: /v1/nvv/*")
logger.info("  Natura 2000 endpoints: /v1/n2000/*")
logger.info("  Ramsar endpoints: /v1/ramsar/*")
logger.info("  Lookup endpoints: /v1/lookup/*")


@app.get("/health", response_model=HealthResponse, tags=["health"])
async def health_check():
    """Liveness check listing the configured upstream APIs."""
    container_settings = get_service_container().settings
    return HealthResponse(
        status="healthy",
        service="nature-areas-backend",
        version=__version__,
        upstreams={
            "nvr": container_settings.NVV_API_BASE,
            "natura2000": container_settings.N2000_API_BASE,
            "ramsar": container_settings.RAMSAR_API_BASE,
        },
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
