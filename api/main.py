from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.middleware import SlowAPIMiddleware
from slowapi.errors import RateLimitExceeded

# Initialize OpenTelemetry (must be first)
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from common.core.telemetry import (
    _initialize_telemetry,
    get_logger,
)  # noqa

from common.core.config import get_settings
from common.core.constants import Environment
from api.v1.routes.router import api_router
from common.providers.rate_limiter.limiter import limiter


_initialize_telemetry()

# Get logger
logger = get_logger(__name__)

# Fails fast with the names of any missing variables
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("Starting application...")
    if not settings.uploads_enabled:
        logger.warning(
            "GOOGLE_DRIVE_FOLDER_ID is not set, documents will be saved without files"
        )
    yield
    # Shutdown
    logger.info("Shutting down application...")


# Only expose OpenAPI docs in local development
docs_url = "/docs" if settings.environment == Environment.LOCAL else None
redoc_url = "/redoc" if settings.environment == Environment.LOCAL else None
openapi_url = "/openapi.json" if settings.environment == Environment.LOCAL else None

app = FastAPI(
    title=settings.app_name,
    version=settings.api_version,
    lifespan=lifespan,
    docs_url=docs_url,
    redoc_url=redoc_url,
    openapi_url=openapi_url,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)


# Instrument FastAPI with OpenTelemetry
FastAPIInstrumentor.instrument_app(app)

# Add gzip compression middleware
app.add_middleware(GZipMiddleware, minimum_size=1000)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers (auth enforced via dependencies on each route)
app.include_router(api_router, prefix="/api/v1")


@app.get("/healthz", include_in_schema=False)
async def healthz():
    return {"status": "ok"}
