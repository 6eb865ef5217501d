"""Operator24 Backend Application.

This is the main entry point for the Operator24 backend service.
Operator24 receives a screen recording of an operator at work, samples it
locally with ffmpeg and asks a hosted vision / speech model what the
operator is doing, returning either an automation plan, a free-text
analysis or a transcript.

Modules:
    - analysis: upload endpoints and the three pipelines
    - media: ffmpeg invocations and per-request scratch directories
    - ai_provider: OpenAI / Claude provider wrappers and prompts
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware

from operator24.ai_provider.resolver import build_provider, get_provider, set_provider
from operator24.analysis.router import router as analysis_router
from operator24.analysis.schemas import HealthResponse, LivenessResponse
from operator24.config import get_config
from operator24.media import ffmpeg_version

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

# httpx/httpcore log every connection the SDKs open
for _noisy in (
    "httpx",
    "httpcore",
    "openai",
    "anthropic",
    "python_multipart",
    "multipart",
):
    logging.getLogger(_noisy).setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup/shutdown events."""
    # Startup
    config = get_config()

    configured_level = getattr(logging, config.logging.level.upper(), None)
    if configured_level is not None:
        logging.getLogger().setLevel(configured_level)
        logger.info("Root logger level set to %s", config.logging.level.upper())

    if get_provider() is None:
        set_provider(build_provider(config))
    if get_provider() is None:
        logger.warning("No AI provider configured; upload endpoints will answer 503")

    version = await ffmpeg_version(config.media)
    if version:
        logger.info("Using %s", version)
    else:
        logger.warning(
            "ffmpeg not found at '%s'; frame and audio extraction will fail",
            config.media.ffmpeg_path,
        )

    logger.info(
        f"🚀 Operator24 running on http://{config.server.host}:{config.server.port} "
        f"(default mode: {config.pipeline.default_mode})"
    )

    yield  # Application runs here

    # Shutdown
    logger.info("Application shutdown complete")


# Create FastAPI application with metadata
app = FastAPI(
    title="Operator24 API",
    description="Video upload -> frames/audio -> hosted AI analysis",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_config().server.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(analysis_router)


@app.get("/", response_model=LivenessResponse)
async def root() -> LivenessResponse:
    """Liveness message."""
    return LivenessResponse()


@app.get("/health", response_model=HealthResponse)
async def health(check_provider: bool = False) -> HealthResponse:
    """Health check endpoint.

    Args:
        check_provider: Also make a minimal call to the provider API and
            report the outcome in ``provider_ok``.

    Returns:
        HealthResponse: ffmpeg version, active provider and default mode.
    """
    config = get_config()
    provider = get_provider()

    provider_ok = None
    if check_provider and provider is not None:
        provider_ok = await run_in_threadpool(provider.health_check)

    return HealthResponse(
        status="ok",
        ffmpeg=await ffmpeg_version(config.media),
        provider=provider.name if provider else None,
        provider_ok=provider_ok,
        default_mode=config.pipeline.default_mode,
    )
