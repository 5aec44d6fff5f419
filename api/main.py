"""
FastAPI Main Application
========================

Main FastAPI application instance with middleware, routes, and lifespan management.

Run with:
    uvicorn api.main:app --reload
"""

import logging
from contextlib import asynccontextmanager
from typing import Dict, Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.middleware.error_handler import error_handler_middleware
from api.middleware.rate_limiter import setup_rate_limiting
from api.routes import health, consultations
from api.services.consultation_store import ConsultationStore
from config import get_settings
from pipeline import create_pipeline


# Set up module logger
logger = logging.getLogger(__name__)

# Global application state - stores pipeline and other singletons
app_state: Dict[str, Any] = {}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan event handler for startup and shutdown.

    Startup:
    - Creates the note pipeline and the consultation store
    - Stores references in app_state for dependency injection

    Shutdown:
    - Clears state (consultations are not persisted)
    """
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper(), format=settings.log_format)

    logger.info("Starting ConsultScribe API...")
    logger.info(
        f"Translation: {'enabled' if settings.enable_translation else 'disabled'} "
        f"(target: {settings.translation_target_language})"
    )

    try:
        app_state["pipeline"] = create_pipeline(settings)
        logger.info("Pipeline loaded successfully")
    except Exception as e:
        logger.error(f"Failed to initialize pipeline: {e}")
        # Store None - health check will report unhealthy
        app_state["pipeline"] = None

    app_state["settings"] = settings
    app_state.setdefault("consultation_store", ConsultationStore())
    logger.info(f"API running at http://{settings.api_host}:{settings.api_port}")
    logger.info(f"Docs available at http://{settings.api_host}:{settings.api_port}/api/docs")

    yield  # Application runs here

    logger.info("Shutting down ConsultScribe API...")
    app_state.clear()


# Create FastAPI application
app = FastAPI(
    title="ConsultScribe API",
    description="""
    Consultation documentation assistant - turn recorded consultations into draft SOAP notes.

    ## Features
    - Hindi/English detection with best-effort translation
    - Rule-based symptom, timeline, severity and onset extraction
    - Clinical signals, consistency checks, risk and distress flags
    - Doctor review workflow: edit, approve or reject, then send

    All analysis is heuristic and every note must be reviewed by a doctor.
    """,
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json"
)


# =============================================================================
# Middleware Setup (order matters - first added = outermost)
# =============================================================================

settings = get_settings()

# CORS middleware - allow the review dashboard's origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Global error handling middleware
app.middleware("http")(error_handler_middleware)

# Rate limiting setup
setup_rate_limiting(app)


# =============================================================================
# Router Registration
# =============================================================================

app.include_router(
    health.router,
    prefix="/api/v1",
    tags=["health"]
)

app.include_router(
    consultations.router,
    prefix="/api/v1",
    tags=["consultations"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["root"])
async def root():
    """
    Root endpoint - API information and links.
    """
    return {
        "message": "ConsultScribe API",
        "description": "Consultation transcripts to draft SOAP notes for doctor review",
        "version": "1.0.0",
        "docs": "/api/docs",
        "redoc": "/api/redoc",
        "health": "/api/v1/health"
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower()
    )
