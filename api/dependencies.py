"""
Dependency Injection Functions
==============================

FastAPI dependency injection for the pipeline and the consultation store.
"""

from fastapi import HTTPException, status

from pipeline import ClinicalNotePipeline
from api.services.consultation_store import ConsultationStore


def get_pipeline() -> ClinicalNotePipeline:
    """
    Dependency to get the pipeline instance from app state.

    The pipeline is created during application startup (lifespan).

    Returns:
        ClinicalNotePipeline: The configured pipeline instance

    Raises:
        HTTPException: If pipeline is not initialized
    """
    from api.main import app_state

    pipeline = app_state.get("pipeline")
    if pipeline is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Pipeline not initialized. Service is starting up."
        )
    return pipeline


def get_consultation_store() -> ConsultationStore:
    """
    Dependency to get the consultation store.

    Creates a singleton ConsultationStore if not already in app state.
    """
    from api.main import app_state

    if "consultation_store" not in app_state:
        app_state["consultation_store"] = ConsultationStore()
    return app_state["consultation_store"]
