"""
Health Check Endpoints
======================

API health check endpoints for monitoring and Kubernetes probes.
"""

import logging
import psutil
from typing import Dict, Optional
from enum import Enum

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from config import Settings
from api.dependencies import get_pipeline, get_consultation_store
from api.services.consultation_store import ConsultationStore
from core.translator import MockTranslator
from models import utc_now
from pipeline import ClinicalNotePipeline


# Set up module logger
logger = logging.getLogger(__name__)

router = APIRouter()


class ServiceStatus(str, Enum):
    """Service health status enumeration."""
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


class HealthStatus(str, Enum):
    """Overall application health status."""
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


class ServiceCheckResult(BaseModel):
    """Result of an individual service health check."""
    status: ServiceStatus = Field(description="Service health status")
    message: Optional[str] = Field(None, description="Status message or error details")


class SystemMetrics(BaseModel):
    """System resource metrics."""
    cpu_percent: float = Field(description="CPU usage percentage")
    memory_percent: float = Field(description="Memory usage percentage")
    memory_available_mb: float = Field(description="Available memory in MB")
    disk_usage_percent: float = Field(description="Disk usage percentage")


class HealthCheckResponse(BaseModel):
    """Comprehensive health check response."""
    status: HealthStatus = Field(description="Overall health status")
    timestamp: str = Field(description="ISO 8601 timestamp of the health check")
    services: Dict[str, ServiceCheckResult] = Field(description="Individual service statuses")
    system_metrics: SystemMetrics = Field(description="System resource metrics")


class ReadinessResponse(BaseModel):
    """Kubernetes readiness probe response."""
    status: str = Field(description="Readiness status")
    message: str = Field(description="Status message")
    timestamp: str = Field(description="ISO 8601 timestamp")


class LivenessResponse(BaseModel):
    """Kubernetes liveness probe response."""
    status: str = Field(description="Liveness status")
    timestamp: str = Field(description="ISO 8601 timestamp")


def timestamp_now() -> str:
    return utc_now().isoformat().replace("+00:00", "Z")


def check_translator(pipeline: ClinicalNotePipeline, settings: Settings) -> ServiceCheckResult:
    """
    Report translation configuration.

    No network call is made: translation is best-effort, and a failing
    translator only degrades Hindi notes to untranslated text, so it is
    never a critical service.
    """
    if not settings.enable_translation:
        return ServiceCheckResult(
            status=ServiceStatus.DEGRADED,
            message="Translation disabled; Hindi transcripts are processed untranslated"
        )

    try:
        translator = pipeline.translator
    except Exception as e:
        logger.warning(f"Translator health check failed: {e}")
        return ServiceCheckResult(
            status=ServiceStatus.UNHEALTHY,
            message=f"Error: {str(e)}"
        )

    if isinstance(translator, MockTranslator):
        return ServiceCheckResult(status=ServiceStatus.HEALTHY, message="Mock translator")

    return ServiceCheckResult(
        status=ServiceStatus.HEALTHY,
        message=(
            f"{settings.translation_endpoint} -> '{settings.translation_target_language}' "
            f"(timeout {settings.translation_timeout_seconds:g}s)"
        )
    )


def check_store(store: ConsultationStore) -> ServiceCheckResult:
    return ServiceCheckResult(
        status=ServiceStatus.HEALTHY,
        message=f"In-memory, {len(store)} consultation(s)"
    )


def get_system_metrics() -> SystemMetrics:
    """
    Gather system resource metrics.

    Returns:
        SystemMetrics with CPU, memory, and disk usage
    """
    try:
        cpu_percent = psutil.cpu_percent(interval=0.1)

        memory = psutil.virtual_memory()
        memory_percent = memory.percent
        memory_available_mb = memory.available / (1024 * 1024)

        # Disk usage (root partition)
        disk = psutil.disk_usage('/')
        disk_usage_percent = disk.percent

        return SystemMetrics(
            cpu_percent=round(cpu_percent, 2),
            memory_percent=round(memory_percent, 2),
            memory_available_mb=round(memory_available_mb, 2),
            disk_usage_percent=round(disk_usage_percent, 2)
        )
    except Exception as e:
        logger.error(f"Failed to gather system metrics: {e}")
        return SystemMetrics(
            cpu_percent=0.0,
            memory_percent=0.0,
            memory_available_mb=0.0,
            disk_usage_percent=0.0
        )


def determine_overall_status(services: Dict[str, ServiceCheckResult]) -> HealthStatus:
    """
    Determine overall health status based on individual service statuses.

    Logic:
    - UNHEALTHY: a critical service (api, pipeline) is unhealthy
    - DEGRADED: any other service is unhealthy or degraded
    - HEALTHY: otherwise
    """
    critical_services = ["api", "pipeline"]

    for service_name in critical_services:
        if service_name in services and services[service_name].status == ServiceStatus.UNHEALTHY:
            return HealthStatus.UNHEALTHY

    if any(s.status != ServiceStatus.HEALTHY for s in services.values()):
        return HealthStatus.DEGRADED
    return HealthStatus.HEALTHY


@router.get(
    "/health",
    response_model=HealthCheckResponse,
    status_code=status.HTTP_200_OK,
    summary="Comprehensive health check",
    description="""
    Comprehensive health check endpoint that checks all services and system metrics.

    This endpoint verifies:
    - API service availability
    - Note pipeline initialization
    - Translation configuration
    - Consultation store
    - System resource metrics (CPU, memory, disk)

    Returns HTTP 200 with detailed status information even if some services are degraded.
    Use the 'status' field to determine overall health.
    """
)
async def health_check(
    pipeline: ClinicalNotePipeline = Depends(get_pipeline),
    store: ConsultationStore = Depends(get_consultation_store),
) -> HealthCheckResponse:
    logger.debug("Performing comprehensive health check")

    services = {
        "api": ServiceCheckResult(
            status=ServiceStatus.HEALTHY,
            message="API is running"
        ),
        "pipeline": ServiceCheckResult(
            status=ServiceStatus.HEALTHY,
            message="Rule-based note pipeline loaded"
        ),
        "translator": check_translator(pipeline, pipeline.settings),
        "consultation_store": check_store(store),
    }

    system_metrics = get_system_metrics()
    overall_status = determine_overall_status(services)

    logger.info(f"Health check completed: {overall_status.value}")
    if overall_status != HealthStatus.HEALTHY:
        unhealthy_services = [
            name for name, check in services.items()
            if check.status != ServiceStatus.HEALTHY
        ]
        logger.warning(f"Unhealthy/degraded services: {unhealthy_services}")

    return HealthCheckResponse(
        status=overall_status,
        timestamp=timestamp_now(),
        services=services,
        system_metrics=system_metrics
    )


@router.get(
    "/health/ready",
    response_model=ReadinessResponse,
    status_code=status.HTTP_200_OK,
    summary="Kubernetes readiness probe",
    description="""
    Kubernetes readiness probe endpoint.

    Returns:
    - HTTP 200 if the pipeline is loaded and ready to accept consultations
    - HTTP 503 if not ready
    """
)
async def readiness_probe(
    pipeline: ClinicalNotePipeline = Depends(get_pipeline),
) -> ReadinessResponse:
    translator_result = check_translator(pipeline, pipeline.settings)
    if translator_result.status == ServiceStatus.UNHEALTHY:
        logger.warning(f"Readiness probe failed: {translator_result.message}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Not ready: {translator_result.message}"
        )

    logger.debug("Readiness probe: READY")
    return ReadinessResponse(
        status="ready",
        message="Application is ready to serve traffic",
        timestamp=timestamp_now()
    )


@router.get(
    "/health/live",
    response_model=LivenessResponse,
    status_code=status.HTTP_200_OK,
    summary="Kubernetes liveness probe",
    description="""
    Kubernetes liveness probe endpoint.

    This endpoint performs a minimal check to verify the application process is alive.
    It does not check dependencies.
    """
)
async def liveness_probe() -> LivenessResponse:
    """
    Check if the application process is alive.

    Returns:
        LivenessResponse with alive status
    """
    logger.debug("Liveness probe: ALIVE")
    return LivenessResponse(
        status="alive",
        timestamp=timestamp_now()
    )
