"""
Health check endpoints.
"""

from datetime import datetime
from fastapi import APIRouter

from ...shared import CoreServiceClient, InMemoryRecordSource, get_metrics, get_settings
from ..models import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint.

    Returns:
        System health status
    """
    services = {}

    # Report the configured record source without loading any records
    records_file = get_settings().records_file
    if records_file is None:
        services["record_source"] = CoreServiceClient.__name__
    elif records_file.is_file():
        services["record_source"] = InMemoryRecordSource.__name__
    else:
        services["record_source"] = f"error: records file not found: {records_file}"

    try:
        metrics = get_metrics()
        services["metrics"] = "collecting" if metrics.enabled else "disabled"
    except Exception as e:
        services["metrics"] = f"error: {str(e)}"

    # Determine overall status
    error_services = [name for name, status in services.items() if "error" in status]
    overall_status = "unhealthy" if error_services else "healthy"

    return HealthResponse(
        status=overall_status,
        services=services,
        timestamp=datetime.utcnow().isoformat() + "Z"
    )


@router.get("/health/detailed")
async def detailed_health_check():
    """
    Detailed health check with metrics.

    Returns:
        Comprehensive system status
    """
    health = await health_check()
    settings = get_settings()

    return {
        "health": health.model_dump(),
        "metrics": get_metrics().get_all_metrics(),
        "application": {
            "name": settings.app_name,
            "version": settings.app_version,
            "upstream": settings.upstream_config['base_url'],
            "records_file": str(settings.records_file) if settings.records_file else None,
        },
        "timestamp": datetime.utcnow().isoformat() + "Z"
    }
