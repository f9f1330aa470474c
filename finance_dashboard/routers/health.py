"""
Health Check Router
Simple health check endpoint
"""
import logging
from datetime import datetime, timezone

from fastapi import APIRouter

from finance_dashboard.core.config import settings

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health")
def health_check():
    """
    Health check endpoint.
    Returns API status.
    """
    return {
        "status": "healthy",
        "service": settings.PROJECT_NAME,
        "timestamp": datetime.now(timezone.utc).isoformat()
    }
