"""
System API Router - Status and configuration
"""

import logging
import time

import psutil
from fastapi import APIRouter, Depends

from api.dependencies import get_settings_dependency
from api.exceptions import safe_endpoint
from schemas import SystemStatus

logger = logging.getLogger(__name__)

router = APIRouter()

# Track start time
START_TIME = time.time()


@router.get("/status")
@safe_endpoint
async def get_status(settings=Depends(get_settings_dependency)) -> SystemStatus:
    """Get system status"""
    process = psutil.Process()
    memory_info = process.memory_info()
    virtual_memory = psutil.virtual_memory()

    return SystemStatus(
        status="healthy",
        uptime=time.time() - START_TIME,
        memory_usage={
            "process_mb": memory_info.rss / 1024 / 1024,
            "system_percent": virtual_memory.percent,
            "available_mb": virtual_memory.available / 1024 / 1024,
        },
        storage_backend=settings.storage.backend.value,
        signing_enabled=settings.security.signing_enabled,
    )


@router.get("/config")
@safe_endpoint
async def get_config(settings=Depends(get_settings_dependency)) -> dict:
    """Get current configuration (secrets omitted)"""
    return settings.to_dict()
