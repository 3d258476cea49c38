"""
System API models.
"""

from typing import Dict

from pydantic import BaseModel


class SystemStatus(BaseModel):
    """Process status snapshot"""

    status: str
    uptime: float
    memory_usage: Dict[str, float]
    storage_backend: str
    signing_enabled: bool
