"""
Common API models shared by all routers.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Body returned for every failed request"""

    error: str
    status: int
    details: Optional[Dict[str, Any]] = None
