"""
API Routers for the Image CDN
"""

from . import image, system

__all__ = ["image", "system"]
