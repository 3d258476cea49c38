"""
Utility modules for core functionality.

Modules:
- decorators: Timing helpers
- enum_converter: Exact enum parsing and conversion
"""

from .decorators import timer
from .enum_converter import allowed_values, parse_enum

__all__ = [
    "allowed_values",
    "parse_enum",
    "timer",
]
