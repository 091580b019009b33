"""
Utility modules for core functionality.

Modules:
- decorators: Timing helpers (timer, timed)
- enum_converter: Enum parsing and conversion
"""

from .decorators import timed, timer
from .enum_converter import enum_to_string, parse_enum

__all__ = [
    "timed",
    "timer",
    "enum_to_string",
    "parse_enum",
]
