"""
Service Layer - FormatService.
"""

from jsdocfmt.services.format_service import (
    SUPPORTED_EXTENSIONS,
    FileFormatResult,
    FormatError,
    FormatService,
)

__all__ = [
    "FormatService",
    "FileFormatResult",
    "FormatError",
    "SUPPORTED_EXTENSIONS",
]
