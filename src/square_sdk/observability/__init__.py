"""
Logging for the SDK: structlog processors, setup and logger factories.
"""

from .logging import (
    get_logger,
    get_sdk_logger,
    mask_headers,
    setup_logging,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "get_sdk_logger",
    "mask_headers",
]
