"""
Remote desktop automation layer for Desktop Test Runner.

Provides the HTTP client and locator handles used to drive applications
through the desktop automation server.
"""

from .client import DesktopUseClient, Locator, DEFAULT_BASE_URL
from .models import (
    SelectorChainRequest,
    ElementText,
    VisibilityResponse,
    ApiErrorResponse,
)

__all__ = [
    "DesktopUseClient",
    "Locator",
    "DEFAULT_BASE_URL",
    "SelectorChainRequest",
    "ElementText",
    "VisibilityResponse",
    "ApiErrorResponse",
]
