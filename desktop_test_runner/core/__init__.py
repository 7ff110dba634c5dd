"""Core components for Desktop Test Runner."""

from .config import Config
from .exceptions import (
    DesktopTestRunnerError,
    AutomationConnectionError,
    ApiError,
    LaunchError,
    LocateError,
    StepExecutionError,
    ValidationError,
    VerificationError,
    UnknownActionError,
)
from .logging_config import setup_logging, get_logger

__all__ = [
    "Config",
    "DesktopTestRunnerError",
    "AutomationConnectionError",
    "ApiError",
    "LaunchError",
    "LocateError",
    "StepExecutionError",
    "ValidationError",
    "VerificationError",
    "UnknownActionError",
    "setup_logging",
    "get_logger",
]
