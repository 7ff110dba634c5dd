"""
Desktop Test Runner - declarative UI tests for desktop applications

Executes test cases made of click, type, verify and wait steps against a
desktop automation server and reports per-step and overall results.
"""

__version__ = "0.1.0"
__author__ = "Desktop Test Runner Team"

from .core.config import Config
from .core.exceptions import DesktopTestRunnerError
from .core.logging_config import setup_logging
from .execution.executor import TestExecutor
from .execution.models import ExecutionConfig, TestCase, TestResult, TestStep

__all__ = [
    "Config",
    "DesktopTestRunnerError",
    "setup_logging",
    "TestExecutor",
    "ExecutionConfig",
    "TestCase",
    "TestResult",
    "TestStep",
]
