"""
Test execution components for Desktop Test Runner.

This module provides the test case models and the executor that runs them
against the desktop automation server.
"""

from .executor import TestExecutor, normalize_app_name, parse_wait_ms
from .models import (
    ExecutionConfig,
    StepAction,
    StepResult,
    StepStatus,
    TestCase,
    TestResult,
    TestStatus,
    TestStep,
    Visibility,
)

__all__ = [
    "TestExecutor",
    "normalize_app_name",
    "parse_wait_ms",
    "ExecutionConfig",
    "StepAction",
    "StepResult",
    "StepStatus",
    "TestCase",
    "TestResult",
    "TestStatus",
    "TestStep",
    "Visibility",
]
