"""
Base exception classes for Desktop Test Runner.

Provides a hierarchy of exceptions for the errors that can occur while
driving the remote automation server and executing test steps.
"""

from typing import Optional, Dict, Any


class DesktopTestRunnerError(Exception):
    """Base exception class for all Desktop Test Runner errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for structured logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "context": self.context,
        }


class AutomationConnectionError(DesktopTestRunnerError):
    """Raised when the remote automation server cannot be reached."""

    def __init__(
        self,
        message: str,
        endpoint: Optional[str] = None,
        error_code: str = "AUTOMATION_CONNECTION_FAILED",
    ):
        super().__init__(message, error_code)
        self.endpoint = endpoint
        self.context.update({"endpoint": endpoint})


class ApiError(AutomationConnectionError):
    """Raised when the automation server answers with a non-success status."""

    def __init__(
        self,
        message: str,
        status: int,
        endpoint: Optional[str] = None,
    ):
        super().__init__(message, endpoint=endpoint, error_code="AUTOMATION_API_ERROR")
        self.status = status
        self.context.update({"status": status})

    def __str__(self) -> str:
        return f"({self.status}): {self.message}"


class LaunchError(DesktopTestRunnerError):
    """Raised when an application could not be opened."""

    def __init__(
        self,
        message: str,
        app_name: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message, "APP_LAUNCH_FAILED")
        self.app_name = app_name
        self.status_code = status_code
        self.context.update(
            {
                "app_name": app_name,
                "status_code": status_code,
            }
        )


class LocateError(DesktopTestRunnerError):
    """Raised when a selector cannot be resolved to an element."""

    def __init__(self, message: str, selector: Optional[str] = None):
        super().__init__(message, "ELEMENT_LOCATE_FAILED")
        self.selector = selector
        self.context.update({"selector": selector})


class StepExecutionError(DesktopTestRunnerError):
    """Base class for errors raised locally while executing a step."""

    def __init__(
        self,
        message: str,
        error_code: str = "STEP_EXECUTION_FAILED",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code, context)


class ValidationError(StepExecutionError):
    """Raised when a step is missing a field its action requires."""

    def __init__(
        self,
        message: str,
        action: Optional[str] = None,
        field_name: Optional[str] = None,
    ):
        super().__init__(message, "VALIDATION_FAILED")
        self.action = action
        self.field_name = field_name
        self.context.update(
            {
                "action": action,
                "field_name": field_name,
            }
        )


class VerificationError(StepExecutionError):
    """Raised when an element's text does not contain the expected value."""

    def __init__(self, expected: str, actual: str):
        super().__init__(
            f'Verification failed. Expected text containing "{expected}" '
            f'but got "{actual}"',
            "VERIFICATION_FAILED",
        )
        self.expected = expected
        self.actual = actual
        self.context.update(
            {
                "expected": expected,
                "actual": actual,
            }
        )


class UnknownActionError(StepExecutionError):
    """Raised for a step action the executor does not know."""

    def __init__(self, action: Optional[str]):
        super().__init__(f"Unknown step action: {action}", "UNKNOWN_ACTION")
        self.action = action
        self.context.update({"action": action})
