"""
Unit tests for the exception hierarchy.
"""

import pytest

from desktop_test_runner.core.exceptions import (
    ApiError,
    AutomationConnectionError,
    DesktopTestRunnerError,
    LaunchError,
    LocateError,
    StepExecutionError,
    UnknownActionError,
    ValidationError,
    VerificationError,
)


class TestExceptionHierarchy:
    """Test cases for exception classes."""

    @pytest.mark.parametrize(
        "error",
        [
            AutomationConnectionError("down"),
            ApiError("bad", status=500),
            LaunchError("launch"),
            LocateError("locate"),
            ValidationError("missing"),
            VerificationError("a", "b"),
            UnknownActionError("scroll"),
        ],
    )
    def test_all_share_base(self, error):
        assert isinstance(error, DesktopTestRunnerError)

    def test_api_error_is_connection_error(self):
        error = ApiError("Application not found", status=404, endpoint="/open_application")

        assert isinstance(error, AutomationConnectionError)
        assert error.error_code == "AUTOMATION_API_ERROR"
        assert error.context == {"endpoint": "/open_application", "status": 404}
        assert str(error) == "(404): Application not found"

    def test_step_errors(self):
        for error in [ValidationError("x"), VerificationError("a", "b"), UnknownActionError("y")]:
            assert isinstance(error, StepExecutionError)

    def test_launch_error_to_dict(self):
        error = LaunchError("Failed to launch calc", app_name="calc", status_code=500)

        assert error.to_dict() == {
            "error_type": "LaunchError",
            "message": "Failed to launch calc",
            "error_code": "APP_LAUNCH_FAILED",
            "context": {"app_name": "calc", "status_code": 500},
        }

    def test_verification_error_message(self):
        error = VerificationError(expected="Goodbye", actual="Hello World")

        assert error.message == (
            'Verification failed. Expected text containing "Goodbye" but got "Hello World"'
        )
        assert error.context == {"expected": "Goodbye", "actual": "Hello World"}

    def test_validation_error_context(self):
        error = ValidationError("Missing selector", action="click", field_name="selector")

        assert error.error_code == "VALIDATION_FAILED"
        assert error.context == {"action": "click", "field_name": "selector"}
