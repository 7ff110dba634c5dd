"""
Unit tests for execution data models.

Tests test case and step validation, result bookkeeping and timing.
"""

from datetime import timedelta

import pytest
from pydantic import ValidationError as PydanticValidationError

from desktop_test_runner.automation.models import SelectorChainRequest
from desktop_test_runner.execution.models import (
    ExecutionConfig,
    StepAction,
    StepStatus,
    TestCase,
    TestResult,
    TestStatus,
    TestStep,
)


class TestExecutionConfig:
    """Test cases for ExecutionConfig."""

    def test_defaults(self):
        config = ExecutionConfig()

        assert config.timeout == 30000
        assert config.retries == 0

    def test_rejects_negative_values(self):
        with pytest.raises(PydanticValidationError):
            ExecutionConfig(timeout=-1)
        with pytest.raises(PydanticValidationError):
            ExecutionConfig(retries=-1)

    def test_rejects_unknown_fields(self):
        with pytest.raises(PydanticValidationError):
            ExecutionConfig(timeout=1000, retries=0, workers=4)


class TestTestStep:
    """Test cases for TestStep."""

    def test_known_action(self):
        step = TestStep(description="Press 1", action="click", selector="name:One")

        assert step.known_action is StepAction.CLICK
        assert step.value is None

    def test_unknown_action_is_accepted(self):
        step = TestStep(description="Scroll", action="scroll")

        assert step.known_action is None

    def test_numeric_value_is_coerced(self):
        step = TestStep(description="Pause", action="wait", value=250)

        assert step.value == "250"

    def test_from_dict(self):
        step = TestStep.model_validate(
            {"description": "Type", "action": "type", "selector": "id:Editor", "value": "hi"}
        )

        assert step.known_action is StepAction.TYPE
        assert step.selector == "id:Editor"


class TestTestCase:
    """Test cases for TestCase."""

    def test_display_name_defaults_to_application(self):
        assert TestCase(application="notepad").display_name == "notepad"
        assert TestCase(application="notepad", name="Edit").display_name == "Edit"

    def test_empty_application_rejected(self):
        with pytest.raises(PydanticValidationError):
            TestCase(application="   ")

    def test_steps_keep_order(self):
        test_case = TestCase.model_validate(
            {
                "application": "calculator",
                "steps": [
                    {"description": "a", "action": "click", "selector": "name:A"},
                    {"description": "b", "action": "wait"},
                ],
            }
        )

        assert [s.description for s in test_case.steps] == ["a", "b"]


class TestTestResult:
    """Test cases for TestResult bookkeeping."""

    @pytest.fixture
    def test_case(self):
        return TestCase(
            application="notepad",
            steps=[
                TestStep(description="first", action="wait"),
                TestStep(description="second", action="click"),
            ],
        )

    def test_begin(self, test_case):
        result = TestResult.begin(test_case)

        assert result.status == TestStatus.PASS
        assert result.steps == []
        assert result.error is None
        assert result.start_time == result.end_time
        assert result.duration == 0

    def test_record_pass_and_failure(self, test_case):
        result = TestResult.begin(test_case)

        result.record_pass(test_case.steps[0])
        result.record_failure(test_case.steps[1], "Missing selector")

        assert [s.status for s in result.steps] == [StepStatus.PASS, StepStatus.FAIL]
        assert result.status == TestStatus.FAIL
        assert result.error == "Step failed: second. Error: Missing selector"
        assert result.failed_step.step.description == "second"
        assert len(result.passed_steps) == 1
        assert not result.is_success

    def test_mark_error(self, test_case):
        result = TestResult.begin(test_case)

        result.mark_error("connection refused")

        assert result.status == TestStatus.ERROR
        assert result.error == "Test execution error: connection refused"

    def test_finalize_sets_duration(self, test_case):
        result = TestResult.begin(test_case)
        result.start_time = result.start_time - timedelta(milliseconds=1500)

        result.finalize()

        assert result.duration >= 1500
        assert result.duration == (
            (result.end_time - result.start_time).total_seconds() * 1000
        )

    def test_finalize_never_negative(self, test_case):
        result = TestResult.begin(test_case)
        result.start_time = result.start_time + timedelta(hours=1)

        result.finalize()

        assert result.end_time == result.start_time
        assert result.duration == 0

    def test_to_summary(self, test_case):
        result = TestResult.begin(test_case)
        result.record_pass(test_case.steps[0])
        result.finalize()

        summary = result.to_summary()

        assert summary["test_case"] == "notepad"
        assert summary["status"] == "PASS"
        assert summary["steps_total"] == 2
        assert summary["steps_executed"] == 1
        assert summary["failed_step"] is None
        assert summary["has_error"] is False


class TestSelectorChainRequest:
    """Test cases for SelectorChainRequest."""

    def test_rejects_empty_chain(self):
        with pytest.raises(PydanticValidationError):
            SelectorChainRequest(selector_chain=[])
