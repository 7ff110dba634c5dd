"""
Data models for test case execution.

Defines Pydantic models for declarative test cases, execution configuration,
and the step and test results produced by the executor.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Any, List, Optional

from pydantic import BaseModel, Field, validator, ConfigDict


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class StepAction(str, Enum):
    """Actions a test step can perform."""

    CLICK = "click"
    TYPE = "type"
    VERIFY = "verify"
    WAIT = "wait"


class TestStatus(str, Enum):
    """Overall outcome of a test case."""

    __test__ = False

    PASS = "PASS"
    FAIL = "FAIL"
    ERROR = "ERROR"


class StepStatus(str, Enum):
    """Outcome of a single step."""

    PASS = "PASS"
    FAIL = "FAIL"


class Visibility(Enum):
    """Result of an element visibility check."""

    VISIBLE = "visible"
    NOT_VISIBLE = "not_visible"
    UNKNOWN = "unknown"


class ExecutionConfig(BaseModel):
    """
    Configuration for the test executor.

    ``timeout`` and ``retries`` are accepted and reported but not enforced:
    remote calls are made once, without a deadline.
    """

    model_config = ConfigDict(extra="forbid")

    timeout: int = Field(30000, ge=0, description="Test timeout in milliseconds")
    retries: int = Field(0, ge=0, description="Number of retries on failure")


class TestStep(BaseModel):
    """One atomic UI action within a test case."""

    __test__ = False

    model_config = ConfigDict(extra="forbid")

    description: str = Field(..., description="Human readable label for reporting")
    action: str = Field(..., description="One of click, type, verify, wait")
    selector: Optional[str] = Field(None, description="Opaque strategy:value locator")
    value: Optional[str] = Field(
        None, description="Text to type or verify, or wait duration in milliseconds"
    )

    @validator("value", pre=True)
    def coerce_value(cls, v):
        """Accept numeric values, e.g. wait durations written as numbers."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @property
    def known_action(self) -> Optional[StepAction]:
        """The action as a StepAction, or None when unrecognised."""
        try:
            return StepAction(self.action)
        except ValueError:
            return None


class TestCase(BaseModel):
    """A sequence of steps run against one launched application."""

    __test__ = False

    model_config = ConfigDict(extra="forbid")

    application: str = Field(..., description="Name of the application to launch")
    steps: List[TestStep] = Field(default_factory=list, description="Ordered steps")
    name: Optional[str] = Field(None, description="Optional label for reporting")

    @validator("application")
    def validate_application(cls, v):
        if not v or not v.strip():
            raise ValueError("Application name cannot be empty")
        return v.strip()

    @property
    def display_name(self) -> str:
        return self.name or self.application


class StepResult(BaseModel):
    """Outcome of one executed step."""

    model_config = ConfigDict(extra="forbid")

    step: TestStep = Field(..., description="The executed step")
    status: StepStatus = Field(..., description="Step outcome")
    error: Optional[str] = Field(None, description="Error message if failed")


class TestResult(BaseModel):
    """
    Result of one test case execution.

    Created when execution starts, mutated as steps complete, and finalized
    with the end time and duration before being returned.
    """

    __test__ = False

    model_config = ConfigDict(extra="forbid")

    test_case: TestCase = Field(..., description="The executed test case")
    status: TestStatus = Field(TestStatus.PASS, description="Overall outcome")
    start_time: datetime = Field(default_factory=utc_now, description="Start time")
    end_time: datetime = Field(default_factory=utc_now, description="End time")
    duration: float = Field(0, ge=0, description="Duration in milliseconds")
    steps: List[StepResult] = Field(default_factory=list, description="Step results")
    error: Optional[str] = Field(None, description="Error message if not passed")

    @classmethod
    def begin(cls, test_case: TestCase) -> "TestResult":
        """Create a result with placeholder end time and PASS status."""
        now = utc_now()
        return cls(test_case=test_case, start_time=now, end_time=now)

    def record_pass(self, step: TestStep) -> None:
        self.steps.append(StepResult(step=step, status=StepStatus.PASS))

    def record_failure(self, step: TestStep, message: str) -> None:
        self.steps.append(StepResult(step=step, status=StepStatus.FAIL, error=message))
        self.status = TestStatus.FAIL
        self.error = f"Step failed: {step.description}. Error: {message}"

    def mark_error(self, message: str) -> None:
        self.status = TestStatus.ERROR
        self.error = f"Test execution error: {message}"

    def finalize(self) -> "TestResult":
        """Set the end time and derive the duration from it."""
        # wall clock can step backwards; never end before the start
        self.end_time = max(utc_now(), self.start_time)
        self.duration = (self.end_time - self.start_time).total_seconds() * 1000
        return self

    @property
    def is_success(self) -> bool:
        return self.status == TestStatus.PASS

    @property
    def passed_steps(self) -> List[StepResult]:
        return [s for s in self.steps if s.status == StepStatus.PASS]

    @property
    def failed_step(self) -> Optional[StepResult]:
        """The step that stopped execution, if any."""
        for step_result in self.steps:
            if step_result.status == StepStatus.FAIL:
                return step_result
        return None

    def to_summary(self) -> Dict[str, Any]:
        """Create a summary dictionary for logging."""
        failed = self.failed_step
        return {
            "test_case": self.test_case.display_name,
            "application": self.test_case.application,
            "status": self.status.value,
            "duration": self.duration,
            "steps_total": len(self.test_case.steps),
            "steps_executed": len(self.steps),
            "failed_step": failed.step.description if failed else None,
            "has_error": bool(self.error),
        }
