"""
Test executor for declarative desktop UI test cases.

Launches the application under test, runs each step through the desktop
automation client in declaration order, and aggregates step outcomes into a
single test result with timing.
"""

import asyncio
import re
import time
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Union

from ..automation.client import DEFAULT_BASE_URL, DesktopUseClient, Locator
from ..core.exceptions import (
    ApiError,
    LaunchError,
    LocateError,
    UnknownActionError,
    ValidationError,
    VerificationError,
)
from ..core.logging_config import get_logger, log_performance
from .models import (
    ExecutionConfig,
    StepAction,
    TestCase,
    TestResult,
    TestStatus,
    TestStep,
    Visibility,
)


APP_SETTLE_DELAY_MS = 2000
DEFAULT_WAIT_MS = 1000

# Friendly names mapped to the executable the automation server expects
APP_ALIASES: Dict[str, str] = {
    "calculator": "calc",
}

_LEADING_INTEGER = re.compile(r"^\s*([+-]?\d+)")

SleepFunc = Callable[[float], Awaitable[Any]]


def normalize_app_name(app_name: str) -> str:
    """Map a known application alias to its executable name."""
    return APP_ALIASES.get(app_name.lower(), app_name)


def parse_wait_ms(value: Optional[str]) -> Optional[int]:
    """
    Parse a wait duration the way JavaScript's parseInt reads it.

    Leading whitespace and trailing garbage are ignored ("50ms" is 50).
    An absent or empty value means the default wait.

    Returns:
        Milliseconds to wait, or None when no leading integer is present
    """
    if not value:
        return DEFAULT_WAIT_MS
    match = _LEADING_INTEGER.match(value)
    if match is None:
        return None
    return int(match.group(1))


def _error_message(error: BaseException) -> str:
    return str(error) or error.__class__.__name__


class TestExecutor:
    """
    Runs test cases against the desktop automation server.

    One executor owns one client connection and runs one test case at a time.
    The primitive operations (launch_app, click, type_text, ...) can also be
    used on their own; unlike execute_test_case they propagate their errors.
    """

    __test__ = False

    def __init__(
        self,
        config: Union[ExecutionConfig, Mapping[str, Any], None] = None,
        client: Optional[DesktopUseClient] = None,
        logger=None,
        run_id: Optional[str] = None,
        sleep: SleepFunc = asyncio.sleep,
    ):
        """
        Initialize the test executor.

        Args:
            config: Timeout and retries settings, as a model or a mapping
            client: Automation client; defaults to one bound to the local server
            logger: Optional logger used for all executor output
            run_id: Identifier attached to log records
            sleep: Coroutine used for settle delays and wait steps
        """
        if config is None:
            config = ExecutionConfig()
        elif not isinstance(config, ExecutionConfig):
            config = ExecutionConfig.model_validate(dict(config))

        self.config = config
        self.run_id = run_id or f"run_{int(time.time())}"
        self.logger = logger or get_logger(__name__, run_id=self.run_id)
        self.client = client if client is not None else DesktopUseClient(DEFAULT_BASE_URL)
        self._sleep = sleep

        self.logger.info(
            "Test executor initialized",
            extra={
                "metadata": {
                    "endpoint": getattr(self.client, "base_url", DEFAULT_BASE_URL),
                    "timeout": self.config.timeout,
                    "retries": self.config.retries,
                }
            },
        )

    @property
    def timeout(self) -> int:
        return self.config.timeout

    @property
    def retries(self) -> int:
        return self.config.retries

    async def close(self) -> None:
        """Release the client connection."""
        await self.client.close()

    async def __aenter__(self) -> "TestExecutor":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def launch_app(self, app_name: str) -> None:
        """
        Open an application and wait for it to settle.

        Args:
            app_name: Application name; known aliases are normalised

        Raises:
            LaunchError: The server could not open the application
        """
        executable = normalize_app_name(app_name)

        try:
            self.logger.info(f"Launching application: {executable}...")
            await self.client.open_application(executable)
        except ApiError as e:
            self.logger.error(
                f"API error opening {app_name}: ({e.status}): {e.message}",
                extra={"metadata": e.to_dict()},
            )
            raise LaunchError(
                f"Failed to launch {app_name}: {e}",
                app_name=app_name,
                status_code=e.status,
            ) from e
        except Exception as e:
            self.logger.error(f"Failed to launch {app_name}: {e}")
            raise LaunchError(f"Failed to launch {app_name}: {e}", app_name=app_name) from e

        self.logger.info(f"Successfully launched {executable}")
        await self._sleep(APP_SETTLE_DELAY_MS / 1000)

    async def locate(self, selector: str) -> Locator:
        """
        Resolve a selector to an element handle.

        The selector is passed through untouched; its format belongs to the
        automation server.

        Raises:
            LocateError: The client could not build a handle for the selector
        """
        try:
            return self.client.locator(selector)
        except Exception as e:
            self.logger.error(f'Error locating element with selector "{selector}": {e}')
            raise LocateError(
                f'Error locating element with selector "{selector}": {e}',
                selector=selector,
            ) from e

    async def click(self, selector: str) -> None:
        try:
            element = await self.locate(selector)
            await element.click()
        except Exception as e:
            self.logger.error(f'Error clicking element "{selector}": {e}')
            raise

    async def type_text(self, selector: str, text: str) -> None:
        try:
            element = await self.locate(selector)
            await element.type_text(text)
        except Exception as e:
            self.logger.error(f'Error typing text into "{selector}": {e}')
            raise

    async def get_text(self, selector: str) -> str:
        """Return the text payload of the element matching ``selector``."""
        try:
            element = await self.locate(selector)
            result = await element.get_text()
            return result.text
        except Exception as e:
            self.logger.error(f'Error getting text from "{selector}": {e}')
            raise

    async def check_visibility(self, selector: str) -> Visibility:
        """
        Check whether an element is visible.

        Returns:
            VISIBLE or NOT_VISIBLE as reported by the server, or UNKNOWN when
            the check itself failed
        """
        try:
            element = await self.locate(selector)
            visible = await element.is_visible()
        except Exception as e:
            self.logger.warning(f'Error checking visibility of "{selector}": {e}')
            return Visibility.UNKNOWN

        return Visibility.VISIBLE if visible else Visibility.NOT_VISIBLE

    async def is_visible(self, selector: str) -> bool:
        """Boolean visibility check; failures to check count as not visible."""
        return await self.check_visibility(selector) == Visibility.VISIBLE

    verify_element_visible = is_visible

    async def press_key(self, selector: str, key: str) -> None:
        try:
            element = await self.locate(selector)
            await element.press_key(key)
        except Exception as e:
            self.logger.error(f'Error pressing key "{key}" on element "{selector}": {e}')
            raise

    @staticmethod
    def _require(step: TestStep, field_name: str, label: Optional[str] = None) -> str:
        value = getattr(step, field_name)
        if not value:
            raise ValidationError(
                f"Missing {label or field_name} for {step.action} action "
                f"in step: {step.description}",
                action=step.action,
                field_name=field_name,
            )
        return value

    async def execute_step(self, step: TestStep) -> None:
        """
        Execute one step.

        Required fields are checked before anything is sent to the server.

        Raises:
            ValidationError: A field required by the action is missing
            VerificationError: A verify step found different text
            UnknownActionError: The action is not recognised
        """
        self.logger.info(f"Executing step: {step.description}")
        action = step.known_action

        if action is StepAction.CLICK:
            selector = self._require(step, "selector")
            await self.click(selector)

        elif action is StepAction.TYPE:
            selector = self._require(step, "selector")
            value = self._require(step, "value")
            await self.type_text(selector, value)

        elif action is StepAction.VERIFY:
            selector = self._require(step, "selector")
            expected = self._require(step, "value", "expected value")
            text = await self.get_text(selector)
            if expected not in text:
                raise VerificationError(expected=expected, actual=text)

        elif action is StepAction.WAIT:
            wait_ms = parse_wait_ms(step.value)
            if wait_ms is None:
                self.logger.warning(
                    f"Unparseable wait duration {step.value!r} in step: "
                    f"{step.description}; not waiting"
                )
                wait_ms = 0
            await self._sleep(max(wait_ms, 0) / 1000)

        else:
            raise UnknownActionError(step.action)

    async def execute_test_case(self, test_case: TestCase) -> TestResult:
        """
        Run a test case to completion.

        Steps run in order and execution stops at the first failing step.
        Never raises: a failed launch yields ERROR, a failed step yields FAIL.

        Args:
            test_case: The test case to execute

        Returns:
            Finalized test result
        """
        result = TestResult.begin(test_case)

        self.logger.info(
            f"Starting test case: {test_case.display_name}",
            extra={
                "metadata": {
                    "application": test_case.application,
                    "steps": len(test_case.steps),
                }
            },
        )

        try:
            await self.launch_app(test_case.application)

            for step in test_case.steps:
                try:
                    await self.execute_step(step)
                except Exception as e:
                    message = _error_message(e)
                    self.logger.error(
                        f"Step failed: {step.description}. Error: {message}"
                    )
                    result.record_failure(step, message)
                    break
                result.record_pass(step)

        except Exception as e:
            message = _error_message(e)
            self.logger.error(f"Test execution error: {message}")
            result.mark_error(message)

        result.finalize()

        summary = result.to_summary()
        summary.pop("duration")
        log_performance(
            self.logger,
            f"test_case_{test_case.display_name}",
            result.duration,
            **summary,
        )

        return result

    async def execute_test_cases(self, test_cases: List[TestCase]) -> List[TestResult]:
        """
        Run several test cases one after another.

        Returns:
            One result per test case, in input order
        """
        self.logger.info(f"Starting execution of {len(test_cases)} test cases")

        results = []
        for test_case in test_cases:
            results.append(await self.execute_test_case(test_case))

        passed = sum(1 for r in results if r.status == TestStatus.PASS)
        failed = sum(1 for r in results if r.status == TestStatus.FAIL)
        errors = sum(1 for r in results if r.status == TestStatus.ERROR)

        self.logger.info(
            f"Test execution completed: {passed} passed, {failed} failed, {errors} errors",
            extra={
                "metadata": {
                    "total_tests": len(results),
                    "passed": passed,
                    "failed": failed,
                    "errors": errors,
                }
            },
        )

        return results
