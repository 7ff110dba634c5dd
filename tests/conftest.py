"""
Pytest configuration and shared fixtures for Desktop Test Runner tests.

Provides a fake automation client, a recording sleep, and sample test cases
for all test modules.
"""

import logging
from unittest.mock import MagicMock, AsyncMock

import pytest

from desktop_test_runner.automation.models import ElementText
from desktop_test_runner.execution.executor import TestExecutor
from desktop_test_runner.execution.models import ExecutionConfig, TestCase, TestStep


@pytest.fixture
def mock_element():
    """Create a mock element handle with every remote operation succeeding."""
    element = MagicMock()
    element.click = AsyncMock(return_value={})
    element.type_text = AsyncMock(return_value={})
    element.get_text = AsyncMock(return_value=ElementText(text="Hello World"))
    element.is_visible = AsyncMock(return_value=True)
    element.press_key = AsyncMock(return_value={})
    return element


@pytest.fixture
def mock_client(mock_element):
    """Create a mock desktop automation client."""
    client = MagicMock()
    client.base_url = "http://127.0.0.1:9375"
    client.open_application = AsyncMock(return_value={})
    client.locator = MagicMock(return_value=mock_element)
    client.close = AsyncMock()
    return client


@pytest.fixture
def mock_sleep():
    """Record sleeps instead of waiting."""
    return AsyncMock()


@pytest.fixture
def test_logger():
    return logging.getLogger("tests.desktop_test_runner")


@pytest.fixture
def executor(mock_client, mock_sleep, test_logger):
    """Create a test executor wired to the mock client."""
    return TestExecutor(
        config=ExecutionConfig(timeout=5000, retries=0),
        client=mock_client,
        logger=test_logger,
        run_id="run_test_123",
        sleep=mock_sleep,
    )


@pytest.fixture
def calculator_test_case():
    """A passing calculator test case."""
    return TestCase(
        name="Calculator addition",
        application="calculator",
        steps=[
            TestStep(description="Press 1", action="click", selector="name:One"),
            TestStep(description="Press plus", action="click", selector="name:Plus"),
            TestStep(description="Press 2", action="click", selector="name:Two"),
            TestStep(description="Press equals", action="click", selector="name:Equals"),
            TestStep(
                description="Check result",
                action="verify",
                selector="id:CalculatorResults",
                value="Hello",
            ),
        ],
    )
