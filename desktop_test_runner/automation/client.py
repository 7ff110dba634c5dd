"""
Desktop automation client.

Thin asynchronous HTTP client for the desktop automation server. Elements are
addressed by locators built from opaque "strategy:value" selector strings; the
server resolves them, this client only forwards them.
"""

import asyncio
import json
import logging
import time
from typing import Dict, Any, Optional, List

import aiohttp
from pydantic import ValidationError as PydanticValidationError

from ..core.exceptions import ApiError, AutomationConnectionError
from ..core.logging_config import log_automation_call
from .models import (
    ApiErrorResponse,
    ElementText,
    SelectorChainRequest,
    VisibilityResponse,
)


DEFAULT_BASE_URL = "http://127.0.0.1:9375"


class DesktopUseClient:
    """
    Client for the desktop automation server.

    Holds a single HTTP session for its whole lifetime. The session is opened
    lazily on the first request and released by ``close()``.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        session: Optional[aiohttp.ClientSession] = None,
        request_timeout: Optional[float] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the automation client.

        Args:
            base_url: Root URL of the automation server
            session: Optional pre-built HTTP session, not closed by this client
            request_timeout: Optional total timeout per request in seconds
            logger: Optional logger instance
        """
        self.base_url = base_url.rstrip("/")
        self.logger = logger or logging.getLogger(__name__)
        self._session = session
        self._owns_session = session is None
        self._request_timeout = request_timeout

    @property
    def is_closed(self) -> bool:
        return self._session is None or bool(getattr(self._session, "closed", False))

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            kwargs: Dict[str, Any] = {}
            if self._request_timeout:
                kwargs["timeout"] = aiohttp.ClientTimeout(total=self._request_timeout)
            self._session = aiohttp.ClientSession(**kwargs)
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close the HTTP session if this client opened it."""
        if self._session is None or not self._owns_session:
            return
        if not self._session.closed:
            await self._session.close()
        self._session = None

    async def __aenter__(self) -> "DesktopUseClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def _make_request(self, endpoint: str, body: Dict[str, Any]) -> Dict[str, Any]:
        """
        POST a JSON body to the server.

        Returns:
            Decoded JSON response, or an empty dict for an empty body

        Raises:
            ApiError: Server answered with a non-success status
            AutomationConnectionError: Server could not be reached or replied garbage
        """
        url = f"{self.base_url}{endpoint}"
        session = self._get_session()
        start = time.monotonic()

        try:
            async with session.post(url, json=body) as response:
                text = await response.text()
                status = response.status

                if status >= 400:
                    message = self._extract_error_message(text) or (
                        response.reason or f"HTTP {status}"
                    )
                    log_automation_call(
                        self.logger, endpoint, time.monotonic() - start, False, status
                    )
                    raise ApiError(message, status=status, endpoint=endpoint)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            log_automation_call(
                self.logger, endpoint, time.monotonic() - start, False, error=str(e)
            )
            raise AutomationConnectionError(
                f"Failed to reach automation server at {url}: {e}",
                endpoint=endpoint,
            ) from e

        log_automation_call(self.logger, endpoint, time.monotonic() - start, True, status)

        if not text.strip():
            return {}

        try:
            data = json.loads(text)
        except ValueError as e:
            raise AutomationConnectionError(
                f"Invalid JSON response from {endpoint}: {e}", endpoint=endpoint
            ) from e

        if not isinstance(data, dict):
            return {"result": data}
        return data

    @staticmethod
    def _extract_error_message(text: str) -> Optional[str]:
        if not text.strip():
            return None
        try:
            payload = ApiErrorResponse.model_validate(json.loads(text))
        except (ValueError, PydanticValidationError):
            return text.strip()
        return payload.detail_message or text.strip()

    async def open_application(self, app_name: str) -> Dict[str, Any]:
        """
        Ask the server to open an application by executable name.

        Args:
            app_name: Executable or application name

        Returns:
            Raw server response
        """
        self.logger.debug(f"Opening application: {app_name}")
        return await self._make_request("/open_application", {"app_name": app_name})

    def locator(self, selector: str) -> "Locator":
        """Create a locator for an opaque selector string."""
        return Locator(self, [selector])


class Locator:
    """Handle to an element on the remote desktop, addressed by a selector chain."""

    def __init__(self, client: DesktopUseClient, selector_chain: List[str]):
        self._client = client
        self._request = SelectorChainRequest(selector_chain=selector_chain)

    @property
    def selector_chain(self) -> List[str]:
        return list(self._request.selector_chain)

    def _body(self, **extra) -> Dict[str, Any]:
        return {**self._request.model_dump(), **extra}

    def locator(self, selector: str) -> "Locator":
        """Create a locator scoped within this one."""
        return Locator(self._client, self.selector_chain + [selector])

    async def first(self) -> Dict[str, Any]:
        """Resolve the first element matching the chain."""
        return await self._client._make_request("/first", self._body())

    async def click(self) -> Dict[str, Any]:
        return await self._client._make_request("/click", self._body())

    async def type_text(self, text: str) -> Dict[str, Any]:
        return await self._client._make_request("/type_text", self._body(text=text))

    async def get_text(self, max_depth: int = 1) -> ElementText:
        response = await self._client._make_request(
            "/get_text", self._body(max_depth=max_depth)
        )
        return ElementText.model_validate(response)

    async def is_visible(self) -> bool:
        response = await self._client._make_request("/is_visible", self._body())
        return VisibilityResponse.model_validate(response).result

    async def press_key(self, key: str) -> Dict[str, Any]:
        return await self._client._make_request("/press_key", self._body(key=key))

    def __repr__(self) -> str:
        return f"Locator({' >> '.join(self.selector_chain)})"
