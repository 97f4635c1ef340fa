"""Request executor - one HTTP call in, one Outcome out.

Design Principles:
    - Pure httpx for all communication
    - Bounded call duration (the timeout cancels the in-flight request)
    - No global state: base URL, token and notification sink are injected
    - Expected failures become ``Failure`` outcomes, never exceptions
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any

import httpx

from netheal.client.outcome import Failure, FailureKind, Outcome, Success
from netheal.core.settings import DEFAULT_API_URL
from netheal.notify import NotificationSink

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
GENERIC_ERROR = "An error occurred"


def serialize_params(params: Mapping[str, Any] | None) -> dict[str, str]:
    """Keep only primitive query values.

    None, containers and arbitrary objects are dropped without error.
    Booleans are rendered the way the API expects them (true/false) and
    enum members by their value.
    """
    if not params:
        return {}

    query: dict[str, str] = {}
    for key, value in params.items():
        if isinstance(value, Enum):
            value = value.value
        if isinstance(value, bool):
            query[key] = "true" if value else "false"
        elif isinstance(value, (str, int, float)):
            query[key] = str(value)
    return query


def error_message(response: httpx.Response) -> str:
    """Human message for a non-2xx response.

    Uses the body's ``message`` field when the body is JSON, otherwise
    falls back to the status line.
    """
    try:
        payload = response.json()
    except ValueError:
        return f"HTTP {response.status_code}: {response.reason_phrase}"

    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return GENERIC_ERROR


class RequestExecutor:
    """Async HTTP executor for the healing platform API.

    Use as an async context manager, or call :meth:`aclose` when done::

        async with RequestExecutor(token="...") as executor:
            outcome = await executor.get("/devices")
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        *,
        auth_token: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        notifier: NotificationSink | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize executor.

        Args:
            base_url: API root, e.g. ``http://localhost:5000/api``
            auth_token: Bearer token; the header is omitted when empty
            timeout: Upper bound on a whole call, in seconds
            notifier: Sink receiving one message per failed call
            client: Pre-built httpx client (tests inject a MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        self.auth_token = auth_token or None
        self.timeout = timeout
        self.notifier = notifier
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self) -> RequestExecutor:
        return self

    async def __aexit__(self, *args) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    @property
    def headers(self) -> dict[str, str]:
        """Get request headers."""
        headers = {"Content-Type": "application/json"}
        if self.auth_token:
            headers["Authorization"] = f"Bearer {self.auth_token}"
        return headers

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                follow_redirects=True,
            )
        return self._client

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    async def execute(
        self,
        endpoint: str,
        method: str = "GET",
        body: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> Outcome:
        """Perform one request and classify its result.

        Args:
            endpoint: Path below the base URL, e.g. ``/devices/42``
            method: HTTP method
            body: JSON-serializable payload, sent only when not None
            params: Query parameters (primitive values only)
        """
        kwargs: dict[str, Any] = {"headers": self.headers}
        query = serialize_params(params)
        if query:
            kwargs["params"] = query
        if body is not None:
            kwargs["json"] = body
        return await self._send(method.upper(), endpoint, kwargs)

    async def get(self, endpoint: str, params: Mapping[str, Any] | None = None) -> Outcome:
        return await self.execute(endpoint, "GET", params=params)

    async def post(self, endpoint: str, body: Any = None) -> Outcome:
        return await self.execute(endpoint, "POST", body=body)

    async def put(self, endpoint: str, body: Any = None) -> Outcome:
        return await self.execute(endpoint, "PUT", body=body)

    async def patch(self, endpoint: str, body: Any = None) -> Outcome:
        return await self.execute(endpoint, "PATCH", body=body)

    async def delete(self, endpoint: str) -> Outcome:
        return await self.execute(endpoint, "DELETE")

    async def upload(self, endpoint: str, filename: str, content: bytes) -> Outcome:
        """Multipart file upload; httpx sets the multipart content type."""
        headers = {k: v for k, v in self.headers.items() if k != "Content-Type"}
        kwargs: dict[str, Any] = {
            "headers": headers,
            "files": {"file": (filename, content)},
        }
        return await self._send("POST", endpoint, kwargs)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    async def _send(self, method: str, endpoint: str, kwargs: dict[str, Any]) -> Outcome:
        url = f"{self.base_url}{endpoint}"
        logger.debug(f"{method} {url}")

        try:
            response = await asyncio.wait_for(
                self._get_client().request(method, url, **kwargs),
                timeout=self.timeout,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException):
            outcome: Outcome = Failure(FailureKind.TIMEOUT, f"Request timed out after {self.timeout:g}s")
        except httpx.RequestError as e:
            outcome = Failure(FailureKind.NETWORK, str(e) or e.__class__.__name__)
        else:
            outcome = self._classify(response)

        if isinstance(outcome, Failure):
            self._report(method, endpoint, outcome)
        return outcome

    def _classify(self, response: httpx.Response) -> Outcome:
        if not response.is_success:
            return Failure(FailureKind.HTTP_ERROR, error_message(response), response.status_code)

        if not response.content:
            return Success(None)
        try:
            return Success(response.json())
        except ValueError:
            return Failure(
                FailureKind.NETWORK,
                "Malformed JSON in response body",
                response.status_code,
            )

    def _report(self, method: str, endpoint: str, failure: Failure) -> None:
        logger.warning(f"API Error: {method} {endpoint} -> {failure}")
        if self.notifier is not None:
            self.notifier.notify(f"API Error: {failure.message}", "error")
