"""API Session Fixture bound to a base origin and static headers.

The session is constructed explicitly once per test group and disposed
explicitly afterwards. `open_api_session` scopes that lifecycle so the
underlying connection pool is released even when a test body raises.
"""

import time
from collections.abc import Iterator
from contextlib import contextmanager
from types import TracebackType
from typing import Any

import httpx
import structlog

from conformance.observability import bind_component
from conformance.session.errors import FixtureLifecycleError, InteractionTimeoutError
from conformance.session.redact import redact_headers
from conformance.settings import AppSettings


logger = structlog.get_logger()

API_KEY_HEADER = "x-api-key"
FIXTURE_NAME = "api_session"


class ApiSession:
    """Request context for the REST API under test.

    Carries no per-test state beyond its static headers, so one instance
    can be shared by every test in a group.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout_seconds: float = 30.0,
        transport: httpx.BaseTransport | None = None,
        run_id: str | None = None,
    ) -> None:
        """Initialize the API session.

        Args:
            base_url: Origin every request path is resolved against.
            api_key: Value of the static API-key header.
            timeout_seconds: Default ceiling for each request.
            transport: Optional httpx transport (used for offline tests).
            run_id: Optional run ID pinned on every log event; when omitted,
                events carry the run ID of the scenario in progress.
        """
        self._run_id = run_id
        self._timeout_seconds = timeout_seconds
        self._client = httpx.Client(
            base_url=base_url,
            headers={API_KEY_HEADER: api_key, "Accept": "application/json"},
            timeout=timeout_seconds,
            transport=transport,
        )
        self._log = bind_component(logger, "session", run_id, session="api")
        self._log.info(
            "api_session_opened",
            base_url=base_url,
            headers=redact_headers(self._client.headers),
            timeout_seconds=timeout_seconds,
        )

    @classmethod
    def from_settings(
        cls,
        settings: AppSettings,
        transport: httpx.BaseTransport | None = None,
        run_id: str | None = None,
    ) -> "ApiSession":
        """Build a session from suite settings."""
        return cls(
            base_url=settings.api_base_url,
            api_key=settings.api_key,
            timeout_seconds=settings.api_timeout_seconds,
            transport=transport,
            run_id=run_id,
        )

    @property
    def run_id(self) -> str | None:
        """Get the pinned run ID, if any."""
        return self._run_id

    @property
    def closed(self) -> bool:
        """Whether the session has been disposed."""
        return self._client.is_closed

    @property
    def headers(self) -> dict[str, str]:
        """Static headers, redacted."""
        return redact_headers(self._client.headers)

    def get(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> httpx.Response:
        """Send a GET request."""
        return self.request("GET", path, params=params, timeout=timeout)

    def post(
        self,
        path: str,
        json: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> httpx.Response:
        """Send a POST request with a JSON body."""
        return self.request("POST", path, json=json, timeout=timeout)

    def put(
        self,
        path: str,
        json: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> httpx.Response:
        """Send a PUT request with a JSON body."""
        return self.request("PUT", path, json=json, timeout=timeout)

    def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> httpx.Response:
        """Send one request and wait for the complete response.

        Args:
            method: HTTP method.
            path: Path relative to the session origin.
            params: Optional query parameters.
            json: Optional JSON body.
            timeout: Per-request ceiling in seconds; the session default
                applies when omitted.

        Returns:
            The fully read response, whatever its status code.

        Raises:
            FixtureLifecycleError: If the session was already disposed.
            InteractionTimeoutError: If the request exceeds its ceiling.
            httpx.HTTPError: For any other transport failure.
        """
        if self.closed:
            raise FixtureLifecycleError(
                f"{FIXTURE_NAME} is closed; cannot send {method} {path}",
                fixture=FIXTURE_NAME,
                phase="use",
            )

        operation = f"{method} {path}"
        ceiling = timeout if timeout is not None else self._timeout_seconds
        log = self._log.bind(method=method, path=path, params=params)
        start_time = time.perf_counter()

        try:
            response = self._client.request(
                method,
                path,
                params=params,
                json=json,
                timeout=timeout if timeout is not None else httpx.USE_CLIENT_DEFAULT,
            )
        except httpx.TimeoutException as e:
            log.warning(
                "api_request_timeout",
                timeout_seconds=ceiling,
                error_type=type(e).__name__,
            )
            raise InteractionTimeoutError(operation, ceiling, cause=str(e)) from e

        duration_ms = (time.perf_counter() - start_time) * 1000
        log.info(
            "api_request_complete",
            status_code=response.status_code,
            bytes=len(response.content),
            duration_ms=round(duration_ms, 2),
        )
        return response

    def dispose(self) -> None:
        """Release pooled connections.

        Failures are logged and not retried.
        """
        if self.closed:
            return
        try:
            self._client.close()
        except Exception as e:  # noqa: BLE001
            self._log.warning(
                "api_session_dispose_failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            return
        self._log.info("api_session_disposed")

    def __enter__(self) -> "ApiSession":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.dispose()


@contextmanager
def open_api_session(
    settings: AppSettings,
    transport: httpx.BaseTransport | None = None,
    run_id: str | None = None,
) -> Iterator[ApiSession]:
    """Construct an API session, yield it, and always dispose it.

    Args:
        settings: Suite settings providing origin, key and timeout.
        transport: Optional httpx transport (used for offline tests).
        run_id: Optional run ID for logging.

    Yields:
        The open session.

    Raises:
        FixtureLifecycleError: If the session cannot be constructed.
    """
    try:
        session = ApiSession.from_settings(settings, transport=transport, run_id=run_id)
    except Exception as e:
        logger.error(
            "api_session_setup_failed",
            component="session",
            error=str(e),
            error_type=type(e).__name__,
        )
        raise FixtureLifecycleError(
            f"Failed to construct {FIXTURE_NAME}: {e}",
            fixture=FIXTURE_NAME,
            phase="setup",
        ) from e

    try:
        yield session
    finally:
        session.dispose()
