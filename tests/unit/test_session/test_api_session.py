"""Unit tests for the API Session Fixture."""

from unittest.mock import patch

import httpx
import pytest

from conformance.session.api import API_KEY_HEADER, ApiSession, open_api_session
from conformance.session.errors import FixtureLifecycleError, InteractionTimeoutError
from conformance.settings import AppSettings
from tests.helpers.reqres_stub import ReqresStub


@pytest.fixture
def stub() -> ReqresStub:
    return ReqresStub()


@pytest.fixture
def suite_settings() -> AppSettings:
    return AppSettings(
        api_base_url="https://reqres.test",
        api_key="test-key",
        api_timeout_seconds=10.0,
    )


class TestApiSession:
    """Tests for ApiSession requests."""

    def test_sends_static_api_key(
        self, stub: ReqresStub, suite_settings: AppSettings
    ) -> None:
        with ApiSession.from_settings(suite_settings, transport=stub.transport) as api:
            api.get("/api/users", params={"page": 2})

        sent = stub.stats.request_log[0]
        assert sent.headers[API_KEY_HEADER] == "test-key"
        assert sent.url == "https://reqres.test/api/users?page=2"

    def test_headers_property_is_redacted(
        self, stub: ReqresStub, suite_settings: AppSettings
    ) -> None:
        with ApiSession.from_settings(suite_settings, transport=stub.transport) as api:
            assert api.headers[API_KEY_HEADER] == "[REDACTED]"

    def test_post_and_put_send_json(
        self, stub: ReqresStub, suite_settings: AppSettings
    ) -> None:
        with ApiSession.from_settings(suite_settings, transport=stub.transport) as api:
            created = api.post("/api/users", json={"name": "Ana", "job": "QA"})
            updated = api.put("/api/users/2", json={"name": "Ana", "job": "Lead"})

        assert created.status_code == 201
        assert created.json()["name"] == "Ana"
        assert updated.status_code == 200
        assert updated.json()["job"] == "Lead"

    def test_non_2xx_is_returned_not_raised(
        self, stub: ReqresStub, suite_settings: AppSettings
    ) -> None:
        """Status codes are for Assertion Specifications to judge."""
        with ApiSession.from_settings(suite_settings, transport=stub.transport) as api:
            response = api.get("/api/users/999999")

        assert response.status_code == 404

    def test_timeout_raises_dedicated_error(
        self, stub: ReqresStub, suite_settings: AppSettings
    ) -> None:
        with (
            ApiSession.from_settings(suite_settings, transport=stub.transport) as api,
            pytest.raises(InteractionTimeoutError) as exc_info,
        ):
            api.get("/api/users", params={"delay": 5}, timeout=2.0)

        assert exc_info.value.timeout_seconds == 2.0
        assert exc_info.value.operation == "GET /api/users"
        assert "timed out" in str(exc_info.value)

    def test_default_timeout_applies(
        self, stub: ReqresStub, suite_settings: AppSettings
    ) -> None:
        """Without a per-call ceiling the session default (10s) is used."""
        with ApiSession.from_settings(suite_settings, transport=stub.transport) as api:
            response = api.get("/api/users", params={"delay": 5})

        assert response.status_code == 200

    def test_default_timeout_reported_on_timeout(
        self, stub: ReqresStub, suite_settings: AppSettings
    ) -> None:
        with (
            ApiSession.from_settings(suite_settings, transport=stub.transport) as api,
            pytest.raises(InteractionTimeoutError) as exc_info,
        ):
            api.get("/api/users", params={"delay": 30})

        assert exc_info.value.timeout_seconds == 10.0

    def test_connection_errors_propagate(self, suite_settings: AppSettings) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        with (
            ApiSession.from_settings(
                suite_settings, transport=httpx.MockTransport(refuse)
            ) as api,
            pytest.raises(httpx.ConnectError),
        ):
            api.get("/api/users")

    def test_request_after_dispose_fails(
        self, stub: ReqresStub, suite_settings: AppSettings
    ) -> None:
        api = ApiSession.from_settings(suite_settings, transport=stub.transport)
        api.dispose()

        with pytest.raises(FixtureLifecycleError) as exc_info:
            api.get("/api/users")

        assert exc_info.value.phase == "use"
        assert stub.stats.requests_total == 0

    def test_dispose_is_idempotent(
        self, stub: ReqresStub, suite_settings: AppSettings
    ) -> None:
        api = ApiSession.from_settings(suite_settings, transport=stub.transport)

        api.dispose()
        api.dispose()

        assert api.closed

    def test_dispose_failure_is_logged_not_raised(
        self, stub: ReqresStub, suite_settings: AppSettings
    ) -> None:
        api = ApiSession.from_settings(suite_settings, transport=stub.transport)

        with patch.object(httpx.Client, "close", side_effect=RuntimeError("stuck")):
            api.dispose()


class TestOpenApiSession:
    """Tests for the scoped construct/use/dispose lifecycle."""

    def test_disposes_after_use(
        self, stub: ReqresStub, suite_settings: AppSettings
    ) -> None:
        with open_api_session(suite_settings, transport=stub.transport) as api:
            assert not api.closed

        assert api.closed

    def test_disposes_when_body_raises(
        self, stub: ReqresStub, suite_settings: AppSettings
    ) -> None:
        with (
            pytest.raises(ValueError, match="test body failed"),
            open_api_session(suite_settings, transport=stub.transport) as api,
        ):
            raise ValueError("test body failed")

        assert api.closed

    def test_setup_failure_is_fixture_error(self, suite_settings: AppSettings) -> None:
        with (
            patch.object(
                ApiSession, "from_settings", side_effect=RuntimeError("no pool")
            ),
            pytest.raises(FixtureLifecycleError) as exc_info,
            open_api_session(suite_settings),
        ):
            pass

        assert exc_info.value.phase == "setup"
        assert exc_info.value.fixture == "api_session"
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_sessions_are_independent(
        self, stub: ReqresStub, suite_settings: AppSettings
    ) -> None:
        """A session disposed in one group does not affect the next."""
        with open_api_session(suite_settings, transport=stub.transport) as first:
            pass
        with open_api_session(suite_settings, transport=stub.transport) as second:
            response = second.get("/api/users")

        assert first.closed
        assert response.status_code == 200
