"""
Tests for the directory API endpoints.

Tests FastAPI routes with fake directory providers.
Validates status mapping, response bodies and handle lifecycle.
"""

from unittest.mock import patch

from fastapi.testclient import TestClient

from email_hint.domain.directory.entities import FoundPhone
from email_hint.domain.directory.errors import (
    QueryFailedError,
    StorageUnavailableError,
)
from email_hint.main import create_app
from email_hint.shared import middleware

from tests.fakes import ALICE, FakeDirectoryProvider, FakePhoneDirectory


class TestPhoneLookupEndpoint:
    """Tests for GET /phone/{email_prefix}."""

    def test_matching_prefix_returns_phones(self, client, directory) -> None:
        response = client.get("/phone/alidd")

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/json"
        assert response.json() == [
            {
                "first_name": "Alice",
                "last_name": "Liddell",
                "phone": "+12345",
                "email": "aliddl@x.com",
            }
        ]
        assert directory.prefixes == ["alidd"]

    def test_prefix_case_is_passed_through(self, client, directory) -> None:
        """Case folding is left to the database collation."""
        response = client.get("/phone/ALidd")

        assert response.status_code == 200
        assert directory.prefixes == ["ALidd"]

    def test_no_matches_returns_empty_array(self, client, directory) -> None:
        directory.phones = []

        response = client.get("/phone/nobody")

        assert response.status_code == 200
        assert response.text == "[]"

    def test_every_match_is_returned(self, client, directory) -> None:
        bob = FoundPhone(
            first_name="Bob", last_name="Liddell", phone="+67890", email="aliddl.b@x.com"
        )
        directory.phones = [ALICE, bob]

        body = client.get("/phone/aliddl").json()

        assert len(body) == 2
        assert [item["first_name"] for item in body] == ["Alice", "Bob"]
        assert body[1] == {
            "first_name": "Bob",
            "last_name": "Liddell",
            "phone": "+67890",
            "email": "aliddl.b@x.com",
        }

    def test_prefix_is_url_decoded(self, client, directory) -> None:
        client.get("/phone/first.last%2Bwork")

        assert directory.prefixes == ["first.last+work"]

    def test_empty_prefix_returns_400_with_empty_body(self, client, directory) -> None:
        response = client.get("/phone/")

        assert response.status_code == 400
        assert response.content == b""
        assert directory.call_count == 0

    def test_prefix_with_slash_is_not_found(self, client, provider, directory) -> None:
        response = client.get("/phone/a/b")

        assert response.status_code == 404
        assert provider.acquire_calls == 0
        assert directory.call_count == 0

    def test_storage_error_returns_500_without_retry(self, client, directory) -> None:
        directory.error = QueryFailedError("some err")

        response = client.get("/phone/alidd")

        assert response.status_code == 500
        assert response.content == b""
        assert directory.call_count == 1

    def test_unexpected_error_returns_500(self, app, directory) -> None:
        directory.error = RuntimeError("some err")
        client = TestClient(app, raise_server_exceptions=False)

        response = client.get("/phone/alidd")

        assert response.status_code == 500
        assert directory.call_count == 1

    def test_unserializable_row_returns_500(self, client, directory) -> None:
        directory.phones = [
            FoundPhone(first_name="Alice", last_name="Liddell", phone=None, email="aliddl@x.com")
        ]

        response = client.get("/phone/alidd")

        assert response.status_code == 500
        assert response.content == b""


class TestRequestPipeline:
    """Tests for the per-request directory handle lifecycle."""

    def test_handle_released_after_success(self, client, provider, directory) -> None:
        client.get("/phone/alidd")

        assert provider.acquire_calls == 1
        assert directory.close_calls == 1

    def test_handle_released_after_failure(self, client, provider, directory) -> None:
        directory.error = QueryFailedError("some err")

        client.get("/phone/alidd")

        assert directory.close_calls == 1

    def test_handle_released_after_rejected_prefix(self, client, directory) -> None:
        client.get("/phone/")

        assert directory.close_calls == 1

    def test_acquire_failure_short_circuits(self, settings) -> None:
        directory = FakePhoneDirectory(phones=[ALICE])
        provider = FakeDirectoryProvider(
            directory=directory,
            acquire_error=StorageUnavailableError("connection refused"),
        )
        client = TestClient(create_app(settings=settings, provider=provider))

        response = client.get("/phone/alidd")

        assert response.status_code == 500
        assert directory.call_count == 0

    def test_missing_provider_returns_500(self, app, directory) -> None:
        app.state.directory_provider = None
        client = TestClient(app)

        response = client.get("/phone/alidd")

        assert response.status_code == 500
        assert directory.call_count == 0

    def test_wrong_provider_type_returns_500(self, app, directory) -> None:
        app.state.directory_provider = object()
        client = TestClient(app)

        response = client.get("/phone/alidd")

        assert response.status_code == 500
        assert directory.call_count == 0

    def test_provider_closed_on_shutdown(self, app, provider) -> None:
        with TestClient(app) as client:
            client.get("/phone/alidd")
            assert provider.closed is False

        assert provider.closed is True


class TestHealthEndpoints:
    """Tests for GET /health and GET /health/ready."""

    def test_liveness(self, client, settings) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "version": settings.version}

    def test_readiness_ok(self, client) -> None:
        response = client.get("/health/ready")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_readiness_unavailable(self, client, provider) -> None:
        provider.ping_error = StorageUnavailableError("failed to ping the database")

        response = client.get("/health/ready")

        assert response.status_code == 503
        assert response.json()["status"] == "unavailable"

    def test_docs_hidden_unless_debug(self, client) -> None:
        assert client.get("/docs").status_code == 404


class TestAccessLog:
    """Tests for the per-request access log line."""

    def test_handled_request_is_logged(self, client) -> None:
        with patch.object(middleware, "logger") as access_logger:
            client.get("/phone/alidd")

        access_logger.info.assert_called_once()
        assert access_logger.info.call_args.args[1:4] == ("GET", "/phone/alidd", 200)

    def test_unexpected_error_is_logged_as_500(self, app, directory) -> None:
        directory.error = RuntimeError("some err")
        client = TestClient(app, raise_server_exceptions=False)

        with patch.object(middleware, "logger") as access_logger:
            response = client.get("/phone/alidd")

        assert response.status_code == 500
        access_logger.info.assert_called_once()
        assert access_logger.info.call_args.args[1:4] == ("GET", "/phone/alidd", 500)
