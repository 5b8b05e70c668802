"""Tests for shared/http.py."""

import httpx
import pytest

from shared.exceptions import RequestFailure
from shared.http import (
    ApiClient,
    extract_error_message,
)


def make_client(handler) -> ApiClient:
    return ApiClient(
        base_url="http://skillswap.test",
        transport=httpx.MockTransport(handler),
    )


class TestExtractErrorMessage:
    def test_reads_message_field(self):
        """Should return the server's {message}."""
        response = httpx.Response(400, json={"message": "Invalid OTP code"})
        assert extract_error_message(response) == "Invalid OTP code"

    def test_missing_message(self):
        """Should return None when the body has no message."""
        assert extract_error_message(httpx.Response(400, json={"error": "x"})) is None

    def test_non_json_body(self):
        """Should return None for a non-JSON body."""
        assert extract_error_message(httpx.Response(500, text="Internal Server Error")) is None


class TestApiClient:
    @pytest.mark.asyncio
    async def test_get_returns_json(self):
        """Should decode the JSON body of a 2xx response."""
        client = make_client(lambda request: httpx.Response(200, json=[{"id": "1"}]))
        assert await client.get("/api/swap-requests") == [{"id": "1"}]

    @pytest.mark.asyncio
    async def test_post_sends_json_body(self):
        """Should send the payload as JSON."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"ok": True})

        client = make_client(handler)
        await client.post("/api/auth/send-otp", json={"email": "a@b.co"})

        assert seen[0].method == "POST"
        assert seen[0].url.path == "/api/auth/send-otp"
        assert seen[0].headers["content-type"] == "application/json"

    @pytest.mark.asyncio
    async def test_empty_body_returns_none(self):
        """A 204 response should decode to None."""
        client = make_client(lambda request: httpx.Response(204))
        assert await client.delete("/api/swap-requests/1") is None

    @pytest.mark.asyncio
    async def test_non_2xx_uses_server_message(self):
        """Should raise RequestFailure with the server's message."""
        client = make_client(
            lambda request: httpx.Response(400, json={"message": "OTP has expired"})
        )

        with pytest.raises(RequestFailure) as exc_info:
            await client.post("/api/auth/verify-otp", json={}, fallback_message="Invalid verification code")

        assert exc_info.value.message == "OTP has expired"
        assert exc_info.value.status_code == 400
        assert exc_info.value.path == "/api/auth/verify-otp"

    @pytest.mark.asyncio
    async def test_non_2xx_falls_back(self):
        """Should use the fallback message when the server sent none."""
        client = make_client(lambda request: httpx.Response(500, text="boom"))

        with pytest.raises(RequestFailure) as exc_info:
            await client.post("/api/auth/send-otp", fallback_message="Failed to send verification code")

        assert exc_info.value.message == "Failed to send verification code"
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_transport_error_becomes_request_failure(self):
        """Connection errors should surface as RequestFailure without a status."""
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(handler)

        with pytest.raises(RequestFailure) as exc_info:
            await client.get("/api/auth/me", fallback_message="Offline")

        assert exc_info.value.message == "Offline"
        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_request_returns_raw_response(self):
        """request() should not raise on non-2xx."""
        client = make_client(lambda request: httpx.Response(401, json={"message": "Not authenticated"}))
        response = await client.request("GET", "/api/auth/me")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_keeps_session_cookie(self):
        """Cookies set by the server should be kept and exposed."""
        client = make_client(
            lambda request: httpx.Response(
                200,
                headers={"set-cookie": "connect.sid=abc123; Path=/"},
                json={"id": "1"},
            )
        )
        await client.post("/api/auth/login", json={})
        assert client.cookies == {"connect.sid": "abc123"}

    @pytest.mark.asyncio
    async def test_restored_cookies_are_sent(self):
        """Cookies passed at construction should be sent with requests."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={})

        client = ApiClient(
            base_url="http://skillswap.test",
            cookies={"connect.sid": "restored"},
            transport=httpx.MockTransport(handler),
        )
        await client.get("/api/auth/me")
        assert "connect.sid=restored" in seen[0].headers["cookie"]

    @pytest.mark.asyncio
    async def test_async_context_manager_closes(self):
        """Leaving the context should close the underlying client."""
        async with make_client(lambda request: httpx.Response(200)) as client:
            pass
        assert client._client.is_closed


class TestDefaults:
    def test_uses_configured_base_url(self, monkeypatch):
        """Should point at the configured API when no base URL is given."""
        from shared.config import get_settings

        monkeypatch.setenv("SKILLSWAP_API_BASE_URL", "https://api.skillswap.test")
        get_settings.cache_clear()

        assert ApiClient().base_url.startswith("https://api.skillswap.test")
