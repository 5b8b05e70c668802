"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import json
from typing import Any, Optional

import httpx
import pytest

from app.container import reset_container
from modules.auth.service import AuthSessionStore
from modules.swaps.models import SwapRequest
from shared.config import Settings, get_settings
from shared.http import ApiClient
from shared.local_storage import LocalStorage
from shared.notifications import Notifier


class FakeApi:
    """
    Stub SkillSwap API served through httpx.MockTransport.

    Routes map (method, path) to a status code and JSON body. Every
    request is recorded so tests can assert on what was (not) sent.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], tuple[int, Any]] = {}
        self.calls: list[httpx.Request] = []

    def add(self, method: str, path: str, status: int = 200, body: Any = None) -> None:
        self.routes[(method.upper(), path)] = (status, body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": "Not found"})
        status, body = route
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)

    def calls_to(self, method: str, path: str) -> list[httpx.Request]:
        return [
            call for call in self.calls
            if call.method == method.upper() and call.url.path == path
        ]

    def body_of(self, request: httpx.Request) -> Any:
        return json.loads(request.content) if request.content else None

    def client(self, cookies: Optional[dict[str, str]] = None) -> ApiClient:
        return ApiClient(
            base_url="http://skillswap.test",
            timeout=5.0,
            cookies=cookies,
            transport=httpx.MockTransport(self.handler),
        )


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset cached settings and singletons before and after each test."""
    get_settings.cache_clear()
    reset_container()
    yield
    get_settings.cache_clear()
    reset_container()


@pytest.fixture
def settings() -> Settings:
    """Settings with a tick interval long enough that no real tick lands mid-test."""
    return Settings(countdown_interval_seconds=60.0, local_storage_path="unused.json")


@pytest.fixture
def fake_api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def api(fake_api: FakeApi) -> ApiClient:
    return fake_api.client()


@pytest.fixture
def notifier() -> Notifier:
    return Notifier()


@pytest.fixture
def storage() -> LocalStorage:
    """In-memory local storage."""
    return LocalStorage()


@pytest.fixture
def auth_store(api: ApiClient) -> AuthSessionStore:
    return AuthSessionStore(api)


@pytest.fixture
def user_payload() -> dict[str, Any]:
    """A user as the API returns it."""
    return {
        "id": "user-123",
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "location": "London",
        "profilePhoto": None,
        "isPublic": True,
        "role": "user",
        "isBanned": False,
        "createdAt": "2024-01-01T00:00:00Z",
    }


@pytest.fixture
def swap_payload() -> dict[str, Any]:
    """A pending swap request as the API returns it."""
    return {
        "id": "swap-1",
        "requesterId": "user-123",
        "targetId": "user-456",
        "senderSkill": "Guitar",
        "receiverSkill": "Spanish",
        "status": "pending",
        "message": "hi",
        "createdAt": "2024-01-01T00:00:00Z",
        "updatedAt": "2024-01-01T00:00:00Z",
    }


@pytest.fixture
def swap_request(swap_payload: dict[str, Any]) -> SwapRequest:
    return SwapRequest.model_validate(swap_payload)
