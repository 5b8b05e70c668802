import pytest

from app.container import (
    SESSION_COOKIES_KEY,
    ServiceContainer,
    get_container,
    reset_container,
)
from modules.swaps.service import SWAP_REQUESTS_KEY
from modules.verification.pending_store import EMAIL_KEY
from shared.local_storage import LocalStorage
from shared.models import UserIdentity


@pytest.fixture
def container(settings, fake_api, storage):
    return ServiceContainer(settings=settings, api=fake_api.client(), storage=storage)


class TestServiceContainer:
    def test_services_are_cached(self, container):
        assert container.auth is container.auth
        assert container.swaps is container.swaps
        assert container.profiles is container.profiles
        assert container.notifier is container.notifier

    def test_services_share_api_and_cache(self, container):
        """Every service should use the one API client and query cache."""
        assert container.auth._api is container.api
        assert container.swaps._api is container.api
        assert container.swaps._cache is container.cache
        assert container.profiles._cache is container.cache

    def test_restores_session_cookies(self, settings):
        storage = LocalStorage()
        storage.set_item(SESSION_COOKIES_KEY, {"connect.sid": "abc"})

        container = ServiceContainer(settings=settings, storage=storage)

        assert container.api.cookies == {"connect.sid": "abc"}

    def test_reset_drops_services(self, container):
        auth = container.auth
        container.reset()
        assert container.auth is not auth

    def test_logout_clears_cached_queries(self, container, user_payload):
        """Cached data belongs to the previous user once the session ends."""
        container.auth.set_user(UserIdentity.model_validate(user_payload))
        container.cache.set(SWAP_REQUESTS_KEY, ["cached"])

        container.auth.set_user(None)

        assert SWAP_REQUESTS_KEY not in container.cache

    def test_verification_flow_without_pending(self, container):
        assert container.verification_flow() is None

    def test_verification_flow_from_pending(self, container, storage):
        storage.set_item(EMAIL_KEY, "ada@example.com")

        flow = container.verification_flow()

        assert flow.session.email == "ada@example.com"
        assert flow._auth is container.auth
        assert flow._api is container.api
        assert flow._notifier is container.notifier

    def test_edit_form_uses_shared_services(self, container):
        form = container.edit_swap_request_form()
        assert form._service is container.swaps
        assert form._notifier is container.notifier

    @pytest.mark.asyncio
    async def test_startup_checks_session(self, container, fake_api, user_payload):
        fake_api.add("GET", "/api/auth/me", 200, user_payload)

        await container.startup()

        assert container.auth.user.id == "user-123"

    @pytest.mark.asyncio
    async def test_aclose_saves_cookies(self, settings, storage):
        container = ServiceContainer(settings=settings, storage=storage)
        container.api._client.cookies.set("connect.sid", "xyz")

        await container.aclose()

        assert storage.get_item(SESSION_COOKIES_KEY) == {"connect.sid": "xyz"}

    @pytest.mark.asyncio
    async def test_aclose_without_cookies_clears_saved(self, settings, storage):
        storage.set_item(SESSION_COOKIES_KEY, {"connect.sid": "old"})
        container = ServiceContainer(settings=settings, storage=storage)
        container.api._client.cookies.clear()

        await container.aclose()

        assert storage.get_item(SESSION_COOKIES_KEY) is None


class TestGetContainer:
    def test_get_container_is_cached(self):
        assert get_container() is get_container()

    def test_reset_container(self):
        first = get_container()
        reset_container()
        assert get_container() is not first
