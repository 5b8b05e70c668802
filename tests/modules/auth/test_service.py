import httpx
import pytest
from unittest.mock import MagicMock

from modules.auth.service import (
    AuthSessionStore,
    parse_identity,
)
from modules.auth.exceptions import (
    InvalidCredentialsFormatError,
    LoginFailedError,
    SignupFailedError,
)
from shared.models import UserIdentity


class TestParseIdentity:
    def test_plain_user(self, user_payload):
        assert parse_identity(user_payload).id == "user-123"

    def test_wrapped_user(self, user_payload):
        """verify-otp wraps the user in {user}."""
        body = {"message": "Email verified", "user": user_payload}
        assert parse_identity(body).email == "ada@example.com"


class TestCheckSession:
    @pytest.mark.asyncio
    async def test_restores_user(self, auth_store, fake_api, user_payload):
        """Should set the user from GET /api/auth/me."""
        fake_api.add("GET", "/api/auth/me", 200, user_payload)

        user = await auth_store.check_session()

        assert user.id == "user-123"
        assert auth_store.user == user
        assert auth_store.is_loading is False

    @pytest.mark.asyncio
    async def test_non_2xx_leaves_user_empty(self, auth_store, fake_api):
        """A 401 is the normal logged-out path and must not raise."""
        fake_api.add("GET", "/api/auth/me", 401, {"message": "Not authenticated"})

        assert await auth_store.check_session() is None
        assert auth_store.user is None
        assert auth_store.is_loading is False

    @pytest.mark.asyncio
    async def test_transport_error_leaves_user_empty(self):
        """An unreachable API should also settle as logged out."""
        from shared.http import ApiClient

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        store = AuthSessionStore(
            ApiClient(base_url="http://skillswap.test", transport=httpx.MockTransport(handler))
        )

        assert await store.check_session() is None
        assert store.is_loading is False

    @pytest.mark.asyncio
    async def test_malformed_body_leaves_user_empty(self, auth_store, fake_api):
        fake_api.add("GET", "/api/auth/me", 200, {"unexpected": True})
        assert await auth_store.check_session() is None


class TestLogin:
    @pytest.mark.asyncio
    async def test_login_sets_user(self, auth_store, fake_api, user_payload):
        fake_api.add("POST", "/api/auth/login", 200, user_payload)

        user = await auth_store.login("ada@example.com", "secret")

        assert auth_store.user == user
        body = fake_api.body_of(fake_api.calls_to("POST", "/api/auth/login")[0])
        assert body == {"email": "ada@example.com", "password": "secret"}

    @pytest.mark.asyncio
    async def test_login_rejected(self, auth_store, fake_api):
        """A rejected login should raise and leave the session empty."""
        fake_api.add("POST", "/api/auth/login", 401, {"message": "Invalid credentials"})

        with pytest.raises(LoginFailedError) as exc_info:
            await auth_store.login("ada@example.com", "wrong-password")

        assert exc_info.value.message == "Login failed"
        assert auth_store.user is None

    @pytest.mark.asyncio
    async def test_login_validates_locally(self, auth_store, fake_api):
        """Malformed input should fail before any request is sent."""
        with pytest.raises(InvalidCredentialsFormatError) as exc_info:
            await auth_store.login("not-an-email", "secret")

        assert exc_info.value.field == "email"
        assert fake_api.calls == []


class TestSignup:
    @pytest.mark.asyncio
    async def test_signup_sets_user(self, auth_store, fake_api, user_payload):
        fake_api.add("POST", "/api/auth/signup", 201, user_payload)

        user = await auth_store.signup("Ada Lovelace", "ada@example.com", "secret", location="London")

        assert auth_store.user == user
        body = fake_api.body_of(fake_api.calls_to("POST", "/api/auth/signup")[0])
        assert body["location"] == "London"

    @pytest.mark.asyncio
    async def test_signup_rejected(self, auth_store, fake_api):
        fake_api.add("POST", "/api/auth/signup", 409, {"message": "Email taken"})

        with pytest.raises(SignupFailedError):
            await auth_store.signup("Ada", "ada@example.com", "secret")

        assert auth_store.user is None

    @pytest.mark.asyncio
    async def test_signup_short_password(self, auth_store, fake_api):
        with pytest.raises(InvalidCredentialsFormatError):
            await auth_store.signup("Ada", "ada@example.com", "12345")
        assert fake_api.calls == []


class TestLogout:
    @pytest.mark.asyncio
    async def test_logout_clears_user(self, auth_store, fake_api, user_payload):
        fake_api.add("POST", "/api/auth/logout", 200, {"message": "Logged out"})
        auth_store.set_user(UserIdentity.model_validate(user_payload))

        await auth_store.logout()

        assert auth_store.user is None
        assert len(fake_api.calls_to("POST", "/api/auth/logout")) == 1

    @pytest.mark.asyncio
    async def test_logout_clears_user_even_on_failure(self, auth_store, fake_api, user_payload):
        """The local session is cleared whatever the server says."""
        fake_api.add("POST", "/api/auth/logout", 500)
        auth_store.set_user(UserIdentity.model_validate(user_payload))

        await auth_store.logout()

        assert auth_store.user is None


class TestSubscribe:
    def test_listeners_see_updates(self, auth_store, user_payload):
        listener = MagicMock()
        auth_store.subscribe(listener)

        auth_store.set_user(UserIdentity.model_validate(user_payload))

        session = listener.call_args.args[0]
        assert session.user.id == "user-123"
        assert session.is_loading is False

    def test_unsubscribe(self, auth_store):
        listener = MagicMock()
        unsubscribe = auth_store.subscribe(listener)
        unsubscribe()

        auth_store.set_user(None)

        listener.assert_not_called()

    def test_reset_returns_to_loading(self, auth_store, user_payload):
        auth_store.set_user(UserIdentity.model_validate(user_payload))
        auth_store.reset()
        assert auth_store.user is None
        assert auth_store.is_loading is True


class TestConstruction:
    def test_requires_api_client(self):
        """A store is only ever built around the caller's API client."""
        with pytest.raises(TypeError):
            AuthSessionStore()

    def test_uses_given_client(self, api):
        assert AuthSessionStore(api)._api is api
