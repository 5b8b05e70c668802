import pytest
from pydantic import ValidationError

from modules.auth.models import AuthSession, LoginRequest, SignupRequest
from shared.models import UserIdentity


class TestLoginRequest:
    def test_valid_login(self):
        request = LoginRequest(email="ada@example.com", password="secret")
        assert request.model_dump() == {"email": "ada@example.com", "password": "secret"}

    def test_rejects_bad_email(self):
        with pytest.raises(ValidationError):
            LoginRequest(email="not-an-email", password="secret")

    def test_rejects_short_password(self):
        """Login passwords need at least 5 characters."""
        with pytest.raises(ValidationError):
            LoginRequest(email="ada@example.com", password="1234")


class TestSignupRequest:
    def test_valid_signup(self):
        request = SignupRequest(name="Ada", email="ada@example.com", password="secret")
        assert request.location is None

    def test_rejects_short_name(self):
        with pytest.raises(ValidationError):
            SignupRequest(name="A", email="ada@example.com", password="secret")

    def test_rejects_short_password(self):
        """Signup passwords need at least 6 characters."""
        with pytest.raises(ValidationError):
            SignupRequest(name="Ada", email="ada@example.com", password="12345")


class TestAuthSession:
    def test_starts_loading_without_user(self):
        session = AuthSession()
        assert session.user is None
        assert session.is_loading is True
        assert session.is_authenticated is False

    def test_authenticated_with_user(self):
        user = UserIdentity(id="1", name="Ada", email="ada@example.com")
        session = AuthSession(user=user, is_loading=False)
        assert session.is_authenticated is True

    def test_session_is_immutable(self):
        with pytest.raises(Exception):  # Pydantic ValidationError
            AuthSession().is_loading = False
