# tests/test_auth.py
"""Tests for registration, login and session resolution."""

import pytest

from app.core.exceptions import InvalidCredentials, Unauthenticated, ValidationError
from app.core.security import verify_password
from app.modules.auth.services.auth import (
    authenticate_user, register_user, resolve_session, revoke_session
)
from app.modules.user_management.models.user import User
from app.modules.user_management.schemas.user import UserCreate
from app.modules.user_management.services.user import get_user


def _register(db, email="a@x.com", username="alice", password="pw"):
    return register_user(db, UserCreate(email=email, username=username, password=password))


class TestRegistration:

    def test_register_creates_user_and_session(self, db):
        session = _register(db)

        user = get_user(db, session.user_id)
        assert user.email == "a@x.com"
        assert user.username == "alice"
        assert user.hashed_password != "pw"
        assert verify_password("pw", user.hashed_password)
        assert user.session_token == session.token
        assert resolve_session(db, session.token).username == "alice"

    def test_duplicate_email_rejected(self, db):
        _register(db)

        with pytest.raises(ValidationError, match="Email is already registered"):
            _register(db, username="someone_else")

        assert db.query(User).count() == 1

    def test_duplicate_username_rejected(self, db):
        _register(db)

        with pytest.raises(ValidationError, match="Username is already taken"):
            _register(db, email="other@x.com")

        assert db.query(User).count() == 1

    @pytest.mark.parametrize("email", ["", "not-an-email", "a@x"])
    def test_invalid_email_rejected(self, db, email):
        with pytest.raises(ValidationError, match="Invalid email format"):
            _register(db, email=email)

        assert db.query(User).count() == 0

    def test_empty_username_or_password_rejected(self, db):
        with pytest.raises(ValidationError):
            _register(db, username="  ")
        with pytest.raises(ValidationError):
            _register(db, password="")

        assert db.query(User).count() == 0


class TestAuthentication:

    def test_login_rotates_session_token(self, db):
        registered = _register(db)

        session = authenticate_user(db, "a@x.com", "pw")

        assert session.user_id == registered.user_id
        assert session.token != registered.token
        assert resolve_session(db, session.token).user_id == registered.user_id
        # the registration token was superseded
        with pytest.raises(Unauthenticated):
            resolve_session(db, registered.token)

    def test_wrong_password_keeps_token(self, db):
        registered = _register(db)

        with pytest.raises(InvalidCredentials):
            authenticate_user(db, "a@x.com", "wrong")

        assert get_user(db, registered.user_id).session_token == registered.token

    def test_unknown_email(self, db):
        with pytest.raises(InvalidCredentials):
            authenticate_user(db, "nobody@x.com", "pw")


class TestSessionResolution:

    @pytest.mark.parametrize("token", [None, "", "no-such-token"])
    def test_unknown_tokens_are_unauthenticated(self, db, token):
        _register(db)
        with pytest.raises(Unauthenticated):
            resolve_session(db, token)

    def test_revoke_session(self, db):
        registered = _register(db)

        assert revoke_session(db, registered.token) is True
        assert revoke_session(db, registered.token) is False
        with pytest.raises(Unauthenticated):
            resolve_session(db, registered.token)
