from __future__ import annotations

import pytest

from src.headcount_system.headcount_system.core.enums import Role
from src.headcount_system.headcount_system.core.exceptions import (
    AccountDisabledError,
    AccountLockedError,
    InvalidCredentialsError,
)


@pytest.fixture
def auth(container):
    container.credential_service.create_user("alice", "alice123", Role.USER)
    container.credential_service.create_user("bob", "bob12345", Role.ADMIN)
    return container.auth_service


def test_login_success_starts_eight_hour_session(auth, clock):
    user = auth.login("alice", "alice123")

    state = auth.current_session()
    assert user.username == "alice"
    assert state.current_user == "alice"
    assert state.expires_at - int(clock().timestamp() * 1000) == 8 * 60 * 60 * 1000
    assert auth.get_current_user().username == "alice"


def test_unknown_user_and_wrong_password_share_message(auth):
    with pytest.raises(InvalidCredentialsError) as unknown:
        auth.login("nobody", "alice123")
    with pytest.raises(InvalidCredentialsError) as wrong:
        auth.login("alice", "nope")

    assert str(unknown.value) == str(wrong.value)
    assert auth.current_session().failed_login.count == 2


def test_disabled_account_does_not_count_towards_lockout(container, auth):
    container.user_service.toggle_disabled(current_role=Role.ADMIN, username="alice")

    with pytest.raises(AccountDisabledError):
        auth.login("alice", "alice123")
    assert auth.current_session().failed_login.count == 0


def test_lockout_is_global_and_expires(auth, clock):
    for username in ("alice", "bob", "nobody", "alice", "bob"):
        with pytest.raises(InvalidCredentialsError):
            auth.login(username, "wrong")

    with pytest.raises(AccountLockedError) as locked:
        auth.login("alice", "alice123")
    assert locked.value.remaining_minutes == 5

    clock.advance(minutes=2, seconds=30)
    with pytest.raises(AccountLockedError) as locked:
        auth.login("bob", "bob12345")
    assert locked.value.remaining_minutes == 3

    clock.advance(minutes=2, seconds=31)
    auth.login("alice", "alice123")
    failed = auth.current_session().failed_login
    assert failed.count == 0
    assert failed.cooldown_until is None


def test_locked_attempts_are_not_counted(auth):
    for _ in range(5):
        with pytest.raises(InvalidCredentialsError):
            auth.login("alice", "wrong")
    with pytest.raises(AccountLockedError):
        auth.login("alice", "wrong")

    assert auth.current_session().failed_login.count == 5


def test_session_expiry_is_an_implicit_logout(auth, clock):
    auth.login("alice", "alice123")

    clock.advance(hours=8)
    assert auth.get_current_user() is not None

    clock.advance(seconds=1)
    assert auth.get_current_user() is None
    state = auth.current_session()
    assert state.current_user is None
    assert state.expires_at is None
    assert auth.get_current_user() is None


def test_disabled_user_loses_live_session(container, auth):
    auth.login("alice", "alice123")
    container.user_service.toggle_disabled(current_role=Role.ADMIN, username="alice")

    assert auth.get_current_user() is None
    assert auth.current_session().current_user is None


def test_logout_keeps_failed_login_counter(auth):
    with pytest.raises(InvalidCredentialsError):
        auth.login("alice", "wrong")
    auth.login("alice", "alice123")
    with pytest.raises(InvalidCredentialsError):
        auth.login("bob", "wrong")

    auth.logout()

    state = auth.current_session()
    assert state.current_user is None
    assert state.failed_login.count == 1


def test_current_user_follows_latest_login(auth):
    assert auth.get_current_user() is None
    auth.login("alice", "alice123")
    assert not auth.get_current_user().is_admin
    auth.login("bob", "bob12345")
    assert auth.get_current_user().is_admin
