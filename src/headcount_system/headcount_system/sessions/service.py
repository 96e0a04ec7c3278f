from __future__ import annotations

import logging
import math
from dataclasses import replace
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local, to_epoch_ms
from ..core.constants import LOCKOUT_DURATION, MAX_LOGIN_ATTEMPTS, SESSION_DURATION
from ..core.exceptions import AccountDisabledError, AccountLockedError, InvalidCredentialsError
from ..users.credentials import check_password
from ..users.model import User
from ..users.repository import UserRepository
from .model import FailedLogin, SessionState
from .repository import SessionRepository

logger = logging.getLogger(__name__)

_SESSION_MS = int(SESSION_DURATION.total_seconds() * 1000)
_LOCKOUT_MS = int(LOCKOUT_DURATION.total_seconds() * 1000)


class AuthService:
    """Use case: login/logout and the current identity of this client.

    The session is a single persisted `SessionState`; every call reads it,
    derives the next state and writes it back. The failed-login counter is
    global, so it throttles all usernames together.
    """

    def __init__(
        self,
        sessions: SessionRepository,
        users: UserRepository,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._sessions = sessions
        self._users = users
        self._clock = clock

    def _now_ms(self) -> int:
        return to_epoch_ms(self._clock())

    def current_session(self) -> SessionState:
        return self._sessions.get()

    def login(self, username: str, password: str) -> User:
        state = self._sessions.get()
        now_ms = self._now_ms()

        if state.failed_login.is_locked(now_ms):
            remaining = math.ceil((state.failed_login.cooldown_until - now_ms) / 60000)
            raise AccountLockedError(remaining)

        user = self._users.get_by_username(username)
        if not user:
            self._record_failed_login(state, now_ms)
            raise InvalidCredentialsError()

        if user.disabled:
            raise AccountDisabledError()

        if not check_password(user.password_hash, user.salt, password):
            self._record_failed_login(state, now_ms)
            raise InvalidCredentialsError()

        self._sessions.save(
            SessionState(
                current_user=user.username,
                expires_at=now_ms + _SESSION_MS,
                failed_login=FailedLogin(),
            )
        )
        logger.info("User %r logged in", user.username)
        return user

    def _record_failed_login(self, state: SessionState, now_ms: int) -> None:
        count = state.failed_login.count + 1
        cooldown_until = state.failed_login.cooldown_until
        if count >= MAX_LOGIN_ATTEMPTS:
            cooldown_until = now_ms + _LOCKOUT_MS
            logger.warning("Login locked for %d minutes after %d failed attempts", _LOCKOUT_MS // 60000, count)
        else:
            logger.info("Failed login attempt %d/%d", count, MAX_LOGIN_ATTEMPTS)
        self._sessions.save(replace(state, failed_login=FailedLogin(count=count, cooldown_until=cooldown_until)))

    def logout(self) -> None:
        state = self._sessions.get()
        self._sessions.save(replace(state, current_user=None, expires_at=None))

    def get_current_user(self) -> Optional[User]:
        """Live user for the session, logging out implicitly when it is stale."""
        state = self._sessions.get()
        if not state.current_user:
            return None

        if state.expires_at is not None and self._now_ms() > state.expires_at:
            logger.info("Session for %r expired", state.current_user)
            self.logout()
            return None

        user = self._users.get_by_username(state.current_user)
        if not user or user.disabled:
            self.logout()
            return None

        return user
