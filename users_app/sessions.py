"""
users_app.sessions — single-session token registry for viewers.

Tokens are SimpleJWT access tokens carrying `user_id` and `email`. A token
is only accepted while the registry still maps its user to that token's
`jti`, so logging out (or a password change) kills it before it expires.

Policy: a second login while a live session exists is rejected with
AlreadyLoggedIn. An entry whose token has already expired is not live and is
replaced on the next login.

The registry is process memory only. It is created empty when the app
registry loads (UsersAppConfig.ready) and every session is lost on restart.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import timedelta
from typing import Dict, Optional, Tuple

from django.apps import apps
from django.conf import settings
from django.utils import timezone
from django.utils.module_loading import import_string
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import AccessToken

from .exceptions import AlreadyLoggedIn, TokenNotActive

logger = logging.getLogger(__name__)


def _now_ts() -> int:
    return int(timezone.now().timestamp())


class SessionStore:
    """
    Interface of the session registry.

    Implementations map user id → (jti, exp) and must make `claim` atomic:
    two concurrent claims for the same user may not both succeed.
    """

    def claim(self, user_id: int, jti: str, expires_at: int) -> bool:
        raise NotImplementedError

    def is_active(self, user_id: int, jti: str) -> bool:
        raise NotImplementedError

    def release(self, user_id: int, jti: str) -> bool:
        raise NotImplementedError

    def release_user(self, user_id: int) -> bool:
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError

    def __len__(self) -> int:
        raise NotImplementedError


class InMemorySessionStore(SessionStore):
    """Dict guarded by a lock; valid for a single server process only."""

    def __init__(self):
        self._lock = threading.Lock()
        self._sessions: Dict[int, Tuple[str, int]] = {}

    def claim(self, user_id, jti, expires_at):
        now = _now_ts()
        with self._lock:
            current = self._sessions.get(user_id)
            if current is not None and current[1] > now:
                return False
            self._sessions[user_id] = (jti, expires_at)
            return True

    def is_active(self, user_id, jti):
        with self._lock:
            current = self._sessions.get(user_id)
        return current is not None and current[0] == jti and current[1] > _now_ts()

    def release(self, user_id, jti):
        with self._lock:
            current = self._sessions.get(user_id)
            if current is None or current[0] != jti:
                return False
            del self._sessions[user_id]
            return True

    def release_user(self, user_id):
        with self._lock:
            return self._sessions.pop(user_id, None) is not None

    def clear(self):
        with self._lock:
            self._sessions.clear()

    def __len__(self):
        now = _now_ts()
        with self._lock:
            return sum(1 for _, exp in self._sessions.values() if exp > now)


@dataclass(frozen=True)
class SessionClaims:
    user_id: int
    email: str
    token: AccessToken


class SessionService:
    """Issues, validates and revokes viewer session tokens."""

    def __init__(self, store: SessionStore, lifetime: Optional[timedelta] = None):
        self.store = store
        self.lifetime = lifetime or settings.SESSION_TOKEN_LIFETIME

    def issue_session(self, user) -> str:
        """
        Mint a token for `user` and register it as the user's only session.

        Raises:
            AlreadyLoggedIn: the user still holds a live token.
        """
        token = AccessToken.for_user(user)
        token.set_exp(lifetime=self.lifetime)
        token["email"] = user.email

        if not self.store.claim(user.pk, token["jti"], int(token["exp"])):
            logger.info("Login rejected for user %s: session already active", user.pk)
            raise AlreadyLoggedIn()

        logger.info("Session issued for user %s", user.pk)
        return str(token)

    def validate(self, raw_token) -> SessionClaims:
        """
        Check signature, expiry and liveness of a session token.

        Raises:
            InvalidToken: bad signature, expired, or not a viewer token.
            TokenNotActive: well-formed but revoked or superseded.
        """
        try:
            token = AccessToken(raw_token)
        except TokenError as e:
            raise InvalidToken(str(e))

        user_id = token.get(api_settings.USER_ID_CLAIM)
        if user_id is None:
            raise InvalidToken("Token contained no recognizable user identification")

        user_id = int(user_id)
        if not self.store.is_active(user_id, token["jti"]):
            raise TokenNotActive()

        return SessionClaims(user_id=user_id, email=token.get("email", ""), token=token)

    def revoke(self, raw_token) -> bool:
        """
        Drop the registry entry holding exactly this token.

        Idempotent: unknown, malformed or superseded tokens are ignored.
        Returns True if a live entry was removed.
        """
        try:
            token = AccessToken(raw_token, verify=False)
        except TokenError:
            return False

        user_id = token.get(api_settings.USER_ID_CLAIM)
        jti = token.get(api_settings.JTI_CLAIM)
        if user_id is None or jti is None:
            return False

        released = self.store.release(int(user_id), jti)
        if released:
            logger.info("Session revoked for user %s", user_id)
        return released

    def revoke_user(self, user_id: int) -> bool:
        released = self.store.release_user(user_id)
        if released:
            logger.info("All sessions revoked for user %s", user_id)
        return released

    def active_count(self) -> int:
        return len(self.store)


def build_session_service() -> SessionService:
    store_class = import_string(settings.SESSION_STORE_CLASS)
    return SessionService(store_class(), lifetime=settings.SESSION_TOKEN_LIFETIME)


def get_session_service() -> SessionService:
    """Return the service owned by the users_app config of this process."""
    return apps.get_app_config("users_app").session_service
