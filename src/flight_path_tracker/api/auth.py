"""Shared-credential bearer token issuance and verification."""

from __future__ import annotations

import hmac
import logging
import time
from typing import Optional

import jwt

from flight_path_tracker.core.config import Settings
from flight_path_tracker.core.errors import AuthError

LOG = logging.getLogger(__name__)


class TokenIssuer:
    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def check_credentials(self, username: Optional[str], password: Optional[str]) -> bool:
        if username is None or password is None:
            return False
        user_ok = hmac.compare_digest(username.encode(), self.settings.admin_username.encode())
        password_ok = hmac.compare_digest(password.encode(), self.settings.admin_password.encode())
        return user_ok and password_ok

    def issue(self, username: Optional[str], password: Optional[str]) -> str:
        if not self.check_credentials(username, password):
            LOG.warning("Rejected token request for %r", username)
            raise AuthError("Invalid credentials")
        now = int(time.time())
        claims = {"id": username, "iat": now, "exp": now + self.settings.token_ttl_seconds}
        return jwt.encode(claims, self.settings.secret_key, algorithm=self.settings.jwt_algorithm)

    def verify_caller(self, authorization: Optional[str]) -> str:
        if not authorization:
            raise AuthError("No token provided!", missing=True)
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() != "bearer" or not token:
            raise AuthError("Unauthorized!")
        try:
            claims = jwt.decode(token, self.settings.secret_key, algorithms=[self.settings.jwt_algorithm])
        except jwt.PyJWTError as exc:
            LOG.warning("Rejected bearer token: %s", exc)
            raise AuthError("Unauthorized!") from exc
        caller = claims.get("id")
        if not caller:
            raise AuthError("Unauthorized!")
        return str(caller)
