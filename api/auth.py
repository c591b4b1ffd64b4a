"""
Pluggable request authorization for the rail router API.

The app holds one Authorizer on app.state.authorizer; require_auth collects
the credentials a request carries and asks it for a yes/no. Dev mode is the
explicit AllowAll authorizer, never an implicit missing key.
"""

from __future__ import annotations

import hmac
import logging
from dataclasses import dataclass
from typing import Optional, Protocol

import jwt
from fastapi import Depends, HTTPException, Request
from fastapi.security import APIKeyHeader, HTTPAuthorizationCredentials, HTTPBearer

from config.settings import AuthMode, Settings

logger = logging.getLogger("airipay.api.auth")

API_KEY_HEADER = "X-API-Key"

api_key_header = APIKeyHeader(name=API_KEY_HEADER, auto_error=False)
bearer = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Credentials:
    api_key: Optional[str] = None
    bearer_token: Optional[str] = None


class Authorizer(Protocol):
    failure_message: str

    def authorize(self, credentials: Credentials) -> bool: ...


class AllowAll:
    """Dev mode: every request is authorized."""
    failure_message = "Unauthorized"

    def authorize(self, credentials: Credentials) -> bool:
        return True


class ApiKeyAuthorizer:
    """Shared-secret check on the X-API-Key header."""
    failure_message = "Unauthorized: invalid API key"

    def __init__(self, api_key: str) -> None:
        if not api_key:
            raise ValueError("ApiKeyAuthorizer needs a non-empty key")
        self._key = api_key.encode()

    def authorize(self, credentials: Credentials) -> bool:
        if not credentials.api_key:
            return False
        return hmac.compare_digest(credentials.api_key.encode(), self._key)


class JwtBearerAuthorizer:
    """Authorization: Bearer <jwt>, signed with a shared secret."""
    failure_message = "Unauthorized: invalid token"

    def __init__(self, secret: str, algorithm: str = "HS256") -> None:
        self._secret = secret
        self._algorithm = algorithm

    def authorize(self, credentials: Credentials) -> bool:
        if not credentials.bearer_token:
            return False
        try:
            jwt.decode(
                credentials.bearer_token,
                self._secret,
                algorithms=[self._algorithm],
            )
        except jwt.InvalidTokenError:
            return False
        return True


def build_authorizer(cfg: Settings) -> Authorizer:
    """Pick the authorizer for the configured auth mode."""
    mode = cfg.auth_mode
    if mode == AuthMode.AUTO:
        mode = AuthMode.API_KEY if cfg.api_key else AuthMode.NONE

    if mode == AuthMode.API_KEY:
        if not cfg.api_key:
            raise ValueError("AIRIPAY_API_KEY must be set when AIRIPAY_AUTH_MODE=api_key")
        return ApiKeyAuthorizer(cfg.api_key)
    if mode == AuthMode.JWT:
        return JwtBearerAuthorizer(cfg.jwt_secret, cfg.jwt_algorithm)

    logger.warning("auth disabled: every request is authorized (dev mode)")
    return AllowAll()


async def require_auth(
    request: Request,
    api_key: Optional[str] = Depends(api_key_header),
    bearer_credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
) -> None:
    authorizer: Authorizer = request.app.state.authorizer
    credentials = Credentials(
        api_key=api_key,
        bearer_token=bearer_credentials.credentials if bearer_credentials else None,
    )
    if not authorizer.authorize(credentials):
        logger.info("unauthorized request: %s %s", request.method, request.url.path)
        raise HTTPException(status_code=401, detail=authorizer.failure_message)
