"""Credential -> AccessLevel resolution and the request-level access checks."""

from __future__ import annotations

import hmac
import logging
from typing import Callable, Iterable

from fastapi import Depends, Query, Request
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from models import AccessLevel, Credential, UserEntry
from services.errors import Unauthorized

logger = logging.getLogger(__name__)

_basic = HTTPBasic(auto_error=False)


def _secret_matches(presented: str, expected: str) -> bool:
    return hmac.compare_digest(presented.encode(), expected.encode())


def resolve_role(credential: Credential | None, users: Iterable[UserEntry]) -> AccessLevel:
    """
    Map a presented credential to an access level. Never raises.

    A credential without a username (the bare ``?auth=<secret>`` form) is
    matched on the secret alone and gets the highest matching role.
    Anything that does not match resolves to GUEST.
    """
    if credential is None or not credential.secret:
        return AccessLevel.GUEST
    level = AccessLevel.GUEST
    for user in users:
        if credential.username is not None and user.name != credential.username:
            continue
        if _secret_matches(credential.secret, user.secret):
            if credential.username is not None:
                return user.role
            level = max(level, user.role)
    return level


def credential_from_request(
    basic: HTTPBasicCredentials | None,
    user: str | None,
    auth: str | None,
) -> Credential | None:
    if basic is not None:
        return Credential(username=basic.username, secret=basic.password)
    if auth:
        return Credential(username=user or None, secret=auth)
    return None


def attach_access_level(
    request: Request,
    basic: HTTPBasicCredentials | None = Depends(_basic),
    user: str | None = Query(None, description="User name (optional with legacy auth)"),
    auth: str | None = Query(None, description="User secret"),
) -> AccessLevel:
    """Resolve the caller's level once and keep it on ``request.state``."""
    cached = getattr(request.state, "access_level", None)
    if cached is not None:
        return cached
    credential = credential_from_request(basic, user, auth)
    level = resolve_role(credential, request.app.state.settings.users)
    request.state.access_level = level
    return level


def require_level(required: AccessLevel) -> Callable[..., AccessLevel]:
    """Dependency factory: reject the request unless its level is >= ``required``."""

    def _check(
        request: Request,
        level: AccessLevel = Depends(attach_access_level),
    ) -> AccessLevel:
        if level < required:
            logger.info(
                "[roles] Rejected %s %s: level=%s required=%s",
                request.method,
                request.url.path,
                level.name,
                required.name,
            )
            raise Unauthorized(required, level)
        return level

    return _check
