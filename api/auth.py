"""Caller resolution: dev bypass, admin token, or a bound bearer-token verifier."""
from __future__ import annotations

import logging
import re
from typing import Any, Mapping, Optional

from fastapi import APIRouter, Depends, HTTPException, Request

from config import TOKEN_VERIFIER_KEY, find_model
from config.settings import settings

from .schemas import AuthUser, MeResp

logger = logging.getLogger(__name__)

_BEARER = re.compile(r"^Bearer\s+(.+)$", re.IGNORECASE)

router = APIRouter(prefix="/api")


class AuthError(Exception):
    def __init__(self, message: str, details: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


def resolve_user(headers: Mapping[str, str]) -> AuthUser:
    """Return the caller or raise ``AuthError``."""

    if settings.DEV_ALLOW_ANON:
        return AuthUser(uid="dev-anon", email="anon@local")
    admin_token = headers.get("x-admin-token")
    if admin_token and settings.ADMIN_TOKEN and admin_token == settings.ADMIN_TOKEN:
        return AuthUser(uid="dev-admin", email="admin@local")
    match = _BEARER.match(headers.get("authorization", ""))
    if not match:
        raise AuthError("Missing or invalid Authorization header")
    verifier = find_model(TOKEN_VERIFIER_KEY)
    if verifier is None:
        raise AuthError("Invalid or expired token", "token verification is not configured")
    try:
        claims: Any = verifier(match.group(1).strip())
    except Exception as exc:  # noqa: BLE001
        raise AuthError("Invalid or expired token", str(exc)) from exc
    if isinstance(claims, AuthUser):
        return claims
    if not isinstance(claims, Mapping) or not claims.get("uid"):
        raise AuthError("Invalid or expired token", "verifier returned no uid")
    return AuthUser(**claims)


def require_user(request: Request) -> AuthUser:
    try:
        return resolve_user(request.headers)
    except AuthError as exc:
        detail = {"error": exc.message}
        if exc.details:
            detail["details"] = exc.details
        raise HTTPException(status_code=401, detail=detail) from exc


def optional_user(request: Request) -> Optional[AuthUser]:
    try:
        return resolve_user(request.headers)
    except AuthError as exc:
        logger.debug("Anonymous caller: %s", exc.message)
        return None


@router.get("/me", response_model=MeResp)
def me(user: AuthUser = Depends(require_user)) -> MeResp:
    return MeResp(user=user)


__all__ = ["AuthError", "optional_user", "require_user", "resolve_user", "router"]
