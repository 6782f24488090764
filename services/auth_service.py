"""
services.auth_service - Sign-in against Supabase Auth.

Password sign-in goes through the supabase client with the anon key.  On
success the user id, email and access token are kept in the Flask
session; sign-out revokes the token and clears it.  Authentication is
switched off when SUPABASE_URL / SUPABASE_ANON_KEY are not configured
(local development and tests).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from supabase import AuthError as SupabaseAuthError
from supabase import create_client

import config

logger = logging.getLogger(__name__)

LOGIN_FAILED = "Login failed"


@dataclass
class AuthUser:
    id: str
    email: str
    access_token: str = ""

    def to_session(self) -> dict:
        return {"id": self.id, "email": self.email, "access_token": self.access_token}


class AuthError(Exception):
    """Sign-in rejected; the message is shown on the login page."""


def auth_enabled() -> bool:
    return bool(config.SUPABASE_URL and config.SUPABASE_ANON_KEY)


def _client():
    return create_client(config.SUPABASE_URL, config.SUPABASE_ANON_KEY)


def sign_in(email: str, password: str) -> AuthUser:
    if not auth_enabled():
        raise AuthError(
            "Missing Supabase env: set SUPABASE_URL and SUPABASE_ANON_KEY in .env")
    try:
        response = _client().auth.sign_in_with_password(
            {"email": email, "password": password})
    except SupabaseAuthError as exc:
        # status 0: the auth server was never reached
        if not getattr(exc, "status", None):
            logger.error("Auth request failed: %s", exc)
            raise AuthError(LOGIN_FAILED) from exc
        message = getattr(exc, "message", None) or str(exc) or LOGIN_FAILED
        logger.info("Sign-in refused for %s: %s", email, message)
        raise AuthError(message) from exc

    if response.session is None or response.user is None:
        logger.info("Sign-in for %s returned no session", email)
        raise AuthError(LOGIN_FAILED)
    return AuthUser(id=str(response.user.id), email=response.user.email or email,
                    access_token=response.session.access_token)


def sign_out(access_token: str | None) -> None:
    """Revoke the token server-side; local session clearing is the caller's job."""
    if not auth_enabled() or not access_token:
        return
    try:
        # logout is authorised by the user's own token
        _client().auth.admin.sign_out(access_token)
    except SupabaseAuthError as exc:
        logger.warning("Sign-out request failed: %s", exc)
