"""Shared-credential authentication and session tokens."""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import json
import os
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any, Optional

from fastapi import Depends, HTTPException, Request, Response, status
from fastapi.security import OAuth2PasswordBearer


AUTHORIZATION_USER_ENV = "AUTHORIZATION_USER"
AUTHORIZATION_PASSWORD_ENV = "AUTHORIZATION_PASSWORD"
AUTH_TOKEN_SECRET_ENV = "AUTH_TOKEN_SECRET"
AUTH_TOKEN_EXPIRE_MINUTES_ENV = "AUTH_TOKEN_EXPIRE_MINUTES"
ENVIRONMENT_ENV = "ENVIRONMENT"

AUTH_COOKIE_NAME = "auth-token"
DEFAULT_TOKEN_EXPIRE_MINUTES = 60 * 24

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)


class SecurityConfigurationError(RuntimeError):
    """Raised when mandatory security settings are missing or invalid."""


def _read_env_var(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise SecurityConfigurationError(f"Environment variable '{name}' is required")
    return value


def _unauthorized(detail: str = "Token inválido") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _load_credentials() -> tuple[str, str]:
    return _read_env_var(AUTHORIZATION_USER_ENV), _read_env_var(AUTHORIZATION_PASSWORD_ENV)


@lru_cache(maxsize=1)
def _load_token_key() -> bytes:
    return _read_env_var(AUTH_TOKEN_SECRET_ENV).encode("utf-8")


def _b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def _b64url_decode(data: str) -> bytes:
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _encode_jwt(payload: dict[str, Any], key: bytes) -> str:
    header = {"typ": "JWT", "alg": "HS256"}
    header_b64 = _b64url_encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
    payload_b64 = _b64url_encode(json.dumps(payload, separators=(",", ":")).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("ascii")
    signature = hmac.new(key, signing_input, hashlib.sha256).digest()
    return f"{header_b64}.{payload_b64}.{_b64url_encode(signature)}"


def _decode_jwt(token: str, key: bytes) -> dict[str, Any]:
    try:
        header_b64, payload_b64, signature_b64 = token.split(".")
        signing_input = f"{header_b64}.{payload_b64}".encode("ascii")
        signature = _b64url_decode(signature_b64)
    except (ValueError, UnicodeEncodeError, binascii.Error) as exc:
        raise _unauthorized() from exc

    expected_signature = hmac.new(key, signing_input, hashlib.sha256).digest()
    if not hmac.compare_digest(signature, expected_signature):
        raise _unauthorized()

    try:
        payload_data = json.loads(_b64url_decode(payload_b64).decode("utf-8"))
        exp = int(payload_data["exp"])
    except (ValueError, KeyError, TypeError, binascii.Error) as exc:
        raise _unauthorized() from exc
    if datetime.now(timezone.utc) >= datetime.fromtimestamp(exp, tz=timezone.utc):
        raise _unauthorized("Token expirado")
    return payload_data


def _resolve_token_expiry() -> timedelta:
    raw = os.getenv(AUTH_TOKEN_EXPIRE_MINUTES_ENV)
    if not raw:
        return timedelta(minutes=DEFAULT_TOKEN_EXPIRE_MINUTES)
    try:
        minutes = int(raw)
    except ValueError as exc:
        raise SecurityConfigurationError("AUTH_TOKEN_EXPIRE_MINUTES must be an integer") from exc
    if minutes <= 0:
        raise SecurityConfigurationError("AUTH_TOKEN_EXPIRE_MINUTES must be positive")
    return timedelta(minutes=minutes)


@dataclass
class SessionIdentity:
    """The authenticated dashboard user."""

    username: str


def authenticate(username: str, password: str) -> SessionIdentity:
    """Check the submitted pair against the configured shared credentials."""

    expected_username, expected_password = _load_credentials()
    username_ok = hmac.compare_digest(username.encode("utf-8"), expected_username.encode("utf-8"))
    password_ok = hmac.compare_digest(password.encode("utf-8"), expected_password.encode("utf-8"))
    if not (username_ok and password_ok):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Credenciales inválidas")
    return SessionIdentity(username=expected_username)


def create_session_token(identity: SessionIdentity, *, now: Optional[datetime] = None) -> str:
    issued = now or datetime.now(timezone.utc)
    payload: dict[str, Any] = {
        "sub": identity.username,
        "iat": int(issued.timestamp()),
        "exp": int((issued + _resolve_token_expiry()).timestamp()),
    }
    return _encode_jwt(payload, _load_token_key())


def _cookie_is_secure() -> bool:
    return os.getenv(ENVIRONMENT_ENV, "").strip().lower() == "production"


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=AUTH_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=_cookie_is_secure(),
        samesite="lax",
        max_age=int(_resolve_token_expiry().total_seconds()),
        path="/",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(key=AUTH_COOKIE_NAME, path="/")


def get_current_session(
    request: Request,
    bearer_token: Optional[str] = Depends(oauth2_scheme),
) -> SessionIdentity:
    token = request.cookies.get(AUTH_COOKIE_NAME) or bearer_token
    if not token:
        raise _unauthorized("No autenticado")
    payload = _decode_jwt(token, _load_token_key())
    username = payload.get("sub")
    if not isinstance(username, str):
        raise _unauthorized()
    expected_username, _ = _load_credentials()
    if not hmac.compare_digest(username.encode("utf-8"), expected_username.encode("utf-8")):
        raise _unauthorized()
    return SessionIdentity(username=username)


def require_session(identity: SessionIdentity = Depends(get_current_session)) -> SessionIdentity:
    """FastAPI dependency that ensures the request carries a valid session token."""

    return identity
