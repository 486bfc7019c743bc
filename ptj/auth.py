from __future__ import annotations

import hashlib
import hmac
import secrets
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from ptj.config import Settings, settings as default_settings
from ptj.models.user import RoleName


DEFAULT_ITERATIONS = 210_000


@dataclass(frozen=True)
class Actor:
    """The authenticated identity a service call runs as."""

    user_id: int
    email: str = ""
    roles: frozenset[str] = field(default_factory=frozenset)

    @property
    def is_admin(self) -> bool:
        return RoleName.ADMIN in self.roles

    def has_role(self, *roles: str) -> bool:
        return any(role in self.roles for role in roles)


def hash_password(password: str) -> str:
    salt = secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        salt.encode("utf-8"),
        DEFAULT_ITERATIONS,
    ).hex()
    return f"pbkdf2_sha256${DEFAULT_ITERATIONS}${salt}${digest}"


def verify_password(password: str, password_hash: str) -> bool:
    try:
        _, iterations_str, salt, digest = password_hash.split("$", 3)
        iterations = int(iterations_str)
    except ValueError:
        return False
    expected = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        salt.encode("utf-8"),
        iterations,
    ).hex()
    return hmac.compare_digest(expected, digest)


def create_access_token(
    user_id: int,
    roles: list[str] | None = None,
    email: str | None = None,
    settings: Settings = default_settings,
    expires_delta: timedelta | None = None,
) -> str:
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    claims = {
        "sub": str(user_id),
        "roles": sorted(roles or []),
        "iat": now,
        "exp": expire,
        "type": "access",
    }
    if email:
        claims["email"] = email
    return jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings = default_settings) -> dict | None:
    if not token:
        return None
    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None
    if payload.get("type") != "access":
        return None
    try:
        payload["sub"] = int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        return None
    return payload
