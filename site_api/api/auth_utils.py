import os
from datetime import UTC, datetime, timedelta
from typing import Any, cast

from jose import JWTError, jwt

from site_api.domain.entities import Caller

SECRET_KEY = os.environ.get("SITE_SECRET_KEY", "dev-secret-unsafe")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 60


def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
    now_utc: datetime | None = None,
    algorithm: str = ALGORITHM,
) -> str:
    """
    Create a JWT access token.

    Args:
        data: Claims to encode in the token
        expires_delta: Optional custom expiration delta
        now_utc: Current UTC time (for testing/determinism). Defaults to datetime.now(UTC).
        algorithm: Signing algorithm
    """
    to_encode = data.copy()
    current_time = now_utc if now_utc is not None else datetime.now(UTC)

    if expires_delta:
        expire = current_time + expires_delta
    else:
        expire = current_time + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({"exp": expire})
    encoded_jwt: str = jwt.encode(to_encode, SECRET_KEY, algorithm=algorithm)
    return encoded_jwt


def decode_access_token(token: str, algorithm: str = ALGORITHM) -> dict[str, Any] | None:
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[algorithm])
        return cast(dict[str, Any], payload)
    except JWTError:
        return None


def create_caller_token(
    caller: Caller,
    ttl_minutes: int = ACCESS_TOKEN_EXPIRE_MINUTES,
    algorithm: str = ALGORITHM,
) -> str:
    """Issue a bearer token carrying the caller's id and roles."""
    return create_access_token(
        {"sub": caller.id, "roles": list(caller.roles)},
        timedelta(minutes=ttl_minutes),
        algorithm=algorithm,
    )


def caller_from_payload(payload: dict[str, Any]) -> Caller | None:
    """Build a Caller from decoded claims, or None if the claims are malformed."""
    subject = payload.get("sub")
    roles = payload.get("roles", [])
    if not isinstance(subject, str) or not subject:
        return None
    if not isinstance(roles, list) or not all(isinstance(r, str) for r in roles):
        return None
    return Caller(id=subject, roles=roles)
