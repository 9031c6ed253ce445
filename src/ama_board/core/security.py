"""Host session tokens and password checks."""
from __future__ import annotations

import hmac
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from ama_board.core.settings import settings

HOST_SUBJECT = "host"


def create_host_token(expires_in: timedelta | None = None) -> str:
    """Create a signed JWT marking the bearer as the board host."""
    expire = datetime.now(UTC) + (
        expires_in or timedelta(minutes=settings.host_session_expire_minutes)
    )
    to_encode: dict[str, object] = {"sub": HOST_SUBJECT, "exp": expire}
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def verify_host_token(token: str | None) -> bool:
    """Return True if `token` is an unexpired host session token."""
    if not token:
        return False
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError:
        return False
    return payload.get("sub") == HOST_SUBJECT


def verify_admin_password(password: str) -> bool:
    """Compare `password` against the configured admin password.

    Login is disabled entirely while ADMIN_PASSWORD is unset.
    """
    expected = settings.admin_password
    if not expected:
        return False
    return hmac.compare_digest(password.encode("utf-8"), expected.encode("utf-8"))
