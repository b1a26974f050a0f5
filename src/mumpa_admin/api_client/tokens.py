"""Hand-built HS256 tokens for exercising authenticated endpoints."""

from datetime import timedelta
from typing import Any

from jose import jwt

from mumpa_admin.timeutils import utc_now

ALGORITHM = "HS256"
DEFAULT_EXPIRY = timedelta(days=7)


def create_test_token(
    uid: str,
    email: str,
    role: str = "user",
    *,
    secret: str,
    expires_in: timedelta = DEFAULT_EXPIRY,
) -> str:
    """Sign {uid, email, role} the way the backend's login does."""
    if not secret:
        raise ValueError("JWT secret is not configured (set JWT_SECRET)")
    now = utc_now()
    claims = {
        "uid": uid,
        "email": email,
        "role": role,
        "iat": int(now.timestamp()),
        "exp": int((now + expires_in).timestamp()),
    }
    return jwt.encode(claims, secret, algorithm=ALGORITHM)


def decode_token(token: str, secret: str) -> dict[str, Any]:
    """Verify signature and expiry. Raises jose.JWTError."""
    return jwt.decode(token, secret, algorithms=[ALGORITHM])
