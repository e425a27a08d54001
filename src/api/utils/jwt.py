from datetime import UTC, datetime, timedelta
from typing import Optional

from jose import JWTError, jwt

from config import ApplicationConfig
from src.domain.identity import Identity


def create_access_token(
    uid: str,
    email: str,
    display_name: Optional[str] = None,
    expires_delta: timedelta = timedelta(minutes=15),
) -> str:
    """
    Create JWT access token for a verified identity

    Tokens are normally minted by the authentication provider; this exists
    for local tooling and tests.

    Args:
        uid: User ID
        email: Verified email address
        display_name: Optional display name
        expires_delta: Token expiration duration

    Returns:
        JWT token string
    """
    now = datetime.now(UTC)
    payload = {
        "sub": uid,
        "email": email,
        "exp": now + expires_delta,
        "iat": now,
    }
    if display_name:
        payload["name"] = display_name
    return jwt.encode(
        payload, ApplicationConfig.JWT_SECRET, algorithm=ApplicationConfig.JWT_ALGORITHM
    )


def verify_jwt(token: str) -> Optional[dict]:
    """
    Verify and decode JWT token

    Args:
        token: JWT token string

    Returns:
        Decoded payload dict or None if invalid
    """
    try:
        payload = jwt.decode(
            token,
            ApplicationConfig.JWT_SECRET,
            algorithms=[ApplicationConfig.JWT_ALGORITHM],
        )
        return payload
    except JWTError:
        return None


def identity_from_claims(payload: dict) -> Optional[Identity]:
    """Identity from verified claims, None when uid or email is missing"""
    uid = payload.get("sub")
    email = payload.get("email")
    if not uid or not email:
        return None
    return Identity(uid=uid, email=email, display_name=payload.get("name"))
