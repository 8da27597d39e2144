import secrets
from datetime import UTC, datetime, timedelta
from typing import Optional

from jose import JWTError, jwt

from config import ApplicationConfig

ALGORITHM = "HS256"

# Session tokens are not renewable; a new login issues a new token
TOKEN_LIFETIME = timedelta(days=7)

# python-jose compares exp against whole seconds, so a token still verifies
# until the second after exp has fully passed
EXPIRY_LEEWAY = timedelta(seconds=1)


def generate_jwt(user_id: int, username: str) -> str:
    """
    Generate session token

    Args:
        user_id: User ID
        username: Username

    Returns:
        JWT token string (HS256, 7-day expiry)
    """
    return create_access_token(user_id, username, TOKEN_LIFETIME)


def create_access_token(user_id: int, username: str, expires_delta: timedelta) -> str:
    """
    Create session token with custom expiry

    Args:
        user_id: User ID
        username: Username
        expires_delta: Token expiration duration

    Returns:
        JWT token string (HS256)
    """
    now = datetime.now(UTC)
    payload = {
        "user_id": user_id,
        "username": username,
        "jti": secrets.token_hex(16),
        "exp": now + expires_delta,
        "iat": now,
    }
    return jwt.encode(payload, ApplicationConfig.JWT_SECRET, algorithm=ALGORITHM)


def verify_jwt(token: str) -> Optional[dict]:
    """
    Verify and decode session token

    Args:
        token: JWT token string

    Returns:
        Decoded payload dict or None if invalid or expired
    """
    try:
        payload = jwt.decode(token, ApplicationConfig.JWT_SECRET, algorithms=[ALGORITHM])
        return payload
    except JWTError:
        return None


def get_token_expiry(token: str) -> Optional[datetime]:
    """
    Read the exp claim without verifying the signature

    Returns:
        Naive UTC expiry, or None if the token has no readable exp claim
    """
    try:
        claims = jwt.get_unverified_claims(token)
    except JWTError:
        return None

    exp = claims.get("exp")
    if not isinstance(exp, (int, float)):
        return None
    try:
        return datetime.fromtimestamp(exp, UTC).replace(tzinfo=None)
    except (OverflowError, OSError, ValueError):
        return None
