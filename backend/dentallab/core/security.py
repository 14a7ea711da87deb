from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

from dentallab.core.config import DEV_JWT_SECRET

JWT_ALGORITHM = "HS256"
JWT_EXPIRATION_HOURS = 24

LABORATORY_CLAIM = "laboratory_id"


def create_access_token(
    user_id: str,
    laboratory_id: Optional[str] = None,
    expires_delta: Optional[timedelta] = None,
    secret: str = DEV_JWT_SECRET,
    algorithm: str = JWT_ALGORITHM,
) -> str:
    """Create a JWT access token.

    Args:
        user_id: Caller identity, stored in the ``sub`` claim
        laboratory_id: Laboratory the caller acts for; omitted when None
        expires_delta: Optional custom expiration time
        secret: Signing key
        algorithm: Signing algorithm

    Returns:
        Encoded JWT token string
    """
    now = datetime.now(timezone.utc)
    to_encode: Dict[str, Any] = {"sub": str(user_id), "iat": now}
    if laboratory_id:
        to_encode[LABORATORY_CLAIM] = laboratory_id

    if expires_delta:
        expire = now + expires_delta
    else:
        expire = now + timedelta(hours=JWT_EXPIRATION_HOURS)
    to_encode["exp"] = expire

    return jwt.encode(to_encode, secret, algorithm=algorithm)


def decode_access_token(
    token: str,
    secret: str = DEV_JWT_SECRET,
    algorithm: str = JWT_ALGORITHM,
) -> Optional[Dict[str, Any]]:
    """Decode and validate a JWT access token.

    Returns:
        Decoded payload if valid, None if invalid or expired
    """
    try:
        return jwt.decode(token, secret, algorithms=[algorithm])
    except jwt.PyJWTError:
        return None
