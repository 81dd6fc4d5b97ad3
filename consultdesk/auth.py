import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from jose import jwt as jose_jwt

from . import config

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
ADMIN_ROLE = "admin"

security = HTTPBearer(auto_error=False)


def constant_time_compare(a: str, b: str) -> bool:
    """Compare two strings in constant time to prevent timing attacks"""
    return secrets.compare_digest(a.encode(), b.encode())


def verify_admin_password(password: str) -> bool:
    if not config.ADMIN_PASSWORD:
        logger.error("❌ ADMIN_PASSWORD not configured")
        raise HTTPException(status_code=503, detail="Admin login is not configured")
    return constant_time_compare(password, config.ADMIN_PASSWORD)


def create_jwt_token(data: dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a signed JWT token

    Args:
        data: Claims to encode in the token
        expires_delta: Token lifetime (default ADMIN_TOKEN_EXPIRE_MINUTES)
    """
    to_encode = data.copy()
    expires_delta = expires_delta or timedelta(minutes=config.ADMIN_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": datetime.now(timezone.utc) + expires_delta})
    return jose_jwt.encode(to_encode, config.SECRET_KEY, algorithm=ALGORITHM)


def verify_jwt_token(token: str) -> Optional[dict[str, Any]]:
    """
    Verify and decode a JWT token

    Returns:
        Decoded payload if valid, None if invalid or expired
    """
    try:
        return jose_jwt.decode(token, config.SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as e:
        logger.warning(f"JWT verification failed: {e}")
        return None


def issue_admin_token() -> str:
    return create_jwt_token({"sub": ADMIN_ROLE, "role": ADMIN_ROLE})


async def require_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> dict:
    """Dependency guarding admin-only endpoints; returns the token claims"""
    if credentials is None:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated. Please provide a valid Bearer token in the Authorization header.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = verify_jwt_token(credentials.credentials)
    if not payload or payload.get("role") != ADMIN_ROLE:
        raise HTTPException(
            status_code=401,
            detail="Invalid or expired admin token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return payload
