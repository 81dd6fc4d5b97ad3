"""Admin router - login and session check for the admin dashboard"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from ... import config
from ...auth import issue_admin_token, require_admin, verify_admin_password
from ...rate_limiter import create_rate_limiter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["Admin"])

admin_login_rate_limit = create_rate_limiter(
    limit=config.ADMIN_LOGIN_RATE_LIMIT, window_seconds=900, key_prefix="admin_login"
)


class AdminLoginRequest(BaseModel):
    password: str


class AdminTokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int


class AdminSessionResponse(BaseModel):
    authenticated: bool
    subject: str
    expiresAt: datetime


@router.post("/login", response_model=AdminTokenResponse)
async def admin_login(data: AdminLoginRequest, _: None = Depends(admin_login_rate_limit)):
    """Exchange the admin password for a short-lived bearer token"""
    if not verify_admin_password(data.password):
        logger.warning("🔒 Admin login failed: wrong password")
        raise HTTPException(status_code=401, detail="Invalid admin password")

    logger.info("🔑 Admin login succeeded")
    return AdminTokenResponse(
        access_token=issue_admin_token(),
        expires_in=config.ADMIN_TOKEN_EXPIRE_MINUTES * 60,
    )


@router.get("/session", response_model=AdminSessionResponse)
async def admin_session(claims: dict = Depends(require_admin)):
    """Confirm the caller holds a valid admin token"""
    return AdminSessionResponse(
        authenticated=True,
        subject=claims["sub"],
        expiresAt=datetime.fromtimestamp(claims["exp"], tz=timezone.utc),
    )
