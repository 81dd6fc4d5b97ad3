"""Contact router - FastAPI endpoints for the contact form"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import require_admin
from ...config import CONTACT_RATE_LIMIT
from ...database import get_db
from ...rate_limiter import create_rate_limiter
from .schemas import ContactCreate, ContactResponse
from .service import ContactService

router = APIRouter(prefix="/api/contact", tags=["Contact"])

contact_rate_limit = create_rate_limiter(
    limit=CONTACT_RATE_LIMIT, window_seconds=3600, key_prefix="contact"
)


def get_contact_service(db: Session = Depends(get_db)) -> ContactService:
    """Dependency injection for ContactService"""
    return ContactService(db)


@router.post("", response_model=ContactResponse, status_code=201)
async def submit_contact_form(
    data: ContactCreate,
    _: None = Depends(contact_rate_limit),
    service: ContactService = Depends(get_contact_service),
):
    """Save a contact form submission (public)"""
    return ContactResponse.from_model(service.create_submission(data))


@router.get("", response_model=list[ContactResponse])
async def get_contact_submissions(
    limit: Optional[int] = Query(None, ge=1, le=500),
    _admin: dict = Depends(require_admin),
    service: ContactService = Depends(get_contact_service),
):
    """List contact submissions, newest first (admin)"""
    return [ContactResponse.from_model(s) for s in service.get_submissions(limit)]
