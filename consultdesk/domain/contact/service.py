"""Contact service - Business logic for contact form submissions"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...models import ContactSubmission
from ...utils.sanitization import validate_and_sanitize_input
from .repository import ContactRepository
from .schemas import ContactCreate

logger = logging.getLogger(__name__)

MAX_MESSAGE_LENGTH = 5000


class ContactService:
    """Service layer for contact submissions. Submissions are never edited or deleted."""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ContactRepository()

    def create_submission(self, data: ContactCreate) -> ContactSubmission:
        logger.info(f"📥 Contact form submission from {data.email}")

        try:
            message = validate_and_sanitize_input(data.message, max_length=MAX_MESSAGE_LENGTH)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e

        try:
            submission = self.repo.create_submission(
                self.db,
                name=data.name,
                email=data.email,
                phone=data.phone,
                message=message,
                contact_preference=data.contactPreference,
                preferred_days=data.preferredDays,
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Error saving contact form: {e}")
            raise HTTPException(status_code=500, detail="Failed to save contact form") from e

        logger.info(f"✅ Saved contact submission {submission.id}")
        return submission

    def get_submissions(self, limit: Optional[int] = None) -> list[ContactSubmission]:
        try:
            return self.repo.get_submissions(self.db, limit)
        except SQLAlchemyError as e:
            logger.error(f"❌ Error fetching contact forms: {e}")
            raise HTTPException(status_code=500, detail="Failed to fetch contact forms") from e
