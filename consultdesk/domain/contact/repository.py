"""Contact repository - Database operations for contact form submissions"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import ContactSubmission


class ContactRepository:
    """Repository for contact submission database operations"""

    @staticmethod
    def get_submissions(db: Session, limit: Optional[int] = None) -> list[ContactSubmission]:
        """Get submissions, newest first"""
        query = db.query(ContactSubmission).order_by(ContactSubmission.created_at.desc())
        if limit:
            query = query.limit(limit)
        return query.all()

    @staticmethod
    def create_submission(db: Session, **submission_data) -> ContactSubmission:
        submission = ContactSubmission(**submission_data)
        db.add(submission)
        db.commit()
        db.refresh(submission)
        return submission
