"""
Persistence of development applications.
"""

import logging

from sqlalchemy.orm import Session

# Handle both package imports and standalone imports
try:
    from ..models import ApplicationResponse, DevelopmentApplication
    from ..models_db import ApplicationRecord
except ImportError:
    from models import ApplicationResponse, DevelopmentApplication
    from models_db import ApplicationRecord

logger = logging.getLogger(__name__)


def upsert_application(db: Session, application: DevelopmentApplication) -> ApplicationRecord:
    """
    Insert an application, or replace the stored row with the same reference.

    Args:
        db: Database session.
        application: Extracted application record.

    Returns:
        The persisted row.
    """
    row = db.merge(
        ApplicationRecord(
            council_reference=application.application_number,
            address=application.address,
            description=application.description,
            info_url=application.information_url,
            comment_url=application.comment_url,
            date_scraped=application.scrape_date,
            date_received=application.received_date,
        )
    )
    db.commit()
    logger.info(
        'Saved application "%s" with address "%s" and description "%s" to the database.',
        application.application_number,
        application.address,
        application.description,
    )
    return row


def get_application(db: Session, council_reference: str) -> ApplicationRecord | None:
    """Get a stored application by council reference."""
    return db.get(ApplicationRecord, council_reference)


def list_applications(
    db: Session,
    limit: int = 50,
    offset: int = 0,
) -> tuple[list[ApplicationRecord], int]:
    """
    List stored applications, most recently scraped first.

    Returns:
        The requested page of rows and the total row count.
    """
    rows = (
        db.query(ApplicationRecord)
        .order_by(
            ApplicationRecord.date_scraped.desc(),
            ApplicationRecord.council_reference,
        )
        .offset(offset)
        .limit(limit)
        .all()
    )
    total = db.query(ApplicationRecord).count()
    return rows, total


def to_response(row: ApplicationRecord) -> ApplicationResponse:
    """Convert a stored row to its API representation."""
    return ApplicationResponse(
        council_reference=row.council_reference,
        address=row.address or "",
        description=row.description or "",
        info_url=row.info_url or "",
        comment_url=row.comment_url or "",
        date_scraped=row.date_scraped or "",
        date_received=row.date_received or "",
    )
