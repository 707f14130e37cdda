"""
Router for stored development applications.

Handles:
- Listing saved applications
- Retrieving a single application by council reference
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

# Handle both package imports and standalone imports
try:
    from ..database import get_db
    from ..models import ApplicationListResponse, ApplicationResponse
    from ..services.repository import get_application, list_applications, to_response
except ImportError:
    from database import get_db
    from models import ApplicationListResponse, ApplicationResponse
    from services.repository import get_application, list_applications, to_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/applications", tags=["applications"])


@router.get("", response_model=ApplicationListResponse)
async def get_applications(
    db: Session = Depends(get_db),
    limit: int = 50,
    offset: int = 0,
) -> ApplicationListResponse:
    """
    List saved development applications.

    Args:
        db: Database session.
        limit: Maximum number of applications to return.
        offset: Number of applications to skip.
    """
    rows, total = list_applications(db, limit=limit, offset=offset)
    return ApplicationListResponse(
        applications=[to_response(row) for row in rows],
        total=total,
    )


@router.get("/{council_reference:path}", response_model=ApplicationResponse)
async def get_application_detail(
    council_reference: str,
    db: Session = Depends(get_db),
) -> ApplicationResponse:
    """Get a saved application by its council reference (e.g. 455/1234/18)."""
    row = get_application(db, council_reference)
    if row is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Application '{council_reference}' not found",
        )
    return to_response(row)
