"""
Router for ad-hoc PDF parsing.

Handles:
- Uploading a register PDF and returning the applications found on it
"""

import logging
from typing import Annotated

from fastapi import APIRouter, File, Form, HTTPException, UploadFile, status

# Handle both package imports and standalone imports
try:
    from ..config import get_settings
    from ..models import ParsedDocument
    from ..services.pdf_service import PDFExtractionError, get_pdf_service
    from ..services.scrape_service import parse_pdf
    from ..services.suburbs import get_suburb_names
except ImportError:
    from config import get_settings
    from models import ParsedDocument
    from services.pdf_service import PDFExtractionError, get_pdf_service
    from services.scrape_service import parse_pdf
    from services.suburbs import get_suburb_names

logger = logging.getLogger(__name__)

router = APIRouter(prefix="", tags=["parse"])


@router.post("/parse-pdf", response_model=ParsedDocument)
async def parse_uploaded_pdf(
    file: Annotated[UploadFile, File(description="Register PDF to parse")],
    information_url: Annotated[str | None, Form()] = None,
) -> ParsedDocument:
    """
    Parse an uploaded register PDF without saving anything.

    The returned records carry ``information_url`` if given, otherwise the
    uploaded filename.
    """
    if not file.filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No filename provided",
        )

    if not file.filename.lower().endswith(".pdf"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only PDF files are accepted",
        )

    try:
        file_bytes = await file.read()

        if not file_bytes:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Empty file provided",
            )

        logger.info("Parsing uploaded PDF: %s (%d bytes)", file.filename, len(file_bytes))

        settings = get_settings()
        try:
            return parse_pdf(
                file_bytes,
                information_url or file.filename,
                get_suburb_names(settings.suburb_names_path),
                comment_url=settings.comment_url,
                pdf_service=get_pdf_service(),
            )
        except PDFExtractionError as e:
            logger.error("PDF extraction failed: %s", e)
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=str(e),
            )

    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Unexpected error parsing PDF")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Internal error: {e}",
        )
    finally:
        await file.close()
