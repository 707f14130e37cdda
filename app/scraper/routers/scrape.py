"""
Router for starting register scrapes.
"""

import logging

from fastapi import APIRouter, BackgroundTasks, status

# Handle both package imports and standalone imports
try:
    from ..config import get_settings
    from ..database import SessionLocal
    from ..models import StartScrapeResponse
    from ..services.scrape_service import ScrapeService
except ImportError:
    from config import get_settings
    from database import SessionLocal
    from models import StartScrapeResponse
    from services.scrape_service import ScrapeService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/scrape", tags=["scrape"])


def run_scrape() -> None:
    """Background task: scrape the register with a dedicated session."""
    db = SessionLocal()
    try:
        summary = ScrapeService().run(db)
        logger.info(
            "Scrape complete: %d record(s) saved, %d page(s) skipped from %s",
            summary.records_saved,
            summary.pages_skipped,
            summary.document_urls,
        )
    except Exception:
        logger.exception("Scrape failed")
    finally:
        db.close()


@router.post("", response_model=StartScrapeResponse, status_code=status.HTTP_202_ACCEPTED)
async def start_scrape(background_tasks: BackgroundTasks) -> StartScrapeResponse:
    """Start scraping the register in the background."""
    background_tasks.add_task(run_scrape)
    return StartScrapeResponse(
        message="Scrape started",
        listing_url=get_settings().listing_url,
    )
