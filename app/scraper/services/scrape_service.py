"""
Scrape orchestration.

Ties together the register page, PDF decoding, record assembly and
persistence. Pages are processed one after another; a page that fails a
validity gate is logged and skipped.
"""

import logging
from collections.abc import Mapping
from datetime import date

from sqlalchemy.orm import Session

# Handle both package imports and standalone imports
try:
    from ..config import Settings, get_settings
    from ..models import (
        DevelopmentApplication,
        ParsedDocument,
        ScrapeSummary,
        SkippedPage,
        SkipReason,
    )
    from .assembler import DEFAULT_COMMENT_URL, assemble_record
    from .listing_service import ListingService
    from .pdf_service import PDFService, get_pdf_service
    from .repository import upsert_application
    from .suburbs import load_suburb_names
except ImportError:
    from config import Settings, get_settings
    from models import (
        DevelopmentApplication,
        ParsedDocument,
        ScrapeSummary,
        SkippedPage,
        SkipReason,
    )
    from services.assembler import DEFAULT_COMMENT_URL, assemble_record
    from services.listing_service import ListingService
    from services.pdf_service import PDFService, get_pdf_service
    from services.repository import upsert_application
    from services.suburbs import load_suburb_names

logger = logging.getLogger(__name__)


def _log_skipped(skipped: SkippedPage) -> None:
    if skipped.reason == SkipReason.MISSING_SUBURB:
        logger.info(
            "Ignoring application %s because there is no suburb.",
            skipped.application_number,
        )
    else:
        logger.info(
            "Ignoring application on page %s because there is either no "
            "application number or no address.",
            skipped.page_number,
        )


def parse_pdf(
    pdf_bytes: bytes,
    information_url: str,
    suburb_names: Mapping[str, str],
    comment_url: str = DEFAULT_COMMENT_URL,
    pdf_service: PDFService | None = None,
    scrape_date: date | None = None,
) -> ParsedDocument:
    """
    Extract every development application from a register PDF.

    Args:
        pdf_bytes: The PDF document.
        information_url: URL the document was retrieved from.
        suburb_names: Suburb reference mapping.
        comment_url: Contact address for public comment.
        pdf_service: Decoder to use (the shared service if omitted).
        scrape_date: Date to stamp on the records (defaults to today).

    Raises:
        PDFExtractionError: If the document cannot be decoded.
    """
    pdf_service = pdf_service or get_pdf_service()
    pages = pdf_service.extract_pages(pdf_bytes)
    scrape_date = scrape_date or date.today()

    applications: list[DevelopmentApplication] = []
    skipped_pages: list[SkippedPage] = []
    for page_number, fragments in enumerate(pages, start=1):
        result = assemble_record(
            fragments,
            suburb_names,
            information_url,
            comment_url=comment_url,
            scrape_date=scrape_date,
            page_number=page_number,
        )
        if isinstance(result, SkippedPage):
            _log_skipped(result)
            skipped_pages.append(result)
        else:
            applications.append(result)

    return ParsedDocument(
        information_url=information_url,
        page_count=len(pages),
        applications=applications,
        skipped_pages=skipped_pages,
    )


class ScrapeService:
    """
    Runs a complete scrape of the register.

    Retrieves the register page, selects the documents for this run, parses
    them and saves the resulting applications.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        listing_service: ListingService | None = None,
        pdf_service: PDFService | None = None,
        suburb_names: Mapping[str, str] | None = None,
    ):
        self.settings = settings or get_settings()
        self.listing_service = listing_service or ListingService(
            proxy=self.settings.morph_proxy,
            timeout=self.settings.request_timeout,
            delay_seconds=self.settings.request_delay_seconds,
            jitter_seconds=self.settings.request_jitter_seconds,
        )
        self.pdf_service = pdf_service or get_pdf_service()
        self._suburb_names = suburb_names

    @property
    def suburb_names(self) -> Mapping[str, str]:
        """Lazy-load the suburb reference list."""
        if self._suburb_names is None:
            self._suburb_names = load_suburb_names(self.settings.suburb_names_path)
        return self._suburb_names

    def run(self, db: Session) -> ScrapeSummary:
        """
        Scrape the register and save the applications found.

        Args:
            db: Database session used to save applications.

        Returns:
            Summary of the documents parsed and records saved.

        Raises:
            ListingError: If the register page or a document cannot be retrieved.
            PDFExtractionError: If a document cannot be decoded.
        """
        suburb_names = self.suburb_names
        listing_url = self.settings.listing_url

        pdf_urls = self.listing_service.find_pdf_urls(listing_url)
        if not pdf_urls:
            logger.info("No PDF URLs were found on the page.")
            return ScrapeSummary()

        summary = ScrapeSummary(document_urls=self.listing_service.select(pdf_urls))
        for pdf_url in summary.document_urls:
            logger.info("Parsing document: %s", pdf_url)
            pdf_bytes = self.listing_service.download_pdf(pdf_url)
            document = parse_pdf(
                pdf_bytes,
                pdf_url,
                suburb_names,
                comment_url=self.settings.comment_url,
                pdf_service=self.pdf_service,
            )
            logger.info(
                "Parsed %d development application(s) from document: %s",
                len(document.applications),
                pdf_url,
            )

            for application in document.applications:
                upsert_application(db, application)
            summary.records_saved += len(document.applications)
            summary.pages_skipped += len(document.skipped_pages)

        return summary
