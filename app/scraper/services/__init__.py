"""
Services package for the development application scraper.

Contains:
- geometry: label-proximity search over positioned text fragments
- assembler: per-page record assembly and validity gates
- pdf_service: PDF decoding into text fragments
- listing_service: register page retrieval and PDF link discovery
- repository: persistence of applications
- scrape_service: end-to-end scrape orchestration
"""

from .listing_service import ListingService
from .pdf_service import PDFService
from .scrape_service import ScrapeService

__all__ = ["PDFService", "ListingService", "ScrapeService"]
