"""
Pydantic models for the development application scraper.

Defines strict types for positioned text fragments, the records extracted
from each register page, and the API responses built from them.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Direction(str, Enum):
    """Axis along which a label's value is expected to lie."""

    RIGHT = "right"
    DOWN = "down"


class Fragment(BaseModel):
    """
    One positioned text run extracted from a PDF page.

    Coordinates use a top-left origin in page space, so ``y`` grows
    downwards.

    Attributes:
        text: The text of the run, exactly as decoded.
        x: Left edge of the bounding rectangle.
        y: Top edge of the bounding rectangle.
        width: Width of the bounding rectangle (never negative).
        height: Height of the bounding rectangle (never negative).
    """

    model_config = ConfigDict(frozen=True)

    text: str
    x: float
    y: float
    width: float = Field(..., ge=0.0)
    height: float = Field(..., ge=0.0)


class DevelopmentApplication(BaseModel):
    """
    A development application record extracted from a single register page.

    ``received_date`` is an empty string when the page carries no valid
    date; it is never null.
    """

    model_config = ConfigDict(frozen=True)

    application_number: str = Field(..., min_length=1, description="Council reference")
    address: str = Field(..., min_length=1, description="Street address with suburb")
    description: str = Field(..., description="Description of the development")
    information_url: str = Field(..., description="URL of the source PDF")
    comment_url: str = Field(..., description="Contact for public comment")
    scrape_date: str = Field(..., description="Date scraped (YYYY-MM-DD)")
    received_date: str = Field(
        default="",
        description="Date the application was received (YYYY-MM-DD) or empty",
    )


class SkipReason(str, Enum):
    """Why a page produced no record."""

    MISSING_SUBURB = "missing_suburb"
    MISSING_APPLICATION_NUMBER = "missing_application_number"
    MISSING_ADDRESS = "missing_address"


class SkippedPage(BaseModel):
    """A page that failed a validity gate."""

    model_config = ConfigDict(frozen=True)

    reason: SkipReason
    application_number: str = Field(
        default="",
        description="Application number text found on the page, if any",
    )
    page_number: int | None = Field(default=None, ge=1)


class ParsedDocument(BaseModel):
    """All records and skipped pages from one PDF document."""

    information_url: str
    page_count: int = Field(..., ge=0)
    applications: list[DevelopmentApplication] = Field(default_factory=list)
    skipped_pages: list[SkippedPage] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(default="healthy")
    version: str = Field(default="1.0.0")
    message: str = Field(default="")


# =============================================================================
# Stored Application Models
# =============================================================================


class ApplicationResponse(BaseModel):
    """A stored development application as returned by the API."""

    council_reference: str
    address: str
    description: str
    info_url: str
    comment_url: str
    date_scraped: str
    date_received: str


class ApplicationListResponse(BaseModel):
    """Response model for listing stored applications."""

    applications: list[ApplicationResponse] = Field(default_factory=list)
    total: int = Field(..., ge=0, description="Total number of stored applications")


# =============================================================================
# Scrape Models
# =============================================================================


class ScrapeSummary(BaseModel):
    """Outcome of one scrape run."""

    document_urls: list[str] = Field(default_factory=list)
    records_saved: int = Field(default=0, ge=0)
    pages_skipped: int = Field(default=0, ge=0)


class StartScrapeResponse(BaseModel):
    """Response model for starting a background scrape."""

    message: str = Field(..., description="Status message")
    listing_url: str = Field(..., description="Register page being scraped")
    status: str = Field(default="processing", description="Initial status")
