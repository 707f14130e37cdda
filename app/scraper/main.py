"""
FastAPI application for the development application scraper.

Provides endpoints for:
- Parsing uploaded register PDFs
- Starting register scrapes
- Browsing saved applications
"""

import logging

from contextlib import asynccontextmanager

from fastapi import FastAPI, status
from fastapi.responses import JSONResponse

# Handle both package imports (when running as module) and standalone imports (uvicorn main:app)
try:
    from .database import init_db
    from .models import HealthResponse
    from .routers import applications, parse, scrape
    from .services.listing_service import ListingError
    from .services.pdf_service import PDFExtractionError, get_pdf_service
except ImportError:
    import sys
    from pathlib import Path
    # Add parent directory to path for standalone imports
    package_dir = Path(__file__).parent
    if str(package_dir) not in sys.path:
        sys.path.insert(0, str(package_dir))
    from database import init_db
    from models import HealthResponse
    from routers import applications, parse, scrape
    from services.listing_service import ListingError
    from services.pdf_service import PDFExtractionError, get_pdf_service

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    logger.info("Starting Development Application Scraper...")
    get_pdf_service()
    init_db()
    logger.info("Services initialized successfully")
    yield
    logger.info("Shutting down Development Application Scraper...")


# Create FastAPI application
app = FastAPI(
    title="Development Application Scraper API",
    description="Development application records extracted from council register PDFs",
    version="1.0.0",
    lifespan=lifespan,
)


# =============================================================================
# Health Endpoints
# =============================================================================


@app.get("/", response_model=HealthResponse)
async def root() -> HealthResponse:
    """Root endpoint - health check."""
    return HealthResponse(
        status="healthy",
        message="Development Application Scraper API is running",
    )


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="healthy", message="Service is healthy")


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(parse.router)
app.include_router(scrape.router)
app.include_router(applications.router)


# =============================================================================
# Exception Handlers
# =============================================================================


@app.exception_handler(PDFExtractionError)
async def pdf_extraction_error_handler(request, exc: PDFExtractionError):
    """Handle PDF extraction errors."""
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": str(exc)},
    )


@app.exception_handler(ListingError)
async def listing_error_handler(request, exc: ListingError):
    """Handle register retrieval errors."""
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": str(exc)},
    )
