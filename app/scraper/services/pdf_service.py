"""
PDF decoding service using pdfplumber (pdfminer.six).

Turns PDF documents into per-page lists of positioned text fragments for
label-proximity extraction.
"""

import io
import logging
from typing import BinaryIO

import pdfplumber
from pdfplumber.utils.exceptions import PdfminerException

# Handle both package imports and standalone imports
try:
    from ..models import Fragment
except ImportError:
    from models import Fragment

logger = logging.getLogger(__name__)


class PDFExtractionError(Exception):
    """Raised when a PDF cannot be decoded into text fragments."""

    pass


class PDFService:
    """
    Service for PDF text extraction.

    Characters are grouped into text runs the way the PDF draws them: blank
    characters are kept inside a run, so multi-word labels such as
    "Application No" arrive as a single fragment, and a run only ends where
    the horizontal gap between characters exceeds ``x_tolerance``.
    """

    def __init__(self, x_tolerance: float = 3.0, y_tolerance: float = 3.0):
        """
        Initialize the PDF service.

        Args:
            x_tolerance: Largest horizontal gap (points) inside one text run.
            y_tolerance: Largest vertical offset (points) inside one text run.
        """
        self.x_tolerance = x_tolerance
        self.y_tolerance = y_tolerance

    @staticmethod
    def _read_bytes(file_bytes: bytes | BinaryIO) -> bytes:
        if hasattr(file_bytes, "read"):
            pdf_bytes = file_bytes.read()
        else:
            pdf_bytes = file_bytes

        if not pdf_bytes:
            raise PDFExtractionError("Empty PDF file provided")

        # Validate PDF magic bytes
        if not pdf_bytes[:4] == b"%PDF":
            raise PDFExtractionError(
                "Invalid PDF file: does not start with PDF header"
            )
        return pdf_bytes

    def _page_fragments(self, page: "pdfplumber.page.Page") -> list[Fragment]:
        words = page.extract_words(
            x_tolerance=self.x_tolerance,
            y_tolerance=self.y_tolerance,
            keep_blank_chars=True,
            use_text_flow=True,
        )
        return [
            Fragment(
                text=word["text"],
                x=word["x0"],
                y=word["top"],
                width=max(word["x1"] - word["x0"], 0.0),
                height=max(word["bottom"] - word["top"], 0.0),
            )
            for word in words
        ]

    def extract_pages(self, file_bytes: bytes | BinaryIO) -> list[list[Fragment]]:
        """
        Decode every page of a PDF into positioned text fragments.

        Args:
            file_bytes: PDF file as bytes or file-like object.

        Returns:
            One list of fragments per page, in page order. Fragments use a
            top-left origin in page space.

        Raises:
            PDFExtractionError: If the PDF cannot be decoded.
        """
        pdf_bytes = self._read_bytes(file_bytes)

        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                pages = [self._page_fragments(page) for page in pdf.pages]
            logger.info("Extracted text fragments from %d page(s)", len(pages))
            return pages

        except PdfminerException as e:
            logger.error("PDF decoding error: %s", e)
            raise PDFExtractionError(f"Invalid or corrupted PDF file: {e}") from e

        except Exception as e:
            logger.exception("Unexpected error during PDF text extraction")
            raise PDFExtractionError(f"PDF text extraction failed: {e}") from e

    def get_page_count(self, file_bytes: bytes | BinaryIO) -> int:
        """
        Get the total number of pages in a PDF.

        Raises:
            PDFExtractionError: If page count cannot be determined.
        """
        pdf_bytes = self._read_bytes(file_bytes)
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                return len(pdf.pages)
        except Exception as e:
            logger.error("Could not get page count: %s", e)
            raise PDFExtractionError(f"Could not get page count: {e}") from e


# Singleton instance for convenience
_pdf_service: PDFService | None = None


def get_pdf_service() -> PDFService:
    """Get or create the PDF service singleton."""
    global _pdf_service
    if _pdf_service is None:
        _pdf_service = PDFService()
    return _pdf_service
