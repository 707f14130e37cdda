"""Pytest configuration and fixtures."""

import os
from typing import Generator

# Settings are cached on first import, so point them at test values first.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["REQUEST_DELAY_SECONDS"] = "0"
os.environ["REQUEST_JITTER_SECONDS"] = "0"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app.scraper.database import Base, SessionLocal, engine, init_db
from app.scraper.main import app
from app.scraper.models import Fragment


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Session on a freshly created in-memory database."""
    init_db()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def suburb_names() -> dict[str, str]:
    """A small suburb reference mapping."""
    return {
        "STRATHALBYN": "STRATHALBYN SA 5255",
        "GOOLWA": "GOOLWA SA 5214",
        "PORT ELLIOT": "PORT ELLIOT SA 5212",
    }


def make_page(
    application_number: str | None = "2021/99",
    received: str | None = "5/03/2021",
    house_number: str | None = "12",
    street: str | None = "Main Rd",
    suburb: str | None = "STRATHALBYN",
    description: str | None = "Shed",
) -> list[Fragment]:
    """
    Build the fragments of a register page.

    Labels sit in a left-hand column with their values to the right, except
    the description which sits below its label. Passing None leaves a value
    out of the page (the label is still printed).
    """
    rows = [
        ("Application No", application_number),
        ("Application received", received),
        ("Property House No", house_number),
        ("Property Street", street),
        ("Property Suburb", suburb),
    ]
    fragments: list[Fragment] = []
    for index, (label, value) in enumerate(rows):
        y = index * 20.0
        fragments.append(Fragment(text=label, x=0, y=y, width=100, height=10))
        if value is not None:
            fragments.append(Fragment(text=value, x=110, y=y, width=70, height=10))

    fragments.append(
        Fragment(text="Development Description", x=0, y=100, width=120, height=10)
    )
    if description is not None:
        fragments.append(Fragment(text=description, x=0, y=115, width=40, height=10))
    return fragments


@pytest.fixture
def page_factory():
    """Factory for register pages with selected values changed or left out."""
    return make_page


@pytest.fixture
def page_fragments() -> list[Fragment]:
    """A complete, valid register page."""
    return make_page()


@pytest.fixture
def sample_pdf_bytes() -> bytes:
    """
    Create a minimal valid PDF for testing.

    This is a minimal PDF structure that should be recognized as a valid PDF.
    """
    return b"""%PDF-1.4
1 0 obj
<< /Type /Catalog /Pages 2 0 R >>
endobj
2 0 obj
<< /Type /Pages /Kids [3 0 R] /Count 1 >>
endobj
3 0 obj
<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] /Contents 4 0 R >>
endobj
4 0 obj
<< /Length 44 >>
stream
BT
/F1 12 Tf
100 700 Td
(Test) Tj
ET
endstream
endobj
xref
0 5
0000000000 65535 f
0000000009 00000 n
0000000058 00000 n
0000000115 00000 n
0000000214 00000 n
trailer
<< /Size 5 /Root 1 0 R >>
startxref
306
%%EOF"""


@pytest.fixture
def invalid_file_bytes() -> bytes:
    """Create invalid (non-PDF) file bytes for testing."""
    return b"This is not a PDF file"


PAGE_HEIGHT = 792
FONT_SIZE = 10


def _escape_pdf_text(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def build_pdf(pages: list[list[tuple[float, float, str]]]) -> bytes:
    """
    Build a real PDF with Helvetica text.

    Each page is a list of ``(x, top, text)`` runs, positioned from the
    top-left corner of a US Letter page. Every run is drawn with its own
    ``Td``/``Tj`` text object.
    """
    page_count = len(pages)
    kids = " ".join(f"{4 + 2 * index} 0 R" for index in range(page_count))
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        f"<< /Type /Pages /Kids [{kids}] /Count {page_count} >>".encode(),
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica /Encoding /WinAnsiEncoding >>",
    ]
    for index, runs in enumerate(pages):
        content = "".join(
            f"BT /F1 {FONT_SIZE} Tf {x:g} {PAGE_HEIGHT - top - FONT_SIZE:g} Td "
            f"({_escape_pdf_text(text)}) Tj ET\n"
            for x, top, text in runs
        ).encode("latin-1")
        objects.append(
            (
                f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 {PAGE_HEIGHT}] "
                f"/Resources << /Font << /F1 3 0 R >> >> /Contents {5 + 2 * index} 0 R >>"
            ).encode()
        )
        objects.append(
            b"<< /Length %d >>\nstream\n" % len(content) + content + b"endstream"
        )

    pdf = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(pdf))
        pdf += b"%d 0 obj\n" % number + body + b"\nendobj\n"

    xref_offset = len(pdf)
    pdf += b"xref\n0 %d\n" % (len(objects) + 1)
    pdf += b"0000000000 65535 f \n"
    for offset in offsets:
        pdf += b"%010d 00000 n \n" % offset
    pdf += b"trailer\n<< /Size %d /Root 1 0 R >>\n" % (len(objects) + 1)
    pdf += b"startxref\n%d\n%%%%EOF\n" % xref_offset
    return bytes(pdf)


def register_page_runs(
    application_number: str = "455/99/21",
    suburb: str = "STRATHALBYN",
) -> list[tuple[float, float, str]]:
    """Text runs of a register page: labels at x=50, values at x=200."""
    rows = [
        ("Application No", application_number),
        ("Application received", "5/03/2021"),
        ("Property House No", "12"),
        ("Property Street", "Main Rd"),
        ("Property Suburb", suburb),
    ]
    runs: list[tuple[float, float, str]] = []
    for index, (label, value) in enumerate(rows):
        top = 100.0 + index * 30
        runs.append((50, top, label))
        runs.append((200, top, value))
    runs.append((50, 250, "Development Description"))
    runs.append((50, 268, "Shed"))
    return runs


@pytest.fixture
def register_pdf_bytes() -> bytes:
    """A two-page register PDF; the second page has no suburb."""
    return build_pdf(
        [
            register_page_runs(),
            register_page_runs(application_number="456/99/21", suburb="0"),
        ]
    )
