"""
Record assembly for a single register page.

Each page of a register PDF describes one development application. The
assembler resolves the value next to every known label, cleans the text,
builds the address and applies the validity gates that decide whether the
page yields a record.
"""

import re
from collections.abc import Mapping, Sequence
from datetime import date, datetime
from typing import NamedTuple

# Handle both package imports and standalone imports
try:
    from ..models import (
        DevelopmentApplication,
        Direction,
        Fragment,
        SkippedPage,
        SkipReason,
    )
    from .geometry import find_closest
except ImportError:
    from models import (
        DevelopmentApplication,
        Direction,
        Fragment,
        SkippedPage,
        SkipReason,
    )
    from services.geometry import find_closest

DEFAULT_COMMENT_URL = "mailto:alex@alexandrina.sa.gov.au"
NO_DESCRIPTION = "NO DESCRIPTION PROVIDED"

# Day may omit its leading zero, month may not.
_RECEIVED_DATE_PATTERN = re.compile(r"^\d{1,2}/\d{2}/\d{4}$")

# Mis-decoded renderings of a separator glyph used in the register PDFs.
_MOJIBAKE = ("Ã¼", "ü")
_WHITESPACE = re.compile(r"\s+")


class FieldLabel(NamedTuple):
    """A printed label and where its value sits relative to it."""

    text: str
    direction: Direction


APPLICATION_NUMBER = FieldLabel("Application No", Direction.RIGHT)
DESCRIPTION = FieldLabel("Development Description", Direction.DOWN)
RECEIVED_DATE = FieldLabel("Application received", Direction.RIGHT)
HOUSE_NUMBER = FieldLabel("Property House No", Direction.RIGHT)
STREET = FieldLabel("Property Street", Direction.RIGHT)
SUBURB = FieldLabel("Property Suburb", Direction.RIGHT)


def normalize_text(text: str) -> str:
    """Replace mojibake separators, collapse whitespace and strip."""
    for artifact in _MOJIBAKE:
        text = text.replace(artifact, " ")
    return _WHITESPACE.sub(" ", text).strip()


def _resolve(fragments: Sequence[Fragment], label: FieldLabel) -> str | None:
    """Normalized value text for a label, or None if nothing was found."""
    fragment = find_closest(fragments, label.text, label.direction)
    if fragment is None:
        return None
    return normalize_text(fragment.text)


def enrich_suburb(suburb: str, suburb_names: Mapping[str, str]) -> str:
    """
    Add the state and postcode to a suburb name.

    Some pages repeat the suburb without a separator ("STRATHALBYN
    STRATHALBYN" once whitespace is collapsed); that form is matched against
    the doubled reference key. Unknown suburbs are returned unchanged.
    """
    enriched = suburb_names.get(suburb)
    if enriched is not None:
        return enriched
    for name, full_name in suburb_names.items():
        if f"{name} {name}" == suburb:
            return full_name
    return suburb


def parse_received_date(value: str | None) -> str:
    """
    Parse a received date in D/MM/YYYY form to YYYY-MM-DD.

    Returns an empty string if the value is missing or does not parse.
    """
    if not value:
        return ""
    value = value.strip()
    if not _RECEIVED_DATE_PATTERN.match(value):
        return ""
    try:
        return datetime.strptime(value, "%d/%m/%Y").strftime("%Y-%m-%d")
    except ValueError:
        return ""


def assemble_record(
    fragments: Sequence[Fragment],
    suburb_names: Mapping[str, str],
    information_url: str,
    comment_url: str = DEFAULT_COMMENT_URL,
    scrape_date: date | None = None,
    page_number: int | None = None,
) -> DevelopmentApplication | SkippedPage:
    """
    Build the development application record for one page.

    Args:
        fragments: Positioned text runs for the page.
        suburb_names: Suburb name to "NAME STATE POSTCODE" reference mapping.
        information_url: URL of the PDF the page came from.
        comment_url: Contact address for public comment.
        scrape_date: Date to stamp on the record (defaults to today).
        page_number: 1-based page number, carried into skip results.

    Returns:
        The record, or a SkippedPage describing the gate the page failed.
    """
    application_number = _resolve(fragments, APPLICATION_NUMBER)
    description = _resolve(fragments, DESCRIPTION)
    received_date = _resolve(fragments, RECEIVED_DATE)
    house_number = _resolve(fragments, HOUSE_NUMBER)
    street = _resolve(fragments, STREET)
    suburb = _resolve(fragments, SUBURB)

    address = " ".join(part for part in (house_number, street) if part)

    if not suburb or suburb == "0":
        return SkippedPage(
            reason=SkipReason.MISSING_SUBURB,
            application_number=application_number or "",
            page_number=page_number,
        )

    suburb = enrich_suburb(suburb, suburb_names)
    address = f"{address}, {suburb}" if address else suburb
    address = address.strip()

    if not application_number:
        return SkippedPage(
            reason=SkipReason.MISSING_APPLICATION_NUMBER,
            page_number=page_number,
        )
    if not address:
        return SkippedPage(
            reason=SkipReason.MISSING_ADDRESS,
            application_number=application_number,
            page_number=page_number,
        )

    return DevelopmentApplication(
        application_number=_WHITESPACE.sub("", application_number),
        address=address,
        description=description or NO_DESCRIPTION,
        information_url=information_url,
        comment_url=comment_url,
        scrape_date=(scrape_date or date.today()).isoformat(),
        received_date=parse_received_date(received_date),
    )
