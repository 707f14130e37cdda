"""
SQLAlchemy database models for the development application scraper.

Applications are stored in the ``data`` table keyed by council reference,
the layout expected by the planning alerts aggregator that reads it.
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

# Handle both package imports and standalone imports
try:
    from .database import Base
except ImportError:
    from database import Base


class ApplicationRecord(Base):
    """
    Persisted development application.

    One row per council reference; saving the same application again
    replaces the row rather than adding another.
    """

    __tablename__ = "data"

    council_reference: Mapped[str] = mapped_column(
        Text,
        primary_key=True,
    )
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    info_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    comment_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    date_scraped: Mapped[str | None] = mapped_column(
        String(10),
        nullable=True,
        comment="YYYY-MM-DD",
    )
    date_received: Mapped[str | None] = mapped_column(
        String(10),
        nullable=True,
        comment="YYYY-MM-DD, or empty when unknown",
    )

    def __repr__(self) -> str:
        return f"<ApplicationRecord(council_reference='{self.council_reference}', address='{self.address}')>"
