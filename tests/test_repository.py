"""Tests for application persistence."""

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from app.scraper.database import init_db
from app.scraper.models import DevelopmentApplication
from app.scraper.models_db import ApplicationRecord
from app.scraper.services.repository import (
    get_application,
    list_applications,
    to_response,
    upsert_application,
)


def make_application(**overrides: str) -> DevelopmentApplication:
    values = {
        "application_number": "455/99/21",
        "address": "12 Main Rd, STRATHALBYN SA 5255",
        "description": "Shed",
        "information_url": "https://example.com/register.pdf",
        "comment_url": "mailto:alex@alexandrina.sa.gov.au",
        "scrape_date": "2021-04-01",
        "received_date": "2021-03-05",
    }
    values.update(overrides)
    return DevelopmentApplication(**values)


class TestUpsertApplication:
    """Tests for saving applications."""

    def test_insert(self, db_session: Session):
        upsert_application(db_session, make_application())

        row = get_application(db_session, "455/99/21")
        assert row is not None
        assert row.address == "12 Main Rd, STRATHALBYN SA 5255"
        assert row.info_url == "https://example.com/register.pdf"
        assert row.date_scraped == "2021-04-01"
        assert row.date_received == "2021-03-05"

    def test_identical_resubmission_is_idempotent(self, db_session: Session):
        """Saving the same application twice keeps a single row."""
        upsert_application(db_session, make_application())
        upsert_application(db_session, make_application())
        assert db_session.query(ApplicationRecord).count() == 1

    def test_replaces_existing_row(self, db_session: Session):
        upsert_application(db_session, make_application())
        upsert_application(db_session, make_application(description="Carport", received_date=""))

        row = get_application(db_session, "455/99/21")
        assert row.description == "Carport"
        assert row.date_received == ""
        assert db_session.query(ApplicationRecord).count() == 1

    def test_missing_application(self, db_session: Session):
        assert get_application(db_session, "nope") is None


class TestListApplications:
    """Tests for listing applications."""

    def test_newest_scrape_first(self, db_session: Session):
        upsert_application(db_session, make_application(application_number="1/21", scrape_date="2021-01-01"))
        upsert_application(db_session, make_application(application_number="2/21", scrape_date="2021-02-01"))
        upsert_application(db_session, make_application(application_number="3/21", scrape_date="2021-01-15"))

        rows, total = list_applications(db_session)
        assert total == 3
        assert [row.council_reference for row in rows] == ["2/21", "3/21", "1/21"]

    def test_limit_and_offset(self, db_session: Session):
        for number in range(5):
            upsert_application(db_session, make_application(application_number=f"{number}/21"))

        rows, total = list_applications(db_session, limit=2, offset=1)
        assert total == 5
        assert [row.council_reference for row in rows] == ["1/21", "2/21"]

    def test_to_response(self, db_session: Session):
        upsert_application(db_session, make_application(received_date=""))
        response = to_response(get_application(db_session, "455/99/21"))
        assert response.council_reference == "455/99/21"
        assert response.date_received == ""
        assert response.comment_url == "mailto:alex@alexandrina.sa.gov.au"


class TestInitDb:
    """Tests for table creation."""

    def make_engine(self):
        return create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    def test_creates_table(self):
        engine = self.make_engine()
        init_db(bind=engine)
        columns = {column["name"] for column in inspect(engine).get_columns("data")}
        assert columns == {
            "council_reference",
            "address",
            "description",
            "info_url",
            "comment_url",
            "date_scraped",
            "date_received",
        }

    def test_drops_legacy_table(self):
        """A table from the older register format is recreated."""
        engine = self.make_engine()
        with engine.begin() as connection:
            connection.execute(
                text(
                    "create table data (council_reference text primary key, "
                    "on_notice_from text, on_notice_to text)"
                )
            )

        init_db(bind=engine)

        columns = {column["name"] for column in inspect(engine).get_columns("data")}
        assert "on_notice_from" not in columns
        assert "date_received" in columns

    def test_keeps_current_table(self):
        engine = self.make_engine()
        init_db(bind=engine)
        with engine.begin() as connection:
            connection.execute(text("insert into data (council_reference) values ('1/21')"))

        init_db(bind=engine)

        with engine.connect() as connection:
            assert connection.execute(text("select count(*) from data")).scalar() == 1
