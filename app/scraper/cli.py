"""
Command line entry point for the register scraper.

Usage:
  dascraper scrape            Scrape the register and save new applications.
  dascraper parse FILE.pdf    Print the applications found in a local PDF.
"""

import argparse
import json
import logging
from pathlib import Path

from . import __version__
from .config import get_settings
from .database import SessionLocal, init_db
from .services.scrape_service import ScrapeService, parse_pdf
from .services.suburbs import load_suburb_names

logger = logging.getLogger(__name__)


def cmd_scrape(args: argparse.Namespace) -> None:
    init_db()
    db = SessionLocal()
    try:
        summary = ScrapeService().run(db)
    finally:
        db.close()
    print(summary.model_dump_json(indent=2))


def cmd_parse(args: argparse.Namespace) -> None:
    settings = get_settings()
    path = Path(args.file)
    document = parse_pdf(
        path.read_bytes(),
        args.url or path.name,
        load_suburb_names(args.suburbs or settings.suburb_names_path),
        comment_url=settings.comment_url,
    )
    print(json.dumps(document.model_dump(mode="json"), indent=2))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dascraper",
        description="Development application register scraper.",
    )
    parser.add_argument(
        "--version", action="version", version=f"dascraper {__version__}"
    )

    subparsers = parser.add_subparsers(
        title="commands",
        metavar="<command>",
        dest="command",
    )
    subparsers.required = True

    p_scrape = subparsers.add_parser(
        "scrape", help="Scrape the register and save applications to the database."
    )
    p_scrape.set_defaults(func=cmd_scrape)

    p_parse = subparsers.add_parser(
        "parse", help="Parse a local register PDF and print the applications as JSON."
    )
    p_parse.add_argument("file", help="Path to the PDF document.")
    p_parse.add_argument(
        "--url", default=None, help="Information URL to record (default: the file name)."
    )
    p_parse.add_argument(
        "--suburbs", default=None, help="Suburb reference file (default: bundled list)."
    )
    p_parse.set_defaults(func=cmd_parse)

    return parser


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    parser = build_parser()
    args = parser.parse_args()
    args.func(args)
    logger.info("Complete.")


if __name__ == "__main__":
    main()
