"""
Register page retrieval and PDF link discovery.

Uses requests for HTTP and BeautifulSoup for parsing the register page.
"""

import logging
import random
import time
from urllib.parse import urljoin

import requests
from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

PDF_LINK_SELECTOR = "h3.generic-list__title a[href$='.pdf']"


class ListingError(Exception):
    """Raised when the register page or a PDF cannot be retrieved."""

    pass


def discover_pdf_urls(html: str, base_url: str) -> list[str]:
    """
    Find the PDF links on the register page.

    Args:
        html: Register page HTML.
        base_url: URL the page was fetched from, used to resolve relative links.

    Returns:
        Absolute PDF URLs in page order, without duplicates.
    """
    soup = BeautifulSoup(html, "html.parser")
    pdf_urls: list[str] = []
    for link in soup.select(PDF_LINK_SELECTOR):
        pdf_url = urljoin(base_url, link["href"])
        if ".pdf" in pdf_url.lower() and pdf_url not in pdf_urls:
            pdf_urls.append(pdf_url)
    return pdf_urls


def select_pdf_urls(pdf_urls: list[str], rng: random.Random | None = None) -> list[str]:
    """
    Pick the documents to parse in this run.

    The most recent document (listed first) is always selected, plus one
    other chosen at random. Parsing every document at once uses too much
    memory on the hosting platform.
    """
    if not pdf_urls:
        return []
    rng = rng or random.Random()

    selected = [pdf_urls[0]]
    others = pdf_urls[1:]
    if others:
        selected.append(others[rng.randrange(len(others))])
    if rng.randrange(2) == 0:
        selected.reverse()
    return selected


class ListingService:
    """
    Service for retrieving the register page and its PDF documents.

    Every request is followed by a randomised pause so the council site is
    not hit in quick succession.
    """

    def __init__(
        self,
        proxy: str | None = None,
        timeout: float = 60.0,
        delay_seconds: float = 2.0,
        jitter_seconds: int = 4,
        session: requests.Session | None = None,
        rng: random.Random | None = None,
    ):
        """
        Initialize the listing service.

        Args:
            proxy: Optional HTTP(S) proxy URL.
            timeout: Request timeout in seconds.
            delay_seconds: Base pause after each request.
            jitter_seconds: Maximum whole seconds added to the pause at random.
            session: requests session to use (a new one if omitted).
            rng: Random source for pauses and document selection.
        """
        self.proxies = {"http": proxy, "https": proxy} if proxy else None
        self.timeout = timeout
        self.delay_seconds = delay_seconds
        self.jitter_seconds = jitter_seconds
        self.session = session or requests.Session()
        self.rng = rng or random.Random()

    def _pause(self) -> None:
        delay = self.delay_seconds + self.rng.randint(0, self.jitter_seconds)
        if delay > 0:
            time.sleep(delay)

    def _get(self, url: str) -> requests.Response:
        try:
            response = self.session.get(url, proxies=self.proxies, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error("Request failed for %s: %s", url, e)
            raise ListingError(f"Could not retrieve {url}: {e}") from e
        finally:
            self._pause()
        return response

    def fetch_listing(self, url: str) -> str:
        """Retrieve the register page HTML."""
        logger.info("Retrieving page: %s", url)
        return self._get(url).text

    def find_pdf_urls(self, url: str) -> list[str]:
        """Retrieve the register page and return the PDF links on it."""
        return discover_pdf_urls(self.fetch_listing(url), url)

    def select(self, pdf_urls: list[str]) -> list[str]:
        """Select documents using this service's random source."""
        return select_pdf_urls(pdf_urls, self.rng)

    def download_pdf(self, url: str) -> bytes:
        """Retrieve a PDF document."""
        logger.info("Retrieving document: %s", url)
        return self._get(url).content
