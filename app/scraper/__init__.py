"""
Development Application Register Scraper.

Extracts development application records from the Alexandrina Council
register PDFs by locating field values next to their printed labels.
"""

__version__ = "1.0.0"
