"""
Routers package for FastAPI endpoints.

Organized by domain:
- applications: Saved development applications
- parse: Ad-hoc parsing of uploaded register PDFs
- scrape: Starting register scrapes
"""

from . import applications, parse, scrape

__all__ = ["applications", "parse", "scrape"]
