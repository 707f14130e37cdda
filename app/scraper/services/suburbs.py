"""
Suburb reference list loading.

The reference file holds one ``SHORT NAME,SHORT NAME SA 5255`` pair per line
and is used to add the state and postcode to suburbs read from the PDFs.
"""

import logging
from functools import lru_cache
from pathlib import Path

logger = logging.getLogger(__name__)


def parse_suburb_names(content: str) -> dict[str, str]:
    """Parse reference list text into a suburb name mapping."""
    suburb_names: dict[str, str] = {}
    for line in content.replace("\r", "").strip().split("\n"):
        if not line.strip():
            continue
        parts = line.split(",")
        if len(parts) < 2:
            logger.warning("Ignoring malformed suburb line: %r", line)
            continue
        suburb_names[parts[0]] = parts[1]
    return suburb_names


def load_suburb_names(path: str | Path) -> dict[str, str]:
    """
    Load the suburb reference list from a file.

    Args:
        path: Path to the UTF-8 reference file.

    Returns:
        Mapping of suburb name to the name with state and postcode.
    """
    suburb_names = parse_suburb_names(Path(path).read_text(encoding="utf-8"))
    logger.info("Loaded %d suburb names from %s", len(suburb_names), path)
    return suburb_names


@lru_cache
def get_suburb_names(path: str | Path) -> dict[str, str]:
    """
    Get the cached suburb reference list for a file.

    The file is read once per path; callers must not modify the result.
    """
    return load_suburb_names(path)
