"""
Geometry helpers for locating a label's value among positioned text runs.

Values in the register PDFs are printed next to their labels but are not
bound to them in any way, so a value is found by looking for the nearest
fragment to the right of (or below) the fragment carrying the label.
"""

from collections.abc import Sequence

# Handle both package imports and standalone imports
try:
    from ..models import Direction, Fragment
except ImportError:
    from models import Direction, Fragment

# Label and value baselines are not perfectly aligned in the source
# documents; these overlap allowances were tuned against real pages.
RIGHT_OVERLAP_FACTOR = 0.2
DOWN_OVERLAP_FACTOR = 0.5


def distance_squared(a: Fragment, b: Fragment, direction: Direction) -> float | None:
    """
    Squared distance from fragment ``a`` to fragment ``b`` in a direction.

    For ``RIGHT`` the right-centre of ``a`` is measured against the
    left-centre of ``b``. For ``DOWN`` the bottom-centre of ``a`` is measured
    against a point on the top edge of ``b`` aligned with the centre of
    ``a`` (clamped to the right edge of ``b``).

    Returns:
        The squared distance, or None if ``b`` overlaps ``a`` by more than
        the allowed tolerance in that direction.
    """
    if direction == Direction.RIGHT:
        x1 = a.x + a.width
        y1 = a.y + a.height / 2
        x2 = b.x
        y2 = b.y + b.height / 2
        if x2 < x1 - a.width * RIGHT_OVERLAP_FACTOR:
            return None
    elif direction == Direction.DOWN:
        x1 = a.x + a.width / 2
        y1 = a.y + a.height
        x2 = min(b.x + a.width / 2, b.x + b.width)
        y2 = b.y
        if y2 < y1 - a.height * DOWN_OVERLAP_FACTOR:
            return None
    else:
        return None

    return (x2 - x1) ** 2 + (y2 - y1) ** 2


def overlaps(a: Fragment, b: Fragment, direction: Direction) -> bool:
    """Whether ``b`` shares the horizontal (RIGHT) or vertical (DOWN) band of ``a``."""
    if direction == Direction.RIGHT:
        return b.y < a.y + a.height and b.y + b.height > a.y
    if direction == Direction.DOWN:
        return b.x < a.x + a.width and b.x + b.width > a.x
    return False


def find_label(fragments: Sequence[Fragment], label: str) -> Fragment | None:
    """First fragment whose stripped text starts with ``label``, ignoring case."""
    label = label.lower()
    for fragment in fragments:
        if fragment.text.strip().lower().startswith(label):
            return fragment
    return None


def find_closest(
    fragments: Sequence[Fragment],
    label: str,
    direction: Direction,
) -> Fragment | None:
    """
    Find the fragment holding the value for a label.

    Args:
        fragments: All fragments on the page.
        label: Label text to anchor on (matched as a case-insensitive prefix).
        direction: Where the value lies relative to the label.

    Returns:
        The nearest fragment in ``direction`` that shares the label's band,
        or None if the label is missing or nothing qualifies. Ties go to the
        fragment that comes first in ``fragments``.
    """
    anchor = find_label(fragments, label)
    if anchor is None:
        return None

    closest: Fragment | None = None
    closest_distance: float | None = None
    for candidate in fragments:
        if candidate is anchor or not overlaps(anchor, candidate, direction):
            continue
        distance = distance_squared(anchor, candidate, direction)
        if distance is None:
            continue
        if closest_distance is None or distance < closest_distance:
            closest = candidate
            closest_distance = distance

    return closest
