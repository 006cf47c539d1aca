# This project was developed with assistance from AI tools.
"""Property catalog lookups.

The catalog itself is loaded elsewhere and handed in as a read-only sequence;
these helpers only search it.
"""

import re
from collections.abc import Sequence

from ..schemas.property import Property


class PropertyNotFoundError(LookupError):
    """Raised when a property id does not resolve in the catalog."""


_DELIVERY_MONTHS_RE = re.compile(r"(\d+)\s*(?:months?|mos?\.?|ay)\b", re.IGNORECASE)
_BARE_NUMBER_RE = re.compile(r"\s*(\d+)\s*")


def find_property(catalog: Sequence[Property], property_id: str) -> Property | None:
    """Return the property with ``property_id`` (case-insensitive), or None."""
    wanted = property_id.strip().upper()
    for prop in catalog:
        if prop.id.upper() == wanted:
            return prop
    return None


def get_property(catalog: Sequence[Property], property_id: str) -> Property:
    """Like find_property but raises PropertyNotFoundError when absent."""
    prop = find_property(catalog, property_id)
    if prop is None:
        raise PropertyNotFoundError(f"Property {property_id} not found")
    return prop


def parse_delivery_months(label: str | None) -> int:
    """Best-effort month count from a free-text delivery label.

    "18 months", "18 ay" and a bare "18" all give 18. Anything else gives 0, so a
    label like "Q3 2027" never reads as a month count.
    """
    if not label:
        return 0
    match = _DELIVERY_MONTHS_RE.search(label)
    if match:
        return int(match.group(1))
    match = _BARE_NUMBER_RE.fullmatch(label)
    return int(match.group(1)) if match else 0
