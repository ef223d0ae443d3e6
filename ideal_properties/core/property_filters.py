"""
Listing filters for the Buy and Rent pages.

Filter values arrive as strings from the website's filter form. An empty
value or ``"any"`` leaves that dimension unconstrained; values that are not
numbers are ignored as well.
"""

import logging
from typing import Dict, Any, List, Optional

from ideal_properties.models.property import PropertyFilters

logger = logging.getLogger(__name__)

ANY = "any"


def _is_set(value: Optional[str]) -> bool:
    stripped = (value or "").strip()
    return bool(stripped) and stripped.lower() != ANY


def _to_float(value: Optional[str]) -> Optional[float]:
    if not _is_set(value):
        return None
    try:
        return float(value)
    except ValueError:
        logger.debug(f"Ignoring non-numeric filter value: {value!r}")
        return None


def _to_int(value: Optional[str]) -> Optional[int]:
    number = _to_float(value)
    return int(number) if number is not None else None


def matches_filters(record: Dict[str, Any], filters: PropertyFilters) -> bool:
    """Check a single property document against the filters."""
    price = record.get("price") or 0
    min_price = _to_float(filters.min_price)
    max_price = _to_float(filters.max_price)
    min_beds = _to_int(filters.beds)
    min_baths = _to_int(filters.baths)

    if min_price is not None and price < min_price:
        return False
    if max_price is not None and price > max_price:
        return False
    if min_beds is not None and (record.get("beds") or 0) < min_beds:
        return False
    if min_baths is not None and (record.get("baths") or 0) < min_baths:
        return False
    if _is_set(filters.property_type) and record.get("property_type") != filters.property_type.strip():
        return False
    return True


def apply_filters(records: List[Dict[str, Any]], filters: PropertyFilters) -> List[Dict[str, Any]]:
    """Return the records matching the filters, keeping their order."""
    return [record for record in records if matches_filters(record, filters)]
