"""
Secondary orderings for catalog listings.

Name, price and rating orderings used when the caller asks for something
other than relevance. All orderings are stable.
"""

import math
from typing import Any, Dict, Iterable, List, Optional

from ..utils.text_utils import normalize_text
from .models import SortOrder, get_field_value

DEFAULT_SORT_FIELDS = {
    "name": "name",
    "price": "daily_rate",
    "rating": "average_rating",
}


def _as_number(value: Any) -> float:
    """Read a price or rating; missing, unparsable or non-finite values count as 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def sort_records(
    records: Iterable[Any],
    order: SortOrder,
    sort_fields: Optional[Dict[str, str]] = None
) -> List[Any]:
    """
    Sort records by a secondary ordering.

    Args:
        records: Catalog records, left untouched.
        order: Ordering to apply; RELEVANCE keeps the input order.
        sort_fields: Maps sort keys ("name", "price", "rating") to record
                    field names.

    Returns:
        New sorted list.
    """
    records = list(records)
    if order is SortOrder.RELEVANCE:
        return records

    fields = {**DEFAULT_SORT_FIELDS, **(sort_fields or {})}
    field_name = fields[order.key]

    if order.key == "name":
        def sort_key(record):
            return normalize_text(get_field_value(record, field_name))
    else:
        def sort_key(record):
            return _as_number(get_field_value(record, field_name))

    return sorted(records, key=sort_key, reverse=order.descending)


if __name__ == "__main__":
    catalog = [
        {"id": 1, "name": "Betoneira 400L", "daily_rate": "89.90", "average_rating": 4.5},
        {"id": 2, "name": "Andaime", "daily_rate": 12, "average_rating": None},
        {"id": 3, "name": "Écran de proteção", "daily_rate": None, "average_rating": 4.9},
    ]

    for order in SortOrder:
        ids = [record["id"] for record in sort_records(catalog, order)]
        print(f"  {order.value:<12} {ids}")
