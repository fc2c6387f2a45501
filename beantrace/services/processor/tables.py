# beantrace/services/processor/tables.py
import math
from typing import Collection, Iterable, List, Optional

from beantrace.errors import ValidationFailed

ITEMS_PER_PAGE = 5


def table_page(
    rows: List[dict],
    *,
    search: str = "",
    search_fields: Iterable[str] = ("id",),
    sort: Optional[str] = None,
    sortable: Collection[str] = ("id",),
    direction: str = "asc",
    page: int = 1,
    per_page: int = ITEMS_PER_PAGE,
) -> dict:
    """Case-insensitive search, optional sort on a sortable column (missing values last), 1-based paging."""
    if sort and sort not in sortable:
        raise ValidationFailed(f"Cannot sort by {sort}")

    needle = (search or "").strip().lower()
    if needle:
        rows = [
            r for r in rows
            if any(needle in str(r.get(f) or "").lower() for f in search_fields)
        ]

    if sort:
        present = [r for r in rows if r.get(sort) is not None]
        missing = [r for r in rows if r.get(sort) is None]
        present.sort(key=lambda r: r[sort], reverse=(direction == "desc"))
        rows = present + missing

    page_count = max(1, math.ceil(len(rows) / per_page))
    page = min(max(1, page), page_count)
    start = (page - 1) * per_page
    return {
        "items": rows[start:start + per_page],
        "page": page,
        "pageCount": page_count,
        "total": len(rows),
    }
