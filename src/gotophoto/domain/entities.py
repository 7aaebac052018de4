"""Entity column declarations and the rules shared by every backend."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .exceptions import UnsupportedFieldsError

LOCATION_COLUMNS: Tuple[str, ...] = ("id", "title")

PHOTOLOCATION_COLUMNS: Tuple[str, ...] = (
    "id",
    "location",
    "title",
    "latitude",
    "longitude",
    "image_url",
    "description",
)


def verify_fields(entity: str, fields: Iterable[str], columns: Sequence[str]) -> None:
    """Reject any field name not declared for *entity*.

    Raises:
        UnsupportedFieldsError: naming every offending field.
    """
    invalid = set(fields) - set(columns)
    if invalid:
        raise UnsupportedFieldsError(entity, invalid)


def blank_row(columns: Sequence[str]) -> Dict[str, Any]:
    """Return a row with every declared column set to None."""
    return {name: None for name in columns}


def paginate(
    rows: Sequence[Mapping[str, Any]], limit: int
) -> Tuple[List[Mapping[str, Any]], Optional[int]]:
    """Cut one keyset page out of rows fetched with ``limit + 1``.

    Rows must already be ordered by ascending id. When the probe row
    is present, the page is the first *limit* rows and the cursor is
    the id of the last row kept. Otherwise this is the final page.

    Returns:
        ``(page_rows, next_cursor)`` with ``next_cursor`` None on the
        last page.
    """
    if len(rows) > limit:
        page = list(rows[:limit])
        return page, page[-1]["id"]
    return list(rows), None


def check_limit(limit: int) -> int:
    """Validate a page size, returning the probe size to request."""
    if limit < 1:
        raise ValueError(f"limit must be at least 1, got {limit}")
    return limit + 1
