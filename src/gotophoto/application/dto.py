"""Data Transfer Objects for crossing layer boundaries.

DTOs are simple dataclasses used to pass data between layers without
creating coupling to infrastructure types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class LocationPage:
    """One page of locations.

    Attributes:
        locations: Rows mapping column name to value, ascending by id.
        cursor: Pass to the next ``list_locations`` call, or None when
            this is the last page.
    """

    locations: List[Dict[str, Any]] = field(default_factory=list)
    cursor: Optional[int] = None


@dataclass
class PhotolocationPage:
    """One page of photolocations at a single location.

    Attributes:
        photolocations: Rows mapping column name to value, ascending by id.
        cursor: Pass to the next ``list_photolocations`` call with the
            same location, or None when this is the last page.
    """

    photolocations: List[Dict[str, Any]] = field(default_factory=list)
    cursor: Optional[int] = None
