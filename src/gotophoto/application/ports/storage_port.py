"""Storage port: interface for persistence operations.

Any storage backend (MySQL, Postgres, MongoDB, Cloud Datastore, ...)
must implement this Protocol to be usable by the request handlers.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Protocol, runtime_checkable

from gotophoto.application.dto import LocationPage, PhotolocationPage


@runtime_checkable
class StoragePort(Protocol):
    """Protocol for location and photolocation persistence adapters."""

    # -- Listing --

    def list_locations(
        self, limit: int = 1000, cursor: Optional[int] = None
    ) -> LocationPage:
        """List locations in ascending id order.

        Args:
            limit: Maximum number of locations to return.
            cursor: Cursor returned by an earlier call, or None for the
                first page.

        Returns:
            The page of locations and the cursor for the next page.
        """
        ...

    def list_photolocations(
        self,
        at_location: int,
        limit: int = 1000,
        cursor: Optional[int] = None,
    ) -> PhotolocationPage:
        """List the photolocations recorded at one location.

        Args:
            at_location: ID of the location to query.
            limit: Maximum number of photolocations to return.
            cursor: Cursor returned by an earlier call with the same
                ``at_location``, or None for the first page.

        Returns:
            The page of photolocations and the cursor for the next page.
        """
        ...

    # -- Location CRUD --

    def create_location(
        self, location: Dict[str, Any], id: Optional[int] = None
    ) -> int:
        """Create a location and return its id.

        Args:
            location: Column name to value mapping.
            id: Explicit id to use instead of a backend-assigned one.

        Raises:
            UnsupportedFieldsError: If *location* has undeclared fields.
        """
        ...

    def read_location(self, id: int) -> Optional[Dict[str, Any]]:
        """Return the location with *id*, or None if absent."""
        ...

    def update_location(self, location: Dict[str, Any]) -> int:
        """Overwrite the location identified by ``location["id"]``.

        Declared columns missing from *location* are written as null.

        Returns:
            Number of locations updated (0 when absent).
        """
        ...

    def delete_location(self, id: int) -> int:
        """Delete a location and return the number of rows deleted."""
        ...

    # -- Photolocation writes --

    def create_photolocation(
        self, photolocation: Dict[str, Any], id: Optional[int] = None
    ) -> int:
        """Create a photolocation and return its id."""
        ...
