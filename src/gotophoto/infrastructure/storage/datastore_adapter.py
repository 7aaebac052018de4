"""Cloud Datastore storage adapter: implements StoragePort on Google
Cloud Datastore (Firestore in Datastore mode).
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from google.cloud import datastore
from google.cloud.datastore.query import PropertyFilter

from gotophoto.application.dto import LocationPage, PhotolocationPage
from gotophoto.domain.entities import (
    LOCATION_COLUMNS,
    PHOTOLOCATION_COLUMNS,
    blank_row,
    check_limit,
    paginate,
    verify_fields,
)
from gotophoto.domain.exceptions import ValidationError

logger = logging.getLogger(__name__)

LOCATION_KIND = "Location"
PHOTOLOCATION_KIND = "Photolocation"


class DatastoreStorageAdapter:
    """Adapter storing each row as an entity whose key id is the row id.

    Pages are keyset pages over ``__key__``, so cursors are plain integer
    ids rather than Datastore query cursors. Listing photolocations
    filters on ``location`` and orders by key, which needs a composite
    index on ``Photolocation(location, __key__)``.

    Args:
        project_id: Google Cloud project holding the datastore.
        client: Pre-built client (mainly for tests).
    """

    def __init__(self, project_id: Optional[str], client: Any = None) -> None:
        self._client = client if client is not None else datastore.Client(project_id)
        logger.debug("Datastore adapter using project %s", project_id)

    # -- Listing --

    def list_locations(
        self, limit: int = 1000, cursor: Optional[int] = None
    ) -> LocationPage:
        rows, new_cursor = self._list(LOCATION_KIND, [], limit, cursor)
        return LocationPage(locations=rows, cursor=new_cursor)

    def list_photolocations(
        self,
        at_location: int,
        limit: int = 1000,
        cursor: Optional[int] = None,
    ) -> PhotolocationPage:
        rows, new_cursor = self._list(
            PHOTOLOCATION_KIND, [PropertyFilter("location", "=", at_location)], limit, cursor
        )
        return PhotolocationPage(photolocations=rows, cursor=new_cursor)

    def _list(self, kind: str, filters, limit: int, cursor: Optional[int]):
        filters = list(filters)
        if cursor is not None:
            filters.append(PropertyFilter("__key__", ">", self._client.key(kind, cursor)))
        query = self._client.query(kind=kind, filters=filters, order=["__key__"])
        entities = query.fetch(limit=check_limit(limit))
        return paginate([_from_entity(entity) for entity in entities], limit)

    # -- Location CRUD --

    def create_location(
        self, location: Dict[str, Any], id: Optional[int] = None
    ) -> int:
        verify_fields("location", location, LOCATION_COLUMNS)
        return self._insert(LOCATION_KIND, location, id)

    def read_location(self, id: int) -> Optional[Dict[str, Any]]:
        entity = self._client.get(self._client.key(LOCATION_KIND, id))
        return _from_entity(entity) if entity is not None else None

    def update_location(self, location: Dict[str, Any]) -> int:
        verify_fields("location", location, LOCATION_COLUMNS)
        if location.get("id") is None:
            raise ValidationError("location id is required for update")
        key = self._client.key(LOCATION_KIND, location["id"])
        if self._client.get(key) is None:
            return 0
        values = blank_row(LOCATION_COLUMNS)
        values.update(location)
        values.pop("id")
        entity = datastore.Entity(key=key)
        entity.update(values)
        self._client.put(entity)
        return 1

    def delete_location(self, id: int) -> int:
        key = self._client.key(LOCATION_KIND, id)
        if self._client.get(key) is None:
            return 0
        self._client.delete(key)
        return 1

    # -- Photolocation writes --

    def create_photolocation(
        self, photolocation: Dict[str, Any], id: Optional[int] = None
    ) -> int:
        verify_fields("photolocation", photolocation, PHOTOLOCATION_COLUMNS)
        return self._insert(PHOTOLOCATION_KIND, photolocation, id)

    def _insert(self, kind: str, row: Dict[str, Any], id: Optional[int]) -> int:
        values = dict(row)
        row_id = values.pop("id", None)
        if id is not None:
            row_id = id
        key = self._client.key(kind, row_id) if row_id is not None else self._client.key(kind)
        entity = datastore.Entity(key=key)
        entity.update(values)
        self._client.put(entity)
        return entity.key.id


def _from_entity(entity) -> Dict[str, Any]:
    return {"id": entity.key.id, **dict(entity)}
