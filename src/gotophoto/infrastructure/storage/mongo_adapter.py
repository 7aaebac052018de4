"""MongoDB storage adapter: implements StoragePort on a document store.

Documents keep the integer id in ``_id``; ids are assigned from a
``counters`` collection so they stay integers and increase
monotonically, like the relational backends.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

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

_COUNTERS = "counters"


class MongoStorageAdapter:
    """Adapter backed by two MongoDB collections.

    Args:
        url: MongoDB connection string.
        database: Database name.
        collection: Collection holding locations.
        photolocation_collection: Collection holding photolocations.
        client: Pre-built client (mainly for tests). Built from *url*
            with pymongo when omitted.
    """

    def __init__(
        self,
        url: Optional[str],
        database: str,
        collection: str = "locations",
        photolocation_collection: str = "photolocations",
        client: Any = None,
    ) -> None:
        if client is None:
            from pymongo import MongoClient

            client = MongoClient(url)
        db = client[database]
        self._locations = db[collection]
        self._photolocations = db[photolocation_collection]
        self._counters = db[_COUNTERS]
        logger.debug("MongoDB adapter using %s.%s", database, collection)

    # -- Listing --

    def list_locations(
        self, limit: int = 1000, cursor: Optional[int] = None
    ) -> LocationPage:
        rows, new_cursor = self._list(self._locations, {}, limit, cursor)
        return LocationPage(locations=rows, cursor=new_cursor)

    def list_photolocations(
        self,
        at_location: int,
        limit: int = 1000,
        cursor: Optional[int] = None,
    ) -> PhotolocationPage:
        rows, new_cursor = self._list(
            self._photolocations, {"location": at_location}, limit, cursor
        )
        return PhotolocationPage(photolocations=rows, cursor=new_cursor)

    def _list(self, collection, query: Dict[str, Any], limit: int, cursor: Optional[int]):
        query = dict(query)
        if cursor is not None:
            query["_id"] = {"$gt": cursor}
        found = collection.find(query).sort("_id", 1).limit(check_limit(limit))
        return paginate([_from_document(doc) for doc in found], limit)

    # -- Location CRUD --

    def create_location(
        self, location: Dict[str, Any], id: Optional[int] = None
    ) -> int:
        verify_fields("location", location, LOCATION_COLUMNS)
        return self._insert(self._locations, location, id)

    def read_location(self, id: int) -> Optional[Dict[str, Any]]:
        doc = self._locations.find_one({"_id": id})
        return _from_document(doc) if doc is not None else None

    def update_location(self, location: Dict[str, Any]) -> int:
        verify_fields("location", location, LOCATION_COLUMNS)
        if location.get("id") is None:
            raise ValidationError("location id is required for update")
        values = blank_row(LOCATION_COLUMNS)
        values.update(location)
        location_id = values.pop("id")
        result = self._locations.replace_one({"_id": location_id}, values)
        return result.matched_count

    def delete_location(self, id: int) -> int:
        return self._locations.delete_one({"_id": id}).deleted_count

    # -- Photolocation writes --

    def create_photolocation(
        self, photolocation: Dict[str, Any], id: Optional[int] = None
    ) -> int:
        verify_fields("photolocation", photolocation, PHOTOLOCATION_COLUMNS)
        return self._insert(self._photolocations, photolocation, id)

    def _insert(self, collection, row: Dict[str, Any], id: Optional[int]) -> int:
        doc = dict(row)
        doc.pop("id", None)
        new_id = id if id is not None else row.get("id")
        if new_id is None:
            new_id = self._next_id(collection.name)
        else:
            self._advance_counter(collection.name, new_id)
        doc["_id"] = new_id
        collection.insert_one(doc)
        return new_id

    def _next_id(self, name: str) -> int:
        counter = self._counters.find_one_and_update(
            {"_id": name},
            {"$inc": {"seq": 1}},
            upsert=True,
            return_document=True,
        )
        return counter["seq"]

    def _advance_counter(self, name: str, seen_id: int) -> None:
        """Keep the sequence at or above an explicitly supplied id."""
        self._counters.update_one(
            {"_id": name},
            {"$max": {"seq": seen_id}},
            upsert=True,
        )


def _from_document(doc: Dict[str, Any]) -> Dict[str, Any]:
    row = {k: v for k, v in doc.items() if k != "_id"}
    return {"id": doc["_id"], **row}
