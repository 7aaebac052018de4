"""Tests for MongoStorageAdapter using an in-process fake client."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from gotophoto.domain.exceptions import UnsupportedFieldsError, ValidationError
from gotophoto.infrastructure.storage.mongo_adapter import MongoStorageAdapter


# ---------------------------------------------------------------------------
# Fake pymongo surface (only what the adapter touches)
# ---------------------------------------------------------------------------


def _matches(doc, query):
    for key, cond in query.items():
        value = doc.get(key)
        if isinstance(cond, dict):
            if "$gt" in cond and not (value is not None and value > cond["$gt"]):
                return False
        elif value != cond:
            return False
    return True


class FakeCursor:
    def __init__(self, docs):
        self._docs = list(docs)

    def sort(self, key, direction):
        self._docs.sort(key=lambda d: d[key], reverse=direction < 0)
        return self

    def limit(self, n):
        self._docs = self._docs[:n]
        return self

    def __iter__(self):
        return iter([dict(d) for d in self._docs])


class FakeCollection:
    def __init__(self, name):
        self.name = name
        self.docs = {}

    def find(self, query):
        return FakeCursor(d for d in self.docs.values() if _matches(d, query))

    def find_one(self, query):
        for doc in self.docs.values():
            if _matches(doc, query):
                return dict(doc)
        return None

    def insert_one(self, doc):
        if doc["_id"] in self.docs:
            raise KeyError(f"duplicate key {doc['_id']}")
        self.docs[doc["_id"]] = dict(doc)

    def replace_one(self, query, replacement):
        doc = self.find_one(query)
        if doc is None:
            return SimpleNamespace(matched_count=0)
        self.docs[doc["_id"]] = {"_id": doc["_id"], **replacement}
        return SimpleNamespace(matched_count=1)

    def delete_one(self, query):
        doc = self.find_one(query)
        if doc is None:
            return SimpleNamespace(deleted_count=0)
        del self.docs[doc["_id"]]
        return SimpleNamespace(deleted_count=1)

    def find_one_and_update(self, query, change, upsert=False, return_document=False):
        doc = self.docs.setdefault(query["_id"], {"_id": query["_id"], "seq": 0})
        for field, step in change["$inc"].items():
            doc[field] = doc.get(field, 0) + step
        return dict(doc)

    def update_one(self, query, change, upsert=False):
        doc = self.docs.setdefault(query["_id"], {"_id": query["_id"], "seq": 0})
        for field, value in change["$max"].items():
            doc[field] = max(doc.get(field, 0), value)


class FakeDatabase(dict):
    def __missing__(self, name):
        coll = self[name] = FakeCollection(name)
        return coll


class FakeClient(dict):
    def __missing__(self, name):
        db = self[name] = FakeDatabase()
        return db


@pytest.fixture
def client():
    return FakeClient()


@pytest.fixture
def storage(client):
    return MongoStorageAdapter(None, "gotophoto", client=client)


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestMongoLocations:
    def test_ids_assigned_from_counter(self, storage, client):
        assert storage.create_location({"title": "a"}) == 1
        assert storage.create_location({"title": "b"}) == 2
        assert client["gotophoto"]["counters"].docs["locations"]["seq"] == 2

    def test_document_uses_integer_id_key(self, storage, client):
        storage.create_location({"title": "a"})
        assert client["gotophoto"]["locations"].docs[1] == {"_id": 1, "title": "a"}

    def test_explicit_id(self, storage):
        assert storage.create_location({"title": "Pier"}, id=42) == 42
        assert storage.read_location(42) == {"id": 42, "title": "Pier"}

    def test_explicit_id_advances_counter(self, storage, client):
        assert storage.create_location({"title": "explicit"}, id=2) == 2
        assert storage.create_location({"title": "a"}) == 3
        assert storage.create_location({"title": "b"}) == 4
        assert client["gotophoto"]["counters"].docs["locations"]["seq"] == 4

    def test_lower_explicit_id_keeps_counter(self, storage, client):
        storage.create_location({"title": "a"})
        storage.create_location({"title": "b"})
        storage.create_location({"title": "old"}, id=1000)
        storage.create_location({"title": "older"}, id=7)
        assert storage.create_location({"title": "c"}) == 1001

    def test_read_missing(self, storage):
        assert storage.read_location(3) is None

    def test_rejects_unknown_field(self, storage, client):
        with pytest.raises(UnsupportedFieldsError):
            storage.create_location({"title": "x", "bogus": "y"})
        assert client["gotophoto"]["locations"].docs == {}

    def test_update_nulls_omitted_columns(self, storage):
        storage.create_location({"title": "A"}, id=1)
        assert storage.update_location({"id": 1}) == 1
        assert storage.read_location(1) == {"id": 1, "title": None}

    def test_update_missing(self, storage):
        assert storage.update_location({"id": 9, "title": "x"}) == 0

    def test_update_requires_id(self, storage):
        with pytest.raises(ValidationError):
            storage.update_location({"title": "x"})

    def test_delete(self, storage):
        storage.create_location({"title": "A"}, id=1)
        assert storage.delete_location(1) == 1
        assert storage.delete_location(1) == 0
        assert storage.read_location(1) is None


class TestMongoPagination:
    def test_pages_follow_cursor(self, storage):
        for i in range(5):
            storage.create_location({"title": f"t{i}"})
        page1 = storage.list_locations(2)
        assert [r["id"] for r in page1.locations] == [1, 2]
        assert page1.cursor == 2
        page2 = storage.list_locations(2, page1.cursor)
        assert [r["id"] for r in page2.locations] == [3, 4]
        page3 = storage.list_locations(2, page2.cursor)
        assert [r["id"] for r in page3.locations] == [5]
        assert page3.cursor is None

    def test_photolocations_filtered_by_location(self, storage):
        storage.create_photolocation({"location": 1, "title": "p1", "latitude": 1.0})
        storage.create_photolocation({"location": 2, "title": "p2"})
        storage.create_photolocation({"location": 1, "title": "p3"})
        page = storage.list_photolocations(1, limit=1)
        assert [p["title"] for p in page.photolocations] == ["p1"]
        rest = storage.list_photolocations(1, limit=1, cursor=page.cursor)
        assert [p["title"] for p in rest.photolocations] == ["p3"]
        assert rest.cursor is None

    def test_photolocation_rejects_location_only_schema(self, storage):
        with pytest.raises(UnsupportedFieldsError):
            storage.create_photolocation({"location": 1, "camera": "x"})
