"""Shared fixtures for storage and server tests."""

from __future__ import annotations

import pytest

from gotophoto.infrastructure.storage.sql_adapter import SqlStorageAdapter


@pytest.fixture
def sql_storage(tmp_path):
    """SQL adapter on a fresh SQLite file (NullPool needs a file, not :memory:)."""
    return SqlStorageAdapter(f"sqlite:///{tmp_path / 'gotophoto.db'}")
