"""Factory for creating the storage adapter selected by configuration."""

from __future__ import annotations

import logging
import os

from gotophoto.application.ports.storage_port import StoragePort
from gotophoto.config import GotoPhotoConfig
from gotophoto.domain.exceptions import ConfigurationError
from .sql_adapter import SqlStorageAdapter

logger = logging.getLogger(__name__)

SUPPORTED_BACKENDS = ("mysql", "postgres", "mongodb", "datastore", "sqlite")


def create_storage(config: GotoPhotoConfig) -> StoragePort:
    """Create the storage adapter named by ``config.gotophoto_backend``.

    Args:
        config: Loaded application configuration.

    Returns:
        A storage adapter implementing StoragePort.

    Raises:
        ConfigurationError: If the backend is unset or not supported.
    """
    backend = config.gotophoto_backend
    if not backend:
        logger.error("backend not set")
        raise ConfigurationError('"gotophoto_backend" must be set in gotophoto config')

    logger.debug("Config loaded: %s", backend)
    if backend == "mysql":
        # The dev server reaches Cloud SQL over TCP, never the socket.
        server_software = os.getenv("SERVER_SOFTWARE", "")
        connection_name = (
            None if server_software.startswith("Development")
            else config.cloudsql_connection_name
        )
        dsn = SqlStorageAdapter.get_mysql_dsn(
            _require(config, "cloudsql_database_name"),
            config.cloudsql_port,
            connection_name,
            host=config.cloudsql_host,
        )
        return SqlStorageAdapter(dsn, config.cloudsql_user, config.cloudsql_password)
    elif backend == "postgres":
        connection_name = (
            config.cloudsql_connection_name if os.getenv("GAE_INSTANCE") else None
        )
        dsn = SqlStorageAdapter.get_postgres_dsn(
            _require(config, "cloudsql_database_name"),
            config.cloudsql_port,
            connection_name,
            host=config.cloudsql_host,
        )
        return SqlStorageAdapter(dsn, config.cloudsql_user, config.cloudsql_password)
    elif backend == "mongodb":
        from .mongo_adapter import MongoStorageAdapter

        return MongoStorageAdapter(
            _require(config, "mongo_url"),
            _require(config, "mongo_database"),
            config.mongo_collection,
            config.mongo_photolocation_collection,
        )
    elif backend == "datastore":
        from .datastore_adapter import DatastoreStorageAdapter

        return DatastoreStorageAdapter(_require(config, "google_project_id"))
    elif backend == "sqlite":
        return SqlStorageAdapter(f"sqlite:///{config.sqlite_path}")
    else:
        raise ConfigurationError(
            f'Invalid "gotophoto_backend" given: {backend}. '
            "Possible values are mysql, postgres, mongodb, datastore, or sqlite."
        )


def _require(config: GotoPhotoConfig, name: str):
    value = getattr(config, name)
    if value in (None, ""):
        raise ConfigurationError(
            f'"{name}" must be set for backend "{config.gotophoto_backend}"'
        )
    return value
