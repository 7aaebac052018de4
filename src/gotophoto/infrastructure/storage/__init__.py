"""Storage infrastructure adapters implementing StoragePort.

The MongoDB and Datastore adapters are imported on demand by
:func:`create_storage` so their client libraries stay optional.
"""

from .sql_adapter import SqlStorageAdapter
from .storage_factory import SUPPORTED_BACKENDS, create_storage

__all__ = [
    "SqlStorageAdapter",
    "SUPPORTED_BACKENDS",
    "create_storage",
]
