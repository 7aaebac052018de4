"""
GotoPhoto: locations and the photos taken at them.

A small CRUD web application over a pluggable storage backend
(MySQL, Postgres, MongoDB or Cloud Datastore).
"""

from .application import LocationPage, PhotolocationPage
from .application.ports import StoragePort
from .config import GotoPhotoConfig
from .domain import (
    ConfigurationError,
    DomainError,
    UnsupportedFieldsError,
    ValidationError,
)

__version__ = "0.1.0"

__all__ = [
    "GotoPhotoConfig",
    "LocationPage",
    "PhotolocationPage",
    "StoragePort",
    "ConfigurationError",
    "DomainError",
    "UnsupportedFieldsError",
    "ValidationError",
]
