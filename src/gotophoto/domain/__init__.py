"""Domain layer: entity declarations and domain exceptions."""

from .entities import (
    LOCATION_COLUMNS,
    PHOTOLOCATION_COLUMNS,
    blank_row,
    check_limit,
    paginate,
    verify_fields,
)
from .exceptions import (
    ConfigurationError,
    DomainError,
    UnsupportedFieldsError,
    ValidationError,
)

__all__ = [
    "LOCATION_COLUMNS",
    "PHOTOLOCATION_COLUMNS",
    "blank_row",
    "check_limit",
    "paginate",
    "verify_fields",
    "ConfigurationError",
    "DomainError",
    "UnsupportedFieldsError",
    "ValidationError",
]
