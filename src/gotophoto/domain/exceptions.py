"""Domain exceptions: business-rule violations with no external dependencies.

These exceptions represent domain-level error conditions. They form
a hierarchy rooted at ``DomainError`` and are free of any framework
or infrastructure concerns. Backend driver errors are never wrapped
in these; they propagate as raised by the driver.
"""

from __future__ import annotations

from typing import Iterable


class DomainError(Exception):
    """Base exception for all domain-level errors in GotoPhoto."""


class ValidationError(DomainError):
    """Raised when a create/update payload cannot be written."""


class UnsupportedFieldsError(ValidationError):
    """Raised when a payload carries fields the entity does not declare."""

    def __init__(self, entity: str, fields: Iterable[str]) -> None:
        self.entity = entity
        self.fields = sorted(fields)
        super().__init__(
            f'unsupported {entity} properties: "{", ".join(self.fields)}"'
        )


class ConfigurationError(DomainError):
    """Raised when configuration is invalid or incomplete."""
