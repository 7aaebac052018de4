"""Application layer: ports and DTOs shared by adapters and handlers."""

from .dto import LocationPage, PhotolocationPage

__all__ = [
    "LocationPage",
    "PhotolocationPage",
]
