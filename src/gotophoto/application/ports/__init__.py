"""Port interfaces (Protocol classes) for dependency inversion.

Ports define the contracts that infrastructure adapters must satisfy.
They depend only on the domain layer and DTOs.
"""

from .storage_port import StoragePort

__all__ = [
    "StoragePort",
]
