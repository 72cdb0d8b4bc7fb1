"""Protocols for dependency injection in the taxonomy browser."""

from typing import Protocol, runtime_checkable

from iab_taxonomy.models.record import DatasetKind, RecordStore


@runtime_checkable
class DatasetSourceProtocol(Protocol):
    """Protocol for anything that can provide a loaded taxonomy."""

    def load(self, kind: DatasetKind) -> RecordStore:
        """Load every record of one taxonomy."""
        ...
