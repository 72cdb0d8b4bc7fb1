"""Browse and filter the IAB Tech Lab taxonomies as trees."""

from iab_taxonomy.core.session import BrowserSession
from iab_taxonomy.models.record import DatasetKind, Record, RecordStore
from iab_taxonomy.protocols import DatasetSourceProtocol

__version__ = "0.1.0"

__all__ = ["BrowserSession", "DatasetKind", "DatasetSourceProtocol", "Record", "RecordStore"]
