"""One-shot record lookup by id, parent id, or name."""

from dataclasses import dataclass
from enum import Enum

from iab_taxonomy.models.record import Record, RecordStore


class LookupField(str, Enum):
    ID = "id"
    PARENT = "parent"
    NAME = "name"


@dataclass(frozen=True)
class LookupFilter:
    """Select records by one field."""

    field: LookupField
    value: str

    def matches(self, record: Record) -> bool:
        if self.field is LookupField.ID:
            return record.id == self.value
        if self.field is LookupField.PARENT:
            # The parent itself is listed along with its children
            return record.parent_id == self.value or record.id == self.value
        return self.value.lower() in record.name.lower()


def lookup(store: RecordStore, lookup_filter: LookupFilter) -> list[Record]:
    """Records matching the filter, in store order."""
    return [record for record in store if lookup_filter.matches(record)]
