"""Domain models for the IAB taxonomy browser."""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from loguru import logger


class DatasetKind(Enum):
    """One of the three IAB taxonomies, with its display-only differences."""

    CONTENT = ("Content", "3.1", 4, True, 2, "cyan")
    PRODUCT = ("Product", "2.0", 3, False, 1, "yellow")
    AUDIENCE = ("Audience", "1.1", 6, True, 1, "red")

    def __init__(
        self,
        title: str,
        version: str,
        tier_count: int,
        has_extension: bool,
        header_lines: int,
        accent: str,
    ) -> None:
        self.title = title
        self.version = version
        self.tier_count = tier_count
        self.has_extension = has_extension
        self.header_lines = header_lines
        self.accent = accent

    @property
    def filename(self) -> str:
        return f"{self.title.lower()}-{self.version}.tsv"


@dataclass(frozen=True)
class Record:
    """A single row of taxonomy data."""

    id: str
    parent_id: str | None
    name: str
    tiers: tuple[str, ...] = ()
    extension: str | None = None

    @property
    def tier_path(self) -> tuple[str, ...]:
        """Non-empty tier labels, outermost first."""
        return tuple(t for t in self.tiers if t)

    @property
    def searchable_fields(self) -> tuple[str, ...]:
        fields = (self.id, self.name, *self.tiers)
        if self.extension:
            fields = (*fields, self.extension)
        return fields


@dataclass(frozen=True)
class RecordStore:
    """Read-only, insertion-ordered mapping from record id to record."""

    kind: DatasetKind
    records: Mapping[str, Record] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_records(cls, kind: DatasetKind, records: Iterable[Record]) -> "RecordStore":
        """Build a store; a repeated id keeps its first position but the last value."""
        by_id: dict[str, Record] = {}
        for record in records:
            if record.id in by_id:
                logger.warning(
                    "Duplicate {} record id {!r}, keeping the last one", kind.title, record.id
                )
            by_id[record.id] = record
        return cls(kind=kind, records=MappingProxyType(by_id))

    def get(self, record_id: str) -> Record | None:
        return self.records.get(record_id)

    def __getitem__(self, record_id: str) -> Record:
        return self.records[record_id]

    def __contains__(self, record_id: object) -> bool:
        return record_id in self.records

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records.values())

    def __len__(self) -> int:
        return len(self.records)


@dataclass(frozen=True)
class TreeNode:
    """A node of the forest, referring back to its record by id."""

    record_id: str
    children: tuple["TreeNode", ...] = ()


@dataclass(frozen=True)
class Forest:
    """The trees formed from a record store after root redirection."""

    roots: tuple[TreeNode, ...] = ()
    nodes: Mapping[str, TreeNode] = field(default_factory=lambda: MappingProxyType({}))
    truncated_edges: int = 0

    def __len__(self) -> int:
        return len(self.nodes)


@dataclass(frozen=True)
class HighlightSpan:
    """A half-open [start, end) range of matched characters in a field."""

    start: int
    end: int


@dataclass(frozen=True)
class RecordHighlights:
    """Matched character ranges in a record's id and name."""

    id_spans: tuple[HighlightSpan, ...] = ()
    name_spans: tuple[HighlightSpan, ...] = ()


@dataclass(frozen=True)
class FilterState:
    """Result of applying a query to a forest."""

    query: str = ""
    tokens: tuple[str, ...] = ()
    matched_ids: frozenset[str] = frozenset()
    required_visible_ids: frozenset[str] = frozenset()
    highlights: Mapping[str, RecordHighlights] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @property
    def active(self) -> bool:
        """True when the query has at least one token, even if nothing matched."""
        return bool(self.tokens)

    @classmethod
    def empty(cls) -> "FilterState":
        return cls()


@dataclass(frozen=True)
class VisibleRow:
    """A row currently eligible for display."""

    record_id: str
    depth: int
    is_expanded: bool
    has_children: bool


@dataclass(frozen=True)
class ScrollPosition:
    """Where the selection sits in the visible rows, for the scrollbar."""

    offset: int | None
    total: int
