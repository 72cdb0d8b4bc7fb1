"""Load taxonomy .tsv files from a data directory into record stores."""

from pathlib import Path

from loguru import logger

from iab_taxonomy.core.importer.tsv_reader import parse_taxonomy_tsv
from iab_taxonomy.models.record import DatasetKind, RecordStore
from iab_taxonomy.protocols import DatasetSourceProtocol


def load_dataset(data_dir: Path, kind: DatasetKind) -> RecordStore:
    """Read and parse one taxonomy file.

    Raises:
        FileNotFoundError: The taxonomy file is not in ``data_dir``.
        ValueError: The file is malformed.
    """
    path = data_dir / kind.filename
    if not path.is_file():
        msg = f"Missing {kind.filename} in {data_dir}"
        raise FileNotFoundError(msg)

    records = parse_taxonomy_tsv(path.read_text(encoding="utf-8-sig"), kind=kind)
    store = RecordStore.from_records(kind, records)
    logger.debug("Loaded {} {} records from {}", len(store), kind.title, path)
    return store


class TsvDatasetSource:
    """Dataset source reading ``<kind>-<version>.tsv`` files from a directory."""

    def __init__(self, data_dir: str | Path) -> None:
        self.data_dir = Path(data_dir)

    def load(self, kind: DatasetKind) -> RecordStore:
        return load_dataset(self.data_dir, kind)


def load_all(source: DatasetSourceProtocol) -> tuple[RecordStore, ...]:
    """Load every taxonomy, in dataset switching order."""
    stores = tuple(source.load(kind) for kind in DatasetKind)
    logger.info(
        "Loaded taxonomies: {}",
        ", ".join(f"{s.kind.title} {s.kind.version} ({len(s)} records)" for s in stores),
    )
    return stores
