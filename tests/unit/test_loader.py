"""Tests for the loader that reads taxonomy files from a data directory."""

from pathlib import Path

import pytest

from iab_taxonomy.config import BUNDLED_DATA_DIR
from iab_taxonomy.core.importer.loader import TsvDatasetSource, load_all, load_dataset
from iab_taxonomy.core.tree.builder import build_forest
from iab_taxonomy.models.record import DatasetKind
from iab_taxonomy.protocols import DatasetSourceProtocol
from tests.unit.fakes import FakeSource, make_store

PRODUCT_TSV = (
    "Unique ID\tParent ID\tName\tTier 1\tTier 2\tTier 3\n"
    "1000\t1000\tAd Safety Risk\tAd Safety Risk\t\t\n"
    "1001\t1000\tGambling\tAd Safety Risk\tGambling\t\n"
)


def test_load_dataset_reads_kind_file(tmp_path: Path) -> None:
    (tmp_path / "product-2.0.tsv").write_text(PRODUCT_TSV, encoding="utf-8")

    store = load_dataset(tmp_path, DatasetKind.PRODUCT)

    assert store.kind is DatasetKind.PRODUCT
    assert [r.id for r in store] == ["1000", "1001"]


def test_load_dataset_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match="audience-1.1.tsv"):
        load_dataset(tmp_path, DatasetKind.AUDIENCE)


def test_tsv_source_satisfies_protocol(tmp_path: Path) -> None:
    assert isinstance(TsvDatasetSource(tmp_path), DatasetSourceProtocol)


def test_load_all_returns_stores_in_switching_order() -> None:
    product = make_store([("1", "", "Root")], DatasetKind.PRODUCT)
    source = FakeSource({DatasetKind.PRODUCT: product})

    stores = load_all(source)

    assert [s.kind for s in stores] == [
        DatasetKind.CONTENT,
        DatasetKind.PRODUCT,
        DatasetKind.AUDIENCE,
    ]
    assert stores[1] is product
    assert source.loaded == list(DatasetKind)


@pytest.mark.parametrize("kind", list(DatasetKind))
def test_bundled_taxonomies_load_and_build(kind: DatasetKind) -> None:
    store = load_dataset(BUNDLED_DATA_DIR, kind)
    forest = build_forest(store)

    assert len(store) > 0
    assert len(forest) == len(store)
    assert all(len(r.tiers) == kind.tier_count for r in store)
