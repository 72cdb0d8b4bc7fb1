"""Shared test fixtures."""

import pytest

from iab_taxonomy.core.tree.builder import build_forest
from iab_taxonomy.models.record import DatasetKind, Forest, RecordStore
from tests.unit.fakes import make_store

# (id, parent, name, tiers)
INSURANCE_ROWS = [
    ("10", "", "Insurance", ("Insurance", "", "")),
    ("11", "10", "Home Insurance", ("Insurance", "Home Insurance", "")),
    ("13", "11", "Flood Cover", ("Insurance", "Home Insurance", "Flood Cover")),
    ("14", "10", "Life Insurance", ("Insurance", "Life Insurance", "")),
    ("12", "", "Banking", ("Banking", "", "")),
    ("15", "12", "Savings Accounts", ("Banking", "Savings Accounts", "")),
    ("16", "15", "Home Savings Plans", ("Banking", "Savings Accounts", "Home Savings Plans")),
]


@pytest.fixture
def insurance_store() -> RecordStore:
    return make_store(INSURANCE_ROWS)


@pytest.fixture
def insurance_forest(insurance_store: RecordStore) -> Forest:
    return build_forest(insurance_store)


@pytest.fixture
def three_stores() -> tuple[RecordStore, ...]:
    """One small store per taxonomy, in switching order."""
    return (
        make_store(
            [
                ("1", "", "Automotive", ("Automotive", "", "", "")),
                ("2", "1", "Auto Body Styles", ("Automotive", "Auto Body Styles", "", "")),
                ("3", "2", "Sedan", ("Automotive", "Auto Body Styles", "Sedan", "")),
                ("42", "", "Books and Literature", ("Books and Literature", "", "", "")),
            ],
            DatasetKind.CONTENT,
        ),
        make_store(INSURANCE_ROWS, DatasetKind.PRODUCT),
        make_store(
            [
                ("1", "", "Demographic", ("Demographic", "", "", "", "", "")),
                ("2", "1", "Demographic - Age Range", ("Demographic", "Age Range", "", "", "", "")),
            ],
            DatasetKind.AUDIENCE,
        ),
    )
