import pytest

from rodger.items import ItemRegistry
from rodger.ledger import LedgerStore


@pytest.fixture
def ledger(tmp_path):
    return LedgerStore(tmp_path / "ledger.json")


@pytest.fixture
def registry(tmp_path):
    return ItemRegistry(tmp_path / "items.json")


@pytest.fixture(autouse=True)
def _no_data_dir_override(monkeypatch):
    monkeypatch.delenv("RODGER_DATA_DIR", raising=False)
