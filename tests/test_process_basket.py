import importlib.util
import sys

import pytest

from conftest import DATA_DIR, REPO_ROOT


@pytest.fixture
def process_basket():
    spec = importlib.util.spec_from_file_location("process_basket", REPO_ROOT / "scripts" / "process_basket.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_prints_receipts(process_basket, monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", [
        "process_basket.py", str(DATA_DIR / "baskets"),
        "--exemptions", str(DATA_DIR / "exemptions.csv"),
        "--categories",
    ])

    assert process_basket.main() == 0

    out = capsys.readouterr().out
    assert "2 imported bottle of perfume: 92.00" in out
    assert "Total: 108.80" in out
    assert "Total: 72.00" in out
    assert "Sales Tax: 16.80" in out
    assert "Category Breakdown:" in out


def test_missing_catalog(process_basket, monkeypatch, tmp_path):
    monkeypatch.setattr(sys, "argv", [
        "process_basket.py", str(DATA_DIR / "baskets"),
        "--exemptions", str(tmp_path / "missing.csv"),
    ])

    assert process_basket.main() == 1
