import pandas as pd

from sales_tax.exemption_catalog import ExemptionCatalog
from sales_tax.update_exemptions import add_exemptions, remove_exemptions


def test_add_exemptions(tmp_path):
    path = tmp_path / "exemptions.csv"
    path.write_text("description,category\nbook,books\n")

    assert add_exemptions(str(path), [
        {"description": "bread", "category": "Food"},
        {"description": "book", "category": "books"},
    ])

    catalog = ExemptionCatalog.from_csv(str(path))
    assert catalog.food == frozenset({"bread"})
    assert catalog.books == frozenset({"book"})


def test_add_exemptions_recategorizes(tmp_path):
    path = tmp_path / "exemptions.csv"
    path.write_text("description,category\ngauze,food\n")

    add_exemptions(str(path), [{"description": "gauze", "category": "medical"}])

    df = pd.read_csv(path)
    assert df.to_dict(orient="records") == [{"description": "gauze", "category": "medical"}]


def test_add_exemptions_creates_catalog(tmp_path):
    path = tmp_path / "new.csv"

    assert add_exemptions(str(path), [{"description": "rice", "category": "food"}])
    assert ExemptionCatalog.from_csv(str(path)).is_exempt("rice")


def test_unknown_category_is_skipped(tmp_path):
    path = tmp_path / "exemptions.csv"
    path.write_text("description,category\n")

    assert not add_exemptions(str(path), [{"description": "wine", "category": "alcohol"}])
    assert len(ExemptionCatalog.from_csv(str(path))) == 0


def test_remove_exemptions(tmp_path):
    path = tmp_path / "exemptions.csv"
    path.write_text("description,category\nbook,books\nbread,food\n")

    assert remove_exemptions(str(path), ["book", "missing"])
    assert not remove_exemptions(str(path), ["book"])

    catalog = ExemptionCatalog.from_csv(str(path))
    assert not catalog.is_exempt("book")
    assert catalog.is_exempt("bread")


def test_add_exemptions_to_empty_file(tmp_path):
    path = tmp_path / "exemptions.csv"
    path.write_text("")

    assert add_exemptions(str(path), [{"description": "rice", "category": "food"}])
    assert ExemptionCatalog.from_csv(str(path)).food == frozenset({"rice"})


def test_remove_exemptions_from_empty_file(tmp_path):
    path = tmp_path / "exemptions.csv"
    path.write_text("")

    assert remove_exemptions(str(path), ["rice"]) is False


def test_undecodable_catalog_returns_false(tmp_path):
    path = tmp_path / "exemptions.csv"
    path.write_bytes(b"description,category\ncaf\xe9,food\n")

    assert add_exemptions(str(path), [{"description": "rice", "category": "food"}]) is False
    assert remove_exemptions(str(path), ["rice"]) is False
