import json
from pathlib import Path

from virelia.core import dataset


def test_catalog_ships_inside_the_package():
    resource = dataset.packaged_catalog()
    assert resource.is_file()
    assert Path(str(resource)).parent.parent.name == "virelia"
    categories, products = dataset.parse_catalog(resource.read_text(encoding="utf-8"))
    assert len(categories) == 6
    assert len(products) == 16


def test_default_catalog_path_is_the_package_resource(monkeypatch):
    monkeypatch.delenv("CATALOG_DATA_PATH", raising=False)
    assert str(dataset._find_catalog_path()) == str(dataset.packaged_catalog())


def test_catalog_path_override(monkeypatch, tmp_path):
    catalog = tmp_path / "catalog.json"
    catalog.write_text(json.dumps({"categories": [], "products": [{"slug": "x", "title": "X"}]}))
    monkeypatch.setenv("CATALOG_DATA_PATH", str(catalog))
    path = dataset._find_catalog_path()
    assert path == catalog
    _, products = dataset.parse_catalog(path.read_text(encoding="utf-8"))
    assert [p.slug for p in products] == ["x"]


def test_lookups():
    assert dataset.get_category_by_slug("coffee-products").name == "Coffee Products"
    assert dataset.get_product_by_slug("sambal").origin == "Indonesia"
    assert dataset.get_product_by_slug("missing") is None
    assert len(dataset.get_products_by_category("Coffee Products")) == 2
