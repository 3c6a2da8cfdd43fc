import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.db.database import get_db
from storefront.main import app

from conftest import make_category, make_sub_category, make_super_sub_category, make_product


def test_categories_are_active_and_sorted_by_name(client, db):
    make_category(db, "Zoology Kits")
    make_category(db, "Anatomy Models")
    make_category(db, "Hidden", status="inactive")

    response = client.get("/api/categories")

    assert response.status_code == 200
    names = [c["name"] for c in response.json()["categories"]]
    assert names == ["Anatomy Models", "Zoology Kits"]


def test_categories_degrade_to_empty_list_when_database_fails(client):
    # No tables in this database, so every query fails
    broken = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    session = sessionmaker(bind=broken)()

    def broken_db():
        yield session

    app.dependency_overrides[get_db] = broken_db
    response = client.get("/api/categories")

    assert response.status_code == 200
    assert response.json()["categories"] == []
    assert "error" in response.json()


def test_category_page(client, db, catalog):
    make_sub_category(db, catalog["category"], "Aprons")
    make_sub_category(db, catalog["category"], "Retired", status="inactive")

    response = client.get("/api/categories/lab")

    assert response.status_code == 200
    body = response.json()
    assert body["category"]["slug"] == "lab"
    assert [s["name"] for s in body["subCategories"]] == ["Aprons", "Glassware"]
    # Only products attached directly to the category
    assert body["products"] == [{
        "id": str(catalog["products"]["centrifuge"].id),
        "name": "Centrifuge",
        "slug": "centrifuge",
        "image_url": None,
    }]


def test_category_page_caps_product_cards(client, db):
    category = make_category(db, "Bulk")
    for i in range(25):
        make_product(db, f"Item {i:02d}", category=category)

    products = client.get("/api/categories/bulk").json()["products"]

    assert len(products) == 20
    assert products[0]["name"] == "Item 00"


def test_inactive_category_is_not_found(client, db):
    make_category(db, "Old", status="inactive")

    response = client.get("/api/categories/old")

    assert response.status_code == 404
    assert response.json() == {"error": "Category not found"}


def test_sub_category_page(client, catalog):
    response = client.get("/api/subcategories/glassware")

    assert response.status_code == 200
    body = response.json()
    assert body["subCategory"]["slug"] == "glassware"
    assert body["subCategory"]["category"]["slug"] == "lab"
    assert [s["slug"] for s in body["superSubCategories"]] == ["beakers"]
    assert [p["slug"] for p in body["products"]] == ["flask"]


def test_sub_category_not_found(client):
    response = client.get("/api/subcategories/nope")

    assert response.status_code == 404
    assert response.json()["error"] == "Subcategory not found"


def test_super_sub_category_page(client, catalog):
    response = client.get("/api/super-subcategories/beakers")

    assert response.status_code == 200
    body = response.json()
    assert body["superSubCategory"]["sub_category"]["slug"] == "glassware"
    assert body["superSubCategory"]["sub_category"]["category"]["slug"] == "lab"
    assert [p["slug"] for p in body["products"]] == ["beaker-250", "beaker-500"]


def test_super_sub_category_not_found(client):
    response = client.get("/api/super-subcategories/nope")

    assert response.status_code == 404
    assert response.json()["error"] == "Super subcategory not found"


def test_flat_sub_and_super_sub_lists(client, db, catalog):
    make_sub_category(db, catalog["category"], "Archived", status="inactive")

    subs = client.get("/api/subcategories").json()
    supers = client.get("/api/super-subcategories").json()

    assert [s["slug"] for s in subs["subcategories"]] == ["glassware"]
    assert [s["slug"] for s in supers["superSubcategories"]] == ["beakers"]


def test_products_newest_first_with_refs(client, db, catalog):
    make_product(db, "Draft", category=catalog["category"], status="inactive")

    products = client.get("/api/products").json()["products"]

    assert [p["slug"] for p in products] == ["beaker-500", "beaker-250", "flask", "centrifuge"]
    flask = products[2]
    assert flask["category"]["slug"] == "lab"
    assert flask["sub_category"]["slug"] == "glassware"


@pytest.mark.parametrize("slug, expected", [
    ("centrifuge", ["lab"]),
    ("flask", ["lab", "glassware"]),
    ("beaker-250", ["lab", "glassware", "beakers"]),
])
def test_product_breadcrumb_follows_deepest_level(client, catalog, slug, expected):
    response = client.get(f"/api/product/{slug}")

    assert response.status_code == 200
    body = response.json()
    assert body["product"]["slug"] == slug
    assert [crumb["slug"] for crumb in body["breadcrumb"]] == expected


def test_product_without_taxonomy_has_empty_breadcrumb(client, db):
    make_product(db, "Loose Item")

    body = client.get("/api/product/loose-item").json()

    assert body["breadcrumb"] == []


def test_inactive_product_is_not_found(client, db):
    make_product(db, "Gone", status="inactive")

    response = client.get("/api/product/gone")

    assert response.status_code == 404
    assert response.json()["error"] == "Product not found"
