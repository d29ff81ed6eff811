"""Integration tests for Product API endpoints.

Covers:
- CRUD operations via /api/products.
- Search endpoints (name, keyword, price range, price above, most expensive).
- Domain exception mapping (400, 404).
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from modules.products.models import Product

pytestmark = pytest.mark.integration


@pytest.fixture()
def sample_product(make_product):
    """A persisted Product instance."""
    return make_product(
        name="Widget Alpha",
        description="A fine widget",
        price=Decimal("19.99"),
    )


# ===========================================================================
# LIST
# ===========================================================================


class TestProductList:
    def test_list_empty(self, api_client):
        response = api_client.get("/api/products")
        assert response.status_code == 200
        assert response.json() == []

    def test_list_returns_products(self, api_client, sample_product):
        response = api_client.get("/api/products")
        assert response.status_code == 200
        assert response.json() == [
            {
                "id": sample_product.id,
                "name": "Widget Alpha",
                "description": "A fine widget",
                "price": 19.99,
            }
        ]


# ===========================================================================
# RETRIEVE
# ===========================================================================


class TestProductRetrieve:
    def test_retrieve_success(self, api_client, sample_product):
        response = api_client.get(f"/api/products/{sample_product.id}")
        assert response.status_code == 200
        data = response.json()
        assert data["id"] == sample_product.id
        assert data["name"] == "Widget Alpha"

    def test_retrieve_not_found(self, api_client):
        response = api_client.get("/api/products/999999")
        assert response.status_code == 404
        data = response.json()
        assert data["status"] == 404
        assert data["error"] == "Resource Not Found"
        assert data["message"] == "Product not found with id: 999999"
        assert data["path"] == "/api/products/999999"

    def test_retrieve_non_numeric_id_is_not_found(self, api_client):
        response = api_client.get("/api/products/abc")
        assert response.status_code == 404


# ===========================================================================
# CREATE
# ===========================================================================


class TestProductCreate:
    def test_create_success(self, api_client):
        payload = {"name": "Laptop", "description": "A laptop", "price": 1000.0}
        response = api_client.post("/api/products", payload, format="json")
        assert response.status_code == 201
        data = response.json()
        assert isinstance(data["id"], int)
        assert data["name"] == "Laptop"
        assert data["price"] == 1000.0
        assert Product.objects.filter(id=data["id"]).exists()

    def test_create_without_description(self, api_client):
        response = api_client.post(
            "/api/products", {"name": "Pen", "price": "1.50"}, format="json"
        )
        assert response.status_code == 201
        assert response.json()["description"] == ""

    def test_create_ignores_client_id(self, api_client, sample_product):
        response = api_client.post(
            "/api/products",
            {"id": sample_product.id, "name": "Other", "price": 5},
            format="json",
        )
        assert response.status_code == 201
        assert response.json()["id"] != sample_product.id
        assert Product.objects.count() == 2

    def test_create_blank_name_returns_400(self, api_client):
        response = api_client.post(
            "/api/products", {"name": "  ", "price": 10}, format="json"
        )
        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "Validation Failed"
        assert data["errors"] == {"name": "Product name is required."}

    def test_create_negative_price_returns_400(self, api_client):
        response = api_client.post(
            "/api/products", {"name": "Laptop", "price": -1}, format="json"
        )
        assert response.status_code == 400
        assert response.json()["errors"] == {"price": "Price must not be negative."}

    def test_create_name_too_long_returns_400(self, api_client):
        response = api_client.post(
            "/api/products", {"name": "x" * 300, "price": 1}, format="json"
        )
        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "Validation Failed"
        assert list(data["errors"]) == ["name"]
        assert Product.objects.count() == 0

    def test_create_missing_fields_reports_each_field(self, api_client):
        response = api_client.post("/api/products", {}, format="json")
        assert response.status_code == 400
        assert set(response.json()["errors"]) == {"name", "price"}
        assert Product.objects.count() == 0

    def test_create_malformed_json_returns_400(self, api_client):
        response = api_client.post(
            "/api/products", data="{", content_type="application/json"
        )
        assert response.status_code == 400
        assert response.json()["status"] == 400

    def test_create_non_object_body_returns_400(self, api_client):
        response = api_client.post("/api/products", [1, 2], format="json")
        assert response.status_code == 400
        assert "non_field_errors" in response.json()["errors"]


# ===========================================================================
# UPDATE
# ===========================================================================


class TestProductUpdate:
    def test_update_success(self, api_client, sample_product):
        payload = {"name": "Widget Beta", "description": "Improved", "price": "29.99"}
        response = api_client.put(
            f"/api/products/{sample_product.id}", payload, format="json"
        )
        assert response.status_code == 200
        assert response.json() == {
            "id": sample_product.id,
            "name": "Widget Beta",
            "description": "Improved",
            "price": 29.99,
        }
        sample_product.refresh_from_db()
        assert sample_product.name == "Widget Beta"
        assert sample_product.price == Decimal("29.99")

    def test_update_keeps_created_at(self, api_client, sample_product):
        created_at = sample_product.created_at
        api_client.put(
            f"/api/products/{sample_product.id}",
            {"name": "X", "price": 1},
            format="json",
        )
        sample_product.refresh_from_db()
        assert sample_product.created_at == created_at

    def test_update_not_found(self, api_client):
        response = api_client.put(
            "/api/products/999999", {"name": "Ghost", "price": 1}, format="json"
        )
        assert response.status_code == 404

    def test_update_invalid_body_returns_400(self, api_client, sample_product):
        response = api_client.put(
            f"/api/products/{sample_product.id}",
            {"name": "", "price": 1},
            format="json",
        )
        assert response.status_code == 400
        sample_product.refresh_from_db()
        assert sample_product.name == "Widget Alpha"

    def test_patch_is_not_allowed(self, api_client, sample_product):
        response = api_client.patch(
            f"/api/products/{sample_product.id}", {"name": "X"}, format="json"
        )
        assert response.status_code == 405
        assert response.json()["status"] == 405


# ===========================================================================
# DELETE
# ===========================================================================


class TestProductDelete:
    def test_delete_success(self, api_client, sample_product):
        response = api_client.delete(f"/api/products/{sample_product.id}")
        assert response.status_code == 204
        assert not Product.objects.filter(id=sample_product.id).exists()

    def test_delete_not_found(self, api_client):
        response = api_client.delete("/api/products/999999")
        assert response.status_code == 404


# ===========================================================================
# SEARCH
# ===========================================================================


class TestProductSearch:
    def test_search_by_name_is_case_insensitive(self, api_client, make_product):
        make_product(name="Gaming Laptop")
        make_product(name="Phone")
        response = api_client.get("/api/products/search", {"name": "LAP"})
        assert response.status_code == 200
        assert [p["name"] for p in response.json()] == ["Gaming Laptop"]

    def test_search_without_name_matches_all(self, api_client, make_product):
        make_product(name="A")
        make_product(name="B")
        response = api_client.get("/api/products/search")
        assert len(response.json()) == 2

    def test_search_by_keyword_matches_description(self, api_client, make_product):
        make_product(name="Mouse", description="Pairs with any laptop")
        make_product(name="Chair", description="Ergonomic")
        response = api_client.get("/api/products/search/keyword", {"q": "laptop"})
        assert response.status_code == 200
        assert [p["name"] for p in response.json()] == ["Mouse"]


class TestProductPriceRange:
    def test_returns_products_in_range(self, api_client, make_product):
        make_product(name="Cheap", price=Decimal("5.00"))
        make_product(name="Fair", price=Decimal("50.00"))
        response = api_client.get("/api/products/price-range", {"min": "10", "max": "50"})
        assert response.status_code == 200
        assert [p["name"] for p in response.json()] == ["Fair"]

    def test_negative_min_returns_400(self, api_client):
        response = api_client.get("/api/products/price-range", {"min": "-1", "max": "50"})
        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "Bad Request"
        assert data["message"] == "Price must not be negative."

    def test_min_greater_than_max_returns_400(self, api_client):
        response = api_client.get("/api/products/price-range", {"min": "60", "max": "50"})
        assert response.status_code == 400
        assert response.json()["message"] == "Minimum price must not exceed maximum price."

    def test_missing_param_returns_400(self, api_client):
        response = api_client.get("/api/products/price-range", {"min": "1"})
        assert response.status_code == 400
        assert "max" in response.json()["errors"]

    @pytest.mark.parametrize("value", ["abc", "NaN", "Infinity"])
    def test_non_numeric_param_returns_400(self, api_client, value):
        response = api_client.get(
            "/api/products/price-range", {"min": value, "max": "10"}
        )
        assert response.status_code == 400
        assert "min" in response.json()["errors"]


class TestProductPriceQueries:
    def test_price_above(self, api_client, make_product):
        make_product(name="Equal", price=Decimal("100.00"))
        make_product(name="Above", price=Decimal("150.00"))
        response = api_client.get("/api/products/price-above", {"price": "100"})
        assert response.status_code == 200
        assert [p["name"] for p in response.json()] == ["Above"]

    def test_price_above_negative_returns_400(self, api_client):
        response = api_client.get("/api/products/price-above", {"price": "-5"})
        assert response.status_code == 400

    def test_most_expensive(self, api_client, make_product):
        make_product(name="Cheap", price=Decimal("1.00"))
        make_product(name="Top", price=Decimal("999.00"))
        response = api_client.get("/api/products/most-expensive")
        assert response.status_code == 200
        assert [p["name"] for p in response.json()] == ["Top"]


# ===========================================================================
# Full lifecycle
# ===========================================================================


class TestProductLifecycle:
    def test_create_search_delete_flow(self, api_client):
        created = api_client.post(
            "/api/products",
            {"name": "Laptop", "description": "A laptop", "price": 1000.0},
            format="json",
        )
        assert created.status_code == 201
        product_id = created.json()["id"]
        assert created.json()["price"] == 1000.0

        fetched = api_client.get(f"/api/products/{product_id}")
        assert fetched.json() == created.json()

        by_name = api_client.get("/api/products/search", {"name": "lap"})
        assert [p["id"] for p in by_name.json()] == [product_id]

        in_range = api_client.get("/api/products/price-range", {"min": 500, "max": 1500})
        assert [p["id"] for p in in_range.json()] == [product_id]

        out_of_range = api_client.get("/api/products/price-range", {"min": 0, "max": 500})
        assert out_of_range.json() == []

        assert api_client.delete(f"/api/products/{product_id}").status_code == 204
        assert api_client.get(f"/api/products/{product_id}").status_code == 404
