"""Tests for product API endpoints."""

from fastapi.testclient import TestClient

from conftest import FakeAssetStore


def product_form(**overrides: str) -> dict[str, str]:
    """Multipart form fields for a valid product."""
    form = {
        "name": "Hydrating Serum",
        "category": "Skincare",
        "price": "24.5",
        "description": "Lightweight serum with hyaluronic acid",
        "imageUrl": "https://cdn.example.com/serum.jpg",
    }
    form.update(overrides)
    return form


def without_timestamps(record: dict) -> dict:
    return {k: v for k, v in record.items() if k not in ("createdAt", "updatedAt")}


def create_product(client: TestClient, **overrides: str) -> dict:
    response = client.post("/api/products", data=product_form(**overrides))
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestCreateProduct:
    """Tests for POST /api/products endpoint."""

    def test_create_with_image_url(self, client: TestClient) -> None:
        """Should create a product and return it in camelCase."""
        response = client.post(
            "/api/products",
            data=product_form(discountPercentage="15", in_stock="false"),
        )
        assert response.status_code == 201

        body = response.json()
        assert body["success"] is True
        product = body["data"]
        assert product["name"] == "Hydrating Serum"
        assert product["price"] == 24.5
        assert product["discountPercentage"] == 15
        assert product["inStock"] is False
        assert product["imageUrl"] == "https://cdn.example.com/serum.jpg"
        assert "createdAt" in product
        assert "updatedAt" in product

    def test_create_with_uploaded_image(
        self, client: TestClient, asset_store: FakeAssetStore
    ) -> None:
        """Uploaded file should win over imageUrl."""
        response = client.post(
            "/api/products",
            data=product_form(),
            files={"image": ("serum.jpg", b"jpeg-bytes", "image/jpeg")},
        )
        assert response.status_code == 201

        product = response.json()["data"]
        assert product["imageUrl"] == "https://ik.example.com/file-1.jpg"
        assert product["imageFileId"] == "file-1"
        assert asset_store.uploads[0][1] == b"jpeg-bytes"

    def test_create_defaults(self, client: TestClient) -> None:
        product = create_product(client)
        assert product["discountPercentage"] == 0
        assert product["inStock"] is True

    def test_missing_required_field(self, client: TestClient) -> None:
        form = product_form()
        del form["category"]

        response = client.post("/api/products", data=form)

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert "category" in body["message"]

    def test_missing_image_and_url(self, client: TestClient) -> None:
        form = product_form()
        del form["imageUrl"]

        response = client.post("/api/products", data=form)

        assert response.status_code == 400
        assert "image_url" in response.json()["message"]

    def test_non_positive_price(self, client: TestClient) -> None:
        response = client.post("/api/products", data=product_form(price="0"))
        assert response.status_code == 400

    def test_non_numeric_price(self, client: TestClient) -> None:
        response = client.post("/api/products", data=product_form(price="cheap"))
        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_upload_failure_returns_502(
        self, client: TestClient, asset_store: FakeAssetStore
    ) -> None:
        asset_store.fail_upload = True

        response = client.post(
            "/api/products",
            data=product_form(),
            files={"image": ("serum.jpg", b"jpeg-bytes", "image/jpeg")},
        )

        assert response.status_code == 502
        assert client.get("/api/products").json()["total"] == 0


class TestGetProduct:
    """Tests for GET /api/products/{id} endpoint."""

    def test_get_product(self, client: TestClient) -> None:
        created = create_product(client)

        response = client.get(f"/api/products/{created['id']}")

        assert response.status_code == 200
        assert without_timestamps(response.json()["data"]) == without_timestamps(created)

    def test_get_missing_product(self, client: TestClient) -> None:
        response = client.get("/api/products/does-not-exist")

        assert response.status_code == 404
        body = response.json()
        assert body["success"] is False
        assert "does-not-exist" in body["message"]


class TestListProducts:
    """Tests for GET /api/products endpoint."""

    def test_empty_catalog(self, client: TestClient) -> None:
        body = client.get("/api/products").json()
        assert body["success"] is True
        assert body["data"] == []
        assert body["total"] == 0
        assert body["pages"] == 0
        assert body["page"] == 1

    def test_pagination(self, client: TestClient) -> None:
        for i in range(5):
            create_product(client, name=f"Product {i}")

        first = client.get("/api/products", params={"page": 1, "limit": 2}).json()
        last = client.get("/api/products", params={"page": 3, "limit": 2}).json()

        assert first["total"] == 5
        assert first["pages"] == 3
        assert len(first["data"]) == 2
        assert len(last["data"]) == 1
        assert last["page"] == 3

    def test_sort_orders_are_reverses(self, client: TestClient) -> None:
        for i in range(4):
            create_product(client, name=f"Product {i}")

        newest = client.get("/api/products", params={"sort": "newest"}).json()["data"]
        oldest = client.get("/api/products", params={"sort": "oldest"}).json()["data"]

        assert [p["id"] for p in newest] == [p["id"] for p in reversed(oldest)]

    def test_search_and_category(self, client: TestClient) -> None:
        create_product(client, name="Rose Serum", category="Skincare")
        create_product(client, name="Rose Shampoo", category="Haircare")

        by_search = client.get("/api/products", params={"search": "rose"}).json()
        by_both = client.get(
            "/api/products", params={"search": "rose", "category": "Haircare"}
        ).json()
        by_all = client.get("/api/products", params={"category": "all"}).json()

        assert by_search["total"] == 2
        assert [p["name"] for p in by_both["data"]] == ["Rose Shampoo"]
        assert by_all["total"] == 2

    def test_invalid_query_parameters(self, client: TestClient) -> None:
        assert client.get("/api/products", params={"page": 0}).status_code == 400
        assert client.get("/api/products", params={"limit": "many"}).status_code == 400
        assert client.get("/api/products", params={"sort": "cheapest"}).status_code == 400


class TestProductsByCategory:
    """Tests for GET /api/products-by-category endpoint."""

    def test_grouped_by_category(self, client: TestClient) -> None:
        create_product(client, category="Skincare")
        create_product(client, category="Haircare", name="Shampoo")

        body = client.get("/api/products-by-category").json()

        assert body["success"] is True
        assert set(body["data"]) == {"Skincare", "Haircare"}
        assert body["data"]["Haircare"][0]["name"] == "Shampoo"


class TestUpdateProduct:
    """Tests for PUT /api/products/{id} endpoint."""

    def test_partial_update(self, client: TestClient) -> None:
        created = create_product(client, discountPercentage="10")

        response = client.put(f"/api/products/{created['id']}", data={"price": "30"})

        assert response.status_code == 200
        product = response.json()["data"]
        assert product["price"] == 30
        assert product["discountPercentage"] == 10
        assert product["name"] == created["name"]

    def test_image_replacement_cleans_up_old_image(
        self, client: TestClient, asset_store: FakeAssetStore
    ) -> None:
        created = client.post(
            "/api/products",
            data=product_form(),
            files={"image": ("a.jpg", b"first", "image/jpeg")},
        ).json()["data"]

        response = client.put(
            f"/api/products/{created['id']}",
            files={"image": ("b.jpg", b"second", "image/jpeg")},
        )

        assert response.status_code == 200
        assert response.json()["data"]["imageFileId"] == "file-2"
        assert asset_store.deleted == ["file-1"]

    def test_invalid_discount(self, client: TestClient) -> None:
        created = create_product(client)

        response = client.put(
            f"/api/products/{created['id']}", data={"discountPercentage": "120"}
        )

        assert response.status_code == 400
        stored = client.get(f"/api/products/{created['id']}").json()["data"]
        assert without_timestamps(stored) == without_timestamps(created)

    def test_update_missing_product(self, client: TestClient) -> None:
        response = client.put("/api/products/missing", data={"price": "30"})
        assert response.status_code == 404


class TestDeleteProduct:
    """Tests for DELETE /api/products/{id} endpoint."""

    def test_delete_product(self, client: TestClient) -> None:
        created = create_product(client)

        response = client.delete(f"/api/products/{created['id']}")

        assert response.status_code == 200
        assert response.json()["data"]["id"] == created["id"]
        assert client.get(f"/api/products/{created['id']}").status_code == 404

    def test_delete_missing_product(self, client: TestClient) -> None:
        assert client.delete("/api/products/missing").status_code == 404
