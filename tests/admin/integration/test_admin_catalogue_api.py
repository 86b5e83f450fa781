"""Back-office product and category endpoints via TestClient."""

from protean import current_domain

from storefront.catalogue.product.product import Product


class TestAccess:
    def test_customer_is_refused(self, client, customer_headers):
        response = client.get("/admin/products", headers=customer_headers)
        assert response.status_code == 403
        assert response.json() == {"error": "You are not authorized to access this page."}

    def test_guest_is_refused(self, client, guest_headers):
        assert client.get("/admin/dashboard", headers=guest_headers).status_code == 403

    def test_browser_is_sent_home(self, client, customer_headers):
        response = client.get(
            "/admin/dashboard",
            headers={**customer_headers, "Accept": "text/html"},
            follow_redirects=False,
        )
        assert response.status_code == 303
        assert response.headers["location"] == "/"

    def test_admin_dashboard(self, client, admin_headers, product):
        response = client.get("/admin/dashboard", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["metrics"]["total_products"] == 1


class TestProducts:
    def test_create(self, client, admin_headers, category):
        response = client.post(
            "/admin/products",
            json={
                "name": "Handmade Ceramic Mug",
                "description": "Wheel-thrown stoneware.",
                "price": 24.0,
                "category_id": str(category.id),
                "inventory_count": 18,
            },
            headers=admin_headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["product"]["slug"] == "handmade-ceramic-mug"
        assert body["product"]["sku"].startswith("BRA-HAND-")

    def test_create_with_unknown_category(self, client, admin_headers):
        response = client.post(
            "/admin/products",
            json={"name": "Mug", "description": "A mug.", "price": 5.0, "category_id": "missing"},
            headers=admin_headers,
        )
        assert response.status_code == 422
        assert response.json() == {"error": {"category_id": ["must exist"]}}

    def test_list_includes_inactive(self, client, admin_headers, make_product):
        make_product(name="Hidden Charm", active=False)
        response = client.get("/admin/products", headers=admin_headers)
        assert [p["name"] for p in response.json()["products"]["items"]] == ["Hidden Charm"]

    def test_export_csv(self, client, admin_headers, product):
        response = client.get("/admin/products/export", headers=admin_headers)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert response.headers["content-disposition"].startswith('attachment; filename="products-')
        assert product.name in response.text

    def test_bulk_update(self, client, admin_headers, make_product):
        ids = [str(make_product(name=name).id) for name in ("Charm One", "Charm Two")]

        response = client.post(
            "/admin/products/bulk_update",
            json={"product_ids": ids, "featured": True},
            headers=admin_headers,
        )

        assert response.json() == {"count": 2, "message": "2 products updated successfully."}
        assert all(current_domain.repository_for(Product).get(pid).featured for pid in ids)

    def test_bulk_update_without_changes(self, client, admin_headers, product):
        response = client.post(
            "/admin/products/bulk_update",
            json={"product_ids": [str(product.id)]},
            headers=admin_headers,
        )
        assert response.status_code == 422
        assert response.json() == {"error": {"bulk_update": ["No updates specified."]}}

    def test_bulk_destroy(self, client, admin_headers, product):
        response = client.post(
            "/admin/products/bulk_destroy",
            json={"product_ids": [str(product.id)]},
            headers=admin_headers,
        )
        assert response.json()["message"] == "1 products deleted successfully."
        assert current_domain.repository_for(Product).everything() == []

    def test_toggles(self, client, admin_headers, product):
        active = client.post(f"/admin/products/{product.id}/toggle_active", headers=admin_headers)
        featured = client.post(f"/admin/products/{product.id}/toggle_featured", headers=admin_headers)

        assert active.json() == {"status": "ok", "active": False}
        assert featured.json() == {"status": "ok", "featured": True}

    def test_duplicate(self, client, admin_headers, product):
        response = client.post(f"/admin/products/{product.id}/duplicate", headers=admin_headers)
        assert response.status_code == 201
        assert response.json()["product"]["name"] == "Friendship Bracelet (Copy)"

    def test_variant_lifecycle(self, client, admin_headers, product):
        created = client.post(
            f"/admin/products/{product.id}/variants",
            json={"name": "Large Blue", "color": "Blue", "size": "Large", "inventory_count": 4},
            headers=admin_headers,
        )
        assert created.status_code == 201
        variant_id = created.json()["variant_id"]
        assert created.json()["variant"]["sku"] == f"{product.sku}-BL"

        updated = client.patch(
            f"/admin/products/{product.id}/variants/{variant_id}",
            json={"price": 12.5},
            headers=admin_headers,
        )
        assert updated.json()["variant"]["price"] == 12.5

        deleted = client.delete(f"/admin/products/{product.id}/variants/{variant_id}", headers=admin_headers)
        assert deleted.json() == {"status": "ok", "message": "Variant was successfully deleted."}

    def test_delete_unknown_product(self, client, admin_headers):
        response = client.delete("/admin/products/missing", headers=admin_headers)
        assert response.status_code == 404


class TestCategories:
    def test_create_and_count_products(self, client, admin_headers, product, category):
        response = client.get(f"/admin/categories/{category.id}", headers=admin_headers)
        assert response.json()["category"]["products_count"] == 1

    def test_delete_blocked_by_products(self, client, admin_headers, product, category):
        response = client.delete(f"/admin/categories/{category.id}", headers=admin_headers)
        assert response.status_code == 409
        assert "category" in response.json()["error"]

    def test_delete_empty_category(self, client, admin_headers, category):
        response = client.delete(f"/admin/categories/{category.id}", headers=admin_headers)
        assert response.json() == {"status": "ok", "message": "Category was successfully deleted."}

    def test_reorder(self, client, admin_headers, make_category):
        first = make_category(name="Rings")
        second = make_category(name="Anklets")

        response = client.post(
            "/admin/categories/reorder",
            json={"category_ids": [str(second.id), str(first.id)]},
            headers=admin_headers,
        )

        assert [c["name"] for c in response.json()["categories"]] == ["Anklets", "Rings"]

    def test_move_up(self, client, admin_headers, make_category):
        make_category(name="Rings")
        anklets = make_category(name="Anklets")

        response = client.post(f"/admin/categories/{anklets.id}/move_up", headers=admin_headers)

        assert [c["name"] for c in response.json()["categories"]] == ["Anklets", "Rings"]

    def test_toggle_active(self, client, admin_headers, category):
        response = client.post(f"/admin/categories/{category.id}/toggle_active", headers=admin_headers)
        assert response.json() == {"status": "ok", "active": False}
