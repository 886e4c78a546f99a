import uuid
from decimal import Decimal

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from rest_framework.test import APIClient

from domains.catalog.models import Category, Product
from factories import create_product, product_form

BASE = "/api/v1/products/"


def _png(png_bytes, name="a.png"):
    return SimpleUploadedFile(name, png_bytes, content_type="image/png")


# ─────────────────────────────────────────────────────────────
# 생성 (관리자)
# ─────────────────────────────────────────────────────────────
@pytest.mark.django_db
class TestCreateEndpoint:
    def test_multipart_upload_creates_product(self, admin_client, category, png_bytes, media_root):
        body = product_form(category, image=_png(png_bytes))
        r = admin_client.post(BASE, body, format="multipart")

        assert r.status_code == 201, r.content
        data = r.json()
        assert data["name"] == "Pen"
        assert data["price"] == 2.5
        assert data["quantity"] == 3
        assert data["countInStock"] is None
        assert data["category"] == str(category.pk)
        assert data["rating"] == 0
        assert data["numReviews"] == 0
        assert data["reviews"] == []
        assert data["image"].startswith("/uploads/image-")
        assert data["image"].endswith(".png")

        stored = list(media_root.iterdir())
        assert len(stored) == 1
        assert stored[0].read_bytes() == png_bytes

    def test_image_url_string(self, admin_client, category):
        body = product_form(category, image="https://cdn.example.com/pen.png")
        r = admin_client.post(BASE, body, format="multipart")
        assert r.status_code == 201, r.content
        assert r.json()["image"] == "https://cdn.example.com/pen.png"

    def test_json_body(self, admin_client, category):
        body = product_form(category, price=2.5, quantity=3, image="https://cdn.example.com/pen.png")
        r = admin_client.post(BASE, body, format="json")
        assert r.status_code == 201, r.content
        assert Product.objects.get().price == Decimal("2.50")

    def test_missing_field(self, admin_client, category, png_bytes):
        body = product_form(category, image=_png(png_bytes))
        body.pop("brand")
        r = admin_client.post(BASE, body, format="multipart")
        assert r.status_code == 400
        assert r.json() == {"error": "All fields are required"}

    def test_missing_image(self, admin_client, category):
        r = admin_client.post(BASE, product_form(category), format="multipart")
        assert r.status_code == 400
        assert r.json() == {"error": "Product image is required"}

    def test_invalid_category(self, admin_client, category, png_bytes):
        body = product_form(category, category="abc", image=_png(png_bytes))
        r = admin_client.post(BASE, body, format="multipart")
        assert r.status_code == 400
        assert r.json() == {"error": "Invalid category ID"}

    @pytest.mark.parametrize("field, value", [("price", "1e30"), ("quantity", "99999999999999999999")])
    def test_out_of_range_number_is_rejected(self, admin_client, category, field, value):
        body = product_form(category, image="https://cdn.example.com/pen.png", **{field: value})
        r = admin_client.post(BASE, body, format="multipart")
        assert r.status_code == 400
        assert r.json() == {"error": f"{field} is too large"}
        assert Product.objects.count() == 0

    def test_non_image_file(self, admin_client, category, media_root):
        doc = SimpleUploadedFile("notes.txt", b"hello", content_type="text/plain")
        r = admin_client.post(BASE, product_form(category, image=doc), format="multipart")
        assert r.status_code == 400
        assert r.json() == {"error": "Only image files are allowed"}
        assert Product.objects.count() == 0
        assert not media_root.exists() or not any(media_root.iterdir())

    def test_anonymous_is_rejected(self, api_client, category):
        r = api_client.post(BASE, product_form(category, image="https://x/y.png"), format="multipart")
        assert r.status_code == 401
        assert "error" in r.json()

    def test_regular_user_is_forbidden(self, auth_client, category):
        r = auth_client.post(BASE, product_form(category, image="https://x/y.png"), format="multipart")
        assert r.status_code == 403
        assert "error" in r.json()


# ─────────────────────────────────────────────────────────────
# 조회 (공개)
# ─────────────────────────────────────────────────────────────
@pytest.mark.django_db
class TestReadEndpoints:
    def test_paged_list(self, api_client, category):
        for i in range(10):
            create_product(name=f"Pen {i}", category=category)

        r = api_client.get(BASE, {"pageNumber": 2})
        assert r.status_code == 200
        body = r.json()
        assert len(body["products"]) == 4
        assert body["page"] == 2
        assert body["pages"] == 2
        assert body["hasMore"] is False

    def test_page_far_past_the_end(self, api_client, product):
        r = api_client.get(BASE, {"pageNumber": "99999999999999999999"})
        assert r.status_code == 200
        body = r.json()
        assert body["products"] == []
        assert body["pages"] == 1
        assert body["hasMore"] is False

    def test_keyword_search(self, api_client, category):
        create_product(name="Blue Pen", category=category)
        create_product(name="Notebook", category=category)
        r = api_client.get(BASE, {"keyword": "pen"})
        assert [p["name"] for p in r.json()["products"]] == ["Blue Pen"]

    def test_detail(self, api_client, product):
        r = api_client.get(f"{BASE}{product.pk}/")
        assert r.status_code == 200
        body = r.json()
        assert body["product_id"] == str(product.pk)
        assert body["price"] == 2.5

    def test_detail_not_found(self, api_client, db):
        r = api_client.get(f"{BASE}{uuid.uuid4()}/")
        assert r.status_code == 404
        assert r.json() == {"error": "Product not found"}

    def test_top_and_new(self, api_client, category):
        for i in range(6):
            create_product(name=f"P{i}", category=category, rating=float(i % 5))
        assert len(api_client.get(f"{BASE}top/").json()) == 4
        assert len(api_client.get(f"{BASE}new/").json()) == 5

    def test_admin_list_expands_category(self, admin_client, product, category):
        orphan = create_product(name="Orphan", category=None)
        Product.objects.filter(pk=orphan.pk).update(category_id=uuid.uuid4())

        r = admin_client.get(f"{BASE}all/")
        assert r.status_code == 200
        by_name = {p["name"]: p for p in r.json()}
        assert by_name["Pen"]["category"] == {"category_id": str(category.pk), "name": category.name}
        assert by_name["Orphan"]["category"] is None

    def test_admin_list_requires_admin(self, auth_client):
        assert auth_client.get(f"{BASE}all/").status_code == 403

    def test_filter(self, api_client, category, product_factory):
        other = Category.objects.create(name="Books")
        hit = product_factory(category=category, price=Decimal("5"))
        product_factory(category=category, price=Decimal("15"))
        product_factory(category=other, price=Decimal("5"))

        r = api_client.post(
            f"{BASE}filter/",
            {"checked": [str(category.pk)], "radio": [0, 10]},
            format="json",
        )
        assert r.status_code == 200
        assert [p["product_id"] for p in r.json()] == [str(hit.pk)]

    def test_filter_price_bounds_are_inclusive(self, api_client, category, product_factory):
        low = product_factory(category=category, price=Decimal("10"))
        high = product_factory(category=category, price=Decimal("50"))
        product_factory(category=category, price=Decimal("50.01"))

        r = api_client.post(f"{BASE}filter/", {"checked": [], "radio": [10, 50]}, format="json")
        assert r.status_code == 200
        assert {p["product_id"] for p in r.json()} == {str(low.pk), str(high.pk)}

    def test_filter_bad_category(self, api_client, db):
        r = api_client.post(f"{BASE}filter/", {"checked": ["x"], "radio": []}, format="json")
        assert r.status_code == 400
        assert r.json() == {"error": "Invalid category ID"}


# ─────────────────────────────────────────────────────────────
# 수정 / 삭제 (관리자)
# ─────────────────────────────────────────────────────────────
@pytest.mark.django_db
class TestUpdateDeleteEndpoints:
    def test_put_updates_fields(self, admin_client, product):
        r = admin_client.put(f"{BASE}{product.pk}/", {"price": "9.99", "name": "Gel Pen"}, format="multipart")
        assert r.status_code == 200, r.content
        assert r.json()["price"] == 9.99
        assert r.json()["name"] == "Gel Pen"
        assert r.json()["image"] == product.image

    def test_patch_replaces_image(self, admin_client, product, png_bytes):
        r = admin_client.patch(f"{BASE}{product.pk}/", {"image": _png(png_bytes)}, format="multipart")
        assert r.status_code == 200, r.content
        assert r.json()["image"].startswith("/uploads/image-")

    def test_empty_update(self, admin_client, product):
        r = admin_client.put(f"{BASE}{product.pk}/", {}, format="multipart")
        assert r.status_code == 400
        assert r.json() == {"error": "No update fields provided"}

    def test_update_not_found(self, admin_client, db):
        r = admin_client.put(f"{BASE}{uuid.uuid4()}/", {"name": "x"}, format="multipart")
        assert r.status_code == 404

    def test_delete(self, admin_client, product):
        r = admin_client.delete(f"{BASE}{product.pk}/")
        assert r.status_code == 200
        body = r.json()
        assert body["message"] == "Product deleted"
        assert body["product"]["product_id"] == str(product.pk)
        assert not Product.objects.filter(pk=product.pk).exists()

    def test_delete_requires_admin(self, auth_client, product):
        assert auth_client.delete(f"{BASE}{product.pk}/").status_code == 403

    def test_delete_not_found(self, admin_client, product):
        r = admin_client.delete(f"{BASE}{uuid.uuid4()}/")
        assert r.status_code == 404
        assert r.json() == {"error": "Product not found"}
        assert Product.objects.count() == 1


@pytest.mark.django_db
def test_catalog_list_and_product_detail(product_factory, category):
    p = product_factory(category=category)
    c = APIClient()

    assert c.get("/api/v1/categories/").status_code == 200
    assert c.get(BASE).status_code == 200
    assert c.get(f"{BASE}{p.pk}/").status_code == 200
