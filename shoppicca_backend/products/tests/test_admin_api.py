# products/tests/test_admin_api.py

import io

from django.test import TestCase
from PIL import Image
from django.core.files.uploadedfile import SimpleUploadedFile
from rest_framework.test import APIClient

from products.models import Category, Product
from store.tests.factories import make_owner, make_plans, make_store


class CategoryApiTests(TestCase):
    """
    GUARANTEES:
    - Owners only see their own categories
    - plan.category_limit is enforced with 403
    """

    def setUp(self):
        self.free, self.paid = make_plans()
        self.owner = make_owner()
        self.store = make_store(self.owner, self.free)
        self.client = APIClient()
        self.client.force_authenticate(self.owner)

    def test_requires_auth(self):
        self.assertEqual(APIClient().get("/api/admin/categories/").status_code, 401)

    def test_create_and_list(self):
        res = self.client.post(
            "/api/admin/categories/",
            {"name": "  Sneakers ", "category_url": "https://cdn.example/s.jpg"},
            format="json",
        )
        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.data["name"], "Sneakers")

        res = self.client.get("/api/admin/categories/")
        self.assertEqual(res.status_code, 200)
        self.assertEqual([c["name"] for c in res.data], ["Sneakers"])

    def test_category_limit(self):
        for name in ["One", "Two"]:
            Category.objects.create(store=self.store, name=name)

        res = self.client.post("/api/admin/categories/", {"name": "Three"}, format="json")

        self.assertEqual(res.status_code, 403)
        self.assertEqual(str(res.data["detail"]), "Your plan allows only 2 categories")

    def test_unlimited_plan(self):
        owner = make_owner(email="pro@example.com")
        store = make_store(owner, self.paid, slug="pro-shop")
        for i in range(5):
            Category.objects.create(store=store, name=f"C{i}")

        client = APIClient()
        client.force_authenticate(owner)
        res = client.post("/api/admin/categories/", {"name": "More"}, format="json")
        self.assertEqual(res.status_code, 201)

    def test_other_store_categories_hidden(self):
        other = make_store(make_owner(email="x@example.com"), self.free, slug="other-shop")
        foreign = Category.objects.create(store=other, name="Foreign")

        self.assertEqual(self.client.get("/api/admin/categories/").data, [])
        res = self.client.delete(f"/api/admin/categories/{foreign.id}/")
        self.assertEqual(res.status_code, 404)


class ProductApiTests(TestCase):
    """
    GUARANTEES:
    - Nested images/attributes are written and replaced on update
    - Blank attribute pairs are dropped
    - plan.products_per_category is enforced with 403
    - Categories from another store are rejected
    """

    def setUp(self):
        self.free, self.paid = make_plans()
        self.owner = make_owner()
        self.store = make_store(self.owner, self.free)
        self.category = Category.objects.create(store=self.store, name="Sneakers")
        self.client = APIClient()
        self.client.force_authenticate(self.owner)

    def _create(self, **overrides):
        payload = {
            "name": "Air Max",
            "price": "450.00",
            "price_type": "fixed",
            "category": str(self.category.id),
            "images": ["https://cdn.example/1.jpg", "https://cdn.example/2.jpg"],
            "attributes": [
                {"key": "Size", "value": "42"},
                {"key": "", "value": "ignored"},
                {"key": "Color", "value": "  "},
            ],
        }
        payload.update(overrides)
        return self.client.post("/api/admin/products/", payload, format="json")

    def test_create_with_images_and_attributes(self):
        res = self._create()

        self.assertEqual(res.status_code, 201, res.data)
        self.assertEqual(
            [i["image_url"] for i in res.data["images"]],
            ["https://cdn.example/1.jpg", "https://cdn.example/2.jpg"],
        )
        self.assertEqual([i["position"] for i in res.data["images"]], [0, 1])
        self.assertEqual(
            [(a["key"], a["value"]) for a in res.data["attributes"]], [("Size", "42")]
        )
        self.assertEqual(res.data["category_name"], "Sneakers")

    def test_dm_clears_price(self):
        res = self._create(price_type="dm")
        self.assertEqual(res.status_code, 201)
        self.assertIsNone(res.data["price"])

    def test_update_replaces_nested_sets(self):
        product_id = self._create().data["id"]

        res = self.client.patch(
            f"/api/admin/products/{product_id}/",
            {
                "images": ["https://cdn.example/3.jpg"],
                "attributes": [{"key": "Material", "value": "Leather"}],
            },
            format="json",
        )

        self.assertEqual(res.status_code, 200)
        self.assertEqual([i["image_url"] for i in res.data["images"]], ["https://cdn.example/3.jpg"])
        self.assertEqual([a["key"] for a in res.data["attributes"]], ["Material"])

    def test_update_without_nested_keeps_them(self):
        product_id = self._create().data["id"]
        res = self.client.patch(
            f"/api/admin/products/{product_id}/", {"is_visible": False}, format="json"
        )
        self.assertEqual(res.status_code, 200)
        self.assertFalse(res.data["is_visible"])
        self.assertEqual(len(res.data["images"]), 2)

    def test_products_per_category_limit(self):
        self.assertEqual(self._create(name="One").status_code, 201)
        self.assertEqual(self._create(name="Two").status_code, 201)

        res = self._create(name="Three")

        self.assertEqual(res.status_code, 403)
        self.assertEqual(Product.objects.filter(store=self.store).count(), 2)

    def test_uncategorized_products_are_not_limited(self):
        for name in ["A", "B", "C"]:
            self.assertEqual(self._create(name=name, category=None).status_code, 201)

    def test_foreign_category_rejected(self):
        other = make_store(make_owner(email="x@example.com"), self.free, slug="other-shop")
        foreign = Category.objects.create(store=other, name="Foreign")

        res = self._create(category=str(foreign.id))

        self.assertEqual(res.status_code, 400)
        self.assertIn("category", res.data)

    def test_filter_and_search(self):
        self._create(name="Air Max")
        self._create(name="Jordan 1", is_visible=False)

        res = self.client.get("/api/admin/products/", {"is_visible": "false"})
        self.assertEqual([p["name"] for p in res.data["results"]], ["Jordan 1"])

        res = self.client.get("/api/admin/products/", {"search": "air"})
        self.assertEqual([p["name"] for p in res.data["results"]], ["Air Max"])


class ImageUploadApiTests(TestCase):
    def setUp(self):
        free, _ = make_plans()
        self.owner = make_owner()
        self.store = make_store(self.owner, free)
        self.client = APIClient()
        self.client.force_authenticate(self.owner)

    def _png(self):
        buf = io.BytesIO()
        Image.new("RGB", (2, 2), color="red").save(buf, format="PNG")
        return SimpleUploadedFile("photo.png", buf.getvalue(), content_type="image/png")

    def test_upload_returns_path_and_url(self):
        res = self.client.post(
            "/api/admin/uploads/",
            {"file": self._png(), "bucket": "banners"},
            format="multipart",
        )

        self.assertEqual(res.status_code, 201, res.data)
        self.assertTrue(res.data["path"].startswith(f"{self.store.id}/banners/"))
        self.assertTrue(res.data["path"].endswith(".png"))
        self.assertTrue(res.data["url"].startswith("http://testserver/"))

    def test_non_image_rejected(self):
        bogus = SimpleUploadedFile("notes.txt", b"hello", content_type="text/plain")
        res = self.client.post("/api/admin/uploads/", {"file": bogus}, format="multipart")
        self.assertEqual(res.status_code, 400)

    def test_unknown_bucket_rejected(self):
        res = self.client.post(
            "/api/admin/uploads/",
            {"file": self._png(), "bucket": "secrets"},
            format="multipart",
        )
        self.assertEqual(res.status_code, 400)
