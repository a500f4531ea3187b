# public/tests/test_storefront.py

from django.test import TestCase, override_settings
from rest_framework.test import APIClient

from products.models import Category, Product
from store.tests.factories import make_owner, make_plans, make_store


class StorefrontApiTests(TestCase):
    """
    GUARANTEES:
    - Only visible products are public
    - Products newest-first with images by position and attributes
    - Unknown stores -> 404 {"error": "Store not found"}
    """

    def setUp(self):
        free, _ = make_plans()
        self.store = make_store(make_owner(), free, whatsapp_number="+233249497164")
        self.sneakers = Category.objects.create(store=self.store, name="Sneakers")
        self.boots = Category.objects.create(store=self.store, name="Boots")

        self.air = Product.objects.create(
            store=self.store, category=self.sneakers, name="Air Max", price=450
        )
        self.air.images.create(image_url="https://cdn.example/2.jpg", position=1)
        self.air.images.create(image_url="https://cdn.example/1.jpg", position=0)
        self.air.attributes.create(key="Size", value="42")

        self.chelsea = Product.objects.create(
            store=self.store, category=self.boots, name="Chelsea Boot", price_type="dm"
        )
        self.hidden = Product.objects.create(
            store=self.store, name="Secret Drop", price=999, is_visible=False
        )
        self.client = APIClient()

    def test_storefront_payload(self):
        res = self.client.get("/api/store/nancy-shoes/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["store"]["slug"], "nancy-shoes")
        self.assertEqual(res.data["store"]["plan"]["name"], "free")
        self.assertEqual([c["name"] for c in res.data["categories"]], ["Sneakers", "Boots"])

        names = [p["name"] for p in res.data["products"]]
        self.assertEqual(names, ["Chelsea Boot", "Air Max"])

        air = res.data["products"][1]
        self.assertEqual(
            [i["image_url"] for i in air["images"]],
            ["https://cdn.example/1.jpg", "https://cdn.example/2.jpg"],
        )
        self.assertEqual(air["attributes"][0]["key"], "Size")

    def test_unknown_store(self):
        res = self.client.get("/api/store/nope-shop/")
        self.assertEqual(res.status_code, 404)
        self.assertEqual(res.data, {"error": "Store not found"})

    def test_rewrite_target_route(self):
        res = self.client.get("/store/nancy-shoes")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["store"]["name"], "Nancy Shoes")

    def test_search(self):
        res = self.client.get("/api/store/nancy-shoes/search/", {"q": "AIR"})
        self.assertEqual([p["name"] for p in res.data["products"]], ["Air Max"])

        res = self.client.get("/api/store/nancy-shoes/search/", {"q": "secret"})
        self.assertEqual(res.data["products"], [])

    def test_search_by_category(self):
        res = self.client.get(
            "/api/store/nancy-shoes/search/", {"category": str(self.boots.id)}
        )
        self.assertEqual([p["name"] for p in res.data["products"]], ["Chelsea Boot"])

        res = self.client.get("/api/store/nancy-shoes/search/", {"category": "junk"})
        self.assertEqual(res.data["products"], [])

    def test_product_detail(self):
        res = self.client.get(f"/api/product/{self.air.id}/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["product"]["name"], "Air Max")
        self.assertEqual(res.data["product"]["category"]["name"], "Sneakers")
        self.assertTrue(res.data["whatsapp_url"].startswith("https://wa.me/233249497164?text="))

    def test_hidden_product_detail_is_404(self):
        res = self.client.get(f"/api/product/{self.hidden.id}/")
        self.assertEqual(res.status_code, 404)


@override_settings(ALLOWED_HOSTS=["*"], APP_URL="https://platform.example")
class TenantHostRoutingTests(TestCase):
    """
    End to end: <slug>.<root> serves the storefront whatever the path.
    """

    def setUp(self):
        free, _ = make_plans()
        make_store(make_owner(), free)

    def test_subdomain_serves_storefront(self):
        res = self.client.get("/any/path", HTTP_HOST="nancy-shoes.platform.example")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.json()["store"]["slug"], "nancy-shoes")

    def test_unknown_subdomain_is_404(self):
        res = self.client.get("/", HTTP_HOST="ghost-shop.platform.example")
        self.assertEqual(res.status_code, 404)
        self.assertEqual(res.json(), {"error": "Store not found"})

    def test_root_domain_routes_normally(self):
        res = self.client.get("/api/plans/", HTTP_HOST="platform.example")
        self.assertEqual(res.status_code, 200)


@override_settings(
    ALLOWED_HOSTS=[".platform.example", "preview-123.vercel.app"],
    APP_URL="https://platform.example",
)
class AllowedHostsRoutingTests(TestCase):
    """
    GUARANTEES:
    - Tenant subdomains covered by ALLOWED_HOSTS reach the storefront
    - A listed preview host falls through to platform routing
    - An unlisted host is rejected before routing
    """

    def setUp(self):
        free, _ = make_plans()
        make_store(make_owner(), free)

    def test_listed_tenant_subdomain(self):
        res = self.client.get("/", HTTP_HOST="nancy-shoes.platform.example")
        self.assertEqual(res.status_code, 200)

    def test_listed_preview_host_routes_normally(self):
        res = self.client.get("/api/plans/", HTTP_HOST="preview-123.vercel.app")
        self.assertEqual(res.status_code, 200)

    def test_unlisted_preview_host_is_rejected(self):
        res = self.client.get("/api/plans/", HTTP_HOST="other-preview.vercel.app")
        self.assertEqual(res.status_code, 400)
