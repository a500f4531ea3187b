# store/tests/test_api.py

from django.test import TestCase
from rest_framework.test import APIClient

from store.models import Store, Subscription
from store.tests.factories import make_owner, make_plans, make_store


class PlanAndSlugApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.free, self.paid = make_plans()

    def test_plans_listed_by_price(self):
        res = self.client.get("/api/plans/")
        self.assertEqual(res.status_code, 200)
        self.assertEqual([p["name"] for p in res.data], ["free", "paid"])
        self.assertIsNone(res.data[1]["category_limit"])

    def test_check_slug_available(self):
        res = self.client.get("/api/store/check-slug/", {"slug": "Nancy-Shoes"})
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data, {"slug": "nancy-shoes", "valid": True, "available": True})

    def test_check_slug_taken(self):
        make_store(make_owner(), self.free)
        res = self.client.get("/api/store/check-slug/", {"slug": "nancy-shoes"})
        self.assertTrue(res.data["valid"])
        self.assertFalse(res.data["available"])

    def test_check_slug_invalid_or_reserved(self):
        for slug in ["ab", "bad_slug", "www", ""]:
            res = self.client.get("/api/store/check-slug/", {"slug": slug})
            self.assertFalse(res.data["valid"], slug)
            self.assertFalse(res.data["available"], slug)


class StoreCreateApiTests(TestCase):
    """
    GUARANTEES:
    - Free onboarding creates store + active subscription
    - Paid plans are refused here (checkout only)
    - One store per owner
    """

    def setUp(self):
        self.free, self.paid = make_plans()
        self.owner = make_owner()
        self.client = APIClient()
        self.client.force_authenticate(self.owner)

    def test_requires_auth(self):
        res = APIClient().post("/api/store/create/", {"name": "X", "slug": "xyz"}, format="json")
        self.assertEqual(res.status_code, 401)

    def test_create_free_store(self):
        res = self.client.post(
            "/api/store/create/",
            {
                "name": "Nancy Shoes",
                "slug": "nancy-shoes",
                "category": "Fashion",
                "whatsapp_number": "+233 24 949 7164",
            },
            format="json",
        )

        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.data["slug"], "nancy-shoes")
        self.assertEqual(res.data["whatsapp_number"], "+233249497164")
        self.assertEqual(res.data["plan"]["name"], "free")

        store = Store.objects.get(owner=self.owner)
        self.assertTrue(Subscription.objects.filter(store=store, status="active").exists())

    def test_paid_plan_rejected(self):
        res = self.client.post(
            "/api/store/create/",
            {"name": "Nancy", "slug": "nancy-shoes", "plan_id": str(self.paid.id)},
            format="json",
        )
        self.assertEqual(res.status_code, 400)
        self.assertFalse(Store.objects.exists())

    def test_missing_fields(self):
        res = self.client.post("/api/store/create/", {"slug": "nancy-shoes"}, format="json")
        self.assertEqual(res.status_code, 400)
        self.assertIn("name", res.data)

    def test_invalid_slug(self):
        res = self.client.post(
            "/api/store/create/", {"name": "Nancy", "slug": "Bad Slug!"}, format="json"
        )
        self.assertEqual(res.status_code, 400)
        self.assertIn("slug", res.data)

    def test_taken_slug(self):
        make_store(make_owner(email="first@example.com"), self.free)
        res = self.client.post(
            "/api/store/create/", {"name": "Nancy", "slug": "nancy-shoes"}, format="json"
        )
        self.assertEqual(res.status_code, 400)

    def test_second_store_rejected(self):
        make_store(self.owner, self.free)
        res = self.client.post(
            "/api/store/create/", {"name": "Again", "slug": "again-shop"}, format="json"
        )
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["error"], "You already have a store")


class StoreSettingsApiTests(TestCase):
    """
    GUARANTEES:
    - Slug changes need plan.can_change_slug (403 otherwise)
    - Theme colors need plan.can_customize_theme (403 otherwise)
    - Resubmitting the stored values (blank or differently cased) is not a change
    """

    def setUp(self):
        self.free, self.paid = make_plans()
        self.owner = make_owner()
        self.client = APIClient()
        self.client.force_authenticate(self.owner)

    def test_user_without_store_is_forbidden(self):
        self.assertEqual(self.client.get("/api/admin/store/").status_code, 403)

    def test_get_settings(self):
        make_store(self.owner, self.free)
        res = self.client.get("/api/admin/store/")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["slug"], "nancy-shoes")

    def test_free_plan_can_edit_basic_fields(self):
        make_store(self.owner, self.free)
        res = self.client.patch(
            "/api/admin/store/", {"description": "Best shoes in Accra"}, format="json"
        )
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["description"], "Best shoes in Accra")

    def test_free_plan_cannot_change_slug(self):
        make_store(self.owner, self.free)
        res = self.client.patch("/api/admin/store/", {"slug": "new-slug"}, format="json")
        self.assertEqual(res.status_code, 403)

    def test_free_plan_cannot_theme(self):
        make_store(self.owner, self.free)
        res = self.client.patch("/api/admin/store/", {"theme_color": "#112233"}, format="json")
        self.assertEqual(res.status_code, 403)

    def test_free_plan_full_form_with_blank_colors(self):
        make_store(self.owner, self.free)
        res = self.client.patch(
            "/api/admin/store/",
            {"name": "Renamed", "slug": "Nancy-Shoes", "theme_color": "", "accent_color": ""},
            format="json",
        )
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["name"], "Renamed")
        self.assertIsNone(res.data["theme_color"])

    def test_free_plan_resubmits_stored_color_in_other_case(self):
        store = make_store(self.owner, self.free)
        Store.objects.filter(id=store.id).update(theme_color="#1a2b3c")

        res = self.client.patch(
            "/api/admin/store/",
            {"name": "Renamed", "theme_color": "#1A2B3C"},
            format="json",
        )
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["theme_color"], "#1a2b3c")

    def test_paid_plan_can_change_slug_and_theme(self):
        make_store(self.owner, self.paid)
        res = self.client.patch(
            "/api/admin/store/",
            {"slug": "nancy-pro", "theme_color": "#AABBCC"},
            format="json",
        )
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["slug"], "nancy-pro")
        self.assertEqual(res.data["theme_color"], "#aabbcc")

    def test_paid_plan_bad_color(self):
        make_store(self.owner, self.paid)
        res = self.client.patch("/api/admin/store/", {"accent_color": "red"}, format="json")
        self.assertEqual(res.status_code, 400)

    def test_stats(self):
        make_store(self.owner, self.free)
        res = self.client.get("/api/admin/stats/")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(
            res.data,
            {"categories": 0, "products": 0, "visible_products": 0, "hidden_products": 0},
        )
