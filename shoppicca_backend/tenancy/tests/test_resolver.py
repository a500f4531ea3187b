# tenancy/tests/test_resolver.py

from django.test import SimpleTestCase

from tenancy.resolver import (
    DEFAULT_ROOT_DOMAIN,
    TenantResolver,
    root_domain_from_url,
)


class RootDomainFromUrlTests(SimpleTestCase):
    """
    GUARANTEES:
    - The host of a valid app URL becomes the root domain
    - Missing or unparseable values fall back to the default literal
    """

    def test_https_url_yields_host(self):
        self.assertEqual(
            root_domain_from_url("https://platform.example"), "platform.example"
        )

    def test_port_is_kept(self):
        self.assertEqual(
            root_domain_from_url("http://platform.example:8080/path"),
            "platform.example:8080",
        )

    def test_default_port_is_dropped(self):
        self.assertEqual(
            root_domain_from_url("https://platform.example:443"), "platform.example"
        )
        self.assertEqual(
            root_domain_from_url("http://platform.example:80/"), "platform.example"
        )

    def test_non_default_port_for_scheme_is_kept(self):
        self.assertEqual(
            root_domain_from_url("https://platform.example:80"), "platform.example:80"
        )

    def test_default_port_app_url_still_resolves_tenants(self):
        resolver = TenantResolver.from_app_url("https://platform.example:443")
        self.assertEqual(resolver.resolve("myshop.platform.example").subdomain, "myshop")

    def test_unset_falls_back(self):
        self.assertEqual(root_domain_from_url(None), DEFAULT_ROOT_DOMAIN)
        self.assertEqual(root_domain_from_url("   "), DEFAULT_ROOT_DOMAIN)

    def test_not_a_url_falls_back(self):
        self.assertEqual(root_domain_from_url("platform.example"), DEFAULT_ROOT_DOMAIN)

    def test_invalid_port_falls_back(self):
        self.assertEqual(
            root_domain_from_url("https://platform.example:notaport"),
            DEFAULT_ROOT_DOMAIN,
        )

    def test_custom_default(self):
        self.assertEqual(root_domain_from_url("", default="fallback.test"), "fallback.test")


class TenantResolverTests(SimpleTestCase):
    """
    GUARANTEES:
    - Root domain, www and reserved names pass through
    - <slug>.<root> and <slug>.localhost:<port> resolve to the slug
    - Unrecognised hosts fail open (no tenant)
    """

    def setUp(self):
        self.resolver = TenantResolver.from_app_url("https://platform.example")

    def test_root_domain_passes_through(self):
        resolution = self.resolver.resolve("platform.example")
        self.assertFalse(resolution.is_tenant)
        self.assertIsNone(resolution.rewrite_path)

    def test_www_passes_through(self):
        self.assertFalse(self.resolver.resolve("www.platform.example").is_tenant)

    def test_reserved_brand_name_passes_through(self):
        self.assertFalse(self.resolver.resolve("shoppicca.platform.example").is_tenant)

    def test_tenant_subdomain(self):
        resolution = self.resolver.resolve("myshop.platform.example")
        self.assertTrue(resolution.is_tenant)
        self.assertEqual(resolution.subdomain, "myshop")
        self.assertEqual(resolution.rewrite_path, "/store/myshop")
        self.assertFalse(resolution.is_local_dev)

    def test_multi_label_prefix_is_kept_whole(self):
        resolution = self.resolver.resolve("a.b.platform.example")
        self.assertEqual(resolution.subdomain, "a.b")

    def test_localhost_tenant(self):
        resolution = self.resolver.resolve("myshop.localhost:3000")
        self.assertTrue(resolution.is_local_dev)
        self.assertEqual(resolution.subdomain, "myshop")
        self.assertEqual(resolution.rewrite_path, "/store/myshop")

    def test_bare_localhost_passes_through(self):
        resolution = self.resolver.resolve("localhost:3000")
        self.assertTrue(resolution.is_local_dev)
        self.assertFalse(resolution.is_tenant)

    def test_www_localhost_passes_through(self):
        self.assertFalse(self.resolver.resolve("www.localhost:3000").is_tenant)

    def test_preview_domain_passes_through(self):
        resolver = TenantResolver.from_app_url("platform.example")
        self.assertFalse(resolver.resolve("some-preview-123.vercel.app").is_tenant)

    def test_unrelated_host_passes_through(self):
        self.assertFalse(self.resolver.resolve("evil.example.org").is_tenant)

    def test_suffix_without_dot_is_not_a_subdomain(self):
        self.assertFalse(self.resolver.resolve("notplatform.example").is_tenant)

    def test_root_with_port_in_production_passes_through(self):
        self.assertFalse(self.resolver.resolve("myshop.platform.example:8000").is_tenant)

    def test_empty_host(self):
        resolution = self.resolver.resolve("")
        self.assertFalse(resolution.is_tenant)
        self.assertFalse(self.resolver.resolve(None).is_tenant)

    def test_rewrite_target_is_always_store_root(self):
        self.assertEqual(self.resolver.rewrite_target("acme"), "/store/acme")

    def test_www_is_always_reserved(self):
        resolver = TenantResolver("platform.example", reserved_subdomains=[])
        self.assertFalse(resolver.resolve("www.platform.example").is_tenant)
        self.assertTrue(resolver.resolve("shoppicca.platform.example").is_tenant)

    def test_default_root_domain(self):
        resolver = TenantResolver()
        self.assertEqual(
            resolver.resolve(f"nancyshoes.{DEFAULT_ROOT_DOMAIN}").subdomain, "nancyshoes"
        )
        self.assertFalse(resolver.resolve(DEFAULT_ROOT_DOMAIN).is_tenant)
