# tenancy/resolver.py
"""
TENANT RESOLVER

Maps a request Host header to a tenant slug.

Rules:
- Local development: "<slug>.localhost:<port>" -> slug; bare "localhost:<port>" -> none
- Otherwise: "<root>" -> none, "<slug>.<root>" -> slug, anything else -> none
  (preview domains / unknown hosts fail open to the platform root)
- "www" and reserved platform names never resolve to a tenant

The resolver is pure: the root domain is injected at construction time so the
same instance can serve every request.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable
from urllib.parse import urlsplit

DEFAULT_ROOT_DOMAIN = "shoppicca.vercel.app"
DEFAULT_RESERVED_SUBDOMAINS = ("www", "shoppicca")

DEFAULT_PORTS = {"http": 80, "https": 443}

LOCALHOST = "localhost"
STOREFRONT_PATH = "/store/{slug}"


def root_domain_from_url(app_url: str | None, default: str = DEFAULT_ROOT_DOMAIN) -> str:
    """
    Return the host component (hostname[:port]) of the configured app URL.
    The scheme's default port is dropped, as in a browser's URL.host.

    Any value that is not an absolute URL with a host falls back to `default`.
    """
    raw = (app_url or "").strip()
    if not raw:
        return default

    try:
        parts = urlsplit(raw)
        hostname = parts.hostname
        port = parts.port
    except ValueError:
        return default

    if not parts.scheme or not hostname:
        return default

    # Browsers never send the scheme's default port in Host
    if port is None or DEFAULT_PORTS.get(parts.scheme.lower()) == port:
        return hostname
    return f"{hostname}:{port}"


def storefront_path(slug: str) -> str:
    return STOREFRONT_PATH.format(slug=slug)


@dataclass(frozen=True)
class TenantResolution:
    host: str
    subdomain: str = ""
    is_local_dev: bool = False

    @property
    def is_tenant(self) -> bool:
        return bool(self.subdomain)

    @property
    def rewrite_path(self) -> str | None:
        if not self.subdomain:
            return None
        return storefront_path(self.subdomain)


class TenantResolver:
    """
    Classifies hosts as platform (pass-through) or tenant (rewrite).

    Safe to share across threads; holds no mutable state.
    """

    def __init__(
        self,
        root_domain: str = DEFAULT_ROOT_DOMAIN,
        reserved_subdomains: Iterable[str] = DEFAULT_RESERVED_SUBDOMAINS,
    ):
        self.root_domain = (root_domain or DEFAULT_ROOT_DOMAIN).strip()
        # "www" is always the bare platform, whatever else is reserved
        self.reserved_subdomains = frozenset(
            {"www", *(s.strip() for s in reserved_subdomains if s and s.strip())}
        )

    @classmethod
    def from_app_url(
        cls,
        app_url: str | None,
        *,
        default_root_domain: str = DEFAULT_ROOT_DOMAIN,
        reserved_subdomains: Iterable[str] = DEFAULT_RESERVED_SUBDOMAINS,
    ) -> "TenantResolver":
        return cls(
            root_domain=root_domain_from_url(app_url, default=default_root_domain),
            reserved_subdomains=reserved_subdomains,
        )

    def _extract_local(self, host: str) -> str:
        parts = host.split(".")
        if len(parts) > 1 and parts[0] != LOCALHOST:
            return parts[0]
        return ""

    def _extract_production(self, host: str) -> str:
        if host == self.root_domain:
            return ""

        suffix = f".{self.root_domain}"
        if host.endswith(suffix):
            return host[: -len(suffix)]

        return ""

    def resolve(self, host: str | None) -> TenantResolution:
        host = host or ""
        is_local_dev = LOCALHOST in host

        if is_local_dev:
            subdomain = self._extract_local(host)
        else:
            subdomain = self._extract_production(host)

        if subdomain in self.reserved_subdomains:
            subdomain = ""

        return TenantResolution(host=host, subdomain=subdomain, is_local_dev=is_local_dev)

    def rewrite_target(self, slug: str) -> str:
        # The original request path is intentionally discarded.
        return storefront_path(slug)
