# tenancy/middleware.py
"""
TENANT REWRITE MIDDLEWARE

Placement: after SessionMiddleware, before CommonMiddleware.

Behaviour per request:
- Excluded paths (static assets, media, favicon) -> untouched
- Host resolves to a tenant -> path rewritten to /store/<slug>
  (original path dropped, visible URL unchanged, no session refresh)
- Otherwise -> session refresh collaborator, normal routing
"""

from __future__ import annotations

import logging
import re

from django.conf import settings
from django.utils.module_loading import import_string

from tenancy.resolver import (
    DEFAULT_RESERVED_SUBDOMAINS,
    DEFAULT_ROOT_DOMAIN,
    TenantResolver,
)

logger = logging.getLogger(__name__)


def build_resolver() -> TenantResolver:
    return TenantResolver.from_app_url(
        getattr(settings, "APP_URL", ""),
        default_root_domain=getattr(settings, "TENANCY_DEFAULT_ROOT_DOMAIN", "")
        or DEFAULT_ROOT_DOMAIN,
        reserved_subdomains=getattr(
            settings, "TENANCY_RESERVED_SUBDOMAINS", DEFAULT_RESERVED_SUBDOMAINS
        ),
    )


def _compile_exclusions(patterns) -> list[re.Pattern]:
    return [re.compile(p, re.IGNORECASE) for p in patterns or []]


class TenantRewriteMiddleware:
    def __init__(self, get_response):
        self.get_response = get_response

        # Settings are read once; the resolver is reused for every request.
        self.resolver = build_resolver()
        self.refresh_session = import_string(
            getattr(
                settings,
                "TENANCY_SESSION_REFRESHER",
                "tenancy.session.refresh_session",
            )
        )
        self.excluded_paths = _compile_exclusions(
            getattr(settings, "TENANCY_EXCLUDED_PATHS", [])
        )

        logger.info(
            "Tenant routing enabled",
            extra={"root_domain": self.resolver.root_domain},
        )

    def _is_excluded(self, path: str) -> bool:
        return any(p.match(path) for p in self.excluded_paths)

    def __call__(self, request):
        request.tenant_slug = None

        if self._is_excluded(request.path_info):
            return self.get_response(request)

        # Raw header: unknown hosts resolve to "no tenant" here instead of raising.
        # CommonMiddleware still validates the host against ALLOWED_HOSTS, so
        # preview and custom domains must be listed there to reach routing.
        host = request.META.get("HTTP_HOST", "")
        resolution = self.resolver.resolve(host)

        if not resolution.is_tenant:
            return self.refresh_session(request, self.get_response)

        target = self.resolver.rewrite_target(resolution.subdomain)
        logger.debug(
            "Tenant rewrite",
            extra={
                "host": host,
                "tenant": resolution.subdomain,
                "original_path": request.path_info,
                "target": target,
            },
        )

        request.tenant_slug = resolution.subdomain
        request.path_info = target
        request.path = f"{request.META.get('SCRIPT_NAME', '').rstrip('/')}{target}"

        return self.get_response(request)
