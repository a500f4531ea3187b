# public/throttles.py

from rest_framework.throttling import AnonRateThrottle


class PublicCatalogThrottle(AnonRateThrottle):
    scope = "public_catalog"


class PublicWriteThrottle(AnonRateThrottle):
    scope = "public_write"
