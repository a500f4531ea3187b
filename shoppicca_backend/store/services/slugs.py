# store/services/slugs.py

"""
STORE SLUG RULES

A slug is the DNS label a storefront is served under
(<slug>.<root domain>), so it must be lowercase alphanumerics
separated by single hyphens.
"""

import re

SLUG_MIN_LENGTH = 3
SLUG_MAX_LENGTH = 50

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")

# The tenant resolver never routes these labels to a storefront, and the
# remainder collide with platform paths.
RESERVED_SLUGS = frozenset(
    {
        "www",
        "shoppicca",
        "admin",
        "api",
        "store",
        "static",
        "media",
        "create",
        "check-slug",
    }
)

_NON_WORD = re.compile(r"[^\w\s-]", flags=re.ASCII)
_SEPARATORS = re.compile(r"[\s_-]+")


def generate_slug(name: str) -> str:
    """
    "Nancy's Shoe Palace" -> "nancys-shoe-palace"
    """
    value = (name or "").lower().strip()
    value = _NON_WORD.sub("", value)
    value = _SEPARATORS.sub("-", value)
    return value.strip("-")


def is_valid_slug(slug: str) -> bool:
    if not slug:
        return False
    if not SLUG_MIN_LENGTH <= len(slug) <= SLUG_MAX_LENGTH:
        return False
    return bool(SLUG_PATTERN.match(slug))


def is_reserved_slug(slug: str) -> bool:
    return (slug or "").lower() in RESERVED_SLUGS


def is_slug_available(slug: str, exclude_store_id=None) -> bool:
    from store.models import Store

    qs = Store.objects.filter(slug=slug)
    if exclude_store_id is not None:
        qs = qs.exclude(id=exclude_store_id)
    return not qs.exists()


def slug_error(slug: str, exclude_store_id=None):
    """
    Returns a human-readable reason the slug can't be used, or None.
    """
    if not is_valid_slug(slug):
        return (
            "Slug must be 3-50 characters of lowercase letters, numbers "
            "and single hyphens"
        )
    if is_reserved_slug(slug):
        return "This slug is reserved"
    if not is_slug_available(slug, exclude_store_id=exclude_store_id):
        return "This slug is already taken"
    return None
