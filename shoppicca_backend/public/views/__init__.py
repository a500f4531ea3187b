from .contact import ContactSmsView
from .storefront import PublicProductDetailView, StorefrontSearchView, StorefrontView
from .wishlist import WishlistSendView

__all__ = [
    "ContactSmsView",
    "PublicProductDetailView",
    "StorefrontSearchView",
    "StorefrontView",
    "WishlistSendView",
]
