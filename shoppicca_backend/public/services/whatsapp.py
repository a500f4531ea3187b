# public/services/whatsapp.py

"""
WHATSAPP HAND-OFF

Storefronts have no checkout: customers send their wishlist (or a single
product inquiry) to the store owner on WhatsApp via a wa.me deep link.
No provider call is made; the link is opened by the browser.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from urllib.parse import quote

WA_BASE = "https://wa.me"

WISHLIST_HEADER = "Hi! I'm interested in the following items from {store_name}:\n\n"
WISHLIST_FOOTER = "\n\nPlease let me know about availability and delivery options. Thank you!"
PRODUCT_INQUIRY = 'Hi! I\'m interested in "{name}" ({price}). Is it available?'

_NON_DIGITS = re.compile(r"[^0-9]")

# Same characters a browser's encodeURIComponent leaves alone
_URI_COMPONENT_SAFE = "!~*'()"


def _group_thousands(price) -> str:
    try:
        value = Decimal(str(price))
    except (InvalidOperation, ValueError, TypeError):
        return str(price)

    value = value.quantize(Decimal("0.001"), rounding=ROUND_HALF_UP)
    if value == value.to_integral_value():
        return f"{int(value):,}"

    whole, _, frac = f"{value:f}".partition(".")
    return f"{int(whole):,}.{frac.rstrip('0')}"


def format_price(price, price_type: str) -> str:
    """
    format_price(1500, "negotiable") -> "GHC 1,500 (Negotiable)"
    """
    if price_type == "dm":
        return "DM for price"
    if price is None:
        return "Price not set"

    formatted = f"GHC {_group_thousands(price)}"
    if price_type == "negotiable":
        return f"{formatted} (Negotiable)"
    return formatted


def clean_number(whatsapp_number: str) -> str:
    return _NON_DIGITS.sub("", whatsapp_number or "")


def encode_component(text: str) -> str:
    return quote(text, safe=_URI_COMPONENT_SAFE)


def wishlist_message(items, store_name: str) -> str:
    """
    items: iterables of mappings with name / price / price_type
    """
    lines = [
        f"{index}. {item.get('name')} - {format_price(item.get('price'), item.get('price_type'))}"
        for index, item in enumerate(items, start=1)
    ]
    return WISHLIST_HEADER.format(store_name=store_name) + "\n".join(lines) + WISHLIST_FOOTER


def wishlist_whatsapp_url(whatsapp_number: str, items, store_name: str) -> str:
    message = wishlist_message(items, store_name)
    return f"{WA_BASE}/{clean_number(whatsapp_number)}?text={encode_component(message)}"


def product_whatsapp_url(whatsapp_number: str, name: str, price, price_type: str) -> str:
    message = PRODUCT_INQUIRY.format(name=name, price=format_price(price, price_type))
    return f"{WA_BASE}/{clean_number(whatsapp_number)}?text={encode_component(message)}"
