# store/validators.py

import re

from rest_framework import serializers

HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_PHONE_NOISE = re.compile(r"[^0-9+]")


def normalize_whatsapp_number(value):
    """
    "+233 24 949-7164" -> "+233249497164". Blank -> None.
    """
    value = _PHONE_NOISE.sub("", value or "")
    if not value:
        return None
    digits = value.lstrip("+")
    if not digits.isdigit() or not 10 <= len(digits) <= 15:
        raise serializers.ValidationError("Enter a valid WhatsApp number (10-15 digits)")
    return value


def validate_hex_color(value):
    value = (value or "").strip()
    if not value:
        return None
    if not HEX_COLOR.match(value):
        raise serializers.ValidationError("Colors must be hex values like #1a2b3c")
    return value.lower()
