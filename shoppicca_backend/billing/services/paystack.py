# billing/services/paystack.py

"""
PAYSTACK CLIENT

Thin JSON client over the Paystack REST API:
- POST /transaction/initialize
- GET  /transaction/verify/<reference>

Amounts are passed in cedis and sent in pesewas (x100, half-up).
"""

from __future__ import annotations

import json
import logging
import os
import secrets
import time
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.parse import quote
from urllib.request import Request, urlopen

from django.conf import settings

logger = logging.getLogger(__name__)

PAYSTACK_BASE = "https://api.paystack.co"
REFERENCE_PREFIX = "SHOPPICCA"


class PaystackError(RuntimeError):
    pass


class PaystackConfigError(PaystackError):
    pass


@dataclass(frozen=True)
class PaystackInitResult:
    authorization_url: str
    access_code: str
    reference: str


@dataclass(frozen=True)
class PaystackVerification:
    ok: bool
    status: str
    reference: str
    amount: int | None = None
    currency: str | None = None
    metadata: dict = field(default_factory=dict)
    raw: dict = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return self.ok and self.status == "success"


def _paystack_cfg() -> dict:
    payments = getattr(settings, "PAYMENTS", {}) or {}
    cfg = (payments.get("PAYSTACK") or {}) if isinstance(payments, dict) else {}
    return cfg if isinstance(cfg, dict) else {}


def _get_secret_key() -> str:
    sk = (_paystack_cfg().get("SECRET_KEY") or "").strip()

    if not sk:
        sk = (os.environ.get("PAYSTACK_SECRET_KEY") or "").strip()

    if not sk:
        raise PaystackConfigError(
            "PAYSTACK SECRET_KEY is not configured. "
            "Expected settings.PAYMENTS['PAYSTACK']['SECRET_KEY'] or env PAYSTACK_SECRET_KEY."
        )
    return sk


def default_currency() -> str:
    return (_paystack_cfg().get("CURRENCY") or "GHS").strip().upper()


def to_pesewas(amount_cedis) -> int:
    try:
        cedis = Decimal(str(amount_cedis))
    except (InvalidOperation, ValueError, TypeError) as exc:
        raise ValueError("amount_cedis must be a valid Decimal") from exc
    pesewas = (cedis * Decimal("100")).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return int(pesewas)


def generate_reference() -> str:
    """
    SHOPPICCA_<epoch ms>_<random>
    """
    return f"{REFERENCE_PREFIX}_{int(time.time() * 1000)}_{secrets.token_hex(6)}"


def _safe_preview(text: str, limit: int = 800) -> str:
    text = (text or "").strip()
    if len(text) <= limit:
        return text
    return text[:limit] + " ...(truncated)"


def _parse_json_or_text(raw: str) -> dict[str, Any]:
    raw = raw or ""
    try:
        parsed = json.loads(raw)
    except ValueError:
        return {"kind": "text", "raw": raw}
    if isinstance(parsed, dict):
        return {"kind": "json", "json": parsed, "raw": raw}
    return {"kind": "json_non_object", "json": parsed, "raw": raw}


def _request_json(
    method: str, url: str, *, body: dict | None = None, timeout: int = 25
) -> dict[str, Any]:
    sk = _get_secret_key()
    data = None
    if body is not None:
        data = json.dumps(body, ensure_ascii=False).encode("utf-8")

    req = Request(
        url,
        data=data,
        headers={
            "Authorization": f"Bearer {sk}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        },
        method=method,
    )

    try:
        with urlopen(req, timeout=timeout) as resp:
            raw = resp.read().decode("utf-8", errors="replace")
            parsed_any = _parse_json_or_text(raw)
    except HTTPError as e:
        try:
            raw = e.read().decode("utf-8", errors="replace")
        except OSError:
            raw = ""
        parsed_any = _parse_json_or_text(raw)

        if parsed_any.get("kind") == "json":
            j = parsed_any.get("json") or {}
            msg = j.get("message") or j.get("error") or "Paystack rejected request"
            raise PaystackError(f"Paystack HTTPError: {e.code} {msg}") from e

        preview = _safe_preview(parsed_any.get("raw") or str(e))
        raise PaystackError(f"Paystack HTTPError: {e.code} {preview}") from e
    except URLError as e:
        raise PaystackError(f"Paystack URLError: {e}") from e
    except (OSError, ValueError) as e:
        raise PaystackError(f"Paystack request failed: {e}") from e

    if parsed_any.get("kind") != "json":
        raise PaystackError(
            f"Paystack returned non-JSON: {_safe_preview(parsed_any.get('raw') or '')}"
        )

    return parsed_any.get("json") or {}


def initialize_transaction(
    *,
    email: str,
    amount_cedis,
    reference: str,
    callback_url: str = "",
    metadata: dict | None = None,
    currency: str | None = None,
) -> PaystackInitResult:
    payload: dict = {
        "email": str(email).strip(),
        "amount": to_pesewas(amount_cedis),
        "reference": str(reference).strip(),
        "currency": currency or default_currency(),
    }

    if callback_url:
        payload["callback_url"] = str(callback_url).strip()

    if metadata:
        payload["metadata"] = metadata

    parsed = _request_json(
        "POST", f"{PAYSTACK_BASE}/transaction/initialize", body=payload, timeout=25
    )

    if not parsed.get("status"):
        raise PaystackError(parsed.get("message") or "Paystack init rejected")

    data = parsed.get("data") or {}
    authorization_url = (data.get("authorization_url") or "").strip()
    if not authorization_url:
        raise PaystackError("Paystack init returned no authorization_url")

    return PaystackInitResult(
        authorization_url=authorization_url,
        access_code=str(data.get("access_code") or ""),
        reference=str(data.get("reference") or payload["reference"]),
    )


def verify_transaction(*, reference: str) -> PaystackVerification:
    ref = str(reference or "").strip()
    if not ref:
        return PaystackVerification(ok=False, status="", reference="")

    raw = _request_json(
        "GET", f"{PAYSTACK_BASE}/transaction/verify/{quote(ref, safe='')}", body=None, timeout=25
    )

    data = raw.get("data") or {}
    if not isinstance(data, dict):
        data = {}

    amount = data.get("amount")
    try:
        amount_int = int(amount) if amount is not None else None
    except (TypeError, ValueError):
        amount_int = None

    metadata = data.get("metadata")
    currency = data.get("currency")

    return PaystackVerification(
        ok=bool(raw.get("status")),
        status=str(data.get("status") or "").strip().lower(),
        reference=ref,
        amount=amount_int,
        currency=str(currency) if currency is not None else None,
        metadata=metadata if isinstance(metadata, dict) else {},
        raw=raw,
    )
