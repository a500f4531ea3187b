# public/services/arkesel.py

"""
ARKESEL SMS CLIENT

POST https://sms.arkesel.com/api/v2/sms/send
Headers: api-key: <key>
Body:    {"sender": "...", "message": "...", "recipients": ["233..."]}

Success looks like:
    {"status": "success", "data": [{"recipient": "...", "id": "..."}],
     "main_balance": ..., "sms_balance": ...}
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from django.conf import settings

logger = logging.getLogger(__name__)

ARKESEL_SEND_URL = "https://sms.arkesel.com/api/v2/sms/send"
DEFAULT_SENDER_ID = "ForgeOne"


class SmsError(RuntimeError):
    pass


class SmsConfigError(SmsError):
    pass


@dataclass(frozen=True)
class SmsResult:
    success: bool
    status_code: int
    message_ids: list = field(default_factory=list)
    sms_balance: Any = None
    main_balance: Any = None
    details: str = ""
    raw: dict = field(default_factory=dict)


def _arkesel_cfg() -> dict:
    messaging = getattr(settings, "MESSAGING", {}) or {}
    cfg = (messaging.get("ARKESEL") or {}) if isinstance(messaging, dict) else {}
    return cfg if isinstance(cfg, dict) else {}


def _get_api_key() -> str:
    key = (_arkesel_cfg().get("API_KEY") or "").strip()
    if not key:
        key = (os.environ.get("ARKESEL_API_KEY") or "").strip()
    if not key:
        raise SmsConfigError("API key not configured")
    return key


def default_recipients() -> list[str]:
    recipient = (_arkesel_cfg().get("DEFAULT_RECIPIENT") or "").strip()
    return [recipient] if recipient else []


def _parse(raw: str) -> dict:
    try:
        parsed = json.loads(raw or "")
    except ValueError:
        return {"raw": raw}
    return parsed if isinstance(parsed, dict) else {"data": parsed}


def send_sms(message: str, recipients: list[str] | None = None, timeout: int = 20) -> SmsResult:
    """
    Raises SmsConfigError when no API key is set and SmsError when the
    gateway can't be reached. Gateway rejections come back as a result
    with success=False; a 2xx reply without status=success reports 502.
    """
    api_key = _get_api_key()
    recipients = list(recipients or default_recipients())
    if not recipients:
        raise SmsConfigError("No SMS recipient configured")

    payload = {
        "sender": (_arkesel_cfg().get("SENDER_ID") or DEFAULT_SENDER_ID)[:11],
        "message": message,
        "recipients": recipients,
    }

    req = Request(
        ARKESEL_SEND_URL,
        data=json.dumps(payload, ensure_ascii=False).encode("utf-8"),
        headers={
            "api-key": api_key,
            "Content-Type": "application/json",
            "Accept": "application/json",
        },
        method="POST",
    )

    try:
        with urlopen(req, timeout=timeout) as resp:
            status_code = resp.status
            data = _parse(resp.read().decode("utf-8", errors="replace"))
    except HTTPError as e:
        status_code = e.code
        try:
            data = _parse(e.read().decode("utf-8", errors="replace"))
        except OSError:
            data = {}
    except URLError as e:
        raise SmsError(f"Arkesel URLError: {e}") from e
    except (OSError, ValueError) as e:
        raise SmsError(f"Arkesel request failed: {e}") from e

    if 200 <= status_code < 300 and data.get("status") == "success":
        rows = data.get("data") or []
        message_ids = [row.get("id") for row in rows if isinstance(row, dict)]
        logger.info(
            "SMS sent",
            extra={"recipients": len(recipients), "message_ids": message_ids},
        )
        return SmsResult(
            success=True,
            status_code=status_code,
            message_ids=message_ids,
            sms_balance=data.get("sms_balance"),
            main_balance=data.get("main_balance"),
            raw=data,
        )

    details = str(data.get("message") or data.get("status") or "Unknown error")
    logger.warning(
        "Arkesel rejected SMS",
        extra={"status_code": status_code, "details": details},
    )
    return SmsResult(
        success=False,
        status_code=status_code if status_code >= 400 else 502,
        details=details,
        raw=data,
    )
