# public/tests/test_wishlist_and_sms.py

import io
import json
from unittest import mock
from urllib.error import HTTPError, URLError

from django.test import SimpleTestCase, override_settings
from rest_framework.test import APIClient

from public.services import arkesel
from public.services.arkesel import SmsConfigError, send_sms

MESSAGING = {
    "ARKESEL": {
        "API_KEY": "ark_test",
        "SENDER_ID": "ForgeOne",
        "DEFAULT_RECIPIENT": "233249497164",
    }
}


class _FakeResponse:
    def __init__(self, payload, status=200):
        self._raw = json.dumps(payload).encode("utf-8")
        self.status = status

    def read(self):
        return self._raw

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


class WishlistSendApiTests(SimpleTestCase):
    def setUp(self):
        self.client = APIClient()

    def test_builds_whatsapp_link(self):
        res = self.client.post(
            "/api/wishlist/send/",
            {
                "items": [
                    {"id": "1", "name": "Air Max", "price": 1500, "price_type": "negotiable"},
                    {"id": "2", "name": "Slides", "price": None, "price_type": "fixed"},
                ],
                "storeName": "Nancy Shoes",
                "whatsappNumber": "+233 24 949 7164",
            },
            format="json",
        )

        self.assertEqual(res.status_code, 200)
        self.assertTrue(res.data["whatsapp_url"].startswith("https://wa.me/233249497164?text="))
        self.assertIn("1. Air Max - GHC 1,500 (Negotiable)", res.data["message_preview"])
        self.assertEqual(
            res.data["items_summary"],
            [
                {"name": "Air Max", "price": "GHC 1,500 (Negotiable)"},
                {"name": "Slides", "price": "Price not set"},
            ],
        )

    def test_empty_wishlist(self):
        res = self.client.post(
            "/api/wishlist/send/",
            {"items": [], "storeName": "X", "whatsappNumber": "233249497164"},
            format="json",
        )
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data, {"error": "No items in wishlist"})

    def test_missing_number(self):
        res = self.client.post(
            "/api/wishlist/send/",
            {"items": [{"name": "Air Max", "price": 10, "price_type": "fixed"}], "storeName": "X"},
            format="json",
        )
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data, {"error": "WhatsApp number is required"})


@override_settings(MESSAGING=MESSAGING)
class ArkeselClientTests(SimpleTestCase):
    @mock.patch.object(arkesel, "urlopen")
    def test_send_success(self, urlopen):
        urlopen.return_value = _FakeResponse(
            {
                "status": "success",
                "data": [{"recipient": "233249497164", "id": "msg-1"}],
                "sms_balance": 120,
                "main_balance": 4.5,
            }
        )

        result = send_sms("Hello from the landing page")

        self.assertTrue(result.success)
        self.assertEqual(result.message_ids, ["msg-1"])
        self.assertEqual(result.sms_balance, 120)

        req = urlopen.call_args[0][0]
        body = json.loads(req.data.decode("utf-8"))
        self.assertEqual(req.full_url, "https://sms.arkesel.com/api/v2/sms/send")
        self.assertEqual(req.get_header("Api-key"), "ark_test")
        self.assertEqual(
            body,
            {
                "sender": "ForgeOne",
                "message": "Hello from the landing page",
                "recipients": ["233249497164"],
            },
        )

    @mock.patch.object(arkesel, "urlopen")
    def test_explicit_recipients(self, urlopen):
        urlopen.return_value = _FakeResponse({"status": "success", "data": []})
        send_sms("hi", recipients=["233200000000"])
        body = json.loads(urlopen.call_args[0][0].data.decode("utf-8"))
        self.assertEqual(body["recipients"], ["233200000000"])

    @mock.patch.object(arkesel, "urlopen")
    def test_gateway_rejection(self, urlopen):
        urlopen.side_effect = HTTPError(
            arkesel.ARKESEL_SEND_URL,
            401,
            "Unauthorized",
            {},
            io.BytesIO(b'{"status": "error", "message": "Invalid API key"}'),
        )

        result = send_sms("hi")

        self.assertFalse(result.success)
        self.assertEqual(result.status_code, 401)
        self.assertEqual(result.details, "Invalid API key")

    @override_settings(MESSAGING={"ARKESEL": {"API_KEY": ""}})
    def test_missing_key(self):
        with mock.patch.dict("os.environ", {"ARKESEL_API_KEY": ""}):
            with self.assertRaises(SmsConfigError):
                send_sms("hi")


@override_settings(MESSAGING=MESSAGING)
class ContactSmsApiTests(SimpleTestCase):
    def setUp(self):
        self.client = APIClient()

    @mock.patch.object(arkesel, "urlopen")
    def test_relay_success(self, urlopen):
        urlopen.return_value = _FakeResponse(
            {"status": "success", "data": [{"id": "msg-1"}], "sms_balance": 10, "main_balance": 1}
        )

        res = self.client.post("/api/send-sms/", {"smsMessage": "Call me back"}, format="json")

        self.assertEqual(res.status_code, 200)
        self.assertTrue(res.data["success"])
        self.assertEqual(res.data["message"], "Message sent successfully! We will get back to you soon.")
        self.assertEqual(res.data["provider_response"]["message_ids"], ["msg-1"])

    @mock.patch.object(arkesel, "urlopen")
    def test_relay_gateway_error(self, urlopen):
        urlopen.return_value = _FakeResponse({"status": "error", "message": "Insufficient balance"}, status=200)

        res = self.client.post("/api/send-sms/", {"smsMessage": "Call me back"}, format="json")

        self.assertEqual(res.status_code, 502)
        self.assertEqual(res.data["error"], "Failed to send message")
        self.assertEqual(res.data["details"], "Insufficient balance")

    @mock.patch.object(arkesel, "urlopen", side_effect=URLError("timed out"))
    def test_relay_unreachable(self, urlopen):
        res = self.client.post("/api/send-sms/", {"smsMessage": "Call me back"}, format="json")
        self.assertEqual(res.status_code, 500)

    @override_settings(MESSAGING={"ARKESEL": {"API_KEY": ""}})
    def test_unconfigured(self):
        with mock.patch.dict("os.environ", {"ARKESEL_API_KEY": ""}):
            res = self.client.post("/api/send-sms/", {"smsMessage": "hi"}, format="json")
        self.assertEqual(res.status_code, 500)
        self.assertEqual(res.data, {"error": "API key not configured"})

    def test_message_required(self):
        res = self.client.post("/api/send-sms/", {}, format="json")
        self.assertEqual(res.status_code, 400)
