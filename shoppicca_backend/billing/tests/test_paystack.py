# billing/tests/test_paystack.py

import io
import json
import re
from decimal import Decimal
from unittest import mock
from urllib.error import HTTPError, URLError

from django.test import SimpleTestCase, override_settings

from billing.services import paystack
from billing.services.paystack import (
    PaystackConfigError,
    PaystackError,
    generate_reference,
    initialize_transaction,
    to_pesewas,
    verify_transaction,
)

PAYMENTS = {"PAYSTACK": {"SECRET_KEY": "sk_test_123", "PUBLIC_KEY": "pk", "CURRENCY": "GHS"}}


class _FakeResponse:
    def __init__(self, payload):
        self._raw = json.dumps(payload).encode("utf-8")

    def read(self):
        return self._raw

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


class PaystackHelpersTests(SimpleTestCase):
    def test_to_pesewas_rounds_half_up(self):
        self.assertEqual(to_pesewas(Decimal("50")), 5000)
        self.assertEqual(to_pesewas("19.995"), 2000)
        self.assertEqual(to_pesewas(0.1), 10)

    def test_to_pesewas_rejects_garbage(self):
        with self.assertRaises(ValueError):
            to_pesewas("abc")

    def test_reference_format(self):
        ref = generate_reference()
        self.assertRegex(ref, r"^SHOPPICCA_\d{13}_[0-9a-f]+$")
        self.assertNotEqual(ref, generate_reference())


@override_settings(PAYMENTS=PAYMENTS)
class PaystackClientTests(SimpleTestCase):
    """
    GUARANTEES:
    - Requests carry the Bearer secret and amounts in pesewas
    - Gateway failures surface as PaystackError
    - Missing secret is a PaystackConfigError
    """

    @mock.patch.object(paystack, "urlopen")
    def test_initialize(self, urlopen):
        urlopen.return_value = _FakeResponse(
            {
                "status": True,
                "data": {
                    "authorization_url": "https://checkout.paystack.com/abc",
                    "access_code": "abc",
                    "reference": "SHOPPICCA_1_x",
                },
            }
        )

        result = initialize_transaction(
            email="owner@example.com",
            amount_cedis=Decimal("50.00"),
            reference="SHOPPICCA_1_x",
            callback_url="https://platform.example/api/subscription/callback?reference=SHOPPICCA_1_x",
            metadata={"slug": "nancy"},
        )

        self.assertEqual(result.authorization_url, "https://checkout.paystack.com/abc")
        self.assertEqual(result.access_code, "abc")

        req = urlopen.call_args[0][0]
        body = json.loads(req.data.decode("utf-8"))
        self.assertEqual(req.get_method(), "POST")
        self.assertEqual(req.full_url, "https://api.paystack.co/transaction/initialize")
        self.assertEqual(req.get_header("Authorization"), "Bearer sk_test_123")
        self.assertEqual(body["amount"], 5000)
        self.assertEqual(body["currency"], "GHS")
        self.assertEqual(body["metadata"], {"slug": "nancy"})

    @mock.patch.object(paystack, "urlopen")
    def test_initialize_rejected(self, urlopen):
        urlopen.return_value = _FakeResponse({"status": False, "message": "Invalid key"})
        with self.assertRaisesRegex(PaystackError, "Invalid key"):
            initialize_transaction(email="a@b.co", amount_cedis=1, reference="r")

    @mock.patch.object(paystack, "urlopen")
    def test_http_error(self, urlopen):
        urlopen.side_effect = HTTPError(
            "https://api.paystack.co", 401, "Unauthorized", {}, io.BytesIO(b'{"message": "Bad key"}')
        )
        with self.assertRaisesRegex(PaystackError, "401 Bad key"):
            initialize_transaction(email="a@b.co", amount_cedis=1, reference="r")

    @mock.patch.object(paystack, "urlopen")
    def test_network_error(self, urlopen):
        urlopen.side_effect = URLError("timed out")
        with self.assertRaises(PaystackError):
            verify_transaction(reference="r")

    @mock.patch.object(paystack, "urlopen")
    def test_verify(self, urlopen):
        urlopen.return_value = _FakeResponse(
            {
                "status": True,
                "data": {
                    "status": "success",
                    "reference": "SHOPPICCA_1_x",
                    "amount": 5000,
                    "currency": "GHS",
                    "metadata": {"slug": "nancy"},
                },
            }
        )

        result = verify_transaction(reference="SHOPPICCA_1_x")

        self.assertTrue(result.is_success)
        self.assertEqual(result.amount, 5000)
        self.assertEqual(result.currency, "GHS")
        self.assertEqual(result.metadata, {"slug": "nancy"})
        self.assertTrue(
            urlopen.call_args[0][0].full_url.endswith("/transaction/verify/SHOPPICCA_1_x")
        )

    @mock.patch.object(paystack, "urlopen")
    def test_verify_abandoned(self, urlopen):
        urlopen.return_value = _FakeResponse({"status": True, "data": {"status": "abandoned"}})
        self.assertFalse(verify_transaction(reference="r").is_success)

    def test_verify_blank_reference_skips_gateway(self):
        with mock.patch.object(paystack, "urlopen") as urlopen:
            result = verify_transaction(reference="  ")
        self.assertFalse(result.ok)
        urlopen.assert_not_called()

    @override_settings(PAYMENTS={"PAYSTACK": {"SECRET_KEY": ""}})
    def test_missing_secret(self):
        with mock.patch.dict("os.environ", {"PAYSTACK_SECRET_KEY": ""}):
            with self.assertRaises(PaystackConfigError):
                verify_transaction(reference="r")
