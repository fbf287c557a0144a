"""
Platform client tests against a mock transport.
"""

import json

import httpx
import pytest

from medkit.integrations import (
    BillingClient,
    IntegrationError,
    MessagingClient,
    StorefrontClient,
    get_storefront_client,
)
from medkit.integrations.messaging import normalize_phone


def _transport(captured, status_code=200, body=None):
    def handler(request):
        captured.append(request)
        return httpx.Response(status_code, json=body if body is not None else {"ok": True})
    return httpx.MockTransport(handler)


class TestBaseClient:

    def test_unconfigured_platform(self):
        with pytest.raises(IntegrationError) as exc:
            StorefrontClient("", access_token="t")
        assert exc.value.platform == "storefront"

    def test_factory_reads_config(self, app, monkeypatch):
        monkeypatch.setitem(app.config, "STOREFRONT_BASE_URL", "")
        with pytest.raises(IntegrationError):
            get_storefront_client()

    def test_error_status_carried(self):
        captured = []
        client = StorefrontClient(
            "https://shop.test/admin/api", access_token="t",
            transport=_transport(captured, 404, {"errors": "Not Found"}),
        )
        with pytest.raises(IntegrationError) as exc:
            client.cancel_order("1")
        assert exc.value.status_code == 404

    def test_transport_failure(self):
        def handler(request):
            raise httpx.ConnectError("refused")

        client = MessagingClient("https://msg.test", api_key="k", transport=httpx.MockTransport(handler))
        with pytest.raises(IntegrationError) as exc:
            client.send_campaign("c", "98765")
        assert exc.value.status_code is None


class TestBilling:

    def test_record_cod_payment(self):
        captured = []
        client = BillingClient(
            "https://books.test/api/v3", api_token="tok", organization_id="42",
            transport=_transport(captured, 201, {"payment": {"payment_id": "P1"}}),
        )

        result = client.record_cod_payment("INV-1", 250, reference="ORD-9")

        assert result == {"payment": {"payment_id": "P1"}}
        request = captured[0]
        assert request.method == "POST"
        assert request.url.path == "/api/v3/customerpayments"
        assert request.url.params["organization_id"] == "42"
        body = json.loads(request.content)
        assert body["payment_mode"] == "cash"
        assert body["amount"] == 250.0
        assert body["reference_number"] == "ORD-9"


class TestStorefront:

    def test_cancel_order(self):
        captured = []
        client = StorefrontClient("https://shop.test/admin/api/", access_token="shp", transport=_transport(captured))

        client.cancel_order("77", reason="declined")

        request = captured[0]
        assert request.url.path == "/admin/api/orders/77/cancel.json"
        assert request.headers["X-Storefront-Access-Token"] == "shp"
        assert json.loads(request.content) == {"reason": "declined", "email": True}


class TestMessaging:

    @pytest.mark.parametrize("raw,expected", [
        ("+91 98765-43210", "919876543210"),
        ("(022) 555 0101", "0225550101"),
    ])
    def test_normalize_phone(self, raw, expected):
        assert normalize_phone(raw) == expected

    @pytest.mark.parametrize("raw", ["", None, "n/a"])
    def test_normalize_phone_rejects_empty(self, raw):
        with pytest.raises(ValueError):
            normalize_phone(raw)

    def test_send_campaign(self):
        captured = []
        client = MessagingClient("https://msg.test/api", api_key="key-1", transport=_transport(captured))

        client.send_campaign("cod_order_confirmed", "+91 98765 43210", "Asha", ["#1042"])

        body = json.loads(captured[0].content)
        assert body == {
            "apiKey": "key-1",
            "campaignName": "cod_order_confirmed",
            "destination": "919876543210",
            "userName": "Asha",
            "templateParams": ["#1042"],
        }
