"""
Storefront platform client: order cancellation.
"""
from __future__ import annotations

from typing import Any, Dict

from .base import BaseIntegrationClient


class StorefrontClient(BaseIntegrationClient):
    PLATFORM_NAME = "storefront"

    def __init__(self, base_url: str, access_token: str, **kwargs):
        super().__init__(base_url, **kwargs)
        self.access_token = access_token

    def default_headers(self) -> Dict[str, str]:
        headers = super().default_headers()
        headers["X-Storefront-Access-Token"] = self.access_token
        return headers

    def cancel_order(self, order_id: str, reason: str = "customer") -> Dict[str, Any]:
        return self.request(
            "POST",
            f"/orders/{order_id}/cancel.json",
            json={"reason": reason, "email": True},
        )
