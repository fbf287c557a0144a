"""
Invoicing platform client: records COD payments against invoices.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Optional

from .base import BaseIntegrationClient


class BillingClient(BaseIntegrationClient):
    PLATFORM_NAME = "billing"

    def __init__(self, base_url: str, api_token: str, organization_id: str, **kwargs):
        super().__init__(base_url, **kwargs)
        self.api_token = api_token
        self.organization_id = organization_id

    def default_headers(self) -> Dict[str, str]:
        headers = super().default_headers()
        headers["Authorization"] = f"Bearer {self.api_token}"
        return headers

    def record_cod_payment(
        self,
        invoice_id: str,
        amount: Optional[Decimal],
        reference: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Mark the invoice as paid in cash on delivery."""
        payload: Dict[str, Any] = {
            "payment_mode": "cash",
            "invoices": [{"invoice_id": invoice_id}],
        }
        if amount is not None:
            payload["amount"] = float(amount)
            payload["invoices"][0]["amount_applied"] = float(amount)
        if reference:
            payload["reference_number"] = reference

        return self.request(
            "POST",
            "/customerpayments",
            params={"organization_id": self.organization_id},
            json=payload,
        )
