"""
Messaging campaign platform client: templated customer notifications.
"""
from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

from .base import BaseIntegrationClient


def normalize_phone(phone: str) -> str:
    """Strip formatting characters; the platform expects digits with country code."""
    if not phone:
        raise ValueError("Phone number is required")
    digits = re.sub(r"\D", "", phone)
    if not digits:
        raise ValueError("Phone number is required")
    return digits


class MessagingClient(BaseIntegrationClient):
    PLATFORM_NAME = "messaging"

    def __init__(self, base_url: str, api_key: str, **kwargs):
        super().__init__(base_url, **kwargs)
        self.api_key = api_key

    def send_campaign(
        self,
        campaign_name: str,
        phone: str,
        user_name: Optional[str] = None,
        template_params: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        return self.request(
            "POST",
            "/campaigns/send",
            json={
                "apiKey": self.api_key,
                "campaignName": campaign_name,
                "destination": normalize_phone(phone),
                "userName": user_name or "",
                "templateParams": list(template_params or []),
            },
        )
