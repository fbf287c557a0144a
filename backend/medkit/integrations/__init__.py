"""
Outbound platform clients, built from application config.

Tests may set INTEGRATION_TRANSPORT to an httpx transport to stub the network.
"""
from flask import current_app

from .base import IntegrationError
from .billing import BillingClient
from .messaging import MessagingClient
from .storefront import StorefrontClient


def _client_options() -> dict:
    return {
        "timeout": current_app.config.get("INTEGRATION_TIMEOUT_SECONDS", 10.0),
        "transport": current_app.config.get("INTEGRATION_TRANSPORT"),
    }


def get_billing_client() -> BillingClient:
    config = current_app.config
    return BillingClient(
        config.get("BILLING_BASE_URL", ""),
        api_token=config.get("BILLING_API_TOKEN", ""),
        organization_id=config.get("BILLING_ORGANIZATION_ID", ""),
        **_client_options(),
    )


def get_storefront_client() -> StorefrontClient:
    config = current_app.config
    return StorefrontClient(
        config.get("STOREFRONT_BASE_URL", ""),
        access_token=config.get("STOREFRONT_ACCESS_TOKEN", ""),
        **_client_options(),
    )


def get_messaging_client() -> MessagingClient:
    config = current_app.config
    return MessagingClient(
        config.get("MESSAGING_BASE_URL", ""),
        api_key=config.get("MESSAGING_API_KEY", ""),
        **_client_options(),
    )


__all__ = [
    "IntegrationError",
    "BillingClient",
    "MessagingClient",
    "StorefrontClient",
    "get_billing_client",
    "get_storefront_client",
    "get_messaging_client",
]
