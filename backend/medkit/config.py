# backend/medkit/config.py
from __future__ import annotations
import os
from datetime import timedelta


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    return int(value)


class Config:
    # Optional "SECRET_KEY", with default dev key
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # SQLite DB stored in backend/instance/medkit.sqlite3 unless DATABASE_URL is set
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL",
        "sqlite:///medkit.sqlite3",
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Create tables once at startup; managed deployments run migrations instead
    CREATE_SCHEMA_ON_STARTUP = _env_bool("CREATE_SCHEMA_ON_STARTUP", True)

    # Login tokens: signed JWT, one hour, no refresh
    JWT_SECRET_KEY = os.environ.get("JWT_SECRET_KEY", "dev-jwt-secret-change-me")
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=1)
    JWT_TOKEN_LOCATION = ["headers"]

    # When true, mutating routes require a bearer token
    AUTH_REQUIRED = _env_bool("AUTH_REQUIRED", False)

    # Comma separated list, "*" allows every origin
    CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "*")

    UPLOAD_FOLDER = os.environ.get("UPLOAD_FOLDER", "uploads")
    MAX_CONTENT_LENGTH = _env_int("MAX_CONTENT_LENGTH", 5 * 1024 * 1024)

    # Kit units consumed per ordered quantity, and serials per unit on restock
    KIT_UNITS_PER_QUANTITY = _env_int("KIT_UNITS_PER_QUANTITY", 1)
    KIT_GROUP_SIZE = _env_int("KIT_GROUP_SIZE", 1)

    # Invoicing platform (COD payment recording)
    BILLING_BASE_URL = os.environ.get("BILLING_BASE_URL", "")
    BILLING_API_TOKEN = os.environ.get("BILLING_API_TOKEN", "")
    BILLING_ORGANIZATION_ID = os.environ.get("BILLING_ORGANIZATION_ID", "")

    # Storefront platform (order cancellation)
    STOREFRONT_BASE_URL = os.environ.get("STOREFRONT_BASE_URL", "")
    STOREFRONT_ACCESS_TOKEN = os.environ.get("STOREFRONT_ACCESS_TOKEN", "")

    # Messaging campaign platform (customer notifications)
    MESSAGING_BASE_URL = os.environ.get("MESSAGING_BASE_URL", "")
    MESSAGING_API_KEY = os.environ.get("MESSAGING_API_KEY", "")
    MESSAGING_CONFIRM_CAMPAIGN = os.environ.get("MESSAGING_CONFIRM_CAMPAIGN", "cod_order_confirmed")
    MESSAGING_CANCEL_CAMPAIGN = os.environ.get("MESSAGING_CANCEL_CAMPAIGN", "cod_order_cancelled")

    INTEGRATION_TIMEOUT_SECONDS = float(os.environ.get("INTEGRATION_TIMEOUT_SECONDS", "10"))
