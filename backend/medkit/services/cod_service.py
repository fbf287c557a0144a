# Overview: Service-layer operations for cash-on-delivery orders and their platform side effects.

"""
COD Order Service

LIFECYCLE:
1. Create order (AwaitingConfirmation)
2. Confirm -> Confirmed, then notify billing and the customer
3. Cancel  -> storefront cancellation first, then Cancelled locally

ORDERING:
- Confirm commits locally before notifying. Notification failures are logged
  and reported; the confirmation stands.
- Cancel calls the storefront before touching local state. If the storefront
  rejects the call, the order stays AwaitingConfirmation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any

from flask import current_app

from ..extensions import db
from ..integrations import (
    IntegrationError,
    get_billing_client,
    get_messaging_client,
    get_storefront_client,
)
from ..models import (
    CodOrder,
    Kit,
    COD_STATUS_AWAITING_CONFIRMATION,
    COD_STATUS_CONFIRMED,
    COD_STATUS_CANCELLED,
)
from ..validation import ValidationError, optional_str
from . import kit_service


class CodOrderError(Exception):
    """Raised for COD order operation errors."""
    pass


class CodOrderNotFoundError(CodOrderError):
    pass


class CodOrderStateError(CodOrderError):
    pass


class StorefrontCancellationError(CodOrderError):
    """Raised when the storefront refuses or fails the cancellation."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


@dataclass
class NotificationResult:
    channel: str
    ok: bool
    error: str | None = None

    def to_dict(self) -> dict:
        return {"channel": self.channel, "ok": self.ok, "error": self.error}


@dataclass
class TransitionResult:
    order: CodOrder
    notifications: list[NotificationResult] = field(default_factory=list)


def _parse_amount(value: Any) -> Decimal | None:
    if value is None or value == "":
        return None
    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise ValidationError("amount must be numeric") from None


# =============================================================================
# CREATION & QUERIES
# =============================================================================

def create_order(payload: dict) -> tuple[CodOrder, list[Kit]]:
    """
    Create a COD order. Status is always AwaitingConfirmation.

    Returns the order and every kit already allocated to its orderId.
    """
    order_id = optional_str(payload, "orderId")
    if not order_id:
        raise ValidationError("orderId is required")

    order = CodOrder(
        order_id=order_id,
        order_no=optional_str(payload, "orderNo"),
        customer_name=optional_str(payload, "customerName"),
        customer_email=optional_str(payload, "customerEmail"),
        customer_phone=optional_str(payload, "customerPhone"),
        invoice_id=optional_str(payload, "invoiceId"),
        invoice_url=optional_str(payload, "invoiceUrl"),
        amount=_parse_amount(payload.get("amount")),
        status=COD_STATUS_AWAITING_CONFIRMATION,
    )
    db.session.add(order)
    db.session.commit()

    current_app.logger.info("Created COD order %s for storefront order %s", order.id, order.order_id)
    return order, kit_service.kits_for_order(order.order_id)


def list_orders() -> list[CodOrder]:
    return db.session.query(CodOrder).order_by(CodOrder.created_at.desc(), CodOrder.id.desc()).all()


def get_order(cod_id: int) -> CodOrder:
    order = db.session.get(CodOrder, cod_id)
    if order is None:
        raise CodOrderNotFoundError("Order not found")
    return order


def _require_pending(order: CodOrder, action: str) -> None:
    if order.status != COD_STATUS_AWAITING_CONFIRMATION:
        raise CodOrderStateError(
            f"Cannot {action} order {order.id}: status is {order.status}"
        )


# =============================================================================
# NOTIFICATIONS
# =============================================================================

def _notify(channel: str, call) -> NotificationResult:
    try:
        call()
    except (IntegrationError, ValueError) as e:
        current_app.logger.warning("COD %s notification failed: %s", channel, e)
        return NotificationResult(channel=channel, ok=False, error=str(e))
    return NotificationResult(channel=channel, ok=True)


def _send_customer_message(order: CodOrder, campaign: str) -> None:
    get_messaging_client().send_campaign(
        campaign,
        order.customer_phone or "",
        user_name=order.customer_name,
        template_params=[order.customer_name or "", order.order_no or order.order_id],
    )


# =============================================================================
# TRANSITIONS
# =============================================================================

def confirm_order(cod_id: int) -> TransitionResult:
    """
    Confirm a pending COD order, then record payment and notify the customer.
    """
    order = get_order(cod_id)
    _require_pending(order, "confirm")

    order.status = COD_STATUS_CONFIRMED
    db.session.commit()
    current_app.logger.info("COD order %s confirmed", order.id)

    notifications = []
    if order.invoice_id:
        notifications.append(_notify(
            "billing",
            lambda: get_billing_client().record_cod_payment(
                order.invoice_id, order.amount, reference=order.order_no or order.order_id
            ),
        ))
    notifications.append(_notify(
        "messaging",
        lambda: _send_customer_message(order, current_app.config["MESSAGING_CONFIRM_CAMPAIGN"]),
    ))

    return TransitionResult(order=order, notifications=notifications)


def cancel_order(cod_id: int) -> TransitionResult:
    """
    Cancel a pending COD order on the storefront, then locally.

    Raises:
        StorefrontCancellationError: storefront call failed; order unchanged
    """
    order = get_order(cod_id)
    _require_pending(order, "cancel")

    try:
        get_storefront_client().cancel_order(order.order_id)
    except IntegrationError as e:
        current_app.logger.warning("Storefront cancellation failed for COD order %s: %s", order.id, e)
        raise StorefrontCancellationError(
            "Storefront cancellation failed", status_code=e.status_code
        ) from e

    order.status = COD_STATUS_CANCELLED
    db.session.commit()
    current_app.logger.info("COD order %s cancelled", order.id)

    notifications = [_notify(
        "messaging",
        lambda: _send_customer_message(order, current_app.config["MESSAGING_CANCEL_CAMPAIGN"]),
    )]
    return TransitionResult(order=order, notifications=notifications)
