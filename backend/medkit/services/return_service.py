"""
Return Ticket Service

LIFECYCLE:
1. Create ticket (AwaitingReturn)
2. receive  -> ReturnReceived (any ticket type)
3. refund   -> RefundInitiated (Refund tickets only, from ReturnReceived)

Replacement tickets end at ReturnReceived. Every other transition is rejected
without touching the ticket.
"""

from __future__ import annotations

from flask import current_app

from ..extensions import db
from ..models import (
    ReturnTicket,
    TICKET_TYPE_REFUND,
    TICKET_TYPE_REPLACEMENT,
    TICKET_STATUS_AWAITING_RETURN,
    TICKET_STATUS_RETURN_RECEIVED,
    TICKET_STATUS_REFUND_INITIATED,
)
from ..validation import ValidationError, optional_str, require_fields


class ReturnTicketError(Exception):
    """Raised for return ticket operation errors."""
    pass


class ReturnTicketNotFoundError(ReturnTicketError):
    pass


class InvalidTransitionError(ReturnTicketError):
    pass


TICKET_TYPES = (TICKET_TYPE_REFUND, TICKET_TYPE_REPLACEMENT)

# action -> target status
ACTIONS = {
    "receive": TICKET_STATUS_RETURN_RECEIVED,
    TICKET_STATUS_RETURN_RECEIVED: TICKET_STATUS_RETURN_RECEIVED,
    "refund": TICKET_STATUS_REFUND_INITIATED,
    TICKET_STATUS_REFUND_INITIATED: TICKET_STATUS_REFUND_INITIATED,
}

# target status -> required current status
TRANSITIONS = {
    TICKET_STATUS_RETURN_RECEIVED: TICKET_STATUS_AWAITING_RETURN,
    TICKET_STATUS_REFUND_INITIATED: TICKET_STATUS_RETURN_RECEIVED,
}


def create_ticket(payload: dict) -> ReturnTicket:
    require_fields(payload, ["orderId", "customerName", "ticketType"])

    ticket_type = str(payload["ticketType"]).strip()
    if ticket_type not in TICKET_TYPES:
        raise ValidationError(f"ticketType must be one of: {', '.join(TICKET_TYPES)}")

    ticket = ReturnTicket(
        order_id=optional_str(payload, "orderId"),
        customer_name=optional_str(payload, "customerName"),
        customer_email=optional_str(payload, "customerEmail"),
        customer_phone=optional_str(payload, "customerPhone"),
        ticket_type=ticket_type,
        reason=optional_str(payload, "reason"),
        status=TICKET_STATUS_AWAITING_RETURN,
    )
    db.session.add(ticket)
    db.session.commit()

    current_app.logger.info("Created %s ticket %s for order %s", ticket_type, ticket.id, ticket.order_id)
    return ticket


def list_tickets() -> list[ReturnTicket]:
    return db.session.query(ReturnTicket).order_by(ReturnTicket.created_at.desc(), ReturnTicket.id.desc()).all()


def get_ticket(ticket_id: int) -> ReturnTicket:
    ticket = db.session.get(ReturnTicket, ticket_id)
    if ticket is None:
        raise ReturnTicketNotFoundError("Return ticket not found")
    return ticket


def apply_action(ticket_id: int, action: str | None) -> ReturnTicket:
    """
    Move a ticket one step along its lifecycle.

    Raises:
        ReturnTicketNotFoundError: unknown ticket
        InvalidTransitionError: unknown action or illegal for the ticket's state/type
    """
    ticket = get_ticket(ticket_id)

    target = ACTIONS.get((action or "").strip())
    if target is None:
        raise InvalidTransitionError(f"Unknown action: {action!r}")

    if target == TICKET_STATUS_REFUND_INITIATED and ticket.ticket_type != TICKET_TYPE_REFUND:
        raise InvalidTransitionError("Refunds can only be initiated for Refund tickets")

    required = TRANSITIONS[target]
    if ticket.status != required:
        raise InvalidTransitionError(
            f"Cannot move ticket from {ticket.status} to {target}"
        )

    ticket.status = target
    db.session.commit()

    current_app.logger.info("Return ticket %s moved to %s", ticket.id, target)
    return ticket
