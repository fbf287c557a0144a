from __future__ import annotations

from ..extensions import db
from ..time_utils import to_utc_z

COD_STATUS_AWAITING_CONFIRMATION = "AwaitingConfirmation"
COD_STATUS_CONFIRMED = "Confirmed"
COD_STATUS_CANCELLED = "Cancelled"

TICKET_TYPE_REFUND = "Refund"
TICKET_TYPE_REPLACEMENT = "Replacement"

TICKET_STATUS_AWAITING_RETURN = "AwaitingReturn"
TICKET_STATUS_RETURN_RECEIVED = "ReturnReceived"
TICKET_STATUS_REFUND_INITIATED = "RefundInitiated"


class CodOrder(db.Model):
    """
    Cash-on-delivery order awaiting confirmation.

    AwaitingConfirmation is the initial status; Confirmed and Cancelled are terminal.
    """
    __tablename__ = "cod_orders"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)

    order_id = db.Column(db.String(64), nullable=False, index=True)
    order_no = db.Column(db.String(64), nullable=True)

    customer_name = db.Column(db.String(255), nullable=True)
    customer_email = db.Column(db.String(255), nullable=True)
    customer_phone = db.Column(db.String(32), nullable=True)

    invoice_id = db.Column(db.String(64), nullable=True)
    invoice_url = db.Column(db.String(512), nullable=True)
    amount = db.Column(db.Numeric(12, 2), nullable=True)

    status = db.Column(db.String(32), nullable=False, default=COD_STATUS_AWAITING_CONFIRMATION, index=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())
    updated_at = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        server_default=db.func.now(),
        onupdate=db.func.now(),
    )

    def __repr__(self) -> str:
        return f"<CodOrder id={self.id} order_id={self.order_id!r} status={self.status}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "orderId": self.order_id,
            "orderNo": self.order_no,
            "customerName": self.customer_name,
            "customerEmail": self.customer_email,
            "customerPhone": self.customer_phone,
            "invoiceId": self.invoice_id,
            "invoiceUrl": self.invoice_url,
            "amount": float(self.amount) if self.amount is not None else None,
            "status": self.status,
            "createdAt": to_utc_z(self.created_at),
            "updatedAt": to_utc_z(self.updated_at),
        }


class ReturnTicket(db.Model):
    """
    Post-sale refund or replacement request.

    ticket_type never changes after creation. Replacement tickets stop at
    ReturnReceived; only Refund tickets continue to RefundInitiated.
    """
    __tablename__ = "return_tickets"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)

    order_id = db.Column(db.String(64), nullable=False, index=True)
    customer_name = db.Column(db.String(255), nullable=False)
    customer_email = db.Column(db.String(255), nullable=True)
    customer_phone = db.Column(db.String(32), nullable=True)

    ticket_type = db.Column(db.String(16), nullable=False)
    reason = db.Column(db.Text, nullable=True)
    status = db.Column(db.String(32), nullable=False, default=TICKET_STATUS_AWAITING_RETURN, index=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())
    updated_at = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        server_default=db.func.now(),
        onupdate=db.func.now(),
    )

    def __repr__(self) -> str:
        return f"<ReturnTicket id={self.id} type={self.ticket_type} status={self.status}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "orderId": self.order_id,
            "customerName": self.customer_name,
            "customerEmail": self.customer_email,
            "customerPhone": self.customer_phone,
            "ticketType": self.ticket_type,
            "reason": self.reason,
            "status": self.status,
            "createdAt": to_utc_z(self.created_at),
            "updatedAt": to_utc_z(self.updated_at),
        }
