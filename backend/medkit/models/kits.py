from __future__ import annotations

from ..extensions import db
from ..time_utils import to_utc_z

KIT_STATUS_AVAILABLE = "available"
KIT_STATUS_SOLD = "sold"


class Kit(db.Model):
    """
    A trackable kit unit, or the merged aggregate of every unit sold on one order.

    serial_numbers keeps insertion order; batch_numbers is deduplicated in
    order of first appearance. order/invoice fields are empty strings while
    the kit is available.
    """
    __tablename__ = "kits"
    __table_args__ = (
        db.Index("ix_kits_status_id", "status", "id"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)

    serial_numbers = db.Column(db.JSON, nullable=False, default=list)
    batch_numbers = db.Column(db.JSON, nullable=False, default=list)

    status = db.Column(db.String(16), nullable=False, default=KIT_STATUS_AVAILABLE, index=True)

    order_id = db.Column(db.String(64), nullable=False, default="", index=True)
    invoice_url = db.Column(db.String(512), nullable=False, default="")
    invoice_id = db.Column(db.String(64), nullable=False, default="")

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())
    updated_at = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        server_default=db.func.now(),
        onupdate=db.func.now(),
    )

    def __repr__(self) -> str:
        return f"<Kit id={self.id} status={self.status} serials={self.serial_numbers!r}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "serialNumbers": list(self.serial_numbers or []),
            "batchNumbers": list(self.batch_numbers or []),
            "status": self.status,
            "orderId": self.order_id,
            "invoiceUrl": self.invoice_url,
            "invoiceId": self.invoice_id,
            "createdAt": to_utc_z(self.created_at),
            "updatedAt": to_utc_z(self.updated_at),
        }
