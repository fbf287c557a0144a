# Overview: Service-layer operations for kit inventory; selection, allocation and restock.

"""
Kit Inventory Allocator

INVARIANTS:
- Available kits carry empty order/invoice fields.
- Serial and batch lists change only when units are merged into a sold
  aggregate (sell) or split back out of one (make_available).
- Selection order is ascending kit id, i.e. insertion order.

ALLOCATION:
Selection and the status flip run in one transaction. Candidate rows are
locked where the backend supports it and flipped with a conditional
UPDATE ... WHERE status = 'available'. If fewer rows change than were selected,
another request won the race: the transaction rolls back and is retried.
Nothing is ever left half-allocated.
"""

from __future__ import annotations

from flask import current_app
from sqlalchemy import func, update

from ..extensions import db
from ..models import Kit, KIT_STATUS_AVAILABLE, KIT_STATUS_SOLD
from .concurrency import ConcurrentUpdateError, lock_for_update, run_with_retry


class KitError(Exception):
    """Raised for kit operation errors."""
    pass


class KitNotFoundError(KitError):
    """Raised when a kit id does not exist."""
    pass


class KitStateError(KitError):
    """Raised when an operation is not legal for a kit's current status."""
    pass


class InsufficientInventoryError(KitError):
    """Raised when fewer kits are available than requested."""

    def __init__(self, requested: int, available: int):
        self.requested = requested
        self.available = available
        super().__init__("Not enough available kits")


class AllocationConflictError(KitError):
    """Raised when concurrent allocations kept colliding."""
    pass


DUMMY_KITS = [
    {"serial_numbers": ["SN001"], "batch_numbers": ["B001"]},
    {"serial_numbers": ["SN002"], "batch_numbers": ["B002"]},
    {"serial_numbers": ["SN003"], "batch_numbers": ["B003"]},
    {"serial_numbers": ["SN004"], "batch_numbers": ["B004"]},
]

ALLOCATION_ATTEMPTS = 3


# =============================================================================
# HELPERS
# =============================================================================

def units_for_quantity(quantity: int) -> int:
    """Kit units consumed by an ordered quantity (pairing factor applied)."""
    return quantity * int(current_app.config.get("KIT_UNITS_PER_QUANTITY", 1))


def merge_unique(existing: list, additions: list) -> list:
    merged = list(existing)
    for value in additions:
        if value not in merged:
            merged.append(value)
    return merged


def _available_query():
    return db.session.query(Kit).filter(Kit.status == KIT_STATUS_AVAILABLE).order_by(Kit.id)


def count_available() -> int:
    return db.session.query(func.count(Kit.id)).filter(Kit.status == KIT_STATUS_AVAILABLE).scalar() or 0


def inventory_summary() -> dict:
    rows = db.session.query(Kit.status, func.count(Kit.id)).group_by(Kit.status).all()
    summary = {KIT_STATUS_AVAILABLE: 0, KIT_STATUS_SOLD: 0}
    for status, count in rows:
        summary[status] = count
    return summary


# =============================================================================
# QUERIES
# =============================================================================

def list_kits() -> list[Kit]:
    return db.session.query(Kit).order_by(Kit.id).all()


def kits_for_order(order_id: str) -> list[Kit]:
    return db.session.query(Kit).filter(Kit.order_id == order_id).order_by(Kit.id).all()


def list_available(quantity: int) -> list[Kit]:
    """
    Return the kits a sale of `quantity` would consume, without reserving them.

    Raises:
        InsufficientInventoryError: fewer units available than required
    """
    needed = units_for_quantity(quantity)
    available = count_available()
    if needed > available:
        raise InsufficientInventoryError(requested=needed, available=available)
    kits = _available_query().limit(needed).all()
    if len(kits) < needed:
        raise InsufficientInventoryError(requested=needed, available=len(kits))
    return kits


# =============================================================================
# ALLOCATION
# =============================================================================

def sell_kits(order_id: str, invoice_url: str | None, invoice_id: str | None, quantity: int) -> Kit:
    """
    Allocate kits to an order and merge them into the order's sold aggregate.

    The selected units are flipped to sold, their serials and batches are
    appended to the existing sold record for `order_id` (or the first selected
    unit becomes that record), and the emptied source units are deleted.

    Returns:
        The sold aggregate kit for the order

    Raises:
        KitError: order_id missing
        InsufficientInventoryError: not enough available units
        AllocationConflictError: concurrent allocations kept winning the race
    """
    if not order_id:
        raise KitError("orderId is required")

    needed = units_for_quantity(quantity)
    invoice_url = invoice_url or ""
    invoice_id = invoice_id or ""

    def _allocate() -> Kit:
        available = count_available()
        if needed > available:
            raise InsufficientInventoryError(requested=needed, available=available)

        # Rows locked by a concurrent sale can drop out of the selection once
        # that sale commits; a short selection is a lost race, not a shortage.
        selected = lock_for_update(_available_query().limit(needed)).all()
        if len(selected) < needed:
            raise ConcurrentUpdateError(
                f"Selected {len(selected)} of {needed} kits while {available} were available"
            )

        selected_ids = [kit.id for kit in selected]
        result = db.session.execute(
            update(Kit)
            .where(Kit.id.in_(selected_ids), Kit.status == KIT_STATUS_AVAILABLE)
            .values(
                status=KIT_STATUS_SOLD,
                order_id=order_id,
                invoice_url=invoice_url,
                invoice_id=invoice_id,
            )
        )
        if result.rowcount != len(selected_ids):
            raise ConcurrentUpdateError(
                f"Expected to allocate {len(selected_ids)} kits, updated {result.rowcount}"
            )

        serials = [serial for kit in selected for serial in (kit.serial_numbers or [])]
        batches = merge_unique([], [batch for kit in selected for batch in (kit.batch_numbers or [])])

        aggregate = db.session.query(Kit).filter(
            Kit.order_id == order_id,
            Kit.status == KIT_STATUS_SOLD,
            ~Kit.id.in_(selected_ids),
        ).order_by(Kit.id).first()

        if aggregate is not None:
            aggregate.serial_numbers = list(aggregate.serial_numbers or []) + serials
            aggregate.batch_numbers = merge_unique(aggregate.batch_numbers or [], batches)
            if invoice_url:
                aggregate.invoice_url = invoice_url
            if invoice_id:
                aggregate.invoice_id = invoice_id
            emptied = selected
        else:
            aggregate = selected[0]
            aggregate.serial_numbers = serials
            aggregate.batch_numbers = batches
            emptied = selected[1:]

        for kit in emptied:
            db.session.delete(kit)

        db.session.commit()
        return aggregate

    try:
        aggregate = run_with_retry(_allocate, attempts=ALLOCATION_ATTEMPTS)
    except ConcurrentUpdateError:
        raise AllocationConflictError("Kits were allocated by another request, try again") from None
    except InsufficientInventoryError:
        db.session.rollback()
        raise

    current_app.logger.info(
        "Allocated %d kit unit(s) to order %s (aggregate kit %s)", needed, order_id, aggregate.id
    )
    return aggregate


def make_available(ids: list[int]) -> list[Kit]:
    """
    Return sold aggregates to the available pool.

    Every id must exist and be sold, otherwise nothing changes. Each aggregate's
    serials are split into consecutive groups of KIT_GROUP_SIZE; every group
    becomes a new available unit carrying the aggregate's batch numbers.

    Raises:
        KitStateError: an id is unknown or not sold
    """
    group_size = max(1, int(current_app.config.get("KIT_GROUP_SIZE", 1)))

    kits = lock_for_update(db.session.query(Kit).filter(Kit.id.in_(ids))).all()
    by_id = {kit.id: kit for kit in kits}

    missing = [kit_id for kit_id in ids if kit_id not in by_id]
    not_sold = [kit_id for kit_id in ids if kit_id in by_id and by_id[kit_id].status != KIT_STATUS_SOLD]
    if missing or not_sold:
        db.session.rollback()
        raise KitStateError(
            "All selected kits must exist and be sold"
            + (f"; not found: {missing}" if missing else "")
            + (f"; not sold: {not_sold}" if not_sold else "")
        )

    created: list[Kit] = []
    for kit_id in ids:
        aggregate = by_id[kit_id]
        serials = list(aggregate.serial_numbers or [])
        groups = [serials[start:start + group_size] for start in range(0, len(serials), group_size)]
        # A record without serials still comes back as one unit with its batches.
        for group in groups or [[]]:
            created.append(Kit(
                serial_numbers=group,
                batch_numbers=list(aggregate.batch_numbers or []),
                status=KIT_STATUS_AVAILABLE,
                order_id="",
                invoice_url="",
                invoice_id="",
            ))
        db.session.delete(aggregate)

    db.session.add_all(created)
    db.session.commit()

    current_app.logger.info("Restocked %d sold kit(s) into %d available unit(s)", len(ids), len(created))
    return created


# =============================================================================
# CREATION & DELETION
# =============================================================================

def create_kits(records: list[dict]) -> list[Kit]:
    """
    Insert kit records built by the seed or import paths.

    Each record: serial_numbers, batch_numbers, optional status.
    """
    kits = []
    for record in records:
        status = record.get("status") or KIT_STATUS_AVAILABLE
        if status not in (KIT_STATUS_AVAILABLE, KIT_STATUS_SOLD):
            status = KIT_STATUS_AVAILABLE
        kits.append(Kit(
            serial_numbers=list(record.get("serial_numbers") or []),
            batch_numbers=merge_unique([], record.get("batch_numbers") or []),
            status=status,
            order_id="",
            invoice_url="",
            invoice_id="",
        ))
    db.session.add_all(kits)
    db.session.commit()
    return kits


def seed_dummy_kits() -> list[Kit]:
    return create_kits(DUMMY_KITS)


def delete_kit(kit_id: int) -> None:
    kit = db.session.get(Kit, kit_id)
    if kit is None:
        raise KitNotFoundError("Kit not found")
    if kit.status != KIT_STATUS_AVAILABLE:
        raise KitStateError("Only available kits can be deleted")

    db.session.delete(kit)
    db.session.commit()


def delete_kits(ids: list[int]) -> int:
    """
    Delete a set of available kits. Any unknown or sold id rejects the whole set.
    """
    kits = db.session.query(Kit).filter(Kit.id.in_(ids)).all()
    by_id = {kit.id: kit for kit in kits}

    missing = [kit_id for kit_id in ids if kit_id not in by_id]
    if missing:
        raise KitStateError(f"Kits not found: {missing}")

    sold = [kit.id for kit in kits if kit.status != KIT_STATUS_AVAILABLE]
    if sold:
        raise KitStateError(f"Only available kits can be deleted; sold: {sorted(sold)}")

    for kit in kits:
        db.session.delete(kit)
    db.session.commit()
    return len(kits)
