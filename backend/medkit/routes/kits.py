# Overview: Flask API routes for kit inventory; parses input and returns JSON responses.

# backend/medkit/routes/kits.py
"""
Kit Inventory API Routes

DESIGN:
- Listing and availability checks are read-only
- Sell allocates kits to an order in one transaction
- Make-available splits sold aggregates back into available units
- Only available kits can be deleted
- CSV upload bulk-inserts new available kits
"""

from flask import Blueprint, request, jsonify, current_app

from ..decorators import require_auth
from ..services import kit_service, import_service
from ..services.kit_service import (
    KitError,
    KitNotFoundError,
    InsufficientInventoryError,
    AllocationConflictError,
)
from ..services.import_service import KitImportError
from ..validation import ValidationError, parse_quantity, parse_id_list


kits_bp = Blueprint("kits", __name__, url_prefix="/kits")


def _insufficient(e: InsufficientInventoryError):
    return jsonify({
        "error": str(e),
        "requested": e.requested,
        "available": e.available,
    }), 400


@kits_bp.get("")
def list_kits_route():
    try:
        kits = kit_service.list_kits()
        return jsonify([kit.to_dict() for kit in kits])
    except Exception:
        current_app.logger.exception("Failed to fetch kits")
        return jsonify({"error": "Error fetching kits"}), 500


@kits_bp.get("/available")
def available_kits_route():
    """
    Preview the kits a sale of `quantity` would consume.

    Query: quantity (default 1)

    Returns:
        200: list of available kits
        400: invalid quantity or not enough available kits
    """
    try:
        quantity = parse_quantity(request.args.get("quantity"))
        kits = kit_service.list_available(quantity)
        return jsonify([kit.to_dict() for kit in kits])
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except InsufficientInventoryError as e:
        return _insufficient(e)
    except Exception:
        current_app.logger.exception("Failed to fetch available kits")
        return jsonify({"error": "Error fetching available kits"}), 500


@kits_bp.post("/sell")
@require_auth
def sell_kits_route():
    """
    Allocate kits to an order.

    Request body:
    {
        "orderId": "5012345678",
        "invoiceUrl": "https://...",
        "invoiceId": "INV-0001",
        "quantity": 1  (optional, default: 1)
    }

    Returns:
        200: the order's sold aggregate kit
        400: invalid input or not enough available kits
        409: allocation kept colliding with concurrent requests
    """
    try:
        data = request.get_json(silent=True) or {}

        order_id = data.get("orderId")
        if not order_id:
            return jsonify({"error": "orderId is required"}), 400

        quantity = parse_quantity(data.get("quantity"))

        kit = kit_service.sell_kits(
            order_id=str(order_id),
            invoice_url=data.get("invoiceUrl"),
            invoice_id=data.get("invoiceId"),
            quantity=quantity,
        )
        return jsonify(kit.to_dict()), 200

    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except InsufficientInventoryError as e:
        return _insufficient(e)
    except AllocationConflictError as e:
        return jsonify({"error": str(e)}), 409
    except KitError as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to sell kits")
        return jsonify({"error": "Error updating kits"}), 500


@kits_bp.post("/addDummy")
@require_auth
def add_dummy_kits_route():
    try:
        kits = kit_service.seed_dummy_kits()
        return jsonify({"message": "Dummy kits added successfully", "count": len(kits)})
    except Exception:
        current_app.logger.exception("Failed to insert dummy kits")
        return jsonify({"error": "Error inserting dummy kits"}), 500


@kits_bp.post("/upload")
@require_auth
def upload_kits_route():
    """
    Bulk import kits from a CSV upload (multipart field `file`).

    Returns:
        200: import confirmation with row count
        400: missing or unreadable file
    """
    if "file" not in request.files:
        return jsonify({"error": "file is required"}), 400

    file = request.files["file"]
    if not file.filename:
        return jsonify({"error": "file is required"}), 400

    try:
        kits = import_service.import_upload(file)
        return jsonify({"message": "CSV data uploaded successfully", "count": len(kits)})
    except KitImportError as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to import kits CSV")
        return jsonify({"error": "Error processing CSV file"}), 500


@kits_bp.delete("/<int:kit_id>")
@require_auth
def delete_kit_route(kit_id: int):
    try:
        kit_service.delete_kit(kit_id)
        return jsonify({"message": "Kit deleted successfully"})
    except KitNotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except KitError as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to delete kit %s", kit_id)
        return jsonify({"error": "Error deleting kit"}), 500


@kits_bp.post("/delete-multiple")
@require_auth
def delete_multiple_kits_route():
    """
    Delete a set of available kits.

    Request body: {"ids": [1, 2, 3]}

    Returns:
        200: deletion confirmation
        400: ids missing/invalid, or any id unknown or sold (nothing deleted)
    """
    try:
        data = request.get_json(silent=True) or {}
        ids = parse_id_list(data.get("ids"))
        deleted = kit_service.delete_kits(ids)
        return jsonify({"message": "Selected kits deleted successfully", "count": deleted})
    except (ValidationError, KitError) as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to delete selected kits")
        return jsonify({"error": "Error deleting selected kits"}), 500


@kits_bp.post("/make-available")
@require_auth
def make_available_route():
    """
    Return sold kits to the available pool.

    Request body: {"ids": [7, 8]}

    Returns:
        201: the new available units
        400: ids missing/invalid, or any id unknown or not sold (nothing changed)
    """
    try:
        data = request.get_json(silent=True) or {}
        ids = parse_id_list(data.get("ids"))
        kits = kit_service.make_available(ids)
        return jsonify([kit.to_dict() for kit in kits]), 201
    except (ValidationError, KitError) as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to make kits available")
        return jsonify({"error": "Error making kits available"}), 500
