# Overview: Flask API routes for COD orders; parses input and returns JSON responses.

"""
COD Order API Routes

- Create orders (always AwaitingConfirmation)
- Confirm: local commit, then billing + customer notifications
- Cancel: storefront first, local status only after the storefront accepts
"""

from flask import Blueprint, request, jsonify, current_app

from ..decorators import require_auth
from ..services import cod_service
from ..services.cod_service import (
    CodOrderNotFoundError,
    CodOrderStateError,
    StorefrontCancellationError,
)
from ..validation import ValidationError


cod_bp = Blueprint("cod", __name__, url_prefix="/cod")


def _transition_response(result):
    return jsonify({
        "order": result.order.to_dict(),
        "notifications": [n.to_dict() for n in result.notifications],
    }), 200


@cod_bp.post("")
@require_auth
def create_order_route():
    """
    Create a COD order.

    Request body:
    {
        "orderId": "5012345678",
        "orderNo": "#1042",
        "customerName": "...", "customerEmail": "...", "customerPhone": "...",
        "invoiceId": "...", "invoiceUrl": "...",  (optional)
        "amount": 1499.00
    }

    Returns:
        201: {"order": ..., "kits": [...kits already allocated to orderId]}
        400: invalid input
    """
    try:
        data = request.get_json(silent=True) or {}
        order, kits = cod_service.create_order(data)
        return jsonify({
            "order": order.to_dict(),
            "kits": [kit.to_dict() for kit in kits],
        }), 201
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to create COD order")
        return jsonify({"error": "Error creating order"}), 500


@cod_bp.get("")
def list_orders_route():
    try:
        orders = cod_service.list_orders()
        return jsonify([order.to_dict() for order in orders])
    except Exception:
        current_app.logger.exception("Failed to fetch COD orders")
        return jsonify({"error": "Error fetching orders"}), 500


@cod_bp.get("/<int:cod_id>")
def get_order_route(cod_id: int):
    try:
        order = cod_service.get_order(cod_id)
        return jsonify(order.to_dict())
    except CodOrderNotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except Exception:
        current_app.logger.exception("Failed to fetch COD order %s", cod_id)
        return jsonify({"error": "Error fetching order"}), 500


@cod_bp.put("/confirm/<int:cod_id>")
@require_auth
def confirm_order_route(cod_id: int):
    """
    Returns:
        200: confirmed order plus per-channel notification results
        400: order is not awaiting confirmation
        404: unknown order
    """
    try:
        return _transition_response(cod_service.confirm_order(cod_id))
    except CodOrderNotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except CodOrderStateError as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to confirm COD order %s", cod_id)
        return jsonify({"error": "Error confirming order"}), 500


@cod_bp.put("/cancel/<int:cod_id>")
@require_auth
def cancel_order_route(cod_id: int):
    """
    Returns:
        200: cancelled order
        400: order is not awaiting confirmation
        404: unknown order
        502: storefront refused the cancellation (order unchanged)
    """
    try:
        return _transition_response(cod_service.cancel_order(cod_id))
    except CodOrderNotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except CodOrderStateError as e:
        return jsonify({"error": str(e)}), 400
    except StorefrontCancellationError as e:
        return jsonify({"error": str(e), "upstream_status": e.status_code}), 502
    except Exception:
        current_app.logger.exception("Failed to cancel COD order %s", cod_id)
        return jsonify({"error": "Error cancelling order"}), 500
