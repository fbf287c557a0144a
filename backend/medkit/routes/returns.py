# Overview: Flask API routes for return tickets; parses input and returns JSON responses.

from flask import Blueprint, request, jsonify, current_app

from ..decorators import require_auth
from ..services import return_service
from ..services.return_service import ReturnTicketNotFoundError, InvalidTransitionError
from ..validation import ValidationError


returns_bp = Blueprint("returns", __name__, url_prefix="/returnservice")


@returns_bp.post("")
@require_auth
def create_ticket_route():
    """
    Create a return ticket (status: AwaitingReturn).

    Request body:
    {
        "orderId": "5012345678",
        "customerName": "...",
        "customerEmail": "...", "customerPhone": "...",  (optional)
        "ticketType": "Refund" | "Replacement",
        "reason": "..."  (optional)
    }
    """
    try:
        data = request.get_json(silent=True) or {}
        ticket = return_service.create_ticket(data)
        return jsonify(ticket.to_dict()), 201
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to create return ticket")
        return jsonify({"error": "Error creating return ticket"}), 500


@returns_bp.get("")
def list_tickets_route():
    try:
        tickets = return_service.list_tickets()
        return jsonify([ticket.to_dict() for ticket in tickets])
    except Exception:
        current_app.logger.exception("Failed to fetch return tickets")
        return jsonify({"error": "Error fetching return tickets"}), 500


@returns_bp.get("/<int:ticket_id>")
def get_ticket_route(ticket_id: int):
    try:
        ticket = return_service.get_ticket(ticket_id)
        return jsonify(ticket.to_dict())
    except ReturnTicketNotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except Exception:
        current_app.logger.exception("Failed to fetch return ticket %s", ticket_id)
        return jsonify({"error": "Error fetching return ticket"}), 500


@returns_bp.put("/<int:ticket_id>/action")
@require_auth
def ticket_action_route(ticket_id: int):
    """
    Request body: {"action": "receive" | "refund"}

    Returns:
        200: updated ticket
        400: transition not legal for the ticket's status or type
        404: unknown ticket
    """
    try:
        data = request.get_json(silent=True) or {}
        ticket = return_service.apply_action(ticket_id, data.get("action"))
        return jsonify(ticket.to_dict())
    except ReturnTicketNotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except InvalidTransitionError as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Failed to update return ticket %s", ticket_id)
        return jsonify({"error": "Error updating return ticket"}), 500
