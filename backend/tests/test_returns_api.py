"""
Return ticket state machine tests.
"""

import pytest

from medkit.extensions import db
from medkit.models import ReturnTicket


def _create(client, ticket_type="Refund"):
    resp = client.post("/returnservice", json={
        "orderId": "5012345678",
        "customerName": "Asha Verma",
        "customerEmail": "asha@example.com",
        "customerPhone": "+919876543210",
        "ticketType": ticket_type,
        "reason": "Seal broken",
    })
    assert resp.status_code == 201
    return resp.get_json()


def _act(client, ticket_id, action):
    return client.put(f"/returnservice/{ticket_id}/action", json={"action": action})


class TestCreateTicket:

    def test_create_starts_awaiting_return(self, client):
        ticket = _create(client)
        assert ticket["status"] == "AwaitingReturn"
        assert ticket["ticketType"] == "Refund"

    @pytest.mark.parametrize("body", [
        {"customerName": "x", "ticketType": "Refund"},
        {"orderId": "1", "ticketType": "Refund"},
        {"orderId": "1", "customerName": "x"},
        {"orderId": "1", "customerName": "x", "ticketType": "Exchange"},
    ])
    def test_create_validates(self, client, body):
        resp = client.post("/returnservice", json=body)
        assert resp.status_code == 400
        assert db.session.query(ReturnTicket).count() == 0

    def test_list_and_get(self, client):
        first = _create(client)
        second = _create(client, "Replacement")

        listing = client.get("/returnservice").get_json()
        assert {t["id"] for t in listing} == {first["id"], second["id"]}

        resp = client.get(f"/returnservice/{second['id']}")
        assert resp.status_code == 200
        assert resp.get_json()["ticketType"] == "Replacement"

    def test_get_unknown(self, client):
        assert client.get("/returnservice/5555").status_code == 404


class TestTransitions:

    def test_refund_ticket_full_lifecycle(self, client):
        ticket = _create(client, "Refund")

        received = _act(client, ticket["id"], "receive")
        assert received.status_code == 200
        assert received.get_json()["status"] == "ReturnReceived"

        refunded = _act(client, ticket["id"], "refund")
        assert refunded.status_code == 200
        assert refunded.get_json()["status"] == "RefundInitiated"

    def test_status_names_accepted_as_actions(self, client):
        ticket = _create(client, "Refund")
        assert _act(client, ticket["id"], "ReturnReceived").status_code == 200
        assert _act(client, ticket["id"], "RefundInitiated").status_code == 200

    def test_refund_cannot_skip_receipt(self, client):
        ticket = _create(client, "Refund")

        resp = _act(client, ticket["id"], "refund")

        assert resp.status_code == 400
        assert db.session.get(ReturnTicket, ticket["id"]).status == "AwaitingReturn"

    def test_replacement_stops_at_return_received(self, client):
        ticket = _create(client, "Replacement")
        assert _act(client, ticket["id"], "receive").status_code == 200

        resp = _act(client, ticket["id"], "refund")

        assert resp.status_code == 400
        assert db.session.get(ReturnTicket, ticket["id"]).status == "ReturnReceived"

    def test_receive_twice_rejected(self, client):
        ticket = _create(client)
        _act(client, ticket["id"], "receive")
        assert _act(client, ticket["id"], "receive").status_code == 400

    def test_terminal_refund_rejects_everything(self, client):
        ticket = _create(client)
        _act(client, ticket["id"], "receive")
        _act(client, ticket["id"], "refund")

        for action in ("receive", "refund"):
            assert _act(client, ticket["id"], action).status_code == 400
        assert db.session.get(ReturnTicket, ticket["id"]).status == "RefundInitiated"

    @pytest.mark.parametrize("action", [None, "", "close", "AwaitingReturn"])
    def test_unknown_action(self, client, action):
        ticket = _create(client)
        assert _act(client, ticket["id"], action).status_code == 400

    def test_action_on_unknown_ticket(self, client):
        assert _act(client, 7777, "receive").status_code == 404
