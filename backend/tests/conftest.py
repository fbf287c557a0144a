"""
Pytest fixtures for the medkit backend tests.

Provides an in-memory application, a per-test table wipe, a test client,
seeded kits and a stub transport for the outbound platforms.
"""

import httpx
import pytest

from medkit import create_app
from medkit.extensions import db
from medkit.models import Kit, User
from medkit.services.auth_service import hash_password


BILLING_URL = "https://billing.test/api/v3"
STOREFRONT_URL = "https://storefront.test/admin/api"
MESSAGING_URL = "https://messaging.test/api"


@pytest.fixture(scope='session')
def app(tmp_path_factory):
    """Create application for testing."""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'SQLALCHEMY_TRACK_MODIFICATIONS': False,
        'JWT_SECRET_KEY': 'test-jwt-secret-with-enough-length-32b',
        'UPLOAD_FOLDER': str(tmp_path_factory.mktemp("uploads")),
        'BILLING_BASE_URL': BILLING_URL,
        'BILLING_API_TOKEN': 'billing-token',
        'BILLING_ORGANIZATION_ID': 'org-1',
        'STOREFRONT_BASE_URL': STOREFRONT_URL,
        'STOREFRONT_ACCESS_TOKEN': 'storefront-token',
        'MESSAGING_BASE_URL': MESSAGING_URL,
        'MESSAGING_API_KEY': 'messaging-key',
    })

    with app.app_context():
        db.create_all()
        yield app
        db.drop_all()


@pytest.fixture(scope='function', autouse=True)
def db_session(app):
    """Clear all data before each test but keep the schema."""
    meta = db.metadata
    for table in reversed(meta.sorted_tables):
        db.session.execute(table.delete())
    db.session.commit()

    yield db.session

    db.session.rollback()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def dummy_kits(db_session):
    """SN001-SN004 / B001-B004, all available."""
    kits = [
        Kit(serial_numbers=[f"SN00{i}"], batch_numbers=[f"B00{i}"], status="available",
            order_id="", invoice_url="", invoice_id="")
        for i in range(1, 5)
    ]
    db_session.add_all(kits)
    db_session.commit()
    return kits


@pytest.fixture(scope='function')
def operator(db_session):
    user = User(username="operator", password_hash=hash_password("Password123!"))
    db_session.add(user)
    db_session.commit()
    return user


class StubPlatforms:
    """
    Records outbound requests and answers them per host.

    responses maps host -> (status_code, json_body) or an httpx exception.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.responses: dict = {}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses.get(request.url.host, (200, {"ok": True}))
        if isinstance(response, Exception):
            raise response
        status_code, body = response
        return httpx.Response(status_code, json=body)

    def hosts(self) -> list[str]:
        return [request.url.host for request in self.requests]


@pytest.fixture(scope='function')
def platforms(app, monkeypatch):
    stub = StubPlatforms()
    monkeypatch.setitem(app.config, "INTEGRATION_TRANSPORT", httpx.MockTransport(stub.handler))
    return stub

