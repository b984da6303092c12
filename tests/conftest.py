import pytest
from typing import Any, Dict, Generator, List, Optional
from fastapi.testclient import TestClient

from checkout_api.app_setup.factory import create_app
from checkout_api.config import Settings
from checkout_api.errors import PersistenceError
from checkout_api.orders.models import OrderRecord

# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "tests/unit/" in nodeid:
            item.add_marker(pytest.mark.unit)
        elif "tests/integration/" in nodeid:
            item.add_marker(pytest.mark.integration)

class FakeSessionProvider:
    """Double de SessionProvider: enregistre les appels, renvoie une session configurable."""

    def __init__(self, session: Optional[Dict[str, Any]] = None, error: Optional[Exception] = None):
        self.session = session if session is not None else {
            "id": "cs_test_123",
            "payment_status": "paid",
            "metadata": {"product_title": "Shein account", "quantity": "2", "total_php": "50", "user_id": "u1", "credits_used": "0"},
        }
        self.error = error
        self.created: List[Dict[str, Any]] = []
        self.retrieved: List[str] = []

    def create(self, **params: Any) -> Dict[str, Any]:
        self.created.append(params)
        if self.error:
            raise self.error
        return {"id": "cs_test_123", "url": "https://checkout.stripe.com/c/pay/cs_test_123"}

    def retrieve(self, session_id: str) -> Dict[str, Any]:
        self.retrieved.append(session_id)
        if self.error:
            raise self.error
        return dict(self.session, id=session_id)

class FakeOrderStore:
    """Double de RecordStore: garde les commandes en mémoire, peut simuler un échec d'insert."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.orders: List[OrderRecord] = []

    def insert_order(self, record: OrderRecord) -> None:
        if self.fail:
            raise PersistenceError()
        self.orders.append(record)

@pytest.fixture
def settings() -> Settings:
    return Settings(
        stripe_secret_key="sk_test_123",
        supabase_url="https://project.supabase.co",
        supabase_service_key="service-role-key",
    )

@pytest.fixture
def provider() -> FakeSessionProvider:
    return FakeSessionProvider()

@pytest.fixture
def store() -> FakeOrderStore:
    return FakeOrderStore()

@pytest.fixture
def app(settings, provider, store):
    return create_app(settings, provider=provider, store=store)

@pytest.fixture()
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c

@pytest.fixture
def charge_body() -> Dict[str, Any]:
    return {
        "product_title": "Shein account",
        "quantity": 3,
        "total_php": 100,
        "user_id": "user-123",
        "credits_used": 5,
        "success_url": "https://shop.example.com/success?session_id={CHECKOUT_SESSION_ID}",
        "cancel_url": "https://shop.example.com/cancel",
    }
