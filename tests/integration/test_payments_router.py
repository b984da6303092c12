import pytest
from fastapi.testclient import TestClient

from checkout_api.app_setup.factory import create_app
from checkout_api.config import Settings
from checkout_api.errors import ProviderError

CHECKOUT_PATH = "/functions/v1/create-stripe-checkout"
CONFIRM_PATH = "/functions/v1/confirm-stripe-order"
CORS_ORIGIN = "Access-Control-Allow-Origin"

def _assert_cors(response):
    assert response.headers[CORS_ORIGIN] == "*"
    assert response.headers["Access-Control-Allow-Headers"] == "authorization, x-client-info, apikey, content-type"

# --- create-stripe-checkout ---

def test_create_checkout_returns_url(client: TestClient, provider, charge_body):
    response = client.post(CHECKOUT_PATH, json=charge_body)
    assert response.status_code == 200
    assert response.json() == {"url": "https://checkout.stripe.com/c/pay/cs_test_123"}
    _assert_cors(response)
    assert provider.created[0]["metadata"]["total_php"] == "99"

def test_create_checkout_missing_fields(client: TestClient, provider):
    response = client.post(CHECKOUT_PATH, json={"product_title": "A", "quantity": 1})
    assert response.status_code == 400
    assert response.json() == {
        "message": "Missing required fields: product_title, quantity, total_php, success_url, cancel_url"
    }
    _assert_cors(response)
    assert provider.created == []

def test_create_checkout_non_positive_total(client: TestClient, charge_body):
    charge_body["total_php"] = -5
    response = client.post(CHECKOUT_PATH, json=charge_body)
    assert response.status_code == 400
    assert response.json() == {"message": "total_php must be positive"}

def test_create_checkout_malformed_total(client: TestClient, charge_body):
    charge_body["total_php"] = "beaucoup"
    response = client.post(CHECKOUT_PATH, json=charge_body)
    assert response.status_code == 400
    assert "message" in response.json()

def test_create_checkout_huge_total_is_rejected(client: TestClient, provider, charge_body):
    charge_body["total_php"] = "1e1000000"
    response = client.post(CHECKOUT_PATH, json=charge_body)
    assert response.status_code == 400
    assert response.json() == {"message": "total_php is too large"}
    assert provider.created == []

def test_create_checkout_non_numeric_credits(client: TestClient, provider, charge_body):
    charge_body["credits_used"] = {"amount": 5}
    response = client.post(CHECKOUT_PATH, json=charge_body)
    assert response.status_code == 400
    assert response.json() == {"message": "credits_used must be a number"}
    assert provider.created == []

def test_create_checkout_invalid_json(client: TestClient):
    response = client.post(CHECKOUT_PATH, content=b"{not json", headers={"content-type": "application/json"})
    assert response.status_code == 400
    assert response.json() == {"message": "Request body must be a JSON object"}

def test_create_checkout_provider_failure(client: TestClient, provider, charge_body):
    provider.error = ProviderError("Failed to create checkout session")
    response = client.post(CHECKOUT_PATH, json=charge_body)
    assert response.status_code == 500
    assert response.json() == {"message": "Failed to create checkout session"}
    _assert_cors(response)

def test_create_checkout_unexpected_failure_is_json(client: TestClient, provider, charge_body):
    provider.error = RuntimeError("boom")
    response = client.post(CHECKOUT_PATH, json=charge_body)
    assert response.status_code == 500
    assert response.json() == {"message": "Failed to create checkout session"}

def test_create_checkout_not_configured(provider, store, charge_body):
    app = create_app(Settings(), provider=provider, store=store)
    with TestClient(app) as c:
        response = c.post(CHECKOUT_PATH, json=charge_body)
    assert response.status_code == 500
    assert response.json() == {"message": "Stripe is not configured"}
    assert provider.created == []

# --- confirm-stripe-order ---

def test_confirm_records_order(client: TestClient, provider, store):
    provider.session = {"payment_status": "paid", "metadata": {"quantity": "2", "total_php": "50", "user_id": "u1"}}
    response = client.post(CONFIRM_PATH, json={"session_id": "cs_test_ok"})
    assert response.status_code == 200
    body = response.json()
    assert body["order_id"].startswith("STKZ-")
    _assert_cors(response)
    assert len(store.orders) == 1
    row = store.orders[0].to_row()
    assert row["id"] == body["order_id"]
    assert row["quantity"] == 2
    assert row["total"] == 50
    assert row["status"] == "Processing"
    assert row["accounts_data"] == []
    assert row["ref_number"] == "STRIPE-cs_test_ok"

def test_confirm_unpaid(client: TestClient, provider, store):
    provider.session = {"payment_status": "unpaid", "metadata": {}}
    response = client.post(CONFIRM_PATH, json={"session_id": "cs_test_unpaid"})
    assert response.status_code == 400
    assert response.json() == {"message": "Payment not completed"}
    assert store.orders == []

def test_confirm_missing_session_id(client: TestClient, provider):
    response = client.post(CONFIRM_PATH, json={})
    assert response.status_code == 400
    assert response.json() == {"message": "Missing session_id"}
    assert provider.retrieved == []

def test_confirm_store_failure_returns_no_order_id(client: TestClient, store):
    store.fail = True
    response = client.post(CONFIRM_PATH, json={"session_id": "cs_test_1"})
    assert response.status_code == 500
    assert response.json() == {"message": "Failed to create order"}
    assert "order_id" not in response.json()

def test_confirm_not_configured(provider, store):
    app = create_app(Settings(stripe_secret_key="sk_test"), provider=provider, store=store)
    with TestClient(app) as c:
        response = c.post(CONFIRM_PATH, json={"session_id": "cs_1"})
    assert response.status_code == 500
    assert response.json() == {"message": "Server configuration error"}
    assert provider.retrieved == []

# --- CORS / health ---

@pytest.mark.parametrize("path", [CHECKOUT_PATH, CONFIRM_PATH, "/anything"])
def test_preflight(client: TestClient, path):
    response = client.options(path)
    assert response.status_code == 200
    assert response.text == "ok"
    _assert_cors(response)

def test_unknown_route_is_json(client: TestClient):
    response = client.get("/nope")
    assert response.status_code == 404
    assert "message" in response.json()

def test_health(client: TestClient):
    assert client.get("/health").json() == {"ok": True}
    assert client.get("/health/config").json() == {
        "create_stripe_checkout": True,
        "confirm_stripe_order": True,
    }

def test_health_config_without_secrets(provider, store):
    app = create_app(Settings(stripe_secret_key="sk_test"), provider=provider, store=store)
    with TestClient(app) as c:
        assert c.get("/health/config").json() == {
            "create_stripe_checkout": True,
            "confirm_stripe_order": False,
        }
