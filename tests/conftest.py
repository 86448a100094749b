import os

# Pas de Redis en tests: le lifespan désactive fastapi-limiter
os.environ.setdefault("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS", "1")

import pytest
from typing import Any, Dict, Generator, List, Optional
from fastapi.testclient import TestClient

from checkout.app_setup.factory import create_app
from checkout.payments.models import Coupon

# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "/tests/unit/" in nodeid:
            item.add_marker(pytest.mark.unit)
        elif "/tests/integration/" in nodeid:
            item.add_marker(pytest.mark.integration)


class FakeGateway:
    """Double du gateway Stripe: enregistre les appels, peut simuler des erreurs."""

    def __init__(self, coupons: Optional[List[Coupon]] = None):
        self.coupons = coupons or []
        self.coupons_error: Optional[Exception] = None
        self.intent_error: Optional[Exception] = None
        self.list_calls = 0
        self.created: List[Dict[str, Any]] = []

    def list_coupons(self) -> List[Coupon]:
        self.list_calls += 1
        if self.coupons_error:
            raise self.coupons_error
        return list(self.coupons)

    def create_payment_intent(self, params: Dict[str, Any]) -> Dict[str, Any]:
        self.created.append(params)
        if self.intent_error:
            raise self.intent_error
        return {"id": "pi_test_123", "client_secret": "pi_test_123_secret_abc"}


@pytest.fixture()
def gateway() -> FakeGateway:
    return FakeGateway(coupons=[
        Coupon(id="SUMMER10", name="Summer Sale", percent_off=10),
        Coupon(id="five-off", name="FIVEOFF", amount_off=500),
    ])

@pytest.fixture()
def app(gateway):
    return create_app(gateway=gateway)

@pytest.fixture()
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c

@pytest.fixture()
def unconfigured_client(monkeypatch) -> Generator[TestClient, None, None]:
    """Client sur une app construite sans STRIPE_SECRET_KEY."""
    monkeypatch.delenv("STRIPE_SECRET_KEY", raising=False)
    with TestClient(create_app()) as c:
        yield c
