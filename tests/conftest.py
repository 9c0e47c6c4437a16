"""Pytest fixtures: settings, sample orders and simulator-backed provider clients."""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from checkout_integration.clients import EasyParcelClient, ToyyibPayClient
from checkout_integration.config import Settings
from checkout_integration.main import create_app
from checkout_integration.models import Order
from checkout_integration.order_store import InMemoryOrderStore
from mock_services import mock_easyparcel, mock_toyyibpay


@pytest.fixture
def settings():
    return Settings(
        toyyibpay_secret_key="sk_live_secret",
        toyyibpay_category_code="cat123",
        toyyibpay_return_url="https://shop.example.my/payment/return",
        toyyibpay_callback_url="https://shop.example.my/api/toyyib/callback",
        easyparcel_api_key="ep_live_key",
        sender_name="Proride Parts",
        sender_phone="0312345678",
        sender_address="12 Jalan Industri, Kajang",
    )


@pytest.fixture
def order_payload():
    return {
        "id": "ORD-1001",
        "customer": {
            "name": "Aiman Rahman",
            "email": "aiman@example.my",
            "phone": "0198765432",
            "address": "5 Jalan Bukit, Ipoh",
            "postcode": "30000",
        },
        "items": [
            {"model": "Myvi", "type": "Absorber", "position": "FRONT", "quantity": 2},
            {"model": "Myvi", "type": "Sport Spring", "position": "ALL", "quantity": 1},
        ],
        "total": "149.99",
    }


@pytest.fixture
def order(order_payload):
    return Order.model_validate(order_payload)


@pytest.fixture(autouse=True)
def reset_simulators():
    mock_toyyibpay.received_bills.clear()
    mock_easyparcel.received_requests.clear()
    yield


@pytest.fixture
def toyyibpay(settings):
    return ToyyibPayClient(settings, http_client=TestClient(mock_toyyibpay.app))


@pytest.fixture
def easyparcel(settings):
    return EasyParcelClient(settings, http_client=TestClient(mock_easyparcel.app))


@pytest.fixture
def order_store():
    return InMemoryOrderStore()


@pytest.fixture
def client(settings, order_store, toyyibpay, easyparcel):
    app = create_app(settings, order_store=order_store, toyyibpay=toyyibpay, easyparcel=easyparcel)
    return TestClient(app)


@pytest.fixture
def make_order():
    def _make(total="10.00", **overrides):
        payload = {
            "customer": {
                "name": "Test Buyer",
                "email": "buyer@example.my",
                "phone": "0100000000",
                "address": "1 Jalan Test",
                "postcode": "50000",
            },
            "items": [{"position": "REAR", "quantity": 1}],
            "total": Decimal(total),
        }
        payload.update(overrides)
        return Order.model_validate(payload)
    return _make
