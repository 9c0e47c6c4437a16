from fastapi.testclient import TestClient

from checkout_integration.logging_config import order_prefix
from checkout_integration.main import create_app


class FakeClient:
    def __init__(self):
        self.closed = False

    def close(self):
        self.closed = True


def test_shutdown_leaves_injected_clients_open(settings):
    toyyibpay, easyparcel = FakeClient(), FakeClient()
    app = create_app(settings, toyyibpay=toyyibpay, easyparcel=easyparcel)

    with TestClient(app) as client:
        assert client.get("/health").status_code == 200

    assert toyyibpay.closed is False
    assert easyparcel.closed is False


def test_shutdown_closes_clients_built_by_the_app(settings):
    toyyibpay = FakeClient()
    app = create_app(settings, toyyibpay=toyyibpay)

    with TestClient(app):
        pass

    assert app.state.easyparcel.client.is_closed is True
    assert toyyibpay.closed is False


def test_order_prefix():
    assert order_prefix("ORD-1") == "[Order: ORD-1]"
    assert order_prefix(None) == "[Order: n/a]"
    assert order_prefix("") == "[Order: n/a]"
