"""
order_store.py — Order lookup for payment callbacks

ToyyibPay only sends back the order identifier when a payment settles, so the
callback handler needs a collaborator that maps the identifier to the order.
Any object implementing `OrderStore` can be passed to the app factory; the
default keeps orders in process memory and loses them on restart. Orders are
removed once their shipment is booked.
"""

import threading
from typing import Dict, Optional, Protocol

from .models import Order


class OrderStore(Protocol):
    def save_order(self, order: Order) -> None:
        ...

    def lookup_order(self, order_id: str) -> Optional[Order]:
        ...

    def remove_order(self, order_id: str) -> None:
        ...


class InMemoryOrderStore:
    """Process-local order store. Orders without an id are not recorded."""

    def __init__(self):
        self._orders: Dict[str, Order] = {}
        self._lock = threading.Lock()

    def save_order(self, order: Order) -> None:
        if not order.id:
            return
        with self._lock:
            self._orders[order.id] = order

    def lookup_order(self, order_id: str) -> Optional[Order]:
        with self._lock:
            return self._orders.get(order_id)

    def remove_order(self, order_id: str) -> None:
        with self._lock:
            self._orders.pop(order_id, None)
