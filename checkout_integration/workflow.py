"""
workflow.py — Payment-to-Shipment Orchestration

This module contains the logic that runs when ToyyibPay reports a settled
payment: resolve the paid order and book its shipment with EasyParcel.

Workflow Overview:
1. Ignore notifications that do not report a successful payment
2. Look the order up by `order_id` (falling back to an order embedded in the notification)
3. Submit the shipment to EasyParcel and forget the order once it is booked

The provider must always receive an acknowledgment, so nothing raised here
reaches the caller.
"""

import logging
from typing import Optional

from pydantic import ValidationError

from .clients import EasyParcelClient
from .logging_config import order_prefix
from .models import Order, PaymentCallback, ShipmentResult
from .order_store import OrderStore

log = logging.getLogger(__name__)

PAYMENT_STATUS_SUCCESS = "1"


def resolve_paid_order(callback: PaymentCallback, store: OrderStore) -> Optional[Order]:
    """
    Finds the order a payment notification refers to.

    Args:
        callback (PaymentCallback): The parsed ToyyibPay notification.
        store (OrderStore): Order lookup collaborator.

    Returns:
        Order or None: The stored order, else a valid order embedded in the
        notification, else None.
    """
    if callback.order_id:
        order = store.lookup_order(callback.order_id)
        if order is not None:
            return order

    if callback.order:
        try:
            return Order.model_validate(callback.order)
        except ValidationError as e:
            log.warning(f"{order_prefix(callback.order_id)} Embedded order in callback is invalid: {e}")
    return None


def process_payment_callback(
        callback: PaymentCallback,
        store: OrderStore,
        easyparcel: EasyParcelClient
) -> Optional[ShipmentResult]:
    """
    Handles a ToyyibPay payment notification.

    Args:
        callback (PaymentCallback): The parsed notification.
        store (OrderStore): Order lookup collaborator.
        easyparcel (EasyParcelClient): Client used to book the shipment.

    Returns:
        ShipmentResult or None: The shipment result when a shipment was
        attempted and completed, otherwise None.
    """
    log_prefix = order_prefix(callback.order_id)
    log.info(f"{log_prefix} ToyyibPay callback received (status={callback.status}, billcode={callback.billcode}).")

    if callback.status != PAYMENT_STATUS_SUCCESS:
        log.info(f"{log_prefix} Payment not successful, no shipment created.")
        return None

    try:
        order = resolve_paid_order(callback, store)
        if order is None:
            log.error(f"{log_prefix} Payment settled but the order could not be found. Shipment must be created manually.")
            return None

        result = easyparcel.create_shipment(order)
        if result.success:
            log.info(f"{log_prefix} EasyParcel shipment created.")
            if callback.order_id:
                store.remove_order(callback.order_id)
        else:
            log.error(f"{log_prefix} EasyParcel shipment creation failed: {result.error}")
        return result

    except Exception as e:
        log.critical(f"{log_prefix} Unexpected error while creating shipment: {e}", exc_info=True)
        return None
