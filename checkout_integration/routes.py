"""
routes.py — HTTP endpoints for the storefront and provider callbacks

Endpoints:
    POST /api/toyyib/create-bill         — create a ToyyibPay bill for an order
    POST /api/toyyib/callback            — ToyyibPay payment notification
    POST /api/easyparcel/check-rate      — EasyParcel rate lookup
    POST /api/easyparcel/create-shipment — EasyParcel shipment submission
    POST /api/easyparcel/callback        — EasyParcel status notification

The provider clients and the order store are created by the app factory and
read from `app.state`.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from .clients import EasyParcelClient, ToyyibPayClient
from .logging_config import order_prefix
from .models import (
    BillResult,
    CheckRateRequest,
    CreateShipmentRequest,
    Order,
    PaymentCallback,
    ShipmentResult,
)
from .order_store import OrderStore
from .workflow import process_payment_callback

log = logging.getLogger(__name__)

toyyib_router = APIRouter(prefix="/api/toyyib", tags=["toyyibpay"])
easyparcel_router = APIRouter(prefix="/api/easyparcel", tags=["easyparcel"])

ACKNOWLEDGED = {"success": True}


def get_toyyibpay(request: Request) -> ToyyibPayClient:
    return request.app.state.toyyibpay


def get_easyparcel(request: Request) -> EasyParcelClient:
    return request.app.state.easyparcel


def get_order_store(request: Request) -> OrderStore:
    return request.app.state.order_store


def _respond(result):
    """Serializes a provider result; unreachable providers map to 502."""
    status_code = 502 if result.transport_error else 200
    return JSONResponse(status_code=status_code, content=result.model_dump(mode="json", exclude_none=True))


async def _read_notification(request: Request) -> Dict[str, Any]:
    """
    Reads a provider notification body, which may be form-encoded or JSON.
    Unreadable bodies yield an empty dict so the notification is still acknowledged.
    """
    content_type = request.headers.get("content-type", "")
    try:
        if content_type.startswith("application/json"):
            body = await request.json()
            return body if isinstance(body, dict) else {}
        form = await request.form()
        return dict(form)
    except Exception as e:
        log.warning(f"Unreadable notification body on {request.url.path}: {e}")
        return {}


@toyyib_router.post("/create-bill", response_model=BillResult, response_model_exclude_none=True)
def create_bill(
        order: Order,
        toyyibpay: ToyyibPayClient = Depends(get_toyyibpay),
        store: OrderStore = Depends(get_order_store)
):
    """
    Creates a ToyyibPay bill and returns the payment page URL.

    Orders carrying an `id` whose bill was created are recorded so the
    payment callback can book their shipment later.
    """
    log.info(f"{order_prefix(order.id)} create-bill requested ({len(order.items)} items, total={order.total}).")
    result = toyyibpay.create_bill(order)
    if result.success:
        store.save_order(order)
    return _respond(result)


@toyyib_router.post("/callback")
async def toyyib_callback(
        request: Request,
        store: OrderStore = Depends(get_order_store),
        easyparcel: EasyParcelClient = Depends(get_easyparcel)
):
    """
    Receives the ToyyibPay payment notification.

    On a successful payment the order's shipment is booked before replying.
    The reply is always `{"success": true}` so the gateway does not redeliver.
    """
    body = await _read_notification(request)
    if not isinstance(body.get("order"), dict):
        body.pop("order", None)
    try:
        callback = PaymentCallback.model_validate(body)
    except ValidationError as e:
        log.warning(f"ToyyibPay callback with unexpected fields ignored: {e}")
        return ACKNOWLEDGED

    await run_in_threadpool(process_payment_callback, callback, store, easyparcel)
    return ACKNOWLEDGED


@easyparcel_router.post("/check-rate", response_model=ShipmentResult, response_model_exclude_none=True)
def check_rate(
        body: CheckRateRequest,
        easyparcel: EasyParcelClient = Depends(get_easyparcel)
):
    """Returns EasyParcel's rate quotes for the order's destination and weight."""
    return _respond(easyparcel.check_rate(body.order))


@easyparcel_router.post("/create-shipment", response_model=ShipmentResult, response_model_exclude_none=True)
def create_shipment(
        body: CreateShipmentRequest,
        easyparcel: EasyParcelClient = Depends(get_easyparcel)
):
    """Books an EasyParcel shipment for the order."""
    if body.payment:
        log.info(f"{order_prefix(body.order.id)} create-shipment requested with payment reference {body.payment}.")
    return _respond(easyparcel.create_shipment(body.order))


@easyparcel_router.post("/callback")
async def easyparcel_callback(request: Request):
    """Logs the EasyParcel notification and acknowledges it."""
    body = await _read_notification(request)
    log.info(f"EasyParcel callback received: {body}")
    return ACKNOWLEDGED
