"""
payloads.py — Provider request builders and response parsers

Translates a validated `Order` into the request formats expected by
ToyyibPay (bill creation) and EasyParcel (rate check, order submission),
and normalizes the ToyyibPay bill response.

The functions here are pure: they never perform I/O. The HTTP calls live in
`clients.py`.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict

from .config import AMOUNT_UNIT_RINGGIT, Settings
from .models import BillResult, Order
from .weight import estimate_weight

BILL_NAME = "Proride Parts Order"
BILL_DESCRIPTION = "Order payment"
# 1 = fixed amount set by the merchant
BILL_PRICE_SETTING = "1"
SHIPMENT_CONTENT = "Car parts"


def format_bill_amount(total: Decimal, unit: str) -> str:
    """
    Encodes the order total for the `billAmount` field.

    Args:
        total (Decimal): Order total in ringgit.
        unit (str): 'sen' for integer minor units, 'ringgit' for a
            two-decimal major-unit amount.

    Returns:
        str: The encoded amount, e.g. '14999' (sen) or '149.99' (ringgit).
    """
    if unit == AMOUNT_UNIT_RINGGIT:
        return str(total.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))
    return str(int((total * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)))


def build_bill_request(order: Order, settings: Settings) -> Dict[str, str]:
    """
    Builds the ToyyibPay `createBill` form fields for an order.

    Args:
        order (Order): The validated checkout order.
        settings (Settings): Service configuration holding the ToyyibPay
            credentials and redirect URLs.

    Returns:
        Dict[str, str]: Form fields ready to be posted.
    """
    form = {
        "userSecretKey": settings.toyyibpay_secret_key,
        "categoryCode": settings.toyyibpay_category_code,
        "billName": BILL_NAME,
        "billDescription": BILL_DESCRIPTION,
        "billPriceSetting": BILL_PRICE_SETTING,
        "billAmount": format_bill_amount(order.total, settings.toyyibpay_amount_unit),
        "billReturnUrl": settings.toyyibpay_return_url,
        "billCallbackUrl": settings.toyyibpay_callback_url,
        "billTo": order.customer.name,
        "billEmail": order.customer.email,
        "billPhone": order.customer.phone,
    }
    if order.id:
        form["billExternalReferenceNo"] = order.id
    return form


def parse_bill_response(raw: Any, base_url: str) -> BillResult:
    """
    Normalizes the ToyyibPay `createBill` response.

    A successful response is a non-empty list whose first entry carries a
    non-empty `BillCode`. Anything else is reported as a failure with the raw
    payload attached for diagnostics.

    Args:
        raw (Any): Decoded JSON body returned by ToyyibPay.
        base_url (str): ToyyibPay site URL the payment page lives under.

    Returns:
        BillResult: Success with payment URL and bill code, or failure.
    """
    if isinstance(raw, list) and raw and isinstance(raw[0], dict):
        bill_code = raw[0].get("BillCode")
        if isinstance(bill_code, str) and bill_code:
            return BillResult(
                success=True,
                paymentUrl=f"{base_url.rstrip('/')}/{bill_code}",
                billcode=bill_code,
            )
    return BillResult(success=False, error=raw)


def build_rate_check_request(order: Order, settings: Settings) -> Dict[str, Any]:
    """Builds the EasyParcel `EPOrderPriceChecking` payload."""
    return {
        "api_key": settings.easyparcel_api_key,
        "bulk": [{
            "pick_code": settings.sender_postcode,
            "send_code": order.customer.postcode,
            "weight": estimate_weight(order.items),
        }],
    }


def build_shipment_request(order: Order, settings: Settings) -> Dict[str, Any]:
    """
    Builds the EasyParcel `EPSubmitOrder` payload.

    Pickup identity comes from the configured sender, the destination from
    the order's customer. The declared value is the order total.
    """
    customer = order.customer
    return {
        "api_key": settings.easyparcel_api_key,
        "bulk": [{
            "pick_name": settings.sender_name,
            "pick_contact": settings.sender_phone,
            "pick_addr1": settings.sender_address,
            "pick_postcode": settings.sender_postcode,
            "send_name": customer.name,
            "send_contact": customer.phone,
            "send_addr1": customer.address,
            "send_postcode": customer.postcode,
            "weight": estimate_weight(order.items),
            "content": SHIPMENT_CONTENT,
            "value": float(order.total),
        }],
    }
