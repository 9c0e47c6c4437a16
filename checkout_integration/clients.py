"""
This module provides communication clients for the external providers used by the checkout integration service:
- ToyyibPay (payment gateway, form-encoded REST API)
- EasyParcel (parcel provider, JSON REST API)
Each class encapsulates its protocol details and converts every provider or transport failure into a result object.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from .config import Settings
from .logging_config import order_prefix
from .models import BillResult, Order, ShipmentResult
from .payloads import (
    build_bill_request,
    build_rate_check_request,
    build_shipment_request,
    parse_bill_response,
)

log = logging.getLogger(__name__)

CREATE_BILL_PATH = "/index.php/api/createBill"
EASYPARCEL_RATE_ACTION = "EPOrderPriceChecking"
EASYPARCEL_SUBMIT_ACTION = "EPSubmitOrder"


# --- ToyyibPay Client (REST, form-encoded) ---
class ToyyibPayClient:
    """
    Client for the ToyyibPay payment gateway.
    Handles bill creation and normalizes the gateway response.
    """
    def __init__(self, settings: Settings, http_client: Optional[httpx.Client] = None):
        """
        Initializes the HTTP client with the configured timeout.

        Args:
            settings (Settings): Service configuration.
            http_client (httpx.Client, optional): Pre-built client, e.g. one
                bound to a simulator. Defaults to a client for the configured
                ToyyibPay base URL.
        """
        self.settings = settings
        self.client = http_client or httpx.Client(
            base_url=settings.toyyibpay_base_url,
            timeout=httpx.Timeout(settings.request_timeout_seconds),
        )

    def close(self):
        """Closes the HTTP client session."""
        self.client.close()

    def create_bill(self, order: Order) -> BillResult:
        """
        Creates a bill for the order via the ToyyibPay API.

        Args:
            order (Order): The validated checkout order.

        Returns:
            BillResult: Payment URL and bill code on success. On a provider
            error shape the raw payload is returned as `error`; on transport
            or decode failures the exception message is returned.
        """
        log_prefix = order_prefix(order.id)
        form = build_bill_request(order, self.settings)
        log.info(f"{log_prefix} Creating ToyyibPay bill (billAmount={form['billAmount']}).")

        try:
            response = self.client.post(CREATE_BILL_PATH, data=form)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            log.error(f"{log_prefix} ToyyibPay request failed: {e}")
            return BillResult(success=False, error=str(e) or type(e).__name__, transport_error=True)
        except ValueError as e:
            log.error(f"{log_prefix} ToyyibPay returned a non-JSON response: {e}")
            return BillResult(success=False, error=f"Invalid JSON from ToyyibPay: {e}", transport_error=True)

        result = parse_bill_response(data, self.settings.toyyibpay_base_url)
        if result.success:
            log.info(f"{log_prefix} ToyyibPay bill created (BillCode: {result.billcode}).")
        else:
            log.warning(f"{log_prefix} ToyyibPay rejected bill creation: {data}")
        return result


# --- EasyParcel Client (REST, JSON) ---
class EasyParcelClient:
    """
    Client for the EasyParcel shipping API.
    Handles rate lookups and shipment (order) submission.
    """
    def __init__(self, settings: Settings, http_client: Optional[httpx.Client] = None):
        """
        Initializes the HTTP client with the configured timeout.

        Args:
            settings (Settings): Service configuration.
            http_client (httpx.Client, optional): Pre-built client. Defaults
                to a client for the configured EasyParcel base URL.
        """
        self.settings = settings
        self.client = http_client or httpx.Client(
            base_url=settings.easyparcel_base_url,
            timeout=httpx.Timeout(settings.request_timeout_seconds),
        )

    def close(self):
        """Closes the HTTP client session."""
        self.client.close()

    def _call(self, action: str, payload: Dict[str, Any], log_prefix: str) -> ShipmentResult:
        try:
            response = self.client.post("/", params={"ac": action}, json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            log.error(f"{log_prefix} EasyParcel {action} failed: {e}")
            return ShipmentResult(success=False, error=str(e) or type(e).__name__, transport_error=True)
        except ValueError as e:
            log.error(f"{log_prefix} EasyParcel {action} returned a non-JSON response: {e}")
            return ShipmentResult(success=False, error=f"Invalid JSON from EasyParcel: {e}", transport_error=True)

        log.info(f"{log_prefix} EasyParcel {action} response: {data}")
        return ShipmentResult(success=True, data=data)

    def check_rate(self, order: Order) -> ShipmentResult:
        """
        Requests shipping rates for the order.

        Args:
            order (Order): The validated checkout order.

        Returns:
            ShipmentResult: The provider's raw response on success, otherwise
            the error message.
        """
        log_prefix = order_prefix(order.id)
        payload = build_rate_check_request(order, self.settings)
        log.info(f"{log_prefix} Checking EasyParcel rate (weight={payload['bulk'][0]['weight']}).")
        return self._call(EASYPARCEL_RATE_ACTION, payload, log_prefix)

    def create_shipment(self, order: Order) -> ShipmentResult:
        """
        Submits a shipment order for the order to EasyParcel.

        Args:
            order (Order): The validated checkout order.

        Returns:
            ShipmentResult: The provider's raw response on success, otherwise
            the error message.
        """
        log_prefix = order_prefix(order.id)
        payload = build_shipment_request(order, self.settings)
        log.info(f"{log_prefix} Submitting EasyParcel shipment (weight={payload['bulk'][0]['weight']}).")
        return self._call(EASYPARCEL_SUBMIT_ACTION, payload, log_prefix)
